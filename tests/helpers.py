"""Paths and declarations of the shared test archive.

- ``e0001`` top: models for races 0101 and 0201, an IMC file with one
  subset, and a texture shared with ``e0002``.
- ``e0002`` top: a single race model, no IMC file.
- Human body ``c0101/b0001``: a model with one ordinary and one skin
  material.
"""

from __future__ import annotations

from xivgraph.core.roots.tables import Race

E1_ROOT = "chara/equipment/e0001/e0001_top.root"
E1_MODEL_0101 = "chara/equipment/e0001/model/c0101e0001_top.mdl"
E1_MODEL_0201 = "chara/equipment/e0001/model/c0201e0001_top.mdl"
E1_MTRL_0101_A = "chara/equipment/e0001/material/v0001/mt_c0101e0001_top_a.mtrl"
E1_MTRL_0101_B = "chara/equipment/e0001/material/v0001/mt_c0101e0001_top_b.mtrl"
E1_MTRL_0201_A = "chara/equipment/e0001/material/v0001/mt_c0201e0001_top_a.mtrl"
E1_TEX_N = "chara/equipment/e0001/texture/v01_c0101e0001_top_n.tex"
E1_TEX_0201_N = "chara/equipment/e0001/texture/v01_c0201e0001_top_n.tex"
E1_IMC = "chara/equipment/e0001/e0001.imc"

E2_ROOT = "chara/equipment/e0002/e0002_top.root"
E2_MODEL_0101 = "chara/equipment/e0002/model/c0101e0002_top.mdl"
E2_MTRL_0101_A = "chara/equipment/e0002/material/v0001/mt_c0101e0002_top_a.mtrl"

SHARED_TEX = "chara/common/texture/shared_n.tex"

BODY_ROOT = "chara/human/c0101/obj/body/b0001/c0101b0001_top.root"
BODY_MODEL = "chara/human/c0101/obj/body/b0001/model/c0101b0001_top.mdl"
BODY_MTRL = "chara/human/c0101/obj/body/b0001/material/v0001/mt_c0101b0001_b.mtrl"
BODY_SKIN_MTRL = "chara/human/c0101/obj/body/b0001/material/v0001/mt_c0101b0001_a.mtrl"

# Header: one subset, set format. Followed by two 30-byte records.
E1_IMC_DATA = bytes.fromhex("01001f00") + bytes(60)

CHILDREN: dict[str, list[str]] = {
    E1_MODEL_0101: [E1_MTRL_0101_A, E1_MTRL_0101_B],
    E1_MODEL_0201: [E1_MTRL_0201_A],
    E1_MTRL_0101_A: [E1_TEX_N, SHARED_TEX],
    E1_MTRL_0201_A: [E1_TEX_0201_N],
    E2_MODEL_0101: [E2_MTRL_0101_A],
    E2_MTRL_0101_A: [SHARED_TEX],
    BODY_MODEL: [BODY_MTRL],
}

SKIN_CHILDREN: dict[str, list[str]] = {
    BODY_MODEL: [BODY_SKIN_MTRL],
    E1_MODEL_0101: [BODY_SKIN_MTRL],
}

RACES: dict[tuple[int, str], list[Race]] = {
    (1, "top"): [Race.HYUR_MIDLANDER_MALE, Race.HYUR_MIDLANDER_FEMALE],
    (2, "top"): [Race.HYUR_MIDLANDER_MALE],
}
