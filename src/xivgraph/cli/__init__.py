"""xivgraph command-line interface."""
