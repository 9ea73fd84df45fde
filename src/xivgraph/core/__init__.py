"""Core dependency graph machinery: classification, root identities, traversal."""
