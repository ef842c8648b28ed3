"""Bundled knowledge dataset (earthquake_knowledge.json)."""
