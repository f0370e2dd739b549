"""Directory scanning pipeline."""
