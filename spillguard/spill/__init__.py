"""Spill location verification (ownership guard, config, helpers)."""
