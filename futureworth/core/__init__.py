"""Deterministic period-by-period simulation engines."""
