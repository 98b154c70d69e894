"""Shared helpers (output path layout)."""
