"""Shared helpers for the volcano visualization."""
