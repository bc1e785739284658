"""Utility helpers for tangram."""
