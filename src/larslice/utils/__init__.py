"""Utility modules shared across the project."""
