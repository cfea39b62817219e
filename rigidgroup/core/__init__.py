"""Core numerics of rigidgroup."""
