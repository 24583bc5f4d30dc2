"""Helpers used by the core selector."""
