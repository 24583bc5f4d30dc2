"""Shared utilities: configuration, logging and networking."""
