"""Shared utilities: logging, formatting and result persistence."""
