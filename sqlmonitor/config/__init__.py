"""Bundled configuration files for SQL Monitor."""
