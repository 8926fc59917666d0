"""Shared enums, aliases and result containers."""
