"""Shared helpers (HTTP, logging)."""
