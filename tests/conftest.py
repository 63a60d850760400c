"""Shared fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by configure_logging so they don't outlive captured streams."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_create_package_handler", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(logging.WARNING)
