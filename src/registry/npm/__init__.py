"""npm registry version resolution."""

from .models import PackageVersion, decode_metadata
from .resolver import resolve, resolve_sync

__all__ = ["PackageVersion", "decode_metadata", "resolve", "resolve_sync"]
