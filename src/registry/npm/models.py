"""Data models and response decoding for npm version metadata."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import semantic_version


class ResponseShape(Enum):
    """Shape of a metadata response body."""
    SINGLE = "single"
    LIST = "list"


@dataclass(frozen=True)
class PackageVersion:
    """A package name paired with its latest published version."""
    name: str
    version: str

    @property
    def version_range(self) -> str:
        """Caret range accepting compatible updates of ``version``."""
        return f"^{self.version}"


@dataclass(frozen=True)
class MetadataResponse:
    """Decoded metadata body, tagged with the shape it arrived in."""
    shape: ResponseShape
    entries: List[PackageVersion]

    def to_ranges(self) -> Dict[str, str]:
        """Map each entry's name to its caret range."""
        return {entry.name: entry.version_range for entry in self.entries}


class MalformedResponse(ValueError):
    """Raised when a metadata body is neither a record nor a list of records."""


def parse_entry(data: Any) -> Optional[PackageVersion]:
    """Build a PackageVersion from a ``{name, version}`` record.

    Returns None when the record lacks a name, carries an error, or its
    version is not a valid semantic version.
    """
    if not isinstance(data, dict) or data.get("error"):
        return None
    name = data.get("name")
    version = data.get("version")
    if not isinstance(name, str) or not name or not isinstance(version, str):
        return None
    try:
        semantic_version.Version(version)
    except ValueError:
        return None
    return PackageVersion(name=name, version=version)


def decode_metadata(data: Any) -> MetadataResponse:
    """Decode a body that is either one record or an ordered list of records.

    Unusable entries inside a list are skipped; the list as a whole still
    decodes. A single record that is unusable, or any other JSON type, is
    malformed.

    Raises:
        MalformedResponse: If ``data`` has neither shape.
    """
    if isinstance(data, list):
        entries = [entry for entry in (parse_entry(item) for item in data) if entry is not None]
        return MetadataResponse(shape=ResponseShape.LIST, entries=entries)
    if isinstance(data, dict):
        entry = parse_entry(data)
        if entry is None:
            raise MalformedResponse("metadata record has no usable name/version")
        return MetadataResponse(shape=ResponseShape.SINGLE, entries=[entry])
    raise MalformedResponse(f"unexpected metadata body type: {type(data).__name__}")
