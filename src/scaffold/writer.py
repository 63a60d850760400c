"""Target-directory checks and file emission."""

from __future__ import annotations

import logging
import os
from typing import Dict, List

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled

from .errors import PartialWriteError, ScaffoldError

logger = logging.getLogger(__name__)


def ensure_empty_directory(directory: str, create: bool = True) -> None:
    """Make sure ``directory`` can receive a fresh package.

    Entries starting with '.' (e.g. .git) are tolerated.

    Raises:
        ScaffoldError: If the path is a file or holds visible entries.
    """
    if os.path.exists(directory) and not os.path.isdir(directory):
        raise ScaffoldError(f"Target is not a directory: {directory}")
    if not os.path.isdir(directory):
        if create:
            os.makedirs(directory)
            logger.info("Created directory %s", directory)
        return
    visible = [entry for entry in os.listdir(directory) if not entry.startswith(".")]
    if visible:
        raise ScaffoldError(f"Directory is not empty: {directory}")


def gitignore_content(existing: str = "") -> str:
    """Append the standard ignore entries that ``existing`` lacks."""
    present = {line.strip() for line in existing.splitlines()}
    missing = [entry for entry in Constants.GITIGNORE_ENTRIES if entry not in present]
    if not missing:
        return existing
    prefix = existing if not existing or existing.endswith("\n") else existing + "\n"
    return prefix + "".join(f"{entry}\n" for entry in missing)


def write_files(directory: str, files: Dict[str, str]) -> List[str]:
    """Write ``files`` (relative path -> content) under ``directory``.

    .gitignore is merged with any existing file rather than replaced.

    Returns:
        list: Relative paths written, in write order.

    Raises:
        PartialWriteError: A write failed; ``written`` holds what is already on disk.
    """
    written: List[str] = []
    try:
        _write_all(directory, files, written)
    except OSError as exc:
        raise PartialWriteError(str(exc), written) from exc
    return written


def _write_all(directory: str, files: Dict[str, str], written: List[str]) -> None:
    for rel_path, content in files.items():
        path = os.path.join(directory, rel_path)
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as fh:
            fh.write(content)
        written.append(rel_path)
        if is_debug_enabled(logger):
            logger.debug(
                "Wrote file",
                extra=extra_context(event="file_write", component="writer", target=rel_path, bytes=len(content)),
            )

    gitignore = os.path.join(directory, Constants.GITIGNORE_FILE)
    existing = ""
    if os.path.isfile(gitignore):
        with open(gitignore, encoding="utf-8") as fh:
            existing = fh.read()
    with open(gitignore, "w", encoding="utf-8", newline="\n") as fh:
        fh.write(gitignore_content(existing))
    written.append(Constants.GITIGNORE_FILE)


def planned_paths(files: Dict[str, str]) -> List[str]:
    """Paths a real run would write, for --dry-run output."""
    return list(files) + [Constants.GITIGNORE_FILE]
