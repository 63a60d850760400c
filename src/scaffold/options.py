"""Project options: CLI flags and user config folded into one validated record."""

from __future__ import annotations

import logging
import os
import re
import subprocess
from dataclasses import dataclass
from typing import Any, Dict, Optional

from constants import Constants

from .errors import ScaffoldError

logger = logging.getLogger(__name__)

# npm's rules for published names: lowercase, URL-safe, no leading . or _
_NAME_RE = re.compile(r"^(?:@[a-z0-9\-*~][a-z0-9\-*._~]*/)?[a-z0-9\-~][a-z0-9\-._~]*$")
_MAX_NAME_LENGTH = 214

# Feature flags that may come from either the CLI or the config file
_FLAG_KEYS = ("prettier", "eslint", "typescript", "dual")


@dataclass
class ProjectOptions:
    """Everything needed to scaffold one package."""

    directory: str
    name: str
    description: str
    scope: Optional[str] = None
    author: str = ""
    license: str = Constants.DEFAULT_LICENSE
    prettier: bool = False
    eslint: bool = False
    typescript: bool = False
    dual: bool = False
    package_manager: Optional[str] = None
    offline: bool = False
    dry_run: bool = False

    def validate(self) -> None:
        """Reject option combinations that cannot be scaffolded.

        Raises:
            ScaffoldError: On conflicting flags or an invalid package name.
        """
        if self.prettier and self.eslint:
            raise ScaffoldError("Cannot use both prettier and eslint.")
        if self.dual and not self.typescript:
            raise ScaffoldError("dual option requires typescript.")
        if not is_valid_package_name(self.name):
            raise ScaffoldError(f"Invalid package name: {self.name!r}")
        if self.package_manager and self.package_manager not in Constants.SUPPORTED_PACKAGE_MANAGERS:
            raise ScaffoldError(f"Unsupported package manager: {self.package_manager}")

    @classmethod
    def from_args(cls, args: Any, config: Optional[Dict[str, Any]] = None) -> "ProjectOptions":
        """Build options from parsed CLI arguments and a user config dict.

        CLI values win over config values, which win over built-in defaults.
        Boolean flags are additive: a flag set in either place is on.
        """
        config = config or {}
        directory = getattr(args, "DIRECTORY", None) or os.getcwd()
        base = os.path.basename(os.path.abspath(directory))

        scope = _first(getattr(args, "SCOPE", None), config.get("scope"))
        scope = (scope or "").lstrip("@") or None
        unscoped = _first(getattr(args, "NAME", None), derive_name(base))
        name = f"@{scope}/{unscoped}" if scope else unscoped

        author = _first(getattr(args, "AUTHOR", None), config.get("author"))
        if author is None:
            author = git_author()

        flags = {
            key: bool(getattr(args, key.upper(), False) or config.get(key, False))
            for key in _FLAG_KEYS
        }

        options = cls(
            directory=directory,
            name=name,
            scope=scope,
            description=_first(getattr(args, "DESCRIPTION", None), base),
            author=author,
            license=_first(getattr(args, "LICENSE", None), config.get("license"), Constants.DEFAULT_LICENSE),
            package_manager=_first(getattr(args, "PACKAGE_MANAGER", None), config.get("package_manager")),
            offline=bool(getattr(args, "OFFLINE", False)),
            dry_run=bool(getattr(args, "DRY_RUN", False)),
            **flags,
        )
        logger.debug("Resolved project options: %s", options)
        return options


def _first(*values):
    for value in values:
        if value is not None and value != "":
            return value
    return None


def derive_name(basename: str) -> str:
    """Turn a directory basename into an npm-friendly unscoped name."""
    name = basename.strip().lower()
    name = re.sub(r"\s+", "-", name)
    return name.lstrip("._")


def is_valid_package_name(name: str) -> bool:
    if not name or len(name) > _MAX_NAME_LENGTH:
        return False
    return bool(_NAME_RE.match(name))


def git_author() -> str:
    """Return ``Name <email>`` from git config, or an empty string."""

    def _git_config(key: str) -> str:
        try:
            result = subprocess.run(
                ["git", "config", "--get", key],
                capture_output=True,
                text=True,
                timeout=5,
                check=False,
            )
        except (OSError, subprocess.SubprocessError):
            return ""
        return result.stdout.strip() if result.returncode == 0 else ""

    user = _git_config("user.name")
    email = _git_config("user.email")
    if user and email:
        return f"{user} <{email}>"
    return user
