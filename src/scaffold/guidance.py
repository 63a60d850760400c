"""Next-step messages printed once the package is on disk."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from constants import Constants


def next_steps(
    directory: str,
    manifest: Dict[str, Any],
    package_manager: Optional[str] = None,
    cwd: Optional[str] = None,
) -> List[str]:
    """Shell commands the user should run next, in order."""
    pm = package_manager or "npm"
    cwd = cwd or os.getcwd()
    steps: List[str] = []
    if os.path.abspath(directory) != os.path.abspath(cwd):
        steps.append(f"cd {os.path.relpath(directory, cwd)}")
    steps.append(f"{pm} install")
    scripts = manifest.get("scripts", {})
    for script in ("build", "lint", "format"):
        if script in scripts:
            steps.append(f"{pm} run {script}")
    return steps


def format_guidance(
    name: str,
    steps: List[str],
    unresolved: Optional[List[str]] = None,
) -> str:
    lines = ["", f"  Created {name}", "", "  Next steps:"]
    lines.extend(f"    {step}" for step in steps)
    if unresolved:
        lines.extend([
            "",
            "  Could not resolve the latest version of:",
            *(f"    - {dep}" for dep in unresolved),
            f"  Their entries were left as '{Constants.UNRESOLVED_VERSION}'; pin them in package.json.",
        ])
    lines.append("")
    return "\n".join(lines)
