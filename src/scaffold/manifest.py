"""package.json construction.

The manifest starts with every dev-dependency pinned to the unresolved
placeholder; resolved ranges are merged in afterwards, so each requested
name ends up in ``devDependencies`` exactly once.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Set

from constants import Constants

from .options import ProjectOptions

logger = logging.getLogger(__name__)

# Conventional order of top-level package.json fields
FIELD_ORDER = [
    "name",
    "version",
    "private",
    "description",
    "keywords",
    "homepage",
    "bugs",
    "repository",
    "license",
    "author",
    "sideEffects",
    "type",
    "main",
    "module",
    "types",
    "exports",
    "bin",
    "files",
    "engines",
    "scripts",
    "packageManager",
    "dependencies",
    "peerDependencies",
    "devDependencies",
]


def dev_dependency_names(options: ProjectOptions) -> List[str]:
    """Dev-dependencies implied by the selected tooling."""
    names: List[str] = []
    if options.prettier:
        names.append("prettier")
    if options.eslint:
        names.extend(["eslint", "@antfu/eslint-config"])
    if options.typescript:
        names.extend(["typescript", "tsup"])
    return names


def build_script(options: ProjectOptions) -> str:
    fmt = " --format esm,cjs" if options.dual else ""
    return f"tsup src/index.ts{fmt} --clean --treeshake --target esnext --dts"


def build_manifest(options: ProjectOptions) -> Dict[str, Any]:
    """Build the manifest with placeholder versions for every dev-dependency."""
    pkg: Dict[str, Any] = {
        "name": options.name,
        "version": Constants.INITIAL_VERSION,
        "description": options.description,
        "keywords": [],
        "license": options.license,
        "author": options.author,
    }

    if options.dual:
        pkg["main"] = "dist/index.js"
        pkg["module"] = "dist/index.mjs"
        pkg["types"] = "dist/index.d.ts"
        pkg["files"] = ["dist"]
    elif options.typescript:
        pkg["type"] = "module"
        pkg["exports"] = {
            ".": {
                "types": "./dist/index.d.ts",
                "default": "./dist/index.js",
            }
        }
        pkg["files"] = ["dist"]
    else:
        pkg["type"] = "module"
        pkg["exports"] = "./index.js"

    scripts: Dict[str, str] = {}
    if options.prettier:
        scripts["format"] = "prettier -w ."
    if options.eslint:
        scripts["lint"] = "eslint ."
    if options.typescript:
        scripts["build"] = build_script(options)
    if scripts:
        pkg["scripts"] = scripts

    dev = {name: Constants.UNRESOLVED_VERSION for name in dev_dependency_names(options)}
    if dev:
        pkg["devDependencies"] = dev
    return pkg


def resolution_names(options: ProjectOptions) -> Set[str]:
    """Names to hand to the version resolver, package manager included."""
    names = set(dev_dependency_names(options))
    if options.package_manager:
        names.add(options.package_manager)
    return names


def merge_versions(
    pkg: Dict[str, Any],
    resolved: Dict[str, str],
    package_manager: Optional[str] = None,
) -> List[str]:
    """Merge resolved ranges into ``pkg`` in place.

    The package manager's entry is pulled out of ``resolved`` and pinned as
    ``packageManager: "<pm>@X.Y.Z"``; it never lands in devDependencies.

    Returns:
        list: Requested names that are still unresolved.
    """
    resolved = dict(resolved)
    unresolved: List[str] = []

    if package_manager:
        pm_range = resolved.pop(package_manager, None)
        if pm_range:
            pkg["packageManager"] = f"{package_manager}@{pm_range.lstrip('^')}"
        else:
            unresolved.append(package_manager)

    dev = pkg.get("devDependencies", {})
    for name in dev:
        if name in resolved:
            dev[name] = resolved[name]
        else:
            unresolved.append(name)
    return sorted(unresolved)


def sort_manifest(pkg: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``pkg`` with known fields in conventional order.

    Unknown fields keep their insertion order after the known ones, and
    dependency maps are sorted by name.
    """
    ordered: Dict[str, Any] = {}
    for key in FIELD_ORDER:
        if key in pkg:
            ordered[key] = pkg[key]
    for key, value in pkg.items():
        if key not in ordered:
            ordered[key] = value
    for key in ("dependencies", "peerDependencies", "devDependencies"):
        if isinstance(ordered.get(key), dict):
            ordered[key] = dict(sorted(ordered[key].items()))
    return ordered


def dumps(pkg: Dict[str, Any]) -> str:
    return json.dumps(sort_manifest(pkg), indent=2, ensure_ascii=False) + "\n"
