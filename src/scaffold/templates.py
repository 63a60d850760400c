"""Contents of the boilerplate files written next to package.json."""

from __future__ import annotations

import datetime
import json
from typing import Any, Dict, Optional

from .options import ProjectOptions

ESLINT_VALIDATE = [
    "javascript",
    "typescript",
    "javascriptreact",
    "typescriptreact",
    "vue",
    "html",
    "markdown",
    "json",
    "jsonc",
    "json5",
]

TSCONFIG: Dict[str, Any] = {
    "include": ["src"],
    "compilerOptions": {
        "noEmit": True,
        "target": "esnext",
        "module": "esnext",
        "lib": ["esnext"],
        "moduleResolution": "bundler",
        "esModuleInterop": True,
        "strict": True,
        "resolveJsonModule": True,
        "skipLibCheck": True,
        "stripInternal": True,
    },
}

INDEX_SOURCE = "export function hello() {}\n"

ESLINT_CONFIG = """\
import antfu from '@antfu/eslint-config'

export default antfu()
"""

MIT_LICENSE = """\
MIT License

Copyright (c) {year} {holder}

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2) + "\n"


def vscode_settings(options: ProjectOptions) -> Dict[str, Any]:
    """Editor settings enabling the selected formatter or linter."""
    if options.prettier:
        return {
            "editor.formatOnSave": True,
            "editor.defaultFormatter": "esbenp.prettier-vscode",
            "prettier.enable": True,
        }
    if options.eslint:
        return {
            "editor.codeActionsOnSave": {
                "source.fixAll.eslint": "explicit",
            },
            "eslint.enable": True,
            "eslint.validate": list(ESLINT_VALIDATE),
        }
    return {}


def readme(options: ProjectOptions, package_manager: str) -> str:
    lines = [
        f"# {options.name}",
        "",
        options.description,
        "",
        "## Install",
        "",
        "```bash",
        f"{package_manager} {'install' if package_manager == 'npm' else 'add'} {options.name}",
        "```",
        "",
        "## License",
        "",
        options.license,
        "",
    ]
    return "\n".join(lines)


def license_text(options: ProjectOptions, year: Optional[int] = None) -> str:
    """MIT license body; other license identifiers get no file."""
    year = year or datetime.date.today().year
    holder = options.author or options.name
    return MIT_LICENSE.format(year=year, holder=holder)


def render_files(options: ProjectOptions, manifest_text: str) -> Dict[str, str]:
    """Map of relative path -> file content for everything except .gitignore."""
    pm = options.package_manager or "npm"
    files: Dict[str, str] = {"package.json": manifest_text}

    settings = vscode_settings(options)
    if settings:
        files[".vscode/settings.json"] = to_json(settings)
    if options.eslint:
        files["eslint.config.js"] = ESLINT_CONFIG

    if options.typescript:
        files["tsconfig.json"] = to_json(TSCONFIG)
        files["src/index.ts"] = INDEX_SOURCE
    else:
        files["index.js"] = INDEX_SOURCE

    files["README.md"] = readme(options, pm)
    if options.license.upper() == "MIT":
        files["LICENSE"] = license_text(options)
    return files
