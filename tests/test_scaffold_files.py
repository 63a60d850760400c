"""Tests for templates, file emission and next-step guidance."""

import json

import pytest

from scaffold import guidance, templates, writer
from scaffold.errors import PartialWriteError, ScaffoldError
from scaffold.options import ProjectOptions


def _options(tmp_path, **kwargs):
    base = dict(directory=str(tmp_path / "demo"), name="demo", description="demo", author="Jane")
    base.update(kwargs)
    return ProjectOptions(**base)


class TestEnsureEmptyDirectory:

    def test_creates_missing_directory(self, tmp_path):
        target = tmp_path / "new"
        writer.ensure_empty_directory(str(target))
        assert target.is_dir()

    def test_dry_run_does_not_create(self, tmp_path):
        target = tmp_path / "new"
        writer.ensure_empty_directory(str(target), create=False)
        assert not target.exists()

    def test_dotfiles_are_ignored(self, tmp_path):
        (tmp_path / ".git").mkdir()
        (tmp_path / ".gitignore").write_text("coverage\n")
        writer.ensure_empty_directory(str(tmp_path))

    def test_visible_entry_rejected(self, tmp_path):
        (tmp_path / "index.js").write_text("")
        with pytest.raises(ScaffoldError, match="not empty"):
            writer.ensure_empty_directory(str(tmp_path))

    def test_file_target_rejected(self, tmp_path):
        target = tmp_path / "file"
        target.write_text("x")
        with pytest.raises(ScaffoldError, match="not a directory"):
            writer.ensure_empty_directory(str(target))


class TestRenderFiles:

    def test_plain_javascript(self, tmp_path):
        files = templates.render_files(_options(tmp_path), "{}\n")
        assert set(files) == {"package.json", "index.js", "README.md", "LICENSE"}

    def test_typescript_with_prettier(self, tmp_path):
        files = templates.render_files(_options(tmp_path, typescript=True, prettier=True), "{}\n")
        assert "src/index.ts" in files
        assert "index.js" not in files
        assert json.loads(files["tsconfig.json"])["include"] == ["src"]
        settings = json.loads(files[".vscode/settings.json"])
        assert settings["editor.defaultFormatter"] == "esbenp.prettier-vscode"

    def test_eslint(self, tmp_path):
        files = templates.render_files(_options(tmp_path, eslint=True), "{}\n")
        assert "@antfu/eslint-config" in files["eslint.config.js"]
        settings = json.loads(files[".vscode/settings.json"])
        assert settings["eslint.enable"] is True
        assert "typescript" in settings["eslint.validate"]

    def test_non_mit_license_has_no_file(self, tmp_path):
        files = templates.render_files(_options(tmp_path, license="ISC"), "{}\n")
        assert "LICENSE" not in files
        assert "ISC" in files["README.md"]

    def test_license_text(self, tmp_path):
        text = templates.license_text(_options(tmp_path), year=2024)
        assert text.startswith("MIT License\n\nCopyright (c) 2024 Jane\n")

    def test_readme_uses_package_manager(self, tmp_path):
        assert "pnpm add demo" in templates.readme(_options(tmp_path), "pnpm")
        assert "npm install demo" in templates.readme(_options(tmp_path), "npm")


class TestWriteFiles:

    def test_writes_nested_paths_and_gitignore(self, tmp_path):
        files = {"package.json": "{}\n", "src/index.ts": "export {}\n"}
        written = writer.write_files(str(tmp_path), files)
        assert written == ["package.json", "src/index.ts", ".gitignore"]
        assert (tmp_path / "src" / "index.ts").read_text() == "export {}\n"
        assert (tmp_path / ".gitignore").read_text() == "node_modules\ndist\n"

    def test_existing_gitignore_is_appended(self, tmp_path):
        (tmp_path / ".gitignore").write_text("coverage\nnode_modules")
        writer.write_files(str(tmp_path), {})
        assert (tmp_path / ".gitignore").read_text() == "coverage\nnode_modules\ndist\n"

    def test_failure_reports_files_already_written(self, tmp_path):
        # "src" is written as a file, so creating src/ for the next entry fails
        files = {"package.json": "{}\n", "src": "x", "src/index.ts": "export {}\n"}
        with pytest.raises(PartialWriteError) as exc:
            writer.write_files(str(tmp_path), files)
        assert exc.value.written == ["package.json", "src"]
        assert isinstance(exc.value.__cause__, OSError)
        assert not (tmp_path / ".gitignore").exists()

    def test_planned_paths(self):
        assert writer.planned_paths({"package.json": ""}) == ["package.json", ".gitignore"]


class TestGuidance:

    def test_steps_for_subdirectory(self, tmp_path):
        target = tmp_path / "demo"
        pkg = {"scripts": {"format": "x", "build": "y"}}
        steps = guidance.next_steps(str(target), pkg, "pnpm", cwd=str(tmp_path))
        assert steps == ["cd demo", "pnpm install", "pnpm run build", "pnpm run format"]

    def test_steps_in_place(self, tmp_path):
        steps = guidance.next_steps(str(tmp_path), {}, None, cwd=str(tmp_path))
        assert steps == ["npm install"]

    def test_unresolved_listed(self):
        text = guidance.format_guidance("demo", ["npm install"], ["tsup"])
        assert "Created demo" in text
        assert "    - tsup" in text
        assert "'latest'" in text

    def test_no_warning_when_all_resolved(self):
        assert "Could not resolve" not in guidance.format_guidance("demo", ["npm install"], [])


def test_gitignore_content_idempotent():
    once = writer.gitignore_content("")
    assert writer.gitignore_content(once) == once
