"""End-to-end tests for the create-package CLI."""

import json
import logging

import pytest

import create_package
from args import parse_args
from constants import Constants, ExitCodes
from scaffold import options as options_mod


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    monkeypatch.delenv(Constants.ENV_CONFIG, raising=False)
    monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "WARNING")
    monkeypatch.setattr(Constants, "DEFAULT_CONFIG_PATHS", [])
    monkeypatch.setattr(options_mod, "git_author", lambda: "Jane <jane@example.com>")


@pytest.fixture
def resolver_calls(monkeypatch):
    """Replace network resolution with a fixed table, recording requests."""
    calls = []
    table = {
        "typescript": "^5.4.5",
        "tsup": "^8.0.2",
        "eslint": "^9.1.0",
        "prettier": "^3.2.5",
        "pnpm": "^9.1.0",
    }

    def _fake(names):
        calls.append(set(names))
        return {name: table[name] for name in names if name in table}

    monkeypatch.setattr(create_package, "resolve_sync", _fake)
    return calls


def _main(*argv):
    with pytest.raises(SystemExit) as exc:
        create_package.main(list(argv))
    return exc.value.code


class TestScaffold:

    def test_typescript_with_package_manager(self, tmp_path, resolver_calls, capsys):
        target = tmp_path / "my-lib"

        code = _main(str(target), "--typescript", "--package-manager", "pnpm", "--scope", "acme")

        assert code == ExitCodes.SUCCESS.value
        assert resolver_calls == [{"typescript", "tsup", "pnpm"}]
        pkg = json.loads((target / "package.json").read_text())
        assert pkg["name"] == "@acme/my-lib"
        assert pkg["author"] == "Jane <jane@example.com>"
        assert pkg["devDependencies"] == {"tsup": "^8.0.2", "typescript": "^5.4.5"}
        assert pkg["packageManager"] == "pnpm@9.1.0"
        assert (target / "src" / "index.ts").is_file()
        assert (target / "tsconfig.json").is_file()
        assert (target / ".gitignore").read_text() == "node_modules\ndist\n"
        out = capsys.readouterr().out
        assert "pnpm install" in out
        assert "pnpm run build" in out

    def test_unresolved_names_keep_placeholder(self, tmp_path, resolver_calls, capsys):
        target = tmp_path / "lint-me"

        code = _main(str(target), "--eslint")

        assert code == ExitCodes.SUCCESS.value
        pkg = json.loads((target / "package.json").read_text())
        assert pkg["devDependencies"] == {
            "@antfu/eslint-config": Constants.UNRESOLVED_VERSION,
            "eslint": "^9.1.0",
        }
        assert "- @antfu/eslint-config" in capsys.readouterr().out

    def test_error_on_warnings(self, tmp_path, resolver_calls):
        code = _main(str(tmp_path / "x"), "--eslint", "--error-on-warnings")
        assert code == ExitCodes.EXIT_WARNINGS.value

    def test_offline_skips_resolution(self, tmp_path, resolver_calls, capsys):
        target = tmp_path / "off"

        code = _main(str(target), "--prettier", "--offline", "--error-on-warnings")

        assert code == ExitCodes.SUCCESS.value
        assert resolver_calls == []
        pkg = json.loads((target / "package.json").read_text())
        assert pkg["devDependencies"] == {"prettier": Constants.UNRESOLVED_VERSION}
        assert "Could not resolve" not in capsys.readouterr().out

    def test_no_tooling_makes_no_lookup(self, tmp_path, resolver_calls):
        assert _main(str(tmp_path / "bare")) == ExitCodes.SUCCESS.value
        assert resolver_calls == []
        assert (tmp_path / "bare" / "index.js").is_file()

    def test_dry_run_writes_nothing(self, tmp_path, resolver_calls, capsys):
        target = tmp_path / "dry"

        code = _main(str(target), "--prettier", "--dry-run")

        assert code == ExitCodes.SUCCESS.value
        assert not target.exists()
        out = capsys.readouterr().out
        assert "Would write:" in out
        assert '"prettier": "^3.2.5"' in out

    def test_quiet_suppresses_guidance(self, tmp_path, resolver_calls, capsys):
        _main(str(tmp_path / "q"), "-q")
        assert "Next steps" not in capsys.readouterr().out

    def test_config_file_supplies_defaults(self, tmp_path, resolver_calls):
        cfg = tmp_path / "config.yml"
        cfg.write_text("scope: team\nprettier: true\nlicense: ISC\n")
        target = tmp_path / "cfg-lib"

        code = _main(str(target), "--config", str(cfg))

        assert code == ExitCodes.SUCCESS.value
        pkg = json.loads((target / "package.json").read_text())
        assert pkg["name"] == "@team/cfg-lib"
        assert pkg["license"] == "ISC"
        assert pkg["devDependencies"] == {"prettier": "^3.2.5"}
        assert not (target / "LICENSE").exists()


class TestFailures:

    def test_prettier_and_eslint(self, tmp_path, resolver_calls, capsys):
        code = _main(str(tmp_path / "x"), "--prettier", "--eslint")
        assert code == ExitCodes.USAGE_ERROR.value
        assert "Cannot use both prettier and eslint." in capsys.readouterr().err
        assert resolver_calls == []

    def test_dual_without_typescript(self, tmp_path, resolver_calls):
        assert _main(str(tmp_path / "x"), "--dual") == ExitCodes.USAGE_ERROR.value

    def test_non_empty_directory(self, tmp_path, resolver_calls, capsys):
        (tmp_path / "README.md").write_text("hi")

        code = _main(str(tmp_path), "--typescript")

        assert code == ExitCodes.FILE_ERROR.value
        assert "not empty" in capsys.readouterr().err
        assert resolver_calls == []

    def test_bad_config(self, tmp_path, resolver_calls):
        cfg = tmp_path / "bad.yml"
        cfg.write_text("nonsense: 1\n")
        assert _main(str(tmp_path / "x"), "-c", str(cfg)) == ExitCodes.USAGE_ERROR.value

    def test_partial_write_names_written_files(self, tmp_path, resolver_calls, monkeypatch, capsys):
        monkeypatch.setattr(
            create_package.templates, "render_files",
            lambda options, manifest_text: {"package.json": manifest_text, "src": "x", "src/index.js": ""},
        )

        code = _main(str(tmp_path / "half"))

        assert code == ExitCodes.FILE_ERROR.value
        err = capsys.readouterr().err
        assert "Failed to write files" in err
        assert "package.json, src" in err


class TestLogging:

    def test_env_level_applies_without_flag(self, tmp_path, monkeypatch):
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "DEBUG")

        create_package._setup_logging(parse_args([str(tmp_path / "x")]))

        assert logging.getLogger().level == logging.DEBUG

    def test_flag_overrides_env_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv(Constants.ENV_LOG_LEVEL, "DEBUG")

        create_package._setup_logging(parse_args([str(tmp_path / "x"), "--loglevel", "ERROR"]))

        assert logging.getLogger().level == logging.ERROR

    def test_default_level_is_warning(self, tmp_path, monkeypatch):
        monkeypatch.delenv(Constants.ENV_LOG_LEVEL, raising=False)

        create_package._setup_logging(parse_args([str(tmp_path / "x")]))

        assert logging.getLogger().level == logging.WARNING

    def test_logfile(self, tmp_path, resolver_calls):
        log = tmp_path / "run.log"
        _main(str(tmp_path / "x"), "--loglevel", "INFO", "--logfile", str(log))
        assert "Wrote" in log.read_text()
