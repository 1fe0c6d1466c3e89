"""Tests for the CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from raceguard.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """A working directory holding one risky Java file and one clean script."""
    monkeypatch.chdir(tmp_path)
    src = tmp_path / "src"
    src.mkdir()
    (src / "Cache.java").write_text("public static Map cache = new HashMap();")
    (src / "util.js").write_text("export const add = (a, b) => a + b;")
    return tmp_path


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "raceguard" in result.output


class TestInit:
    def test_creates_config(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_path / ".raceguard.toml").exists()

    def test_refuses_overwrite(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".raceguard.toml").write_text("existing")
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1
        assert (tmp_path / ".raceguard.toml").read_text() == "existing"

    def test_force_overwrites(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".raceguard.toml").write_text("existing")
        result = runner.invoke(app, ["init", "--force"])
        assert result.exit_code == 0
        assert "[scan]" in (tmp_path / ".raceguard.toml").read_text()


class TestScan:
    def test_blocked_exit_code(self, project: Path):
        result = runner.invoke(app, ["scan", "src"])
        assert result.exit_code == 1

    def test_clean_exit_code(self, project: Path):
        result = runner.invoke(app, ["scan", "src/util.js"])
        assert result.exit_code == 0

    def test_fail_on_threshold(self, project: Path):
        (project / "src" / "timer.ts").write_text("setTimeout(tick, 10);")
        assert runner.invoke(app, ["scan", "src/timer.ts"]).exit_code == 0
        assert runner.invoke(app, ["scan", "src/timer.ts", "--fail-on", "low"]).exit_code == 1

    def test_json_output(self, project: Path):
        result = runner.invoke(app, ["scan", "src", "--format", "json"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["scannedFiles"] == 2
        assert [i["filename"] for i in data["issues"]] == ["Cache.java"]

    def test_output_file(self, project: Path):
        result = runner.invoke(app, ["scan", "src", "--output", "report.json"])
        assert result.exit_code == 1
        data = json.loads((project / "report.json").read_text())
        assert data["severityTotals"]["high"] == 1

    def test_document_format(self, project: Path):
        result = runner.invoke(app, ["scan", "src", "--format", "document"])
        assert "RaceGuard Report" in result.stdout
        assert "Page 1/1" in result.stdout

    def test_disabled_rule_from_config(self, project: Path):
        (project / ".raceguard.toml").write_text(
            '[rules]\ndisable = ["JAVA_STATIC_MUTABLE"]\n'
        )
        result = runner.invoke(app, ["scan", "src"])
        assert result.exit_code == 0

    def test_dry_run(self, project: Path):
        result = runner.invoke(app, ["scan", "src", "--dry-run"])
        assert result.exit_code == 0
        assert "2 files would be scanned" in result.output
        assert "Cache.java" in result.output

    def test_invalid_format(self, project: Path):
        result = runner.invoke(app, ["scan", "src", "--format", "xml"])
        assert result.exit_code == 2

    def test_invalid_fail_on(self, project: Path):
        result = runner.invoke(app, ["scan", "src", "--fail-on", "critical"])
        assert result.exit_code == 2

    def test_nothing_to_scan(self, project: Path):
        result = runner.invoke(app, ["scan"])
        assert result.exit_code == 2

    def test_missing_path(self, project: Path):
        result = runner.invoke(app, ["scan", "nope"])
        assert result.exit_code == 2

    def test_broken_config(self, project: Path):
        (project / ".raceguard.toml").write_text("not [valid")
        result = runner.invoke(app, ["scan", "src"])
        assert result.exit_code == 2

    def test_parallel_workers(self, project: Path):
        result = runner.invoke(app, ["scan", "src", "--format", "json", "--workers", "4"])
        assert json.loads(result.stdout)["scannedFiles"] == 2


class TestRules:
    def test_lists_builtin_rules(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "RaceGuard Rules" in result.output
        assert "JAVA_ASYNC" in result.output

    def test_disabled_rules_hidden(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".raceguard.toml").write_text('[rules]\ndisable = ["JAVA_ASYNC"]\n')
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "JAVA_ASYNC" not in result.output
