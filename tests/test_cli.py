"""Tests for the click command group."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from spacetraveling import cli as cli_module
from spacetraveling.core.prismic_client import DocumentNotFoundError


def test_paths_command_prints_routes(monkeypatch):
    monkeypatch.setattr(
        cli_module.paths_cmd,
        "run",
        lambda config_path: {"paths": [{"params": {"slug": "como-utilizar-hooks"}}], "fallback": True},
    )

    result = CliRunner().invoke(cli_module.cli, ["--config", "cfg.yaml", "paths"])

    assert result.exit_code == 0
    assert "/post/como-utilizar-hooks" in result.output
    assert "fallback: on" in result.output


def test_build_single_slug_reports_page(monkeypatch):
    calls = []

    def fake_run(config_path, slug):
        calls.append((config_path, slug))
        return [Path("/site/post/como-utilizar-hooks.html")]

    monkeypatch.setattr(cli_module.build_cmd, "run", fake_run)

    result = CliRunner().invoke(cli_module.cli, ["--config", "cfg.yaml", "build", "--slug", "como-utilizar-hooks"])

    assert result.exit_code == 0
    assert calls == [("cfg.yaml", "como-utilizar-hooks")]
    assert "como-utilizar-hooks.html" in result.output


def test_reading_time_failure_exits_nonzero(monkeypatch):
    def fake_run(config_path, slug):
        raise DocumentNotFoundError("post", slug)

    monkeypatch.setattr(cli_module.reading_time_cmd, "run", fake_run)

    result = CliRunner().invoke(cli_module.cli, ["--config", "cfg.yaml", "reading-time", "nope"])

    assert result.exit_code == 1
    assert "No 'post' document with uid 'nope'" in result.output
