from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

import jsonresume_mcp.cli as cli
from jsonresume_mcp import main


def test_missing_configuration_exits_with_1(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GITHUB_TOKEN", "GITHUB_USERNAME", "OPENAI_API_KEY", "LLM_PROVIDER"):
        monkeypatch.delenv(name, raising=False)

    assert cli.main(["check"]) == 1


def test_command_runs_tool_and_prints_json(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    make_context: Any,
    tmp_path: Path,
) -> None:
    """Subcommands dispatch to the matching tool; results go to stdout."""
    ctx, _ = make_context()
    monkeypatch.setattr(cli.Settings, "from_env", classmethod(lambda cls: ctx.settings))
    monkeypatch.setattr(cli.ToolContext, "from_settings", classmethod(lambda cls, s: ctx))
    (tmp_path / "lib.rs").write_text("fn main() {}\n")

    exit_code = cli.main(["analyze", str(tmp_path)])

    output = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert output["isError"] is False
    assert output["languages"] == {"rs": 1}


def test_tool_error_gives_exit_code_1(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], make_context: Any
) -> None:
    ctx, _ = make_context()
    monkeypatch.setattr(cli.Settings, "from_env", classmethod(lambda cls: ctx.settings))
    monkeypatch.setattr(cli.ToolContext, "from_settings", classmethod(lambda cls, s: ctx))

    exit_code = cli.main(["enhance-job", "/does/not/exist.json"])

    assert exit_code == 1
    assert json.loads(capsys.readouterr().out)["error"]["type"] == "input_error"


def test_keyboard_interrupt_returns_130(monkeypatch: pytest.MonkeyPatch) -> None:
    def _interrupt(argv: Any = None) -> int:
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "run_cli", _interrupt)

    assert main() == 130