from __future__ import annotations

import sys
from subprocess import run as subprocess_run  # noqa: S404


def test_cli_help() -> None:
    result = subprocess_run(  # noqa: S603
        [sys.executable, "-m", "resumefill.cli", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert "usage" in result.stdout.lower()
    assert "resolve" in result.stdout


def test_cli_resolve_help_lists_inputs() -> None:
    result = subprocess_run(  # noqa: S603
        [sys.executable, "-m", "resumefill.cli", "resolve", "--help"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert "--resume" in result.stdout
    assert "--fields" in result.stdout
