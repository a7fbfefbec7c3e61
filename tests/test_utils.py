import subprocess

import pytest

from kboot.errors import BuildFailure
from kboot.utils import (
    DirectoryCreationError,
    ensure_dir_exist,
    human_size,
    run_tool,
    signal_exit_status,
)


@pytest.mark.parametrize(
    "num_bytes, expected",
    [
        (0, "0"),
        (512, "512"),
        (1024, "1.0K"),
        (1025, "1.1K"),
        (4096, "4.0K"),
        (10 * 1024, "10K"),
        (10 * 1024 - 1, "10K"),
        (1536 * 1024, "1.5M"),
        (1024 * 1024 * 1024 - 1, "1.0G"),
        (2 * 1024 ** 3, "2.0G"),
    ],
)
def test_human_size(num_bytes: int, expected: str) -> None:
    assert human_size(num_bytes) == expected


def test_signal_exit_status() -> None:
    assert signal_exit_status(0) == 0
    assert signal_exit_status(3) == 3
    assert signal_exit_status(-2) == 130
    assert signal_exit_status(-9) == 137


def test_run_tool_raises_with_status(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        subprocess, "run", lambda cmds, **kw: subprocess.CompletedProcess(cmds, -15)
    )

    with pytest.raises(BuildFailure) as excinfo:
        run_tool(["cargo", "build"], BuildFailure, echo=False)
    assert excinfo.value.returncode == 143


def test_run_tool_echoes_command(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    monkeypatch.setattr(
        subprocess, "run", lambda cmds, **kw: subprocess.CompletedProcess(cmds, 0)
    )

    run_tool(["cargo", "clean"], BuildFailure)
    assert capsys.readouterr().out == "> cargo clean\n"


def test_ensure_dir_exist_twice(tmp_path) -> None:
    target = tmp_path / "a" / "b"
    ensure_dir_exist(str(target))
    ensure_dir_exist(str(target))
    assert target.is_dir()


def test_ensure_dir_exist_over_file(tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")

    with pytest.raises(DirectoryCreationError):
        ensure_dir_exist(str(blocker / "sub"))
