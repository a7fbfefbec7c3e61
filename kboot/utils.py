import math
import os
import subprocess
from typing import Type

from kboot.errors import KbootError

TOOL_NOT_FOUND = 127


def signal_exit_status(returncode: int) -> int:
    """
    Map a `subprocess` return code to the status a shell would report.

    A child killed by signal N comes back as -N; shells report 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def run_tool(
    cmds: list[str],
    error_cls: Type[KbootError],
    capture: bool = False,
    echo: bool = True,
) -> subprocess.CompletedProcess:
    """
    Run an external tool in the foreground and wait for it.

    Args:
        cmds (list[str]): argv of the child process.
        error_cls (Type[KbootError]): raised when the tool is missing or
            exits non-zero.
        capture (bool): capture stdout as text instead of inheriting it.
        echo (bool): print the command line before running it.

    Returns:
        subprocess.CompletedProcess: the finished child.
    """
    if echo:
        print(f"> {' '.join(cmds)}")

    try:
        result = subprocess.run(
            cmds,
            stdout=subprocess.PIPE if capture else None,
            text=capture,
        )
    except FileNotFoundError:
        raise error_cls(f"`{cmds[0]}` not found in PATH", TOOL_NOT_FOUND)
    except OSError as e:
        raise error_cls(f"failed to start `{cmds[0]}`: {e}")

    if result.returncode != 0:
        status = signal_exit_status(result.returncode)
        raise error_cls(f"`{' '.join(cmds)}` exited with status {status}", status)

    return result


class DirectoryCreationError(Exception):
    """
    A staging directory could not be created.
    """

    pass


def ensure_dir_exist(path: str) -> None:
    try:
        # exist_ok keeps re-runs over an existing tree from failing
        os.makedirs(path, exist_ok=True)
    except PermissionError:
        raise DirectoryCreationError(
            f"Permission denied to create the directory: {path}"
        )
    except OSError as e:
        raise DirectoryCreationError(f"Failed to create directory {path}: {e}")


def human_size(num_bytes: int) -> str:
    """
    Format a byte count the way `du -h` does, e.g. "512", "4.0K", "13M".

    Values are rounded up; one decimal is kept below ten units.
    """
    if num_bytes < 1024:
        return str(num_bytes)

    value = float(num_bytes)
    for unit in ("K", "M", "G", "T", "P"):
        value /= 1024
        if value < 10:
            tenths = math.ceil(value * 10)
            if tenths < 100:
                return f"{tenths / 10:.1f}{unit}"
            value = 10.0
        if value < 1024 or unit == "P":
            whole = math.ceil(value)
            if whole < 1024 or unit == "P":
                return f"{whole}{unit}"
    return f"{math.ceil(value)}P"
