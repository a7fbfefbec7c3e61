import json
from typing import Tuple

from kboot.errors import ToolchainQueryFailure
from kboot.utils import run_tool

CARGO_METADATA_CMD = ["cargo", "metadata", "--format-version", "1", "--no-deps"]


def query_cargo_metadata() -> Tuple[str, str]:
    """
    Ask cargo for the active package name and its build-output root.

    Returns:
        tuple: (package name, absolute target directory).

    Raises:
        ToolchainQueryFailure: cargo is missing, failed, or printed
            something that is not the expected metadata document.
    """
    result = run_tool(CARGO_METADATA_CMD, ToolchainQueryFailure, capture=True, echo=False)
    return parse_cargo_metadata(result.stdout)


def parse_cargo_metadata(raw: str) -> Tuple[str, str]:
    try:
        data = json.loads(raw)
        package_name = data["packages"][0]["name"]
        target_directory = data["target_directory"]
    except (json.JSONDecodeError, KeyError, IndexError, TypeError) as e:
        raise ToolchainQueryFailure(f"malformed `cargo metadata` output: {e!r}")

    if not isinstance(package_name, str) or not isinstance(target_directory, str):
        raise ToolchainQueryFailure(
            "malformed `cargo metadata` output: package name and "
            "target_directory must be strings"
        )

    return package_name, target_directory
