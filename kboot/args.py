import argparse

from kboot.commands import ALL_COMMANDS

cached_parser = None
cached_args = None


def parse_args(argv: list[str] | None = None) -> None:
    global cached_parser, cached_args
    parser = argparse.ArgumentParser(
        prog="kboot", description="build the kernel and boot it in QEMU"
    )

    parser.add_argument(
        "command",
        nargs="?",
        default="help",
        choices=ALL_COMMANDS,
        help="command to run (default: help)",
    )

    parser.add_argument(
        "-C", "--directory", metavar="DIR", help="change to DIR before doing anything"
    )

    parser.add_argument(
        "--config", metavar="FILE", help="project config (default: ./kboot.toml)"
    )

    parser.add_argument(
        "-v", "--verbose", action="store_true", help="print the resolved profile and paths"
    )

    cached_parser = parser
    cached_args = parser.parse_args(argv)


def reject_command(message: str) -> None:
    cached_parser.error(message)  # type: ignore


def command() -> str:
    return cached_args.command  # type: ignore


def directory() -> str | None:
    return cached_args.directory  # type: ignore


def config_path() -> str | None:
    return cached_args.config  # type: ignore


def verbose_set() -> bool:
    return cached_args.verbose  # type: ignore
