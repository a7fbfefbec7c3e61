import os
import sys

from kboot.args import (
    command,
    config_path,
    directory,
    parse_args,
    reject_command,
    verbose_set,
)
from kboot.commands import command_available, run_command
from kboot.config import get_product_variant, parse_config
from kboot.errors import KbootError
from kboot.profile import select_profile

INTERRUPTED = 130


def main(argv: list[str] | None = None) -> None:
    parse_args(argv)

    try:
        if directory():
            os.chdir(directory())  # type: ignore

        parse_config(config_path())

        if not command_available(command(), get_product_variant()):
            reject_command(
                f"command '{command()}' is not available for the "
                f"'{get_product_variant().value}' variant"
            )

        # read once, every step gets the same profile
        profile = select_profile(os.environ)
        run_command(command(), profile, verbose_set())
    except KbootError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(e.returncode)
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("interrupted", file=sys.stderr)
        sys.exit(INTERRUPTED)
