import os

from kboot.cargo import cargo_build
from kboot.errors import BuildFailure
from kboot.profile import BuildProfile, ResolvedPaths
from kboot.utils import human_size


def print_size(profile: BuildProfile, paths: ResolvedPaths) -> None:
    cargo_build(profile, quiet=True)

    try:
        # allocated blocks, as `du -h` reports them
        size = os.stat(paths.binary).st_blocks * 512
    except OSError as e:
        raise BuildFailure(f"built kernel not found at {paths.binary}: {e}")

    print(f"{human_size(size)}\t{paths.binary}")
