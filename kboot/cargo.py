from kboot.errors import BuildFailure
from kboot.profile import BuildProfile
from kboot.utils import run_tool


def cargo_build(profile: BuildProfile, quiet: bool = False) -> None:
    cmds = ["cargo", "build"]
    if quiet:
        cmds.append("-q")
    cmds += profile.cargo_flags()

    run_tool(cmds, BuildFailure, echo=not quiet)


def cargo_clean() -> None:
    run_tool(["cargo", "clean"], BuildFailure)
