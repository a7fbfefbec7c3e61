import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Self

from kboot.config import get_target_name
from kboot.metadata import query_cargo_metadata

RELEASE_ENV_VAR = "RELEASE"
TRUTHY_VALUES = {"1", "true", "yes", "on"}


class BuildProfile(Enum):
    DEBUG = "debug"
    RELEASE = "release"

    def cargo_flags(self) -> list[str]:
        match self:
            case BuildProfile.DEBUG:
                return []
            case BuildProfile.RELEASE:
                return ["--release"]

    def artifact_dir(self) -> str:
        return self.value


def select_profile(environ: Mapping[str, str] = os.environ) -> BuildProfile:
    """
    RELEASE=1 (or true/yes/on) selects the release profile, anything else debug.
    """
    value = environ.get(RELEASE_ENV_VAR, "")
    if value.strip().lower() in TRUTHY_VALUES:
        return BuildProfile.RELEASE
    return BuildProfile.DEBUG


@dataclass(frozen=True)
class ResolvedPaths:
    package_name: str
    target_root: str
    binary: str

    @staticmethod
    def resolve(profile: BuildProfile) -> Self:
        package_name, target_root = query_cargo_metadata()
        return ResolvedPaths.from_metadata(package_name, target_root, profile)

    @staticmethod
    def from_metadata(package_name: str, target_root: str, profile: BuildProfile) -> Self:
        # e.g. <target_root>/target/debug/<package>, a custom target json
        # puts its output one level below cargo's target directory
        binary = os.path.join(
            os.path.abspath(target_root),
            get_target_name(),
            profile.artifact_dir(),
            package_name,
        )
        return ResolvedPaths(
            package_name=package_name,
            target_root=os.path.abspath(target_root),
            binary=binary,
        )
