import os
import shutil
from dataclasses import dataclass
from typing import Self

from kboot.config import get_grub_cfg_path, get_iso_name, get_staging_dir
from kboot.errors import ImageAssemblyFailure
from kboot.profile import ResolvedPaths
from kboot.utils import DirectoryCreationError, ensure_dir_exist, run_tool

KERNEL_IMAGE_NAME = "kernel.bin"
GRUB_CFG_NAME = "grub.cfg"
GRUB_MKRESCUE = "grub-mkrescue"


@dataclass(frozen=True)
class ImageLayout:
    """
    Staging tree consumed by grub-mkrescue:

        <root>/boot/grub/grub.cfg
        <root>/boot/kernel.bin
    """

    root: str

    @property
    def boot_dir(self) -> str:
        return os.path.join(self.root, "boot")

    @property
    def grub_dir(self) -> str:
        return os.path.join(self.boot_dir, "grub")

    @property
    def kernel_path(self) -> str:
        return os.path.join(self.boot_dir, KERNEL_IMAGE_NAME)

    @property
    def grub_cfg_path(self) -> str:
        return os.path.join(self.grub_dir, GRUB_CFG_NAME)

    @staticmethod
    def from_config() -> Self:
        return ImageLayout(root=get_staging_dir())


def stage_image(layout: ImageLayout, kernel_binary: str, grub_cfg: str) -> None:
    """
    Populate the staging tree. Safe to repeat over an existing tree.
    """
    # checked up front so nothing is copied for a config that is not there
    if not os.path.isfile(grub_cfg):
        raise ImageAssemblyFailure(f"bootloader config {grub_cfg} not found")

    try:
        ensure_dir_exist(layout.grub_dir)
    except DirectoryCreationError as e:
        raise ImageAssemblyFailure(str(e))

    try:
        shutil.copyfile(kernel_binary, layout.kernel_path)
        shutil.copyfile(grub_cfg, layout.grub_cfg_path)
    except OSError as e:
        raise ImageAssemblyFailure(f"failed to populate {layout.root}: {e}")


def build_iso(paths: ResolvedPaths) -> str:
    """
    Stage the built kernel with the grub config and pack it into a disc image.

    Returns:
        str: absolute path of the produced iso in the working directory.
    """
    layout = ImageLayout.from_config()
    stage_image(layout, paths.binary, get_grub_cfg_path())

    iso_path = os.path.abspath(get_iso_name(paths.package_name))
    run_tool([GRUB_MKRESCUE, "-o", iso_path, layout.root], ImageAssemblyFailure)

    return iso_path
