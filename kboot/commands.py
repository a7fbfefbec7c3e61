from typing import Callable

from kboot.cargo import cargo_build, cargo_clean
from kboot.config import ProductVariant, get_product_variant
from kboot.image import build_iso
from kboot.profile import BuildProfile, ResolvedPaths
from kboot.qemu import boot_cdrom, boot_kernel, emulator_for
from kboot.size import print_size

GRUB_ONLY_COMMANDS = {"run-grub"}


def cmd_help(_profile: BuildProfile, _verbose: bool = False) -> None:
    variant = get_product_variant()
    print("available commands:")
    for name, (description, _) in COMMANDS.items():
        if name in GRUB_ONLY_COMMANDS and variant != ProductVariant.GRUB:
            continue
        print(f"  kboot {name:<12}{description}")


def resolve(profile: BuildProfile, verbose: bool) -> ResolvedPaths:
    paths = ResolvedPaths.resolve(profile)
    if verbose:
        print(f"profile: {profile.value}")
        print(f"package: {paths.package_name}")
        print(f"kernel:  {paths.binary}")
    return paths


def cmd_build(profile: BuildProfile, verbose: bool = False) -> None:
    resolve(profile, verbose)
    cargo_build(profile)


def cmd_run(profile: BuildProfile, verbose: bool = False) -> None:
    paths = resolve(profile, verbose)
    cargo_build(profile)
    boot_kernel(emulator_for(get_product_variant()), paths.binary)


def cmd_run_grub(profile: BuildProfile, verbose: bool = False) -> None:
    paths = resolve(profile, verbose)
    cargo_build(profile)
    iso_path = build_iso(paths)
    boot_cdrom(emulator_for(get_product_variant()), iso_path)


def cmd_print_size(profile: BuildProfile, verbose: bool = False) -> None:
    paths = resolve(profile, verbose)
    print_size(profile, paths)


def cmd_clean(profile: BuildProfile, verbose: bool = False) -> None:
    resolve(profile, verbose)
    cargo_clean()


def cmd_re(profile: BuildProfile, verbose: bool = False) -> None:
    cmd_clean(profile, verbose)
    cmd_build(profile, verbose)


COMMANDS: dict[str, tuple[str, Callable[[BuildProfile, bool], None]]] = {
    "help": ("print this message", cmd_help),
    "build": ("build the kernel", cmd_build),
    "run": ("run the kernel with QEMU", cmd_run),
    "run-grub": ("run the kernel with QEMU from a GRUB iso", cmd_run_grub),
    "print-size": ("print the size of the kernel", cmd_print_size),
    "clean": ("remove intermediate files", cmd_clean),
    "re": ("clean then build the kernel again", cmd_re),
}

ALL_COMMANDS = list(COMMANDS)


def command_available(name: str, variant: ProductVariant) -> bool:
    return name in COMMANDS and (
        name not in GRUB_ONLY_COMMANDS or variant == ProductVariant.GRUB
    )


def run_command(name: str, profile: BuildProfile, verbose: bool = False) -> None:
    _, func = COMMANDS[name]
    func(profile, verbose)
