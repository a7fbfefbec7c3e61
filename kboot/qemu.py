from dataclasses import dataclass

from kboot.config import ProductVariant
from kboot.errors import EmulatorLaunchFailure
from kboot.utils import run_tool


@dataclass(frozen=True)
class EmulatorConfig:
    executable: str
    machine: str
    memory: str

    def hardware_args(self) -> list[str]:
        return ["-machine", f"type={self.machine}", "-m", self.memory]


# kernel shipped with the grub disc-image path
GRUB_VARIANT_QEMU = EmulatorConfig(
    executable="qemu-system-i386",
    machine="pc-i440fx-3.1",
    memory="2G",
)

# kernel booted directly, no disc image
DIRECT_VARIANT_QEMU = EmulatorConfig(
    executable="qemu-system-i386",
    machine="pc-i440fx-3.1",
    memory="100M",
)


def emulator_for(variant: ProductVariant) -> EmulatorConfig:
    match variant:
        case ProductVariant.GRUB:
            return GRUB_VARIANT_QEMU
        case ProductVariant.DIRECT:
            return DIRECT_VARIANT_QEMU


def boot_kernel(emulator: EmulatorConfig, kernel_binary: str) -> None:
    run_tool(
        [emulator.executable, "-kernel", kernel_binary] + emulator.hardware_args(),
        EmulatorLaunchFailure,
    )


def boot_cdrom(emulator: EmulatorConfig, iso_path: str) -> None:
    run_tool(
        [emulator.executable, "-cdrom", iso_path] + emulator.hardware_args(),
        EmulatorLaunchFailure,
    )
