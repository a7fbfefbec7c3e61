class KbootError(Exception):
    """
    Base class for every failure that aborts a kboot command.

    `returncode` is the exit status kboot terminates with, mirroring the
    exit status of the delegate that failed where there is one.
    """

    def __init__(self, message: str, returncode: int = 1) -> None:
        super().__init__(message)
        self.returncode = returncode


class ConfigError(KbootError):
    pass


class ToolchainQueryFailure(KbootError):
    """
    `cargo metadata` could not run or printed something unusable.
    """

    pass


class BuildFailure(KbootError):
    pass


class ImageAssemblyFailure(KbootError):
    """
    Creating the staging tree, copying into it, or `grub-mkrescue` failed.
    """

    pass


class EmulatorLaunchFailure(KbootError):
    pass
