import json
import subprocess
import sys
from pathlib import Path

import pytest

# Allow importing kboot from repository root
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from kboot import config  # noqa: E402


class FakeToolchain:
    """
    Stand-in for `subprocess.run` that records every argv and answers like
    cargo, grub-mkrescue and qemu would.
    """

    def __init__(self, target_root: Path, package: str = "kfs") -> None:
        self.target_root = target_root
        self.package = package
        self.calls: list[list[str]] = []
        self.returncodes: dict[str, int] = {}
        self.missing: set[str] = set()
        self.metadata_stdout: str | None = None
        self.artifact_bytes = 4096

    def key(self, cmds: list[str]) -> str:
        if cmds[0] == "cargo":
            return f"cargo {cmds[1]}"
        return cmds[0]

    def count(self, key: str) -> int:
        return sum(1 for c in self.calls if self.key(c) == key)

    def keys(self) -> list[str]:
        return [self.key(c) for c in self.calls]

    def artifact(self, profile_dir: str) -> Path:
        return self.target_root / "target" / profile_dir / self.package

    def __call__(self, cmds, stdout=None, text=False, **kwargs):
        cmds = list(cmds)
        key = self.key(cmds)
        if cmds[0] in self.missing:
            raise FileNotFoundError(2, "No such file or directory", cmds[0])
        self.calls.append(cmds)

        returncode = self.returncodes.get(key, 0)
        out = None
        if key == "cargo metadata" and returncode == 0:
            out = self.metadata_stdout
            if out is None:
                out = json.dumps(
                    {
                        "packages": [{"name": self.package}],
                        "target_directory": str(self.target_root),
                    }
                )
        elif key == "cargo build" and returncode == 0:
            profile_dir = "release" if "--release" in cmds else "debug"
            artifact = self.artifact(profile_dir)
            artifact.parent.mkdir(parents=True, exist_ok=True)
            artifact.write_bytes(b"\x7fELF" + b"\0" * (self.artifact_bytes - 4))
        elif key == "cargo clean" and returncode == 0:
            for profile_dir in ("debug", "release"):
                self.artifact(profile_dir).unlink(missing_ok=True)
        elif key == "grub-mkrescue" and returncode == 0:
            Path(cmds[cmds.index("-o") + 1]).write_bytes(b"CD001")

        return subprocess.CompletedProcess(cmds, returncode, stdout=out)


@pytest.fixture(autouse=True)
def _reset_config_cache():
    config.reset_config()
    yield
    config.reset_config()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    work = tmp_path / "kernel"
    work.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.delenv("RELEASE", raising=False)
    return work


@pytest.fixture
def toolchain(workdir: Path, monkeypatch: pytest.MonkeyPatch) -> FakeToolchain:
    fake = FakeToolchain(workdir / "target")
    monkeypatch.setattr(subprocess, "run", fake)
    return fake
