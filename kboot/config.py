import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Self

import toml

from kboot.errors import ConfigError

DEFAULT_CONFIG_FILE = "kboot.toml"

cached_project_config = None
cached_image_config = None


class ProductVariant(Enum):
    """
    Which of the two kernel products this checkout builds.

    GRUB ships the `run-grub` disc-image path, DIRECT boots the raw binary only.
    """

    GRUB = "grub"
    DIRECT = "direct"


@dataclass
class ProjectConfig:
    variant: ProductVariant
    target_name: str

    @staticmethod
    def parse(conf_sec: dict[str, Any]) -> Self:
        variant_value = conf_sec.get("variant", ProductVariant.DIRECT.value)
        try:
            variant = ProductVariant(variant_value)
        except ValueError:
            raise ConfigError(
                f"Invalid variant '{variant_value}', expected one of "
                + ", ".join(f"'{v.value}'" for v in ProductVariant)
            )

        target_name = str(conf_sec.get("target_name", "target"))
        if not target_name or os.path.isabs(target_name):
            raise ConfigError(f"target_name '{target_name}' must be a relative name.")

        return ProjectConfig(variant=variant, target_name=target_name)


@dataclass
class ImageConfig:
    staging_dir: str
    grub_cfg: str
    iso_name: Optional[str] = None  # None means "<package>.iso"

    @staticmethod
    def parse(conf_sec: dict[str, Any]) -> Self:
        iso_name = conf_sec.get("iso_name")
        return ImageConfig(
            staging_dir=str(conf_sec.get("staging_dir", "isodir")),
            grub_cfg=str(conf_sec.get("grub_cfg", "grub.cfg")),
            iso_name=str(iso_name) if iso_name is not None else None,
        )


def _section(parsed_toml: dict[str, Any], name: str) -> dict[str, Any]:
    section = parsed_toml.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {type(section).__name__}.")
    return section


def parse_config(path: Optional[str] = None) -> None:
    """
    Load `kboot.toml` into the module cache.

    Without an explicit path a missing file means all defaults; an explicit
    path that does not exist is an error.
    """
    global cached_project_config, cached_image_config

    config_path = os.path.abspath(path or DEFAULT_CONFIG_FILE)
    parsed_toml: dict[str, Any] = {}

    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                parsed_toml = toml.load(f)
        except (OSError, toml.TomlDecodeError) as e:
            raise ConfigError(f"Failed to read {config_path}: {e}")
    elif path is not None:
        raise ConfigError(f"Config file {config_path} not found.")

    cached_project_config = ProjectConfig.parse(_section(parsed_toml, "project"))

    cached_image_config = ImageConfig.parse(_section(parsed_toml, "image"))


def reset_config() -> None:
    global cached_project_config, cached_image_config
    cached_project_config = None
    cached_image_config = None


def get_product_variant() -> ProductVariant:
    return cached_project_config.variant  # type: ignore


def get_target_name() -> str:
    return cached_project_config.target_name  # type: ignore


def get_staging_dir() -> str:
    return os.path.abspath(cached_image_config.staging_dir)  # type: ignore


def get_grub_cfg_path() -> str:
    return os.path.abspath(cached_image_config.grub_cfg)  # type: ignore


def get_iso_name(package_name: str) -> str:
    return cached_image_config.iso_name or f"{package_name}.iso"  # type: ignore
