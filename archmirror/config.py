"""Configuration loading."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .segmenters.base import Language

DEFAULT_CONFIG_PATH = Path("config/config.yaml")


class SummaryOrder(str, Enum):
    """How summary entries are ordered."""

    COMPLETION = "completion"  # first-come-first-served
    PATH = "path"  # sorted by relative path before writing


@dataclass
class CloneConfig:
    base_path: str = "./repos"
    depth: int = 1
    timeout: int = 300
    refresh: bool = False


@dataclass
class PipelineConfig:
    max_workers: int | None = None
    summary_order: SummaryOrder = SummaryOrder.COMPLETION


@dataclass
class MirrorConfig:
    """Top-level configuration for a mirror run."""
    clone: CloneConfig = field(default_factory=CloneConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    extensions: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "MirrorConfig":
        """Build a config from parsed YAML, filling in defaults."""
        data = _section(data, "top level of the config file")
        clone_data = _section(data.get("clone"), "clone")
        pipeline_data = _section(data.get("pipeline"), "pipeline")
        languages_data = _section(data.get("languages"), "languages")

        clone = CloneConfig(
            base_path=str(clone_data.get("base_path", CloneConfig.base_path)),
            depth=_integer(clone_data, "clone.depth", CloneConfig.depth, minimum=0),
            timeout=_integer(clone_data, "clone.timeout", CloneConfig.timeout, minimum=1),
            refresh=_flag(clone_data, "clone.refresh", CloneConfig.refresh),
        )

        pipeline = PipelineConfig(
            max_workers=_integer(pipeline_data, "pipeline.max_workers", None, minimum=1),
            summary_order=parse_summary_order(
                pipeline_data.get("summary_order", SummaryOrder.COMPLETION.value)
            ),
        )

        extensions = _section(languages_data.get("extensions"), "languages.extensions")
        for ext, language in extensions.items():
            try:
                Language(language)
            except ValueError:
                raise ConfigError(f"Unknown language {language!r} for extension {ext!r}") from None

        return cls(clone=clone, pipeline=pipeline, extensions=dict(extensions))


def _section(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def _integer(data: dict[str, Any], name: str, default: int | None, minimum: int) -> int | None:
    value = data.get(name.rsplit(".", 1)[-1], default)
    if value is None:
        return None
    # YAML booleans are ints to Python
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
    if number < minimum:
        raise ConfigError(f"{name} must be at least {minimum}, got {number}")
    return number


def _flag(data: dict[str, Any], name: str, default: bool) -> bool:
    value = data.get(name.rsplit(".", 1)[-1], default)
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false, got {value!r}")
    return value


def parse_summary_order(value: str | SummaryOrder) -> SummaryOrder:
    try:
        return SummaryOrder(value)
    except ValueError:
        choices = ", ".join(order.value for order in SummaryOrder)
        raise ConfigError(f"summary_order must be one of: {choices} (got {value!r})") from None


def load_config(config_path: Path | None = None) -> MirrorConfig:
    """Load configuration from YAML file.

    An explicitly requested file must exist. Without one, the default
    location is used when present and built-in defaults otherwise.
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return MirrorConfig()
        config_path = DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    return MirrorConfig.from_dict(data)
