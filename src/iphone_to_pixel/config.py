"""
Configuration management with YAML loading and environment variable support.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import DEFAULT_AUDIO_BITRATE, LEGACY_CRF, LEGACY_PRESET, OUTPUT_DIR_SUFFIX

OUTPUT_MODES = ("text", "json")


def _env_path(env_var: str, default: Path | None = None) -> Path | None:
    """Get path from environment variable or return default."""
    if value := os.environ.get(env_var):
        return Path(value)
    return default


@dataclass
class ToolsConfig:
    """External tool overrides - fall back to PATH lookup when unset."""

    ffmpeg: Path | None = field(default_factory=lambda: _env_path("I2P_FFMPEG"))
    ffprobe: Path | None = field(default_factory=lambda: _env_path("I2P_FFPROBE"))
    exiftool: Path | None = field(default_factory=lambda: _env_path("I2P_EXIFTOOL"))


@dataclass
class ConvertConfig:
    output_suffix: str = OUTPUT_DIR_SUFFIX
    audio_bitrate: str = DEFAULT_AUDIO_BITRATE
    legacy_crf: int = LEGACY_CRF
    legacy_preset: str = LEGACY_PRESET


@dataclass
class OutputConfig:
    mode: str = "text"  # "text" or "json"


@dataclass
class ProcessingConfig:
    # Exit non-zero when any file failed, even though the batch completed
    fail_on_error: bool = True


@dataclass
class LoggingConfig:
    level: str = "WARNING"


_SECTIONS = ["tools", "convert", "output", "processing", "logging"]


@dataclass
class AppConfig:
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    convert: ConvertConfig = field(default_factory=ConvertConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "AppConfig":
        """Load configuration from YAML file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "AppConfig":
        """Create config from dictionary, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping of sections")

        config = cls()

        for section_name in _SECTIONS:
            if section_name not in data:
                continue
            values = data[section_name] or {}
            if not isinstance(values, dict):
                raise ValueError(f"Config section '{section_name}' must be a mapping")
            section = getattr(config, section_name)
            for key, value in values.items():
                if not hasattr(section, key):
                    continue
                if section_name == "tools" and isinstance(value, str):
                    value = Path(value).expanduser() if value else None
                setattr(section, key, value)

        if config.output.mode not in OUTPUT_MODES:
            raise ValueError(f"output.mode must be one of {', '.join(OUTPUT_MODES)}, got {config.output.mode!r}")

        return config


def _get_default_config_dir() -> Path:
    """Get default config directory."""
    if config_dir := os.environ.get("I2P_CONFIG_DIR"):
        return Path(config_dir)

    if xdg_config := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_config) / "iphone-to-pixel"

    return Path.home() / ".config" / "iphone-to-pixel"


def load_config(config_path: Path | None = None, config_dir: Path | None = None) -> AppConfig:
    """
    Load configuration.

    Args:
        config_path: Path to config file (default: searches standard locations)
        config_dir: Config directory to search instead of the default one

    Returns:
        AppConfig (defaults when no file is found)
    """
    if config_path is None:
        if config_dir is None:
            config_dir = _get_default_config_dir()
        search_paths = [
            config_dir / "config.yaml",
            Path.cwd() / "iphone-to-pixel.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = path
                break

    return AppConfig.from_yaml(config_path) if config_path else AppConfig()
