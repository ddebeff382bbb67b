"""
Configuration Management for QuakeLog

Provides configuration loading from multiple sources:
- Default values
- Configuration files (YAML, TOML, JSON)
- Environment variables
- Command line arguments

Configuration precedence (highest to lowest):
1. Command line arguments
2. Environment variables (QUAKELOG_*)
3. Configuration file
4. Default values
"""

import json
import logging
import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


# ============================================================================
# Configuration Dataclasses
# ============================================================================


@dataclass
class ParserConfig:
    """Configuration for log parsing."""

    # Log read when no path is given on the command line
    log_path: str = "games.log"
    encoding: str = "utf-8"


@dataclass
class ExportConfig:
    """Configuration for report export."""

    # One of export.EXPORT_FORMATS, used by `report` when --format is not given
    default_format: str = "text"
    json_indent: int = 2
    csv_delimiter: str = ","


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file: str | None = None
    file_max_bytes: int = 10 * 1024 * 1024  # 10MB
    file_backup_count: int = 5


@dataclass
class QuakeLogConfig:
    """Main configuration container."""

    parser: ParserConfig = field(default_factory=ParserConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    config_version: str = "1.0"


# ============================================================================
# Configuration Loading
# ============================================================================


def get_default_config_paths() -> list[Path]:
    """Get the default paths to search for configuration files."""
    paths = []

    # Current directory
    paths.append(Path.cwd() / "quakelog.yaml")
    paths.append(Path.cwd() / "quakelog.toml")
    paths.append(Path.cwd() / "quakelog.json")

    # User config directory
    home = Path.home()
    xdg_config = os.environ.get("XDG_CONFIG_HOME", str(home / ".config"))
    paths.append(Path(xdg_config) / "quakelog" / "config.yaml")
    paths.append(Path(xdg_config) / "quakelog" / "config.toml")

    return paths


def load_yaml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a YAML file."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_toml_config(path: Path) -> dict[str, Any]:
    """Load configuration from a TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_json_config(path: Path) -> dict[str, Any]:
    """Load configuration from a JSON file."""
    with open(path) as f:
        return json.load(f)


def load_config_file(path: Path) -> dict[str, Any]:
    """Load configuration from a file, detecting format from extension."""
    if not path.exists():
        return {}

    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return load_yaml_config(path)
    elif suffix == ".toml":
        return load_toml_config(path)
    elif suffix == ".json":
        return load_json_config(path)
    else:
        logger.warning(f"Unknown config file format: {suffix}")
        return {}


ENV_MAPPINGS = {
    "QUAKELOG_LOG_PATH": ("parser", "log_path"),
    "QUAKELOG_ENCODING": ("parser", "encoding"),
    "QUAKELOG_LOG_LEVEL": ("logging", "level"),
    "QUAKELOG_LOG_FILE": ("logging", "file"),
    "QUAKELOG_EXPORT_FORMAT": ("export", "default_format"),
    "QUAKELOG_JSON_INDENT": ("export", "json_indent"),
}


def load_env_config() -> dict[str, Any]:
    """Load configuration from environment variables."""
    config: dict[str, Any] = {}

    for env_var, (section, key) in ENV_MAPPINGS.items():
        value = os.environ.get(env_var)
        if value is None:
            continue

        config.setdefault(section, {})[key] = value

    return config


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def coerce_value(section: Any, key: str, value: Any) -> Any:
    """
    Convert a raw value to the type of the field it targets.

    Raises ValueError when an int field gets a non-numeric value.
    """
    default = getattr(section, key)
    if value is None:
        return None
    if isinstance(default, int):
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError(
                f"Invalid value for {type(section).__name__}.{key}: {value!r} (expected an integer)"
            )
    return str(value)


def dict_to_config(data: dict[str, Any]) -> QuakeLogConfig:
    """Convert a dictionary to QuakeLogConfig, ignoring unknown keys."""
    config = QuakeLogConfig()

    for section_name in ("parser", "export", "logging"):
        section = getattr(config, section_name)
        for key, value in (data.get(section_name) or {}).items():
            if hasattr(section, key):
                setattr(section, key, coerce_value(section, key, value))
            else:
                logger.warning(f"Ignoring unknown config key: {section_name}.{key}")

    return config


def load_config(config_file: Path | None = None, include_env: bool = True) -> QuakeLogConfig:
    """
    Load configuration from all sources.

    Args:
        config_file: Explicit path to a config file (optional)
        include_env: Whether to include environment variables

    Returns:
        Merged QuakeLogConfig
    """
    config_data: dict[str, Any] = {}

    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        config_data = load_config_file(config_file)
        logger.info(f"Loaded config from: {config_file}")
    else:
        for path in get_default_config_paths():
            if path.exists():
                config_data = load_config_file(path)
                logger.info(f"Loaded config from: {path}")
                break

    if include_env:
        config_data = merge_configs(config_data, load_env_config())

    return dict_to_config(config_data)


# ============================================================================
# Configuration Saving
# ============================================================================


def config_to_dict(config: QuakeLogConfig) -> dict[str, Any]:
    """Convert QuakeLogConfig to a dictionary."""
    return asdict(config)


def save_config(config: QuakeLogConfig, path: Path) -> None:
    """
    Save configuration to a file.

    Args:
        config: Configuration to save
        path: Path to save to (YAML or JSON, detected from extension)
    """
    data = config_to_dict(config)
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
    elif suffix == ".json":
        with open(path, "w") as f:
            json.dump(data, f, indent=2)
    else:
        raise ValueError(f"Unknown config format: {suffix}")

    logger.info(f"Saved config to: {path}")


# ============================================================================
# Global Configuration
# ============================================================================

_global_config: QuakeLogConfig | None = None


def get_config() -> QuakeLogConfig:
    """Get the global configuration, loading it if necessary."""
    global _global_config

    if _global_config is None:
        _global_config = load_config()

    return _global_config


def set_config(config: QuakeLogConfig) -> None:
    """Set the global configuration."""
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _global_config
    _global_config = None


# ============================================================================
# Configuration Templates
# ============================================================================

DEFAULT_CONFIG_YAML = """# QuakeLog Configuration

# Parser settings
parser:
  log_path: games.log
  encoding: utf-8

# Export settings
export:
  default_format: text  # text, json, csv or games-csv
  json_indent: 2
  csv_delimiter: ","

# Logging settings
logging:
  level: INFO
  # file: /path/to/quakelog.log
"""


def generate_default_config(path: Path) -> None:
    """Generate a default configuration file."""
    suffix = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        path.write_text(DEFAULT_CONFIG_YAML)
    else:
        save_config(QuakeLogConfig(), path)

    logger.info(f"Generated default config at: {path}")
