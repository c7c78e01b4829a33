"""Configuration file support for pwpolicy-audit."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from pwpolicy_audit.utils.errors import ConfigurationError

CONFIG_DIR_NAME = "pwpolicy-audit"


class DefaultsConfig(BaseModel):
    """Which release and baseline to assume when the CLI is not told."""

    version: str | None = Field(default=None, description="Default suite version, e.g. 5.1.0.0")
    baseline: str | None = Field(default=None, description="Default baseline policy file")


class OutputConfig(BaseModel):
    """How CLI reports are rendered when no option says otherwise."""

    default_format: Literal["terminal", "json"] = Field(
        default="terminal", description="Format used when --format is not given"
    )
    color: bool = Field(default=True, description="Colorize terminal output")
    verbose: bool = Field(default=False, description="Log at DEBUG as if --verbose were given")


class DriftConfig(BaseModel):
    """Drift evaluation configuration."""

    fail_on_drift: bool = Field(default=False, description="Exit non-zero when drift is found")
    show_matches: bool = Field(default=True, description="Include matching fields in reports")


class PwPolicyAuditConfig(BaseModel):
    """Main configuration for pwpolicy-audit."""

    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    drift: DriftConfig = Field(default_factory=DriftConfig)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths, in search order."""
    paths = []

    paths.append(Path.cwd() / ".pwpolicy-audit.yaml")
    paths.append(Path.cwd() / ".pwpolicy-audit.yml")
    paths.append(Path.cwd() / "pwpolicy-audit.yaml")

    home = Path.home()
    paths.append(home / ".pwpolicy-audit.yaml")
    paths.append(home / ".pwpolicy-audit" / "config.yaml")
    paths.append(home / ".config" / CONFIG_DIR_NAME / "config.yaml")

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / CONFIG_DIR_NAME / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> PwPolicyAuditConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If an explicit path is missing or a file is invalid
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return PwPolicyAuditConfig()


def _load_config_file(path: Path) -> PwPolicyAuditConfig:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read config file {path}: {e}") from e

    if data is None:
        return PwPolicyAuditConfig()

    try:
        return PwPolicyAuditConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e


def save_config(config: PwPolicyAuditConfig, config_path: Path | str | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ~/.pwpolicy-audit/config.yaml

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = Path.home() / ".pwpolicy-audit" / "config.yaml"
    else:
        config_path = Path(config_path)

    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=True)
    config_path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return config_path


def get_default_config() -> PwPolicyAuditConfig:
    """Get the default configuration."""
    return PwPolicyAuditConfig()


# Global config instance
_config: PwPolicyAuditConfig | None = None


def get_config() -> PwPolicyAuditConfig:
    """Get the global configuration instance, loading it on first call."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: PwPolicyAuditConfig | None) -> None:
    """Set (or with None, reset) the global configuration instance."""
    global _config
    _config = config
