"""
CLI Configuration

Configuration management for the hashtree console.
Supports environment variables (with .env files) and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv


# Environment variable prefix
ENV_PREFIX = "HASHTREE_"

OUTPUT_FORMATS = ("human", "json")


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # Logging
    log_level: str = "WARNING"
    log_file: str | None = None

    # Console
    prompt: str = "> "
    show_banner: bool = True
    warn_non_digest: bool = True

    # Output
    output_format: str = "human"  # "human" or "json"

    def __post_init__(self) -> None:
        """Validate field types; file values arrive untyped."""
        for name in ("log_level", "prompt", "output_format"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string, got {getattr(self, name)!r}")
        if self.log_file is not None and not isinstance(self.log_file, str):
            raise ValueError(f"log_file must be a string or null, got {self.log_file!r}")

        self.show_banner = parse_bool(self.show_banner, "show_banner")
        self.warn_non_digest = parse_bool(self.warn_non_digest, "warn_non_digest")

        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"output_format must be one of {OUTPUT_FORMATS}, got {self.output_format!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_TRUE_VALUES = ("1", "true", "yes")
_FALSE_VALUES = ("0", "false", "no")


def parse_bool(value: Any, name: str) -> bool:
    """Accept booleans or their usual string spellings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _env_bool(name: str, default: bool) -> bool:
    return parse_bool(os.getenv(name, str(default)), name)


def _read_config_file(path: Path) -> dict[str, Any]:
    with open(path, "r") as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f) or {}
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def load_config_from_env(config: CLIConfig | None = None) -> CLIConfig:
    """
    Apply environment variables on top of a configuration.

    Supported variables:
    - HASHTREE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR)
    - HASHTREE_LOG_FILE: Also write logs to this file
    - HASHTREE_PROMPT: Console prompt string
    - HASHTREE_SHOW_BANNER: Print the welcome banner (true/false)
    - HASHTREE_WARN_NON_DIGEST: Warn on added values that are not hex digests
    - HASHTREE_OUTPUT_FORMAT: "human" or "json"
    """
    load_dotenv()
    config = config or CLIConfig()

    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level)
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    if os.getenv(f"{ENV_PREFIX}PROMPT"):
        config.prompt = os.getenv(f"{ENV_PREFIX}PROMPT", config.prompt)
    if os.getenv(f"{ENV_PREFIX}SHOW_BANNER"):
        config.show_banner = _env_bool(f"{ENV_PREFIX}SHOW_BANNER", config.show_banner)
    if os.getenv(f"{ENV_PREFIX}WARN_NON_DIGEST"):
        config.warn_non_digest = _env_bool(f"{ENV_PREFIX}WARN_NON_DIGEST", config.warn_non_digest)
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", config.output_format)
        # Re-run validation
        config = CLIConfig(**{**config.to_dict(), "output_format": output_format})

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON or YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    data = _read_config_file(path)
    defaults = CLIConfig()

    return CLIConfig(
        log_level=data.get("log_level", defaults.log_level),
        log_file=data.get("log_file", defaults.log_file),
        prompt=data.get("prompt", defaults.prompt),
        show_banner=data.get("show_banner", defaults.show_banner),
        warn_non_digest=data.get("warn_non_digest", defaults.warn_non_digest),
        output_format=data.get("output_format", defaults.output_format),
    )


def default_config_paths() -> list[Path]:
    return [
        Path.cwd() / "hashtree.json",
        Path.cwd() / ".hashtree.json",
        Path.home() / ".config" / "hashtree" / "config.json",
    ]


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    return load_config_from_env(config)


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(CLIConfig().to_dict(), indent=2) + "\n"
