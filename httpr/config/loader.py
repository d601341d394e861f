"""Configuration loader for httpr"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from httpr.config.schema import HttprConfig


def _deep_merge(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        raw_config = yaml.safe_load(f)

    if not raw_config:
        raise ValueError("Configuration file is empty")
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration file must contain a mapping at the top level")

    return raw_config


def load_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> HttprConfig:
    """
    Load and validate configuration.

    Args:
        config_path: Optional path to an httpr.yaml file
        overrides: Nested mapping of explicitly set values (CLI flags),
            applied on top of the file

    Returns:
        Validated HttprConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the file is empty or validation fails
    """
    raw_config: Dict[str, Any] = {}
    if config_path is not None:
        raw_config = _read_yaml(config_path)

    if overrides:
        raw_config = _deep_merge(raw_config, overrides)

    return HttprConfig(**raw_config)


def format_validation_error(error: ValidationError) -> List[str]:
    """Flatten a pydantic error into 'section.field: message' lines"""
    lines = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "config"
        lines.append(f"{location}: {err['msg']}")
    return lines


def validate_config_file(config_path: Path) -> List[str]:
    """
    Validate configuration file.

    Args:
        config_path: Path to httpr.yaml

    Returns:
        List of validation errors (empty if valid)
    """
    if not config_path.exists():
        return [f"Configuration file not found: {config_path}"]

    try:
        raw_config = _read_yaml(config_path)
    except yaml.YAMLError as e:
        return [f"YAML parsing error: {e}"]
    except ValueError as e:
        return [str(e)]

    try:
        HttprConfig(**raw_config)
    except ValidationError as e:
        return format_validation_error(e)

    return []


def create_example_config() -> str:
    """
    Generate example configuration YAML.

    Returns:
        Example configuration as YAML string
    """
    example = {
        "version": "1.0",
        "listen": "localhost:8080",
        "response": {
            "code": 200,
            "delay_ms": 0,
            "echo": False,
        },
        "logging": {
            "json": True,
            "pretty": False,
            "output": None,
            "level": "INFO",
        },
        "failure_mode": {
            "enabled": True,
            "failure_count": 2,
            "success_count": 1,
            "failure_code": 503,
            "success_code": 200,
        },
    }

    return yaml.dump(example, default_flow_style=False, sort_keys=False)
