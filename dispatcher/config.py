"""Settings loader for the task dispatcher."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import InvalidConfigurationError
from .types import DEFAULT_POOL_SIZE, DEFAULT_STACK_SIZE, DEFAULT_TASK_TYPE

ENV_PREFIX = "DISPATCHER_"


class DispatchSettings(BaseModel):
    """Process-wide defaults for a dispatch context"""

    default_pool_size: int = Field(default=DEFAULT_POOL_SIZE, ge=1, description="Pool size of a fresh resolver")
    default_task_type: str = Field(default=DEFAULT_TASK_TYPE, description="Task type of a fresh resolver")
    default_stack_size: int = Field(default=DEFAULT_STACK_SIZE, ge=0, description="Stack size of a fresh resolver")
    thread_name_suffix: str = Field(default="dispatcher", min_length=1, description="Suffix in '{sequence}@{suffix}' thread names")
    thread_group_name: str = Field(default="DispatcherGroup", min_length=1, description="Name of the worker thread group")


def _read_yaml(path: Path) -> dict[str, Any]:
    """Load the 'dispatcher' section of a YAML file with environment variable substitution."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open() as f:
        content = os.path.expandvars(f.read())

    data = yaml.safe_load(content) or {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Config file {path} must contain a mapping")

    section = data.get("dispatcher", {}) or {}
    if not isinstance(section, dict):
        raise InvalidConfigurationError(f"'dispatcher' section in {path} must be a mapping")
    return section


def _read_env(environ: dict[str, str]) -> dict[str, str]:
    """Collect DISPATCHER_<FIELD> overrides."""
    overrides = {}
    for name in DispatchSettings.model_fields:
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides


def load_settings(path: str | Path | None = None, environ: dict[str, str] | None = None) -> DispatchSettings:
    """Build settings from an optional YAML file, then environment overrides.

    Args:
        path: YAML file with a top-level ``dispatcher:`` mapping
        environ: Environment to read overrides from (defaults to os.environ)

    Returns:
        Validated settings
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(_read_yaml(Path(path)))
    values.update(_read_env(dict(os.environ) if environ is None else environ))

    try:
        return DispatchSettings(**values)
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid dispatcher settings: {e}") from e
