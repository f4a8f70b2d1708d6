"""Settings loading with JSON files and environment-variable overrides.

:func:`load_settings` produces the effective
:class:`~pulsenet.models.ClientSettings` from, highest precedence first:

1. ``PULSENET_*`` environment variables (see :data:`ENV_VARS`)
2. A JSON settings file, when a path is given
3. Model defaults

The result is handed to
:meth:`~pulsenet.client.NetworkClientBuilder.from_settings`.
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from pulsenet.exceptions import ConfigError
from pulsenet.models import ClientSettings

ENV_VARS: dict[str, tuple[str, ...]] = {
    "PULSENET_BASE_URL": ("base_url",),
    "PULSENET_TIMEOUT": ("timeout",),
    "PULSENET_CACHE_ENABLED": ("cache", "enabled"),
    "PULSENET_CACHE_TTL": ("cache", "ttl_seconds"),
    "PULSENET_RETRY_STRATEGY": ("retry", "strategy"),
    "PULSENET_MAX_RETRIES": ("retry", "max_retries"),
}
"""Environment variable name -> path of the settings field it overrides."""


def load_settings_file(path: str | Path) -> dict[str, Any]:
    """Read a JSON settings file.

    Args:
        path: Location of the file.

    Returns:
        The parsed JSON object.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid JSON,
            or not a JSON object.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Settings file not found at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Invalid settings file at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid settings file at {path}: expected a JSON object")
    return data


def load_settings(
    path: Optional[str | Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> ClientSettings:
    """Resolve the effective client settings.

    Args:
        path: Optional JSON settings file.
        env: Environment mapping to read overrides from.  Defaults to
            :data:`os.environ`.

    Returns:
        The validated :class:`~pulsenet.models.ClientSettings`.

    Raises:
        ConfigError: If the file cannot be read or the merged values fail
            validation.
    """
    data: dict[str, Any] = load_settings_file(path) if path is not None else {}
    environ = os.environ if env is None else env

    for var, field_path in ENV_VARS.items():
        value = environ.get(var, "")
        if value:
            _set_nested(data, field_path, value)

    try:
        return ClientSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings: {exc}") from exc


def _set_nested(data: dict[str, Any], field_path: tuple[str, ...], value: str) -> None:
    """Assign *value* at *field_path*, creating intermediate dicts as needed."""
    target = data
    for key in field_path[:-1]:
        child = target.get(key)
        if not isinstance(child, dict):
            child = {}
            target[key] = child
        target = child
    target[field_path[-1]] = value
