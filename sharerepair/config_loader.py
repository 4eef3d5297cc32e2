"""System configuration for the share repair tooling.

System values (most importantly the ``version`` recorded before an upgrade)
are loaded from a JSON file, with environment variable overrides.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


# Environment variable -> system value key
ENV_OVERRIDES = {
    "SHAREREPAIR_VERSION": "version",
}


@dataclass
class SystemConfig:
    """Persisted system values, keyed by name."""
    values: dict[str, Any] = field(default_factory=dict)

    def get_system_value(self, key: str, default: Any = None) -> Any:
        value = self.values.get(key)
        if value is None:
            return default
        return value

    def get_system_value_string(self, key: str, default: str = "") -> str:
        """Return the system value as a string, or ``default`` when it is not set."""
        value = self.get_system_value(key)
        if value is None:
            return default
        return str(value)


def load_system_config(config_path: str | Path | None = None) -> SystemConfig:
    """Load system values from a JSON file with environment overrides.

    Args:
        config_path: Path to JSON config file. If None, only environment
            overrides apply.

    Returns:
        SystemConfig with all values loaded.

    Raises:
        FileNotFoundError: If config file specified but not found.
        json.JSONDecodeError: If config file is invalid JSON.
        ValueError: If the JSON document is not an object.
    """
    values: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(path, "r", encoding="utf-8") as f:
            values = json.load(f)

        if not isinstance(values, dict):
            raise ValueError(f"Config file must contain a JSON object: {config_path}")

    for env_name, key in ENV_OVERRIDES.items():
        env_value = os.environ.get(env_name)
        if env_value:
            values[key] = env_value

    return SystemConfig(values=values)
