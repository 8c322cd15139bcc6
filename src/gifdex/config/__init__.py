"""Configuration management for gifdex.

Settings come from ``~/.gifdex/config.yaml``, then ``GIFDEX__SECTION__KEY``
environment variables, then command-line overrides.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from gifdex.validation import one_line

from .exceptions import ConfigError
from .models import GifdexConfig
from .resolver import ENV_PREFIX, flatten_for_env, resolve_with_precedence

DEFAULT_CONFIG_PATH = Path("~/.gifdex/config.yaml")
_HEADER = (
    "# gifdex configuration file\n"
    "# Manage with `gifdex config set KEY --value VALUE` or edit by hand.\n"
)


def env_overrides_from(env: Mapping[str, str]) -> dict[str, Any]:
    """Map ``GIFDEX__OUTPUT__INDENT=2`` style variables to ``{"output.indent": 2}``."""
    overrides: dict[str, Any] = {}
    for name, raw in env.items():
        if not name.startswith(ENV_PREFIX) or len(name) == len(ENV_PREFIX):
            continue
        dotted = name[len(ENV_PREFIX) :].lower().replace("__", ".")
        try:
            overrides[dotted] = yaml.safe_load(raw)
        except yaml.YAMLError:
            overrides[dotted] = raw
    return overrides


class ConfigManager:
    """Own the gifdex YAML file and resolve the effective configuration."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._env = os.environ if env is None else env

    @property
    def config_path(self) -> Path:
        """Return the resolved configuration path."""
        return self._config_path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
        env_overrides: Mapping[str, str] | None = None,
    ) -> GifdexConfig:
        """Return the effective configuration; a missing file contributes nothing.

        Raises:
            ConfigError: If the file or an override is invalid.
        """
        env: Mapping[str, str] | None = None
        if include_env:
            env = self._env if env_overrides is None else env_overrides

        return resolve_with_precedence(
            defaults=GifdexConfig(),
            file_overrides=self.load_file_overrides(),
            env_overrides=env_overrides_from(env) if env else None,
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return the mapping stored in the config file, or ``{}`` if there is none."""
        text = self.read_text()
        try:
            data = yaml.safe_load(text) if text else None
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse {self._config_path}: {one_line(str(exc))}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self._config_path} must contain a mapping at the top level.")
        return data

    def save(self, data: Mapping[str, Any]) -> None:
        """Write data to the config file with a timestamped header."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        body = yaml.safe_dump(dict(data), sort_keys=False)
        self._config_path.write_text(f"{_HEADER}# Last updated: {stamp}\n{body}", encoding="utf-8")

    def ensure_exists(self) -> Path:
        """Write the default configuration unless a file is already present."""
        if not self._config_path.exists():
            self.save(GifdexConfig().model_dump(mode="python"))
        return self._config_path

    def read_text(self) -> str:
        """Return the current configuration file contents."""
        if not self._config_path.exists():
            return ""
        return self._config_path.read_text(encoding="utf-8")


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "GifdexConfig",
    "env_overrides_from",
    "resolve_with_precedence",
    "flatten_for_env",
    "ConfigError",
]
