"""
Configuration for the hints server.

Settings come from ``.codehints.yml`` in the workspace root:

    options:            # call-site options passed on every trigger
      completeSingle: false
      minPrefix: 2
    modes:              # file suffix -> mode, for documents without a language id
      .tmpl: html
      .pyw: python

The ``DEBUG`` environment variable turns on verbose log messages.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urlparse

import yaml


CONFIG_FILE = ".codehints.yml"

DEFAULT_MODES: dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".ts": "typescript",
    ".css": "css",
    ".html": "html",
    ".md": "markdown",
    ".yml": "yaml",
    ".yaml": "yaml",
}


class ConfigError(ValueError):
    """Raised when the config file cannot be understood."""


def _debug_from_env() -> bool:
    return bool(os.getenv("DEBUG"))


@dataclass
class HintsConfig:
    options: dict[str, Any] = field(default_factory=dict)
    modes: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MODES))
    debug: bool = field(default_factory=_debug_from_env)

    @classmethod
    def load(cls, path: Path) -> HintsConfig:
        """Load a config file; a missing file gives the defaults."""
        if not path.is_file():
            return cls()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping")

        options = data.get("options") or {}
        if not isinstance(options, dict):
            raise ConfigError(f"'options' in {path} must be a mapping")

        modes = dict(DEFAULT_MODES)
        for suffix, mode in (data.get("modes") or {}).items():
            suffix = str(suffix).lower()
            if not suffix.startswith("."):
                suffix = "." + suffix
            modes[suffix] = str(mode)

        return cls(options=dict(options), modes=modes)

    @classmethod
    def from_workspace(cls, workspace_root: Path) -> HintsConfig:
        return cls.load(workspace_root / CONFIG_FILE)

    def mode_for(self, uri: str) -> str | None:
        """Guess a mode from the suffix of a document URI or path."""
        suffix = PurePosixPath(urlparse(uri).path).suffix.lower()
        return self.modes.get(suffix)
