"""Configuration container with search paths and a parent chain.

Configuration groups are loaded from ``<path>/config/<group>.yaml`` for every
search path (later paths override earlier ones), followed by an optional
environment overlay in ``<path>/config/<environment>/<group>.yaml``. Lookups
use dot-separated keys and fall back to the parent container when a key is
not set locally.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from keystone.errors import ConfigurationError

logger = logging.getLogger(__name__)

_MISSING = object()


def merge_mappings(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_mappings(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigContainer:
    """Dot-path configuration store with file loading and parent fallback."""

    def __init__(self, environment: str | None = None) -> None:
        self._paths: list[Path] = []
        self._parent: ConfigContainer | None = None
        self._environment = environment
        self._data: dict[str, Any] = {}

    @property
    def paths(self) -> list[Path]:
        """Search paths in the order they are consulted."""
        return list(self._paths)

    @property
    def parent(self) -> ConfigContainer | None:
        return self._parent

    @property
    def environment(self) -> str | None:
        return self._environment

    def add_path(self, path: str | Path) -> ConfigContainer:
        """Add a search path for configuration files.

        Args:
            path: Directory that contains a ``config/`` folder

        Returns:
            The container, for chaining

        """
        resolved = Path(path).resolve()
        if resolved not in self._paths:
            self._paths.append(resolved)
        return self

    def set_parent(self, parent: ConfigContainer | None) -> ConfigContainer:
        """Set the container consulted for keys missing from this one.

        Raises:
            ConfigurationError: If the parent chain would contain this container

        """
        ancestor = parent
        while ancestor is not None:
            if ancestor is self:
                raise ConfigurationError("Config container cannot be its own ancestor")
            ancestor = ancestor.parent
        self._parent = parent
        return self

    def set_environment(self, environment: str | None) -> ConfigContainer:
        """Set the environment whose overlay files are applied on load."""
        self._environment = environment
        return self

    def load(self, group: str) -> dict[str, Any]:
        """Load a configuration group from all search paths.

        The merged result is stored under ``group`` (merged over anything
        already set for it) and returned.

        Args:
            group: Group name, also the file name without extension

        Returns:
            The group's configuration after loading

        Raises:
            ConfigurationError: If a file cannot be read or is not a mapping

        """
        loaded: dict[str, Any] = {}
        for config_file in self._candidate_files(group):
            loaded = merge_mappings(loaded, self._read_file(config_file))
            logger.debug("Loaded config group '%s' from %s", group, config_file)

        existing = self._data.get(group)
        if isinstance(existing, dict):
            loaded = merge_mappings(existing, loaded)
        self._data[group] = loaded
        return copy.deepcopy(loaded)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-separated key, falling back to the parent."""
        value = self._lookup(key)
        if value is not _MISSING:
            return value
        if self._parent is not None:
            return self._parent.get(key, default)
        return default

    def has(self, key: str) -> bool:
        """Check whether a key is set here or in any parent."""
        if self._lookup(key) is not _MISSING:
            return True
        return self._parent is not None and self._parent.has(key)

    def set(self, key: str, value: Any) -> ConfigContainer:
        """Set a value by dot-separated key, creating intermediate groups."""
        *groups, last = key.split(".")
        node = self._data
        for group in groups:
            child = node.get(group)
            if not isinstance(child, dict):
                child = {}
                node[group] = child
            node = child
        node[last] = value
        return self

    def as_dict(self) -> dict[str, Any]:
        """Get the effective configuration, parent values overridden locally."""
        base = self._parent.as_dict() if self._parent is not None else {}
        return merge_mappings(base, self._data)

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def _candidate_files(self, group: str) -> list[Path]:
        candidates = [path / "config" / f"{group}.yaml" for path in self._paths]
        if self._environment:
            candidates += [
                path / "config" / self._environment / f"{group}.yaml"
                for path in self._paths
            ]
        return [candidate for candidate in candidates if candidate.is_file()]

    def _read_file(self, config_file: Path) -> dict[str, Any]:
        try:
            with open(config_file, encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse YAML config {config_file}: {e}"
            ) from e
        except OSError as e:
            raise ConfigurationError(
                f"Failed to read config file {config_file}: {e}"
            ) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigurationError(f"Invalid configuration format in {config_file}")
        return content  # type: ignore[return-value]
