"""Hierarchical configuration containers backed by YAML files."""

from keystone.config.container import ConfigContainer
from keystone.config.provider import ConfigServicesProvider

__all__ = ["ConfigContainer", "ConfigServicesProvider"]
