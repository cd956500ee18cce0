"""Shared pytest fixtures for Keystone tests."""

from pathlib import Path

import pytest

from keystone.bootstrap import create_container
from keystone.config import ConfigContainer
from keystone.foundation import Application, Input
from keystone.services import ServiceContainer


@pytest.fixture
def global_config() -> ConfigContainer:
    """Process-wide configuration shared by every application in a test."""
    return ConfigContainer()


@pytest.fixture
def global_input() -> Input:
    """Global input describing a GET request for /welcome."""
    return Input(
        None,
        {"server": {"REQUEST_METHOD": "GET", "REQUEST_URI": "/welcome?lang=en"}},
    )


@pytest.fixture
def container(global_config: ConfigContainer, global_input: Input) -> ServiceContainer:
    """Container with all default providers and explicit global objects."""
    return create_container(global_config=global_config, global_input=global_input)


@pytest.fixture
def app_dir(tmp_path: Path) -> Path:
    """An empty, existing application directory."""
    path = tmp_path / "demo"
    path.mkdir()
    return path


@pytest.fixture
def app(container: ServiceContainer, app_dir: Path) -> Application:
    """The demo application in the dev environment."""
    return container.resolve("application", "demo", str(app_dir), "Demo", "dev")
