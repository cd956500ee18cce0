"""Tests for Environment settings."""

from pathlib import Path

import pytest

from keystone.config import ConfigContainer
from keystone.errors import ConfigurationError, InvalidArgumentError
from keystone.foundation import Application, Environment
from keystone.services import ServiceContainer


def make_app(container: ServiceContainer, app_dir: Path, environment: str = "dev") -> Application:
    return container.resolve("application", "demo", str(app_dir), "Demo", environment)


class TestEnvironment:
    """Test environment construction and settings."""

    def test_defaults_without_configuration(self, app: Application) -> None:
        """Verify defaults apply when no environment config exists."""
        environment = app.environment

        assert environment.base_url == "/"
        assert environment.charset == "utf-8"
        assert environment.settings.timezone == "UTC"
        assert not environment.is_production

    def test_reads_environment_config_group(
        self, container: ServiceContainer, app_dir: Path
    ) -> None:
        """Verify base URL and charset come from config/environment.yaml."""
        (app_dir / "config").mkdir()
        (app_dir / "config" / "environment.yaml").write_text(
            "base_url: https://example.com/demo\ncharset: iso-8859-1\n"
        )

        environment = make_app(container, app_dir).environment

        assert environment.base_url == "https://example.com/demo/"
        assert environment.charset == "iso-8859-1"

    def test_environment_overlay_is_used(
        self, container: ServiceContainer, app_dir: Path
    ) -> None:
        """Verify config/<environment>/environment.yaml overrides the base file."""
        (app_dir / "config" / "prod").mkdir(parents=True)
        (app_dir / "config" / "environment.yaml").write_text("base_url: /dev/\n")
        (app_dir / "config" / "prod" / "environment.yaml").write_text("base_url: /live/\n")

        environment = make_app(container, app_dir, "prod").environment

        assert environment.base_url == "/live/"
        assert environment.is_production

    def test_global_config_provides_defaults(
        self, container: ServiceContainer, app_dir: Path, global_config: ConfigContainer
    ) -> None:
        """Verify values in the global config are inherited."""
        global_config.set("environment.charset", "utf-16")

        assert make_app(container, app_dir).environment.charset == "utf-16"

    def test_invalid_settings_raise_configuration_error(
        self, container: ServiceContainer, app_dir: Path
    ) -> None:
        """Verify unknown keys in the environment group are rejected."""
        (app_dir / "config").mkdir()
        (app_dir / "config" / "environment.yaml").write_text("colour: blue\n")

        with pytest.raises(ConfigurationError, match="Invalid environment configuration"):
            make_app(container, app_dir)

    @pytest.mark.parametrize("name", ["", "   ", None, 3])
    def test_invalid_name_raises(self, app: Application, name: object) -> None:
        """Verify environment names must be non-empty strings."""
        with pytest.raises(InvalidArgumentError):
            Environment(app, name, ConfigContainer())  # type: ignore[arg-type]
