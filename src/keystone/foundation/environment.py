"""Application environment settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import Field, ValidationError, field_validator

from keystone.config import ConfigContainer
from keystone.errors import ConfigurationError, InvalidArgumentError
from keystone.services import BaseServiceConfiguration

if TYPE_CHECKING:
    from keystone.foundation.application import Application

logger = logging.getLogger(__name__)

PRODUCTION_ENVIRONMENTS = frozenset({"prod", "production"})


class EnvironmentSettings(BaseServiceConfiguration):
    """Settings read from the ``environment`` config group."""

    base_url: str = Field(default="/", description="URL the application is served from")
    charset: str = Field(default="utf-8", description="Default output character set")
    locale: str | None = Field(default=None, description="Default locale")
    timezone: str = Field(default="UTC", description="Default timezone")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Normalise the base URL to always end with a slash."""
        v = v.strip()
        return v if v.endswith("/") else f"{v}/"


class Environment:
    """The environment an application runs in.

    Selecting an environment makes the application's config container apply
    ``config/<environment>/`` overlay files, then loads the ``environment``
    config group into :class:`EnvironmentSettings`.
    """

    def __init__(self, app: Application, name: str, config: ConfigContainer) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError(
                f"Environment name must be a non-empty string, got {name!r}"
            )
        self._app = app
        self._name = name.strip()
        self._config = config

        config.set_environment(self._name)
        config.load("environment")
        try:
            self._settings = EnvironmentSettings.from_properties(
                config.as_dict().get("environment") or {}
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid environment configuration: {e}") from e

        logger.debug("Environment '%s' active, base URL %s", self._name, self.base_url)

    @property
    def app(self) -> Application:
        return self._app

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> ConfigContainer:
        return self._config

    @property
    def settings(self) -> EnvironmentSettings:
        return self._settings

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    @property
    def charset(self) -> str:
        return self._settings.charset

    @property
    def is_production(self) -> bool:
        return self._name.lower() in PRODUCTION_ENVIRONMENTS
