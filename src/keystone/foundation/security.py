"""URI cleaning for incoming requests."""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from pydantic import Field, ValidationError, field_validator

from keystone.errors import ConfigurationError, InvalidArgumentError
from keystone.services import BaseServiceConfiguration

if TYPE_CHECKING:
    from keystone.foundation.application import Application

logger = logging.getLogger(__name__)

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_TAGS = re.compile(r"<[^>]*>")


def strip_tags(value: str) -> str:
    return _TAGS.sub("", value)


def htmlentities(value: str) -> str:
    return html.escape(value, quote=True)


URI_FILTERS: dict[str, Callable[[str], str]] = {
    "strip_tags": strip_tags,
    "htmlentities": htmlentities,
}


class SecuritySettings(BaseServiceConfiguration):
    """Settings read from the ``security`` config group."""

    uri_filters: list[str] = Field(
        default_factory=lambda: ["strip_tags", "htmlentities"],
        description="Filters applied, in order, to every request URI",
    )

    @field_validator("uri_filters")
    @classmethod
    def validate_uri_filters(cls, v: list[str]) -> list[str]:
        unknown = [name for name in v if name not in URI_FILTERS]
        if unknown:
            raise ValueError(
                f"Unknown URI filters {unknown}, available: {sorted(URI_FILTERS)}"
            )
        return v


class Security:
    """Security helpers bound to one application."""

    def __init__(self, app: Application) -> None:
        self._app = app
        app.config.load("security")
        try:
            self._settings = SecuritySettings.from_properties(
                app.config.as_dict().get("security") or {}
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid security configuration: {e}") from e

    @property
    def settings(self) -> SecuritySettings:
        return self._settings

    def clean_uri(self, uri: str) -> str:
        """Run a request URI through the configured filters and normalise it.

        Control characters are removed and the filters applied first, so the
        segment normalisation sees the final path: empty and ``.`` segments
        are dropped and ``..`` segments resolved without ever leaving the
        root. The query string, if any, is kept.

        Raises:
            InvalidArgumentError: If ``uri`` is not a string

        """
        if not isinstance(uri, str):
            raise InvalidArgumentError(f"URI must be a string, got {type(uri).__name__}")

        filtered = _CONTROL_CHARS.sub("", uri.strip())
        for name in self._settings.uri_filters:
            filtered = URI_FILTERS[name](filtered)

        path, separator, query = filtered.partition("?")
        segments: list[str] = []
        for segment in path.split("/"):
            if segment in ("", "."):
                continue
            if segment == "..":
                if segments:
                    segments.pop()
                continue
            segments.append(segment)

        cleaned = "/" + "/".join(segments) + separator + query
        if cleaned != uri:
            logger.debug("Cleaned URI %r to %r", uri, cleaned)
        return cleaned
