"""View manager: parser registry and view factory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import Field

from keystone.display.finder import Finder
from keystone.display.parser import Parser
from keystone.errors import ViewNotFoundError
from keystone.services import BaseServiceConfiguration

logger = logging.getLogger(__name__)


class ViewManagerOptions(BaseServiceConfiguration):
    """Options for a view manager.

    Attributes:
        cache: Directory reserved for rendered template caches (not created eagerly)
        view_folder: Folder below each finder path that holds templates

    """

    cache: Path | None = Field(default=None, description="Template cache directory")
    view_folder: str = Field(default="views", description="Template folder name")


class View:
    """A template bound to a parser and its render data.

    ``name`` is the template name relative to the finder paths and ``path``
    the file it was found at.
    """

    def __init__(
        self,
        name: str,
        path: Path,
        parser: Parser,
        data: dict[str, Any] | None = None,
    ) -> None:
        self.name = name
        self.path = path
        self.parser = parser
        self.data: dict[str, Any] = dict(data or {})

    def set(self, key: str, value: Any) -> View:
        self.data[key] = value
        return self

    def render(self) -> str:
        return self.parser.render(self.name, self.data)

    def __str__(self) -> str:
        return self.render()


class ViewManager:
    """Creates views by locating templates for the registered parsers.

    A view named ``welcome`` is looked up as ``<view_folder>/welcome.<key>``
    for every registered parser key, in registration order.
    """

    def __init__(
        self,
        finder: Finder,
        options: ViewManagerOptions | dict[str, Any] | None = None,
    ) -> None:
        if not isinstance(options, ViewManagerOptions):
            options = ViewManagerOptions.from_properties(options or {})
        self.finder = finder
        self.options = options
        self._parsers: dict[str, Parser] = {}

    @property
    def cache_path(self) -> Path | None:
        return self.options.cache

    @property
    def parsers(self) -> dict[str, Parser]:
        return dict(self._parsers)

    def register_parser(self, key: str, parser: Parser) -> ViewManager:
        """Register a parser for templates with the extension ``key``."""
        self._parsers[key] = parser
        logger.debug("Registered view parser for .%s templates", key)
        return self

    def forge(self, name: str, data: dict[str, Any] | None = None) -> View:
        """Create a view for the named template.

        Raises:
            ViewNotFoundError: If no registered parser has a matching template

        """
        for key, parser in self._parsers.items():
            template = (Path(self.options.view_folder) / f"{name}.{key}").as_posix()
            path = self.finder.find(template)
            if path is not None:
                return View(template, path, parser, data)
        raise ViewNotFoundError(
            f"View '{name}' not found for parsers {sorted(self._parsers)}"
        )
