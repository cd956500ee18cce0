"""Service definitions for the display layer."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from keystone.display.finder import Finder
from keystone.display.manager import ViewManager, ViewManagerOptions
from keystone.display.parser import JinjaParser
from keystone.errors import InvalidArgumentError
from keystone.services import ServiceContainer, ServiceProvider


def _require_paths(paths: Iterable[str | Path], owner: str) -> None:
    if isinstance(paths, (str, Path)):
        raise InvalidArgumentError(
            f"{owner} paths must be a list of paths, not a single path"
        )


class DisplayServicesProvider(ServiceProvider):
    """Publishes the finder, view manager and default Jinja2 parser."""

    provides = ("finder", "view", "parser.jinja")

    def provide(self) -> None:
        def finder(
            container: ServiceContainer, paths: Iterable[str | Path] = ()
        ) -> Finder:
            _require_paths(paths, "Finder")
            return Finder(paths)

        def view(
            container: ServiceContainer,
            finder: Finder,
            options: ViewManagerOptions | dict[str, Any] | None = None,
        ) -> ViewManager:
            if not isinstance(finder, Finder):
                raise InvalidArgumentError(
                    f"View manager requires a Finder, got {type(finder).__name__}"
                )
            return ViewManager(finder, options)

        def jinja_parser(
            container: ServiceContainer, paths: Iterable[str | Path] = ()
        ) -> JinjaParser:
            _require_paths(paths, "Parser")
            return JinjaParser(paths)

        self.register("finder", finder)
        self.register("view", view)
        self.register("parser.jinja", jinja_parser)
