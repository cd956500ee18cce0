"""URI to controller routing."""

from __future__ import annotations

import importlib
import logging
import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from keystone.errors import ConfigurationError, InvalidArgumentError

if TYPE_CHECKING:
    from keystone.foundation.application import Application

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

type Controller = Callable[..., Any]


def import_target(target: str) -> Controller:
    """Import a controller given as ``"package.module:attribute"``.

    Raises:
        ConfigurationError: If the target cannot be imported or is not callable

    """
    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(
            f"Route target '{target}' must have the form 'module:attribute'"
        )
    try:
        resolved = getattr(importlib.import_module(module_name), attribute)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot import route target '{target}': {e}") from e
    if not callable(resolved):
        raise ConfigurationError(f"Route target '{target}' is not callable")
    return resolved


class Route:
    """A named URI pattern bound to a controller.

    Patterns are literal paths with ``{name}`` placeholders, each matching a
    single path segment.
    """

    def __init__(
        self,
        name: str,
        pattern: str,
        target: Controller,
        methods: Iterable[str] | str | None = None,
    ) -> None:
        if not callable(target):
            raise InvalidArgumentError(f"Target of route '{name}' is not callable")
        self.name = name
        self.pattern = "/" + pattern.strip("/")
        self.target = target
        if isinstance(methods, str):
            methods = (methods,)
        self.methods = frozenset(m.upper() for m in methods) if methods else None
        self.regex = self._compile(self.pattern)

    def __repr__(self) -> str:
        return f"Route(name={self.name!r}, pattern={self.pattern!r})"

    def match(self, uri: str, method: str = "GET") -> dict[str, str] | None:
        """Get the placeholder values if ``uri`` and ``method`` match this route."""
        if self.methods is not None and method.upper() not in self.methods:
            return None
        path = "/" + uri.partition("?")[0].strip("/")
        found = self.regex.fullmatch(path)
        return found.groupdict() if found else None

    @staticmethod
    def _compile(pattern: str) -> re.Pattern[str]:
        parts: list[str] = []
        position = 0
        for placeholder in _PLACEHOLDER.finditer(pattern):
            parts.append(re.escape(pattern[position : placeholder.start()]))
            parts.append(f"(?P<{placeholder.group(1)}>[^/]+)")
            position = placeholder.end()
        parts.append(re.escape(pattern[position:]))
        return re.compile("".join(parts))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of translating a URI: the route and its placeholder values."""

    route: Route
    parameters: dict[str, str] = field(default_factory=dict)


class Router:
    """Ordered route table for one application.

    Routes listed in the application's ``routes`` config group are added on
    construction::

        welcome:
          pattern: /welcome/{name}
          target: demo.controllers:welcome
          methods: [GET]
    """

    def __init__(self, app: Application) -> None:
        self._app = app
        self._routes: dict[str, Route] = {}

        app.config.load("routes")
        routes = app.config.as_dict().get("routes") or {}
        if not isinstance(routes, Mapping):
            raise ConfigurationError("The routes config group must be a mapping")
        for name, definition in routes.items():
            self._add_from_config(name, definition)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(list(self._routes.values()))

    def add(
        self,
        name: str,
        pattern: str,
        target: Controller | str,
        methods: Iterable[str] | str | None = None,
    ) -> Route:
        """Add (or replace) a named route.

        Args:
            name: Unique route name
            pattern: URI pattern with ``{name}`` placeholders
            target: Controller callable or ``"module:attribute"`` import string
            methods: HTTP methods the route accepts, all if omitted

        Returns:
            The new route

        """
        if isinstance(target, str):
            target = import_target(target)
        route = Route(name, pattern, target, methods)
        self._routes[name] = route
        logger.debug("Added route %s: %s", name, route.pattern)
        return route

    def get(self, name: str) -> Route | None:
        return self._routes.get(name)

    def translate(self, uri: str, method: str = "GET") -> RouteMatch | None:
        """Find the first route matching a URI and method."""
        for route in self._routes.values():
            parameters = route.match(uri, method)
            if parameters is not None:
                return RouteMatch(route, parameters)
        return None

    def _add_from_config(self, name: str, definition: Any) -> None:
        if not isinstance(definition, Mapping) or not {"pattern", "target"} <= set(
            definition
        ):
            raise ConfigurationError(
                f"Route '{name}' needs a mapping with 'pattern' and 'target'"
            )
        self.add(
            name,
            str(definition["pattern"]),
            str(definition["target"]),
            definition.get("methods"),
        )
