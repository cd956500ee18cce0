"""Template parsers used by the view manager."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


class Parser(Protocol):
    """Protocol for objects that render a named template with data."""

    def render(self, name: str, data: dict[str, Any]) -> str: ...


class JinjaParser:
    """Renders Jinja2 templates found under a list of search paths.

    Template names are relative to the search paths, for example
    ``views/welcome.j2``. Output is autoescaped for ``.html``, ``.xml`` and
    ``.j2`` templates. Undefined variables raise ``jinja2.UndefinedError``.
    """

    def __init__(self, paths: Iterable[str | Path] = (), encoding: str = "utf-8") -> None:
        self.paths = [str(path) for path in paths]
        self._environment = Environment(
            loader=FileSystemLoader(self.paths, encoding=encoding),
            autoescape=select_autoescape(["html", "xml", "j2"]),
            undefined=StrictUndefined,
        )

    @property
    def environment(self) -> Environment:
        return self._environment

    def render(self, name: str, data: dict[str, Any]) -> str:
        return self._environment.get_template(name).render(data)

    def render_string(self, source: str, data: dict[str, Any]) -> str:
        return self._environment.from_string(source).render(data)
