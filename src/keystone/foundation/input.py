"""Request input: server variables, query and post parameters, cookies."""

from __future__ import annotations

from collections.abc import Mapping
from http.cookies import SimpleCookie
from typing import TYPE_CHECKING, Any
from urllib.parse import parse_qsl, urlsplit

from keystone.errors import InvalidArgumentError

if TYPE_CHECKING:
    from keystone.foundation.application import Application

INPUT_SECTIONS = ("server", "query", "post", "cookies")


class Input:
    """Input variables for a request.

    Lookups that find nothing locally fall back to the parent input, so a
    sub-request sees the values of the request that started it.
    """

    def __init__(
        self,
        app: Application | None = None,
        input_vars: Mapping[str, Mapping[str, Any]] | None = None,
        parent: Input | None = None,
    ) -> None:
        if input_vars is None:
            input_vars = {}
        if not isinstance(input_vars, Mapping):
            raise InvalidArgumentError(
                f"Input variables must be a mapping, got {type(input_vars).__name__}"
            )
        unknown = sorted(set(input_vars) - set(INPUT_SECTIONS))
        if unknown:
            raise InvalidArgumentError(
                f"Unknown input sections {unknown}, expected any of {list(INPUT_SECTIONS)}"
            )
        if parent is not None and not isinstance(parent, Input):
            raise InvalidArgumentError(
                f"Parent input must be an Input, got {type(parent).__name__}"
            )

        self._vars: dict[str, dict[str, Any]] = {}
        for section in INPUT_SECTIONS:
            values = input_vars.get(section) or {}
            if not isinstance(values, Mapping):
                raise InvalidArgumentError(f"Input section '{section}' must be a mapping")
            self._vars[section] = dict(values)

        self._app = app
        self._parent = parent

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str], app: Application | None = None
    ) -> Input:
        """Build input from a CGI/WSGI style environment mapping."""
        server = {key: value for key, value in environ.items() if isinstance(value, str)}
        query = dict(parse_qsl(server.get("QUERY_STRING", ""), keep_blank_values=True))
        cookie = SimpleCookie()
        cookie.load(server.get("HTTP_COOKIE", ""))
        cookies = {key: morsel.value for key, morsel in cookie.items()}
        return cls(app, {"server": server, "query": query, "cookies": cookies})

    @property
    def app(self) -> Application | None:
        return self._app

    @property
    def parent(self) -> Input | None:
        return self._parent

    def get_server(self, name: str, default: Any = None) -> Any:
        return self._lookup("server", name, default)

    def get_query(self, name: str, default: Any = None) -> Any:
        return self._lookup("query", name, default)

    def get_post(self, name: str, default: Any = None) -> Any:
        return self._lookup("post", name, default)

    def get_cookie(self, name: str, default: Any = None) -> Any:
        return self._lookup("cookies", name, default)

    def get_param(self, name: str, default: Any = None) -> Any:
        """Get a query parameter, or a post parameter if there is none."""
        missing = object()
        value = self.get_query(name, missing)
        if value is missing:
            value = self.get_post(name, missing)
        return default if value is missing else value

    def get_method(self) -> str:
        return str(self.get_server("REQUEST_METHOD", "GET")).upper()

    def get_path_info(self, base_url: str = "/") -> str:
        """Get the requested path relative to the application's base URL.

        ``PATH_INFO`` is used when present. Otherwise the path of
        ``REQUEST_URI`` is taken, with the base URL's path stripped from its
        start. The result always starts with a slash.
        """
        path_info = self.get_server("PATH_INFO")
        if path_info:
            return "/" + str(path_info).lstrip("/")

        request_uri = self.get_server("REQUEST_URI")
        if not request_uri:
            return "/"

        path = urlsplit(str(request_uri)).path
        base_path = urlsplit(base_url).path.rstrip("/")
        if base_path and (path == base_path or path.startswith(base_path + "/")):
            path = path[len(base_path) :]
        return "/" + path.lstrip("/")

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {section: dict(values) for section, values in self._vars.items()}

    def _lookup(self, section: str, name: str, default: Any) -> Any:
        values = self._vars[section]
        if name in values:
            return values[name]
        if self._parent is not None:
            return self._parent._lookup(section, name, default)
        return default
