"""Requests executed against an application."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Self

from keystone.errors import InvalidArgumentError, RouteNotFoundError
from keystone.foundation.input import Input
from keystone.foundation.kinds import RequestKind, ResponseKind
from keystone.foundation.response import Response

if TYPE_CHECKING:
    from keystone.foundation.application import Application
    from keystone.foundation.router import RouteMatch

logger = logging.getLogger(__name__)


class Request(ABC):
    """A request for a resource of an application.

    When no Input instance is given, one is resolved from the container with
    the active request's input (or the global input) as its parent.
    """

    kind: ClassVar[RequestKind]

    def __init__(
        self,
        app: Application,
        resource: str = "",
        input: Input | Mapping[str, Any] | None = None,
    ) -> None:
        if not isinstance(resource, str):
            raise InvalidArgumentError(
                f"Request resource must be a string, got {type(resource).__name__}"
            )
        self._app = app
        self._uri = "/" + resource.lstrip("/")
        self._input = self._make_input(input)
        self._route: RouteMatch | None = None
        self._response: Response | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(uri={self._uri!r})"

    @property
    def app(self) -> Application:
        return self._app

    @property
    def uri(self) -> str:
        return self._uri

    @property
    def input(self) -> Input:
        return self._input

    @property
    def route(self) -> RouteMatch | None:
        return self._route

    def get_response(self) -> Response | None:
        return self._response

    @abstractmethod
    def execute(self) -> Self:
        """Execute the request and store its response."""
        ...

    def _make_input(self, input: Input | Mapping[str, Any] | None) -> Input:
        if isinstance(input, Input):
            return input

        active = self._app.get_active_request()
        if active is not None:
            parent = active.input
        else:
            parent = self._app.container.resolve("input.global")
        return self._app.container.resolve("input", self._app, input, parent)


class LocalRequest(Request):
    """Request handled in-process by routing to a controller.

    The request is the active request for the duration of ``execute()``,
    so requests executed by its controller nest inside it.
    """

    kind = RequestKind.LOCAL

    def execute(self) -> Self:
        """Route the request, call its controller and store the response.

        Raises:
            RouteNotFoundError: If no route matches the URI and method

        """
        self._app.set_active_request(self)
        try:
            method = self._input.get_method()
            match = self._app.router.translate(self._uri, method)
            if match is None:
                raise RouteNotFoundError(f"No route found for {method} {self._uri}")
            self._route = match

            logger.debug("Executing %s %s via route %s", method, self._uri, match.route.name)
            result = match.route.target(self, **match.parameters)
            self._response = self._make_response(result)
        finally:
            self._app.reset_active_request()
        return self

    def _make_response(self, result: Any) -> Response:
        if isinstance(result, Response):
            return result
        if isinstance(result, (dict, list)):
            kind = ResponseKind.JSON
        else:
            kind = ResponseKind.default()
        content = "" if result is None else result
        return self._app.container.resolve(kind.service_name, self._app, content)
