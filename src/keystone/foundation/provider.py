"""Service definitions published by the foundation package."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from keystone.config import ConfigContainer
from keystone.errors import InvalidArgumentError
from keystone.foundation.application import Application
from keystone.foundation.environment import Environment
from keystone.foundation.input import Input
from keystone.foundation.kinds import RequestKind, ResponseKind
from keystone.foundation.request import LocalRequest, Request
from keystone.foundation.response import HtmlResponse, JsonResponse, Response
from keystone.foundation.router import Router
from keystone.foundation.security import Security
from keystone.services import ServiceContainer, ServiceFactory, ServiceProvider

RESPONSE_CLASSES: dict[ResponseKind, type[Response]] = {
    ResponseKind.HTML: HtmlResponse,
    ResponseKind.JSON: JsonResponse,
}

REQUEST_CLASSES: dict[RequestKind, type[Request]] = {
    RequestKind.LOCAL: LocalRequest,
}


def _require_application(app: Any, service: str) -> None:
    if not isinstance(app, Application):
        raise InvalidArgumentError(
            f"Service '{service}' requires an Application, got {type(app).__name__}"
        )


def _require_string(value: Any, argument: str, service: str) -> None:
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"Argument '{argument}' of service '{service}' must be a string,"
            f" got {type(value).__name__}"
        )


def response_factory(kind: ResponseKind) -> ServiceFactory[Response]:
    """Build the factory for one response variant."""
    response_class = RESPONSE_CLASSES[kind]

    def factory(
        container: ServiceContainer,
        app: Application,
        content: Any = "",
        status: int = 200,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        _require_application(app, kind.service_name)
        return response_class(app, content, status, headers)

    return factory


def request_factory(kind: RequestKind) -> ServiceFactory[Request]:
    """Build the factory for one request variant."""
    request_class = REQUEST_CLASSES[kind]

    def factory(
        container: ServiceContainer,
        app: Application,
        resource: str = "",
        input: Input | Mapping[str, Any] | None = None,
    ) -> Request:
        _require_application(app, kind.service_name)
        return request_class(app, resource, input)

    return factory


class ServicesProvider(ServiceProvider):
    """Defines the services published by the foundation package.

    ``response`` and ``request`` resolve to the default variant of
    :class:`ResponseKind` and :class:`RequestKind`; the suffixed names select
    a variant explicitly.
    """

    provides = (
        "application",
        "environment",
        "input",
        "log",
        "response",
        "response.html",
        "response.json",
        "request",
        "request.local",
    )

    def provide(self) -> None:
        def application(
            container: ServiceContainer,
            name: str,
            path: str | Path,
            namespace: str,
            environment: str,
        ) -> Application:
            _require_string(name, "name", "application")
            _require_string(namespace, "namespace", "application")
            _require_string(environment, "environment", "application")
            if not isinstance(path, (str, Path)):
                raise InvalidArgumentError(
                    f"Application path must be a str or Path, got {type(path).__name__}"
                )
            return Application(container, name, path, namespace, environment)

        def environment(
            container: ServiceContainer,
            app: Application,
            environment: str,
            config: ConfigContainer,
        ) -> Environment:
            _require_application(app, "environment")
            if not isinstance(config, ConfigContainer):
                raise InvalidArgumentError(
                    f"Environment requires a ConfigContainer, got {type(config).__name__}"
                )
            return Environment(app, environment, config)

        def input(
            container: ServiceContainer,
            app: Application | None,
            input_vars: Mapping[str, Mapping[str, Any]] | None = None,
            parent: Input | None = None,
        ) -> Input:
            if app is not None:
                _require_application(app, "input")
            return Input(app, input_vars, parent)

        def log(container: ServiceContainer, name: str) -> logging.Logger:
            _require_string(name, "name", "log")
            return logging.getLogger(name)

        self.register("application", application)
        self.register("environment", environment)
        self.register("input", input)
        self.register("log", log)

        self.register("response", response_factory(ResponseKind.default()))
        for response_kind in ResponseKind:
            self.register(response_kind.service_name, response_factory(response_kind))

        self.register("request", request_factory(RequestKind.default()))
        for request_kind in RequestKind:
            self.register(request_kind.service_name, request_factory(request_kind))


class CollaboratorsProvider(ServiceProvider):
    """Publishes the per-application collaborators and the global input.

    ``input.global`` defaults to the process environment; entry points
    replace it with ``container.instance()`` to supply their own input.
    """

    provides = ("security", "router", "input.global")

    def provide(self) -> None:
        def security(container: ServiceContainer, app: Application) -> Security:
            _require_application(app, "security")
            return Security(app)

        def router(container: ServiceContainer, app: Application) -> Router:
            _require_application(app, "router")
            return Router(app)

        def global_input(container: ServiceContainer) -> Input:
            return Input.from_environ(os.environ)

        self.register("security", security)
        self.register("router", router)
        self.register("input.global", global_input, "singleton")
