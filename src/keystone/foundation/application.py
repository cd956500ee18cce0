"""Application base class.

Wraps an application package (a directory with its config, views and cache)
into an object that owns the application's collaborators and tracks the
stack of requests currently being executed.
"""

from __future__ import annotations

import inspect
import logging
import os
import re
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING, Any

from keystone.errors import ConfigurationError, PropertyNotFoundError
from keystone.services import ServiceContainer

if TYPE_CHECKING:
    from keystone.config import ConfigContainer
    from keystone.display import Finder, ViewManager
    from keystone.foundation.environment import Environment
    from keystone.foundation.input import Input
    from keystone.foundation.request import Request
    from keystone.foundation.router import Router
    from keystone.foundation.security import Security

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _takes_no_arguments(method: Callable[..., Any]) -> bool:
    return all(
        parameter.default is not parameter.empty
        or parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD)
        for parameter in inspect.signature(method).parameters.values()
    )


class RequestStack:
    """Last-in-first-out stack of active requests.

    Entries are requests or ``None`` markers. ``peek`` and ``pop`` return
    ``None`` on an empty stack instead of raising.
    """

    def __init__(self) -> None:
        self._requests: list[Request | None] = []

    def push(self, request: Request | None) -> None:
        self._requests.append(request)

    def peek(self) -> Request | None:
        return self._requests[-1] if self._requests else None

    def pop(self) -> Request | None:
        return self._requests.pop() if self._requests else None

    def __len__(self) -> int:
        return len(self._requests)

    def __bool__(self) -> bool:
        return bool(self._requests)

    def __iter__(self) -> Iterator[Request | None]:
        """Iterate from the outermost request to the innermost."""
        return iter(list(self._requests))


class Application:
    """A configured application instance.

    All collaborators are resolved from the service container at construction
    time and live as long as the application. Any error raised while building
    them propagates unchanged, so an Application is either fully initialised
    or not created at all.

    Example:
        ```python
        container = create_container()
        app = container.resolve("application", "demo", "/srv/demo", "Demo", "dev")
        request = app.get_request("/welcome").execute()
        print(request.get_response())
        ```

    """

    def __init__(
        self,
        container: ServiceContainer,
        name: str,
        path: str | Path,
        namespace: str,
        environment: str,
    ) -> None:
        """Bootstrap the application and its collaborators.

        Args:
            container: Service container used to resolve collaborators
            name: Name of this application
            path: Application root directory, must exist
            namespace: Base namespace for the application's code
            environment: Environment identifier (e.g. "dev", "prod")

        Raises:
            ConfigurationError: If ``path`` is not an existing directory

        """
        self._container = container
        self._name = name
        self._namespace = namespace

        # check the path before anything is resolved from the container
        if not os.path.isdir(path):
            raise ConfigurationError(f'Application path "{path}" does not exist.')
        self._path = os.path.join(os.path.realpath(path), "")

        self._requests = RequestStack()

        self._config: ConfigContainer = container.resolve("config")
        self._config.add_path(self._path)
        self._config.set_parent(container.resolve("config.global"))

        self._environment: Environment = container.resolve(
            "environment", self, environment, self._config
        )

        self._security: Security = container.resolve("security", self)

        finder: Finder = container.resolve("finder", [self._path])
        self._view: ViewManager = container.resolve(
            "view", finder, {"cache": self._path + "cache"}
        )
        self._view.register_parser(
            "j2", container.resolve("parser.jinja", finder.paths)
        )

        self._router: Router = container.resolve("router", self)

        logger.info(
            "Application '%s' bootstrapped from %s (environment: %s)",
            self._name,
            self._path,
            environment,
        )

    def __repr__(self) -> str:
        return f"Application(name={self._name!r}, path={self._path!r})"

    def get_property(self, name: str) -> Any:
        """Get a property that is available through a ``get_*`` accessor.

        Both ``view_manager`` and ``viewManager`` resolve to ``get_view_manager``.
        Only accessors callable without arguments count as properties.

        Raises:
            PropertyNotFoundError: If there is no accessor for ``name``

        """
        attribute = f"get_{_CAMEL_BOUNDARY.sub('_', name).lower()}"
        method = getattr(self, attribute, None)
        if (
            attribute != "get_property"
            and callable(method)
            and _takes_no_arguments(method)
        ):
            return method()
        raise PropertyNotFoundError(
            f'Property "{name}" not available on the application.'
        )

    @property
    def container(self) -> ServiceContainer:
        return self._container

    @property
    def config(self) -> ConfigContainer:
        return self._config

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def security(self) -> Security:
        return self._security

    @property
    def router(self) -> Router:
        return self._router

    @property
    def view_manager(self) -> ViewManager:
        return self._view

    @property
    def name(self) -> str:
        return self._name

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def path(self) -> str:
        """Absolute application root, always ending in the path separator."""
        return self._path

    @property
    def requests(self) -> RequestStack:
        return self._requests

    def get_config(self) -> ConfigContainer:
        return self._config

    def get_environment(self) -> Environment:
        return self._environment

    def get_router(self) -> Router:
        return self._router

    def get_name(self) -> str:
        return self._name

    def get_namespace(self) -> str:
        return self._namespace

    def get_path(self) -> str:
        return self._path

    def get_view_manager(self) -> ViewManager:
        return self._view

    def get_request(
        self, uri: str | None = None, input: Input | dict[str, Any] | None = None
    ) -> Request:
        """Construct a request for this application.

        The request is not made active; ``execute()`` or the caller does that.

        Args:
            uri: Requested URI; taken from the global input's path info if omitted
            input: Input for the request, an Input instance or input variables

        Returns:
            The new request

        """
        if uri is None:
            global_input: Input = self._container.resolve("input.global")
            uri = global_input.get_path_info(self._environment.base_url)

        return self._container.resolve(
            "request", self, self._security.clean_uri(uri), input
        )

    def set_active_request(self, request: Request | None) -> Application:
        """Push a request (or ``None``) onto the active request stack."""
        self._requests.push(request)
        return self

    def get_active_request(self) -> Request | None:
        """Get the innermost active request, or None if there is none."""
        return self._requests.peek()

    def reset_active_request(self) -> Application:
        """Pop the innermost active request; does nothing if the stack is empty."""
        self._requests.pop()
        return self
