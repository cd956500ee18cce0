"""Service protocols for dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from keystone.services.container import ServiceContainer


class ServiceFactory[T](Protocol):
    """Protocol for callables that build a service instance.

    A factory receives the container it was resolved from as its first
    argument, followed by the service-specific constructor arguments passed
    to ``ServiceContainer.resolve()``. Arguments are bound against the
    factory's signature before it is called, so a factory should declare its
    parameters explicitly rather than accept ``*args``.

    Example:
        ```python
        def response_factory(container, app, content="", status=200, headers=None):
            return HtmlResponse(app, content, status, headers)

        container.register("response", response_factory)
        response = container.resolve("response", app, "<p>Hello</p>")
        ```

    """

    def __call__(self, container: ServiceContainer, /, *args: Any, **kwargs: Any) -> T | None:
        """Create a service instance.

        Returns:
            Service instance, or None if the service is unavailable.

        """
        ...
