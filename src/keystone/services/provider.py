"""Base class for service providers.

A service provider declares the service names it contributes and binds a
factory to each of them when it is registered with a container.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from keystone.errors import ConfigurationError
from keystone.services.container import ServiceContainer
from keystone.services.lifecycle import ServiceDescriptor, ServiceLifetime
from keystone.services.protocols import ServiceFactory

logger = logging.getLogger(__name__)


class ServiceProvider(ABC):
    """Declares and registers a fixed set of named services.

    Subclasses list every service name they publish in ``provides`` and call
    ``register()`` once per name from ``provide()``. ``register_with()``
    checks the two agree, so a provider that forgets a declared service or
    registers an undeclared one fails at startup rather than on first use.

    Example:
        ```python
        class MailServicesProvider(ServiceProvider):
            provides = ("mailer",)

            def provide(self) -> None:
                self.register("mailer", lambda container, dsn: Mailer(dsn))

        MailServicesProvider().register_with(container)
        ```

    """

    provides: ClassVar[tuple[str, ...]] = ()

    def __init__(self) -> None:
        self._registered: dict[str, ServiceDescriptor[object]] = {}

    @abstractmethod
    def provide(self) -> None:
        """Bind a factory to every name listed in ``provides``."""
        ...

    def register[T](
        self,
        name: str,
        factory: ServiceFactory[T],
        lifetime: ServiceLifetime = "transient",
    ) -> None:
        """Record a factory for one of the provided service names.

        Raises:
            ConfigurationError: If the name is registered twice by this provider

        """
        if name in self._registered:
            raise ConfigurationError(
                f"{type(self).__name__} registers service '{name}' more than once"
            )
        self._registered[name] = ServiceDescriptor(name, factory, lifetime)

    def register_with(self, container: ServiceContainer) -> None:
        """Run ``provide()`` and register the resulting services with a container.

        Nothing is added to the container unless the registered names exactly
        match the declared ``provides`` list.

        Args:
            container: The container to register the services with

        Raises:
            ConfigurationError: If registrations and declarations differ

        """
        self._registered = {}
        self.provide()

        declared = set(self.provides)
        registered = set(self._registered)
        missing = sorted(declared - registered)
        undeclared = sorted(registered - declared)
        if missing or undeclared:
            raise ConfigurationError(
                f"{type(self).__name__} declarations do not match its registrations"
                f" (missing: {missing}, undeclared: {undeclared})"
            )

        for descriptor in self._registered.values():
            container.register(descriptor)
        logger.debug(
            "%s registered %d services", type(self).__name__, len(self._registered)
        )
