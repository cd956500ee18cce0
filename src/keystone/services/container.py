"""Service container for dependency injection."""

import inspect
import logging
from typing import Any

from keystone.errors import (
    InvalidArgumentError,
    ServiceCreationError,
    ServiceNotFoundError,
)
from keystone.services.lifecycle import ServiceDescriptor, ServiceLifetime
from keystone.services.protocols import ServiceFactory

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Name-keyed dependency injection container.

    Services are registered under a string name together with a factory and a
    lifetime. Resolving a name calls the factory with the container followed
    by the caller's constructor arguments.
    """

    def __init__(self) -> None:
        """Initialise the service container."""
        # Type safety is enforced by the factories themselves, storage is heterogeneous
        self._descriptors: dict[str, ServiceDescriptor[Any]] = {}
        self._singletons: dict[str, Any] = {}
        logger.debug("ServiceContainer initialized")

    def register[T](
        self,
        service: ServiceDescriptor[T] | str,
        factory: ServiceFactory[T] | None = None,
        lifetime: ServiceLifetime = "transient",
    ) -> None:
        """Register a service with the container.

        Accepts either a ready ``ServiceDescriptor`` or a name followed by its
        factory and lifetime. Registering a name again replaces the previous
        registration and drops any cached singleton for it.

        Args:
            service: Service descriptor, or the service name
            factory: Factory for the named service (name form only)
            lifetime: Lifetime for the named service (name form only)

        Raises:
            InvalidArgumentError: If the arguments match neither form

        """
        if isinstance(service, ServiceDescriptor):
            if factory is not None:
                raise InvalidArgumentError(
                    f"Service '{service.name}' is already described, pass no factory"
                )
            descriptor: ServiceDescriptor[Any] = service
        elif isinstance(service, str) and callable(factory):
            descriptor = ServiceDescriptor(service, factory, lifetime)
        else:
            raise InvalidArgumentError(
                "register() expects a ServiceDescriptor or a name and a factory"
            )

        self._descriptors[descriptor.name] = descriptor
        self._singletons.pop(descriptor.name, None)
        logger.debug(
            "Registered service: %s with lifetime: %s",
            descriptor.name,
            descriptor.lifetime,
        )

    def add[T](
        self,
        name: str,
        factory: ServiceFactory[T],
        lifetime: ServiceLifetime = "transient",
    ) -> None:
        """Register a factory under a name without building a descriptor first."""
        self.register(name, factory, lifetime)

    def instance(self, name: str, service: object) -> None:
        """Register an already constructed object as a singleton service.

        Args:
            name: The service name
            service: The instance returned for every resolution of ``name``

        """
        self.register(ServiceDescriptor(name, lambda container: service, "singleton"))
        self._singletons[name] = service

    def has(self, name: str) -> bool:
        """Check whether a service name has been registered."""
        return name in self._descriptors

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def names(self) -> list[str]:
        """Get all registered service names in registration order."""
        return list(self._descriptors)

    def descriptor(self, name: str) -> ServiceDescriptor[Any]:
        """Get the descriptor registered under a name.

        Raises:
            ServiceNotFoundError: If the name has not been registered

        """
        try:
            return self._descriptors[name]
        except KeyError:
            raise ServiceNotFoundError(
                f"Service '{name}' is not registered in the container"
            ) from None

    def resolve(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Get a service instance from the container.

        Args:
            name: The name of the service to retrieve
            *args: Constructor arguments passed to the factory after the container
            **kwargs: Keyword constructor arguments passed to the factory

        Returns:
            Service instance

        Raises:
            ServiceNotFoundError: If the name has not been registered
            InvalidArgumentError: If the arguments do not fit the factory signature
            ServiceCreationError: If the factory returns None

        """
        descriptor = self.descriptor(name)

        if descriptor.lifetime == "singleton" and name in self._singletons:
            logger.debug("Returning cached singleton service: %s", name)
            return self._singletons[name]

        call_args, call_kwargs = self._bind_arguments(descriptor, args, kwargs)

        logger.debug("Creating %s service: %s", descriptor.lifetime, name)
        instance = descriptor.factory(*call_args, **call_kwargs)
        if instance is None:
            logger.error("Factory for %s returned None - service unavailable", name)
            msg = f"Factory for {name} returned None - service unavailable"
            raise ServiceCreationError(msg)

        if descriptor.lifetime == "singleton":
            self._singletons[name] = instance
            logger.debug("Singleton service created and cached: %s", name)
        return instance

    def _bind_arguments(
        self,
        descriptor: ServiceDescriptor[Any],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> tuple[tuple[Any, ...], dict[str, Any]]:
        try:
            signature = inspect.signature(descriptor.factory)
        except (TypeError, ValueError):
            # No introspectable signature (some builtins), let the call decide
            return (self, *args), kwargs

        try:
            bound = signature.bind(self, *args, **kwargs)
        except TypeError as e:
            raise InvalidArgumentError(
                f"Invalid arguments for service '{descriptor.name}': {e}"
            ) from e
        return bound.args, bound.kwargs
