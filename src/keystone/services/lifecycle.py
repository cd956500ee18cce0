"""Service lifecycle management for dependency injection."""

from dataclasses import dataclass
from typing import Literal

from keystone.services.protocols import ServiceFactory

type ServiceLifetime = Literal["singleton", "transient"]


@dataclass(frozen=True)
class ServiceDescriptor[T]:
    """Descriptor for a named service registration.

    Attributes:
        name: The service name used to resolve the service
        factory: Callable that creates service instances
        lifetime: Service lifetime ("singleton" or "transient")

    """

    name: str
    factory: ServiceFactory[T]
    lifetime: ServiceLifetime = "transient"
