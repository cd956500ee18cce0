"""Service management and dependency injection infrastructure."""

from keystone.services.configuration import BaseServiceConfiguration
from keystone.services.container import ServiceContainer
from keystone.services.lifecycle import ServiceDescriptor
from keystone.services.protocols import ServiceFactory
from keystone.services.provider import ServiceProvider

__all__ = [
    "BaseServiceConfiguration",
    "ServiceContainer",
    "ServiceDescriptor",
    "ServiceFactory",
    "ServiceProvider",
]
