"""Keystone - application foundation layer.

This package provides a name-keyed service container, the application
bootstrap that wires configuration, environment, security, views and routing
together, and the request/response lifecycle built on top of it.
"""

__version__ = "0.1.0"

from keystone.bootstrap import create_container
from keystone.errors import (
    ConfigurationError,
    InvalidArgumentError,
    KeystoneError,
    PropertyNotFoundError,
    RouteNotFoundError,
    ServiceCreationError,
    ServiceError,
    ServiceNotFoundError,
    ViewNotFoundError,
)
from keystone.foundation import Application, RequestStack, ServicesProvider
from keystone.services import ServiceContainer, ServiceDescriptor, ServiceProvider

__all__ = [
    # Version
    "__version__",
    # Bootstrap
    "Application",
    "RequestStack",
    "create_container",
    # Dependency Injection
    "ServiceContainer",
    "ServiceDescriptor",
    "ServiceProvider",
    "ServicesProvider",
    # Errors
    "KeystoneError",
    "ConfigurationError",
    "InvalidArgumentError",
    "PropertyNotFoundError",
    "RouteNotFoundError",
    "ServiceCreationError",
    "ServiceError",
    "ServiceNotFoundError",
    "ViewNotFoundError",
]
