"""Error classes for the Keystone foundation layer.

This module provides:
- KeystoneError: Base exception class for all framework errors
- ConfigurationError: Invalid application paths, settings or provider declarations
- PropertyNotFoundError: Unknown dynamic accessor on an application
- InvalidArgumentError: Malformed service factory or constructor arguments
- ServiceError, ServiceNotFoundError, ServiceCreationError: Service container exceptions
- RouteNotFoundError: No route matches a request URI
- ViewNotFoundError: No template found for a view name
"""


class KeystoneError(Exception):
    """Base exception for all Keystone errors."""

    pass


class ConfigurationError(KeystoneError):
    """Raised when application configuration is invalid."""

    pass


class PropertyNotFoundError(KeystoneError, AttributeError):
    """Raised when a property is not available through a getter."""

    pass


class InvalidArgumentError(KeystoneError, ValueError):
    """Raised when a factory or constructor receives malformed arguments."""

    pass


class ServiceError(KeystoneError):
    """Base exception for service container errors."""

    pass


class ServiceNotFoundError(ServiceError, KeyError):
    """Raised when resolving a service name that has not been registered."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return str(self.args[0]) if self.args else ""


class ServiceCreationError(ServiceError):
    """Raised when a service factory returns no instance."""

    pass


class RouteNotFoundError(KeystoneError):
    """Raised when no route matches the requested URI."""

    pass


class ViewNotFoundError(KeystoneError):
    """Raised when no template file can be found for a view."""

    pass
