"""Container bootstrap for processes that host Keystone applications.

The process entry point owns the objects shared by every application: the
global configuration container and the global request input. Both are
registered in the container as singletons instead of being reached through
module-level state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from keystone.config import ConfigContainer, ConfigServicesProvider
from keystone.display import DisplayServicesProvider
from keystone.foundation import CollaboratorsProvider, Input, ServicesProvider
from keystone.services import ServiceContainer, ServiceProvider

logger = logging.getLogger(__name__)

DEFAULT_PROVIDERS: tuple[type[ServiceProvider], ...] = (
    ConfigServicesProvider,
    DisplayServicesProvider,
    CollaboratorsProvider,
    ServicesProvider,
)


def create_container(
    global_config: ConfigContainer | None = None,
    global_input: Input | None = None,
    providers: Iterable[type[ServiceProvider]] = DEFAULT_PROVIDERS,
) -> ServiceContainer:
    """Create a container with every provider registered.

    Args:
        global_config: Process-wide configuration, parent of every app's config
        global_input: Input of the request being served by this process
        providers: Provider classes to register, in order

    Returns:
        Configured service container

    Raises:
        ConfigurationError: If a provider's declarations and registrations differ

    """
    container = ServiceContainer()
    for provider_class in providers:
        provider_class().register_with(container)

    if global_config is not None:
        container.instance("config.global", global_config)
    if global_input is not None:
        container.instance("input.global", global_input)

    logger.debug("Container created with %d services", len(container.names()))
    return container
