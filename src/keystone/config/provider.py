"""Service definitions for configuration containers."""

from keystone.config.container import ConfigContainer
from keystone.services import ServiceContainer, ServiceProvider


class ConfigServicesProvider(ServiceProvider):
    """Publishes per-application and process-wide configuration containers."""

    provides = ("config", "config.global")

    def provide(self) -> None:
        def config(
            container: ServiceContainer, environment: str | None = None
        ) -> ConfigContainer:
            return ConfigContainer(environment)

        def global_config(container: ServiceContainer) -> ConfigContainer:
            return ConfigContainer()

        self.register("config", config)
        # shared by every application in the process unless the entry point
        # replaces it with container.instance()
        self.register("config.global", global_config, "singleton")
