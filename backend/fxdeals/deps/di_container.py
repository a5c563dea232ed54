"""
Dependency injection container using dependency-injector.
Wires the process-wide services and controllers.
"""

from typing import Optional

from dependency_injector import containers, providers

from fxdeals.controllers.health_controller import HealthController
from fxdeals.services.health_service import HealthService
from fxdeals.services.validation_service import ValidationService


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Services
    health_service = providers.Singleton(
        HealthService,
    )

    # Stateless, shared by every request-scoped FxDealService
    validation_service = providers.Singleton(
        ValidationService,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Install the container built at application startup."""
    global _container
    _container = container
