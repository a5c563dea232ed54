"""
Health controller.
Coordinates health service to return health status.
"""

from typing import Optional

from fxdeals.schemas.common import HealthResponse
from fxdeals.services.health_service import HealthService


class HealthController:
    """Controller for health check operations."""

    def __init__(self, health_service: Optional[HealthService] = None):
        self.health_service = health_service or HealthService()

    async def get_health(self) -> HealthResponse:
        return await self.health_service.get_health()
