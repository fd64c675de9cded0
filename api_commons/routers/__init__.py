"""Common routers."""

from api_commons.routers.health import create_health_router

__all__ = ["create_health_router"]
