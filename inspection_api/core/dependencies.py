"""
FastAPI dependency injection for shared resources.

Uses FastAPI's Depends() pattern for proper lifecycle management.
The outbound HTTP connection pool is created once and reused across requests.
"""

import logging
from typing import Annotated

import httpx
from fastapi import Depends

from inspection_api.clients.roboflow import RoboflowClient
from inspection_api.config.settings import Settings, get_settings
from inspection_api.services.analysis import AnalysisService


logger = logging.getLogger(__name__)


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================
SettingsDep = Annotated[Settings, Depends(get_settings)]


# =============================================================================
# Application State (managed by lifespan context)
# =============================================================================
class AppState:
    """
    Application state container for shared resources.

    Resources are initialized in lifespan and accessed via dependencies.
    """

    def __init__(self):
        self._http_client: httpx.AsyncClient | None = None


# Global app state - initialized in lifespan
app_state = AppState()


# =============================================================================
# HTTP Client Factory
# =============================================================================
class HTTPClientFactory:
    """Factory for the shared outbound httpx client (lazy initialization)."""

    @staticmethod
    def get_client() -> httpx.AsyncClient:
        """Get the shared client, creating it on first use."""
        if app_state._http_client is None:
            settings = get_settings()
            logger.info('Initializing outbound HTTP client...')
            app_state._http_client = httpx.AsyncClient(
                timeout=settings.inference_timeout,
                limits=httpx.Limits(max_connections=settings.max_concurrent_requests * 4),
            )
        return app_state._http_client

    @staticmethod
    async def close() -> None:
        """Close the shared client."""
        if app_state._http_client is not None:
            await app_state._http_client.aclose()
            app_state._http_client = None
            logger.info('Outbound HTTP client closed')


# =============================================================================
# FastAPI Dependencies (use with Depends())
# =============================================================================
def get_http_client() -> httpx.AsyncClient:
    """Dependency for the shared httpx client."""
    return HTTPClientFactory.get_client()


HTTPClientDep = Annotated[httpx.AsyncClient, Depends(get_http_client)]


def get_roboflow_client(http_client: HTTPClientDep, settings: SettingsDep) -> RoboflowClient:
    """Dependency for the Roboflow client bound to the configured model."""
    return RoboflowClient(http_client, settings)


RoboflowClientDep = Annotated[RoboflowClient, Depends(get_roboflow_client)]


def get_analysis_service(client: RoboflowClientDep, settings: SettingsDep) -> AnalysisService:
    """Dependency for the per-request analysis service."""
    return AnalysisService(client, settings)


AnalysisServiceDep = Annotated[AnalysisService, Depends(get_analysis_service)]
