"""
Health and Monitoring Router

Provides the liveness check used by the frontend and service information.
"""

import logging
import os
from datetime import UTC, datetime

import psutil
from fastapi import APIRouter

from inspection_api.core.dependencies import SettingsDep
from inspection_api.schemas.common import HealthResponse, ServiceInfoResponse, UploadLimits


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=['Health & Monitoring'],
)


def utc_timestamp() -> str:
    """Current time as ISO-8601 with millisecond precision and a Z suffix."""
    return datetime.now(UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@router.get('/health', response_model=HealthResponse)
def health():
    """Liveness check. Does not contact the inference provider."""
    return HealthResponse(
        status='ok',
        message='Airplane Inspection API is running',
        timestamp=utc_timestamp(),
    )


@router.get('/info', response_model=ServiceInfoResponse)
def info(settings: SettingsDep):
    """
    Service information endpoint.

    Reports whether Roboflow is configured and the upload limits in force.
    The API key is never included.
    """
    configured = settings.roboflow_configured
    process = psutil.Process(os.getpid())

    return ServiceInfoResponse(
        service=settings.api_title,
        version=settings.api_version,
        roboflow_configured=configured,
        roboflow_model_id=settings.roboflow_model_id if configured else None,
        upload=UploadLimits(max_file_size_mb=settings.max_file_size_mb),
        max_concurrent_requests=settings.max_concurrent_requests,
        memory_mb=round(process.memory_info().rss / 1024 / 1024, 2),
    )
