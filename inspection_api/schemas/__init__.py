"""
Pydantic schemas for API request/response models.

Consolidated models used across all API endpoints for consistent typing.
"""

from inspection_api.schemas.analysis import (
    AnalysisResponse,
    Detection,
    ErrorResponse,
    ImageErrorResult,
    ImageResult,
    ImageSuccessResult,
    RemoteErrorResponse,
    UploadItem,
)
from inspection_api.schemas.common import HealthResponse, ServiceInfoResponse, UploadLimits


__all__ = [
    # Analysis schemas
    'AnalysisResponse',
    'Detection',
    'ErrorResponse',
    # Common schemas
    'HealthResponse',
    'ImageErrorResult',
    'ImageResult',
    'ImageSuccessResult',
    'RemoteErrorResponse',
    'ServiceInfoResponse',
    'UploadItem',
    'UploadLimits',
]
