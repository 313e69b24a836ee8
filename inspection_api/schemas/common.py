"""
Common Pydantic models used across multiple endpoints.

Health checks and service info responses.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness check response."""

    status: str = Field(default='ok', description='Service health status')
    message: str = Field(..., description='Human-readable status message')
    timestamp: str = Field(..., description='Server time, ISO-8601')


class UploadLimits(BaseModel):
    """Upload constraints enforced by /analyze."""

    max_file_size_mb: int
    accepted_types: str = 'image/*'


class ServiceInfoResponse(BaseModel):
    """Service information response."""

    service: str
    version: str
    status: str = Field(default='running')
    roboflow_configured: bool = Field(..., description='Whether API key and model id are set')
    roboflow_model_id: str | None = Field(None, description='Configured model id (project/version)')
    upload: UploadLimits
    max_concurrent_requests: int
    memory_mb: float = Field(..., description='Resident memory of the API process')
