"""
Centralized configuration using Pydantic Settings.

All configuration is loaded from environment variables (or a local .env file)
with sensible defaults. Use get_settings() to access the singleton settings instance.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


# Placeholder values shipped in .env.example; treated as "not configured"
API_KEY_PLACEHOLDER = 'YOUR_KEY_HERE'
MODEL_ID_PLACEHOLDER = 'YOUR_MODEL_ID_HERE'


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables.
    Example: ROBOFLOW_MODEL_ID=aircraft-defects/3 MAX_CONCURRENT_REQUESTS=8 inspection-api
    """

    # ==========================================================================
    # Roboflow Configuration
    # ==========================================================================
    roboflow_api_key: str = Field(
        default=API_KEY_PLACEHOLDER, description='Roboflow API key (never returned by the API)'
    )

    roboflow_model_id: str = Field(
        default=MODEL_ID_PLACEHOLDER, description='Roboflow model identifier: project/version'
    )

    roboflow_api_url: str = Field(
        default='https://detect.roboflow.com', description='Roboflow hosted inference base URL'
    )

    inference_timeout: float = Field(
        default=30.0, gt=0, description='Timeout for a single inference call in seconds'
    )

    max_concurrent_requests: int = Field(
        default=4, ge=1, le=16, description='Per-request cap on concurrent inference calls'
    )

    escalate_configuration_errors: bool = Field(
        default=False,
        description='Opt-in: fail the whole request when every image is rejected with 401/403/404',
    )

    # ==========================================================================
    # Upload Configuration
    # ==========================================================================
    max_file_size_mb: int = Field(default=10, ge=1, description='Maximum upload file size in MB')

    # ==========================================================================
    # HTTP Configuration
    # ==========================================================================
    api_prefix: str = Field(default='/api', description='Prefix the frontend uses for API routes')

    static_dir: str = Field(default='frontend/public', description='Static frontend directory')

    cors_origins: list[str] = Field(default=['*'], description='Allowed CORS origins')

    slow_request_threshold_ms: int = Field(
        default=5000, description='Log requests slower than this threshold'
    )

    host: str = Field(default='0.0.0.0', description='Bind address for the CLI server')

    port: int = Field(default=3000, description='Bind port for the CLI server')

    log_level: str = Field(default='INFO', description='Root log level')

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_title: str = Field(default='Airplane Inspection API', description='API title for OpenAPI docs')

    api_description: str = Field(
        default='Relays inspection photos to Roboflow and aggregates detected defects',
        description='API description for OpenAPI docs',
    )

    api_version: str = Field(default='1.0.0', description='API version')

    # ==========================================================================
    # Computed Properties
    # ==========================================================================
    @property
    def max_file_size_bytes(self) -> int:
        """Maximum file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def roboflow_configured(self) -> bool:
        """True when both the key and the model id are set to real values."""
        return bool(
            self.roboflow_api_key
            and self.roboflow_model_id
            and self.roboflow_api_key != API_KEY_PLACEHOLDER
            and self.roboflow_model_id != MODEL_ID_PLACEHOLDER
        )

    @property
    def roboflow_model_url(self) -> str:
        """Inference endpoint for the configured model."""
        return f"{self.roboflow_api_url.rstrip('/')}/{self.roboflow_model_id.strip('/')}"

    class Config:
        env_prefix = ''  # No prefix for env vars
        env_file = '.env'
        case_sensitive = False
        extra = 'ignore'


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance (singleton pattern).

    Returns:
        Settings: Application settings
    """
    return Settings()
