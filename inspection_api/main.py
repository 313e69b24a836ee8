"""
Airplane Inspection FastAPI Service

Relays inspection photos to a Roboflow detection model and aggregates the
detected defects into a single response:
- POST /analyze : one or more images -> per-image results + flattened detections
- GET  /health  : liveness check
- GET  /info    : service information

API routes are also served under API_PREFIX (default /api) for the bundled
frontend, which is served for every other GET path.

Usage:
    uvicorn inspection_api.main:app --host 0.0.0.0 --port 3000
"""

import logging
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse

from inspection_api.config import Settings, get_settings
from inspection_api.core.dependencies import HTTPClientFactory
from inspection_api.core.exceptions import InspectionAPIError
from inspection_api.routers import analysis_router, frontend_router, health_router


logging.basicConfig(
    level=get_settings().log_level.upper(),
    format='[%(asctime)s] %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Manager
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifecycle manager.

    Startup:
    - Report Roboflow configuration (requests still start so upload errors
      are diagnosed before configuration errors)
    - Open the shared outbound HTTP connection pool

    Shutdown:
    - Close the connection pool
    """
    settings = get_settings()

    logger.info('=== STARTUP: Airplane Inspection API ===')
    if settings.roboflow_configured:
        logger.info(f'Roboflow model: {settings.roboflow_model_id}')
    else:
        logger.warning(
            'Roboflow is NOT configured - set ROBOFLOW_API_KEY and ROBOFLOW_MODEL_ID in .env'
        )
    logger.info(
        f'Uploads: max {settings.max_file_size_mb}MB per image, '
        f'{settings.max_concurrent_requests} concurrent inference call(s) per request'
    )

    HTTPClientFactory.get_client()
    logger.info('=== SERVICE READY ===')

    yield

    logger.info('=== SHUTDOWN: Cleaning Up ===')
    await HTTPClientFactory.close()
    logger.info('=== SHUTDOWN COMPLETE ===')


# =============================================================================
# Exception Handlers
# =============================================================================
async def inspection_error_handler(request: Request, exc: InspectionAPIError) -> ORJSONResponse:
    """Render expected errors with their own status and body."""
    logger.warning(f'{request.method} {request.url.path} -> {exc.status_code} {exc.error}')
    return ORJSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """Catch-all for anything unanticipated."""
    logger.error(f'Unhandled error on {request.method} {request.url.path}', exc_info=exc)
    return ORJSONResponse(
        status_code=500,
        content={
            'error': 'internal server error',
            'message': str(exc) or 'An unexpected error occurred',
        },
    )


# =============================================================================
# FastAPI Application
# =============================================================================
def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use instead of the environment (tests)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
    )

    if settings is not get_settings():
        app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.middleware('http')
    async def performance_middleware(request: Request, call_next):
        """Add X-Process-Time, render unhandled errors and log slow requests."""
        start_time = time.time()

        # Unhandled errors are rendered inside the middleware stack to keep CORS and timing headers
        try:
            response = await call_next(request)
        except Exception as exc:
            response = await unhandled_error_handler(request, exc)

        duration_ms = (time.time() - start_time) * 1000
        response.headers['X-Process-Time'] = f'{duration_ms:.2f}ms'

        if duration_ms > settings.slow_request_threshold_ms:
            logger.warning(
                f'Slow request: {request.method} {request.url.path} - '
                f'{duration_ms:.2f}ms (threshold: {settings.slow_request_threshold_ms}ms)'
            )

        return response

    app.add_exception_handler(InspectionAPIError, inspection_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    for router in (health_router, analysis_router):
        app.include_router(router)
        if settings.api_prefix:
            app.include_router(router, prefix=settings.api_prefix, include_in_schema=False)

    # Catch-all GET route, must stay last
    app.include_router(frontend_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        'inspection_api.main:app',
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == '__main__':
    run()
