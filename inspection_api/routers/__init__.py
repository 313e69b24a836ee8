"""
FastAPI routers.

- analysis: multi-image upload and defect detection
- health: health checks and service info
- frontend: static frontend with SPA fallback (include last)
"""

from inspection_api.routers.analysis import router as analysis_router
from inspection_api.routers.frontend import router as frontend_router
from inspection_api.routers.health import router as health_router


__all__ = [
    'analysis_router',
    'frontend_router',
    'health_router',
]
