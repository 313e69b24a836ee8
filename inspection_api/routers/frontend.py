"""
Frontend Router

Serves the static inspection frontend. Unknown paths fall back to index.html
so client-side routing works. Must be included last.
"""

import logging
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse, ORJSONResponse

from inspection_api.core.dependencies import SettingsDep


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=['Frontend'],
    include_in_schema=False,
)


def resolve_static_file(static_dir: Path, requested: str) -> Path | None:
    """
    Map a request path to a file inside static_dir.

    Returns the requested file when it exists inside the directory, otherwise
    index.html when present, otherwise None.
    """
    root = static_dir.resolve()

    if requested:
        candidate = (root / requested).resolve()
        if candidate.is_relative_to(root) and candidate.is_file():
            return candidate

    index = root / 'index.html'
    return index if index.is_file() else None


@router.get('/{full_path:path}')
def serve_frontend(full_path: str, settings: SettingsDep):
    """Serve a static asset or the SPA entry document."""
    path = resolve_static_file(Path(settings.static_dir), full_path)
    if path is None:
        logger.debug(f'Frontend not found for /{full_path} in {settings.static_dir}')
        return ORJSONResponse(
            status_code=404,
            content={'error': 'not found', 'message': 'Frontend is not installed'},
        )
    return FileResponse(path)
