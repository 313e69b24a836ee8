"""
Analysis Router

Accepts one or more inspection photos, relays each to Roboflow and returns the
aggregated detections.
"""

import logging

from fastapi import APIRouter, Request

from inspection_api.core.dependencies import AnalysisServiceDep, SettingsDep
from inspection_api.schemas.analysis import AnalysisResponse, ErrorResponse, RemoteErrorResponse
from inspection_api.services.ingress import collect_uploads, get_area, parse_form


logger = logging.getLogger(__name__)

router = APIRouter(
    tags=['Analysis'],
)

# The body is parsed manually so files are accepted under any field name
MULTIPART_BODY = {
    'requestBody': {
        'required': True,
        'content': {
            'multipart/form-data': {
                'schema': {
                    'type': 'object',
                    'properties': {
                        'images': {
                            'type': 'array',
                            'items': {'type': 'string', 'format': 'binary'},
                            'description': 'One or more images (any field name is accepted)',
                        },
                        'area': {'type': 'string', 'description': 'Inspection area label'},
                    },
                },
            },
        },
    },
}


@router.post(
    '/analyze',
    response_model=AnalysisResponse,
    responses={
        400: {'model': ErrorResponse, 'description': 'No images, invalid type or too large'},
        401: {'model': RemoteErrorResponse, 'description': 'Roboflow rejected the API key'},
        403: {'model': RemoteErrorResponse, 'description': 'Roboflow denied access to the model'},
        404: {'model': RemoteErrorResponse, 'description': 'Roboflow model not found'},
        500: {'model': ErrorResponse, 'description': 'API not configured or internal error'},
    },
    openapi_extra=MULTIPART_BODY,
)
async def analyze(request: Request, service: AnalysisServiceDep, settings: SettingsDep):
    """
    Analyze one or more images.

    Every image gets its own Roboflow call. An image whose call fails is
    reported with an error inside results while the others still return
    their detections; the response is 200 in that case.

    Returns:
        AnalysisResponse with per-image results and all detections flattened
    """
    form = await parse_form(request)
    try:
        items = await collect_uploads(form, settings.max_file_size_mb)
        return await service.analyze(items, get_area(form))
    finally:
        await form.close()
