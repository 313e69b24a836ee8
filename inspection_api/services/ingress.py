"""
Upload validation for /analyze.

Turns a multipart form into UploadItems, rejecting the request before any
remote call is made. Files are accepted under any field name so single- and
multi-image clients can share the endpoint.
"""

import logging

from fastapi import Request
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from inspection_api.core.exceptions import (
    FileTooLargeError,
    InvalidFileTypeError,
    NoImagesError,
    UploadError,
)
from inspection_api.schemas.analysis import UploadItem


logger = logging.getLogger(__name__)

AREA_FIELD = 'area'
DEFAULT_AREA = 'unknown'


async def parse_form(request: Request) -> FormData:
    """Parse the request body, mapping parser failures to UploadError."""
    try:
        return await request.form()
    except MultiPartException as e:
        raise UploadError(e.message) from e
    except StarletteHTTPException as e:
        # Starlette wraps multipart parse errors when running inside an app
        raise UploadError(str(e.detail)) from e


def get_area(form: FormData) -> str:
    """Inspection area selected by the caller, 'unknown' when absent or blank."""
    value = form.get(AREA_FIELD)
    if isinstance(value, str) and value:
        return value
    return DEFAULT_AREA


async def collect_uploads(form: FormData, max_file_size_mb: int) -> list[UploadItem]:
    """
    Validate every file part and buffer it in memory.

    Files are checked in submission order, type before size; the first
    violation rejects the whole request.

    Args:
        form: Parsed multipart form
        max_file_size_mb: Per-file size limit in MB

    Returns:
        Non-empty list of UploadItems, indexed in submission order

    Raises:
        InvalidFileTypeError: A file's media type is not image/*
        FileTooLargeError: A file exceeds the size limit
        NoImagesError: The form contains no files
    """
    max_bytes = max_file_size_mb * 1024 * 1024
    items: list[UploadItem] = []

    for _, value in form.multi_items():
        if not isinstance(value, UploadFile):
            continue

        index = len(items)
        filename = value.filename or None
        content_type = value.content_type or ''

        if not content_type.startswith('image/'):
            logger.warning(f'Rejected upload {filename!r}: content type {content_type!r}')
            raise InvalidFileTypeError(filename or f'file_{index + 1}', content_type)

        if value.size is not None and value.size > max_bytes:
            logger.warning(f'Rejected upload {filename!r}: {value.size} bytes')
            raise FileTooLargeError(filename or f'file_{index + 1}', value.size, max_file_size_mb)

        content = await value.read()
        if len(content) > max_bytes:
            logger.warning(f'Rejected upload {filename!r}: {len(content)} bytes')
            raise FileTooLargeError(filename or f'file_{index + 1}', len(content), max_file_size_mb)

        items.append(
            UploadItem(index=index, content=content, content_type=content_type, filename=filename)
        )

    if not items:
        raise NoImagesError()

    return items
