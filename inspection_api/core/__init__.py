"""
Core module with shared dependencies and exception handling.

Provides custom exceptions. FastAPI dependencies live in
inspection_api.core.dependencies; import them from there directly, since they
depend on the service layer, which depends on these exceptions.
"""

from inspection_api.core.exceptions import (
    ClientInputError,
    ConfigurationError,
    FileTooLargeError,
    InspectionAPIError,
    InvalidFileTypeError,
    NoImagesError,
    RemoteAPIError,
    UploadError,
    translate_remote_error,
)


__all__ = [
    'ClientInputError',
    'ConfigurationError',
    'FileTooLargeError',
    'InspectionAPIError',
    'InvalidFileTypeError',
    'NoImagesError',
    'RemoteAPIError',
    'UploadError',
    'translate_remote_error',
]
