"""
Custom exceptions for the inspection API.

Every exception carries the HTTP status code and JSON body it is rendered with
by the handlers registered in inspection_api.main.
"""

from typing import Any


class InspectionAPIError(Exception):
    """Base exception for errors reported to the caller as a JSON body."""

    status_code: int = 500
    error: str = 'internal server error'

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {'error': self.error, 'message': self.message}


# =============================================================================
# Client input errors (400)
# =============================================================================
class ClientInputError(InspectionAPIError):
    """Raised when the upload itself is unusable. Fixable by the caller."""

    status_code = 400
    error = 'upload error'


class NoImagesError(ClientInputError):
    """Raised when the request contains no file parts."""

    error = 'no images provided'

    def __init__(self):
        super().__init__('Please upload at least one image file')


class InvalidFileTypeError(ClientInputError):
    """Raised when a file's declared media type is not image/*."""

    error = 'invalid file type'

    def __init__(self, filename: str, content_type: str | None):
        self.filename = filename
        self.content_type = content_type
        super().__init__('Only image files are allowed')


class FileTooLargeError(ClientInputError):
    """Raised when a single file exceeds the configured size limit."""

    error = 'file too large'

    def __init__(self, filename: str, size: int, max_size_mb: int):
        self.filename = filename
        self.size = size
        self.max_size_mb = max_size_mb
        super().__init__(f'Image must be less than {max_size_mb}MB')


class UploadError(ClientInputError):
    """Raised when the multipart body cannot be parsed."""


# =============================================================================
# Server-side errors
# =============================================================================
class ConfigurationError(InspectionAPIError):
    """Raised when the inference provider credentials are missing."""

    status_code = 500
    error = 'api not configured'

    def __init__(
        self,
        message: str = 'Please set ROBOFLOW_API_KEY and ROBOFLOW_MODEL_ID in your .env file',
    ):
        super().__init__(message)


class RemoteAPIError(InspectionAPIError):
    """
    Raised when the call layer itself is broken for the whole request.

    The message is translated into configuration guidance; the provider's
    own message is kept verbatim in remote_error.
    """

    error = 'remote api error'

    def __init__(self, status: int, status_text: str | None, remote_error: str):
        self.status_code = status
        self.status_text = status_text or 'Unknown error'
        self.remote_error = remote_error
        super().__init__(translate_remote_error(status, remote_error))

    def to_dict(self) -> dict[str, Any]:
        return {
            'error': self.error,
            'message': self.message,
            'status': self.status_code,
            'statusText': self.status_text,
            'remoteError': self.remote_error,
        }


def translate_remote_error(status: int, message: str) -> str:
    """
    Map a failed remote call to a message that guides configuration fixes.

    Args:
        status: HTTP status returned by the inference provider
        message: Message reported by the provider

    Returns:
        User-facing message; unknown statuses pass the provider message through
    """
    if status == 401:
        return 'Unauthorized. Check your Roboflow API key in .env file.'

    if status == 403:
        return (
            'Access forbidden. Possible issues:\n'
            '1. Invalid API key - Check your Roboflow API key in .env file\n'
            "2. API key doesn't have permission for this model\n"
            '3. Model ID might be incorrect - Format should be: project-name/version-number\n'
            '4. Model might not be deployed or public\n\n'
            f'Error details: {message}'
        )

    if status == 404:
        return 'Model not found. Check your MODEL_ID in .env file. Format: project-name/version-number'

    return message
