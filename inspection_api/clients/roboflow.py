"""
Roboflow hosted inference client.

Thin async wrapper over a shared httpx.AsyncClient. One call uploads one image
as multipart form data; the API key and model id travel as call parameters,
never in the payload body.

Usage:
    client = RoboflowClient(http_client, settings)
    payload = await client.infer(image_bytes, 'wing.jpg', 'image/jpeg')
"""

import logging
from typing import Any

import httpx

from inspection_api.config import Settings


logger = logging.getLogger(__name__)


class MalformedResponseError(ValueError):
    """Raised when the provider answers 2xx with a body we cannot read."""


class RoboflowClient:
    """Client for a single Roboflow detection model."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings):
        self.http_client = http_client
        self.model_url = settings.roboflow_model_url
        self.timeout = settings.inference_timeout
        self._api_key = settings.roboflow_api_key

    async def infer(self, content: bytes, filename: str, content_type: str) -> dict[str, Any]:
        """
        Run detection on one image.

        Args:
            content: Raw image bytes
            filename: Filename sent with the upload
            content_type: Declared media type of the image

        Returns:
            Provider response body, e.g. {'predictions': [...], 'image': {'width', 'height'}}

        Raises:
            httpx.HTTPStatusError: Provider answered with a non-2xx status
            httpx.TimeoutException: Call exceeded the configured timeout
            httpx.RequestError: Transport-level failure
            MalformedResponseError: Body is not a JSON object
        """
        response = await self.http_client.post(
            self.model_url,
            params={'api_key': self._api_key},
            files={'file': (filename, content, content_type)},
            timeout=self.timeout,
        )
        response.raise_for_status()

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError('Invalid JSON in inference response') from e

        if not isinstance(payload, dict):
            raise MalformedResponseError(f'Expected JSON object, got {type(payload).__name__}')

        return payload


def remote_error_message(response: httpx.Response) -> str:
    """
    Best available message from a failed provider response.

    Prefers the provider's 'message' field, then 'error', then a generic description.
    """
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ('message', 'error'):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict) and isinstance(value.get('message'), str):
                return value['message']

    return f'Request failed with status code {response.status_code}'
