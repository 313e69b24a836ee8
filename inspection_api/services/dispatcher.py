"""
Per-image inference dispatch.

Each UploadItem gets exactly one remote call and exactly one outcome. Failures
are converted into ImageErrorResult values at this boundary, so one bad image
never aborts its siblings.
"""

import asyncio
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from inspection_api.clients.roboflow import (
    MalformedResponseError,
    RoboflowClient,
    remote_error_message,
)
from inspection_api.schemas.analysis import (
    Detection,
    ImageErrorResult,
    ImageResult,
    ImageSuccessResult,
    UploadItem,
)


logger = logging.getLogger(__name__)

MALFORMED_RESPONSE_MESSAGE = 'Malformed response from inference API'
GENERIC_FAILURE_MESSAGE = 'Failed to process image'


def _dimension(image: Any, key: str) -> int | None:
    # Missing, zero or non-numeric dimensions are reported as unknown
    if not isinstance(image, dict):
        return None
    value = image.get(key)
    if isinstance(value, bool) or not isinstance(value, int | float) or not value:
        return None
    return int(value)


def build_success(item: UploadItem, payload: dict[str, Any]) -> ImageSuccessResult:
    """
    Convert a provider payload into a success outcome with provenance.

    Raises:
        MalformedResponseError: predictions is not a list of objects
    """
    raw_predictions = payload.get('predictions')
    if raw_predictions is None:
        raw_predictions = []
    if not isinstance(raw_predictions, list):
        raise MalformedResponseError('predictions is not a list')

    predictions = []
    for raw in raw_predictions:
        if not isinstance(raw, dict):
            raise MalformedResponseError('prediction is not an object')
        stamped = {**raw, 'imageIndex': item.index, 'imageName': item.display_name}
        predictions.append(Detection.model_validate(stamped))

    image = payload.get('image')
    return ImageSuccessResult(
        image_index=item.index,
        image_name=item.display_name,
        predictions=predictions,
        image_width=_dimension(image, 'width'),
        image_height=_dimension(image, 'height'),
    )


class InferenceDispatcher:
    """Fans a batch of uploads out to the inference client."""

    def __init__(self, client: RoboflowClient, max_concurrency: int = 4):
        self.client = client
        self.max_concurrency = max(1, max_concurrency)

    def _failure(
        self,
        item: UploadItem,
        message: str,
        status: int | None = None,
        status_text: str | None = None,
    ) -> ImageErrorResult:
        logger.warning(f'Error processing image {item.index + 1} ({item.display_name}): {message}')
        return ImageErrorResult(
            image_index=item.index,
            image_name=item.display_name,
            error=message,
            remote_status=status,
            remote_status_text=status_text,
        )

    async def dispatch(self, item: UploadItem) -> ImageResult:
        """
        Run inference for one image. Never raises.

        Returns:
            ImageSuccessResult with stamped detections, or ImageErrorResult with a message
        """
        try:
            payload = await self.client.infer(item.content, item.display_name, item.content_type)
            return build_success(item, payload)

        except httpx.HTTPStatusError as e:
            response = e.response
            return self._failure(
                item,
                remote_error_message(response),
                status=response.status_code,
                status_text=response.reason_phrase,
            )
        except httpx.TimeoutException:
            return self._failure(
                item, f'Inference request timed out after {self.client.timeout:g}s'
            )
        except httpx.RequestError as e:
            return self._failure(item, str(e) or type(e).__name__)
        except (MalformedResponseError, ValidationError) as e:
            logger.debug(f'Malformed payload for {item.display_name}: {e}')
            return self._failure(item, MALFORMED_RESPONSE_MESSAGE)
        except Exception as e:
            logger.exception(f'Unexpected error dispatching {item.display_name}')
            return self._failure(item, str(e) or GENERIC_FAILURE_MESSAGE)

    async def dispatch_all(self, items: list[UploadItem]) -> list[ImageResult]:
        """
        Dispatch every item with at most max_concurrency calls in flight.

        Outcomes are returned in input order regardless of completion order.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def bounded(item: UploadItem) -> ImageResult:
            async with semaphore:
                return await self.dispatch(item)

        return list(await asyncio.gather(*(bounded(item) for item in items)))
