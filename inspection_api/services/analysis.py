"""
Analysis service orchestrating one /analyze request.

Order of checks:
1. Upload validation (client errors are diagnosed first)
2. Provider configuration
3. Per-image dispatch (bounded concurrency, failures isolated per image)
4. Opt-in request-level escalation of configuration-class remote failures
5. Aggregation
"""

import logging

from inspection_api.clients.roboflow import RoboflowClient
from inspection_api.config import Settings
from inspection_api.core.exceptions import ConfigurationError, RemoteAPIError
from inspection_api.schemas.analysis import (
    AnalysisResponse,
    ImageErrorResult,
    ImageResult,
    UploadItem,
)
from inspection_api.services.aggregator import aggregate
from inspection_api.services.dispatcher import InferenceDispatcher


logger = logging.getLogger(__name__)

# Statuses that point at credentials or the model id rather than at an image
CONFIGURATION_STATUSES = frozenset({401, 403, 404})


def find_request_level_error(results: list[ImageResult]) -> RemoteAPIError | None:
    """
    Detect a broken call layer: every image rejected with the same 401/403/404.

    Returns:
        RemoteAPIError to raise, or None when failures are per-image
    """
    if not results or not all(isinstance(r, ImageErrorResult) for r in results):
        return None

    statuses = {r.remote_status for r in results}
    if len(statuses) != 1:
        return None

    status = statuses.pop()
    if status not in CONFIGURATION_STATUSES:
        return None

    first = results[0]
    return RemoteAPIError(status, first.remote_status_text, first.error)


class AnalysisService:
    """Runs validated uploads through dispatch and aggregation."""

    def __init__(self, client: RoboflowClient, settings: Settings):
        self.settings = settings
        self.dispatcher = InferenceDispatcher(client, settings.max_concurrent_requests)

    def ensure_configured(self) -> None:
        """Raise ConfigurationError when the API key or model id is missing."""
        if not self.settings.roboflow_configured:
            logger.error('Roboflow is not configured (ROBOFLOW_API_KEY / ROBOFLOW_MODEL_ID)')
            raise ConfigurationError()

    async def analyze(self, items: list[UploadItem], area: str) -> AnalysisResponse:
        """
        Analyze validated uploads.

        Args:
            items: Non-empty list of validated uploads
            area: Inspection area label

        Returns:
            AnalysisResponse with per-image results and flattened detections

        Raises:
            ConfigurationError: Provider credentials are missing
            RemoteAPIError: Escalation is enabled and every image was rejected
                for a configuration reason
        """
        self.ensure_configured()

        logger.info(f'Analyzing {len(items)} image(s) for area {area!r}')
        results = await self.dispatcher.dispatch_all(items)

        if self.settings.escalate_configuration_errors:
            error = find_request_level_error(results)
            if error is not None:
                logger.warning(
                    f'Roboflow rejected every image with {error.status_code}: {error.remote_error}'
                )
                raise error

        response = aggregate(results, area)
        failed = sum(isinstance(r, ImageErrorResult) for r in results)
        logger.info(
            f'Analysis complete: {response.image_count} image(s), '
            f'{response.total_defects} defect(s), {failed} failed'
        )
        return response
