"""
Aggregation of per-image outcomes into the /analyze response.
"""

from inspection_api.schemas.analysis import (
    AnalysisResponse,
    Detection,
    ImageResult,
    ImageSuccessResult,
)


def flatten_predictions(results: list[ImageResult]) -> list[Detection]:
    """All detections of successful images, by image order then provider order."""
    return [
        detection
        for result in results
        if isinstance(result, ImageSuccessResult)
        for detection in result.predictions
    ]


def aggregate(results: list[ImageResult], area: str) -> AnalysisResponse:
    """
    Build the response envelope.

    Failed images stay visible in results but contribute no detections.
    The response is successful even when every image failed.
    """
    predictions = flatten_predictions(results)
    return AnalysisResponse(
        success=True,
        area=area,
        results=results,
        predictions=predictions,
        image_count=len(results),
        total_defects=len(predictions),
    )
