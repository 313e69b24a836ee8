"""Tests for response aggregation."""

from inspection_api.schemas.analysis import (
    AnalysisResponse,
    Detection,
    ImageErrorResult,
    ImageSuccessResult,
)
from inspection_api.services.aggregator import aggregate, flatten_predictions


def detection(index: int, name: str, label: str) -> Detection:
    return Detection.model_validate({'imageIndex': index, 'imageName': name, 'class': label})


def success(index: int, name: str, *labels: str) -> ImageSuccessResult:
    return ImageSuccessResult(
        image_index=index,
        image_name=name,
        predictions=[detection(index, name, label) for label in labels],
    )


def failure(index: int, name: str) -> ImageErrorResult:
    return ImageErrorResult(image_index=index, image_name=name, error='timeout')


def test_flatten_preserves_image_then_provider_order() -> None:
    results = [success(0, 'a.jpg', 'dent', 'crack'), failure(1, 'b.jpg'), success(2, 'c.jpg', 'rust')]

    flattened = flatten_predictions(results)

    assert [(d.image_index, d.model_extra['class']) for d in flattened] == [
        (0, 'dent'),
        (0, 'crack'),
        (2, 'rust'),
    ]


def test_aggregate_counts() -> None:
    results = [success(0, 'a.jpg', 'dent', 'crack'), failure(1, 'b.jpg')]

    response = aggregate(results, 'engine')

    assert isinstance(response, AnalysisResponse)
    assert response.success is True
    assert response.area == 'engine'
    assert response.image_count == 2
    assert response.total_defects == 2
    assert response.results == results


def test_aggregate_all_failed_is_still_successful() -> None:
    response = aggregate([failure(0, 'a.jpg'), failure(1, 'b.jpg')], 'unknown')

    assert response.success is True
    assert response.image_count == 2
    assert response.total_defects == 0
    assert response.predictions == []


def test_serialized_shape() -> None:
    response = aggregate([success(0, 'a.jpg', 'dent'), failure(1, 'b.jpg')], 'tail')

    body = response.model_dump(by_alias=True)

    assert set(body) == {
        'success',
        'area',
        'results',
        'predictions',
        'image_count',
        'total_defects',
    }
    assert body['results'][0]['imageName'] == 'a.jpg'
    assert body['results'][0]['image_width'] is None
    assert body['results'][1] == {
        'status': 'error',
        'imageIndex': 1,
        'imageName': 'b.jpg',
        'error': 'timeout',
        'predictions': [],
    }
    assert body['predictions'] == [{'imageIndex': 0, 'imageName': 'a.jpg', 'class': 'dent'}]
