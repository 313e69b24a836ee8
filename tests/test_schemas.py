"""Tests for the analysis models' configuration."""

import pytest
from pydantic import ValidationError

from inspection_api.schemas.analysis import (
    Detection,
    ImageErrorResult,
    ImageSuccessResult,
    RemoteErrorResponse,
    UploadItem,
)


def test_models_use_config_dict() -> None:
    models = (UploadItem, Detection, ImageSuccessResult, ImageErrorResult, RemoteErrorResponse)
    for model in models:
        assert 'Config' not in vars(model)

    assert UploadItem.model_config['frozen'] is True
    assert Detection.model_config['extra'] == 'allow'
    assert ImageSuccessResult.model_config['populate_by_name'] is True


def test_upload_item_is_immutable() -> None:
    item = UploadItem(index=0, content=b'\xff\xd8', content_type='image/jpeg')

    with pytest.raises(ValidationError):
        item.index = 1


def test_detection_accepts_provenance_by_alias_only() -> None:
    with pytest.raises(ValidationError):
        Detection.model_validate({'image_index': 0, 'image_name': 'wing.jpg'})

    detection = Detection.model_validate(
        {'imageIndex': 0, 'imageName': 'wing.jpg', 'class': 'dent'}
    )

    assert detection.image_index == 0
    assert detection.model_extra == {'class': 'dent'}


def test_result_models_accept_field_names() -> None:
    result = ImageErrorResult(image_index=3, image_name='tail.jpg', error='timeout')

    assert result.model_dump(by_alias=True)['imageIndex'] == 3
    assert RemoteErrorResponse(
        error='remote api error', message='m', status=403, status_text='Forbidden', remote_error='x'
    ).model_dump(by_alias=True)['statusText'] == 'Forbidden'
