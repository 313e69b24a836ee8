"""
Analysis-related Pydantic models.

Request-scoped value objects for the upload -> inference -> aggregation pipeline.
Field aliases keep the JSON contract the inspection frontend consumes
(imageIndex, imageName) while the Python side stays snake_case.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class UploadItem(BaseModel):
    """One submitted file, buffered in memory."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=0, description='Position in the batch (submission order)')
    content: bytes = Field(..., repr=False, description='Raw file bytes')
    content_type: str = Field(..., description='Declared media type')
    filename: str | None = Field(None, description='Original filename, if the client sent one')

    @property
    def display_name(self) -> str:
        """Filename used for provenance and the outbound upload."""
        return self.filename or f'image_{self.index + 1}.jpg'


class Detection(BaseModel):
    """
    One predicted defect as returned by the provider, plus provenance.

    Provider fields (class, confidence, x, y, width, height, ...) are kept
    verbatim as extra fields.
    """

    # Validated by alias only: a provider image_index or image_name stays an extra field
    model_config = ConfigDict(extra='allow')

    image_index: int = Field(..., alias='imageIndex', description='Index of the source image')
    image_name: str = Field(..., alias='imageName', description='Name of the source image')


class ImageSuccessResult(BaseModel):
    """Per-image result when the inference call succeeded."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal['success'] = 'success'
    image_index: int = Field(..., alias='imageIndex')
    image_name: str = Field(..., alias='imageName')
    predictions: list[Detection] = Field(default_factory=list)
    image_width: int | None = Field(None, description='Source image width, if reported')
    image_height: int | None = Field(None, description='Source image height, if reported')


class ImageErrorResult(BaseModel):
    """Per-image result when the inference call failed. Never carries detections."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal['error'] = 'error'
    image_index: int = Field(..., alias='imageIndex')
    image_name: str = Field(..., alias='imageName')
    error: str = Field(..., description='Why this image could not be analyzed')
    predictions: list[Detection] = Field(default_factory=list)

    # Kept for request-level escalation, never serialized
    remote_status: int | None = Field(None, exclude=True)
    remote_status_text: str | None = Field(None, exclude=True)


ImageResult = Annotated[ImageSuccessResult | ImageErrorResult, Field(discriminator='status')]


class AnalysisResponse(BaseModel):
    """Aggregated reply for one /analyze request."""

    success: bool = Field(default=True, description='True once every image was dispatched')
    area: str = Field(default='unknown', description='Inspection area selected by the caller')
    results: list[ImageResult] = Field(default_factory=list, description='Per-image results')
    predictions: list[Detection] = Field(
        default_factory=list, description='All detections across images, in image order'
    )
    image_count: int = Field(default=0, description='Number of images processed')
    total_defects: int = Field(default=0, description='Number of detections across all images')


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
    message: str


class RemoteErrorResponse(ErrorResponse):
    """Body returned when the inference provider rejects the whole request."""

    model_config = ConfigDict(populate_by_name=True)

    status: int
    status_text: str = Field(..., alias='statusText')
    remote_error: str = Field(..., alias='remoteError')
