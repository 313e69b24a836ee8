"""
Service layer containing business logic.

Separates business logic from API routes for cleaner architecture.
"""

from inspection_api.services.aggregator import aggregate, flatten_predictions
from inspection_api.services.analysis import AnalysisService, find_request_level_error
from inspection_api.services.dispatcher import InferenceDispatcher, build_success
from inspection_api.services.ingress import collect_uploads, get_area, parse_form


__all__ = [
    'AnalysisService',
    'InferenceDispatcher',
    'aggregate',
    'build_success',
    'collect_uploads',
    'find_request_level_error',
    'flatten_predictions',
    'get_area',
    'parse_form',
]
