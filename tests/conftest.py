"""Shared fixtures: settings, a Roboflow stub and an API client wired to it."""

import re
from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from inspection_api.config import Settings
from inspection_api.core.dependencies import get_http_client
from inspection_api.main import create_app


# Smallest byte strings that look like real uploads; the API never decodes them
JPEG_BYTES = b'\xff\xd8\xff\xe0\x00\x10JFIF\x00' + b'\x00' * 32 + b'\xff\xd9'
PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 32

TEST_API_KEY = 'rf_test_key_123'
TEST_MODEL_ID = 'aircraft-defects/3'

_FILENAME_RE = re.compile(rb'filename="([^"]*)"')


def make_prediction(label: str, confidence: float = 0.9, **extra) -> dict:
    """Prediction shaped like Roboflow's object detection output."""
    return {
        'x': 120.5,
        'y': 80.0,
        'width': 40.0,
        'height': 22.0,
        'confidence': confidence,
        'class': label,
        'class_id': 0,
        'detection_id': f'det-{label}',
        **extra,
    }


def roboflow_payload(*predictions: dict, width: int = 640, height: int = 480) -> dict:
    return {
        'time': 0.05,
        'image': {'width': width, 'height': height},
        'predictions': list(predictions),
    }


class RoboflowStub:
    """
    Stand-in for the Roboflow inference endpoint.

    Answers per uploaded filename; a registered exception is raised instead of
    answering. Every request is recorded.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, httpx.Response | Exception | Callable] = {}
        self.default: httpx.Response = httpx.Response(200, json=roboflow_payload())

    @staticmethod
    def filename_of(request: httpx.Request) -> str:
        match = _FILENAME_RE.search(request.content)
        return match.group(1).decode() if match else ''

    def respond(self, filename: str, response: httpx.Response | Exception | Callable) -> None:
        self.routes[filename] = response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(self.filename_of(request), self.default)

        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(request)
        return route


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        roboflow_api_key=TEST_API_KEY,
        roboflow_model_id=TEST_MODEL_ID,
        roboflow_api_url='https://detect.roboflow.test',
        static_dir=str(tmp_path / 'public'),
        max_concurrent_requests=4,
    )


@pytest.fixture
def stub() -> RoboflowStub:
    return RoboflowStub()


@pytest.fixture
def make_client(stub: RoboflowStub) -> Callable[..., TestClient]:
    """Factory for API clients whose outbound calls go to the stub."""

    def factory(app_settings: Settings, **client_kwargs) -> TestClient:
        app = create_app(app_settings)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
        app.dependency_overrides[get_http_client] = lambda: http_client
        return TestClient(app, **client_kwargs)

    return factory


@pytest.fixture
def client(make_client, settings: Settings) -> TestClient:
    return make_client(settings)
