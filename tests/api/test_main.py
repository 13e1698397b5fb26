"""Tests for the FastAPI surface used for local development."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.api.router import get_live_stream_service
from app.domain.live.stream.stream_domain import LiveStreamService
from app.domain.live.stream.stream_models import (
    LiveStreamDetailResponse,
    StartLiveStreamResponse,
)
from app.main import app, build_granian_kwargs


@pytest.fixture
def mock_service() -> AsyncMock:
    return AsyncMock(spec=LiveStreamService)


@pytest.fixture
def client(mock_service: AsyncMock):
    app.dependency_overrides[get_live_stream_service] = lambda: mock_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_start(client: TestClient, mock_service: AsyncMock):
    mock_service.start_live_stream.return_value = StartLiveStreamResponse(
        ingest_endpoint="rtmp://x", stream_key="k1"
    )

    response = client.post("/start")

    assert response.status_code == 200
    assert response.json() == {"ingest_endpoint": "rtmp://x", "stream_key": "k1"}


def test_stream_passes_query_arn(client: TestClient, mock_service: AsyncMock):
    mock_service.get_live_stream.return_value = LiveStreamDetailResponse(
        arn="a1", playback_url="https://play/a1", chat_token="tok"
    )

    response = client.get("/stream", params={"arn": "a1"})

    assert response.status_code == 200
    assert response.json()["chat_token"] == "tok"
    mock_service.get_live_stream.assert_awaited_once_with("a1")


@pytest.mark.parametrize(("method", "path"), [("GET", "/start"), ("POST", "/unknown")])
def test_unmatched_route(client: TestClient, mock_service: AsyncMock, method: str, path: str):
    response = client.request(method, path)

    assert response.status_code == 404
    assert response.text == "Not Found"
    assert mock_service.mock_calls == []


def test_granian_kwargs():
    kwargs = build_granian_kwargs()

    assert kwargs["interface"] == "asgi"
    assert isinstance(kwargs["port"], int)
