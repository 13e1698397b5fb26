"""Tests for the Lambda Function URL entry point."""

from unittest.mock import AsyncMock

import orjson
import pytest

import app.api.router as router_mod
from app.domain.live.stream.stream_domain import LiveStreamService
from app.domain.live.stream.stream_models import LiveStreamListResponse, StartLiveStreamResponse
from app.lambda_handler import handler, request_from_event


def _event(method: str, path: str, query: dict | None = None) -> dict:
    event = {
        "version": "2.0",
        "rawPath": path,
        "requestContext": {"http": {"method": method, "path": path}},
    }
    if query is not None:
        event["queryStringParameters"] = query
    return event


@pytest.fixture
def mock_service(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    service = AsyncMock(spec=LiveStreamService)
    monkeypatch.setattr(router_mod, "_live_stream_service", service)
    return service


def test_request_from_event():
    request = request_from_event(_event("GET", "/stream", {"arn": "a1"}))

    assert request.method == "GET"
    assert request.path == "/stream"
    assert request.query_params == {"arn": "a1"}


def test_request_from_event_falls_back_to_raw_path():
    request = request_from_event(
        {"rawPath": "/streams", "requestContext": {"http": {"method": "GET"}}}
    )

    assert request.path == "/streams"
    assert request.query_params == {}


def test_start(mock_service):
    mock_service.start_live_stream.return_value = StartLiveStreamResponse(
        ingest_endpoint="rtmp://x", stream_key="k1"
    )

    result = handler(_event("POST", "/start"), None)

    assert result["statusCode"] == 200
    assert orjson.loads(result["body"]) == {"ingest_endpoint": "rtmp://x", "stream_key": "k1"}
    assert result["headers"]["content-type"] == "application/json"


def test_streams(mock_service):
    mock_service.list_live_streams.return_value = LiveStreamListResponse(arns=["a1"])

    result = handler(_event("GET", "/streams"), None)

    assert result["statusCode"] == 200
    assert orjson.loads(result["body"]) == {"arns": ["a1"]}


def test_not_found(mock_service):
    result = handler(_event("PATCH", "/start"), None)

    assert result["statusCode"] == 404
    assert result["body"] == "Not Found"
    assert mock_service.mock_calls == []


def test_error_is_returned_not_raised(mock_service):
    mock_service.start_live_stream.side_effect = RuntimeError("boom")

    result = handler(_event("POST", "/start"), None)

    assert result["statusCode"] == 500
    assert orjson.loads(result["body"])["errcode"] == "E_INTERNAL_ERROR"
