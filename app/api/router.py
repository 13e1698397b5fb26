"""Request router: exact method + path dispatch to the live stream operations."""

from collections.abc import Awaitable, Callable

from pydantic import BaseModel

from app.api.errors import exception_response, json_response
from app.api.schemas.http import HttpRequest, HttpResponse
from app.api.schemas.stream import (
    ListLivePlaybackOut,
    ListLiveStreamsOut,
    LiveStreamOut,
    StartLiveStreamOut,
)
from app.app_config import get_app_environ_config
from app.domain.live.stream.stream_domain import LiveStreamService
from app.utils.app_errors import HttpStatusCode

Handler = Callable[[LiveStreamService, HttpRequest], Awaitable[BaseModel]]

# Singleton instance
_live_stream_service: LiveStreamService | None = None


def get_live_stream_service() -> LiveStreamService:
    """Get the singleton LiveStreamService instance."""
    global _live_stream_service
    if _live_stream_service is None:
        _live_stream_service = LiveStreamService(get_app_environ_config().stream_config())
    return _live_stream_service


def is_truthy(value: str | None) -> bool:
    return (value or "").lower().strip() in {"true", "yes", "on", "1"}


async def start_live_stream(service: LiveStreamService, request: HttpRequest) -> StartLiveStreamOut:
    result = await service.start_live_stream()
    return StartLiveStreamOut(ingest_endpoint=result.ingest_endpoint, stream_key=result.stream_key)


async def list_live_streams(
    service: LiveStreamService, request: HttpRequest
) -> ListLiveStreamsOut | ListLivePlaybackOut:
    """List channel ARNs, or playback URLs of live channels with `live=true`."""
    if is_truthy(request.query_params.get("live")):
        live = await service.list_live_playback_urls()
        return ListLivePlaybackOut(playback_urls=live.playback_urls)

    result = await service.list_live_streams()
    return ListLiveStreamsOut(arns=result.arns)


async def get_live_stream(service: LiveStreamService, request: HttpRequest) -> LiveStreamOut:
    result = await service.get_live_stream(request.query_params.get("arn"))
    return LiveStreamOut(
        arn=result.arn,
        playback_url=result.playback_url,
        chat_token=result.chat_token,
    )


ROUTES: dict[tuple[str, str], Handler] = {
    ("POST", "/start"): start_live_stream,
    ("GET", "/streams"): list_live_streams,
    ("GET", "/stream"): get_live_stream,
}


def resolve(method: str, path: str) -> Handler | None:
    return ROUTES.get((method, path))


def not_found() -> HttpResponse:
    return HttpResponse(
        status_code=int(HttpStatusCode.NOT_FOUND),
        body="Not Found",
        headers={"content-type": "text/plain; charset=utf-8"},
    )


async def dispatch(
    request: HttpRequest,
    service: LiveStreamService | None = None,
) -> HttpResponse:
    """Run the operation registered for the request and render its response.

    Unknown routes get a plain 404. Errors raised by an operation are
    returned as ApiFailure bodies, never re-raised.
    """
    handler = resolve(request.method, request.path)
    if handler is None:
        return not_found()

    if service is None:
        service = get_live_stream_service()

    try:
        result = await handler(service, request)
    except Exception as exc:
        return exception_response(exc)

    return json_response(result.model_dump())
