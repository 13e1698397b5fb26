"""AWS Lambda entry point for the Function URL in front of the live stream API."""

import asyncio
import time
import uuid
from typing import Any

from loguru import logger

from app.api.errors import exception_response
from app.api.router import dispatch
from app.api.schemas.http import HttpRequest, HttpResponse
from app.app_config import get_app_environ_config
from app.shared.api.utils import init_logger

init_logger(debug=get_app_environ_config().DEBUG)


def request_from_event(event: dict[str, Any]) -> HttpRequest:
    """Build an HttpRequest from a Function URL (payload format 2.0) event."""
    http = (event.get("requestContext") or {}).get("http") or {}
    return HttpRequest(
        method=http.get("method") or "",
        path=http.get("path") or event.get("rawPath") or "",
        query_params=event.get("queryStringParameters") or {},
    )


def response_to_result(response: HttpResponse) -> dict[str, Any]:
    return {
        "statusCode": response.status_code,
        "headers": response.headers,
        "body": response.body,
    }


async def handle_event(event: dict[str, Any]) -> HttpResponse:
    start_time = time.time()
    request = request_from_event(event)
    request_id = str(uuid.uuid4())[:8]

    logger.info(f"[{request_id}] {request.method} {request.path}")

    try:
        response = await dispatch(request)
    except Exception as exc:
        logger.error(f"[{request_id}] Unhandled exception in {request.method} {request.path}: {exc}")
        response = exception_response(exc)

    process_time = (time.time() - start_time) * 1000
    logger.info(
        f"[{request_id}] {request.method} {request.path} - "
        f"Status: {response.status_code} - "
        f"Duration: {process_time:.2f}ms"
    )
    return response


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    return response_to_result(asyncio.run(handle_event(event)))
