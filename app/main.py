import time
import traceback
import uuid
from contextlib import asynccontextmanager
from os import environ

import logfire
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from granian import Granian
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from app.api.router import ROUTES, dispatch, get_live_stream_service
from app.api.schemas.http import HttpRequest
from app.domain.live.stream.stream_domain import LiveStreamService
from app.app_config import get_app_environ_config
from app.shared.api.utils import api_failure, init_logger
from app.utils.app_errors import AppErrorCode

HTTP_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

app_config = get_app_environ_config()


class HTTPLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):  # type: ignore
        start_time = time.time()
        request_id = str(uuid.uuid4())[:8]

        logger.info(f"[{request_id}] {request.method} {request.url.path}")

        try:
            response = await call_next(request)

            process_time = (time.time() - start_time) * 1000

            logger.info(
                f"[{request_id}] {request.method} {request.url.path} - "
                f"Status: {response.status_code} - "
                f"Duration: {process_time:.2f}ms"
            )

            return response

        except Exception as exc:
            process_time = (time.time() - start_time) * 1000

            logger.error(
                f"[{request_id}] Unhandled exception in {request.method} {request.url.path} - "
                f"Duration: {process_time:.2f}ms - "
                f"Error: {type(exc).__name__}: {exc}\n"
                f"Traceback:\n{traceback.format_exc()}"
            )

            failure = api_failure(
                errcode=AppErrorCode.E_INTERNAL_ERROR.value,
                errmesg=f"Internal server error (request_id: {request_id})",
            )
            return ORJSONResponse(
                status_code=500,
                content=failure.model_dump(),
            )


@asynccontextmanager
async def lifespan(server: FastAPI):
    init_logger(debug=app_config.DEBUG)

    logger.info("Application startup...")

    for method, path in ROUTES:
        logger.info("Loaded route: {:<12} {}", method, path)

    if (environ.get("LOGFIRE_ENABLE") or "").lower() == "true":
        logger.info("Logfire initializing")

        logfire.configure(
            token=environ.get("LOGFIRE_TOKEN"),
            service_name="ivs-live-stream",
            service_version=environ.get("BUILD_COMMIT") or "dev",
        )
        logfire.instrument_fastapi(server, capture_headers=True)

    yield

    logger.info("Application shutdown...")


app = FastAPI(
    version="1.0",
    title="IVS Live Stream API",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

app.add_middleware(HTTPLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,  # type: ignore
    allow_origins=app_config.API_CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


@app.api_route("/{full_path:path}", methods=HTTP_METHODS, include_in_schema=False)
async def forward(
    request: Request,
    service: LiveStreamService = Depends(get_live_stream_service),
) -> Response:
    """Hand every request to the same dispatcher the Lambda entry point uses."""
    http_request = HttpRequest(
        method=request.method,
        path=request.url.path,
        query_params=dict(request.query_params),
    )
    result = await dispatch(http_request, service)
    return Response(
        content=result.body,
        status_code=result.status_code,
        headers=result.headers,
    )


def build_granian_kwargs():
    kwargs = {
        "interface": "asgi",
        "address": app_config.API_HOST,
        "port": app_config.API_PORT,
        "workers": app_config.API_WORKERS,
        "reload": app_config.DEBUG,
    }

    return kwargs


if __name__ == "__main__":
    granian_kwargs = build_granian_kwargs()
    Granian("app.main:app", **granian_kwargs).serve()
