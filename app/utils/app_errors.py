"""Application error types shared by the router, domain and service layers."""

import inspect
from enum import Enum, IntEnum
from uuid import uuid4


class HttpStatusCode(IntEnum):
    OK = 200
    BAD_REQUEST = 400
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503


class AppErrorCode(str, Enum):
    E_INVALID_REQUEST = "E_INVALID_REQUEST"
    E_CHANNEL_NOT_FOUND = "E_CHANNEL_NOT_FOUND"
    E_INTERNAL_ERROR = "E_INTERNAL_ERROR"

    # Errors raised by the AWS streaming, chat and storage providers
    E_STREAM_PROVIDER_NOT_FOUND = "E_STREAM_PROVIDER_NOT_FOUND"
    E_STREAM_PROVIDER_ACCESS_DENIED = "E_STREAM_PROVIDER_ACCESS_DENIED"
    E_STREAM_PROVIDER_INVALID_ARGUMENT = "E_STREAM_PROVIDER_INVALID_ARGUMENT"
    E_STREAM_PROVIDER_CONFLICT = "E_STREAM_PROVIDER_CONFLICT"
    E_STREAM_PROVIDER_QUOTA_EXCEEDED = "E_STREAM_PROVIDER_QUOTA_EXCEEDED"
    E_STREAM_PROVIDER_THROTTLED = "E_STREAM_PROVIDER_THROTTLED"
    E_STREAM_PROVIDER_NOT_BROADCASTING = "E_STREAM_PROVIDER_NOT_BROADCASTING"
    E_STREAM_PROVIDER_UNAVAILABLE = "E_STREAM_PROVIDER_UNAVAILABLE"
    E_STREAM_PROVIDER_UNKNOWN = "E_STREAM_PROVIDER_UNKNOWN"


class AppError(Exception):
    """Typed error surfaced to the caller as an ApiFailure body.

    The call site is captured at construction so the log line points at the
    code that raised, not at the error handler.
    """

    def __init__(
        self,
        errcode: AppErrorCode | str = AppErrorCode.E_INTERNAL_ERROR,
        errmesg: str = "We are sorry, an error occurred.",
        status_code: int = HttpStatusCode.INTERNAL_SERVER_ERROR,
    ) -> None:
        self.errcode = errcode.value if isinstance(errcode, AppErrorCode) else str(errcode)
        self.errmesg = errmesg
        self.status_code = int(status_code)
        self.erresid = uuid4().hex[:10]

        caller_frame = inspect.stack()[1]
        module = inspect.getmodule(caller_frame.frame)
        module_name = (
            module.__name__ if module and getattr(module, "__name__", None) else caller_frame.filename
        )
        self.caller_info = f"{module_name}:{caller_frame.function}:{caller_frame.lineno}"

        super().__init__(f"{self.errcode}: {errmesg}")
