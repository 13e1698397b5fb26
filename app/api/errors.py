import orjson
from botocore.exceptions import BotoCoreError, ClientError
from loguru import logger

from app.api.schemas.http import HttpResponse
from app.shared.api.utils import ApiFailure, api_failure
from app.utils.app_errors import AppError, AppErrorCode, HttpStatusCode

JSON_HEADERS = {"content-type": "application/json"}

# Mapping from AWS error codes to AppErrorCode and the status returned to the caller.
# Failures of our own dependencies (permissions, missing table, bad request
# built by us) are upstream faults, not caller errors.
_AWS_TO_APP_ERROR_MAP = {
    "ResourceNotFoundException": (AppErrorCode.E_STREAM_PROVIDER_NOT_FOUND, HttpStatusCode.BAD_GATEWAY),
    "AccessDeniedException": (AppErrorCode.E_STREAM_PROVIDER_ACCESS_DENIED, HttpStatusCode.BAD_GATEWAY),
    "UnrecognizedClientException": (AppErrorCode.E_STREAM_PROVIDER_ACCESS_DENIED, HttpStatusCode.BAD_GATEWAY),
    "ValidationException": (AppErrorCode.E_STREAM_PROVIDER_INVALID_ARGUMENT, HttpStatusCode.BAD_GATEWAY),
    "ConflictException": (AppErrorCode.E_STREAM_PROVIDER_CONFLICT, HttpStatusCode.BAD_GATEWAY),
    "ConditionalCheckFailedException": (AppErrorCode.E_STREAM_PROVIDER_CONFLICT, HttpStatusCode.BAD_GATEWAY),
    "ServiceQuotaExceededException": (AppErrorCode.E_STREAM_PROVIDER_QUOTA_EXCEEDED, HttpStatusCode.SERVICE_UNAVAILABLE),
    "PendingVerification": (AppErrorCode.E_STREAM_PROVIDER_QUOTA_EXCEEDED, HttpStatusCode.SERVICE_UNAVAILABLE),
    "ThrottlingException": (AppErrorCode.E_STREAM_PROVIDER_THROTTLED, HttpStatusCode.SERVICE_UNAVAILABLE),
    "ProvisionedThroughputExceededException": (AppErrorCode.E_STREAM_PROVIDER_THROTTLED, HttpStatusCode.SERVICE_UNAVAILABLE),
    "RequestLimitExceeded": (AppErrorCode.E_STREAM_PROVIDER_THROTTLED, HttpStatusCode.SERVICE_UNAVAILABLE),
    "ChannelNotBroadcasting": (AppErrorCode.E_STREAM_PROVIDER_NOT_BROADCASTING, HttpStatusCode.NOT_FOUND),
    "InternalServerException": (AppErrorCode.E_STREAM_PROVIDER_UNAVAILABLE, HttpStatusCode.SERVICE_UNAVAILABLE),
    "InternalServerError": (AppErrorCode.E_STREAM_PROVIDER_UNAVAILABLE, HttpStatusCode.SERVICE_UNAVAILABLE),
    "ServiceUnavailableException": (AppErrorCode.E_STREAM_PROVIDER_UNAVAILABLE, HttpStatusCode.SERVICE_UNAVAILABLE),
}

# IVS lookups keyed by the caller-supplied channel ARN; a miss there is the caller's 404
_CHANNEL_LOOKUP_OPERATIONS = frozenset({"GetChannel", "GetStream"})


def json_response(content: dict, status_code: int = HttpStatusCode.OK) -> HttpResponse:
    return HttpResponse(
        status_code=int(status_code),
        body=orjson.dumps(content).decode(),
        headers=dict(JSON_HEADERS),
    )


def client_error_to_app_error(exc: ClientError) -> AppError:
    """
    Convert a botocore ClientError into an AppError.
    The status comes from the error code, never from the AWS response.
    """
    error = exc.response.get("Error", {})
    code = error.get("Code", "")
    message = error.get("Message") or str(exc)
    aws_status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

    app_errcode, status = _AWS_TO_APP_ERROR_MAP.get(
        code, (AppErrorCode.E_STREAM_PROVIDER_UNKNOWN, HttpStatusCode.BAD_GATEWAY)
    )
    if code == "ResourceNotFoundException" and exc.operation_name in _CHANNEL_LOOKUP_OPERATIONS:
        status = HttpStatusCode.NOT_FOUND

    log_msg = (
        f"ClientError: code={code} aws_status={aws_status} status={int(status)} "
        f"operation={exc.operation_name} msg={message}"
    )
    if status >= 500:
        logger.error(log_msg)
    else:
        logger.warning(log_msg)

    return AppError(errcode=app_errcode, errmesg=message, status_code=status)


def app_error_response(exc: AppError) -> HttpResponse:
    """
    Convert AppError to an ApiFailure response.
    """
    log_msg = f"{exc.errcode} {exc.erresid} msg={exc.errmesg} caller={exc.caller_info}"
    if exc.status_code >= 500:
        logger.error(log_msg)
    else:
        logger.warning(log_msg)

    failure = ApiFailure(errcode=exc.errcode, errmesg=exc.errmesg, erresid=exc.erresid)
    return json_response(failure.model_dump(), status_code=exc.status_code)


def exception_response(exc: Exception) -> HttpResponse:
    """Build the error response for any exception escaping an operation."""
    if isinstance(exc, AppError):
        return app_error_response(exc)

    if isinstance(exc, ClientError):
        return app_error_response(client_error_to_app_error(exc))

    if isinstance(exc, BotoCoreError):
        logger.error(f"BotoCoreError: {type(exc).__name__}: {exc}")
        return app_error_response(
            AppError(
                errcode=AppErrorCode.E_STREAM_PROVIDER_UNAVAILABLE,
                errmesg="Streaming provider is unavailable",
                status_code=HttpStatusCode.SERVICE_UNAVAILABLE,
            )
        )

    failure = api_failure(errcode=AppErrorCode.E_INTERNAL_ERROR.value, errmesg=exc)
    return json_response(
        ApiFailure(errcode=failure.errcode, erresid=failure.erresid).model_dump(),
        status_code=HttpStatusCode.INTERNAL_SERVER_ERROR,
    )
