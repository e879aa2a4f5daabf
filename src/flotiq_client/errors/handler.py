"""Classification of non-2xx HTTP responses into ResponseError subclasses."""

import httpx

from flotiq_client.errors.exceptions import (
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ResponseError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)

RESPONSE_ERROR_MESSAGE = "Response returned an error code"

_EXCEPTION_MAP: dict[int, type[ResponseError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def raise_for_status(response: httpx.Response) -> None:
    """Raise the matching ResponseError for a non-2xx response.

    Args:
        response: HTTP response object

    Raises:
        ResponseError subclass based on status code
    """
    status_code = response.status_code
    if is_success(status_code):
        return

    if status_code in _EXCEPTION_MAP:
        exc_class = _EXCEPTION_MAP[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = ResponseError

    if exc_class is RateLimitError:
        raise RateLimitError(response, RESPONSE_ERROR_MESSAGE, retry_after=_parse_retry_after(response))

    if exc_class is ValidationError:
        raise ValidationError(response, RESPONSE_ERROR_MESSAGE, validation_errors=_extract_errors(response))

    raise exc_class(response, RESPONSE_ERROR_MESSAGE)


def _parse_retry_after(response: httpx.Response) -> int | None:
    try:
        return int(response.headers["retry-after"])
    except (KeyError, ValueError, TypeError):
        return None


def _extract_errors(response: httpx.Response):
    try:
        data = response.json()
    except (ValueError, TypeError):
        # Non-JSON error body
        return None
    if isinstance(data, dict):
        return data.get("errors")
    return None
