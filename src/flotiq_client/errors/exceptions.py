"""Structured exceptions raised by the Flotiq client."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class FlotiqError(Exception):
    """Base exception for every error raised by the client."""


class RequiredError(FlotiqError):
    """A required request parameter was missing.

    Raised before anything is dispatched.
    """

    def __init__(self, field: str, message: str | None = None):
        super().__init__(message or f'Required parameter "{field}" was null or undefined.')
        self.field = field


class FetchError(FlotiqError):
    """The HTTP execution primitive failed and no error hook recovered it."""

    def __init__(self, cause: BaseException, message: str):
        super().__init__(message)
        self.cause = cause


class ResponseError(FlotiqError):
    """The API answered with a status code outside the 2xx range."""

    def __init__(self, response: "httpx.Response", message: str = "Response returned an error code"):
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code


class ClientError(ResponseError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized (missing or invalid X-AUTH-TOKEN)."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden (key lacks access to the content type)."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class ValidationError(ClientError):
    """422 Unprocessable Entity (validation errors)."""

    def __init__(self, response: "httpx.Response", message: str = "Response returned an error code", *,
                 validation_errors: Any = None):
        super().__init__(response, message)
        self.validation_errors = validation_errors if validation_errors is not None else []


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, response: "httpx.Response", message: str = "Response returned an error code", *,
                 retry_after: int | None = None):
        super().__init__(response, message)
        self.retry_after = retry_after


class ServerError(ResponseError):
    """5xx server errors."""

    pass
