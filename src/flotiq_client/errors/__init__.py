"""Error taxonomy for the Flotiq client."""

from flotiq_client.errors.exceptions import (
    BadRequestError,
    ClientError,
    ConflictError,
    FetchError,
    FlotiqError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    RequiredError,
    ResponseError,
    ServerError,
    UnauthorizedError,
    ValidationError,
)
from flotiq_client.errors.handler import RESPONSE_ERROR_MESSAGE, is_success, raise_for_status

__all__ = [
    "RESPONSE_ERROR_MESSAGE",
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "FetchError",
    "FlotiqError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "RequiredError",
    "ResponseError",
    "ServerError",
    "UnauthorizedError",
    "ValidationError",
    "is_success",
    "raise_for_status",
]
