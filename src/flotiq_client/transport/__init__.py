"""HTTP execution primitive, request body types and response helpers."""

from flotiq_client.transport.fetch import (
    FetchAPI,
    FormData,
    HttpxFetch,
    RequestInit,
    clone_response,
    default_fetch,
    is_passthrough_body,
)

__all__ = [
    "FetchAPI",
    "FormData",
    "HttpxFetch",
    "RequestInit",
    "clone_response",
    "default_fetch",
    "is_passthrough_body",
]
