"""The HTTP execution primitive used by the transport core.

A fetch function takes the final URL and request init and returns an
``httpx.Response``. :class:`HttpxFetch` is the default implementation;
anything with the same call signature can be configured instead.

Example:
    ```python
    import httpx

    from flotiq_client.transport import HttpxFetch

    # One AsyncClient per call (default)
    fetch = HttpxFetch(timeout=10.0)

    # Reuse a long-lived client
    async with httpx.AsyncClient() as client:
        fetch = HttpxFetch(client=client)
    ```
"""

import io
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypedDict

import httpx

logger = logging.getLogger(__name__)


class RequestInit(TypedDict, total=False):
    """Everything about a request except its URL."""

    method: str
    headers: dict[str, str]
    body: Any
    credentials: str | None


FetchAPI = Callable[[str, RequestInit], Awaitable[httpx.Response]]


@dataclass
class FormData:
    """A multipart/form-data body.

    ``files`` values follow httpx's convention: raw bytes, a file object or a
    ``(filename, content, content_type)`` tuple.
    """

    fields: dict[str, Any] = field(default_factory=dict)
    files: dict[str, Any] = field(default_factory=dict)


def is_passthrough_body(body: Any) -> bool:
    """Whether ``body`` is a form or binary payload that must never be re-encoded."""
    return isinstance(body, (FormData, httpx.QueryParams, bytes, bytearray, memoryview, io.IOBase))


def clone_response(response: httpx.Response) -> httpx.Response:
    """Return an independent copy of an already-read response.

    The body is copied decoded, so ``Content-Encoding`` is dropped from the
    copy's headers and ``Content-Length`` is recomputed from the copied body.
    """
    headers = [
        (name, value)
        for name, value in response.headers.multi_items()
        if name.lower() not in ("content-encoding", "content-length")
    ]
    clone = httpx.Response(
        status_code=response.status_code,
        headers=headers,
        content=response.content,
        extensions=dict(response.extensions),
    )
    try:
        clone.request = response.request
    except RuntimeError:
        # Responses built by hand carry no request
        pass
    return clone


class HttpxFetch:
    """Execute requests with ``httpx.AsyncClient``.

    Args:
        client: Client to send every request through. When omitted, a client
            is opened and closed around each call.
        **client_kwargs: Keyword arguments for the per-call ``AsyncClient``
            (``timeout``, ``transport``, ``verify`` ...). Ignored when
            ``client`` is given.
    """

    def __init__(self, client: httpx.AsyncClient | None = None, **client_kwargs: Any) -> None:
        self._client = client
        self._client_kwargs = client_kwargs

    async def __call__(self, url: str, init: RequestInit) -> httpx.Response:
        method = init.get("method") or "GET"
        kwargs = self._build_request_kwargs(init)

        if self._client is not None:
            return await self._client.request(method, url, **kwargs)

        async with httpx.AsyncClient(**self._client_kwargs) as client:
            return await client.request(method, url, **kwargs)

    @staticmethod
    def _build_request_kwargs(init: RequestInit) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"headers": httpx.Headers(init.get("headers") or {})}
        body = init.get("body")

        if body is None:
            pass
        elif isinstance(body, FormData):
            kwargs["data"] = body.fields
            kwargs["files"] = body.files
        elif isinstance(body, httpx.QueryParams):
            kwargs["content"] = str(body).encode()
            kwargs["headers"].setdefault("Content-Type", "application/x-www-form-urlencoded")
        elif isinstance(body, io.IOBase):
            kwargs["content"] = body.read()
        elif isinstance(body, Mapping):
            kwargs["data"] = dict(body)
        elif isinstance(body, (str, bytes, bytearray, memoryview)):
            kwargs["content"] = bytes(body) if not isinstance(body, str) else body
        else:
            kwargs["content"] = str(body)

        return kwargs


default_fetch = HttpxFetch()
