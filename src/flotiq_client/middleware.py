"""Request/response/error hooks run around every dispatch.

A :class:`Middleware` carries up to three optional hooks. Each hook may be a
plain function or a coroutine function:

- ``pre(PreContext) -> FetchParams | None`` runs before dispatch; returning
  FetchParams replaces the URL and init seen by later hooks and the dispatch.
- ``post(PostContext) -> httpx.Response | None`` runs after a successful or
  recovered dispatch and may substitute the response.
- ``on_error(ErrorContext) -> httpx.Response | None`` runs when the fetch
  primitive raised and may supply a substitute response.

Returning None keeps the current value. Every context carries ``fetch``, the
client's own dispatch function, so hooks can issue follow-up requests.

Example:
    ```python
    from flotiq_client.middleware import FetchParams, Middleware


    def add_trace_header(ctx):
        headers = {**ctx.init.get("headers", {}), "X-Trace": "abc"}
        return FetchParams(url=ctx.url, init={**ctx.init, "headers": headers})


    api = ProductAPI(configuration).with_middleware(Middleware(pre=add_trace_header))
    ```
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeAlias

import httpx

from flotiq_client.transport.fetch import FetchAPI, RequestInit

logger = logging.getLogger(__name__)


@dataclass
class FetchParams:
    url: str
    init: RequestInit


@dataclass
class PreContext:
    fetch: FetchAPI
    url: str
    init: RequestInit


@dataclass
class PostContext:
    fetch: FetchAPI
    url: str
    init: RequestInit
    response: httpx.Response


@dataclass
class ErrorContext:
    """Passed to ``on_error`` hooks.

    ``error`` is always the original failure; ``response`` is a copy of the
    substitute supplied by an earlier hook, if any.
    """

    fetch: FetchAPI
    url: str
    init: RequestInit
    error: Exception
    response: httpx.Response | None = None


PreHook: TypeAlias = Callable[[PreContext], "FetchParams | None | Awaitable[FetchParams | None]"]
PostHook: TypeAlias = Callable[[PostContext], "httpx.Response | None | Awaitable[httpx.Response | None]"]
ErrorHook: TypeAlias = Callable[[ErrorContext], "httpx.Response | None | Awaitable[httpx.Response | None]"]


@dataclass(frozen=True)
class Middleware:
    pre: PreHook | None = None
    post: PostHook | None = None
    on_error: ErrorHook | None = None


def hydrate_middleware(ctx: PreContext) -> FetchParams:
    """Add ``hydrate=1`` to GET requests that do not set ``hydrate`` themselves.

    Hydrated responses inline referenced objects (media, tags) instead of
    returning bare references.
    """
    url = ctx.url
    if (ctx.init.get("method") or "").upper() == "GET" and "hydrate" not in httpx.URL(url).params:
        separator = "&" if "?" in url else "?"
        url = f"{url}{separator}hydrate=1"
        logger.debug(f"Hydrating GET {url}")

    return FetchParams(url=url, init={**ctx.init})
