"""Request assembly, middleware dispatch and status validation.

:class:`BaseAPI` is shared by every resource client. A call goes through:

1. assembly: base path + path + query string, merged headers (None values
   dropped), caller init overrides, JSON body encoding
2. ``pre`` hooks, in registration order
3. the fetch primitive; on failure ``on_error`` hooks, in registration order
4. ``post`` hooks, in registration order
5. status validation: anything outside 2xx raises a ResponseError

Clients are never mutated to add middleware; ``with_middleware`` and friends
return a clone sharing the same Configuration.
"""

import inspect
import json
import logging
import re
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, TypeAlias, TypeVar

import httpx

from flotiq_client.configuration import Configuration
from flotiq_client.errors import FetchError, is_success, raise_for_status
from flotiq_client.middleware import (
    ErrorContext,
    FetchParams,
    Middleware,
    PostContext,
    PostHook,
    PreContext,
    PreHook,
)
from flotiq_client.query import to_iso_string
from flotiq_client.transport.fetch import RequestInit, clone_response, default_fetch, is_passthrough_body

logger = logging.getLogger(__name__)

T = TypeVar("T")
_SelfAPI = TypeVar("_SelfAPI", bound="BaseAPI")

JSON_MIME_PATTERN = re.compile(r"^(?:application/json|[^;/ \t]+/[^;/ \t]+[+]json)[ \t]*(?:;.*)?$", re.IGNORECASE)

FETCH_FAILED_MESSAGE = "The request failed and the interceptors did not return an alternative response"


@dataclass
class RequestContext:
    path: str
    method: str
    headers: dict[str, str | None] = field(default_factory=dict)
    query: dict[str, Any] = field(default_factory=dict)
    body: Any = None


InitOverrideFunction: TypeAlias = Callable[[RequestInit, RequestContext], "RequestInit | Awaitable[RequestInit]"]
InitOverrides: TypeAlias = RequestInit | InitOverrideFunction | None


async def maybe_await(value: T | Awaitable[T]) -> T:
    """Await ``value`` if it is awaitable, so hooks and providers may be sync or async."""
    if inspect.isawaitable(value):
        return await value
    return value


def is_json_mime(mime: str | None) -> bool:
    """Check if the given MIME type is a JSON MIME type.

    JSON MIME examples:
        application/json
        application/json; charset=UTF8
        APPLICATION/JSON
        application/vnd.company+json
    """
    if not mime:
        return False
    return JSON_MIME_PATTERN.match(mime) is not None


def _header_value(headers: Mapping[str, Any], name: str) -> Any:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


def _merge_headers(*sources: Mapping[str, str | None]) -> dict[str, str]:
    """Merge header mappings case-insensitively; later sources win and a None value removes the header."""
    headers = httpx.Headers()
    for source in sources:
        for name, value in source.items():
            if value is None:
                headers.pop(name, None)
            else:
                headers[name] = value
    return {name.decode(headers.encoding): value.decode(headers.encoding) for name, value in headers.raw}


def _json_default(value: Any) -> Any:
    if isinstance(value, date):
        return to_iso_string(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class BaseAPI:
    """Transport core shared by the generated resource clients.

    Args:
        configuration: Shared configuration. The client's initial middleware
            list is a copy of ``configuration.middleware``.
    """

    def __init__(self, configuration: Configuration | None = None):
        self.configuration = configuration if configuration is not None else Configuration()
        self.middleware: list[Middleware] = list(self.configuration.middleware)

    def with_middleware(self: _SelfAPI, *middlewares: Middleware) -> _SelfAPI:
        next_api = self.clone()
        next_api.middleware.extend(middlewares)
        return next_api

    def with_pre_middleware(self: _SelfAPI, *pre_middlewares: PreHook) -> _SelfAPI:
        return self.with_middleware(*(Middleware(pre=pre) for pre in pre_middlewares))

    def with_post_middleware(self: _SelfAPI, *post_middlewares: PostHook) -> _SelfAPI:
        return self.with_middleware(*(Middleware(post=post) for post in post_middlewares))

    def clone(self: _SelfAPI) -> _SelfAPI:
        """Create a new client of the same type over the same configuration.

        The middleware list is copied, so extending the clone leaves this
        client untouched.
        """
        next_api = type(self)(self.configuration)
        next_api.middleware = list(self.middleware)
        return next_api

    async def request(self, context: RequestContext, init_overrides: InitOverrides = None) -> httpx.Response:
        """Dispatch ``context`` and return the response if its status is 2xx.

        Raises:
            ResponseError: (or a status-specific subclass) for any other status.
            FetchError: If the fetch primitive failed and no hook recovered.
        """
        params = await self._create_fetch_params(context, init_overrides)
        response = await self.fetch_api(params.url, params.init)
        if not is_success(response.status_code):
            logger.debug(f"{context.method} {params.url} returned {response.status_code}")
            raise_for_status(response)
        return response

    async def _create_fetch_params(self, context: RequestContext, init_overrides: InitOverrides = None) -> FetchParams:
        url = self.configuration.base_path + context.path
        query = self.configuration.query_params_stringify(context.query) if context.query else ""
        if query:
            url += "?" + query

        init_params: RequestInit = {
            "method": context.method,
            "headers": _merge_headers(self.configuration.headers or {}, context.headers),
            "body": context.body,
            "credentials": self.configuration.credentials,
        }

        if callable(init_overrides):
            overrides = await maybe_await(init_overrides(init_params, context))
        else:
            overrides = init_overrides
        overridden_init: RequestInit = {**init_params, **(overrides or {})}

        body = overridden_init.get("body")
        content_type = _header_value(overridden_init.get("headers") or {}, "Content-Type")
        if body is not None and not is_passthrough_body(body) and is_json_mime(content_type):
            body = json.dumps(body, separators=(",", ":"), default=_json_default)

        return FetchParams(url=url, init={**overridden_init, "body": body})

    async def fetch_api(self, url: str, init: RequestInit) -> httpx.Response:
        """Run the middleware chain around one call of the fetch primitive.

        Passed to every hook as ``fetch`` so hooks can issue their own requests.
        """
        fetch_params = FetchParams(url=url, init=init)
        for middleware in self.middleware:
            if middleware.pre is not None:
                replaced = await maybe_await(
                    middleware.pre(PreContext(fetch=self.fetch_api, url=fetch_params.url, init=fetch_params.init))
                )
                if replaced is not None:
                    fetch_params = replaced

        fetch = self.configuration.fetch_api or default_fetch
        response: httpx.Response | None = None
        logger.debug(f"{fetch_params.init.get('method')} {fetch_params.url}")
        try:
            response = await fetch(fetch_params.url, fetch_params.init)
        except Exception as e:
            for middleware in self.middleware:
                if middleware.on_error is not None:
                    error_context = ErrorContext(
                        fetch=self.fetch_api,
                        url=fetch_params.url,
                        init=fetch_params.init,
                        error=e,
                        response=clone_response(response) if response is not None else None,
                    )
                    substitute = await maybe_await(middleware.on_error(error_context))
                    if substitute is not None:
                        response = substitute
            if response is None:
                raise FetchError(e, FETCH_FAILED_MESSAGE) from e
            logger.warning(
                f"{fetch_params.init.get('method')} {fetch_params.url} failed with {e!r}, recovered by middleware"
            )

        for middleware in self.middleware:
            if middleware.post is not None:
                post_context = PostContext(
                    fetch=self.fetch_api,
                    url=fetch_params.url,
                    init=fetch_params.init,
                    response=clone_response(response),
                )
                substitute = await maybe_await(middleware.post(post_context))
                if substitute is not None:
                    response = substitute

        logger.debug(f"{fetch_params.init.get('method')} {fetch_params.url} -> {response.status_code}")
        return response
