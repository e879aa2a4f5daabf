"""Testing utilities for code built on the Flotiq client.

Example:
    ```python
    from flotiq_client import Configuration, ProductAPI
    from flotiq_client.testing import RequestRecorder, mock_fetch

    recorder = RequestRecorder(json={"data": []})
    api = ProductAPI(Configuration({"api_key": "test", "fetch_api": mock_fetch(recorder)}))
    await api.list()
    assert recorder.requests[0].url.path == "/api/v1/content/product"
    ```
"""

from collections.abc import Callable
from typing import Any

import httpx

from flotiq_client.transport.fetch import HttpxFetch


def mock_fetch(handler: Callable[[httpx.Request], httpx.Response]) -> HttpxFetch:
    """A fetch primitive answering every request with ``handler``; nothing leaves the process."""
    return HttpxFetch(transport=httpx.MockTransport(handler))


class RequestRecorder:
    """MockTransport handler that records requests and replies with canned responses.

    Args:
        status_code: Status of every reply unless ``responses`` is given.
        json: JSON body of every reply unless ``responses`` is given.
        responses: Replies returned in order, one per request.
    """

    def __init__(
        self,
        status_code: int = 200,
        json: Any = None,
        responses: list[httpx.Response] | None = None,
    ) -> None:
        self.status_code = status_code
        self.json = json
        self.responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            return self.responses.pop(0)
        if self.json is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.json)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


__all__ = ["RequestRecorder", "mock_fetch"]
