"""Deferred-decode wrappers returned by the ``*_raw`` resource methods."""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

import httpx

T = TypeVar("T")


def _identity(json_value: Any) -> Any:
    return json_value


class JSONApiResponse(Generic[T]):
    """Decode the raw body as JSON and pass it through ``transformer``.

    Nothing is cached: every ``value()`` call decodes again.
    """

    def __init__(self, raw: httpx.Response, transformer: Callable[[Any], T] = _identity):
        self.raw = raw
        self.transformer = transformer

    async def value(self) -> T:
        return self.transformer(self.raw.json())


class VoidApiResponse:
    """For operations whose body carries no meaning (e.g. delete)."""

    def __init__(self, raw: httpx.Response):
        self.raw = raw

    async def value(self) -> None:
        return None
