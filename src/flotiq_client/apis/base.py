"""CRUD façade shared by every Flotiq content type.

Each operation comes in two forms: ``<op>_raw`` returns the response
wrapper, ``<op>`` awaits and returns the decoded value. Subclasses only name
the content type and the model codecs.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, ClassVar, Generic, TypeVar
from urllib.parse import quote

from flotiq_client.errors import RequiredError
from flotiq_client.models.common import (
    BatchDeleteResponse,
    BatchResponseSuccess,
    ContentList,
    VersionItem,
    to_json_value,
)
from flotiq_client.responses import JSONApiResponse, VoidApiResponse
from flotiq_client.runtime import BaseAPI, InitOverrides, RequestContext, maybe_await

ItemT = TypeVar("ItemT")

AUTH_HEADER = "X-AUTH-TOKEN"
JSON_CONTENT_TYPE = "application/json"


def _require(value: Any, field: str, operation: str) -> None:
    if value is None:
        raise RequiredError(field, f'Required parameter "{field}" was null or undefined when calling {operation}().')


def _path_param(value: Any) -> str:
    return quote(str(value), safe="")


def _set_if_present(query: dict[str, Any], name: str, value: Any) -> None:
    if value is not None:
        query[name] = value


class ContentTypeAPI(BaseAPI, Generic[ItemT]):
    content_type: ClassVar[str]
    item_from_json: ClassVar[Callable[[Any], Any]]

    @property
    def _collection_path(self) -> str:
        return f"/api/v1/content/{self.content_type}"

    def _object_path(self, id: Any) -> str:
        return f"{self._collection_path}/{_path_param(id)}"

    async def _headers(self, *, json_body: bool = False) -> dict[str, str | None]:
        headers: dict[str, str | None] = {}
        if json_body:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        api_key = self.configuration.api_key
        if api_key is not None:
            headers[AUTH_HEADER] = await maybe_await(api_key(AUTH_HEADER))
        return headers

    def _item_response(self, response) -> JSONApiResponse[ItemT]:
        return JSONApiResponse(response, type(self).item_from_json)

    def _list_response(self, response) -> JSONApiResponse[ContentList[ItemT]]:
        item_from_json = type(self).item_from_json
        return JSONApiResponse(response, lambda json_value: ContentList.from_json(json_value, item_from_json))

    async def get_raw(
        self, id: str, *, hydrate: int | None = None, init_overrides: InitOverrides = None
    ) -> JSONApiResponse[ItemT]:
        """Get a single object by id."""
        _require(id, "id", "get")
        query: dict[str, Any] = {}
        _set_if_present(query, "hydrate", hydrate)
        response = await self.request(
            RequestContext(path=self._object_path(id), method="GET", headers=await self._headers(), query=query),
            init_overrides,
        )
        return self._item_response(response)

    async def get(self, id: str, *, hydrate: int | None = None, init_overrides: InitOverrides = None) -> ItemT:
        response = await self.get_raw(id, hydrate=hydrate, init_overrides=init_overrides)
        return await response.value()

    async def list_raw(
        self,
        *,
        page: int | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        order_direction: str | None = None,
        hydrate: int | None = None,
        filters: str | None = None,
        ids: Iterable[str] | None = None,
        init_overrides: InitOverrides = None,
    ) -> JSONApiResponse[ContentList[ItemT]]:
        """List objects.

        Args:
            page: 1-based page number.
            limit: Page size.
            order_by: Field to sort by.
            order_direction: ``asc`` or ``desc``.
            hydrate: ``1`` (or ``2``) to inline referenced objects.
            filters: JSON-encoded filter object, see :func:`flotiq_client.lookups.equals_filter`.
            ids: Restrict to these object ids.
        """
        query: dict[str, Any] = {}
        _set_if_present(query, "page", page)
        _set_if_present(query, "limit", limit)
        _set_if_present(query, "order_by", order_by)
        _set_if_present(query, "order_direction", order_direction)
        _set_if_present(query, "hydrate", hydrate)
        _set_if_present(query, "filters", filters)
        if ids is not None:
            query["ids[]"] = list(ids)
        response = await self.request(
            RequestContext(path=self._collection_path, method="GET", headers=await self._headers(), query=query),
            init_overrides,
        )
        return self._list_response(response)

    async def list(self, *, init_overrides: InitOverrides = None, **params: Any) -> ContentList[ItemT]:
        response = await self.list_raw(init_overrides=init_overrides, **params)
        return await response.value()

    async def get_removed_raw(
        self, *, deleted_after: str | None = None, init_overrides: InitOverrides = None
    ) -> JSONApiResponse[list[str]]:
        """Ids of objects removed after ``deleted_after`` (ISO date string)."""
        query: dict[str, Any] = {}
        _set_if_present(query, "deletedAfter", deleted_after)
        response = await self.request(
            RequestContext(
                path=f"{self._collection_path}/removed", method="GET", headers=await self._headers(), query=query
            ),
            init_overrides,
        )
        return JSONApiResponse(response)

    async def get_removed(self, *, deleted_after: str | None = None, init_overrides: InitOverrides = None) -> list[str]:
        response = await self.get_removed_raw(deleted_after=deleted_after, init_overrides=init_overrides)
        return await response.value()

    async def get_versions_raw(
        self, id: str, version_id: str, *, init_overrides: InitOverrides = None
    ) -> JSONApiResponse[ItemT]:
        """A specific version of an object."""
        _require(id, "id", "get_versions")
        _require(version_id, "version_id", "get_versions")
        response = await self.request(
            RequestContext(
                path=f"{self._object_path(id)}/version/{_path_param(version_id)}",
                method="GET",
                headers=await self._headers(),
            ),
            init_overrides,
        )
        return self._item_response(response)

    async def get_versions(self, id: str, version_id: str, *, init_overrides: InitOverrides = None) -> ItemT:
        response = await self.get_versions_raw(id, version_id, init_overrides=init_overrides)
        return await response.value()

    async def list_version_raw(
        self,
        id: str,
        *,
        page: int | None = None,
        limit: int | None = None,
        order_by: str | None = None,
        order_direction: str | None = None,
        init_overrides: InitOverrides = None,
    ) -> JSONApiResponse[ContentList[VersionItem]]:
        """All versions of an object."""
        _require(id, "id", "list_version")
        query: dict[str, Any] = {}
        _set_if_present(query, "page", page)
        _set_if_present(query, "limit", limit)
        _set_if_present(query, "order_by", order_by)
        _set_if_present(query, "order_direction", order_direction)
        response = await self.request(
            RequestContext(
                path=f"{self._object_path(id)}/version", method="GET", headers=await self._headers(), query=query
            ),
            init_overrides,
        )
        return JSONApiResponse(response, lambda json_value: ContentList.from_json(json_value, VersionItem.from_json))

    async def list_version(
        self, id: str, *, init_overrides: InitOverrides = None, **params: Any
    ) -> ContentList[VersionItem]:
        response = await self.list_version_raw(id, init_overrides=init_overrides, **params)
        return await response.value()

    async def create_raw(self, item: Any, *, init_overrides: InitOverrides = None) -> JSONApiResponse[ItemT]:
        """Create an object from a ``*WithoutInternal`` model or a plain mapping."""
        _require(item, "item", "create")
        response = await self.request(
            RequestContext(
                path=self._collection_path,
                method="POST",
                headers=await self._headers(json_body=True),
                body=to_json_value(item),
            ),
            init_overrides,
        )
        return self._item_response(response)

    async def create(self, item: Any, *, init_overrides: InitOverrides = None) -> ItemT:
        response = await self.create_raw(item, init_overrides=init_overrides)
        return await response.value()

    async def update_raw(self, id: str, item: Any, *, init_overrides: InitOverrides = None) -> JSONApiResponse[ItemT]:
        """Overwrite an object; properties missing from ``item`` are lost."""
        _require(id, "id", "update")
        _require(item, "item", "update")
        response = await self.request(
            RequestContext(
                path=self._object_path(id),
                method="PUT",
                headers=await self._headers(json_body=True),
                body=to_json_value(item),
            ),
            init_overrides,
        )
        return self._item_response(response)

    async def update(self, id: str, item: Any, *, init_overrides: InitOverrides = None) -> ItemT:
        response = await self.update_raw(id, item, init_overrides=init_overrides)
        return await response.value()

    async def patch_raw(self, id: str, item: Any, *, init_overrides: InitOverrides = None) -> JSONApiResponse[ItemT]:
        """Update selected fields from a ``*WithoutRequired`` model or a plain mapping."""
        _require(id, "id", "patch")
        _require(item, "item", "patch")
        response = await self.request(
            RequestContext(
                path=self._object_path(id),
                method="PATCH",
                headers=await self._headers(json_body=True),
                body=to_json_value(item),
            ),
            init_overrides,
        )
        return self._item_response(response)

    async def patch(self, id: str, item: Any, *, init_overrides: InitOverrides = None) -> ItemT:
        response = await self.patch_raw(id, item, init_overrides=init_overrides)
        return await response.value()

    async def batch_create_raw(
        self, items: Iterable[Any], *, update_existing: bool | None = None, init_overrides: InitOverrides = None
    ) -> JSONApiResponse[BatchResponseSuccess]:
        """Create (or, with ``update_existing``, upsert) up to 100 objects."""
        _require(items, "items", "batch_create")
        query: dict[str, Any] = {}
        _set_if_present(query, "updateExisting", update_existing)
        response = await self.request(
            RequestContext(
                path=f"{self._collection_path}/batch",
                method="POST",
                headers=await self._headers(json_body=True),
                query=query,
                body=[to_json_value(item) for item in items],
            ),
            init_overrides,
        )
        return JSONApiResponse(response, BatchResponseSuccess.from_json)

    async def batch_create(
        self, items: Iterable[Any], *, update_existing: bool | None = None, init_overrides: InitOverrides = None
    ) -> BatchResponseSuccess:
        response = await self.batch_create_raw(items, update_existing=update_existing, init_overrides=init_overrides)
        return await response.value()

    async def batch_patch_raw(
        self, items: Iterable[Any], *, init_overrides: InitOverrides = None
    ) -> JSONApiResponse[BatchResponseSuccess]:
        """Update selected fields of up to 100 objects."""
        _require(items, "items", "batch_patch")
        response = await self.request(
            RequestContext(
                path=f"{self._collection_path}/batch",
                method="PATCH",
                headers=await self._headers(json_body=True),
                body=[to_json_value(item) for item in items],
            ),
            init_overrides,
        )
        return JSONApiResponse(response, BatchResponseSuccess.from_json)

    async def batch_patch(self, items: Iterable[Any], *, init_overrides: InitOverrides = None) -> BatchResponseSuccess:
        response = await self.batch_patch_raw(items, init_overrides=init_overrides)
        return await response.value()

    async def batch_delete_raw(
        self, ids: Iterable[str], *, init_overrides: InitOverrides = None
    ) -> JSONApiResponse[BatchDeleteResponse]:
        """Delete up to 100 objects by id."""
        _require(ids, "ids", "batch_delete")
        response = await self.request(
            RequestContext(
                path=f"{self._collection_path}/batch-delete",
                method="POST",
                headers=await self._headers(json_body=True),
                body=list(ids),
            ),
            init_overrides,
        )
        return JSONApiResponse(response, BatchDeleteResponse.from_json)

    async def batch_delete(self, ids: Iterable[str], *, init_overrides: InitOverrides = None) -> BatchDeleteResponse:
        response = await self.batch_delete_raw(ids, init_overrides=init_overrides)
        return await response.value()

    async def delete_raw(self, id: str, *, init_overrides: InitOverrides = None) -> VoidApiResponse:
        _require(id, "id", "delete")
        response = await self.request(
            RequestContext(path=self._object_path(id), method="DELETE", headers=await self._headers()),
            init_overrides,
        )
        return VoidApiResponse(response)

    async def delete(self, id: str, *, init_overrides: InitOverrides = None) -> None:
        await self.delete_raw(id, init_overrides=init_overrides)
