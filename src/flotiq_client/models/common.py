"""Shapes shared by every content type."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def drop_none(data: dict[str, Any]) -> dict[str, Any]:
    """Remove unset members so they are not sent as ``null``."""
    return {key: value for key, value in data.items() if value is not None}


def to_json_value(item: Any) -> Any:
    """Serialize a write model, passing plain mappings through unchanged."""
    if hasattr(item, "to_json"):
        return item.to_json()
    return item


@dataclass
class ContentInternal:
    """System metadata attached to every content object."""

    content_type: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    deleted_at: str | None = None
    workflow_state: str | None = None
    object_title: str | None = None
    latest_version: int | None = None
    workflow_public_version: int | None = None
    workflow_published_at: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> "ContentInternal | None":
        if data is None:
            return None
        return cls(
            content_type=data.get("contentType"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            deleted_at=data.get("deletedAt"),
            workflow_state=data.get("workflowState"),
            object_title=data.get("objectTitle"),
            latest_version=data.get("latestVersion"),
            workflow_public_version=data.get("workflowPublicVersion"),
            workflow_published_at=data.get("workflowPublishedAt"),
        )

    def to_json(self) -> dict[str, Any]:
        return drop_none(
            {
                "contentType": self.content_type,
                "createdAt": self.created_at,
                "updatedAt": self.updated_at,
                "deletedAt": self.deleted_at,
                "workflowState": self.workflow_state,
                "objectTitle": self.object_title,
                "latestVersion": self.latest_version,
                "workflowPublicVersion": self.workflow_public_version,
                "workflowPublishedAt": self.workflow_published_at,
            }
        )


@dataclass
class DataSource:
    """A reference to another content object, e.g. ``/api/v1/content/_media/_media-1``."""

    data_url: str
    type: str = "internal"

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "DataSource":
        return cls(data_url=data["dataUrl"], type=data.get("type", "internal"))

    def to_json(self) -> dict[str, Any]:
        return {"dataUrl": self.data_url, "type": self.type}


@dataclass
class VersionOwner:
    id: str | None = None
    username: str | None = None
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    roles: list[str] | None = None
    language: str | None = None
    enabled: bool | None = None
    reset_password_at: str | None = None
    subscribed: bool | None = None
    deleted_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> "VersionOwner | None":
        if data is None:
            return None
        return cls(
            id=data.get("id"),
            username=data.get("username"),
            email=data.get("email"),
            first_name=data.get("firstName"),
            last_name=data.get("lastName"),
            roles=data.get("roles"),
            language=data.get("language"),
            enabled=data.get("enabled"),
            reset_password_at=data.get("resetPasswordAt"),
            subscribed=data.get("subscribed"),
            deleted_at=data.get("deletedAt"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )


@dataclass
class VersionItem:
    id: str
    internal: ContentInternal | None = None
    deleted_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    current: bool | None = None
    version: int | None = None
    owner: VersionOwner | None = None
    editor: VersionOwner | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "VersionItem":
        return cls(
            id=data.get("id"),
            internal=ContentInternal.from_json(data.get("internal")),
            deleted_at=data.get("deletedAt"),
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
            current=data.get("current"),
            version=data.get("version"),
            owner=VersionOwner.from_json(data.get("owner")),
            editor=VersionOwner.from_json(data.get("editor")),
        )


@dataclass
class ContentList(Generic[T]):
    """One page of a listing."""

    total_count: int = 0
    count: int = 0
    total_pages: int = 0
    current_page: int = 1
    data: list[T] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any], item_from_json: Callable[[Any], T]) -> "ContentList[T]":
        return cls(
            total_count=data.get("total_count", 0),
            count=data.get("count", 0),
            total_pages=data.get("total_pages", 0),
            current_page=data.get("current_page", 1),
            data=[item_from_json(item) for item in data.get("data") or []],
        )


@dataclass
class BatchResponseSuccess:
    batch_total_count: int | None = None
    batch_success_count: int | None = None
    batch_error_count: int | None = None
    errors: list[Any] | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "BatchResponseSuccess":
        return cls(
            batch_total_count=data.get("batch_total_count"),
            batch_success_count=data.get("batch_success_count"),
            batch_error_count=data.get("batch_error_count"),
            errors=data.get("errors"),
        )


@dataclass
class BatchDeleteResponse:
    deleted_count: int | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "BatchDeleteResponse":
        return cls(deleted_count=data.get("deletedCount"))


def relation_list(items: list[dict[str, Any]] | None, item_from_json: Callable[[Any], T]) -> list[T | DataSource]:
    """Decode a relation field; entries the API did not hydrate stay ``DataSource`` references."""
    return [DataSource.from_json(item) if "dataUrl" in item else item_from_json(item) for item in items or []]
