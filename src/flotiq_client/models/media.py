"""Media (``_media``) content type."""

from dataclasses import dataclass, field
from typing import Any

from flotiq_client.models.common import ContentInternal, DataSource, drop_none, relation_list
from flotiq_client.models.tag import Tag


@dataclass
class MediaTrim:
    top: int
    left: int
    right: int | None = None
    width: int | None = None
    bottom: int | None = None
    height: int | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any] | None) -> "MediaTrim | None":
        if data is None:
            return None
        return cls(
            top=data.get("top"),
            left=data.get("left"),
            right=data.get("right"),
            width=data.get("width"),
            bottom=data.get("bottom"),
            height=data.get("height"),
        )

    def to_json(self) -> dict[str, Any]:
        return drop_none(
            {
                "top": self.top,
                "left": self.left,
                "right": self.right,
                "width": self.width,
                "bottom": self.bottom,
                "height": self.height,
            }
        )


@dataclass
class MediaVariant:
    name: str
    trim: MediaTrim | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "MediaVariant":
        return cls(name=data.get("name"), trim=MediaTrim.from_json(data.get("trim")))

    def to_json(self) -> dict[str, Any]:
        return drop_none({"name": self.name, "trim": self.trim.to_json() if self.trim else None})


@dataclass
class Media:
    id: str
    url: str
    size: int
    type: str
    source: str
    file_name: str
    mime_type: str
    extension: str
    internal: ContentInternal | None = None
    tags: list[Tag | DataSource] = field(default_factory=list)
    width: int | None = None
    height: int | None = None
    variants: list[MediaVariant] = field(default_factory=list)
    external_id: str | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Media":
        return cls(
            id=data.get("id"),
            url=data.get("url"),
            size=data.get("size"),
            type=data.get("type"),
            source=data.get("source"),
            file_name=data.get("fileName"),
            mime_type=data.get("mimeType"),
            extension=data.get("extension"),
            internal=ContentInternal.from_json(data.get("internal")),
            tags=relation_list(data.get("tags"), Tag.from_json),
            width=data.get("width"),
            height=data.get("height"),
            variants=[MediaVariant.from_json(variant) for variant in data.get("variants") or []],
            external_id=data.get("externalId"),
        )


@dataclass
class MediaWithoutInternal:
    """Body of create, update and batch writes."""

    url: str
    size: int
    type: str
    source: str
    file_name: str
    mime_type: str
    extension: str
    id: str | None = None
    tags: list[DataSource] | None = None
    width: int | None = None
    height: int | None = None
    variants: list[MediaVariant] | None = None
    external_id: str | None = None

    def to_json(self) -> dict[str, Any]:
        return _media_write_json(self, internal=None)


@dataclass
class MediaWithoutRequired:
    """Body of a partial update."""

    id: str | None = None
    internal: ContentInternal | None = None
    url: str | None = None
    size: int | None = None
    type: str | None = None
    source: str | None = None
    file_name: str | None = None
    mime_type: str | None = None
    extension: str | None = None
    tags: list[DataSource] | None = None
    width: int | None = None
    height: int | None = None
    variants: list[MediaVariant] | None = None
    external_id: str | None = None

    def to_json(self) -> dict[str, Any]:
        return _media_write_json(self, internal=self.internal)


def _media_write_json(media: MediaWithoutInternal | MediaWithoutRequired, internal: ContentInternal | None):
    return drop_none(
        {
            "id": media.id,
            "internal": internal.to_json() if internal else None,
            "url": media.url,
            "size": media.size,
            "tags": [tag.to_json() for tag in media.tags] if media.tags is not None else None,
            "type": media.type,
            "width": media.width,
            "height": media.height,
            "source": media.source,
            "fileName": media.file_name,
            "mimeType": media.mime_type,
            "variants": [variant.to_json() for variant in media.variants] if media.variants is not None else None,
            "extension": media.extension,
            "externalId": media.external_id,
        }
    )
