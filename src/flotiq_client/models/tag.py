"""Tag (``_tag``) content type."""

from dataclasses import dataclass
from typing import Any

from flotiq_client.models.common import ContentInternal, drop_none


@dataclass
class Tag:
    id: str
    name: str
    internal: ContentInternal | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Tag":
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            internal=ContentInternal.from_json(data.get("internal")),
        )


@dataclass
class TagWithoutInternal:
    """Body of create, update and batch writes."""

    name: str
    id: str | None = None

    def to_json(self) -> dict[str, Any]:
        return drop_none({"id": self.id, "name": self.name})


@dataclass
class TagWithoutRequired:
    """Body of a partial update."""

    id: str | None = None
    name: str | None = None
    internal: ContentInternal | None = None

    def to_json(self) -> dict[str, Any]:
        return drop_none(
            {
                "id": self.id,
                "internal": self.internal.to_json() if self.internal else None,
                "name": self.name,
            }
        )
