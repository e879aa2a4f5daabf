"""Product content type."""

from dataclasses import dataclass, field
from typing import Any

from flotiq_client.models.common import ContentInternal, DataSource, drop_none, relation_list
from flotiq_client.models.media import Media


@dataclass
class Product:
    id: str
    name: str
    slug: str
    price: float
    internal: ContentInternal | None = None
    description: str | None = None
    product_image: list[Media | DataSource] = field(default_factory=list)
    product_gallery: list[Media | DataSource] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Product":
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            slug=data.get("slug"),
            price=data.get("price"),
            internal=ContentInternal.from_json(data.get("internal")),
            description=data.get("description"),
            product_image=relation_list(data.get("productImage"), Media.from_json),
            product_gallery=relation_list(data.get("productGallery"), Media.from_json),
        )


@dataclass
class ProductWithoutInternal:
    """Body of create, update and batch writes."""

    name: str
    slug: str
    price: float
    id: str | None = None
    description: str | None = None
    product_image: list[DataSource] | None = None
    product_gallery: list[DataSource] | None = None

    def to_json(self) -> dict[str, Any]:
        return _product_write_json(self, internal=None)


@dataclass
class ProductWithoutRequired:
    """Body of a partial update."""

    id: str | None = None
    internal: ContentInternal | None = None
    name: str | None = None
    slug: str | None = None
    price: float | None = None
    description: str | None = None
    product_image: list[DataSource] | None = None
    product_gallery: list[DataSource] | None = None

    def to_json(self) -> dict[str, Any]:
        return _product_write_json(self, internal=self.internal)


def _product_write_json(product: ProductWithoutInternal | ProductWithoutRequired, internal: ContentInternal | None):
    return drop_none(
        {
            "id": product.id,
            "internal": internal.to_json() if internal else None,
            "name": product.name,
            "slug": product.slug,
            "price": product.price,
            "description": product.description,
            "productImage": _data_sources(product.product_image),
            "productGallery": _data_sources(product.product_gallery),
        }
    )


def _data_sources(sources: list[DataSource] | None) -> list[dict[str, Any]] | None:
    if sources is None:
        return None
    return [source.to_json() for source in sources]
