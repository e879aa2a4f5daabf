"""Content models and their JSON codecs."""

from flotiq_client.models.common import (
    BatchDeleteResponse,
    BatchResponseSuccess,
    ContentInternal,
    ContentList,
    DataSource,
    VersionItem,
    VersionOwner,
)
from flotiq_client.models.media import Media, MediaTrim, MediaVariant, MediaWithoutInternal, MediaWithoutRequired
from flotiq_client.models.product import Product, ProductWithoutInternal, ProductWithoutRequired
from flotiq_client.models.tag import Tag, TagWithoutInternal, TagWithoutRequired

__all__ = [
    "BatchDeleteResponse",
    "BatchResponseSuccess",
    "ContentInternal",
    "ContentList",
    "DataSource",
    "Media",
    "MediaTrim",
    "MediaVariant",
    "MediaWithoutInternal",
    "MediaWithoutRequired",
    "Product",
    "ProductWithoutInternal",
    "ProductWithoutRequired",
    "Tag",
    "TagWithoutInternal",
    "TagWithoutRequired",
    "VersionItem",
    "VersionOwner",
]
