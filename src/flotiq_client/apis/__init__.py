"""Resource clients, one per content type."""

from flotiq_client.apis.base import AUTH_HEADER, ContentTypeAPI
from flotiq_client.apis.media import MediaInternalAPI
from flotiq_client.apis.product import ProductAPI
from flotiq_client.apis.tag import TagInternalAPI

__all__ = [
    "AUTH_HEADER",
    "ContentTypeAPI",
    "MediaInternalAPI",
    "ProductAPI",
    "TagInternalAPI",
]
