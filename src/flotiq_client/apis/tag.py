from flotiq_client.apis.base import ContentTypeAPI
from flotiq_client.models.tag import Tag


class TagInternalAPI(ContentTypeAPI[Tag]):
    """Tag objects (``/api/v1/content/_tag``)."""

    content_type = "_tag"
    item_from_json = staticmethod(Tag.from_json)
