from flotiq_client.apis.base import ContentTypeAPI
from flotiq_client.models.media import Media


class MediaInternalAPI(ContentTypeAPI[Media]):
    """Media library objects (``/api/v1/content/_media``)."""

    content_type = "_media"
    item_from_json = staticmethod(Media.from_json)
