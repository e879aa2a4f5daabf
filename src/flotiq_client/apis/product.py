from flotiq_client.apis.base import ContentTypeAPI
from flotiq_client.models.product import Product


class ProductAPI(ContentTypeAPI[Product]):
    """Product objects (``/api/v1/content/product``)."""

    content_type = "product"
    item_from_json = staticmethod(Product.from_json)
