"""Flotiq Client - async Python client for the Flotiq content API.

- Per content type clients (products, media, tags) with CRUD, batch and
  version operations
- A middleware pipeline (pre, post and on_error hooks) around every request
- Credential resolution from values, the environment and .env files

Example:
    ```python
    from flotiq_client import FlotiqApi
    from flotiq_client.lookups import find_product_by_slug

    flotiq = FlotiqApi.from_env()
    product = await find_product_by_slug(flotiq.product_api, "blue-mug")
    ```
"""

from flotiq_client.apis import ContentTypeAPI, MediaInternalAPI, ProductAPI, TagInternalAPI
from flotiq_client.client import FlotiqApi
from flotiq_client.configuration import BASE_PATH, Configuration, ConfigurationParameters
from flotiq_client.errors import FetchError, FlotiqError, RequiredError, ResponseError
from flotiq_client.middleware import ErrorContext, FetchParams, Middleware, PostContext, PreContext, hydrate_middleware
from flotiq_client.query import querystring
from flotiq_client.responses import JSONApiResponse, VoidApiResponse
from flotiq_client.runtime import BaseAPI, RequestContext, is_json_mime
from flotiq_client.transport import FormData, HttpxFetch, RequestInit

__version__ = "0.1.0"

__all__ = [
    "BASE_PATH",
    "BaseAPI",
    "Configuration",
    "ConfigurationParameters",
    "ContentTypeAPI",
    "ErrorContext",
    "FetchError",
    "FetchParams",
    "FlotiqApi",
    "FlotiqError",
    "FormData",
    "HttpxFetch",
    "JSONApiResponse",
    "MediaInternalAPI",
    "Middleware",
    "PostContext",
    "PreContext",
    "ProductAPI",
    "RequestContext",
    "RequestInit",
    "RequiredError",
    "ResponseError",
    "TagInternalAPI",
    "VoidApiResponse",
    "__version__",
    "hydrate_middleware",
    "is_json_mime",
    "querystring",
]
