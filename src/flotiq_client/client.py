"""Entry point bundling a client per content type over one configuration."""

from flotiq_client.apis import MediaInternalAPI, ProductAPI, TagInternalAPI
from flotiq_client.auth import API_KEY_ENV_VAR, CredentialNotFoundError, CredentialResolver
from flotiq_client.configuration import Configuration
from flotiq_client.middleware import hydrate_middleware

MISSING_KEY_MESSAGE = "FLOTIQ_API_KEY must be passed to the FlotiqApi constructor."


class FlotiqApi:
    """Clients for every content type, with GET requests hydrated by default.

    Example:
        ```python
        flotiq = FlotiqApi("read-only-api-key")
        products = await flotiq.product_api.list(limit=10)
        ```
    """

    media_internal_api: MediaInternalAPI
    product_api: ProductAPI
    tag_internal_api: TagInternalAPI

    def __init__(self, key: str | None, *, base_path: str | None = None):
        if not key:
            raise CredentialNotFoundError(MISSING_KEY_MESSAGE, env_var_name=API_KEY_ENV_VAR)

        parameters = {"api_key": key}
        if base_path:
            parameters["base_path"] = base_path
        self.configuration = Configuration(parameters)

        self.media_internal_api = MediaInternalAPI(self.configuration).with_pre_middleware(hydrate_middleware)
        self.product_api = ProductAPI(self.configuration).with_pre_middleware(hydrate_middleware)
        self.tag_internal_api = TagInternalAPI(self.configuration).with_pre_middleware(hydrate_middleware)

    @classmethod
    def from_env(cls, *, resolver: CredentialResolver | None = None) -> "FlotiqApi":
        """Build from FLOTIQ_API_KEY (or FLOTIQ_API_KEY_FILE) and FLOTIQ_BASE_PATH."""
        configuration = Configuration.from_env(resolver=resolver)
        return cls(configuration.config.get("api_key"), base_path=configuration.config.get("base_path"))
