"""Client configuration.

A :class:`Configuration` is a read-only view over a ``ConfigurationParameters``
mapping. Properties are derived on every access; the mapping is not copied.

Example:
    ```python
    from flotiq_client import Configuration, ProductAPI

    configuration = Configuration({"api_key": "read-only-key"})
    products = ProductAPI(configuration)

    # Rotating keys: any callable (sync or async) taking the header name
    configuration = Configuration({"api_key": lambda name: vault.current(name)})
    ```
"""

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypedDict

from flotiq_client.auth.credentials import BASE_PATH_ENV_VAR, CredentialResolver
from flotiq_client.middleware import Middleware
from flotiq_client.query import querystring
from flotiq_client.transport.fetch import FetchAPI

BASE_PATH = "https://api.flotiq.com".rstrip("/")

ApiKeyProvider = Callable[[str], "str | Awaitable[str]"]
AccessTokenProvider = Callable[..., Awaitable[str]]


class ConfigurationParameters(TypedDict, total=False):
    base_path: str
    fetch_api: FetchAPI
    middleware: list[Middleware]
    query_params_stringify: Callable[[Mapping[str, Any]], str]
    username: str
    password: str
    api_key: str | ApiKeyProvider
    access_token: str | Callable[..., "str | Awaitable[str]"]
    headers: dict[str, str | None]
    credentials: str


class Configuration:
    def __init__(self, configuration: ConfigurationParameters | None = None):
        self.configuration: ConfigurationParameters = configuration if configuration is not None else {}

    @classmethod
    def from_env(cls, *, resolver: CredentialResolver | None = None, **overrides: Any) -> "Configuration":
        """Build a configuration from FLOTIQ_API_KEY (or FLOTIQ_API_KEY_FILE) and FLOTIQ_BASE_PATH.

        Keyword overrides take precedence over the environment.
        """
        resolver = resolver or CredentialResolver()
        parameters: ConfigurationParameters = {}

        api_key = resolver.resolve_api_key()
        if api_key:
            parameters["api_key"] = api_key

        base_path = resolver.resolve(env_var_name=BASE_PATH_ENV_VAR, mask_in_logs=False)
        if base_path:
            parameters["base_path"] = base_path

        parameters.update(overrides)  # type: ignore[typeddict-item]
        return cls(parameters)

    @property
    def config(self) -> ConfigurationParameters:
        return self.configuration

    @config.setter
    def config(self, configuration: ConfigurationParameters) -> None:
        self.configuration = configuration

    @property
    def base_path(self) -> str:
        return self.configuration.get("base_path") or BASE_PATH

    @property
    def fetch_api(self) -> FetchAPI | None:
        return self.configuration.get("fetch_api")

    @property
    def middleware(self) -> list[Middleware]:
        return self.configuration.get("middleware") or []

    @property
    def query_params_stringify(self) -> Callable[[Mapping[str, Any]], str]:
        return self.configuration.get("query_params_stringify") or querystring

    @property
    def username(self) -> str | None:
        return self.configuration.get("username")

    @property
    def password(self) -> str | None:
        return self.configuration.get("password")

    @property
    def api_key(self) -> ApiKeyProvider | None:
        """The API key as a provider called with the header name."""
        api_key = self.configuration.get("api_key")
        if not api_key:
            return None
        if callable(api_key):
            return api_key
        return lambda name: api_key

    @property
    def access_token(self) -> AccessTokenProvider | Callable[..., Any] | None:
        access_token = self.configuration.get("access_token")
        if not access_token:
            return None
        if callable(access_token):
            return access_token

        async def provider(name: str | None = None, scopes: list[str] | None = None) -> str:
            return access_token

        return provider

    @property
    def headers(self) -> dict[str, str | None] | None:
        return self.configuration.get("headers")

    @property
    def credentials(self) -> str | None:
        return self.configuration.get("credentials")
