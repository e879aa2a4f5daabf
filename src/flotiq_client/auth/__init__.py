"""Credential resolution for the Flotiq client.

Example:
    ```python
    from flotiq_client.auth import CredentialResolver

    resolver = CredentialResolver()
    api_key = resolver.resolve_api_key(required=True)
    ```
"""

from flotiq_client.auth.credentials import (
    API_KEY_ENV_VAR,
    API_KEY_FILE_ENV_VAR,
    BASE_PATH_ENV_VAR,
    CredentialResolver,
)
from flotiq_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
)

__all__ = [
    "API_KEY_ENV_VAR",
    "API_KEY_FILE_ENV_VAR",
    "BASE_PATH_ENV_VAR",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
]
