"""Exceptions for credential resolution.

Example:
    ```python
    from flotiq_client.auth.exceptions import CredentialNotFoundError

    if not api_key:
        raise CredentialNotFoundError("API key not found", env_var_name="FLOTIQ_API_KEY")
    ```
"""

from flotiq_client.errors.exceptions import FlotiqError


class CredentialError(FlotiqError):
    """Base exception for credential-related errors."""

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved from any source.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(CredentialError):
    """Raised when a credential file cannot be read."""

    pass
