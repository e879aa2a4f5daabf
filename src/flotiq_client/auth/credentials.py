"""Multi-source resolution of the Flotiq API key and related settings.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable (``.env`` files are loaded into the environment)
3. Default value

Example:
    ```python
    from flotiq_client.auth import CredentialResolver

    resolver = CredentialResolver()
    api_key = resolver.resolve(env_var_name="FLOTIQ_API_KEY", required=True)
    ```

Credential values are never logged; only their source is.
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from flotiq_client.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "FLOTIQ_API_KEY"
API_KEY_FILE_ENV_VAR = "FLOTIQ_API_KEY_FILE"
BASE_PATH_ENV_VAR = "FLOTIQ_BASE_PATH"


class CredentialResolver:
    """Resolve credentials from explicit values, the environment and ``.env`` files.

    Args:
        dotenv_path: Path to a ``.env`` file. If None, python-dotenv searches
            parent directories.
        load_dotenv: Set to False to skip ``.env`` loading (tests, containers).
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except Exception as e:
                # A broken .env must not prevent explicit values from working
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    @staticmethod
    def _mask_credential(value: str | None) -> str:
        return "None" if value is None else "***"

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        mask_in_logs: bool = True,
    ) -> str | None:
        """Resolve a setting from the first source that provides it.

        Args:
            value: Explicit value; wins over every other source.
            env_var_name: Environment variable to read.
            default: Fallback when nothing else is set.
            required: Raise CredentialNotFoundError instead of returning None.
            mask_in_logs: Log ``***`` instead of the value (default).

        Raises:
            CredentialNotFoundError: If required and not found in any source.
        """
        result = None
        source = None

        if value is not None:
            result, source = value, "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result, source = os.environ[env_var_name], f"environment variable '{env_var_name}'"
        elif default is not None:
            result, source = default, "default value"

        if result is not None:
            shown = self._mask_credential(result) if mask_in_logs else result
            logger.debug(f"Resolved credential from {source}: {shown}")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a credential from a file, stripped of surrounding whitespace.

        The path may be given directly or through ``env_var_name``; ``~`` and
        ``$VAR`` are expanded.

        Raises:
            CredentialFileError: If required and the file cannot be read.
        """
        path_to_use = str(file_path) if file_path is not None else None
        if path_to_use is None and env_var_name:
            path_to_use = self.resolve(env_var_name=env_var_name, mask_in_logs=False)

        if not path_to_use:
            if required:
                error_msg = "No file path provided for credential resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text().strip()
        except FileNotFoundError:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None
        except PermissionError:
            error_msg = f"Permission denied reading credential file: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.warning(error_msg)
            return None
        except OSError as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved credential from file: {path_obj} (***)")
        return content

    def resolve_api_key(self, value: str | None = None, *, required: bool = False) -> str | None:
        """Resolve the Flotiq API key from a value, FLOTIQ_API_KEY or FLOTIQ_API_KEY_FILE."""
        api_key = self.resolve(value=value, env_var_name=API_KEY_ENV_VAR)
        if api_key is None:
            api_key = self.resolve_from_file(env_var_name=API_KEY_FILE_ENV_VAR)
        if required and not api_key:
            raise CredentialNotFoundError(
                f"Required credential not found (checked env vars: {API_KEY_ENV_VAR}, {API_KEY_FILE_ENV_VAR})",
                env_var_name=API_KEY_ENV_VAR,
            )
        return api_key
