"""Resolution of Cloud Foundry endpoints and secrets from several sources.

Resolution order (highest to lowest priority):
1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv loads it into the environment)
4. Default value

Example:
    ```python
    from cf_admin_client.auth import CredentialResolver

    resolver = CredentialResolver()

    api_endpoint = resolver.resolve(env_var_name="CF_API_ENDPOINT", required=True)
    client_secret = resolver.resolve(env_var_name="CF_CLIENT_SECRET")
    if client_secret is None:
        client_secret = resolver.resolve_from_file(env_var_name="CF_CLIENT_SECRET_FILE")
    ```

Secrets are never written to the log; only the source they came from is.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from cf_admin_client.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientCredentials:
    """OAuth2 client id/secret pair used for the client-credentials grant."""

    client_id: str
    client_secret: str

    def __repr__(self) -> str:
        return f"ClientCredentials(client_id={self.client_id!r}, client_secret='***')"


class CredentialResolver:
    """Resolve configuration values and secrets with priority ordering.

    Explicit values win over environment variables, environment variables win
    over the ``.env`` file and the ``.env`` file wins over defaults.

    Example:
        ```python
        resolver = CredentialResolver(load_dotenv=False)
        token = resolver.resolve(value=None, env_var_name="CF_ACCESS_TOKEN")
        timeout = resolver.resolve_int(env_var_name="CF_REQUEST_TIMEOUT", default=30)
        ```
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        """Initialize the resolver.

        Args:
            dotenv_path: Path to a .env file. If None, python-dotenv searches
                the parent directories for one.
            load_dotenv: Whether to load the .env file at all.
        """
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
                logger.debug("Loaded .env file for Cloud Foundry configuration")
            except Exception as e:
                # A broken .env must not stop configuration from the environment
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
        secret: bool = True,
    ) -> str | None:
        """Resolve a value from the first source that provides it.

        Args:
            value: Explicitly provided value (highest priority).
            env_var_name: Environment variable to consult.
            default: Value used when no other source has one.
            required: Raise instead of returning None when nothing is found.
            secret: Mask the resolved value in log messages.

        Returns:
            The resolved value, or None when not found and not required.

        Raises:
            CredentialNotFoundError: If required and no source provides a value.
        """
        result = None
        source = None

        if value is not None:
            result = value
            source = "explicit parameter"
        elif env_var_name and env_var_name in os.environ:
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default is not None:
            result = default
            source = "default value"

        if result is not None:
            shown = "***" if secret else result
            logger.debug(f"Resolved {env_var_name or 'value'} from {source}: {shown}")

        if required and result is None:
            error_msg = "Required configuration value not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_int(
        self,
        *,
        value: int | None = None,
        env_var_name: str | None = None,
        default: int | None = None,
    ) -> int | None:
        """Resolve an integer setting such as a timeout or page ceiling.

        Raises:
            CredentialNotFoundError: If the environment holds a non-integer value.
        """
        if value is not None:
            return value
        raw = self.resolve(env_var_name=env_var_name, secret=False)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            raise CredentialNotFoundError(
                f"Expected an integer in {env_var_name}, got {raw!r}", env_var_name=env_var_name
            ) from None

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a secret from a file.

        The path may be given directly or through an environment variable, and
        may contain ``~`` and ``$VAR`` references. Surrounding whitespace is
        stripped from the file contents.

        Raises:
            CredentialFileError: If required and the file cannot be read.
        """
        path_to_use = None
        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_to_use = self.resolve(env_var_name=env_var_name, secret=False)

        if path_to_use is None:
            if required:
                error_msg = "No file path provided for secret resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text().strip()
        except FileNotFoundError:
            error_msg = f"Secret file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None
        except OSError as e:
            error_msg = f"Error reading secret file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved secret from file: {path_obj} (***)")
        return content

    def resolve_client_credentials(
        self,
        *,
        client_id: str | None = None,
        client_secret: str | None = None,
    ) -> ClientCredentials | None:
        """Resolve a client id/secret pair from CF_CLIENT_ID and CF_CLIENT_SECRET.

        The secret may also come from the file named by CF_CLIENT_SECRET_FILE.
        Returns None unless both halves are found.
        """
        resolved_id = self.resolve(value=client_id, env_var_name="CF_CLIENT_ID", secret=False)
        resolved_secret = self.resolve(value=client_secret, env_var_name="CF_CLIENT_SECRET")
        if resolved_secret is None:
            resolved_secret = self.resolve_from_file(env_var_name="CF_CLIENT_SECRET_FILE")

        if resolved_id is None or resolved_secret is None:
            if resolved_id is not None or resolved_secret is not None:
                logger.warning("Ignoring incomplete client credentials: both id and secret are needed")
            return None
        return ClientCredentials(client_id=resolved_id, client_secret=resolved_secret)
