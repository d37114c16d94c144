"""Exceptions raised while resolving credentials and obtaining access tokens.

Example:
    ```python
    from cf_admin_client.auth.exceptions import MissingCredentialsError

    try:
        token = await client.get_access_token()
    except MissingCredentialsError as e:
        print(f"Configure CF_ACCESS_TOKEN or CF_CLIENT_ID/CF_CLIENT_SECRET: {e}")
    ```
"""


class CredentialError(Exception):
    """Base exception for credential and token errors."""

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required configuration value cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class MissingCredentialsError(CredentialNotFoundError):
    """Raised when a token is needed but neither a static access token nor
    client credentials were configured."""

    def __init__(self, message: str = "access_token or client_credentials are required to authenticate"):
        super().__init__(message)


class CredentialFileError(CredentialError):
    """Raised when a secret cannot be read from a file."""

    pass


class TokenRequestError(CredentialError):
    """Raised when the identity endpoint refuses to issue an access token.

    Attributes:
        status_code: HTTP status returned by the token endpoint, if any.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
