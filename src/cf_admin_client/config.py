"""Client configuration."""

import logging
from dataclasses import dataclass, field

from cf_admin_client.auth.credentials import ClientCredentials, CredentialResolver

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_PAGES = 1000


@dataclass
class CloudFoundryConfig:
    """Connection settings for a Cloud Controller.

    Attributes:
        api_endpoint: Base URL of the Cloud Controller, e.g. ``https://api.example.com``.
        access_token: Static bearer token. When set, client credentials are not used.
        client_credentials: Client id/secret for the OAuth2 client-credentials grant.
        token_endpoint: Identity server base URL. Discovered from ``/v2/info`` when unset.
        timeout: Per-request timeout in seconds.
        max_pages: Upper bound on pages followed for a single collection.
        verify_ssl: Whether TLS certificates are verified.
        logger: Logger the client reports to.
    """

    api_endpoint: str
    access_token: str | None = field(default=None, repr=False)
    client_credentials: ClientCredentials | None = None
    token_endpoint: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    max_pages: int = DEFAULT_MAX_PAGES
    verify_ssl: bool = True
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("cf_admin_client"))

    def __post_init__(self) -> None:
        if not self.api_endpoint:
            raise ValueError("api_endpoint is required")
        self.api_endpoint = self.api_endpoint.rstrip("/")
        # Blank values (e.g. `CF_ACCESS_TOKEN=` in .env) mean unset
        self.access_token = self.access_token or None
        self.token_endpoint = self.token_endpoint or None
        if self.max_pages < 1:
            raise ValueError("max_pages must be at least 1")

    @classmethod
    def from_env(
        cls,
        *,
        api_endpoint: str | None = None,
        access_token: str | None = None,
        client_credentials: ClientCredentials | None = None,
        resolver: CredentialResolver | None = None,
    ) -> "CloudFoundryConfig":
        """Build a configuration from explicit values, the environment and ``.env``.

        Reads ``CF_API_ENDPOINT``, ``CF_ACCESS_TOKEN``, ``CF_CLIENT_ID``,
        ``CF_CLIENT_SECRET`` (or ``CF_CLIENT_SECRET_FILE``),
        ``CF_TOKEN_ENDPOINT``, ``CF_REQUEST_TIMEOUT`` and ``CF_MAX_PAGES``.

        Raises:
            CredentialNotFoundError: If no API endpoint can be resolved.
        """
        resolver = resolver or CredentialResolver()

        endpoint = resolver.resolve(value=api_endpoint, env_var_name="CF_API_ENDPOINT", required=True, secret=False)
        token = resolver.resolve(value=access_token, env_var_name="CF_ACCESS_TOKEN") or None
        if client_credentials is None and token is None:
            client_credentials = resolver.resolve_client_credentials()

        return cls(
            api_endpoint=endpoint,
            access_token=token,
            client_credentials=client_credentials,
            token_endpoint=resolver.resolve(env_var_name="CF_TOKEN_ENDPOINT", secret=False),
            timeout=float(resolver.resolve_int(env_var_name="CF_REQUEST_TIMEOUT", default=int(DEFAULT_TIMEOUT))),
            max_pages=resolver.resolve_int(env_var_name="CF_MAX_PAGES", default=DEFAULT_MAX_PAGES),
        )
