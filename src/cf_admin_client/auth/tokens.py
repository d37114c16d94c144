"""Bearer token supply for Cloud Controller requests.

A token is either configured statically or minted once through the OAuth2
client-credentials grant and then reused for the lifetime of the manager.
There is no expiry handling: a fresh manager (or client) is needed once the
identity server stops accepting the cached token.
"""

import asyncio
import logging

import httpx

from cf_admin_client.auth.credentials import ClientCredentials
from cf_admin_client.auth.exceptions import MissingCredentialsError, TokenRequestError

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/token"


class TokenManager:
    """Supply an access token for every outgoing request.

    Args:
        http_client: Client used to talk to the identity endpoint and, when no
            token endpoint is configured, to ``/v2/info`` for discovery.
        api_endpoint: Base URL of the Cloud Controller.
        access_token: Static bearer token. Takes precedence over client credentials.
        client_credentials: Client id/secret pair for the client-credentials grant.
        token_endpoint: Base URL of the identity server (e.g. ``https://uaa.example.com``).
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_endpoint: str,
        *,
        access_token: str | None = None,
        client_credentials: ClientCredentials | None = None,
        token_endpoint: str | None = None,
    ) -> None:
        self._http_client = http_client
        self._api_endpoint = api_endpoint.rstrip("/")
        self._static_token = access_token or None
        self._client_credentials = client_credentials
        self._token_endpoint = token_endpoint.rstrip("/") if token_endpoint else None
        self._cached_token: str | None = None
        self._lock = asyncio.Lock()

    @property
    def has_cached_token(self) -> bool:
        return self._static_token is not None or self._cached_token is not None

    async def get_access_token(self) -> str:
        """Return the bearer token, fetching it on first use.

        Raises:
            MissingCredentialsError: Neither a static token nor client credentials are configured.
            TokenRequestError: The identity endpoint did not issue a token.
        """
        if self._static_token is not None:
            return self._static_token

        if self._cached_token is not None:
            return self._cached_token

        if self._client_credentials is None:
            raise MissingCredentialsError()

        async with self._lock:
            # Another coroutine may have fetched it while we waited
            if self._cached_token is None:
                self._cached_token = await self._request_token(self._client_credentials)
        return self._cached_token

    async def _request_token(self, credentials: ClientCredentials) -> str:
        token_endpoint = await self._resolve_token_endpoint()
        logger.debug(f"Requesting access token for client {credentials.client_id} from {token_endpoint}")

        response = await self._http_client.post(
            f"{token_endpoint}{TOKEN_PATH}",
            params={"grant_type": "client_credentials"},
            auth=(credentials.client_id, credentials.client_secret),
            headers={"Accept": "application/json"},
        )
        if not response.is_success:
            raise TokenRequestError(
                f"Token request failed with status {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        try:
            token = response.json().get("access_token")
        except (ValueError, AttributeError):
            token = None
        if not token:
            raise TokenRequestError("Token endpoint response did not contain an access_token")

        logger.info(f"Obtained access token for client {credentials.client_id}")
        return token

    async def _resolve_token_endpoint(self) -> str:
        if self._token_endpoint is not None:
            return self._token_endpoint

        response = await self._http_client.get(f"{self._api_endpoint}/v2/info")
        if not response.is_success:
            raise TokenRequestError(
                f"Could not discover token endpoint, /v2/info returned status {response.status_code}",
                status_code=response.status_code,
            )
        try:
            endpoint = response.json().get("token_endpoint")
        except (ValueError, AttributeError):
            endpoint = None
        if not endpoint:
            raise TokenRequestError("/v2/info did not advertise a token_endpoint")

        self._token_endpoint = endpoint.rstrip("/")
        logger.debug(f"Discovered token endpoint {self._token_endpoint}")
        return self._token_endpoint
