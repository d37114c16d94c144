"""Authentication components for the Cloud Foundry client.

This module provides:
- Multi-source resolution of endpoints and secrets (value → env → .env → default)
- Client-credentials token minting with a per-client cache

Example:
    ```python
    from cf_admin_client.auth import CredentialResolver

    resolver = CredentialResolver()
    credentials = resolver.resolve_client_credentials()
    ```
"""

from cf_admin_client.auth.credentials import ClientCredentials, CredentialResolver
from cf_admin_client.auth.exceptions import (
    CredentialError,
    CredentialFileError,
    CredentialNotFoundError,
    MissingCredentialsError,
    TokenRequestError,
)
from cf_admin_client.auth.tokens import TokenManager

__all__ = [
    "ClientCredentials",
    "CredentialError",
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "MissingCredentialsError",
    "TokenManager",
    "TokenRequestError",
]
