"""Async client for the Cloud Foundry Cloud Controller API.

Built for the platform admin console, which lists organizations, spaces,
applications, services, users and audit events:
- Bearer token from configuration or the OAuth2 client-credentials grant, cached per client
- Transparent v2 pagination with a page ceiling
- Typed ``{metadata, entity}`` records per resource kind
- Structured errors carrying the Cloud Controller's message

Example:
    ```python
    from cf_admin_client import CloudFoundryClient, CloudFoundryConfig
    from cf_admin_client.auth import ClientCredentials

    config = CloudFoundryConfig(
        api_endpoint="https://api.example.com",
        client_credentials=ClientCredentials("admin-console", "secret"),
    )

    async with CloudFoundryClient(config) as client:
        for space in await client.spaces(org_guid):
            apps = await client.applications(space.guid)
    ```
"""

from cf_admin_client.client import CloudFoundryClient
from cf_admin_client.config import CloudFoundryConfig

__version__ = "0.1.0"

__all__ = ["CloudFoundryClient", "CloudFoundryConfig", "__version__"]
