"""Cloud Foundry Cloud Controller client."""

from typing import Any, TypeVar

import httpx

from cf_admin_client.auth.tokens import TokenManager
from cf_admin_client.config import CloudFoundryConfig
from cf_admin_client.errors.handler import raise_for_status
from cf_admin_client.pagination import Pagination, walk_pages
from cf_admin_client.resources import (
    Application,
    AuditEvent,
    AuditEventPage,
    Organization,
    OrganizationQuota,
    Resource,
    Service,
    ServiceInstance,
    ServicePlan,
    Space,
    SpaceQuota,
    Stack,
    User,
    UserProvidedServiceInstance,
    UserRoles,
    UserSummary,
)
from cf_admin_client.transport import create_transport_stack

R = TypeVar("R", bound=Resource)

CFLINUXFS2 = "cflinuxfs2"


def _flag(value: bool) -> str:
    return "true" if value else "false"


class CloudFoundryClient:
    """Async client for the Cloud Controller v2 API (and the v3 audit events).

    Every call is a fresh request; nothing but the access token is cached.
    Collection accessors follow ``next_url`` until the last page and return
    the complete list. Deletions and role revocations return ``{}``.

    Args:
        config: Endpoint, credentials and limits.
        transport: Innermost httpx transport. Defaults to the network; tests
            pass an ``httpx.MockTransport``.

    Example:
        ```python
        config = CloudFoundryConfig(api_endpoint="https://api.example.com", access_token=token)

        async with CloudFoundryClient(config) as client:
            orgs = await client.organizations()
            spaces = await client.spaces(orgs[0].guid)
        ```
    """

    def __init__(self, config: CloudFoundryConfig, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.config = config
        self._log = config.logger
        self._http_client = httpx.AsyncClient(
            transport=create_transport_stack(
                wrapped_transport=transport,
                verify_ssl=config.verify_ssl,
                log=config.logger,
            ),
            timeout=config.timeout,
        )
        self._tokens = TokenManager(
            self._http_client,
            config.api_endpoint,
            access_token=config.access_token,
            client_credentials=config.client_credentials,
            token_endpoint=config.token_endpoint,
        )

    async def __aenter__(self) -> "CloudFoundryClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http_client.aclose()

    async def get_access_token(self) -> str:
        return await self._tokens.get_access_token()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Issue one authenticated request against the Cloud Controller.

        Args:
            method: HTTP method.
            path: Path relative to the API endpoint, optionally with a query string
                (``next_url`` values are passed through as they are).
            params: Extra query parameters.
            json: JSON request body.

        Returns:
            The successful response.

        Raises:
            APIError: Subclass matching the status of a non-2xx response.
            MissingCredentialsError: No way to authenticate was configured.
        """
        token = await self.get_access_token()
        return await self._send(method, path, token, params=params, json=json)

    async def _send(
        self,
        method: str,
        path: str,
        token: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        response = await self._http_client.request(
            method.upper(),
            f"{self.config.api_endpoint}{path}",
            params=params,
            json=json,
            headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
        )
        raise_for_status(response)
        return response

    async def all_resources(self, response: httpx.Response) -> list[Any]:
        """Return the resources of ``response`` and of every page after it.

        Raises:
            PaginationLimitError: More than ``config.max_pages`` pages.
        """
        token = await self.get_access_token()

        async def fetch_page(next_url: str) -> httpx.Response:
            return await self._send("GET", next_url, token)

        return await walk_pages(response, fetch_page, max_pages=self.config.max_pages)

    async def _get(self, path: str, resource_type: type[R], params: dict[str, Any] | None = None) -> R:
        response = await self.request("GET", path, params=params)
        return resource_type.from_dict(response.json())

    async def _list(self, path: str, resource_type: type[R], params: dict[str, Any] | None = None) -> list[R]:
        response = await self.request("GET", path, params=params)
        return [resource_type.from_dict(record) for record in await self.all_resources(response)]

    async def _delete(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        await self.request("DELETE", path, params=params)
        return {}

    async def info(self) -> dict[str, Any]:
        response = await self.request("GET", "/v2/info")
        return response.json()

    # Organizations

    async def organizations(self) -> list[Organization]:
        return await self._list("/v2/organizations", Organization)

    async def organization(self, guid: str) -> Organization:
        return await self._get(f"/v2/organizations/{guid}", Organization)

    async def create_organization(self, body: dict[str, Any]) -> Organization:
        """Create an organization.

        Args:
            body: Request body, e.g. ``{"name": ..., "quota_definition_guid": ...}``.
        """
        self._log.info(f"Creating organization {body.get('name')}")
        response = await self.request("POST", "/v2/organizations", json=body)
        return Organization.from_dict(response.json())

    async def delete_organization(self, guid: str, *, recursive: bool = False, async_: bool = False) -> dict[str, Any]:
        """Delete an organization.

        Args:
            guid: Organization GUID.
            recursive: Also delete the spaces, apps and services it contains.
            async_: Let the Cloud Controller delete in a background job.
        """
        self._log.info(f"Deleting organization {guid} (recursive={recursive})")
        return await self._delete(
            f"/v2/organizations/{guid}",
            params={"recursive": _flag(recursive), "async": _flag(async_)},
        )

    async def quota_definitions(self, name: str | None = None) -> list[OrganizationQuota]:
        """List organization quota definitions, optionally only those with a given name."""
        params = {"q": f"name:{name}"} if name is not None else None
        return await self._list("/v2/quota_definitions", OrganizationQuota, params=params)

    async def organization_quota(self, guid: str) -> OrganizationQuota:
        return await self._get(f"/v2/quota_definitions/{guid}", OrganizationQuota)

    # Spaces

    async def spaces(self, organization_guid: str) -> list[Space]:
        return await self._list(f"/v2/organizations/{organization_guid}/spaces", Space)

    async def space(self, guid: str) -> Space:
        return await self._get(f"/v2/spaces/{guid}", Space)

    async def space_summary(self, guid: str) -> dict[str, Any]:
        """Space summary with its apps and services inlined (not a ``{metadata, entity}`` record)."""
        response = await self.request("GET", f"/v2/spaces/{guid}/summary")
        return response.json()

    async def space_quota(self, guid: str) -> SpaceQuota:
        return await self._get(f"/v2/space_quota_definitions/{guid}", SpaceQuota)

    async def spaces_for_user_in_organization(self, user_guid: str, organization_guid: str) -> list[Space]:
        return await self._list(
            f"/v2/users/{user_guid}/spaces",
            Space,
            params={"q": f"organization_guid:{organization_guid}"},
        )

    # Applications

    async def applications(self, space_guid: str) -> list[Application]:
        return await self._list(f"/v2/spaces/{space_guid}/apps", Application)

    async def application(self, guid: str) -> Application:
        return await self._get(f"/v2/apps/{guid}", Application)

    async def application_summary(self, guid: str) -> dict[str, Any]:
        response = await self.request("GET", f"/v2/apps/{guid}/summary")
        return response.json()

    # Services

    async def services(self, space_guid: str) -> list[ServiceInstance]:
        return await self._list(f"/v2/spaces/{space_guid}/service_instances", ServiceInstance)

    async def service_instance(self, guid: str) -> ServiceInstance:
        return await self._get(f"/v2/service_instances/{guid}", ServiceInstance)

    async def service_plan(self, guid: str) -> ServicePlan:
        return await self._get(f"/v2/service_plans/{guid}", ServicePlan)

    async def service(self, guid: str) -> Service:
        return await self._get(f"/v2/services/{guid}", Service)

    async def user_services(self, space_guid: str) -> list[UserProvidedServiceInstance]:
        return await self._list(
            "/v2/user_provided_service_instances",
            UserProvidedServiceInstance,
            params={"q": f"space_guid:{space_guid}"},
        )

    async def user_service_instance(self, guid: str) -> UserProvidedServiceInstance:
        return await self._get(f"/v2/user_provided_service_instances/{guid}", UserProvidedServiceInstance)

    # Users and roles

    async def create_user(self, guid: str) -> User:
        """Register an identity-server user with the Cloud Controller."""
        self._log.info(f"Creating user {guid}")
        response = await self.request("POST", "/v2/users", json={"guid": guid})
        return User.from_dict(response.json())

    async def delete_user(self, guid: str) -> dict[str, Any]:
        self._log.info(f"Deleting user {guid}")
        return await self._delete(f"/v2/users/{guid}", params={"async": "false"})

    async def user_summary(self, user_guid: str) -> UserSummary:
        return await self._get(f"/v2/users/{user_guid}/summary", UserSummary)

    async def users_for_organization(self, organization_guid: str) -> list[UserRoles]:
        return await self._list(f"/v2/organizations/{organization_guid}/user_roles", UserRoles)

    async def users_for_space(self, space_guid: str) -> list[UserRoles]:
        return await self._list(f"/v2/spaces/{space_guid}/user_roles", UserRoles)

    async def assign_user_to_organization(self, organization_guid: str, user_guid: str) -> Organization:
        self._log.info(f"Adding user {user_guid} to organization {organization_guid}")
        response = await self.request("PUT", f"/v2/organizations/{organization_guid}/users/{user_guid}")
        return Organization.from_dict(response.json())

    async def set_organization_role(
        self, organization_guid: str, user_guid: str, role: str, grant: bool
    ) -> Organization | dict[str, Any]:
        """Grant or revoke an organization role.

        Args:
            organization_guid: Organization GUID.
            user_guid: User GUID.
            role: Role collection, one of ``users``, ``managers``,
                ``billing_managers`` or ``auditors``.
            grant: True to grant (PUT), False to revoke (DELETE).

        Returns:
            The updated organization when granting, ``{}`` when revoking.
        """
        path = f"/v2/organizations/{organization_guid}/{role}/{user_guid}"
        params = {"recursive": "true"}
        if not grant:
            self._log.info(f"Revoking {role} in organization {organization_guid} from user {user_guid}")
            return await self._delete(path, params=params)

        self._log.info(f"Granting {role} in organization {organization_guid} to user {user_guid}")
        response = await self.request("PUT", path, params=params)
        return Organization.from_dict(response.json())

    async def set_space_role(self, space_guid: str, user_guid: str, role: str, grant: bool) -> Space | dict[str, Any]:
        """Grant or revoke a space role (``developers``, ``managers`` or ``auditors``).

        Returns:
            The updated space when granting, ``{}`` when revoking.
        """
        path = f"/v2/spaces/{space_guid}/{role}/{user_guid}"
        if not grant:
            self._log.info(f"Revoking {role} in space {space_guid} from user {user_guid}")
            return await self._delete(path)

        self._log.info(f"Granting {role} in space {space_guid} to user {user_guid}")
        response = await self.request("PUT", path)
        return Space.from_dict(response.json())

    async def has_organization_role(self, organization_guid: str, user_guid: str, role: str) -> bool:
        """Whether the user holds ``role`` (e.g. ``org_manager``) in the organization."""
        users = await self.users_for_organization(organization_guid)
        return any(user.guid == user_guid and role in user.organization_roles for user in users)

    # Stacks

    async def stacks(self) -> list[Stack]:
        return await self._list("/v2/stacks", Stack)

    async def stack(self, guid: str) -> Stack:
        return await self._get(f"/v2/stacks/{guid}", Stack)

    async def cflinuxfs2_stack_guid(self) -> str | None:
        """GUID of the ``cflinuxfs2`` stack, or None if the platform does not offer it."""
        for stack in await self.stacks():
            if stack.name == CFLINUXFS2:
                return stack.guid
        return None

    # Audit events (v3)

    async def audit_events(
        self,
        page: int = 1,
        *,
        target_guids: list[str] | None = None,
        types: list[str] | None = None,
        per_page: int = 25,
    ) -> AuditEventPage:
        """Fetch one page of audit events, newest first.

        Args:
            page: 1-based page number.
            target_guids: Only events about these resources.
            types: Only events of these types (e.g. ``audit.app.update``).
            per_page: Page size.
        """
        params: dict[str, Any] = {"page": page, "per_page": per_page, "order_by": "-updated_at"}
        if target_guids:
            params["target_guids"] = ",".join(target_guids)
        if types:
            params["types"] = ",".join(types)

        response = await self.request("GET", "/v3/audit_events", params=params)
        data = response.json()
        return AuditEventPage(
            events=[AuditEvent.from_dict(event) for event in data.get("resources") or []],
            pagination=Pagination.from_dict(data.get("pagination"), page),
        )

    async def audit_event(self, guid: str) -> AuditEvent:
        response = await self.request("GET", f"/v3/audit_events/{guid}")
        return AuditEvent.from_dict(response.json())
