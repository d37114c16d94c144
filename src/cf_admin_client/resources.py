"""Resource records returned by the Cloud Controller.

Every v2 resource arrives as ``{"metadata": {...}, "entity": {...}}``. The
record classes keep ``entity`` as the raw dictionary and add a few typed
accessors for the fields the admin console reads most often.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Self

from cf_admin_client.pagination import Pagination


@dataclass
class Metadata:
    """Record metadata. Keys without a field of their own are kept in ``extra``."""

    guid: str
    url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Metadata":
        known = {"guid", "url", "created_at", "updated_at"}
        return cls(
            guid=data["guid"],
            url=data.get("url"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
            extra={key: value for key, value in data.items() if key not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "guid": self.guid,
            "url": self.url,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
            **self.extra,
        }


@dataclass
class Resource:
    """Generic ``{metadata, entity}`` record."""

    metadata: Metadata
    entity: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Wrap a decoded JSON record.

        Raises:
            ValueError: If the record has no ``metadata.guid``.
        """
        metadata = data.get("metadata")
        if not isinstance(metadata, dict) or "guid" not in metadata:
            raise ValueError(f"{cls.__name__} record is missing metadata.guid")
        return cls(metadata=Metadata.from_dict(metadata), entity=dict(data.get("entity") or {}))

    @property
    def guid(self) -> str:
        return self.metadata.guid

    @property
    def name(self) -> str | None:
        return self.entity.get("name")

    def to_dict(self) -> dict[str, Any]:
        return {
            "metadata": self.metadata.to_dict(),
            "entity": dict(self.entity),
        }


class Organization(Resource):
    @property
    def quota_definition_guid(self) -> str | None:
        return self.entity.get("quota_definition_guid")

    @property
    def status(self) -> str | None:
        return self.entity.get("status")


class OrganizationQuota(Resource):
    @property
    def memory_limit(self) -> int | None:
        """Memory limit in megabytes."""
        return self.entity.get("memory_limit")


class Space(Resource):
    @property
    def organization_guid(self) -> str | None:
        return self.entity.get("organization_guid")

    @property
    def space_quota_definition_guid(self) -> str | None:
        return self.entity.get("space_quota_definition_guid")


class SpaceQuota(Resource):
    @property
    def memory_limit(self) -> int | None:
        return self.entity.get("memory_limit")


class Application(Resource):
    @property
    def space_guid(self) -> str | None:
        return self.entity.get("space_guid")

    @property
    def stack_guid(self) -> str | None:
        return self.entity.get("stack_guid")

    @property
    def state(self) -> str | None:
        """``STARTED`` or ``STOPPED``."""
        return self.entity.get("state")


class ServiceInstance(Resource):
    @property
    def service_plan_guid(self) -> str | None:
        return self.entity.get("service_plan_guid")

    @property
    def space_guid(self) -> str | None:
        return self.entity.get("space_guid")


class ServicePlan(Resource):
    @property
    def service_guid(self) -> str | None:
        return self.entity.get("service_guid")


class Service(Resource):
    @property
    def label(self) -> str | None:
        return self.entity.get("label")

    @property
    def name(self) -> str | None:
        # Services are identified by label, not name
        return self.entity.get("label")


class UserProvidedServiceInstance(Resource):
    @property
    def credentials(self) -> dict[str, Any]:
        return self.entity.get("credentials") or {}


class User(Resource):
    @property
    def username(self) -> str | None:
        return self.entity.get("username")

    @property
    def name(self) -> str | None:
        return self.username


class UserSummary(User):
    """User record with the organizations and spaces the user belongs to."""

    @property
    def organizations(self) -> list[dict[str, Any]]:
        return self.entity.get("organizations") or []

    @property
    def managed_organizations(self) -> list[dict[str, Any]]:
        return self.entity.get("managed_organizations") or []

    @property
    def billing_managed_organizations(self) -> list[dict[str, Any]]:
        return self.entity.get("billing_managed_organizations") or []

    @property
    def audited_organizations(self) -> list[dict[str, Any]]:
        return self.entity.get("audited_organizations") or []

    @property
    def spaces(self) -> list[dict[str, Any]]:
        return self.entity.get("spaces") or []


class UserRoles(User):
    """User record returned by the ``user_roles`` listings of orgs and spaces."""

    @property
    def organization_roles(self) -> list[str]:
        return self.entity.get("organization_roles") or []

    @property
    def space_roles(self) -> list[str]:
        return self.entity.get("space_roles") or []


class Stack(Resource):
    @property
    def description(self) -> str | None:
        return self.entity.get("description")


@dataclass
class AuditEventParty:
    """Actor or target of an audit event."""

    guid: str
    type: str
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "AuditEventParty":
        data = data or {}
        return cls(guid=data.get("guid", ""), type=data.get("type", ""), name=data.get("name") or None)


@dataclass
class AuditEvent:
    """v3 audit event. Unlike v2 records these carry their fields at the top level."""

    guid: str
    type: str
    actor: AuditEventParty
    target: AuditEventParty
    created_at: datetime | None = None
    updated_at: datetime | None = None
    data: dict[str, Any] = field(default_factory=dict)
    space_guid: str | None = None
    organization_guid: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuditEvent":
        return cls(
            guid=data["guid"],
            type=data["type"],
            actor=AuditEventParty.from_dict(data.get("actor")),
            target=AuditEventParty.from_dict(data.get("target")),
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
            data=dict(data.get("data") or {}),
            space_guid=(data.get("space") or {}).get("guid"),
            organization_guid=(data.get("organization") or {}).get("guid"),
        )


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value)


@dataclass
class AuditEventPage:
    """One page of audit events with the counters needed to render a pager."""

    events: list[AuditEvent]
    pagination: Pagination
