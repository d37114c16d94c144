"""Testing utilities for code that talks to a Cloud Controller.

``FakeCloudController`` answers requests from a table of canned responses and
records what was asked, so tests can assert on both results and traffic.

Example:
    ```python
    from cf_admin_client import CloudFoundryClient, CloudFoundryConfig
    from cf_admin_client.testing import FakeCloudController

    fake = FakeCloudController("https://example.com/api")
    fake.add("GET", "/v2/organizations", json={"next_url": None, "resources": []})

    client = CloudFoundryClient(
        CloudFoundryConfig(api_endpoint="https://example.com/api", access_token="token"),
        transport=fake.transport,
    )
    assert await client.organizations() == []
    assert fake.call_count("GET", "/v2/organizations") == 1
    ```
"""

from dataclasses import dataclass, field
from typing import Any

import httpx


class UnexpectedRequestError(AssertionError):
    """Raised when the fake receives a request it has no response for."""

    pass


RouteKey = tuple[str, str, str, tuple[tuple[str, str], ...]]


def _route_key(method: str, url: httpx.URL) -> RouteKey:
    return method.upper(), url.host, url.path, tuple(sorted(url.params.multi_items()))


@dataclass
class _Route:
    status_code: int
    json: Any = None
    text: str | None = None
    times: int | None = None
    calls: int = 0

    def build(self, request: httpx.Request) -> httpx.Response:
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text, request=request)
        if self.json is None:
            return httpx.Response(self.status_code, request=request)
        return httpx.Response(self.status_code, json=self.json, request=request)


@dataclass
class FakeCloudController:
    """Canned-response Cloud Controller (and identity server) for tests.

    Paths given to :meth:`add` are relative to ``base_url`` unless they are
    absolute URLs. Query strings take part in matching, order-insensitively.
    """

    base_url: str = "https://example.com/api"
    requests: list[httpx.Request] = field(default_factory=list)
    _routes: dict[RouteKey, _Route] = field(default_factory=dict)

    def _url(self, path: str) -> httpx.URL:
        if path.startswith(("http://", "https://")):
            return httpx.URL(path)
        return httpx.URL(f"{self.base_url.rstrip('/')}{path}")

    def add(
        self,
        method: str,
        path: str,
        *,
        status_code: int = 200,
        json: Any = None,
        text: str | None = None,
        times: int | None = None,
    ) -> "FakeCloudController":
        """Register a response. ``times`` limits how often it may be served."""
        self._routes[_route_key(method, self._url(path))] = _Route(
            status_code=status_code, json=json, text=text, times=times
        )
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self._routes.get(_route_key(request.method, request.url))
        if route is None or (route.times is not None and route.calls >= route.times):
            raise UnexpectedRequestError(f"No fake response for {request.method} {request.url}")
        route.calls += 1
        return route.build(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def call_count(self, method: str, path: str) -> int:
        key = _route_key(method, self._url(path))
        return sum(1 for request in self.requests if _route_key(request.method, request.url) == key)


def create_envelope(resources: list[Any], next_url: str | None = None) -> dict[str, Any]:
    """Build a v2 list response body."""
    return {
        "total_results": len(resources),
        "total_pages": 1 if next_url is None else 2,
        "prev_url": None,
        "next_url": next_url,
        "resources": resources,
    }


def create_record(guid: str, **entity: Any) -> dict[str, Any]:
    """Build a ``{metadata, entity}`` record."""
    return {
        "metadata": {
            "guid": guid,
            "url": f"/v2/resources/{guid}",
            "created_at": "2016-06-08T16:41:33Z",
            "updated_at": None,
        },
        "entity": entity,
    }


def create_error_response(status_code: int, error: str | None = None, text: str | None = None) -> httpx.Response:
    """Build an error response with either a ``{"error": ...}`` JSON body or a raw text body."""
    if error is not None:
        return httpx.Response(status_code, json={"error": error})
    return httpx.Response(status_code, text=text or "")


__all__ = [
    "FakeCloudController",
    "UnexpectedRequestError",
    "create_envelope",
    "create_error_response",
    "create_record",
]
