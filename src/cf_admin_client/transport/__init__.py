"""Transport layers for the Cloud Foundry client.

Transport layers wrap an httpx async transport to add cross-cutting
behaviour. The client does not retry: a failed request surfaces to the caller
immediately.

Modules:
    logging_transport: Request/response logging

Example:
    ```python
    from cf_admin_client.transport import create_transport_stack

    transport = create_transport_stack(verify_ssl=False)
    ```
"""

import logging

import httpx

from cf_admin_client.transport.logging_transport import LoggingTransport


def create_transport_stack(
    *,
    wrapped_transport: httpx.AsyncBaseTransport | None = None,
    verify_ssl: bool = True,
    log: logging.Logger | None = None,
) -> httpx.AsyncBaseTransport:
    """Build the transport used by :class:`~cf_admin_client.client.CloudFoundryClient`.

    Args:
        wrapped_transport: Innermost transport. Defaults to a real network
            transport; tests pass an ``httpx.MockTransport``.
        verify_ssl: Verify TLS certificates of the default network transport.
        log: Logger for request logging.
    """
    if wrapped_transport is None:
        wrapped_transport = httpx.AsyncHTTPTransport(verify=verify_ssl)
    return LoggingTransport(wrapped_transport=wrapped_transport, log=log)


__all__ = ["LoggingTransport", "create_transport_stack"]
