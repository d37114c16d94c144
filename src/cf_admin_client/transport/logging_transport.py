"""Request logging transport.

Wraps another httpx transport and reports every exchange with the Cloud
Controller or identity server. Headers are never logged, so bearer tokens and
basic-auth secrets stay out of the log.

```python
import httpx
from cf_admin_client.transport.logging_transport import LoggingTransport

transport = LoggingTransport(wrapped_transport=httpx.AsyncHTTPTransport())

async with httpx.AsyncClient(transport=transport) as client:
    response = await client.get("https://api.example.com/v2/info")
```
"""

import logging
import time

import httpx

logger = logging.getLogger(__name__)


class LoggingTransport(httpx.AsyncBaseTransport):
    """Transport that logs requests, responses and transport failures.

    Successful exchanges are logged at DEBUG, non-2xx responses at WARNING.
    Transport errors are logged and re-raised unchanged.

    Args:
        wrapped_transport: The underlying transport to wrap
        log: Logger to report to (default: this module's logger)
    """

    def __init__(
        self,
        *,
        wrapped_transport: httpx.AsyncBaseTransport,
        log: logging.Logger | None = None,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self._log = log or logger

    async def __aenter__(self):
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        started = time.monotonic()
        try:
            response = await self._wrapped_transport.handle_async_request(request)
        except httpx.TransportError as e:
            self._log.warning(f"Request {request.method} {request.url} failed: {e!r}")
            raise

        elapsed_ms = (time.monotonic() - started) * 1000
        if 200 <= response.status_code < 300:
            self._log.debug(f"{request.method} {request.url} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        else:
            self._log.warning(
                f"{request.method} {request.url} -> {response.status_code} ({elapsed_ms:.1f} ms)"
            )
        return response
