"""Tests for the request logging transport."""

import logging

import httpx
import pytest

from cf_admin_client.transport import LoggingTransport, create_transport_stack

LOGGER_NAME = "cf_admin_client.transport.logging_transport"


class TestLoggingTransport:
    """LoggingTransport reports exchanges without leaking credentials."""

    @pytest.mark.unit
    async def test_success_logged_at_debug(self, caplog):
        transport = LoggingTransport(wrapped_transport=httpx.MockTransport(lambda request: httpx.Response(200)))

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            async with httpx.AsyncClient(transport=transport) as client:
                response = await client.get("https://example.com/api/v2/info")

        assert response.status_code == 200
        records = [r for r in caplog.records if r.name == LOGGER_NAME]
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG
        assert "GET https://example.com/api/v2/info -> 200" in records[0].getMessage()

    @pytest.mark.unit
    async def test_error_status_logged_at_warning(self, caplog):
        transport = LoggingTransport(wrapped_transport=httpx.MockTransport(lambda request: httpx.Response(404)))

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            async with httpx.AsyncClient(transport=transport) as client:
                response = await client.get("https://example.com/api/v2/apps/missing")

        assert response.status_code == 404
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "-> 404" in warnings[0].getMessage()

    @pytest.mark.unit
    async def test_authorization_header_never_logged(self, caplog):
        transport = LoggingTransport(wrapped_transport=httpx.MockTransport(lambda request: httpx.Response(500)))

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            async with httpx.AsyncClient(transport=transport) as client:
                await client.get("https://example.com/api/v2/info", headers={"Authorization": "Bearer s3cret"})

        assert "s3cret" not in caplog.text

    @pytest.mark.unit
    async def test_transport_error_logged_and_reraised(self, caplog):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        transport = LoggingTransport(wrapped_transport=httpx.MockTransport(handler))

        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            async with httpx.AsyncClient(transport=transport) as client:
                with pytest.raises(httpx.ConnectTimeout):
                    await client.get("https://example.com/api/v2/info")

        assert "failed" in caplog.text

    @pytest.mark.unit
    async def test_custom_logger(self, caplog):
        log = logging.getLogger("console.cf")
        transport = LoggingTransport(wrapped_transport=httpx.MockTransport(lambda request: httpx.Response(204)), log=log)

        with caplog.at_level(logging.DEBUG, logger="console.cf"):
            async with httpx.AsyncClient(transport=transport) as client:
                await client.delete("https://example.com/api/v2/users/u1")

        assert len([r for r in caplog.records if r.name == "console.cf"]) == 1
        assert not [r for r in caplog.records if r.name == LOGGER_NAME]


class TestCreateTransportStack:
    @pytest.mark.unit
    def test_wraps_given_transport(self):
        inner = httpx.MockTransport(lambda request: httpx.Response(200))

        stack = create_transport_stack(wrapped_transport=inner)

        assert isinstance(stack, LoggingTransport)
        assert stack._wrapped_transport is inner

    @pytest.mark.unit
    def test_defaults_to_network_transport(self):
        stack = create_transport_stack(verify_ssl=False)

        assert isinstance(stack._wrapped_transport, httpx.AsyncHTTPTransport)
