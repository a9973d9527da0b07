"""Tests for SSL context and aiohttp transport construction."""

import ssl

import aiohttp
import pytest

from registry_endpoints import APIEndpoint, APIVersion, CertificateError, TrustPolicy
from registry_endpoints.core.transport import (
    build_ssl_context,
    create_connector,
    create_session,
    ssl_context_for,
)
from tests.helpers import write_host_files


class TestSSLContext:
    """SSL context construction."""

    def test_default_context_verifies(self):
        context = build_ssl_context()
        assert context.verify_mode == ssl.CERT_REQUIRED
        assert context.check_hostname is True

    def test_insecure_context(self):
        context = build_ssl_context(insecure_skip_verify=True)
        assert context.verify_mode == ssl.CERT_NONE
        assert context.check_hostname is False

    def test_insecure_context_ignores_certificates(self, tmp_path):
        context = build_ssl_context(
            insecure_skip_verify=True, ca_files=(str(tmp_path / "missing.crt"),)
        )
        assert context.verify_mode == ssl.CERT_NONE

    def test_missing_ca_file(self, tmp_path):
        with pytest.raises(CertificateError, match="missing.crt"):
            build_ssl_context(ca_files=(str(tmp_path / "missing.crt"),))

    def test_malformed_client_certificate(self, certs_dir):
        host_dir = write_host_files(certs_dir, "h", "client.cert", "client.key")

        with pytest.raises(CertificateError):
            build_ssl_context(
                client_certificates=(
                    (str(host_dir / "client.cert"), str(host_dir / "client.key")),
                )
            )

    def test_policy_context_is_reused(self):
        context = build_ssl_context()
        policy = TrustPolicy(hostname="h", ssl_context=context)
        assert ssl_context_for(policy) is context

    def test_policy_without_context(self):
        policy = TrustPolicy(hostname="h", insecure_skip_verify=True)
        assert ssl_context_for(policy).verify_mode == ssl.CERT_NONE


class TestAiohttpTransport:
    """aiohttp connector and session construction."""

    @pytest.mark.asyncio
    async def test_create_connector(self):
        policy = TrustPolicy(hostname="h", ssl_context=build_ssl_context())
        connector = create_connector(policy, limit=5)
        try:
            assert isinstance(connector, aiohttp.TCPConnector)
            assert connector.limit == 5
        finally:
            await connector.close()

    @pytest.mark.asyncio
    async def test_create_session(self, make_service):
        service = make_service(insecure_registries=["registry.internal:5000"])
        endpoint = service.lookup_pull_endpoints("registry.internal:5000/app")[2]

        session = await create_session(endpoint, timeout=5)
        try:
            assert isinstance(session, aiohttp.ClientSession)
            assert session.timeout.total == 5
        finally:
            await session.close()


class TestEndpointProperties:
    """Derived endpoint attributes."""

    def test_ping_urls(self):
        trust = TrustPolicy(hostname="registry.example.com")
        v2 = APIEndpoint("https://registry.example.com", APIVersion.V2, trust)
        v1 = APIEndpoint("https://registry.example.com/", APIVersion.V1, trust)

        assert v2.ping_url == "https://registry.example.com/v2/"
        assert v1.ping_url == "https://registry.example.com/v1/_ping"

    def test_scheme_and_host(self):
        trust = TrustPolicy(hostname="localhost:5000", insecure_skip_verify=True)
        endpoint = APIEndpoint("http://localhost:5000", APIVersion.V2, trust)

        assert endpoint.scheme == "http"
        assert endpoint.host == "localhost:5000"
        assert not endpoint.is_secure
        assert str(endpoint.version) == "v2"
