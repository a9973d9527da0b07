"""Test configuration and fixtures."""

import pytest

from registry_endpoints import RegistryService, ServiceConfig


@pytest.fixture
def certs_dir(tmp_path):
    """Empty per-host certificate directory root."""
    path = tmp_path / "certs.d"
    path.mkdir()
    return path


@pytest.fixture
def make_service(certs_dir):
    """Factory building a service from daemon-style options."""

    def _make(
        mirrors=(),
        insecure_registries=(),
        legacy_protocol_supported=True,
    ) -> RegistryService:
        config = ServiceConfig.from_options(
            mirrors=mirrors,
            insecure_registries=insecure_registries,
            certs_dir=str(certs_dir),
            legacy_protocol_supported=legacy_protocol_supported,
        )
        return RegistryService(config)

    return _make


@pytest.fixture
def service(make_service):
    """Service with no mirrors and default insecure networks."""
    return make_service()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as unit test (default)")
