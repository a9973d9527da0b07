"""Test helper functions."""

from pathlib import Path

from registry_endpoints import APIEndpoint


def write_host_files(certs_dir: Path, hostname: str, *names: str) -> Path:
    """Create placeholder certificate files for a host."""
    host_dir = certs_dir / hostname
    host_dir.mkdir(parents=True, exist_ok=True)
    for name in names:
        (host_dir / name).write_text("placeholder\n")
    return host_dir


def describe(endpoints: list[APIEndpoint]) -> list[tuple[str, str]]:
    """Reduce endpoints to (url, version) pairs for order assertions."""
    return [(endpoint.url, endpoint.version.value) for endpoint in endpoints]
