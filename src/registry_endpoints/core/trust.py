"""Transport trust resolution for registry hosts."""

from urllib.parse import urlsplit

from ..exceptions import ConfigurationError
from ..utils.validator import url_host, validate_hostname
from .config import ServiceConfig
from .transport import build_ssl_context
from .types import TrustPolicy


def server_default_trust(hostname: str) -> TrustPolicy:
    """Verifying policy with system CAs only, used for the canonical registry."""
    return TrustPolicy(hostname=hostname, ssl_context=build_ssl_context())


def resolve_trust(config: ServiceConfig, hostname: str) -> TrustPolicy:
    """Resolve the TLS policy for a registry host.

    Secure hosts are verified against the system CA store plus any custom
    certificates enrolled for that exact host. Verification is skipped only
    for hosts the configuration declares insecure.

    Args:
        config: Configuration snapshot
        hostname: Bare hostname, optionally with port (e.g., registry.local:5000)

    Returns:
        Trust policy for the host

    Raises:
        InvalidHostnameError: If hostname is empty or malformed
        CertificateError: If enrolled certificate material cannot be loaded
    """
    hostname = validate_hostname(hostname)

    if not config.is_secure_index(hostname):
        return TrustPolicy(
            hostname=hostname,
            insecure_skip_verify=True,
            ssl_context=build_ssl_context(insecure_skip_verify=True),
        )

    bundle = config.certificate_bundle_for(hostname)
    if bundle is None or bundle.is_empty():
        return server_default_trust(hostname)

    return TrustPolicy(
        hostname=hostname,
        ca_files=bundle.ca_files,
        client_certificates=bundle.client_certificates,
        ssl_context=build_ssl_context(
            ca_files=bundle.ca_files,
            client_certificates=bundle.client_certificates,
        ),
    )


def mirror_hostname(mirror: str) -> str:
    """Extract ``host[:port]`` of a mirror URL, leaving out any credentials.

    Raises:
        ConfigurationError: If the URL cannot be parsed or has no host
    """
    try:
        host = url_host(urlsplit(mirror))
    except ValueError as e:
        raise ConfigurationError(f"Invalid mirror URL {mirror!r}: {e}") from e

    if not host:
        raise ConfigurationError(f"Missing host in mirror URL: {mirror!r}")
    return host


def resolve_mirror_trust(config: ServiceConfig, mirror: str) -> TrustPolicy:
    """Resolve the TLS policy for a mirror against the mirror's own host."""
    return resolve_trust(config, mirror_hostname(mirror))
