"""TLS and aiohttp transport construction from resolved trust policies."""

import ssl

import aiohttp

from ..exceptions import CertificateError
from .types import APIEndpoint, TrustPolicy


def build_ssl_context(
    insecure_skip_verify: bool = False,
    ca_files: tuple[str, ...] = (),
    client_certificates: tuple[tuple[str, str], ...] = (),
) -> ssl.SSLContext:
    """Build a client SSL context.

    Args:
        insecure_skip_verify: Disable certificate and hostname verification
        ca_files: Extra CA bundles trusted on top of the system store
        client_certificates: (certificate, key) path pairs presented to the server

    Returns:
        Configured SSL context

    Raises:
        CertificateError: If any certificate file cannot be loaded
    """
    context = ssl.create_default_context()

    if insecure_skip_verify:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
        return context

    for ca_file in ca_files:
        try:
            context.load_verify_locations(cafile=ca_file)
        except (ssl.SSLError, OSError) as e:
            raise CertificateError(f"Cannot load CA certificate {ca_file}: {e}") from e

    for cert_file, key_file in client_certificates:
        try:
            context.load_cert_chain(certfile=cert_file, keyfile=key_file)
        except (ssl.SSLError, OSError) as e:
            raise CertificateError(
                f"Cannot load client certificate {cert_file} with key {key_file}: {e}"
            ) from e

    return context


def ssl_context_for(trust: TrustPolicy) -> ssl.SSLContext:
    """Return the trust policy's SSL context, building one if it has none."""
    if trust.ssl_context is not None:
        return trust.ssl_context
    return build_ssl_context(
        trust.insecure_skip_verify, trust.ca_files, trust.client_certificates
    )


def create_connector(trust: TrustPolicy, limit: int = 100) -> aiohttp.TCPConnector:
    """Create an aiohttp connector that enforces a trust policy.

    Args:
        trust: Resolved trust policy for the target host
        limit: Maximum number of simultaneous connections

    Returns:
        TCP connector bound to the policy's SSL context
    """
    return aiohttp.TCPConnector(ssl=ssl_context_for(trust), limit=limit)


async def create_session(
    endpoint: APIEndpoint, timeout: int = 30
) -> aiohttp.ClientSession:
    """Create an aiohttp session for talking to one endpoint candidate.

    No request is issued; the caller owns the session and must close it.

    Args:
        endpoint: Endpoint candidate whose trust policy the session enforces
        timeout: Total request timeout in seconds

    Returns:
        Client session
    """
    return aiohttp.ClientSession(
        connector=create_connector(endpoint.trust),
        timeout=aiohttp.ClientTimeout(total=timeout),
    )
