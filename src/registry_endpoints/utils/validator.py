"""Validation utilities for registry configuration values and names."""

import ipaddress
import re
from urllib.parse import SplitResult, urlsplit

from ..constants import INDEX_HOSTNAME, INDEX_NAME
from ..exceptions import (
    ConfigurationError,
    InvalidHostnameError,
    InvalidIndexNameError,
    InvalidRepositoryNameError,
)

# One path component of a remote repository name
REMOTE_COMPONENT_PATTERN = re.compile(r"^[a-z0-9]+(?:[._-][a-z0-9]+)*$")

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


def is_valid_scheme(scheme: str) -> bool:
    """Check if scheme is usable for a registry mirror."""
    return scheme in ("http", "https")


def has_only_root_path(path: str) -> bool:
    """Check if URL path is empty or the root path."""
    return path in ("", "/")


def has_credentials(parts: SplitResult) -> bool:
    """Check if URL carries a user or password."""
    return parts.username is not None or parts.password is not None


def url_host(parts: SplitResult) -> str:
    """Return ``host[:port]`` of a split URL without any credentials.

    IPv6 addresses keep their brackets. Raises ValueError for a bad port.
    """
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    if parts.port is not None:
        return f"{host}:{parts.port}"
    return host


def validate_mirror(value: str) -> str:
    """Validate a mirror URL and normalize it to ``scheme://host``.

    Args:
        value: Mirror URL (e.g., https://mirror.example.com/)

    Returns:
        Normalized mirror URL without trailing slash

    Raises:
        ConfigurationError: If the URL is not a bare http(s) base URL
    """
    try:
        parts = urlsplit(value)
        host = url_host(parts)
    except ValueError as e:
        raise ConfigurationError(f"Invalid mirror URL {value!r}: {e}") from e

    if not is_valid_scheme(parts.scheme):
        raise ConfigurationError(f"Unsupported scheme in mirror URL: {value!r}")

    if has_credentials(parts):
        raise ConfigurationError("Mirror URL must not contain credentials")

    if not host:
        raise ConfigurationError(f"Missing host in mirror URL: {value!r}")

    if not has_only_root_path(parts.path) or parts.query or parts.fragment:
        raise ConfigurationError(f"Mirror URL must not contain a path: {value!r}")

    return f"{parts.scheme}://{host}"


def parse_cidr(value: str) -> IPNetwork | None:
    """Parse a CIDR string, returning None if the value is not a CIDR."""
    if "/" not in value:
        return None
    try:
        return ipaddress.ip_network(value, strict=False)
    except ValueError:
        return None


def validate_hostname(hostname: str) -> str:
    """Validate a bare hostname (optionally with port).

    Raises:
        InvalidHostnameError: If hostname is empty, padded, or contains a path
    """
    if not isinstance(hostname, str) or not hostname.strip():
        raise InvalidHostnameError("Hostname must not be empty")

    if hostname != hostname.strip():
        raise InvalidHostnameError(
            f"Hostname must not have surrounding whitespace: {hostname!r}"
        )

    if "/" in hostname or "\\" in hostname or hostname in (".", ".."):
        raise InvalidHostnameError(f"Invalid hostname: {hostname!r}")

    return hostname


def validate_index_name(name: str) -> str:
    """Validate an index name, mapping the legacy index hostname to its name.

    Raises:
        InvalidIndexNameError: If name starts or ends with a hyphen
    """
    if name == INDEX_HOSTNAME:
        name = INDEX_NAME

    if not name or name.startswith("-") or name.endswith("-"):
        raise InvalidIndexNameError(
            f"Invalid index name ({name}). Cannot begin or end with a hyphen."
        )

    return name


def validate_remote_name(remote_name: str) -> str:
    """Validate the path part of a repository name.

    Raises:
        InvalidRepositoryNameError: If any component is malformed
    """
    if not remote_name:
        raise InvalidRepositoryNameError("Repository name must not be empty")

    for component in remote_name.split("/"):
        if not REMOTE_COMPONENT_PATTERN.match(component):
            raise InvalidRepositoryNameError(
                f"Invalid repository name component {component!r} in {remote_name!r}, "
                "only [a-z0-9] separated by '.', '_' or '-' are allowed"
            )

    return remote_name


def split_host_port(hostname: str) -> str:
    """Strip an optional port from ``host[:port]`` or ``[v6addr]:port``."""
    if hostname.startswith("["):
        end = hostname.find("]")
        if end != -1:
            return hostname[1:end]
        return hostname

    # Bare IPv6 literal
    if hostname.count(":") > 1:
        return hostname

    host, _, _ = hostname.partition(":")
    return host
