"""API version negotiation helpers."""

import re
from typing import Iterable, Mapping

from ..constants import DEFAULT_REGISTRY_VERSION_HEADER
from .service import V2_VERSIONS
from .types import APIEndpoint, APIVersionDescriptor

_TOKEN_SEPARATOR = re.compile(r"[\s,]+")


def header_values(headers: Mapping[str, str], name: str) -> list[str]:
    """Return every value of a header, matching the name case-insensitively.

    Multi-value mappings (aiohttp's ``CIMultiDictProxy``) expose ``getall``.
    """
    getall = getattr(headers, "getall", None)
    if getall is not None:
        return list(getall(name, []))

    lowered = name.lower()
    return [value for key, value in headers.items() if key.lower() == lowered]


def parse_api_versions(
    headers: Mapping[str, str],
    version_header: str = DEFAULT_REGISTRY_VERSION_HEADER,
) -> list[APIVersionDescriptor]:
    """Parse the API versions a registry advertised in a response.

    Args:
        headers: Response headers
        version_header: Header carrying the versions

    Returns:
        Descriptors in the order they appeared
    """
    versions = []
    for value in header_values(headers, version_header):
        for token in _TOKEN_SEPARATOR.split(value.strip()):
            if token:
                versions.append(APIVersionDescriptor.parse(token))
    return versions


def versions_match(
    advertised: Iterable[APIVersionDescriptor],
    expected: Iterable[APIVersionDescriptor],
) -> bool:
    """Check if any advertised version is one of the expected versions."""
    expected = set(expected)
    return any(version in expected for version in advertised)


def check_api_version_header(headers: Mapping[str, str]) -> bool:
    """Check if headers advertise the v2 registry API."""
    return versions_match(parse_api_versions(headers), V2_VERSIONS)


def endpoint_supports_versions(
    endpoint: APIEndpoint, headers: Mapping[str, str]
) -> bool:
    """Check if a response from an endpoint confirms the versions it advertises.

    Endpoints without a version header or versions have nothing to negotiate
    and always match.
    """
    if not endpoint.version_header or not endpoint.versions:
        return True
    return versions_match(
        parse_api_versions(headers, endpoint.version_header), endpoint.versions
    )
