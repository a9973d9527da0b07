"""Tests for API version negotiation helpers."""

import pytest
from multidict import CIMultiDict

from registry_endpoints import APIVersionDescriptor
from registry_endpoints.core.versions import (
    check_api_version_header,
    endpoint_supports_versions,
    header_values,
    parse_api_versions,
    versions_match,
)

V2 = APIVersionDescriptor("registry", "2.0")


class TestParsing:
    """Parsing advertised versions."""

    def test_descriptor_parse(self):
        assert APIVersionDescriptor.parse("registry/2.0") == V2
        assert APIVersionDescriptor.parse("registry") == APIVersionDescriptor(
            "registry", ""
        )
        assert str(V2) == "registry/2.0"

    def test_parse_single_value(self):
        headers = {"Docker-Distribution-Api-Version": "registry/2.0"}
        assert parse_api_versions(headers) == [V2]

    def test_parse_is_case_insensitive(self):
        headers = {"docker-distribution-api-version": "registry/2.0"}
        assert parse_api_versions(headers) == [V2]

    def test_parse_multiple_tokens(self):
        headers = {"Docker-Distribution-Api-Version": "registry/2.0 trust/1.0,registry/2.1"}
        assert parse_api_versions(headers) == [
            V2,
            APIVersionDescriptor("trust", "1.0"),
            APIVersionDescriptor("registry", "2.1"),
        ]

    def test_parse_multidict(self):
        headers = CIMultiDict()
        headers.add("Docker-Distribution-Api-Version", "registry/2.0")
        headers.add("docker-distribution-api-version", "trust/1.0")

        assert header_values(headers, "Docker-Distribution-Api-Version") == [
            "registry/2.0",
            "trust/1.0",
        ]
        assert len(parse_api_versions(headers)) == 2

    def test_parse_missing_header(self):
        assert parse_api_versions({}) == []

    def test_parse_custom_header(self):
        headers = {"X-Api-Version": "registry/2.0"}
        assert parse_api_versions(headers, "X-Api-Version") == [V2]


class TestMatching:
    """Matching advertised versions against expectations."""

    def test_versions_match(self):
        assert versions_match([V2], [V2])
        assert not versions_match([APIVersionDescriptor("registry", "1.0")], [V2])
        assert not versions_match([], [V2])

    @pytest.mark.parametrize(
        "headers,expected",
        [
            ({"Docker-Distribution-Api-Version": "registry/2.0"}, True),
            ({"Docker-Distribution-Api-Version": "registry/1.0"}, False),
            ({}, False),
        ],
    )
    def test_check_api_version_header(self, headers, expected):
        assert check_api_version_header(headers) is expected

    def test_endpoint_supports_versions(self, service):
        v2, v1 = service.lookup_pull_endpoints("registry.example.com/team/app")

        assert endpoint_supports_versions(
            v2, {"Docker-Distribution-Api-Version": "registry/2.0"}
        )
        assert not endpoint_supports_versions(v2, {})
        # Nothing advertised, nothing to negotiate
        assert endpoint_supports_versions(v1, {})
