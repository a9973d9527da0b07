"""Core data types for endpoint and trust resolution."""

import ssl
from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import urlsplit


class APIVersion(str, Enum):
    """Registry wire API generation."""

    V1 = "v1"
    V2 = "v2"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class APIVersionDescriptor:
    """API version advertised by a registry, e.g. ``registry/2.0``."""

    type: str
    version: str

    @classmethod
    def parse(cls, value: str) -> "APIVersionDescriptor":
        """Parse a ``type/version`` token; a token without ``/`` has no version."""
        type_, sep, version = value.partition("/")
        if not sep:
            return cls(type=value, version="")
        return cls(type=type_, version=version)

    def __str__(self) -> str:
        return f"{self.type}/{self.version}"


@dataclass(frozen=True)
class CertificateBundle:
    """Custom certificate material registered for a single host."""

    ca_files: tuple[str, ...] = ()
    client_certificates: tuple[tuple[str, str], ...] = ()

    def is_empty(self) -> bool:
        return not self.ca_files and not self.client_certificates


@dataclass(frozen=True)
class TrustPolicy:
    """Resolved TLS decision for one hostname.

    Either verification against the default CA store plus any custom
    material enrolled for the host, or skipped verification for a host
    explicitly declared insecure.
    """

    hostname: str
    insecure_skip_verify: bool = False
    ca_files: tuple[str, ...] = ()
    client_certificates: tuple[tuple[str, str], ...] = ()
    ssl_context: ssl.SSLContext | None = field(
        default=None, compare=False, repr=False
    )

    @property
    def is_secure(self) -> bool:
        """True when certificates are verified."""
        return not self.insecure_skip_verify


@dataclass(frozen=True)
class APIEndpoint:
    """A candidate registry endpoint, tried in the order it was produced."""

    url: str
    version: APIVersion
    trust: TrustPolicy
    mirror: bool = False
    official: bool = False
    trim_hostname: bool = False
    version_header: str | None = None
    versions: tuple[APIVersionDescriptor, ...] = ()

    @property
    def scheme(self) -> str:
        return urlsplit(self.url).scheme

    @property
    def host(self) -> str:
        return urlsplit(self.url).netloc

    @property
    def is_secure(self) -> bool:
        return self.trust.is_secure

    @property
    def ping_url(self) -> str:
        """URL of the version check for this endpoint's API generation."""
        base = self.url.rstrip("/")
        if self.version is APIVersion.V2:
            return f"{base}/v2/"
        return f"{base}/v1/_ping"


@dataclass(frozen=True)
class IndexInfo:
    """Configuration of one registry index."""

    name: str
    mirrors: tuple[str, ...] = ()
    secure: bool = True
    official: bool = False


@dataclass(frozen=True)
class RepositoryInfo:
    """A repository reference split into its index and remote name."""

    index: IndexInfo
    remote_name: str
    local_name: str
    canonical_name: str
    official: bool = False

    @property
    def lookup_name(self) -> str:
        """Name to hand to endpoint lookup.

        Official repositories keep their ``library/`` remote name, everything
        else is prefixed with its index host.
        """
        if self.official:
            return self.remote_name
        return f"{self.index.name}/{self.remote_name}"
