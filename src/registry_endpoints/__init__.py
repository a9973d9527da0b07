"""Registry endpoint resolution - ordered registry endpoints and TLS trust policies."""

__version__ = "0.1.0"

from .core.config import ServiceConfig
from .core.service import RegistryService
from .core.types import (
    APIEndpoint,
    APIVersion,
    APIVersionDescriptor,
    IndexInfo,
    RepositoryInfo,
    TrustPolicy,
)
from .endpoints import (
    lookup_pull_endpoints,
    lookup_push_endpoints,
    resolve_repository,
    resolve_trust,
)
from .exceptions import (
    CertificateError,
    ConfigurationError,
    InvalidHostnameError,
    InvalidIndexNameError,
    InvalidRepositoryNameError,
    RegistryError,
    ValidationError,
)

__all__ = [
    "RegistryService",
    "ServiceConfig",
    "APIEndpoint",
    "APIVersion",
    "APIVersionDescriptor",
    "IndexInfo",
    "RepositoryInfo",
    "TrustPolicy",
    "lookup_pull_endpoints",
    "lookup_push_endpoints",
    "resolve_repository",
    "resolve_trust",
    "RegistryError",
    "ValidationError",
    "InvalidRepositoryNameError",
    "InvalidHostnameError",
    "InvalidIndexNameError",
    "ConfigurationError",
    "CertificateError",
]
