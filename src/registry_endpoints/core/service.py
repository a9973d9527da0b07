"""Registry service: endpoint lookup in order of preference."""

import logging

from ..constants import (
    DEFAULT_NAMESPACE,
    DEFAULT_REGISTRY_VERSION_HEADER,
    DEFAULT_V1_REGISTRY,
    DEFAULT_V2_REGISTRY,
    INDEX_NAME,
    V2_VERSION,
    V2_VERSION_TYPE,
)
from ..exceptions import InvalidRepositoryNameError
from .config import ServiceConfig
from .trust import resolve_mirror_trust, resolve_trust, server_default_trust
from .types import (
    APIEndpoint,
    APIVersion,
    APIVersionDescriptor,
    IndexInfo,
    RepositoryInfo,
    TrustPolicy,
)

V2_VERSIONS = (APIVersionDescriptor(type=V2_VERSION_TYPE, version=V2_VERSION),)


class RegistryService:
    """Resolves where, and with which TLS policy, to reach a repository."""

    def __init__(
        self,
        config: ServiceConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the registry service.

        Args:
            config: Configuration snapshot (defaults to an empty configuration)
            logger: Logger receiving lookup diagnostics
        """
        self._config = config if config is not None else ServiceConfig()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def config(self) -> ServiceConfig:
        return self._config

    def reload(self, config: ServiceConfig) -> None:
        """Swap in a new configuration snapshot.

        Lookups already running keep the snapshot they started with.
        """
        self._config = config

    def resolve_repository(self, name: str) -> RepositoryInfo:
        """Split a repository name into its components and index configuration."""
        return self._config.new_repository_info(name)

    def resolve_index(self, name: str) -> IndexInfo:
        """Return the index configuration for an index name."""
        return self._config.new_index_info(name)

    def tls_config(self, hostname: str) -> TrustPolicy:
        """Resolve the TLS policy for a registry host."""
        return resolve_trust(self._config, hostname)

    def lookup_pull_endpoints(self, repo_name: str) -> list[APIEndpoint]:
        """Create the list of endpoints to try to pull from, in order of preference.

        Mirrors come before the registry itself, v2 before v1, and HTTPS
        before plain HTTP.

        Raises:
            InvalidRepositoryNameError: If the name has no host component
            ConfigurationError: If a mirror or host trust policy cannot be resolved
        """
        return self._lookup_endpoints(repo_name)

    def lookup_push_endpoints(self, repo_name: str) -> list[APIEndpoint]:
        """Create the list of endpoints to try to push to, in order of preference.

        Same as the pull list with mirrors removed.
        """
        return [
            endpoint
            for endpoint in self._lookup_endpoints(repo_name)
            if not endpoint.mirror
        ]

    def _lookup_endpoints(self, repo_name: str) -> list[APIEndpoint]:
        config = self._config
        self.logger.debug(f"Looking up endpoints for {repo_name}")

        endpoints = []
        for mirror in config.mirrors:
            mirror_trust = resolve_mirror_trust(config, mirror)
            self.logger.debug(f"Adding mirror endpoint {mirror}")
            endpoints.append(
                APIEndpoint(
                    url=mirror,
                    # Mirrors are assumed to speak v2
                    version=APIVersion.V2,
                    trust=mirror_trust,
                    mirror=True,
                    trim_hostname=True,
                )
            )

        if repo_name.startswith(DEFAULT_NAMESPACE + "/"):
            endpoints.extend(self._official_endpoints(config))
            self.logger.debug(f"Endpoints for {repo_name}: {endpoints}")
            return endpoints

        slash_index = repo_name.find("/")
        if slash_index <= 0:
            raise InvalidRepositoryNameError(
                f"Invalid repository name: missing hostname before '/': {repo_name!r}"
            )
        hostname = repo_name[:slash_index]

        trust = resolve_trust(config, hostname)

        self.logger.debug(f"Adding secure endpoints for https://{hostname}")
        endpoints.extend(self._host_endpoints(f"https://{hostname}", trust))

        if not trust.is_secure:
            # Same policy object: skip-verify is what allows plain HTTP here
            self.logger.debug(f"Adding insecure endpoints for http://{hostname}")
            endpoints.extend(self._host_endpoints(f"http://{hostname}", trust))

        self.logger.debug(f"Endpoints for {repo_name}: {endpoints}")
        return endpoints

    def _official_endpoints(self, config: ServiceConfig) -> list[APIEndpoint]:
        trust = server_default_trust(INDEX_NAME)
        self.logger.debug(f"Adding official v2 endpoint {DEFAULT_V2_REGISTRY}")
        endpoints = [
            APIEndpoint(
                url=DEFAULT_V2_REGISTRY,
                version=APIVersion.V2,
                trust=trust,
                official=True,
                trim_hostname=True,
            )
        ]

        if config.legacy_protocol_supported:
            self.logger.debug(f"Adding official v1 endpoint {DEFAULT_V1_REGISTRY}")
            endpoints.append(
                APIEndpoint(
                    url=DEFAULT_V1_REGISTRY,
                    version=APIVersion.V1,
                    trust=trust,
                    official=True,
                    trim_hostname=True,
                )
            )
        return endpoints

    @staticmethod
    def _host_endpoints(base_url: str, trust: TrustPolicy) -> list[APIEndpoint]:
        return [
            APIEndpoint(
                url=base_url,
                version=APIVersion.V2,
                trust=trust,
                trim_hostname=True,
                version_header=DEFAULT_REGISTRY_VERSION_HEADER,
                versions=V2_VERSIONS,
            ),
            APIEndpoint(
                url=base_url,
                version=APIVersion.V1,
                trust=trust,
                trim_hostname=True,
            ),
        ]
