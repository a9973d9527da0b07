"""Registry service configuration.

A ``ServiceConfig`` is an immutable snapshot of everything endpoint and trust
resolution read: mirrors, insecure registry classification, per-host
certificate directories and the legacy protocol capability. Reloading the
configuration means building a new snapshot and swapping the reference.
"""

import ipaddress
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..constants import (
    DEFAULT_CERTS_DIR,
    DEFAULT_INSECURE_CIDR,
    DEFAULT_NAMESPACE,
    INDEX_NAME,
)
from ..exceptions import (
    CertificateError,
    ConfigurationError,
    InvalidIndexNameError,
    InvalidRepositoryNameError,
)
from ..utils.validator import (
    IPNetwork,
    parse_cidr,
    split_host_port,
    validate_hostname,
    validate_index_name,
    validate_mirror,
    validate_remote_name,
)
from .types import CertificateBundle, IndexInfo, RepositoryInfo

logger = logging.getLogger(__name__)

LOOPBACK_ADDRESSES = (
    ipaddress.ip_address("127.0.0.1"),
    ipaddress.ip_address("::1"),
)


def _default_insecure_cidrs() -> tuple[IPNetwork, ...]:
    return (ipaddress.ip_network(DEFAULT_INSECURE_CIDR),)


def host_addresses(hostname: str) -> list:
    """Return the addresses known for a host without any DNS lookup.

    IP literals map to themselves and ``localhost`` maps to loopback;
    any other name has no known address.
    """
    host = split_host_port(hostname)
    if host == "localhost":
        return list(LOOPBACK_ADDRESSES)
    try:
        return [ipaddress.ip_address(host)]
    except ValueError:
        return []


@dataclass(frozen=True)
class ServiceConfig:
    """Registry configuration snapshot."""

    mirrors: tuple[str, ...] = ()
    insecure_registry_cidrs: tuple[IPNetwork, ...] = field(
        default_factory=_default_insecure_cidrs
    )
    index_configs: dict[str, IndexInfo] = field(default_factory=dict)
    certs_dir: str = DEFAULT_CERTS_DIR
    legacy_protocol_supported: bool = True

    def __post_init__(self) -> None:
        # The official index is always configured, secure, and owns the mirrors
        index_configs = dict(self.index_configs)
        index_configs[INDEX_NAME] = IndexInfo(
            name=INDEX_NAME, mirrors=tuple(self.mirrors), secure=True, official=True
        )
        object.__setattr__(self, "mirrors", tuple(self.mirrors))
        object.__setattr__(self, "index_configs", index_configs)

    @classmethod
    def from_options(
        cls,
        mirrors: Iterable[str] = (),
        insecure_registries: Iterable[str] = (),
        certs_dir: str = DEFAULT_CERTS_DIR,
        legacy_protocol_supported: bool = True,
    ) -> "ServiceConfig":
        """Build a configuration from daemon-style options.

        Args:
            mirrors: Mirror base URLs in preference order
            insecure_registries: CIDRs or registry hostnames to treat as insecure
            certs_dir: Directory holding per-host certificate directories
            legacy_protocol_supported: Whether the v1 protocol may be used

        Raises:
            ConfigurationError: If a mirror or insecure registry entry is invalid
        """
        validated_mirrors = tuple(validate_mirror(mirror) for mirror in mirrors)

        cidrs = list(_default_insecure_cidrs())
        index_configs: dict[str, IndexInfo] = {}
        for entry in insecure_registries:
            entry = entry.strip()
            if not entry:
                raise ConfigurationError("Insecure registry entry must not be empty")

            network = parse_cidr(entry)
            if network is not None:
                if network not in cidrs:
                    cidrs.append(network)
                continue

            if "/" in entry:
                raise ConfigurationError(f"Invalid insecure registry: {entry!r}")
            try:
                entry = validate_index_name(entry)
            except InvalidIndexNameError as e:
                raise ConfigurationError(f"Invalid insecure registry: {e}") from e
            if entry == INDEX_NAME:
                raise ConfigurationError(
                    f"Official index {INDEX_NAME} cannot be marked insecure"
                )
            index_configs[entry] = IndexInfo(name=entry, secure=False)

        return cls(
            mirrors=validated_mirrors,
            insecure_registry_cidrs=tuple(cidrs),
            index_configs=index_configs,
            certs_dir=certs_dir,
            legacy_protocol_supported=legacy_protocol_supported,
        )

    @classmethod
    def from_daemon_config(
        cls,
        path: str | Path,
        certs_dir: str = DEFAULT_CERTS_DIR,
        legacy_protocol_supported: bool = True,
    ) -> "ServiceConfig":
        """Load mirrors and insecure registries from a daemon JSON file.

        Only the ``registry-mirrors`` and ``insecure-registries`` keys are read.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Cannot read daemon config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Daemon config {path} must be a JSON object")

        mirrors = data.get("registry-mirrors", [])
        insecure = data.get("insecure-registries", [])
        if not isinstance(mirrors, list) or not isinstance(insecure, list):
            raise ConfigurationError(
                "registry-mirrors and insecure-registries must be lists"
            )

        logger.debug(
            f"Loaded daemon config {path}: {len(mirrors)} mirrors, "
            f"{len(insecure)} insecure registries"
        )
        return cls.from_options(
            mirrors=mirrors,
            insecure_registries=insecure,
            certs_dir=certs_dir,
            legacy_protocol_supported=legacy_protocol_supported,
        )

    def is_secure_index(self, hostname: str) -> bool:
        """Classify a registry host as secure or insecure.

        An explicit index configuration wins. Otherwise the host is insecure
        only if one of its known addresses lies in an insecure CIDR.
        """
        index = self.index_configs.get(hostname)
        if index is not None:
            return index.secure

        for address in host_addresses(hostname):
            for network in self.insecure_registry_cidrs:
                if address.version == network.version and address in network:
                    return False
        return True

    def certificate_bundle_for(self, hostname: str) -> CertificateBundle | None:
        """Read the custom certificates enrolled for exactly this host.

        ``*.crt`` files are extra CA roots, ``*.cert``/``*.key`` pairs are
        client certificates.

        Returns:
            The bundle, or None when no directory exists for the host

        Raises:
            CertificateError: If the directory is unreadable or a pair is incomplete
        """
        host_dir = Path(self.certs_dir) / validate_hostname(hostname)
        if not host_dir.is_dir():
            return None

        try:
            names = sorted(
                entry.name for entry in host_dir.iterdir() if entry.is_file()
            )
        except OSError as e:
            raise CertificateError(
                f"Cannot read certificates in {host_dir}: {e}"
            ) from e

        ca_files = []
        client_certificates = []
        for name in names:
            if name.endswith(".crt"):
                ca_files.append(str(host_dir / name))
            elif name.endswith(".cert"):
                key_name = name[: -len(".cert")] + ".key"
                if key_name not in names:
                    raise CertificateError(
                        f"Missing key {key_name} for client certificate {name}. "
                        "Note that CA certificates should use the extension .crt."
                    )
                client_certificates.append(
                    (str(host_dir / name), str(host_dir / key_name))
                )
            elif name.endswith(".key"):
                cert_name = name[: -len(".key")] + ".cert"
                if cert_name not in names:
                    raise CertificateError(
                        f"Missing client certificate {cert_name} for key {name}"
                    )

        return CertificateBundle(
            ca_files=tuple(ca_files), client_certificates=tuple(client_certificates)
        )

    def new_index_info(self, name: str) -> IndexInfo:
        """Return the configuration of an index, classifying unknown ones."""
        name = validate_index_name(name)

        index = self.index_configs.get(name)
        if index is not None:
            return index

        return IndexInfo(name=name, secure=self.is_secure_index(name))

    def new_repository_info(self, name: str) -> RepositoryInfo:
        """Split a repository name into its index and remote name.

        Raises:
            InvalidRepositoryNameError: If the name contains a scheme or is malformed
        """
        if "://" in name:
            raise InvalidRepositoryNameError("Repository name cannot contain a scheme")

        index_name, remote_name = split_repository_name(name)
        index = self.new_index_info(index_name)

        if index.official:
            if "/" not in remote_name:
                remote_name = f"{DEFAULT_NAMESPACE}/{remote_name}"
            validate_remote_name(remote_name)
            official = remote_name.startswith(DEFAULT_NAMESPACE + "/")
            local_name = remote_name
            if official:
                local_name = remote_name[len(DEFAULT_NAMESPACE) + 1 :]
            return RepositoryInfo(
                index=index,
                remote_name=remote_name,
                local_name=local_name,
                canonical_name=f"{INDEX_NAME}/{remote_name}",
                official=official,
            )

        validate_remote_name(remote_name)
        local_name = f"{index.name}/{remote_name}"
        return RepositoryInfo(
            index=index,
            remote_name=remote_name,
            local_name=local_name,
            canonical_name=local_name,
        )


def split_repository_name(name: str) -> tuple[str, str]:
    """Split ``[index/]remote`` into the index name and remote name.

    The first component names an index only if it looks like a host:
    it contains ``.`` or ``:``, or is ``localhost``.
    """
    first, sep, rest = name.partition("/")
    if not sep or ("." not in first and ":" not in first and first != "localhost"):
        return INDEX_NAME, name
    return first, rest
