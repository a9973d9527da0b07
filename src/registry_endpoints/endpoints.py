"""Functional endpoint resolution API."""

from typing import Iterable

from .constants import DEFAULT_CERTS_DIR
from .core.config import ServiceConfig
from .core.service import RegistryService
from .core.trust import resolve_trust as _resolve_trust
from .core.types import APIEndpoint, RepositoryInfo, TrustPolicy


def _build_config(
    mirrors: Iterable[str],
    insecure_registries: Iterable[str],
    certs_dir: str,
    legacy_protocol_supported: bool,
) -> ServiceConfig:
    return ServiceConfig.from_options(
        mirrors=mirrors,
        insecure_registries=insecure_registries,
        certs_dir=certs_dir,
        legacy_protocol_supported=legacy_protocol_supported,
    )


def lookup_pull_endpoints(
    repo_name: str,
    mirrors: Iterable[str] = (),
    insecure_registries: Iterable[str] = (),
    certs_dir: str = DEFAULT_CERTS_DIR,
    legacy_protocol_supported: bool = True,
) -> list[APIEndpoint]:
    """이미지를 pull 할 때 시도할 엔드포인트 목록을 우선순위 순서로 반환합니다.

    미러 > 원본 레지스트리, v2 > v1, HTTPS > HTTP 순서로 정렬됩니다.

    Args:
        repo_name: 저장소 이름 (예: "library/nginx", "registry.example.com/team/app")
        mirrors: 미러 URL 목록 (예: ["https://mirror.gcr.io"])
        insecure_registries: 인증서 검증을 생략할 호스트 또는 CIDR (예: ["10.0.0.0/8", "myregistry:5000"])
        certs_dir: 호스트별 인증서 디렉터리 (기본값: /etc/docker/certs.d)
        legacy_protocol_supported: v1 프로토콜 사용 가능 여부

    Returns:
        list[APIEndpoint]: 순서대로 시도할 엔드포인트 목록

    Raises:
        InvalidRepositoryNameError: 저장소 이름에 호스트가 없는 경우
        ConfigurationError: 미러 URL 또는 인증서 설정이 잘못된 경우

    Examples:
        # 공식 이미지
        endpoints = lookup_pull_endpoints("library/nginx")
        for endpoint in endpoints:
            print(f"{endpoint.url} ({endpoint.version})")

        # 사설 레지스트리 (HTTP 허용)
        endpoints = lookup_pull_endpoints(
            "localhost:5000/myapp", insecure_registries=["localhost:5000"]
        )
    """
    config = _build_config(
        mirrors, insecure_registries, certs_dir, legacy_protocol_supported
    )
    return RegistryService(config).lookup_pull_endpoints(repo_name)


def lookup_push_endpoints(
    repo_name: str,
    mirrors: Iterable[str] = (),
    insecure_registries: Iterable[str] = (),
    certs_dir: str = DEFAULT_CERTS_DIR,
    legacy_protocol_supported: bool = True,
) -> list[APIEndpoint]:
    """이미지를 push 할 때 시도할 엔드포인트 목록을 우선순위 순서로 반환합니다.

    pull 목록에서 미러를 제외한 것과 같습니다.

    Args:
        repo_name: 저장소 이름 (예: "registry.example.com/team/app")
        mirrors: 미러 URL 목록 (결과에는 포함되지 않음)
        insecure_registries: 인증서 검증을 생략할 호스트 또는 CIDR
        certs_dir: 호스트별 인증서 디렉터리
        legacy_protocol_supported: v1 프로토콜 사용 가능 여부

    Returns:
        list[APIEndpoint]: 순서대로 시도할 엔드포인트 목록

    Raises:
        InvalidRepositoryNameError: 저장소 이름에 호스트가 없는 경우
        ConfigurationError: 미러 URL 또는 인증서 설정이 잘못된 경우

    Examples:
        endpoints = lookup_push_endpoints("registry.example.com/team/app")
        print(endpoints[0].url)  # https://registry.example.com
    """
    config = _build_config(
        mirrors, insecure_registries, certs_dir, legacy_protocol_supported
    )
    return RegistryService(config).lookup_push_endpoints(repo_name)


def resolve_trust(
    hostname: str,
    insecure_registries: Iterable[str] = (),
    certs_dir: str = DEFAULT_CERTS_DIR,
) -> TrustPolicy:
    """호스트에 대한 TLS 신뢰 정책을 반환합니다.

    Args:
        hostname: 호스트 이름 (예: "registry.example.com", "localhost:5000")
        insecure_registries: 인증서 검증을 생략할 호스트 또는 CIDR
        certs_dir: 호스트별 인증서 디렉터리

    Returns:
        TrustPolicy: 인증서 검증 여부와 추가 인증서 정보

    Raises:
        InvalidHostnameError: 호스트 이름이 비어 있는 경우
        CertificateError: 인증서 파일을 읽을 수 없는 경우

    Examples:
        trust = resolve_trust("localhost:5000")
        print(trust.is_secure)  # False (127.0.0.0/8 은 기본적으로 insecure)
    """
    config = _build_config((), insecure_registries, certs_dir, True)
    return _resolve_trust(config, hostname)


def resolve_repository(
    name: str, insecure_registries: Iterable[str] = ()
) -> RepositoryInfo:
    """저장소 이름을 인덱스와 원격 이름으로 분리합니다.

    Args:
        name: 저장소 이름 (예: "nginx", "localhost:5000/team/app")
        insecure_registries: 인증서 검증을 생략할 호스트 또는 CIDR

    Returns:
        RepositoryInfo: 인덱스 정보와 정규화된 이름

    Raises:
        InvalidRepositoryNameError: 저장소 이름 형식이 잘못된 경우

    Examples:
        info = resolve_repository("nginx")
        print(info.lookup_name)  # library/nginx
        endpoints = lookup_pull_endpoints(info.lookup_name)
    """
    config = _build_config((), insecure_registries, DEFAULT_CERTS_DIR, True)
    return RegistryService(config).resolve_repository(name)
