"""Well-known registry constants shared by every client of the public index."""

# Namespace of official images on the public index
DEFAULT_NAMESPACE = "library"

# Name and hostname of the public index
INDEX_NAME = "docker.io"
INDEX_HOSTNAME = "index.docker.io"
INDEX_SERVER = "https://index.docker.io/v1/"

# Canonical API base URLs for official images
DEFAULT_V1_REGISTRY = "https://index.docker.io"
DEFAULT_V2_REGISTRY = "https://registry-1.docker.io"

# Response header carrying the supported API versions
DEFAULT_REGISTRY_VERSION_HEADER = "Docker-Distribution-Api-Version"

# Advertised API version of v2 registries
V2_VERSION_TYPE = "registry"
V2_VERSION = "2.0"

# Per-host custom certificates live in <DEFAULT_CERTS_DIR>/<hostname>/
DEFAULT_CERTS_DIR = "/etc/docker/certs.d"

# Loopback is always treated as an insecure registry network
DEFAULT_INSECURE_CIDR = "127.0.0.0/8"
