"""Custom exceptions for registry endpoint resolution."""


class RegistryError(Exception):
    """Base exception for all registry-related errors."""

    pass


class ValidationError(RegistryError, ValueError):
    """Raised when caller-supplied input is invalid."""

    pass


class InvalidRepositoryNameError(ValidationError):
    """Raised when a repository reference cannot be resolved to a host."""

    pass


class InvalidHostnameError(ValidationError):
    """Raised when a hostname is empty or malformed."""

    pass


class InvalidIndexNameError(ValidationError):
    """Raised when an index name fails validation."""

    pass


class ConfigurationError(RegistryError):
    """Raised when the registry configuration is malformed."""

    pass


class CertificateError(ConfigurationError):
    """Raised when custom certificate material cannot be loaded."""

    pass
