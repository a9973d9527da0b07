"""Utility functions for registry endpoint resolution."""

from .validator import validate_hostname, validate_index_name, validate_mirror

__all__ = ["validate_hostname", "validate_index_name", "validate_mirror"]
