"""Path security package for directory roots and file paths."""
from __future__ import annotations

from pii_scanner.security.path_validator import (
    PathValidationResult,
    ResolvedPathResult,
    get_safe_absolute_path,
    is_network_path,
    sanitize_path,
    validate_directory_path,
    validate_file_in_directory,
    validate_file_name,
    validate_file_path,
)

__all__ = [
    "PathValidationResult",
    "ResolvedPathResult",
    "get_safe_absolute_path",
    "is_network_path",
    "sanitize_path",
    "validate_directory_path",
    "validate_file_in_directory",
    "validate_file_name",
    "validate_file_path",
]
