"""Exposure classification package."""
from __future__ import annotations

from pii_scanner.exposure.permissions import (
    AccessEntry,
    ExposureLevel,
    PermissionFacts,
    PermissionInfo,
    analyze_permissions,
    classify,
    exposure_warning,
    read_permission_facts,
)

__all__ = [
    "AccessEntry",
    "ExposureLevel",
    "PermissionFacts",
    "PermissionInfo",
    "analyze_permissions",
    "classify",
    "exposure_warning",
    "read_permission_facts",
]
