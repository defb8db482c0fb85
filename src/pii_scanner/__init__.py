"""pii-scanner: Personal data discovery for the Benin data protection context.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import pii_scanner
>>> pii_scanner.__version__
'0.1.0'
>>> detector = pii_scanner.PiiDetector()
>>> [d.category for d in detector.detect("jean@exemple.bj", "notes.txt")]
['Email']
"""
from __future__ import annotations

__version__: str = "0.1.0"

from pii_scanner.convenience import PiiScanner

# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------
from pii_scanner.detection.pii_detector import Detection, PiiDetector, detect
from pii_scanner.detection.registry import (
    ALL_JURISDICTIONS,
    PatternRegistry,
    PatternRule,
    default_registry,
)
from pii_scanner.detection.validators import VALIDATORS, luhn_checksum_valid

# ---------------------------------------------------------------------------
# Path security
# ---------------------------------------------------------------------------
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

# ---------------------------------------------------------------------------
# Exposure
# ---------------------------------------------------------------------------
from pii_scanner.exposure.permissions import (
    AccessEntry,
    ExposureLevel,
    PermissionFacts,
    PermissionInfo,
    analyze_permissions,
    classify,
    exposure_warning,
)

# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------
from pii_scanner.config.loader import ConfigLoader, ScannerConfig, ScannerConfigError
from pii_scanner.scanner.directory_scanner import (
    DirectoryScanner,
    ScanPathRejectedError,
    ScanReport,
)
from pii_scanner.scanner.statistics import FileRiskInfo, RiskLevel, ScanStatistics, Staleness

__all__ = [
    "__version__",
    "PiiScanner",
    # Detection
    "ALL_JURISDICTIONS",
    "Detection",
    "PatternRegistry",
    "PatternRule",
    "PiiDetector",
    "VALIDATORS",
    "default_registry",
    "detect",
    "luhn_checksum_valid",
    # Path security
    "PathValidationResult",
    "ResolvedPathResult",
    "get_safe_absolute_path",
    "is_network_path",
    "sanitize_path",
    "validate_directory_path",
    "validate_file_in_directory",
    "validate_file_name",
    "validate_file_path",
    # Exposure
    "AccessEntry",
    "ExposureLevel",
    "PermissionFacts",
    "PermissionInfo",
    "analyze_permissions",
    "classify",
    "exposure_warning",
    # Scanning
    "ConfigLoader",
    "DirectoryScanner",
    "FileRiskInfo",
    "RiskLevel",
    "ScanPathRejectedError",
    "ScanReport",
    "ScanStatistics",
    "ScannerConfig",
    "ScannerConfigError",
    "Staleness",
]
