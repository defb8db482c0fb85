"""Directory scanning and scan statistics."""
from __future__ import annotations

from pii_scanner.scanner.directory_scanner import (
    DirectoryScanner,
    ScanPathRejectedError,
    ScanReport,
)
from pii_scanner.scanner.statistics import (
    FileRiskInfo,
    RiskLevel,
    ScanStatistics,
    Staleness,
    file_risk_level,
    stale_data_warning,
    staleness_level,
)

__all__ = [
    "DirectoryScanner",
    "FileRiskInfo",
    "RiskLevel",
    "ScanPathRejectedError",
    "ScanReport",
    "ScanStatistics",
    "Staleness",
    "file_risk_level",
    "stale_data_warning",
    "staleness_level",
]
