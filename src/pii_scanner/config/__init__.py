"""Scanner configuration package."""
from __future__ import annotations

from pii_scanner.config.loader import (
    DEFAULT_EXTENSIONS,
    ConfigLoader,
    DetectionConfig,
    ExposureConfig,
    ScanConfig,
    ScannerConfig,
    ScannerConfigError,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "ConfigLoader",
    "DetectionConfig",
    "ExposureConfig",
    "ScanConfig",
    "ScannerConfig",
    "ScannerConfigError",
]
