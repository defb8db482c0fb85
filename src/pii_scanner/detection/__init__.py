"""PII detection package.

Provides the pattern sets, the immutable pattern registry, the category
validators that filter false positives, and the detector that composes
them.
"""
from __future__ import annotations

from pii_scanner.detection.pii_detector import Detection, PiiDetector, detect
from pii_scanner.detection.registry import (
    ALL_JURISDICTIONS,
    PatternRegistry,
    PatternRule,
    default_registry,
)
from pii_scanner.detection.validators import VALIDATORS, luhn_checksum_valid

__all__ = [
    "ALL_JURISDICTIONS",
    "Detection",
    "PatternRegistry",
    "PatternRule",
    "PiiDetector",
    "VALIDATORS",
    "default_registry",
    "detect",
    "luhn_checksum_valid",
]
