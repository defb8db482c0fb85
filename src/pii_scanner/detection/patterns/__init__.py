"""PII pattern collections by jurisdiction."""
from __future__ import annotations

from pii_scanner.detection.patterns.benin import BENIN_PATTERNS
from pii_scanner.detection.patterns.common import COMMON_PATTERNS
from pii_scanner.detection.patterns.credentials import CREDENTIAL_PATTERNS

__all__ = [
    "BENIN_PATTERNS",
    "COMMON_PATTERNS",
    "CREDENTIAL_PATTERNS",
]
