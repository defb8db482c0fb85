"""Universal PII patterns applicable in every jurisdiction.

Patterns are compiled regular expressions paired with the category
identifier they detect.  They are deliberately permissive: false
positives are filtered afterwards by the category validators in
:mod:`pii_scanner.detection.validators`.

Each entry is a tuple of ``(category, compiled_pattern)``.
"""
from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Email addresses: local part must start with a letter
# ---------------------------------------------------------------------------
EMAIL = (
    "Email",
    re.compile(
        r"\b[a-zA-Z][a-zA-Z0-9._%+\-]*@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}\b",
    ),
)

# ---------------------------------------------------------------------------
# Date of birth: DD/MM/YYYY, years 19xx and 20xx
# ---------------------------------------------------------------------------
DATE_OF_BIRTH = (
    "DateNaissance",
    re.compile(
        r"\b(?:0[1-9]|[12][0-9]|3[01])/(?:0[1-9]|1[0-2])/(?:19|20)\d{2}\b",
    ),
)

# ---------------------------------------------------------------------------
# Payment card numbers: four groups of four digits, optional separators
# ---------------------------------------------------------------------------
CREDIT_CARD = (
    "CarteBancaire",
    re.compile(
        r"\b(?:\d{4}[ \-]?){3}\d{4}\b",
    ),
)

# ---------------------------------------------------------------------------
# IP addresses (IPv4)
# ---------------------------------------------------------------------------
IPV4_ADDRESS = (
    "AdresseIP",
    re.compile(
        r"\b(?:(?:25[0-5]|2[0-4]\d|[01]?\d\d?)\.){3}(?:25[0-5]|2[0-4]\d|[01]?\d\d?)\b",
    ),
)

# ---------------------------------------------------------------------------
# Exported collection
# ---------------------------------------------------------------------------
COMMON_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    EMAIL,
    DATE_OF_BIRTH,
    CREDIT_CARD,
    IPV4_ADDRESS,
]
