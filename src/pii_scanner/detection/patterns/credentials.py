"""Credential leakage patterns.

Plaintext passwords, cloud access keys and bearer tokens are not PII in
the strict sense, but a file that leaks them is treated with the same
severity by the APDP guidelines.
"""
from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Plaintext password assignment: password: value, pwd=value, DB_PASSWORD=value
# ---------------------------------------------------------------------------
PASSWORD_ASSIGNMENT = (
    "MotDePasse",
    re.compile(
        r"\b(?:\w*_)?(?:password|passwd|pwd|mot_?de_?passe|mdp)\s*[:=]\s*[\"']?[^\s\"',;]+",
        re.IGNORECASE,
    ),
)

# ---------------------------------------------------------------------------
# AWS access key id
# ---------------------------------------------------------------------------
AWS_ACCESS_KEY = (
    "CleAPI_AWS",
    re.compile(
        r"\bAKIA[0-9A-Za-z]{12,24}\b",
    ),
)

# ---------------------------------------------------------------------------
# JSON Web Token: three base64url segments, header and payload start "eyJ"
# ---------------------------------------------------------------------------
JWT = (
    "Token_JWT",
    re.compile(
        r"\beyJ[A-Za-z0-9_\-]+\.eyJ[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+",
    ),
)

# ---------------------------------------------------------------------------
# Bearer token in an Authorization header or log line
# ---------------------------------------------------------------------------
BEARER_TOKEN = (
    "Token_Bearer",
    re.compile(
        r"\bbearer\s+[A-Za-z0-9\-._~+/]{20,}=*",
        re.IGNORECASE,
    ),
)

# ---------------------------------------------------------------------------
# Exported collection
# ---------------------------------------------------------------------------
CREDENTIAL_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    PASSWORD_ASSIGNMENT,
    AWS_ACCESS_KEY,
    JWT,
    BEARER_TOKEN,
]
