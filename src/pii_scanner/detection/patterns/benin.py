"""Benin-specific PII patterns.

Covers identifiers regulated under Benin's personal data protection law
(Loi N°2017-20 portant Code du numérique, enforced by the APDP).
"""
from __future__ import annotations

import re

# Phone-like numbers must not sit inside a longer digit run or between the
# 4-digit groups of a card number.  Space-separated lists of numbers are fine.
_PHONE_HEAD = r"(?<![\w+])(?<!\b\d{4}[ \-])(?:(?:\+229|00229)\s?)?"
_PHONE_TAIL = r"\s?\d{2}\s?\d{2}\s?\d{2}\b(?![ \-]?\d{4}\b)"

# ---------------------------------------------------------------------------
# IFU: Identifiant Fiscal Unique (13 digits, first digit 0-3)
# ---------------------------------------------------------------------------
IFU = (
    "IFU",
    re.compile(
        r"\b[0-3]\d{12}\b",
    ),
)

# ---------------------------------------------------------------------------
# CNI: national identity card (two letters followed by digits)
# ---------------------------------------------------------------------------
CNI = (
    "CNI_Benin",
    re.compile(
        r"\b[A-Z]{2}\d{6,10}\b",
    ),
)

# ---------------------------------------------------------------------------
# Passport: BJ followed by 7 digits
# ---------------------------------------------------------------------------
PASSPORT = (
    "Passeport_Benin",
    re.compile(
        r"\bBJ\d{7}\b",
    ),
)

# ---------------------------------------------------------------------------
# RCCM: Registre du Commerce et du Crédit Mobilier (RB/COT/2024/A/123)
# ---------------------------------------------------------------------------
RCCM = (
    "RCCM",
    re.compile(
        r"\bRB/[A-Z]{3}/\d{4}/[A-Z]/\d{1,5}\b",
    ),
)

# ---------------------------------------------------------------------------
# Birth certificate number: N° 123/2020/DEPT
# ---------------------------------------------------------------------------
BIRTH_CERTIFICATE = (
    "ActeNaissance",
    re.compile(
        r"(?:N°\s?)?\b\d{1,5}/\d{4}/[A-Z]{2,}\b",
    ),
)

# ---------------------------------------------------------------------------
# Phone numbers: landlines (4x, 5x) and mobiles (6x, 9x), +229 optional
# ---------------------------------------------------------------------------
PHONE = (
    "Telephone",
    re.compile(
        _PHONE_HEAD + r"(?:4\d|5\d|6\d|9\d)" + _PHONE_TAIL,
    ),
)

# ---------------------------------------------------------------------------
# Mobile money wallets: MTN MoMo (96, 97, 66, 67) and Moov Money (98, 99, 68, 69)
# ---------------------------------------------------------------------------
MOBILE_MONEY_MTN = (
    "MobileMoney_MTN",
    re.compile(
        _PHONE_HEAD + r"(?:9[67]|6[67])" + _PHONE_TAIL,
    ),
)

MOBILE_MONEY_MOOV = (
    "MobileMoney_Moov",
    re.compile(
        _PHONE_HEAD + r"(?:9[89]|6[89])" + _PHONE_TAIL,
    ),
)

# ---------------------------------------------------------------------------
# IBAN: BJ + 2 check digits + six blocks of 4 alphanumerics, optionally spaced
# ---------------------------------------------------------------------------
IBAN = (
    "IBAN",
    re.compile(
        r"\bBJ ?\d{2}(?: ?[A-Z0-9]{4}){6}\b",
    ),
)

# ---------------------------------------------------------------------------
# CNSS: Caisse Nationale de Sécurité Sociale (10 to 12 digits)
# ---------------------------------------------------------------------------
CNSS = (
    "CNSS",
    re.compile(
        r"\b\d{10,12}\b",
    ),
)

# ---------------------------------------------------------------------------
# RAMU: Régime d'Assurance Maladie Universelle card
# ---------------------------------------------------------------------------
RAMU = (
    "RAMU",
    re.compile(
        r"\bRAMU[\s\-]?\d{8,10}\b",
    ),
)

# ---------------------------------------------------------------------------
# INE: Identifiant National de l'Élève
# ---------------------------------------------------------------------------
INE = (
    "INE",
    re.compile(
        r"\bINE[\s\-]?\d{8,12}\b",
    ),
)

# ---------------------------------------------------------------------------
# Civil servant registration number (F or M followed by digits)
# ---------------------------------------------------------------------------
CIVIL_SERVANT_ID = (
    "Matricule_Fonctionnaire",
    re.compile(
        r"\b[FM]\d{6,10}\b",
    ),
)

# ---------------------------------------------------------------------------
# Licence plates: AB 1234 CD (current) or 1234 AB (legacy)
# ---------------------------------------------------------------------------
LICENCE_PLATE = (
    "Plaque_Immatriculation",
    re.compile(
        r"\b(?:[A-Z]{2} ?\d{4} ?[A-Z]{2}|\d{4} ?[A-Z]{2})\b",
    ),
)

# ---------------------------------------------------------------------------
# Exported collection
# ---------------------------------------------------------------------------
BENIN_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    IFU,
    CNI,
    PASSPORT,
    RCCM,
    BIRTH_CERTIFICATE,
    PHONE,
    IBAN,
    MOBILE_MONEY_MTN,
    MOBILE_MONEY_MOOV,
    CNSS,
    RAMU,
    INE,
    CIVIL_SERVANT_ID,
    LICENCE_PLATE,
]
