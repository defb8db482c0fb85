"""Category validators used to filter false-positive pattern matches.

Each validator receives the raw matched substring and returns ``True``
when the candidate is semantically plausible for its category.  The
patterns in :mod:`pii_scanner.detection.patterns` are intentionally
broad, so rejection here is normal operation and never an error.

Validators are total: malformed input yields ``False``, never an
exception.

Example
-------
>>> validate_card_number("4532 0151 1283 0366")
True
>>> validate_card_number("4532 0151 1283 0367")
False
>>> VALIDATORS["CarteBancaire"] is validate_card_number
True
"""
from __future__ import annotations

import functools
import logging
import re
from datetime import date, datetime
from types import MappingProxyType
from typing import Callable, Mapping

logger = logging.getLogger(__name__)

Validator = Callable[[str], bool]

_MIN_BIRTH_DATE = date(1900, 1, 1)

_EMAIL_TRAILING_UPPERCASE = re.compile(r"[A-Z]{2,}$")
_EMAIL_FILE_EXTENSIONS: tuple[str, ...] = (
    ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico", ".art",
    ".json", ".js", ".ts", ".tsx", ".jsx", ".pdf", ".docx",
)
_EMAIL_ASSET_NAME = re.compile(r"^(?:Icon-|iTunes|framework).*@.*\.(?:png|json|art)", re.IGNORECASE)
_EMAIL_CAMEL_DOMAIN = re.compile(r"[A-Z][a-z]+[A-Z]")
_EMAIL_NUMBERED_ASSET = re.compile(r"\d+\.(?:png|jpg|json|art|com[A-Z])")
_EMAIL_THROWAWAY = re.compile(r"^[a-z]@[a-z]{3,5}\.(?:com|org|net)$", re.IGNORECASE)

_AWS_KEY_PREFIX = "AKIA"
_AWS_KEY_LENGTH = 20
_UPPER_ALNUM = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789")

_ASSIGNMENT_VALUE = re.compile(r"[:=]\s*(.*)$", re.DOTALL)
_PASSWORD_MIN_LENGTH = 4
_PASSWORD_PLACEHOLDERS: frozenset[str] = frozenset(
    [
        "changeme",
        "change_me",
        "example",
        "true",
        "false",
        "none",
        "null",
        "nil",
        "undefined",
        "empty",
        "password",
        "motdepasse",
        "secret",
        "redacted",
        "<password>",
        "your_password",
    ]
)
_MASK_CHARACTERS = frozenset("*xX•")


def _is_ascii_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()


def _never_raises(func: Validator) -> Validator:
    """Turn any unexpected exception inside *func* into a rejection."""

    @functools.wraps(func)
    def wrapper(value: str) -> bool:
        try:
            return bool(func(value))
        except Exception:  # noqa: BLE001
            logger.debug("Validator %s rejected %r after an error", func.__name__, value, exc_info=True)
            return False

    return wrapper


# ---------------------------------------------------------------------------
# Checksums
# ---------------------------------------------------------------------------


def luhn_checksum_valid(digits: str) -> bool:
    """Return ``True`` when *digits* passes the Luhn mod-10 checksum.

    Every second digit from the right is doubled (minus 9 when the result
    exceeds 9); the number is valid when the total is a multiple of 10.
    """
    if not digits or not _is_ascii_digits(digits):
        return False
    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = ord(char) - ord("0")
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


# ---------------------------------------------------------------------------
# Category validators
# ---------------------------------------------------------------------------


@_never_raises
def validate_birth_date(value: str) -> bool:
    """Accept ``DD/MM/YYYY`` dates between 1900-01-01 and today inclusive."""
    try:
        parsed = datetime.strptime(value.strip(), "%d/%m/%Y").date()
    except ValueError:
        return False
    return _MIN_BIRTH_DATE <= parsed <= date.today()


@_never_raises
def validate_email(value: str) -> bool:
    """Reject address-shaped fragments that are surrounding text or asset names.

    Not an RFC 5322 validator.  A trailing run of two or more uppercase
    letters usually means the pattern swallowed the next word of the
    document (``contact@site.frPARIS``).
    """
    if _EMAIL_TRAILING_UPPERCASE.search(value):
        return False

    lowered = value.lower()
    if lowered.endswith(_EMAIL_FILE_EXTENSIONS):
        return False
    if _EMAIL_ASSET_NAME.search(value):
        return False

    local, sep, domain = value.partition("@")
    if not sep or not local or "@" in domain or "." not in domain:
        return False
    if _EMAIL_CAMEL_DOMAIN.search(domain) or "http" in domain.lower():
        return False
    if _EMAIL_NUMBERED_ASSET.search(domain):
        return False
    if _EMAIL_THROWAWAY.match(value):
        return False
    return True


@_never_raises
def validate_card_number(value: str) -> bool:
    """Accept exactly 16 digits (spaces and dashes ignored) passing Luhn."""
    cleaned = value.replace(" ", "").replace("-", "")
    if len(cleaned) != 16 or not _is_ascii_digits(cleaned):
        return False
    return luhn_checksum_valid(cleaned)


@_never_raises
def validate_ifu(value: str) -> bool:
    """Accept 13-digit tax identifiers starting with 0, 1, 2 or 3."""
    return len(value) == 13 and _is_ascii_digits(value) and value[0] in "0123"


@_never_raises
def validate_cni(value: str) -> bool:
    """Accept two letters followed only by digits, 8 characters minimum."""
    if len(value) < 8:
        return False
    if not (value[0].isalpha() and value[1].isalpha()):
        return False
    return _is_ascii_digits(value[2:])


@_never_raises
def validate_social_security(value: str) -> bool:
    """Accept 10 to 12 digits that are not a single repeated digit."""
    if not 10 <= len(value) <= 12 or not _is_ascii_digits(value):
        return False
    return len(set(value)) > 1


@_never_raises
def validate_iban(value: str) -> bool:
    """Accept Benin IBANs: ``BJ`` prefix and at least 26 characters."""
    cleaned = value.replace(" ", "")
    return cleaned.startswith("BJ") and len(cleaned) >= 26


@_never_raises
def validate_aws_access_key(value: str) -> bool:
    """Accept ``AKIA`` + 16 uppercase alphanumerics (20 characters total)."""
    if len(value) != _AWS_KEY_LENGTH or not value.startswith(_AWS_KEY_PREFIX):
        return False
    return all(char in _UPPER_ALNUM for char in value[len(_AWS_KEY_PREFIX):])


@_never_raises
def validate_password_assignment(value: str) -> bool:
    """Reject short values and well-known placeholders after ``:`` or ``=``."""
    match = _ASSIGNMENT_VALUE.search(value)
    if match is None:
        return False
    secret = match.group(1).strip().strip("\"'").rstrip(".,;")
    if len(secret) < _PASSWORD_MIN_LENGTH:
        return False
    if secret.lower() in _PASSWORD_PLACEHOLDERS:
        return False
    if set(secret) <= _MASK_CHARACTERS:
        return False
    return True


# ---------------------------------------------------------------------------
# Dispatch table
# ---------------------------------------------------------------------------

VALIDATORS: Mapping[str, Validator] = MappingProxyType(
    {
        "DateNaissance": validate_birth_date,
        "Email": validate_email,
        "CarteBancaire": validate_card_number,
        "IFU": validate_ifu,
        "CNI_Benin": validate_cni,
        "CNSS": validate_social_security,
        "IBAN": validate_iban,
        "CleAPI_AWS": validate_aws_access_key,
        "MotDePasse": validate_password_assignment,
    }
)
