"""File exposure classification from permission facts.

Turns the access-control entries of a file into a three-tier exposure
level and a human-readable warning.  Rules are evaluated in priority
order, first match wins:

1. Any entry grants the universal "Everyone" identity → CRITICAL
2. Network share with more than 10 distinct identities → CRITICAL
3. "Authenticated Users" granted, or more than 10 identities → MEDIUM
4. At least 5 distinct identities → MEDIUM
5. Otherwise → LOW

Example
-------
>>> facts = PermissionFacts(entries=(AccessEntry("Everyone"),), is_network_path=False)
>>> classify(facts).exposure_level
<ExposureLevel.CRITICAL: 'critical'>
"""
from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass, replace
from enum import Enum

from pii_scanner.security.path_validator import is_network_path

logger = logging.getLogger(__name__)

_EVERYONE_IDENTITIES: tuple[str, ...] = ("everyone", "tout le monde")
_AUTHENTICATED_IDENTITIES: tuple[str, ...] = ("authenticated users", "utilisateurs authentifiés")

_MANY_IDENTITIES = 10
_SEVERAL_IDENTITIES = 5

EVERYONE = "Everyone"


class ExposureLevel(str, Enum):
    """Ordered exposure levels (low to high)."""

    LOW = "low"
    MEDIUM = "medium"
    CRITICAL = "critical"

    @property
    def label(self) -> str:
        """Report label for the level (``Faible``, ``Moyen``, ``Critique``)."""
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str | None) -> "ExposureLevel":
        """Parse a report label or level value; unknown values map to LOW."""
        if label is None:
            return cls.LOW
        lowered = label.strip().lower()
        for level in cls:
            if lowered in (level.value, level.label.lower()):
                return level
        return cls.LOW

    def _rank(self) -> int:
        return list(ExposureLevel).index(self)

    def __ge__(self, other: "ExposureLevel") -> bool:  # type: ignore[override]
        return self._rank() >= other._rank()

    def __gt__(self, other: "ExposureLevel") -> bool:  # type: ignore[override]
        return self._rank() > other._rank()

    def __le__(self, other: "ExposureLevel") -> bool:  # type: ignore[override]
        return self._rank() <= other._rank()

    def __lt__(self, other: "ExposureLevel") -> bool:  # type: ignore[override]
        return self._rank() < other._rank()


_LABELS: dict[ExposureLevel, str] = {
    ExposureLevel.LOW: "Faible",
    ExposureLevel.MEDIUM: "Moyen",
    ExposureLevel.CRITICAL: "Critique",
}


@dataclass(frozen=True)
class AccessEntry:
    """A single access-control entry.

    Attributes
    ----------
    identity:
        Account or group name the entry applies to.
    allow:
        ``True`` for an allow entry, ``False`` for a deny entry.
    """

    identity: str
    allow: bool = True


@dataclass(frozen=True)
class PermissionFacts:
    """Raw permission facts of a file, as read from the file system."""

    entries: tuple[AccessEntry, ...] = ()
    is_network_path: bool = False


@dataclass(frozen=True)
class PermissionInfo:
    """Exposure classification of a file.

    Attributes
    ----------
    exposure_level:
        Three-tier exposure level.
    accessible_to_everyone:
        An allow entry grants the "Everyone" identity.
    accessible_to_authenticated_users:
        An allow entry grants the "Authenticated Users" identity.
    is_network_share:
        The file lives on a network share.
    group_count:
        Number of distinct identities with an allow entry.
    warning:
        Human-readable warning, empty until :meth:`with_warning` is used.
    """

    exposure_level: ExposureLevel = ExposureLevel.LOW
    accessible_to_everyone: bool = False
    accessible_to_authenticated_users: bool = False
    is_network_share: bool = False
    group_count: int = 0
    warning: str = ""

    @classmethod
    def default(cls, level: ExposureLevel = ExposureLevel.LOW, is_network_share: bool = False) -> "PermissionInfo":
        """Info used when the real facts cannot be read."""
        return cls(exposure_level=level, is_network_share=is_network_share)

    def with_warning(self, pii_count: int, language: str = "en") -> "PermissionInfo":
        """Return a copy carrying the warning for *pii_count* detections."""
        return replace(self, warning=exposure_warning(pii_count, self, language=language))

    def to_dict(self) -> dict[str, object]:
        return {
            "exposure_level": self.exposure_level.value,
            "exposure_label": self.exposure_level.label,
            "accessible_to_everyone": self.accessible_to_everyone,
            "accessible_to_authenticated_users": self.accessible_to_authenticated_users,
            "is_network_share": self.is_network_share,
            "group_count": self.group_count,
            "warning": self.warning,
        }


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _matches_any(identity: str, names: tuple[str, ...]) -> bool:
    lowered = identity.lower()
    return any(name in lowered for name in names)


def classify(facts: PermissionFacts) -> PermissionInfo:
    """Classify *facts* into a :class:`PermissionInfo`.

    Only allow entries count.  Deterministic and side-effect free.
    """
    identities: set[str] = set()
    everyone = False
    authenticated = False
    for entry in facts.entries:
        if not entry.allow:
            continue
        identities.add(entry.identity)
        if _matches_any(entry.identity, _EVERYONE_IDENTITIES):
            everyone = True
        if _matches_any(entry.identity, _AUTHENTICATED_IDENTITIES):
            authenticated = True

    count = len(identities)
    if everyone:
        level = ExposureLevel.CRITICAL
    elif facts.is_network_path and count > _MANY_IDENTITIES:
        level = ExposureLevel.CRITICAL
    elif authenticated or count > _MANY_IDENTITIES:
        level = ExposureLevel.MEDIUM
    elif count >= _SEVERAL_IDENTITIES:
        level = ExposureLevel.MEDIUM
    else:
        level = ExposureLevel.LOW

    return PermissionInfo(
        exposure_level=level,
        accessible_to_everyone=everyone,
        accessible_to_authenticated_users=authenticated,
        is_network_share=facts.is_network_path,
        group_count=count,
    )


def read_permission_facts(path: str) -> PermissionFacts:
    """Read the permission facts of *path* from the file system.

    POSIX mode bits are mapped to entries for the owner, the owning group
    and ``Everyone`` (the "other" class).  An entry allows access when its
    read or write bit is set; execute-only bits grant nothing.  This call
    blocks on the file system and may raise :class:`OSError`.
    """
    info = os.stat(path)
    mode = info.st_mode
    entries = (
        AccessEntry(f"user:{info.st_uid}", allow=bool(mode & (stat.S_IRUSR | stat.S_IWUSR))),
        AccessEntry(f"group:{info.st_gid}", allow=bool(mode & (stat.S_IRGRP | stat.S_IWGRP))),
        AccessEntry(EVERYONE, allow=bool(mode & (stat.S_IROTH | stat.S_IWOTH))),
    )
    return PermissionFacts(entries=entries, is_network_path=is_network_path(path))


def analyze_permissions(
    path: str,
    fallback_level: ExposureLevel = ExposureLevel.LOW,
) -> PermissionInfo:
    """Read and classify the permissions of *path*.

    Never raises: when the facts cannot be read, a default
    :class:`PermissionInfo` at *fallback_level* is returned and the
    failure is logged.
    """
    try:
        facts = read_permission_facts(path)
    except (OSError, TypeError, ValueError) as exc:
        logger.warning(
            "Could not read permissions of %s (%s); reporting %s exposure",
            path,
            exc,
            fallback_level.value,
        )
        return PermissionInfo.default(fallback_level, is_network_share=is_network_path(str(path)))
    return classify(facts)


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------

_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "everyone": "CRITICAL: this file contains {count} PII and is accessible to ALL users (Everyone)",
        "network": "CRITICAL: this file contains {count} PII and is shared on the network with {groups} groups",
        "critical": "CRITICAL: this file contains {count} PII and is broadly exposed ({groups} groups)",
        "authenticated": "MEDIUM: this file contains {count} PII and is accessible to all authenticated users",
        "groups": "MEDIUM: this file contains {count} PII and is accessible to {groups} user groups",
    },
    "fr": {
        "everyone": "CRITIQUE: ce fichier contient {count} PII et est accessible à TOUS les utilisateurs (Everyone)",
        "network": "CRITIQUE: ce fichier contient {count} PII et est accessible sur un partage réseau à {groups} groupes",
        "critical": "CRITIQUE: ce fichier contient {count} PII et est largement exposé ({groups} groupes)",
        "authenticated": "MOYEN: ce fichier contient {count} PII et est accessible à tous les utilisateurs authentifiés",
        "groups": "MOYEN: ce fichier contient {count} PII et est accessible à {groups} groupes d'utilisateurs",
    },
}


def exposure_warning(pii_count: int, info: PermissionInfo, language: str = "en") -> str:
    """Return a severity-tagged warning for a file, or ``""`` at LOW exposure.

    Parameters
    ----------
    pii_count:
        Number of detections in the file.
    info:
        Exposure classification of the file.
    language:
        ``"en"`` or ``"fr"``; unknown languages fall back to English.
    """
    if info.exposure_level == ExposureLevel.LOW:
        return ""

    messages = _MESSAGES.get(language, _MESSAGES["en"])
    if info.accessible_to_everyone:
        key = "everyone"
    elif info.is_network_share and info.exposure_level == ExposureLevel.CRITICAL:
        key = "network"
    elif info.exposure_level == ExposureLevel.CRITICAL:
        key = "critical"
    elif info.accessible_to_authenticated_users:
        key = "authenticated"
    else:
        key = "groups"
    return messages[key].format(count=pii_count, groups=info.group_count)
