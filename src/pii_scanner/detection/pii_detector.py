"""Regex-based PII detector with category validation.

The detector scans text against every rule of a :class:`PatternRegistry`
and keeps only the candidates accepted by the rule's validator.  Each
surviving match becomes a :class:`Detection`, optionally annotated with
the file's last access date and exposure facts.

Example
-------
>>> detector = PiiDetector()
>>> detections = detector.detect("Email: jean@exemple.bj, password: changeme", "notes.txt")
>>> [d.category for d in detections]
['Email']
>>> detector.contains_pii("Rien à signaler.")
False
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pii_scanner.detection.registry import PatternRegistry, default_registry
from pii_scanner.exposure.permissions import PermissionInfo


@dataclass(frozen=True)
class Detection:
    """A validated PII match inside a file.

    Attributes
    ----------
    file_path:
        Path of the scanned file, as supplied by the caller.
    category:
        Detection category (e.g. ``"Email"``, ``"IFU"``).
    matched_text:
        The exact substring that matched and passed validation.
    start:
        Start index within the scanned content.
    end:
        End index within the scanned content.
    jurisdiction:
        Pattern set the category belongs to.
    last_accessed_date:
        Last access time of the file, when known.
    exposure_level:
        Exposure label (``"Faible"``, ``"Moyen"``, ``"Critique"``) when
        permission facts were supplied.
    accessible_to_everyone:
        Whether the file is readable by everyone, when known.
    is_network_share:
        Whether the file lives on a network share, when known.
    user_group_count:
        Number of distinct identities granted access, when known.
    file_hash:
        Content hash supplied by the caller, when computed.
    """

    file_path: str
    category: str
    matched_text: str
    start: int
    end: int
    jurisdiction: str
    last_accessed_date: datetime | None = None
    exposure_level: str | None = None
    accessible_to_everyone: bool | None = None
    is_network_share: bool | None = None
    user_group_count: int | None = None
    file_hash: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable representation."""
        return {
            "file_path": self.file_path,
            "category": self.category,
            "matched_text": self.matched_text,
            "start": self.start,
            "end": self.end,
            "jurisdiction": self.jurisdiction,
            "last_accessed_date": (
                self.last_accessed_date.isoformat() if self.last_accessed_date else None
            ),
            "exposure_level": self.exposure_level,
            "accessible_to_everyone": self.accessible_to_everyone,
            "is_network_share": self.is_network_share,
            "user_group_count": self.user_group_count,
            "file_hash": self.file_hash,
        }


class PiiDetector:
    """Scans text for PII using a pattern registry.

    Parameters
    ----------
    registry:
        Registry to scan with.  Defaults to the process-wide registry
        holding every pattern set.
    """

    def __init__(self, registry: PatternRegistry | None = None) -> None:
        self._registry = registry if registry is not None else default_registry()

    @property
    def registry(self) -> PatternRegistry:
        """The registry this detector scans with."""
        return self._registry

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def detect(
        self,
        content: str,
        file_path: str,
        last_accessed_date: datetime | None = None,
        permission_info: PermissionInfo | None = None,
        file_hash: str | None = None,
    ) -> list[Detection]:
        """Return every validated PII match found in *content*.

        Each category is scanned independently, so overlapping spans from
        different categories are all reported.  Candidates rejected by a
        validator are dropped without any signal.

        Parameters
        ----------
        content:
            Text to scan.
        file_path:
            Path recorded on each detection.
        last_accessed_date:
            Optional last access time of the file.
        permission_info:
            Optional exposure facts copied onto each detection.
        file_hash:
            Optional content hash copied onto each detection.

        Returns
        -------
        list[Detection]
            Detections in document order; matches starting at the same
            offset keep the registry's category order.
        """
        exposure_fields: dict[str, object] = {}
        if permission_info is not None:
            exposure_fields = {
                "exposure_level": permission_info.exposure_level.label,
                "accessible_to_everyone": permission_info.accessible_to_everyone,
                "is_network_share": permission_info.is_network_share,
                "user_group_count": permission_info.group_count,
            }

        detections: list[Detection] = []
        for rule in self._registry:
            for match in rule.pattern.finditer(content):
                candidate = match.group()
                if not rule.accepts(candidate):
                    continue
                detections.append(
                    Detection(
                        file_path=file_path,
                        category=rule.category,
                        matched_text=candidate,
                        start=match.start(),
                        end=match.end(),
                        jurisdiction=rule.jurisdiction,
                        last_accessed_date=last_accessed_date,
                        file_hash=file_hash,
                        **exposure_fields,  # type: ignore[arg-type]
                    )
                )
        # Stable sort keeps registration order for equal offsets.
        detections.sort(key=lambda d: d.start)
        return detections

    def contains_pii(self, content: str) -> bool:
        """Return ``True`` as soon as one validated match is found."""
        for rule in self._registry:
            for match in rule.pattern.finditer(content):
                if rule.accepts(match.group()):
                    return True
        return False

    def detect_categories(self, content: str) -> set[str]:
        """Return the set of categories with at least one validated match."""
        return {d.category for d in self.detect(content, file_path="")}


def detect(
    content: str,
    file_path: str,
    last_accessed_date: datetime | None = None,
    permission_info: PermissionInfo | None = None,
    file_hash: str | None = None,
) -> list[Detection]:
    """Detect PII with the default registry.  See :meth:`PiiDetector.detect`."""
    return PiiDetector().detect(
        content,
        file_path,
        last_accessed_date=last_accessed_date,
        permission_info=permission_info,
        file_hash=file_hash,
    )
