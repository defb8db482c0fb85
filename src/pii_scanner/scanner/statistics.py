"""Aggregate statistics over the detections of a scan.

Groups detections per file to rank the riskiest files, and combines each
file's exposure facts and last access date into warnings.

Example
-------
>>> stats = ScanStatistics.calculate(detections, total_files_scanned=12)
>>> stats.pii_by_type
{'Email': 7, 'Telephone': 3}
>>> stats.top_risky_files[0].risk_level
<RiskLevel.MEDIUM: 'medium'>
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable

from pii_scanner.detection.pii_detector import Detection
from pii_scanner.exposure.permissions import ExposureLevel, PermissionInfo, exposure_warning

# Categories that make a file high risk on their own.
FINANCIAL_CATEGORIES: frozenset[str] = frozenset({"IBAN", "CarteBancaire"})

_HIGH_RISK_COUNT = 10
_MEDIUM_RISK_COUNT = 3


class RiskLevel(str, Enum):
    """Per-file risk level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def label(self) -> str:
        return {"low": "FAIBLE", "medium": "MOYEN", "high": "ÉLEVÉ"}[self.value]


class Staleness(str, Enum):
    """How long ago a file was last accessed."""

    UNKNOWN = "unknown"
    RECENT = "recent"
    SIX_MONTHS = "six_months"
    ONE_YEAR = "one_year"
    THREE_YEARS = "three_years"
    FIVE_YEARS_PLUS = "five_years_plus"

    @property
    def label(self) -> str:
        return _STALENESS_LABELS[self]


_STALENESS_LABELS: dict[Staleness, str] = {
    Staleness.UNKNOWN: "Inconnu",
    Staleness.RECENT: "Récent",
    Staleness.SIX_MONTHS: "6 mois",
    Staleness.ONE_YEAR: "1 an",
    Staleness.THREE_YEARS: "3 ans",
    Staleness.FIVE_YEARS_PLUS: "+5 ans",
}

_STALENESS_PHRASES: dict[Staleness, str] = {
    Staleness.SIX_MONTHS: "more than 6 months",
    Staleness.ONE_YEAR: "more than 1 year",
    Staleness.THREE_YEARS: "more than 3 years",
    Staleness.FIVE_YEARS_PLUS: "more than 5 years",
}

# (minimum age in days, level), checked from the oldest down.
_STALENESS_THRESHOLDS: tuple[tuple[int, Staleness], ...] = (
    (5 * 365, Staleness.FIVE_YEARS_PLUS),
    (3 * 365, Staleness.THREE_YEARS),
    (365, Staleness.ONE_YEAR),
    (180, Staleness.SIX_MONTHS),
)


def file_risk_level(pii_count: int, categories: Iterable[str]) -> RiskLevel:
    """Return the risk level of a file.

    Financial data or more than 10 detections is HIGH, 3 or more
    detections is MEDIUM, anything else is LOW.
    """
    if any(category in FINANCIAL_CATEGORIES for category in categories) or pii_count > _HIGH_RISK_COUNT:
        return RiskLevel.HIGH
    if pii_count >= _MEDIUM_RISK_COUNT:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def staleness_level(last_accessed: datetime | None, now: datetime | None = None) -> Staleness:
    """Classify the age of *last_accessed* relative to *now*."""
    if last_accessed is None:
        return Staleness.UNKNOWN
    if now is None:
        now = datetime.now(last_accessed.tzinfo)
    age_days = (now - last_accessed).days
    for min_days, level in _STALENESS_THRESHOLDS:
        if age_days >= min_days:
            return level
    return Staleness.RECENT


def stale_data_warning(pii_count: int, last_accessed: datetime | None, now: datetime | None = None) -> str:
    """Return a warning for PII kept in a file nobody opened for months.

    Empty for recent files and unknown access dates.
    """
    level = staleness_level(last_accessed, now)
    phrase = _STALENESS_PHRASES.get(level)
    if phrase is None:
        return ""
    return f"STALE: this file contains {pii_count} PII and has not been accessed for {phrase}"


@dataclass(frozen=True)
class FileRiskInfo:
    """Risk summary of a single file."""

    file_path: str
    pii_count: int
    risk_level: RiskLevel
    categories: tuple[str, ...] = ()
    last_accessed_date: datetime | None = None
    staleness: Staleness = Staleness.UNKNOWN
    stale_data_warning: str = ""
    exposure_level: str = ExposureLevel.LOW.label
    accessible_to_everyone: bool = False
    is_network_share: bool = False
    user_group_count: int = 0
    exposure_warning: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "file_path": self.file_path,
            "pii_count": self.pii_count,
            "risk_level": self.risk_level.label,
            "categories": list(self.categories),
            "last_accessed_date": (
                self.last_accessed_date.isoformat() if self.last_accessed_date else None
            ),
            "staleness": self.staleness.label,
            "stale_data_warning": self.stale_data_warning,
            "exposure_level": self.exposure_level,
            "accessible_to_everyone": self.accessible_to_everyone,
            "is_network_share": self.is_network_share,
            "user_group_count": self.user_group_count,
            "exposure_warning": self.exposure_warning,
        }


def _file_risk(
    file_path: str,
    detections: list[Detection],
    now: datetime | None,
    language: str,
) -> FileRiskInfo:
    first = detections[0]
    count = len(detections)
    categories = tuple(dict.fromkeys(d.category for d in detections))
    level = ExposureLevel.from_label(first.exposure_level)
    info = PermissionInfo(
        exposure_level=level,
        accessible_to_everyone=bool(first.accessible_to_everyone),
        is_network_share=bool(first.is_network_share),
        group_count=first.user_group_count or 0,
    )
    return FileRiskInfo(
        file_path=file_path,
        pii_count=count,
        risk_level=file_risk_level(count, categories),
        categories=categories,
        last_accessed_date=first.last_accessed_date,
        staleness=staleness_level(first.last_accessed_date, now),
        stale_data_warning=stale_data_warning(count, first.last_accessed_date, now),
        exposure_level=level.label,
        accessible_to_everyone=info.accessible_to_everyone,
        is_network_share=info.is_network_share,
        user_group_count=info.group_count,
        exposure_warning=exposure_warning(count, info, language=language),
    )


@dataclass
class ScanStatistics:
    """Aggregated view of a scan.

    Attributes
    ----------
    total_files_scanned:
        Number of files read by the scan.
    files_with_pii:
        Number of distinct files with at least one detection.
    total_pii_found:
        Number of detections.
    pii_by_type:
        Detections per category, most frequent first.
    top_risky_files:
        Files with the most detections, most first.
    """

    total_files_scanned: int = 0
    files_with_pii: int = 0
    total_pii_found: int = 0
    pii_by_type: dict[str, int] = field(default_factory=dict)
    top_risky_files: list[FileRiskInfo] = field(default_factory=list)

    @classmethod
    def calculate(
        cls,
        detections: Iterable[Detection],
        total_files_scanned: int,
        top_n: int = 20,
        now: datetime | None = None,
        language: str = "en",
    ) -> "ScanStatistics":
        """Compute statistics from *detections*.

        *language* selects the wording of the exposure warnings ("en" or "fr").

        Ties keep first-seen order, both in ``pii_by_type`` and in
        ``top_risky_files``.
        """
        items = list(detections)
        by_file: dict[str, list[Detection]] = {}
        for detection in items:
            by_file.setdefault(detection.file_path, []).append(detection)

        # most_common keeps insertion order among equal counts.
        pii_by_type = dict(Counter(d.category for d in items).most_common())

        risky = [_file_risk(path, found, now, language) for path, found in by_file.items()]
        risky.sort(key=lambda info: info.pii_count, reverse=True)

        return cls(
            total_files_scanned=total_files_scanned,
            files_with_pii=len(by_file),
            total_pii_found=len(items),
            pii_by_type=pii_by_type,
            top_risky_files=risky[:top_n],
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "total_files_scanned": self.total_files_scanned,
            "files_with_pii": self.files_with_pii,
            "total_pii_found": self.total_pii_found,
            "pii_by_type": dict(self.pii_by_type),
            "top_risky_files": [info.to_dict() for info in self.top_risky_files],
        }

    def summary(self) -> str:
        """Return a plain-text summary of the scan."""
        lines = [
            "=== SCAN STATISTICS ===",
            f"Files scanned: {self.total_files_scanned}",
            f"Files containing PII: {self.files_with_pii}",
            f"Total PII found: {self.total_pii_found}",
        ]
        if self.pii_by_type:
            lines.append("")
            lines.append("Breakdown by type:")
            for category, count in self.pii_by_type.items():
                percentage = count * 100.0 / self.total_pii_found
                lines.append(f"  - {category}: {count} ({percentage:.1f}%)")
        return "\n".join(lines) + "\n"
