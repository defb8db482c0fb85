"""Directory scan orchestration.

Walks a validated directory, runs every eligible file through the path
guards, the exposure classifier and the detector, and collects the
detections into a :class:`ScanReport`.  Files are independent units of
work and are processed on a thread pool.

Example
-------
>>> scanner = DirectoryScanner()
>>> report = scanner.scan("/srv/partage/rh")
>>> report.files_scanned, len(report.detections)
(42, 17)
"""
from __future__ import annotations

import hashlib
import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Iterator

from pii_scanner.config.loader import ScannerConfig
from pii_scanner.detection.pii_detector import Detection, PiiDetector
from pii_scanner.exposure.permissions import analyze_permissions
from pii_scanner.scanner.statistics import ScanStatistics
from pii_scanner.security.path_validator import (
    validate_directory_path,
    validate_file_in_directory,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class ScanPathRejectedError(ValueError):
    """Raised when the scan root fails path validation.

    Attributes
    ----------
    path:
        The rejected path, as supplied by the caller.
    reason:
        The validation error message.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Scan path rejected ({path!r}): {reason}")


class _FileStatus(str, Enum):
    SCANNED = "scanned"
    SKIPPED = "skipped"
    ERROR = "error"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class _FileOutcome:
    status: _FileStatus
    detections: tuple[Detection, ...] = ()


@dataclass
class ScanReport:
    """Result of a directory scan.

    Attributes
    ----------
    directory:
        Canonical path of the scanned directory.
    detections:
        Detections of every scanned file, grouped by file in walk order.
    files_scanned:
        Files read and run through the detector.
    files_skipped:
        Files rejected by the path guards or over the size limit.
    errors:
        Files that could not be read.
    cancelled:
        ``True`` when the scan was stopped before every file was processed.
    """

    directory: str
    detections: list[Detection] = field(default_factory=list)
    files_scanned: int = 0
    files_skipped: int = 0
    errors: int = 0
    cancelled: bool = False

    def statistics(self, top_n: int = 20, language: str = "en") -> ScanStatistics:
        """Aggregate the detections of this report."""
        return ScanStatistics.calculate(
            self.detections, self.files_scanned, top_n=top_n, language=language
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "directory": self.directory,
            "files_scanned": self.files_scanned,
            "files_skipped": self.files_skipped,
            "errors": self.errors,
            "cancelled": self.cancelled,
            "detections": [d.to_dict() for d in self.detections],
        }


class DirectoryScanner:
    """Scans a directory tree for PII.

    Parameters
    ----------
    detector:
        Detector to run on file contents.  Defaults to one built from the
        configured pattern registry.
    config:
        Scanner configuration.  Defaults to :class:`ScannerConfig` defaults.
    max_workers:
        Overrides ``config.scan.max_workers`` when given.
    """

    def __init__(
        self,
        detector: PiiDetector | None = None,
        config: ScannerConfig | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._config = config if config is not None else ScannerConfig()
        self._detector = (
            detector if detector is not None else PiiDetector(self._config.build_registry())
        )
        self._max_workers = max_workers if max_workers is not None else self._config.scan.max_workers
        if self._max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self._max_workers}")
        self._extensions = frozenset(self._config.scan.extensions)

    @property
    def detector(self) -> PiiDetector:
        return self._detector

    @property
    def config(self) -> ScannerConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def scan(
        self,
        directory: str,
        cancel_event: threading.Event | None = None,
        progress: ProgressCallback | None = None,
    ) -> ScanReport:
        """Scan every eligible file under *directory*.

        Parameters
        ----------
        directory:
            Absolute path of the directory to scan.
        cancel_event:
            When set, no new file is started; detections already computed
            are kept and the report is marked as cancelled.
        progress:
            Called as ``progress(done, total)`` after each file.

        Returns
        -------
        ScanReport

        Raises
        ------
        ScanPathRejectedError:
            When *directory* fails path validation.
        """
        result = validate_directory_path(directory)
        if not result.ok or result.path is None:
            logger.warning("Rejected scan path %r: %s", directory, result.error_message)
            raise ScanPathRejectedError(directory, result.error_message)

        root = result.path
        report = ScanReport(directory=root)
        files = list(self._iter_candidate_files(root))
        total = len(files)
        logger.info("Scanning %d candidate files under %s", total, root)

        outcomes: dict[int, _FileOutcome] = {}
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = {
                pool.submit(self._scan_file, path, root, cancel_event): index
                for index, path in enumerate(files)
            }
            done = 0
            for future in as_completed(futures):
                outcomes[futures[future]] = future.result()
                done += 1
                if progress is not None:
                    progress(done, total)

        for index in range(total):
            outcome = outcomes[index]
            if outcome.status is _FileStatus.SCANNED:
                report.files_scanned += 1
                report.detections.extend(outcome.detections)
            elif outcome.status is _FileStatus.SKIPPED:
                report.files_skipped += 1
            elif outcome.status is _FileStatus.ERROR:
                report.errors += 1
            else:
                report.cancelled = True

        if cancel_event is not None and cancel_event.is_set():
            report.cancelled = True

        logger.info(
            "Scan of %s finished: %d scanned, %d skipped, %d errors, %d detections%s",
            root,
            report.files_scanned,
            report.files_skipped,
            report.errors,
            len(report.detections),
            " (cancelled)" if report.cancelled else "",
        )
        return report

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _iter_candidate_files(self, root: str) -> Iterator[str]:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for name in sorted(filenames):
                if os.path.splitext(name)[1].lower() in self._extensions:
                    yield os.path.join(dirpath, name)

    def _scan_file(
        self,
        path: str,
        root: str,
        cancel_event: threading.Event | None,
    ) -> _FileOutcome:
        if cancel_event is not None and cancel_event.is_set():
            return _FileOutcome(_FileStatus.CANCELLED)

        check = validate_file_in_directory(path, root)
        if not check.ok or check.path is None:
            logger.debug("Skipping %s: %s", path, check.error_message)
            return _FileOutcome(_FileStatus.SKIPPED)

        file_path = check.path
        if os.path.islink(file_path):
            logger.debug("Skipping symbolic link %s", file_path)
            return _FileOutcome(_FileStatus.SKIPPED)

        try:
            info = os.stat(file_path)
            if info.st_size > self._config.scan.max_file_size_bytes:
                logger.debug("Skipping %s: %d bytes over size limit", file_path, info.st_size)
                return _FileOutcome(_FileStatus.SKIPPED)
            with open(file_path, "rb") as fh:
                data = fh.read()
        except OSError as exc:
            logger.warning("Could not read %s: %s", file_path, exc)
            return _FileOutcome(_FileStatus.ERROR)

        content = data.decode("utf-8", errors="replace")
        last_accessed = datetime.fromtimestamp(info.st_atime)
        permission_info = analyze_permissions(
            file_path, fallback_level=self._config.exposure.fallback_level
        )
        file_hash = hashlib.sha256(data).hexdigest() if self._config.scan.compute_hash else None

        detections = self._detector.detect(
            content,
            file_path,
            last_accessed_date=last_accessed,
            permission_info=permission_info,
            file_hash=file_hash,
        )
        return _FileOutcome(_FileStatus.SCANNED, tuple(detections))
