"""Convenience API for pii-scanner: 3-line quickstart.

Example
-------
::

    from pii_scanner import PiiScanner
    scanner = PiiScanner()
    report = scanner.scan("/srv/partage/rh")
    print(report.statistics().summary())

"""
from __future__ import annotations

from pathlib import Path
from typing import Any


class PiiScanner:
    """Zero-config PII scanning for the 80% use case.

    Wraps the config loader, the detector and the directory scanner with
    sensible defaults.  No config file is required.

    Parameters
    ----------
    config_path:
        Optional path to a scanner YAML config.  When ``None``, the
        built-in defaults are used.

    Example
    -------
    ::

        from pii_scanner import PiiScanner
        scanner = PiiScanner()
        detections = scanner.detect("Contact: jean@exemple.bj")
        print([d.category for d in detections])  # ['Email']
    """

    def __init__(self, config_path: str | Path | None = None) -> None:
        from pii_scanner.config.loader import ConfigLoader
        from pii_scanner.detection.pii_detector import PiiDetector
        from pii_scanner.scanner.directory_scanner import DirectoryScanner

        loader = ConfigLoader()
        self._config = loader.load(config_path) if config_path is not None else loader.defaults()
        self._detector = PiiDetector(self._config.build_registry())
        self._scanner = DirectoryScanner(detector=self._detector, config=self._config)

    def detect(self, content: str, file_path: str = "<text>") -> Any:
        """Detect PII in *content*.

        Returns
        -------
        list[Detection]
            Validated detections in document order.
        """
        return self._detector.detect(content, file_path)

    def scan(self, directory: str) -> Any:
        """Scan *directory* and return a :class:`ScanReport`.

        Raises
        ------
        ScanPathRejectedError:
            When *directory* fails path validation.
        """
        return self._scanner.scan(directory)

    @property
    def detector(self) -> Any:
        """The underlying PiiDetector instance."""
        return self._detector

    @property
    def config(self) -> Any:
        """The effective ScannerConfig."""
        return self._config

    def __repr__(self) -> str:
        return f"PiiScanner(categories={len(self._detector.registry)})"
