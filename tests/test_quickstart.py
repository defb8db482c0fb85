"""Test that the 3-line quickstart API works for pii-scanner."""
from __future__ import annotations

from pathlib import Path


def test_quickstart_import() -> None:
    from pii_scanner import PiiScanner

    scanner = PiiScanner()
    assert scanner is not None


def test_quickstart_detect() -> None:
    from pii_scanner import PiiScanner

    scanner = PiiScanner()
    detections = scanner.detect("Contact: jean@exemple.bj, password: changeme")
    assert [d.category for d in detections] == ["Email"]


def test_quickstart_no_pii() -> None:
    from pii_scanner import PiiScanner

    scanner = PiiScanner()
    assert scanner.detect("Rien à signaler.") == []


def test_quickstart_scan(tmp_path: Path) -> None:
    from pii_scanner import PiiScanner

    (tmp_path / "clients.txt").write_text("awa.dossou@exemple.bj\n", encoding="utf-8")
    report = PiiScanner().scan(str(tmp_path))
    assert report.files_scanned == 1
    assert [d.category for d in report.detections] == ["Email"]


def test_quickstart_with_config_file(tmp_path: Path) -> None:
    from pii_scanner import PiiScanner

    config_file = tmp_path / "pii-scanner.yaml"
    config_file.write_text("detection:\n  jurisdictions: [credentials]\n", encoding="utf-8")
    scanner = PiiScanner(config_path=config_file)
    assert scanner.config.detection.jurisdictions == ["credentials"]
    assert scanner.detect("jean@exemple.bj") == []


def test_quickstart_detector_accessible() -> None:
    from pii_scanner import PiiScanner
    from pii_scanner.detection.pii_detector import PiiDetector

    scanner = PiiScanner()
    assert isinstance(scanner.detector, PiiDetector)


def test_quickstart_repr() -> None:
    from pii_scanner import PiiScanner

    scanner = PiiScanner()
    assert "PiiScanner" in repr(scanner)
