"""Unit tests for detection/pii_detector.py: PiiDetector and Detection."""
from __future__ import annotations

import re
from datetime import datetime

import pytest

from pii_scanner.detection.pii_detector import Detection, PiiDetector, detect
from pii_scanner.detection.registry import PatternRegistry, PatternRule
from pii_scanner.exposure.permissions import ExposureLevel, PermissionInfo


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def detector() -> PiiDetector:
    return PiiDetector()


@pytest.fixture()
def common_detector() -> PiiDetector:
    return PiiDetector(PatternRegistry.from_jurisdictions(["common"]))


def _categories(detections: list[Detection]) -> list[str]:
    return [d.category for d in detections]


# ---------------------------------------------------------------------------
# Detection dataclass
# ---------------------------------------------------------------------------


class TestDetection:
    def test_detection_is_frozen(self) -> None:
        detection = Detection("a.txt", "Email", "a@b.bj", 0, 6, "common")
        with pytest.raises(Exception):
            detection.category = "other"  # type: ignore[misc]

    def test_to_dict_serialises_dates(self) -> None:
        when = datetime(2024, 3, 1, 12, 0, 0)
        detection = Detection("a.txt", "Email", "a@b.bj", 0, 6, "common", last_accessed_date=when)
        payload = detection.to_dict()
        assert payload["last_accessed_date"] == "2024-03-01T12:00:00"
        assert payload["exposure_level"] is None


# ---------------------------------------------------------------------------
# detect
# ---------------------------------------------------------------------------


class TestDetect:
    def test_email_kept_placeholder_password_dropped(self, detector: PiiDetector) -> None:
        detections = detector.detect("Email: jean@exemple.bj, password: changeme", "notes.txt")
        assert _categories(detections) == ["Email"]
        assert detections[0].matched_text == "jean@exemple.bj"
        assert detections[0].file_path == "notes.txt"

    def test_real_password_detected(self, detector: PiiDetector) -> None:
        detections = detector.detect("db password: S3cur3!Cotonou", "app.env")
        assert "MotDePasse" in _categories(detections)

    def test_valid_card_detected(self, detector: PiiDetector) -> None:
        detections = detector.detect("Carte: 4532 0151 1283 0366", "paiement.txt")
        cards = [d for d in detections if d.category == "CarteBancaire"]
        assert [d.matched_text for d in cards] == ["4532 0151 1283 0366"]

    def test_luhn_invalid_card_dropped(self, detector: PiiDetector) -> None:
        detections = detector.detect("Carte: 4532 0151 1283 0367", "paiement.txt")
        assert "CarteBancaire" not in _categories(detections)

    def test_offsets_point_into_content(self, detector: PiiDetector) -> None:
        content = "Contact: awa.dossou@exemple.bj"
        (detection,) = detector.detect(content, "c.txt")
        assert content[detection.start:detection.end] == detection.matched_text

    def test_document_order(self, common_detector: PiiDetector) -> None:
        content = "IP 10.0.0.1 puis awa@exemple.bj"
        assert _categories(common_detector.detect(content, "x")) == ["AdresseIP", "Email"]

    def test_ties_keep_registration_order(self, detector: PiiDetector) -> None:
        detections = detector.detect("Tel: 97 12 34 56", "x")
        assert _categories(detections) == ["Telephone", "MobileMoney_MTN"]

    def test_space_separated_numbers_all_detected(self, detector: PiiDetector) -> None:
        detections = detector.detect("Tel: 97123456 96123456", "x")
        pairs = [(d.category, d.matched_text) for d in detections]
        assert pairs == [
            ("Telephone", "97123456"),
            ("MobileMoney_MTN", "97123456"),
            ("Telephone", "96123456"),
            ("MobileMoney_MTN", "96123456"),
        ]

    def test_prefixed_password_keys_detected(self, detector: PiiDetector) -> None:
        content = "DB_PASSWORD=S3cr3tValue!\nuser_password: hunter2xyz\npassword: hunter2xyz"
        passwords = [d.matched_text for d in detector.detect(content, ".env") if d.category == "MotDePasse"]
        assert passwords == [
            "DB_PASSWORD=S3cr3tValue!",
            "user_password: hunter2xyz",
            "password: hunter2xyz",
        ]

    def test_overlapping_categories_all_reported(self, detector: PiiDetector) -> None:
        detections = detector.detect("Passeport BJ1234567", "x")
        assert {"CNI_Benin", "Passeport_Benin"} <= set(_categories(detections))

    def test_empty_content(self, detector: PiiDetector) -> None:
        assert detector.detect("", "x") == []

    def test_deterministic(self, detector: PiiDetector) -> None:
        content = "awa@exemple.bj 97 12 34 56 IFU 3201234567890"
        assert detector.detect(content, "x") == detector.detect(content, "x")

    def test_metadata_copied_to_every_detection(self, detector: PiiDetector) -> None:
        when = datetime(2020, 1, 1)
        info = PermissionInfo(
            exposure_level=ExposureLevel.CRITICAL,
            accessible_to_everyone=True,
            group_count=3,
        )
        detections = detector.detect(
            "awa@exemple.bj, koffi@exemple.bj",
            "x",
            last_accessed_date=when,
            permission_info=info,
            file_hash="abc",
        )
        assert len(detections) == 2
        for detection in detections:
            assert detection.last_accessed_date == when
            assert detection.exposure_level == "Critique"
            assert detection.accessible_to_everyone is True
            assert detection.is_network_share is False
            assert detection.user_group_count == 3
            assert detection.file_hash == "abc"

    def test_exposure_fields_none_without_permission_info(self, detector: PiiDetector) -> None:
        (detection,) = detector.detect("awa@exemple.bj", "x")
        assert detection.exposure_level is None
        assert detection.user_group_count is None

    def test_custom_rule_without_validator(self) -> None:
        rule = PatternRule(category="Matricule_Interne", pattern=re.compile(r"\bEMP-\d{5}\b"))
        detector = PiiDetector(PatternRegistry([rule]))
        detections = detector.detect("badge EMP-00042", "x")
        assert _categories(detections) == ["Matricule_Interne"]
        assert detections[0].jurisdiction == "custom"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestContainsPii:
    def test_detects_email(self, detector: PiiDetector) -> None:
        assert detector.contains_pii("écrire à awa@exemple.bj") is True

    def test_plain_prose(self, detector: PiiDetector) -> None:
        assert detector.contains_pii("Rien à signaler.") is False

    def test_validator_rejection_counts_as_absent(self, common_detector: PiiDetector) -> None:
        assert common_detector.contains_pii("4532 0151 1283 0367") is False


class TestDetectCategories:
    def test_returns_set(self, detector: PiiDetector) -> None:
        categories = detector.detect_categories("awa@exemple.bj, IFU 3201234567890")
        assert {"Email", "IFU"} <= categories


class TestModuleLevelDetect:
    def test_uses_default_registry(self) -> None:
        assert _categories(detect("jean@exemple.bj", "x")) == ["Email"]

    def test_registry_property(self, common_detector: PiiDetector) -> None:
        assert len(common_detector.registry) == 4
