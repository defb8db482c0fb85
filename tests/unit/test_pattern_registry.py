"""Unit tests for detection/registry.py: PatternRegistry and PatternRule."""
from __future__ import annotations

import re

import pytest

from pii_scanner.detection.registry import (
    ALL_JURISDICTIONS,
    PatternRegistry,
    PatternRule,
    default_registry,
)
from pii_scanner.detection.validators import validate_card_number


@pytest.fixture()
def employee_id_rule() -> PatternRule:
    return PatternRule(
        category="Matricule_Interne",
        pattern=re.compile(r"\bEMP-\d{5}\b"),
        jurisdiction="custom",
    )


class TestPatternRule:
    def test_rule_without_validator_accepts_everything(self) -> None:
        rule = PatternRule(category="X", pattern=re.compile("x"))
        assert rule.accepts("anything") is True

    def test_rule_delegates_to_validator(self) -> None:
        rule = PatternRule(category="CarteBancaire", pattern=re.compile(r"\d+"), validator=validate_card_number)
        assert rule.accepts("4532015112830366") is True
        assert rule.accepts("4532015112830367") is False

    def test_rule_is_frozen(self) -> None:
        rule = PatternRule(category="X", pattern=re.compile("x"))
        with pytest.raises(Exception):
            rule.category = "Y"  # type: ignore[misc]


class TestFromJurisdictions:
    def test_all_jurisdictions_by_default(self) -> None:
        registry = PatternRegistry.from_jurisdictions()
        assert len(registry) == 22
        assert registry.categories[0] == "Email"
        assert registry.categories[-1] == "Token_Bearer"

    def test_single_jurisdiction(self) -> None:
        registry = PatternRegistry.from_jurisdictions(["common"])
        assert registry.categories == ("Email", "DateNaissance", "CarteBancaire", "AdresseIP")

    def test_order_follows_jurisdiction_list(self) -> None:
        registry = PatternRegistry.from_jurisdictions(["credentials", "common"])
        assert registry.categories[0] == "MotDePasse"
        assert registry.categories[4] == "Email"

    def test_validators_attached(self) -> None:
        registry = PatternRegistry.from_jurisdictions()
        assert registry.get("CarteBancaire").validator is validate_card_number  # type: ignore[union-attr]
        assert registry.get("Telephone").validator is None  # type: ignore[union-attr]

    def test_jurisdiction_recorded_on_rules(self) -> None:
        registry = PatternRegistry.from_jurisdictions()
        assert registry.get("IFU").jurisdiction == "benin"  # type: ignore[union-attr]
        assert registry.get("Token_JWT").jurisdiction == "credentials"  # type: ignore[union-attr]

    def test_disabled_categories_left_out(self) -> None:
        registry = PatternRegistry.from_jurisdictions(disabled_categories=["CNSS", "AdresseIP"])
        assert "CNSS" not in registry
        assert "AdresseIP" not in registry
        assert len(registry) == 20

    def test_unknown_jurisdiction_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown jurisdiction"):
            PatternRegistry.from_jurisdictions(["mars"])

    def test_all_jurisdictions_constant(self) -> None:
        assert ALL_JURISDICTIONS == ("common", "benin", "credentials")


class TestRegistryImmutability:
    def test_duplicate_category_raises(self) -> None:
        rule = PatternRule(category="X", pattern=re.compile("x"))
        with pytest.raises(ValueError, match="Duplicate"):
            PatternRegistry([rule, rule])

    def test_extended_returns_new_registry(self, employee_id_rule: PatternRule) -> None:
        base = PatternRegistry.from_jurisdictions(["common"])
        extended = base.extended(employee_id_rule)
        assert "Matricule_Interne" in extended
        assert "Matricule_Interne" not in base
        assert extended.categories[-1] == "Matricule_Interne"

    def test_extended_with_existing_category_raises(self) -> None:
        base = PatternRegistry.from_jurisdictions(["common"])
        with pytest.raises(ValueError):
            base.extended(PatternRule(category="Email", pattern=re.compile("x")))

    def test_without_returns_new_registry(self) -> None:
        base = PatternRegistry.from_jurisdictions(["common"])
        smaller = base.without("Email")
        assert "Email" in base
        assert "Email" not in smaller
        assert len(smaller) == 3

    def test_get_unknown_returns_none(self) -> None:
        assert PatternRegistry([]).get("Email") is None

    def test_iteration_yields_rules_in_order(self) -> None:
        registry = PatternRegistry.from_jurisdictions(["common"])
        assert [rule.category for rule in registry] == list(registry.categories)

    def test_repr(self) -> None:
        assert "categories=4" in repr(PatternRegistry.from_jurisdictions(["common"]))


class TestDefaultRegistry:
    def test_default_registry_is_cached(self) -> None:
        assert default_registry() is default_registry()

    def test_default_registry_holds_every_set(self) -> None:
        assert set(default_registry().categories) == set(PatternRegistry.from_jurisdictions().categories)
