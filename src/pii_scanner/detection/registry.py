"""Immutable registry of named detection rules.

A :class:`PatternRegistry` maps each category identifier to a
:class:`PatternRule` (compiled pattern plus optional validator).  The
registry is built once and never mutated: :meth:`PatternRegistry.extended`
and :meth:`PatternRegistry.without` return new registries, so several
independently configured registries can coexist and a shared instance is
safe to use from any number of threads without locking.

Insertion order defines scan order.  It does not define precedence:
categories are independent signals.

Example
-------
>>> registry = PatternRegistry.from_jurisdictions(["common"])
>>> registry.categories
('Email', 'DateNaissance', 'CarteBancaire', 'AdresseIP')
>>> registry.get("CarteBancaire").validator is not None
True
"""
from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from pii_scanner.detection.patterns.benin import BENIN_PATTERNS
from pii_scanner.detection.patterns.common import COMMON_PATTERNS
from pii_scanner.detection.patterns.credentials import CREDENTIAL_PATTERNS
from pii_scanner.detection.validators import VALIDATORS, Validator


@dataclass(frozen=True)
class PatternRule:
    """A single detection rule.

    Attributes
    ----------
    category:
        Category identifier (e.g. ``"CarteBancaire"``).
    pattern:
        Compiled regular expression producing candidates.
    validator:
        Optional predicate applied to every candidate.  ``None`` means
        every pattern match is accepted.
    jurisdiction:
        Name of the pattern set the rule came from.
    """

    category: str
    pattern: re.Pattern[str]
    validator: Validator | None = None
    jurisdiction: str = "custom"

    def accepts(self, candidate: str) -> bool:
        """Return ``True`` when *candidate* passes this rule's validator."""
        if self.validator is None:
            return True
        return self.validator(candidate)


# Mapping of jurisdiction name to pattern list.
_JURISDICTION_MAP: Mapping[str, list[tuple[str, re.Pattern[str]]]] = MappingProxyType(
    {
        "common": COMMON_PATTERNS,
        "benin": BENIN_PATTERNS,
        "credentials": CREDENTIAL_PATTERNS,
    }
)

ALL_JURISDICTIONS: tuple[str, ...] = tuple(_JURISDICTION_MAP.keys())


class PatternRegistry:
    """Ordered, read-only mapping of category to :class:`PatternRule`.

    Parameters
    ----------
    rules:
        Rules in scan order.  Category identifiers must be unique.

    Raises
    ------
    ValueError
        When two rules share the same category.
    """

    def __init__(self, rules: Iterable[PatternRule]) -> None:
        table: dict[str, PatternRule] = {}
        for rule in rules:
            if rule.category in table:
                raise ValueError(f"Duplicate detection category '{rule.category}'")
            table[rule.category] = rule
        self._rules: Mapping[str, PatternRule] = MappingProxyType(table)

    @classmethod
    def from_jurisdictions(
        cls,
        jurisdictions: Iterable[str] | None = None,
        disabled_categories: Iterable[str] = (),
    ) -> "PatternRegistry":
        """Build a registry from the named pattern sets.

        Parameters
        ----------
        jurisdictions:
            Pattern sets to load, in order.  ``None`` loads every set.
        disabled_categories:
            Categories to leave out.

        Raises
        ------
        ValueError
            When a jurisdiction name is unknown.
        """
        selected = list(jurisdictions) if jurisdictions is not None else list(ALL_JURISDICTIONS)
        disabled = set(disabled_categories)
        rules: list[PatternRule] = []
        for jurisdiction in selected:
            if jurisdiction not in _JURISDICTION_MAP:
                raise ValueError(
                    f"Unknown jurisdiction '{jurisdiction}'. Valid: {list(ALL_JURISDICTIONS)}"
                )
            for category, pattern in _JURISDICTION_MAP[jurisdiction]:
                if category in disabled:
                    continue
                rules.append(
                    PatternRule(
                        category=category,
                        pattern=pattern,
                        validator=VALIDATORS.get(category),
                        jurisdiction=jurisdiction,
                    )
                )
        return cls(rules)

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def extended(self, *rules: PatternRule) -> "PatternRegistry":
        """Return a new registry with *rules* appended after the existing ones."""
        return PatternRegistry([*self._rules.values(), *rules])

    def without(self, *categories: str) -> "PatternRegistry":
        """Return a new registry without the given categories."""
        removed = set(categories)
        return PatternRegistry(rule for rule in self._rules.values() if rule.category not in removed)

    # ------------------------------------------------------------------
    # Read API
    # ------------------------------------------------------------------

    @property
    def categories(self) -> tuple[str, ...]:
        """Registered categories in scan order."""
        return tuple(self._rules.keys())

    def get(self, category: str) -> PatternRule | None:
        """Return the rule for *category*, or ``None``."""
        return self._rules.get(category)

    def __iter__(self) -> Iterator[PatternRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, category: object) -> bool:
        return category in self._rules

    def __repr__(self) -> str:
        return f"PatternRegistry(categories={len(self._rules)})"


@functools.lru_cache(maxsize=1)
def default_registry() -> PatternRegistry:
    """Return the process-wide registry with every pattern set loaded."""
    return PatternRegistry.from_jurisdictions()
