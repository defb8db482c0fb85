#!/usr/bin/env python3
"""Example: Exposure classification

Classifies access facts into Faible / Moyen / Critique and prints the
warnings attached to files that hold personal data.

Usage:
    python examples/04_exposure.py

Requirements:
    pip install pii-scanner
"""
from __future__ import annotations

import tempfile
from pathlib import Path

from pii_scanner import AccessEntry, PermissionFacts, analyze_permissions, classify, exposure_warning


def main() -> None:
    # Step 1: Classify hand-built access facts
    scenarios = {
        "private": PermissionFacts(entries=(AccessEntry("DOMAINE\\comptable"),)),
        "everyone": PermissionFacts(entries=(AccessEntry("Tout le monde"),)),
        "authenticated": PermissionFacts(entries=(AccessEntry("Utilisateurs authentifiés"),)),
        "network share": PermissionFacts(
            entries=tuple(AccessEntry(f"DOMAINE\\groupe_{i}") for i in range(12)),
            is_network_path=True,
        ),
    }

    print("Classification:")
    for name, facts in scenarios.items():
        info = classify(facts)
        print(f"  {name:14} -> {info.exposure_level.label}")
        warning = exposure_warning(5, info, language="fr")
        if warning:
            print(f"    {warning}")

    # Step 2: Read the facts of a real file
    with tempfile.TemporaryDirectory() as workdir:
        target = Path(workdir) / "clients.csv"
        target.write_text("koffi.adjovi@exemple.bj\n", encoding="utf-8")
        info = analyze_permissions(str(target)).with_warning(1)
        print(f"\n{target.name}: {info.to_dict()}")


if __name__ == "__main__":
    main()
