#!/usr/bin/env python3
"""Example: Quickstart: pii-scanner

Minimal working example: build a throwaway file share, scan it and
print the statistics summary.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install pii-scanner
"""
from __future__ import annotations

import tempfile
from pathlib import Path

import pii_scanner
from pii_scanner import PiiScanner


def main() -> None:
    print(f"pii-scanner version: {pii_scanner.__version__}")

    with tempfile.TemporaryDirectory() as workdir:
        # Step 1: Create a small share with a few files
        share = Path(workdir) / "partage"
        (share / "rh").mkdir(parents=True)
        (share / "clients.csv").write_text(
            "nom;email;telephone\n"
            "Adjovi;koffi.adjovi@exemple.bj;+229 97 12 34 56\n"
            "Houngbo;afi.houngbo@exemple.bj;+229 66 45 78 90\n",
            encoding="utf-8",
        )
        (share / "rh" / "paie.txt").write_text(
            "Virement sur BJ66 BJ06 1010 0100 1443 9000 0769\n", encoding="utf-8"
        )
        (share / "compte_rendu.md").write_text("Réunion reportée à jeudi.\n", encoding="utf-8")

        # Step 2: Scan it with the default configuration
        scanner = PiiScanner()
        print(f"Scanner ready: {scanner!r}")
        report = scanner.scan(str(share))

        # Step 3: Print the statistics
        print(f"\nFiles scanned: {report.files_scanned}, skipped: {report.files_skipped}")
        print(report.statistics().summary())


if __name__ == "__main__":
    main()
