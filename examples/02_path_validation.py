#!/usr/bin/env python3
"""Example: Path validation

Shows the path guards that run before any file is opened: system
directories, traversal sequences, reserved file names and containment
checks.

Usage:
    python examples/02_path_validation.py

Requirements:
    pip install pii-scanner
"""
from __future__ import annotations

from pii_scanner import (
    get_safe_absolute_path,
    sanitize_path,
    validate_directory_path,
    validate_file_in_directory,
    validate_file_name,
)


def main() -> None:
    # Step 1: Directory roots
    print("Directory roots:")
    for candidate in ["/srv/partage", "/etc", "/srv/partage/../../root", "~/documents"]:
        result = validate_directory_path(candidate, must_exist=False)
        status = "OK  " if result.ok else "DENY"
        print(f"  [{status}] {candidate!r:32} {result.error_message}")

    # Step 2: File names
    print("\nFile names:")
    for name in ["rapport.csv", "CON", "sauvegarde~.txt", "a<b.txt"]:
        result = validate_file_name(name)
        status = "OK  " if result.ok else "DENY"
        print(f"  [{status}] {name!r:20} {result.error_message}")

    # Step 3: Containment
    print("\nContainment under /srv/partage:")
    for candidate in ["/srv/partage/rh/paie.txt", "/srv/partage-old/paie.txt"]:
        ok, _ = validate_file_in_directory(candidate, "/srv/partage")
        print(f"  {candidate}: {'inside' if ok else 'outside'}")

    # Step 4: Relative paths resolved under a base
    print("\nResolution under /srv/partage:")
    for relative in ["rh/export.csv", "..\\..\\secret", "a/../b.txt"]:
        result = get_safe_absolute_path(relative, "/srv/partage")
        print(f"  {relative!r:20} -> {result.path or result.error_message}")

    # Step 5: Cosmetic clean-up
    print(f"\nsanitize_path: {sanitize_path('  /srv//partage/./rh/  ')!r}")


if __name__ == "__main__":
    main()
