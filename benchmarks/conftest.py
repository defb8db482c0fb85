"""Shared bootstrap for pii-scanner benchmarks."""
from __future__ import annotations

import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).parent.parent
_SRC = _REPO_ROOT / "src"
_BENCHMARKS = _REPO_ROOT / "benchmarks"

for _path in [str(_SRC), str(_BENCHMARKS)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from pii_scanner.detection.pii_detector import PiiDetector
from pii_scanner.detection.registry import PatternRegistry, default_registry
from pii_scanner.security.path_validator import get_safe_absolute_path, validate_file_path

__all__ = [
    "PatternRegistry",
    "PiiDetector",
    "default_registry",
    "get_safe_absolute_path",
    "validate_file_path",
]
