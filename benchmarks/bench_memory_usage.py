"""Benchmark: Memory usage of registry construction and detection.

Uses tracemalloc to measure memory allocated while building fresh pattern
registries and running the detector over a small document.
"""
from __future__ import annotations

import json
import sys
import tracemalloc
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pii_scanner.detection.pii_detector import PiiDetector
from pii_scanner.detection.registry import PatternRegistry

_ITERATIONS: int = 200

_DOCUMENT: str = "Contact: awa.dossou@exemple.bj, tél. 97 12 34 56, IFU 3201234567890."


def bench_detection_memory_usage() -> dict[str, object]:
    """Benchmark memory usage during repeated registry builds and detection.

    Returns
    -------
    dict with keys: operation, iterations, peak_memory_kb, current_memory_kb,
    ops_per_second, avg_latency_ms, memory_peak_mb.
    """
    tracemalloc.start()
    snapshot_before = tracemalloc.take_snapshot()

    for _ in range(_ITERATIONS):
        detector = PiiDetector(PatternRegistry.from_jurisdictions(["common", "benin"]))
        detector.detect(_DOCUMENT, "contact.txt")

    snapshot_after = tracemalloc.take_snapshot()
    tracemalloc.stop()

    stats = snapshot_after.compare_to(snapshot_before, "lineno")
    total_bytes = sum(stat.size_diff for stat in stats if stat.size_diff > 0)
    peak_kb = round(total_bytes / 1024, 2)

    result: dict[str, object] = {
        "operation": "detection_memory_usage",
        "iterations": _ITERATIONS,
        "peak_memory_kb": peak_kb,
        "current_memory_kb": peak_kb,
        "ops_per_second": 0.0,
        "avg_latency_ms": 0.0,
        "memory_peak_mb": round(peak_kb / 1024, 4),
    }
    print(
        f"[bench_memory_usage] {result['operation']}: "
        f"peak {peak_kb:.2f} KB over {_ITERATIONS} iterations"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_detection_memory_usage()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "memory_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
