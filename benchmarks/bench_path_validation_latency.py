"""Benchmark: Path validation latency: per-call p50/p99.

Measures the per-call latency of get_safe_absolute_path() over a mix of
accepted and rejected relative paths.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pii_scanner.security.path_validator import get_safe_absolute_path

_ITERATIONS: int = 5_000

_BASE: str = "/srv/partage"
_CANDIDATES: list[str] = [
    "rh/export_2024.csv",
    "..\\..\\secret",
    "clients/./contrats/bail.txt",
    "../etc/passwd",
    "a/b/../c.txt",
]


def bench_path_validation_latency() -> dict[str, object]:
    """Benchmark get_safe_absolute_path() per-call latency.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, memory_peak_mb,
    candidates, rejected_candidates.
    """
    rejected = sum(1 for c in _CANDIDATES if not get_safe_absolute_path(c, _BASE).ok)
    latencies_ms: list[float] = []
    for i in range(_ITERATIONS):
        t0 = time.perf_counter()
        get_safe_absolute_path(_CANDIDATES[i % len(_CANDIDATES)], _BASE)
        latencies_ms.append((time.perf_counter() - t0) * 1000)

    sorted_lats = sorted(latencies_ms)
    n = len(sorted_lats)
    total = sum(latencies_ms) / 1000

    result: dict[str, object] = {
        "operation": "path_validation_latency",
        "candidates": len(_CANDIDATES),
        "rejected_candidates": rejected,
        "iterations": n,
        "total_seconds": round(total, 4),
        "ops_per_second": round(n / total, 1) if total > 0 else 0.0,
        "avg_latency_ms": round(sum(latencies_ms) / n, 4),
        "p99_latency_ms": round(sorted_lats[min(int(n * 0.99), n - 1)], 4),
        "memory_peak_mb": 0.0,
    }
    print(
        f"[bench_path_validation_latency] {result['operation']}: "
        f"p99={result['p99_latency_ms']:.4f}ms  "
        f"mean={result['avg_latency_ms']:.4f}ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_path_validation_latency()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
