"""Benchmark: PII detector throughput: documents per second.

Measures how many PiiDetector.detect() calls can be completed per second on
a realistic HR export mixing identifiers, contact data and plain prose.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from pii_scanner.detection.pii_detector import PiiDetector

_ITERATIONS: int = 2_000

_DOCUMENT: str = "\n".join(
    [
        "matricule;nom;email;telephone;ifu;iban",
        "F123456;Adjovi Koffi;koffi.adjovi@exemple.bj;+229 97 12 34 56;3201234567890;"
        "BJ66 BJ06 1010 0100 1443 9000 0769",
        "M654321;Houngbo Afi;afi.houngbo@exemple.bj;96 11 22 33;1209876543210;",
        "Réunion du comité le 12/03/2024, compte rendu diffusé à l'équipe.",
        "Carte de paiement: 4532 0151 1283 0366 (expire 09/27).",
        "db_password = 'S3cur3!Cotonou'",
    ]
    * 5
)


def bench_detector_throughput() -> dict[str, object]:
    """Benchmark PiiDetector.detect() throughput.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms, p99_latency_ms, memory_peak_mb,
    detections_per_document.
    """
    detector = PiiDetector()
    detections_per_document = len(detector.detect(_DOCUMENT, "export_rh.csv"))

    start = time.perf_counter()
    for _ in range(_ITERATIONS):
        detector.detect(_DOCUMENT, "export_rh.csv")
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": "detector_throughput",
        "detections_per_document": detections_per_document,
        "iterations": _ITERATIONS,
        "total_seconds": round(total, 4),
        "ops_per_second": round(_ITERATIONS / total, 1),
        "avg_latency_ms": round(total / _ITERATIONS * 1000, 4),
        "p99_latency_ms": 0.0,
        "memory_peak_mb": 0.0,
    }
    print(
        f"[bench_detector_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_detector_throughput()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "throughput_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")
