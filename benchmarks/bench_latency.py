"""Benchmark: fetch latency (p50/p95/mean).

Measures per-call latency of decoding an empty and a nearly full record.
"""
from __future__ import annotations

import json
import statistics
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from liststore import ListStore, Principal

_WARMUP: int = 100
_ITERATIONS: int = 2_000


def _percentile(samples: list[float], pct: float) -> float:
    ordered = sorted(samples)
    index = min(len(ordered) - 1, int(len(ordered) * pct))
    return ordered[index]


def bench_fetch_latency(iterations: int = _ITERATIONS) -> dict[str, object]:
    """Benchmark ``ListStore.fetch`` on an empty and a full record.

    Returns
    -------
    dict keyed by record shape, each with p50_ms, p95_ms and mean_ms.
    """
    store = ListStore()
    caller = Principal.from_seed("bench")
    empty = store.initialize(caller)
    full = store.initialize(caller)
    for n in range(150):
        store.append(full, caller, f"https://example.com/{n:04d}.gif")

    result: dict[str, object] = {"operation": "fetch_latency", "iterations": iterations}
    for shape, ref in (("empty", empty), ("full", full)):
        for _ in range(_WARMUP):
            store.fetch(ref)
        samples: list[float] = []
        for _ in range(iterations):
            start = time.perf_counter()
            store.fetch(ref)
            samples.append((time.perf_counter() - start) * 1000)
        result[shape] = {
            "p50_ms": round(_percentile(samples, 0.50), 4),
            "p95_ms": round(_percentile(samples, 0.95), 4),
            "mean_ms": round(statistics.fmean(samples), 4),
        }
        print(f"[bench_latency] fetch {shape}: {result[shape]}")
    return result


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "fetch_latency_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(bench_fetch_latency(), fh, indent=2)
    print(f"Results saved to {output_path}")
