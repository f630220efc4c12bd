"""Benchmark: append throughput.

Measures how many appends per second a record accepts on the in-memory
and file backends, filling a fresh 10,000-byte record each round.
"""
from __future__ import annotations

import json
import sys
import tempfile
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from liststore import CapacityExceeded, ListStore, Principal
from liststore.config import ListStoreConfig

_ROUNDS: int = 20
_CONTENT: str = "ipfs://bafybeigdyrzt5sfp7udm7hu76uh7y26nf3efuylqabf3oclgtqy55fbzdi"


def _fill(store: ListStore, caller: Principal) -> int:
    """Append until the record is full; return how many appends succeeded."""
    ref = store.initialize(caller)
    appended = 0
    while True:
        try:
            store.append(ref, caller, _CONTENT)
        except CapacityExceeded:
            return appended
        appended += 1


def _run(operation: str, store: ListStore, rounds: int) -> dict[str, object]:
    caller = Principal.from_seed("bench")
    start = time.perf_counter()
    total = sum(_fill(store, caller) for _ in range(rounds))
    elapsed = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": operation,
        "iterations": total,
        "total_seconds": round(elapsed, 4),
        "ops_per_second": round(total / elapsed, 1),
        "avg_latency_ms": round(elapsed / total * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_memory_append_throughput(rounds: int = _ROUNDS) -> dict[str, object]:
    """Benchmark appends against the in-memory backend.

    Returns
    -------
    dict with keys: operation, iterations, total_seconds, ops_per_second,
    avg_latency_ms.
    """
    return _run("memory_append_throughput", ListStore(), rounds)


def bench_file_append_throughput(rounds: int = 2) -> dict[str, object]:
    """Benchmark appends against the file backend (fsync on every write).

    Returns
    -------
    dict with the same keys as ``bench_memory_append_throughput``.
    """
    with tempfile.TemporaryDirectory() as tmp:
        store = ListStore(config=ListStoreConfig(backend="file", data_dir=tmp))
        return _run("file_append_throughput", store, rounds)


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    for bench_fn, fname in [
        (bench_memory_append_throughput, "memory_append_baseline.json"),
        (bench_file_append_throughput, "file_append_baseline.json"),
    ]:
        result = bench_fn()
        output_path = results_dir / fname
        with open(output_path, "w", encoding="utf-8") as fh:
            json.dump(result, fh, indent=2)
        print(f"Results saved to {output_path}")
