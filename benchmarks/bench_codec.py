#!/usr/bin/env python3
"""
Micro-benchmarks for resp3kit encode/decode + cProfile summaries.

Usage:
  python benchmarks/bench_codec.py
  python benchmarks/bench_codec.py --runs 20000 --profile-runs 2000 --no-profile
"""

import argparse
import cProfile
import gc
import json
import os
import pstats
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from resp3kit import ByteReader, PartialInputError, ScalarRecord, decode, encode, encode_bytes


@dataclass
class Case:
    name: str
    values: List[Any]


def _build_cases() -> List[Case]:
    return [
        Case("short_string", ["OK", "hello", "key:1234"]),
        Case("bulk_string", ["x" * 64, "y" * 1024]),
        Case("integer", [0, 42, -(2**63), 2**63 - 1]),
        Case("float", [3.14, -0.001, 1e12]),
        Case("mixed_array", [["SET", "key", 1, True, None, 2.5]]),
        Case("int_array", [list(range(100))]),
        Case("text_map", [{f"k{i}": i for i in range(20)}]),
        Case("int_map", [{i: f"v{i}" for i in range(20)}]),
        Case("nested", [{"a": [1, 2, {"b": ["c" * 20, 3.5]}], "d": {"e": [True, False]}}]),
        Case("scalar_record", [ScalarRecord(value=30, type=8, lat=2434, expiry=3443)]),
    ]


def _timed_loop(runs: int, fn: Callable[[int], None]) -> float:
    gc.collect()
    gc.disable()
    try:
        start = time.perf_counter()
        for i in range(runs):
            fn(i)
        end = time.perf_counter()
    finally:
        gc.enable()
    return end - start


def _profile_loop(runs: int, fn: Callable[[int], None]) -> pstats.Stats:
    prof = cProfile.Profile()
    prof.enable()
    for i in range(runs):
        fn(i)
    prof.disable()
    stats = pstats.Stats(prof)
    stats.sort_stats("cumulative")
    return stats


def _stats_top(stats: pstats.Stats, limit: int = 8) -> List[Tuple[str, float, int]]:
    rows = []
    for func, stat in list(stats.stats.items()):
        cc, nc, tt, ct, callers = stat
        rows.append((func, ct, nc))
    rows.sort(key=lambda x: x[1], reverse=True)
    top = []
    for func, ct, nc in rows[:limit]:
        func_name = "%s:%d(%s)" % (func[0], func[1], func[2])
        top.append((func_name, ct, nc))
    return top


def _bench_streaming(runs: int, chunk: int = 7) -> float:
    """Decode a pipeline of records arriving in small chunks."""
    wire = b"".join(encode_bytes(v) for case in _build_cases() for v in case.values)
    chunks = [wire[i:i + chunk] for i in range(0, len(wire), chunk)]

    def _stream(_: int) -> None:
        reader = ByteReader()
        for piece in chunks:
            reader.feed(piece)
            while reader.available():
                try:
                    decode(reader)
                except PartialInputError:
                    break
            reader.compact()

    return _timed_loop(runs, _stream)


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--runs", type=int, default=20000)
    parser.add_argument("--profile-runs", type=int, default=2000)
    parser.add_argument("--stream-runs", type=int, default=200)
    parser.add_argument("--profile", action="store_true", default=True)
    parser.add_argument("--no-profile", action="store_false", dest="profile")
    parser.add_argument("--output-dir", default=os.path.join("benchmarks", "out"))
    args = parser.parse_args()

    os.makedirs(args.output_dir, exist_ok=True)

    results: Dict[str, Dict[str, float]] = {}
    profiles: Dict[str, Dict[str, List[Tuple[str, float, int]]]] = {}

    for case in _build_cases():
        vals = case.values
        bufs = [encode_bytes(v) for v in vals]
        n = len(vals)

        def _encode_loop(i: int) -> None:
            encode(vals[i % n])

        def _decode_loop(i: int) -> None:
            decode(bufs[i % n])

        results[case.name] = {
            "encode_s": _timed_loop(args.runs, _encode_loop),
            "decode_s": _timed_loop(args.runs, _decode_loop),
        }
        if args.profile:
            profiles[case.name] = {
                "encode": _stats_top(_profile_loop(args.profile_runs, _encode_loop)),
                "decode": _stats_top(_profile_loop(args.profile_runs, _decode_loop)),
            }

    stream_seconds = _bench_streaming(args.stream_runs)

    results_path = os.path.join(args.output_dir, "bench_results.json")
    with open(results_path, "w", encoding="utf-8") as f:
        json.dump(
            {
                "runs": args.runs,
                "stream_runs": args.stream_runs,
                "results": results,
                "stream_s": stream_seconds,
            },
            f,
            indent=2,
            sort_keys=True,
        )

    if args.profile:
        profile_path = os.path.join(args.output_dir, "bench_profiles.json")
        with open(profile_path, "w", encoding="utf-8") as f:
            json.dump({"runs": args.profile_runs, "profiles": profiles}, f, indent=2, sort_keys=True)

    print("Benchmark results (seconds for %d runs):" % args.runs)
    print("name, encode_s, decode_s")
    for name, vals in results.items():
        print("%s, %.6f, %.6f" % (name, vals["encode_s"], vals["decode_s"]))
    print("Streaming decode (seconds for %d runs): %.6f" % (args.stream_runs, stream_seconds))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
