#!/usr/bin/env python3
"""
Benchmark showing many() runs in linear time.

Parses sequences of words with increasing input sizes; the time per item
should stay roughly constant as the input doubles.
"""

import time

from pyparsa import many, run_parser, whitespace, word


def benchmark_many(n):
    """Benchmark parsing n words with many(word.after(whitespace))."""
    input_str = "ab " * n

    start = time.perf_counter()
    result, err = run_parser(many(word.after(whitespace)), input_str)
    elapsed = time.perf_counter() - start

    if err:
        print(f"Error parsing {n} items: {err}")
        return None

    if len(result) != n:
        print(f"Warning: Expected {n} items, got {len(result)}")

    return elapsed * 1000  # Convert to milliseconds


def main():
    print("=" * 70)
    print("pyparsa many() Performance Benchmark")
    print("=" * 70)
    print(
        f"{'Input (n)':>12} | {'Time (ms)':>12} | {'Time per item (µs)':>18} | {'Growth Factor':>15}"
    )
    print("-" * 70)

    prev_time = None
    prev_n = None

    for n in [1000, 2000, 4000, 8000, 16000]:
        elapsed = benchmark_many(n)

        if elapsed:
            time_per_item = elapsed * 1000 / n  # microseconds per item

            if prev_time and prev_n:
                growth = f"{elapsed / prev_time:.1f}x (expected ~{n / prev_n:.1f}x)"
            else:
                growth = "baseline"

            print(
                f"{n:>12,} | {elapsed:>12.2f} | {time_per_item:>18.2f} | {growth:>15}"
            )

            prev_time = elapsed
            prev_n = n

    print("=" * 70)


if __name__ == "__main__":
    main()
