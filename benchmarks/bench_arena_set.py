"""
ArenaSet Benchmark Suite
========================

Per-operation timings for the interning engine:

  1. intern (new values)
  2. intern (already interned values, fast path)
  3. resolve
  4. disintern
  5. shrink after disinterning half of the values
  6. baseline: dict + list interning without slot reuse

Usage:
    python -m benchmarks.bench_arena_set [N]
"""

import os
import random
import sys

from tabulate import tabulate

# Ensure arenaset is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from arenaset import byte_arena_set, string_arena_set, string_stadium_set
from arenaset.builder import builder
from arenaset.utils.helpers import format_ns, time_per_op, timed


DEFAULT_N = 20_000
REPEATS = 5


def make_strings(n: int, seed: int = 0):
    rng = random.Random(seed)
    return [f"sym_{rng.getrandbits(48):012x}" for _ in range(n)]


def make_bytes(n: int, seed: int = 1):
    rng = random.Random(seed)
    return [rng.getrandbits(64).to_bytes(8, 'little') for _ in range(n)]


def filled(factory, values):
    p = factory()
    for v in values:
        p.intern(v)
    return p


def bench_family(name, factory, values):
    rows = []

    r = time_per_op(factory, lambda p, v: p.intern(v), values, REPEATS)
    rows.append((name, 'intern (new)', format_ns(r['median_ns']), format_ns(r['min_ns'])))

    r = time_per_op(lambda: filled(factory, values), lambda p, v: p.intern(v), values, REPEATS)
    rows.append((name, 'intern (hit)', format_ns(r['median_ns']), format_ns(r['min_ns'])))

    ids = list(range(len(values)))
    r = time_per_op(lambda: filled(factory, values), lambda p, i: p.resolve(i), ids, REPEATS)
    rows.append((name, 'resolve', format_ns(r['median_ns']), format_ns(r['min_ns'])))

    r = time_per_op(lambda: filled(factory, values), lambda p, i: p.disintern(i), ids, REPEATS)
    rows.append((name, 'disintern', format_ns(r['median_ns']), format_ns(r['min_ns'])))

    p = filled(factory, values)
    for i in ids[::2]:
        p.disintern(i)
    _, elapsed = timed(p.shrink)
    rows.append((name, 'shrink (50% live)', format_ns(elapsed), '-'))
    return rows


def bench_baseline(values):
    def naive_intern(state, v):
        table, storage = state
        if v not in table:
            table[v] = len(storage)
            storage.append(v)
        return table[v]

    r = time_per_op(lambda: ({}, []), naive_intern, values, REPEATS)
    return [('dict+list', 'intern (new)', format_ns(r['median_ns']), format_ns(r['min_ns']))]


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    n = int(argv[0]) if argv else DEFAULT_N
    strings = make_strings(n)
    blobs = make_bytes(n)

    rows = []
    rows += bench_family('string/hash', string_arena_set, strings)
    rows += bench_family('string/ordered', lambda: builder(str).ordered(), strings)
    rows += bench_family('bytes/hash', byte_arena_set, blobs)
    rows += bench_family('string/stadium', string_stadium_set, strings)
    rows += bench_baseline(strings)

    print(f"ArenaSet benchmarks, N={n}, repeats={REPEATS}")
    print(tabulate(rows, headers=['arena', 'operation', 'median/op', 'min/op']))


if __name__ == '__main__':
    main()
