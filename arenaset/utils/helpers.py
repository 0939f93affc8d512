"""Timing helpers used by the arenaset benchmarks."""

import gc
import time
from typing import Any, Callable, Dict, Iterable, List, Tuple

# (unit, nanoseconds per unit, decimals), largest first
_UNITS = (
    ('s', 1_000_000_000, 3),
    ('ms', 1_000_000, 2),
    ('µs', 1_000, 1),
)


def timed(fn: Callable[[], Any]) -> Tuple[Any, int]:
    """Call ``fn`` with the garbage collector paused; return (result, elapsed ns)."""
    gc.disable()
    try:
        start = time.perf_counter_ns()
        result = fn()
        elapsed = time.perf_counter_ns() - start
    finally:
        gc.enable()
    return result, elapsed


def time_per_op(
    setup: Callable[[], Any],
    op: Callable[[Any, Any], Any],
    items: Iterable[Any],
    repeats: int = 5,
) -> Dict[str, float]:
    """
    Time ``op(state, item)`` over ``items``, ``repeats`` times.

    ``setup`` builds a fresh state for every repeat so mutating operations
    (intern, disintern) start from the same point. Returns per-operation
    nanoseconds (median, min) across repeats.
    """
    items = list(items)
    per_op: List[float] = []
    for _ in range(repeats):
        state = setup()

        def run():
            for item in items:
                op(state, item)

        _, elapsed = timed(run)
        per_op.append(elapsed / max(1, len(items)))

    per_op.sort()
    return {
        'median_ns': per_op[len(per_op) // 2],
        'min_ns': per_op[0],
        'ops': len(items),
    }


def format_ns(ns: float) -> str:
    """Render a nanosecond count in the largest unit it reaches."""
    for unit, scale, decimals in _UNITS:
        if ns >= scale:
            return f"{ns / scale:.{decimals}f} {unit}"
    return f"{ns:.0f} ns"
