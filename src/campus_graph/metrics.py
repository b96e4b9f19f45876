from __future__ import annotations

import time
from typing import Dict, Optional

import pandas as pd


class PerformanceMetrics:
    """Named operation counters and a monotonic timer.

    Purely observational: algorithms bump counters while they run, and callers
    read them afterwards to compare operation counts against V+E.
    """

    def __init__(self):
        self._counters: Dict[str, int] = {}
        self._start: Optional[int] = None
        self._end: Optional[int] = None

    def start_timer(self) -> None:
        self._start = time.perf_counter_ns()
        self._end = None

    def stop_timer(self) -> None:
        if self._start is not None and self._end is None:
            self._end = time.perf_counter_ns()

    @property
    def running(self) -> bool:
        return self._start is not None and self._end is None

    def elapsed_ns(self) -> int:
        if self._start is None:
            return 0
        end = self._end if self._end is not None else time.perf_counter_ns()
        return end - self._start

    def elapsed_ms(self) -> float:
        return self.elapsed_ns() / 1_000_000.0

    def increment(self, name: str) -> None:
        self._counters[name] = self._counters.get(name, 0) + 1

    def add(self, name: str, value: int) -> None:
        self._counters[name] = self._counters.get(name, 0) + int(value)

    def get_counter(self, name: str) -> int:
        return self._counters.get(name, 0)

    def counters(self) -> Dict[str, int]:
        return dict(self._counters)

    def total_operations(self) -> int:
        return sum(self._counters.values())

    def reset(self) -> None:
        self._counters.clear()
        self._start = None
        self._end = None

    def as_series(self) -> pd.Series:
        """Counters as an int64 Series indexed by counter name."""
        return pd.Series(self._counters, dtype="int64").sort_index()

    def summary(self) -> str:
        return f"Time: {self.elapsed_ms():.3f}ms | Ops: {self.total_operations()}"

    def __str__(self) -> str:
        lines = ["Performance Metrics:", f"  Execution Time: {self.elapsed_ms():.3f} ms", "  Operations:"]
        for name in sorted(self._counters):
            lines.append(f"    {name}: {self._counters[name]}")
        lines.append(f"  Total Operations: {self.total_operations()}")
        return "\n".join(lines)
