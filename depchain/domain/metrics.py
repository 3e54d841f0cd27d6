import time
from typing import Dict


class Metrics:
    """
    Operation counters and elapsed time for a single algorithm run.

    Each algorithm instance owns one Metrics object and resets it at the
    start of every run, so counts never leak between runs or between
    instances.
    """

    def __init__(self):
        self._counters: Dict[str, int] = {}
        self._start_time = 0
        self._end_time = 0

    def increment(self, name: str, amount: int = 1):
        """
        Add amount to the named counter.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError("Counters can only be incremented by non-negative amounts")
        self._counters[name] = self._counters.get(name, 0) + amount

    def get_count(self, name: str) -> int:
        return self._counters.get(name, 0)

    def counters(self) -> Dict[str, int]:
        return dict(self._counters)

    def start_timer(self):
        self._start_time = time.perf_counter_ns()
        self._end_time = self._start_time

    def stop_timer(self):
        self._end_time = time.perf_counter_ns()

    @property
    def elapsed_nanos(self) -> int:
        return self._end_time - self._start_time

    @property
    def elapsed_millis(self) -> float:
        return self.elapsed_nanos / 1_000_000.0

    def reset(self):
        self._counters.clear()
        self._start_time = 0
        self._end_time = 0

    def snapshot(self) -> Dict[str, int]:
        """Counters plus elapsed_nanos, as a plain dict."""
        data = self.counters()
        data["elapsed_nanos"] = self.elapsed_nanos
        return data

    def summary(self) -> str:
        lines = [
            "=== Metrics Summary ===",
            f"Execution time: {self.elapsed_millis:.3f} ms",
            "Operation counts:",
        ]
        for name in sorted(self._counters):
            lines.append(f"  {name}: {self._counters[name]}")
        return "\n".join(lines)

    def print_summary(self):
        print(self.summary())

    def __repr__(self):
        return f"Metrics({self._counters}, elapsed_nanos={self.elapsed_nanos})"
