from __future__ import annotations

from collections import Counter
from time import time


class MetricsStore:
    """Step counters for one run, dumped as a JSON summary or Prometheus text."""

    def __init__(self) -> None:
        self._counters: Counter[str] = Counter()
        self._last_update_ts: int = int(time())

    def incr(self, key: str, value: int = 1) -> None:
        self._counters[key] += value
        self._last_update_ts = int(time())

    def reset(self) -> None:
        self._counters.clear()
        self._last_update_ts = int(time())

    def snapshot(self) -> dict[str, int]:
        return {**self._counters, "metrics_last_update_ts": self._last_update_ts}

    def to_prometheus_text(self) -> str:
        return "".join(f"bucketops_{key} {value}\n" for key, value in sorted(self.snapshot().items()))


metrics = MetricsStore()
