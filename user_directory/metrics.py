"""In-process counters and timings.

Components record what they did (encode attempts, storage writes, upload
outcomes) so tests and the CLI can inspect it without parsing logs.

Usage:
    from user_directory.metrics import metrics
    metrics.inc("optimizer.encode_attempts")
    with metrics.timed("persistence.save"):
        ...
    metrics.count("optimizer.encode_attempts")
"""

from __future__ import annotations

import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Any


class _Metrics:
    def __init__(self) -> None:
        self._counters: dict[str, int] = defaultdict(int)
        self._timings: dict[str, list[float]] = defaultdict(list)

    def inc(self, key: str, amount: int = 1) -> None:
        self._counters[key] += int(amount)

    def count(self, key: str) -> int:
        return self._counters.get(key, 0)

    @contextmanager
    def timed(self, key: str):
        start = time.perf_counter()
        try:
            yield
        finally:
            self._timings[key].append(time.perf_counter() - start)

    def snapshot(self) -> dict[str, Any]:
        return {
            "counters": dict(self._counters),
            "timings": {k: list(v) for k, v in self._timings.items()},
        }

    def reset(self) -> None:
        self._counters.clear()
        self._timings.clear()


metrics = _Metrics()
