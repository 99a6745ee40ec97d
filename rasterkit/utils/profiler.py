"""Wall-clock timing for rendering passes.

scene.render_scene() times the whole replay with timer() and keeps one
TimerAccumulator per shape kind, logged at DEBUG once the scene is done:

    rasterkit.scene | TimerAccumulator(filled_arc, mean=0.0041s, count=4)

perf_counter only; no cProfile or line_profiler overhead.
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

logger = logging.getLogger(__name__)

Sink = Callable[[str, float], None]


def _log_sink(name: str, elapsed: float) -> None:
    logger.debug("%s: %.3f ms", name, elapsed * 1000.0)


@contextmanager
def _clock(report: Callable[[float], None]) -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        # Reported even when the body raises
        report(time.perf_counter() - start)


def timer(name: str, sink: Optional[Sink] = None):
    """Time a block and hand (name, seconds) to sink.

    Without a sink the duration is logged at DEBUG in milliseconds.

    Examples
    --------
    >>> timings = {}
    >>> with timer("demo", sink=timings.__setitem__):
    ...     render_scene(scene)
    >>> timings["demo"]
    0.0123
    """
    report = sink or _log_sink
    return _clock(lambda elapsed: report(name, elapsed))


class TimerAccumulator:
    """Running total of repeated measurements under one name.

    Attributes
    ----------
    name : str
    total_time : float
        Seconds summed over all measurements
    count : int
    best, worst : float
        Fastest and slowest single measurement (0.0 before the first)
    """

    def __init__(self, name: str):
        self.name = name
        self.reset()

    def _add(self, elapsed: float) -> None:
        self.best = elapsed if self.count == 0 else min(self.best, elapsed)
        self.worst = max(self.worst, elapsed)
        self.total_time += elapsed
        self.count += 1

    def measure(self):
        """Context manager adding one measurement."""
        return _clock(self._add)

    def mean(self) -> float:
        return self.total_time / self.count if self.count else 0.0

    def reset(self) -> None:
        self.total_time = 0.0
        self.count = 0
        self.best = 0.0
        self.worst = 0.0

    def __repr__(self) -> str:
        return f"TimerAccumulator({self.name}, mean={self.mean():.4f}s, count={self.count})"
