import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("wordgrid")


class StageTimer:
    """Per-stage wall time and result counts for a single request.

    ``stage()`` yields a dict the caller can fill with counts (words found,
    paths walked, ...); they are logged with the stage timing and kept under
    the stage name in :attr:`counts`.
    """

    def __init__(self):
        self.timings: dict[str, float] = {}
        self.counts: dict[str, dict[str, int]] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        counts: dict[str, int] = {}
        try:
            yield counts
        finally:
            self.timings[name] = round((time.perf_counter() - t0) * 1000, 1)  # ms
            if counts:
                self.counts[name] = {k: int(v) for k, v in counts.items()}
            logger.debug(
                "stage=%s elapsed=%.1fms%s",
                name, self.timings[name],
                "".join(f" {k}={v}" for k, v in counts.items()),
            )

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}

    def report(self) -> dict:
        return {"timings": self.summary(), "counts": self.counts}
