# io/solver_logging.py
import itertools
import json
import logging
import sys

from geolength.runtime.hooks import NoopHooks


def _default_json_logger(name="geolength", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=float)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class SolverLogging(NoopHooks):
    """
    One place to shape and emit structured logs for solver and length events.
    Failures always log at WARNING; per-solve events only when debug is on.
    The sampling counter is an itertools.count, so one instance can be shared
    by solvers running on several threads.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or _default_json_logger(level=level)
        self._solved = itertools.count(1)

    # --------------- Helpers -----------------------------

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    @staticmethod
    def _shape_pair(p1, p2):
        return {"p1": [float(p1.x), float(p1.y)], "p2": [float(p2.x), float(p2.y)]}

    def _sampled(self) -> bool:
        n = next(self._solved)
        return self.debug and n % self.sample_every == 0

    # --------------------------------------------------------

    # solver

    def coincident(self, p1, p2):
        if self._sampled():
            self._emit("DEBUG", "coincident", **self._shape_pair(p1, p2))

    def converged(self, p1, p2, *, iterations: int, distance_m):
        if self._sampled():
            self._emit(
                "DEBUG",
                "converged",
                **self._shape_pair(p1, p2),
                iterations=iterations,
                distance_m=float(distance_m),
            )

    def failed(self, p1, p2, *, reason: str, iterations: int):
        self._emit(
            "WARNING",
            "failed_to_converge",
            **self._shape_pair(p1, p2),
            reason=reason,
            iterations=iterations,
        )

    # aggregator

    def length_done(self, *, kind: str, segments: int, length_m):
        if self.debug:
            self._emit("INFO", "length_done", kind=kind, segments=segments, length_m=float(length_m))

    def length_failed(self, *, kind: str, segment_index: int):
        self._emit("WARNING", "length_failed", kind=kind, segment_index=segment_index)
