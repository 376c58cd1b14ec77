# geolength/app/report.py
from collections.abc import Iterable
from dataclasses import dataclass

from geolength.app.protocols import Geodesy
from geolength.domain.entities.geography import LineString
from geolength.domain.mechanics.mechanics_distance import FailedToConvergeError
from geolength.io.recorder import Recorder


@dataclass(frozen=True)
class LengthRecord:
    index: int
    points: int
    length_m: float | None
    error: str | None = None


def report_lengths(paths: Iterable, geodesy: Geodesy, recorder: Recorder) -> list[LengthRecord]:
    """
    Measure each path independently and emit one record per path.
    A path that fails to converge is recorded with length_m=None; the next
    path is still measured.
    """
    out: list[LengthRecord] = []
    for i, p in enumerate(paths):
        ls = p if isinstance(p, LineString) else LineString.from_iterable(p)
        try:
            rec = LengthRecord(i, len(ls), float(geodesy.length_m(ls)))
        except FailedToConvergeError:
            rec = LengthRecord(i, len(ls), None, error="failed_to_converge")
        recorder.emit(rec)
        out.append(rec)
    return out
