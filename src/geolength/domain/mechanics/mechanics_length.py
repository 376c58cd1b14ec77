from collections.abc import Iterable

from geolength.app.protocols import DistanceSolver
from geolength.domain.entities.geography import (
    Line,
    LineString,
    MultiLineString,
    is_coord_like,
)
from geolength.domain.mechanics.mechanics_distance import (
    FailedToConvergeError,
    VincentyDistance,
)
from geolength.runtime.hooks import NoopHooks, SolverHooks


class VincentyLength:
    """
    Sums solver distances along paths. The first line that fails to converge
    aborts the whole computation; no partial length is ever returned.
    """

    def __init__(self, solver: DistanceSolver, *, hooks: SolverHooks | None = None):
        self.solver = solver
        self.hooks = hooks or NoopHooks()

    def line_length(self, line: Line):
        start, end = line.points()
        return self.solver.distance(start, end)

    def path_length(self, line_string: LineString):
        total = line_string.dtype.type(0)
        n = 0
        for n, line in enumerate(line_string.lines(), start=1):
            try:
                total = total + self.line_length(line)
            except FailedToConvergeError:
                self.hooks.length_failed(kind="line_string", segment_index=n - 1)
                raise
        self.hooks.length_done(kind="line_string", segments=n, length_m=total)
        return total

    def multipath_length(self, multi: MultiLineString):
        total = multi.dtype.type(0)
        segments = 0
        for line_string in multi:
            total = total + self.path_length(line_string)
            segments += max(len(line_string) - 1, 0)
        self.hooks.length_done(kind="multi_line_string", segments=segments, length_m=total)
        return total

    def length(self, path_like):
        if isinstance(path_like, Line):
            return self.line_length(path_like)
        if isinstance(path_like, LineString):
            return self.path_length(path_like)
        if isinstance(path_like, MultiLineString):
            return self.multipath_length(path_like)
        if isinstance(path_like, Iterable) and not isinstance(path_like, (str, bytes)):
            items = list(path_like)
            # a collection of paths rather than of coordinates
            if items and not any(is_coord_like(p) for p in items):
                return self.multipath_length(MultiLineString.from_iterable(items))
            return self.path_length(LineString.from_iterable(items))
        raise TypeError(f"Cannot measure the length of {type(path_like).__name__}")


_wgs84_length = VincentyLength(VincentyDistance())


def vincenty_length(path_like):
    """Length in meters on WGS-84 with the default iteration settings."""
    return _wgs84_length.length(path_like)
