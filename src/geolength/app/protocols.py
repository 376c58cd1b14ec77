from typing import Protocol, runtime_checkable

from geolength.domain.entities.ellipsoid import Ellipsoid
from geolength.domain.entities.geography import (
    CoordLike,
    Line,
    LineString,
    MultiLineString,
    Scalar,
)


# ------------- Mechanics --------------------
@runtime_checkable
class DistanceSolver(Protocol):
    """
    Responsibilities:
      • Compute the surface distance between two points on an ellipsoid.
      • Raise FailedToConvergeError instead of returning a sentinel value.
    Units: degrees in (x=longitude, y=latitude), meters out.
    """

    ellipsoid: Ellipsoid

    def distance(self, p1: CoordLike, p2: CoordLike) -> Scalar: ...


@runtime_checkable
class LengthAggregator(Protocol):
    """
    Responsibilities:
      • Decompose a path into consecutive-pair lines.
      • Sum per-line solver distances, aborting on the first failure.
    """

    solver: DistanceSolver

    def line_length(self, line: Line) -> Scalar: ...
    def path_length(self, line_string: LineString) -> Scalar: ...
    def multipath_length(self, multi: MultiLineString) -> Scalar: ...
    def length(self, path_like) -> Scalar: ...


@runtime_checkable
class Geodesy(Protocol):
    """
    Convenience façade bundling a solver and its aggregator.
    """

    solver: DistanceSolver
    aggregator: LengthAggregator

    def distance_m(self, a: CoordLike, b: CoordLike) -> Scalar:
        return self.solver.distance(a, b)

    def length_m(self, path_like) -> Scalar:
        return self.aggregator.length(path_like)
