# geolength/domain/mechanics/mechanics_core.py
from dataclasses import dataclass

from geolength.app.protocols import DistanceSolver, Geodesy, LengthAggregator
from geolength.domain.entities.ellipsoid import Ellipsoid
from geolength.domain.entities.geography import CoordLike


@dataclass
class Geodesy(Geodesy):
    solver: DistanceSolver
    aggregator: LengthAggregator

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self.solver.ellipsoid

    def distance_m(self, a: CoordLike, b: CoordLike):
        return self.solver.distance(a, b)

    def length_m(self, path_like):
        return self.aggregator.length(path_like)
