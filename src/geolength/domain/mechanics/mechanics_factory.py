# geolength/domain/mechanics/mechanics_factory.py

from geolength.config.models import GeodesyModel
from geolength.domain.mechanics.mechanics_core import Geodesy
from geolength.domain.mechanics.mechanics_length import VincentyLength
from geolength.runtime.hooks import SolverHooks
from geolength.runtime.registries import make_ellipsoid, make_solver


def build_geodesy(cfg: GeodesyModel, *, hooks: SolverHooks | None = None) -> Geodesy:
    ellipsoid = make_ellipsoid(cfg.ellipsoid)
    solver = make_solver(cfg.solver, deps={"ellipsoid": ellipsoid, "hooks": hooks})
    aggregator = VincentyLength(solver, hooks=hooks)
    return Geodesy(solver=solver, aggregator=aggregator)
