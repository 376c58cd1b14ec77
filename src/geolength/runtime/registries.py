# runtime/registries.py
from collections.abc import Callable
from typing import Any

from geolength.app.protocols import DistanceSolver
from geolength.config.models import (
    EllipsoidCustomModel,
    EllipsoidNamedModel,
    EllipsoidUnion,
    SolverUnion,
    VincentySolverModel,
)
from geolength.domain.entities.ellipsoid import GRS80, SPHERE, WGS84, Ellipsoid
from geolength.domain.mechanics.mechanics_distance import VincentyDistance

EllipsoidFactory = Callable[[EllipsoidUnion], Ellipsoid]
SolverFactory = Callable[[SolverUnion, dict[str, Any]], DistanceSolver]

_ellipsoid_registry: dict[str, EllipsoidFactory] = {}
_named_ellipsoids: dict[str, Ellipsoid] = {e.name: e for e in (WGS84, GRS80, SPHERE)}
_solver_registry: dict[str, SolverFactory] = {}


# ------------------- Ellipsoids ---------------------------


def register_ellipsoid(kind: str):
    def deco(fn: EllipsoidFactory):
        _ellipsoid_registry[kind] = fn
        return fn

    return deco


def make_ellipsoid(cfg: EllipsoidUnion) -> Ellipsoid:
    try:
        factory = _ellipsoid_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown ellipsoid kind {cfg.kind!r}")
    return factory(cfg)


def named_ellipsoid(name: str) -> Ellipsoid:
    try:
        return _named_ellipsoids[name]
    except KeyError:
        raise ValueError(f"Unknown ellipsoid {name!r}")


@register_ellipsoid("named")
def _make_named(cfg: EllipsoidNamedModel):
    return named_ellipsoid(cfg.name)


@register_ellipsoid("custom")
def _make_custom(cfg: EllipsoidCustomModel):
    if cfg.b is not None:
        return Ellipsoid.from_axes(cfg.name, cfg.a, cfg.b)
    return Ellipsoid.from_flattening(cfg.name, cfg.a, cfg.f)


# --------------------- Solvers ---------------------


def register_solver(kind: str):
    def deco(fn: SolverFactory):
        _solver_registry[kind] = fn
        return fn

    return deco


def make_solver(cfg: SolverUnion, *, deps: dict) -> DistanceSolver:
    """
    deps must include:
      - 'ellipsoid': Ellipsoid
    and may include:
      - 'hooks': SolverHooks
    """
    try:
        factory = _solver_registry[cfg.kind]
    except KeyError:
        raise ValueError(f"Unknown solver kind {cfg.kind!r}")
    return factory(cfg, deps)


@register_solver("vincenty")
def _make_vincenty(cfg: VincentySolverModel, deps):
    return VincentyDistance(
        deps["ellipsoid"],
        max_iterations=cfg.max_iterations,
        threshold=cfg.threshold,
        hooks=deps.get("hooks"),
    )
