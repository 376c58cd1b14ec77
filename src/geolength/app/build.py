# geolength/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from geolength.config.models import GeodesyModel
from geolength.domain.mechanics.mechanics_core import Geodesy
from geolength.domain.mechanics.mechanics_factory import build_geodesy
from geolength.io.solver_logging import SolverLogging  # JSON logs
from geolength.runtime.hooks import NoopHooks, SolverHooks


@dataclass
class App:
    config: GeodesyModel
    hooks: SolverHooks
    geodesy: Geodesy


def build(
    cfg: GeodesyModel | Mapping | None = None, *, run_id: str = "local", use_logging: bool = True
) -> App:
    # 0) Validate config
    if cfg is None:
        model = GeodesyModel()
    else:
        model = cfg if isinstance(cfg, GeodesyModel) else GeodesyModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        SolverLogging(
            run_id=run_id,
            level=model.log.level,
            debug=model.log.debug,
            sample_every=model.log.sample_every,
        )
        if use_logging
        else NoopHooks()
    )

    # 2) Solver + aggregator
    geodesy = build_geodesy(model, hooks=hooks)

    return App(model, hooks, geodesy)
