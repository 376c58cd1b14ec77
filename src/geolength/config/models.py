from math import isfinite
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from geolength.domain.mechanics.mechanics_distance import CONVERGENCE_THRESHOLD, MAX_ITERATIONS


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False
    sample_every: int = Field(default=1, ge=1)


# ----------------- ELLIPSOIDS ---------------------


class EllipsoidNamedModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["named"] = "named"
    name: Literal["wgs84", "grs80", "sphere"] = "wgs84"


class EllipsoidCustomModel(BaseModel):
    """Semi-major axis plus exactly one of semi-minor axis or flattening."""

    model_config = ConfigDict(extra="forbid")
    kind: Literal["custom"] = "custom"
    name: str = "custom"
    a: float
    b: float | None = None
    f: float | None = None

    @field_validator("a", "b")
    @classmethod
    def _positive_axis(cls, v: float | None, info: ValidationInfo) -> float | None:
        if v is None:
            return v
        if not isfinite(v) or v <= 0:
            raise ValueError(f"{info.field_name} must be a positive finite length")
        return v

    @field_validator("f")
    @classmethod
    def _flattening_range(cls, v: float | None) -> float | None:
        if v is None:
            return v
        if not isfinite(v) or not (0.0 <= v < 1.0):
            raise ValueError("f must be in [0, 1)")
        return v

    @model_validator(mode="after")
    def _check_shape(self):
        if (self.b is None) == (self.f is None):
            raise ValueError("give exactly one of b or f")
        if self.b is not None and self.b > self.a:
            raise ValueError(f"b must be <= a, got b={self.b} > a={self.a}")
        return self


EllipsoidUnion = Annotated[
    EllipsoidNamedModel | EllipsoidCustomModel,
    Field(discriminator="kind"),
]

# ----------------- SOLVERS ---------------------


class VincentySolverModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    kind: Literal["vincenty"] = "vincenty"
    max_iterations: int = Field(default=MAX_ITERATIONS, ge=1)
    threshold: float = Field(default=CONVERGENCE_THRESHOLD, gt=0)


# single solver kind for now; becomes a discriminated union when a second one lands
SolverUnion = VincentySolverModel


# ------------------------------------------------------------------


class GeodesyModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    ellipsoid: EllipsoidUnion = Field(default_factory=EllipsoidNamedModel)
    solver: SolverUnion = Field(default_factory=VincentySolverModel)
    log: LogModel = LogModel()
