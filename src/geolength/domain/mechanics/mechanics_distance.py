"""
Vincenty inverse formula on an oblate spheroid.

Distances are computed in the numeric type of the inputs: python floats and
numpy.float64 work in float64, numpy.float32 stays float32 end to end.

Degenerate inputs:
  - identical coordinates, or coordinates that name the same place on the
    surface (a pole, the +-180 seam), give exactly zero;
  - exactly antipodal points, and near-antipodal points that drive the
    longitude recurrence past pi, raise FailedToConvergeError;
  - a non-finite intermediate raises FailedToConvergeError rather than
    leaking NaN/inf.
The pole-to-pole case still converges (sin(alpha) = 0 keeps lambda fixed) and
yields half the meridional circumference.
"""

from typing import Final, NoReturn

import numpy as np

from geolength.domain.entities.ellipsoid import WGS84, Ellipsoid
from geolength.domain.entities.geography import CoordLike, Coordinate, scalar_dtype, to_coordinate
from geolength.runtime.hooks import NoopHooks, SolverHooks

MAX_ITERATIONS: Final[int] = 200
CONVERGENCE_THRESHOLD: Final[float] = 1e-12

# Coarse types (float32) cannot resolve 1e-12; the effective threshold never
# drops below this many machine epsilons of the working type.
THRESHOLD_EPS_FACTOR: Final[int] = 4


class FailedToConvergeError(Exception):
    """The recurrence did not reach its convergence threshold within the iteration limit."""

    def __init__(self):
        super().__init__("Vincenty formula failed to converge")


def _wrap_degrees(d, t):
    # into [-180, 180)
    return (d + t(180)) % t(360) - t(180)


def _reduced_latitude(lat_deg, f):
    """
    (sin U, cos U) for tan U = (1 - f) tan(phi), with cos U >= 0.

    radians(90) rounds above pi/2 in float32, where tan flips sign; taking
    |cos(phi)| keeps the pole on its own hemisphere.
    """
    phi = np.radians(lat_deg)
    u = np.arctan2((1 - f) * np.sin(phi), np.abs(np.cos(phi)))
    return np.sin(u), np.abs(np.cos(u))


class VincentyDistance:
    def __init__(
        self,
        ellipsoid: Ellipsoid = WGS84,
        *,
        max_iterations: int = MAX_ITERATIONS,
        threshold: float = CONVERGENCE_THRESHOLD,
        hooks: SolverHooks | None = None,
    ):
        if max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")
        if threshold <= 0:
            raise ValueError(f"threshold must be positive, got {threshold}")
        self.ellipsoid = ellipsoid
        self.max_iterations, self.threshold = max_iterations, threshold
        self.hooks = hooks or NoopHooks()

    def distance(self, p1: CoordLike, p2: CoordLike):
        """
        Ellipsoidal surface distance in meters between two (lon, lat) points in degrees.

        Raises:
            FailedToConvergeError: antipodal input, or the iteration limit was hit.
        """
        c1, c2 = to_coordinate(p1), to_coordinate(p2)
        # (a, b) and (b, a) must run identical arithmetic
        if (c2.x, c2.y) < (c1.x, c1.y):
            c1, c2 = c2, c1

        dtype = scalar_dtype(c1.x, c1.y, c2.x, c2.y)
        t = dtype.type
        dlon = _wrap_degrees(t(c2.x) - t(c1.x), t)
        if c1.y == c2.y and (dlon == 0 or abs(c1.y) == 90):
            self.hooks.coincident(c1, c2)
            return t(0)

        b, f = t(self.ellipsoid.b), t(self.ellipsoid.f)
        ep2 = t(self.ellipsoid.second_eccentricity_sq)
        one, two = t(1), t(2)
        pi = t(np.pi)
        threshold = max(t(self.threshold), t(THRESHOLD_EPS_FACTOR) * np.finfo(dtype).eps)

        L = np.radians(dlon)
        sin_u1, cos_u1 = _reduced_latitude(t(c1.y), f)
        sin_u2, cos_u2 = _reduced_latitude(t(c2.y), f)

        lam = L
        for iteration in range(1, self.max_iterations + 1):
            sin_lam, cos_lam = np.sin(lam), np.cos(lam)
            sin_sigma = np.sqrt(
                (cos_u2 * sin_lam) ** 2 + (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lam) ** 2
            )
            cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lam
            if sin_sigma == 0:
                if cos_sigma > 0:
                    # same place on the surface under different coordinates
                    self.hooks.coincident(c1, c2)
                    return t(0)
                self._fail(c1, c2, "antipodal", iteration)

            sigma = np.arctan2(sin_sigma, cos_sigma)
            sin_alpha = cos_u1 * cos_u2 * sin_lam / sin_sigma
            cos_sq_alpha = one - sin_alpha * sin_alpha
            if cos_sq_alpha != 0:
                cos_2sigma_m = cos_sigma - two * sin_u1 * sin_u2 / cos_sq_alpha
            else:
                # equatorial line
                cos_2sigma_m = t(0)
            C = f / t(16) * cos_sq_alpha * (t(4) + f * (t(4) - t(3) * cos_sq_alpha))

            lam_prev = lam
            lam = L + (one - C) * f * sin_alpha * (
                sigma
                + C * sin_sigma * (cos_2sigma_m + C * cos_sigma * (-one + two * cos_2sigma_m**2))
            )
            if not np.isfinite(lam):
                self._fail(c1, c2, "non_finite", iteration)
            if abs(lam) > pi:
                self._fail(c1, c2, "antipodal", iteration)
            if abs(lam - lam_prev) <= threshold:
                break
        else:
            self._fail(c1, c2, "iteration_limit", self.max_iterations)

        u_sq = cos_sq_alpha * ep2
        A = one + u_sq / t(16384) * (t(4096) + u_sq * (t(-768) + u_sq * (t(320) - t(175) * u_sq)))
        B = u_sq / t(1024) * (t(256) + u_sq * (t(-128) + u_sq * (t(74) - t(47) * u_sq)))
        delta_sigma = (
            B
            * sin_sigma
            * (
                cos_2sigma_m
                + B
                / t(4)
                * (
                    cos_sigma * (-one + two * cos_2sigma_m**2)
                    - B
                    / t(6)
                    * cos_2sigma_m
                    * (t(-3) + t(4) * sin_sigma**2)
                    * (t(-3) + t(4) * cos_2sigma_m**2)
                )
            )
        )
        s = b * A * (sigma - delta_sigma)
        if not np.isfinite(s):
            self._fail(c1, c2, "non_finite", iteration)
        s = s if s > 0 else t(0)

        self.hooks.converged(c1, c2, iterations=iteration, distance_m=s)
        return s

    def _fail(self, c1: Coordinate, c2: Coordinate, reason: str, iterations: int) -> NoReturn:
        self.hooks.failed(c1, c2, reason=reason, iterations=iterations)
        raise FailedToConvergeError()


_wgs84_solver = VincentyDistance()


def vincenty_distance(p1: CoordLike, p2: CoordLike):
    """Distance in meters on WGS-84 with the default iteration settings."""
    return _wgs84_solver.distance(p1, p2)
