# tests/domain/test_vincenty_distance.py
import math

import numpy as np
import pytest

from geolength.domain.entities.ellipsoid import (
    SPHERE,
    WGS84,
    WGS84_FLATTENING,
    WGS84_SEMI_MAJOR_AXIS,
    WGS84_SEMI_MINOR_AXIS,
)
from geolength.domain.entities.geography import Coordinate, Point
from geolength.domain.mechanics.mechanics_distance import (
    CONVERGENCE_THRESHOLD,
    MAX_ITERATIONS,
    FailedToConvergeError,
    VincentyDistance,
    vincenty_distance,
)


def dms(d, m, s):
    sign = -1.0 if d < 0 else 1.0
    return sign * (abs(d) + m / 60.0 + s / 3600.0)


# Flinders Peak -> Buninyong, the classic Vincenty benchmark (54 972.271 m)
FLINDERS = Point.new(dms(144, 25, 29.52440), dms(-37, 57, 3.72030))
BUNINYONG = Point.new(dms(143, 55, 35.38390), dms(-37, 39, 10.15610))
FLINDERS_BUNINYONG_M = 54972.271

HALF_MERIDIAN_M = 20003931.4586
ONE_DEGREE_EQUATOR_M = WGS84_SEMI_MAJOR_AXIS * math.pi / 180.0


@pytest.fixture
def solver() -> VincentyDistance:
    return VincentyDistance(WGS84)


# ---------- constants


def test_wgs84_constants_are_consistent():
    assert WGS84.a == WGS84_SEMI_MAJOR_AXIS
    assert WGS84.b == WGS84_SEMI_MINOR_AXIS
    assert abs(WGS84_SEMI_MINOR_AXIS - 6356752.314245) < 1e-3
    assert abs((WGS84.a - WGS84.b) / WGS84.a - WGS84_FLATTENING) < 1e-15
    assert MAX_ITERATIONS == 200
    assert CONVERGENCE_THRESHOLD == 1e-12


def test_invalid_settings_rejected():
    with pytest.raises(ValueError, match="max_iterations"):
        VincentyDistance(max_iterations=0)
    with pytest.raises(ValueError, match="threshold"):
        VincentyDistance(threshold=0.0)


# ---------- concrete scenarios


def test_coincident_points_are_exactly_zero(solver: VincentyDistance):
    p = Point.new(10.0, 50.0)
    d = solver.distance(p, p)
    assert d == 0.0
    assert solver.distance(Point.new(10.0, 50.0), Point.new(10.0, 50.0)) == 0.0


def test_flinders_peak_to_buninyong(solver: VincentyDistance):
    d = solver.distance(FLINDERS, BUNINYONG)
    assert abs(d - FLINDERS_BUNINYONG_M) < 1e-3


def test_one_degree_along_equator_is_arc_of_semi_major_axis(solver: VincentyDistance):
    d = solver.distance((0.0, 0.0), (1.0, 0.0))
    assert abs(d - ONE_DEGREE_EQUATOR_M) < 1e-4


def test_antipodal_on_equator_fails(solver: VincentyDistance):
    with pytest.raises(FailedToConvergeError):
        solver.distance(Point.new(0.0, 0.0), Point.new(180.0, 0.0))


def test_near_antipodal_on_equator_fails_deterministically(solver: VincentyDistance):
    a, b = Point.new(0.0, 0.0), Point.new(179.5, 0.0)
    for _ in range(3):
        with pytest.raises(FailedToConvergeError):
            solver.distance(a, b)
    with pytest.raises(FailedToConvergeError):
        solver.distance(b, a)


def test_pole_to_pole_converges_to_half_meridian(solver: VincentyDistance):
    d = solver.distance(Point.new(0.0, -90.0), Point.new(0.0, 90.0))
    assert abs(d - HALF_MERIDIAN_M) < 0.05


def test_failure_error_carries_no_payload():
    err = FailedToConvergeError()
    assert err.args == ("Vincenty formula failed to converge",)


# ---------- degenerate coordinates


def test_same_pole_with_different_longitudes_is_zero(solver: VincentyDistance):
    assert solver.distance((0.0, 90.0), (45.0, 90.0)) == 0.0


def test_longitude_seam_is_normalized(solver: VincentyDistance):
    # -179.5 and 179.5 are one degree apart across the antimeridian
    d = solver.distance((-179.5, 0.0), (179.5, 0.0))
    assert abs(d - ONE_DEGREE_EQUATOR_M) < 1e-3
    # unbounded longitudes
    d2 = solver.distance((FLINDERS.x + 360.0, FLINDERS.y), BUNINYONG)
    assert abs(d2 - solver.distance(FLINDERS, BUNINYONG)) < 1e-3


def test_iteration_limit_raises():
    tight = VincentyDistance(max_iterations=1)
    with pytest.raises(FailedToConvergeError):
        tight.distance(FLINDERS, BUNINYONG)


def test_sphere_matches_great_circle():
    solver = VincentyDistance(SPHERE)
    a, b = (0.0, 0.0), (90.0, 0.0)
    assert abs(solver.distance(a, b) - SPHERE.a * math.pi / 2) < 1e-6


# ---------- invariants


def random_pairs(seed: int, n: int = 200):
    """Random (lon, lat) pairs over the whole globe, with exact poles mixed in."""
    rng = np.random.default_rng(seed)
    lon = rng.uniform(-180.0, 180.0, size=(n, 2))
    lat = rng.uniform(-90.0, 90.0, size=(n, 2))
    lat[::10, 0] = 90.0
    lat[5::10, 1] = -90.0
    lat[0] = (90.0, 90.0)
    lat[1] = (-90.0, 90.0)
    return lon, lat


@pytest.mark.parametrize("ftype", [np.float32, np.float64])
def test_symmetry_identity_nonnegativity_on_random_pairs(solver: VincentyDistance, ftype):
    lon, lat = random_pairs(1234)
    for (x1, x2), (y1, y2) in zip(lon, lat):
        a, b = Point.new(ftype(x1), ftype(y1)), Point.new(ftype(x2), ftype(y2))
        assert solver.distance(a, a) == 0.0
        try:
            ab = solver.distance(a, b)
        except FailedToConvergeError:
            with pytest.raises(FailedToConvergeError):
                solver.distance(b, a)
            continue
        assert isinstance(ab, ftype)
        assert ab == solver.distance(b, a)
        assert ab >= 0.0
        assert math.isfinite(ab)


def test_float32_agrees_with_float64(solver: VincentyDistance):
    lon, lat = random_pairs(4321)
    compared = 0
    for (x1, x2), (y1, y2) in zip(lon.astype(np.float32), lat.astype(np.float32)):
        a32, b32 = (x1, y1), (x2, y2)
        a64, b64 = (float(x1), float(y1)), (float(x2), float(y2))
        try:
            d32 = solver.distance(a32, b32)
            d64 = solver.distance(a64, b64)
        except FailedToConvergeError:
            continue
        if d64 > 19_000_000.0:
            continue
        assert d32 == pytest.approx(d64, rel=1e-5, abs=10.0)
        compared += 1
    assert compared > 150


def test_accepts_coordinates_points_and_tuples(solver: VincentyDistance):
    d1 = solver.distance(Coordinate(1.0, 2.0), Coordinate(3.0, 4.0))
    d2 = solver.distance(Point.new(1.0, 2.0), Point.new(3.0, 4.0))
    d3 = solver.distance((1.0, 2.0), (3.0, 4.0))
    assert d1 == d2 == d3


def test_module_level_helper_uses_wgs84():
    assert abs(vincenty_distance(FLINDERS, BUNINYONG) - FLINDERS_BUNINYONG_M) < 1e-3


# ---------- numeric types


@pytest.mark.parametrize("ftype", [np.float32, np.float64])
def test_numeric_type_is_preserved(solver: VincentyDistance, ftype):
    a = Point.new(ftype(FLINDERS.x), ftype(FLINDERS.y))
    b = Point.new(ftype(BUNINYONG.x), ftype(BUNINYONG.y))
    d = solver.distance(a, b)
    assert isinstance(d, ftype)
    assert d == pytest.approx(FLINDERS_BUNINYONG_M, rel=1e-4)
    assert solver.distance(a, a) == ftype(0)
    assert isinstance(solver.distance(a, a), ftype)


def test_float32_equator_distance():
    solver = VincentyDistance()
    d = solver.distance((np.float32(0.0), np.float32(0.0)), (np.float32(1.0), np.float32(0.0)))
    assert isinstance(d, np.float32)
    assert d == pytest.approx(ONE_DEGREE_EQUATOR_M, rel=1e-5)


# lat 90 in float32 rounds just past the pole in radians
@pytest.mark.parametrize(
    "south, expected_m",
    [((0.0, 89.0), 111693.86), ((0.0, 80.0), 1116825.86)],
)
def test_float32_meridian_arc_to_north_pole(solver: VincentyDistance, south, expected_m):
    pole = (np.float32(0.0), np.float32(90.0))
    start = tuple(np.float32(v) for v in south)
    d = solver.distance(start, pole)
    assert isinstance(d, np.float32)
    assert d == pytest.approx(expected_m, rel=1e-5, abs=3.0)
    assert d == pytest.approx(solver.distance(south, (0.0, 90.0)), rel=1e-5, abs=3.0)


def test_float32_meridian_arc_to_south_pole(solver: VincentyDistance):
    d = solver.distance((np.float32(0.0), np.float32(-89.0)), (np.float32(0.0), np.float32(-90.0)))
    assert d == pytest.approx(111693.86, rel=1e-5, abs=3.0)


def test_float32_pole_to_pole(solver: VincentyDistance):
    d = solver.distance((np.float32(0.0), np.float32(-90.0)), (np.float32(0.0), np.float32(90.0)))
    assert isinstance(d, np.float32)
    assert d == pytest.approx(HALF_MERIDIAN_M, rel=1e-6)


def test_float32_same_pole_at_two_longitudes_is_zero(solver: VincentyDistance):
    d = solver.distance((np.float32(10.0), np.float32(90.0)), (np.float32(-120.0), np.float32(90.0)))
    assert d == 0.0
    assert isinstance(d, np.float32)


def test_wgs84_second_eccentricity():
    assert WGS84.second_eccentricity_sq == pytest.approx(
        (WGS84_SEMI_MAJOR_AXIS**2 - WGS84_SEMI_MINOR_AXIS**2) / WGS84_SEMI_MINOR_AXIS**2
    )
