from dataclasses import dataclass
from typing import Final

# WGS-84 reference ellipsoid (meters)
WGS84_SEMI_MAJOR_AXIS: Final[float] = 6378137.0
WGS84_FLATTENING: Final[float] = 1 / 298.257223563
WGS84_SEMI_MINOR_AXIS: Final[float] = WGS84_SEMI_MAJOR_AXIS * (1 - WGS84_FLATTENING)

# GRS-80 differs from WGS-84 only in the inverse flattening
GRS80_SEMI_MAJOR_AXIS: Final[float] = 6378137.0
GRS80_FLATTENING: Final[float] = 1 / 298.257222101
GRS80_SEMI_MINOR_AXIS: Final[float] = GRS80_SEMI_MAJOR_AXIS * (1 - GRS80_FLATTENING)

# IUGG mean Earth radius
MEAN_EARTH_RADIUS: Final[float] = 6371008.8


@dataclass(frozen=True)
class Ellipsoid:
    """Oblate spheroid given by its semi-axes; f = (a - b) / a."""

    name: str
    a: float  # semi-major axis, meters
    b: float  # semi-minor axis, meters
    f: float  # flattening

    @classmethod
    def from_axes(cls, name: str, a: float, b: float) -> "Ellipsoid":
        return cls(name, a, b, (a - b) / a)

    @classmethod
    def from_flattening(cls, name: str, a: float, f: float) -> "Ellipsoid":
        return cls(name, a, a * (1 - f), f)

    @property
    def second_eccentricity_sq(self) -> float:
        # e'^2 = (a^2 - b^2) / b^2
        return (self.a * self.a - self.b * self.b) / (self.b * self.b)


WGS84: Final[Ellipsoid] = Ellipsoid("wgs84", WGS84_SEMI_MAJOR_AXIS, WGS84_SEMI_MINOR_AXIS, WGS84_FLATTENING)
GRS80: Final[Ellipsoid] = Ellipsoid("grs80", GRS80_SEMI_MAJOR_AXIS, GRS80_SEMI_MINOR_AXIS, GRS80_FLATTENING)
SPHERE: Final[Ellipsoid] = Ellipsoid("sphere", MEAN_EARTH_RADIUS, MEAN_EARTH_RADIUS, 0.0)
