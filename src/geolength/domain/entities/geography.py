from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from numbers import Real

import numpy as np

# Scalars may be python floats or numpy floating scalars (float32/float64)
Scalar = float | np.floating


def scalar_dtype(*values) -> np.dtype:
    """Common floating dtype for a set of scalars; python numbers count as float64."""
    dtype = np.dtype(np.float64)
    seen_numpy = False
    for v in values:
        if isinstance(v, np.floating):
            dtype = v.dtype if not seen_numpy else np.promote_types(dtype, v.dtype)
            seen_numpy = True
    return dtype


# Core geometry types used by the geodesic mechanics
@dataclass(frozen=True)
class Coordinate:
    x: Scalar  # longitude, degrees
    y: Scalar  # latitude, degrees

    @classmethod
    def from_tuple(cls, xy) -> "Coordinate":
        try:
            x, y = xy
        except (TypeError, ValueError):
            raise TypeError(f"expected an (x, y) pair, got {xy!r}") from None
        if not (isinstance(x, Real) and isinstance(y, Real)):
            raise TypeError(f"coordinate components must be real numbers, got {xy!r}")
        return cls(x, y)

    @property
    def dtype(self) -> np.dtype:
        return scalar_dtype(self.x, self.y)

    def x_y(self) -> tuple[Scalar, Scalar]:
        return self.x, self.y


@dataclass(frozen=True)
class Point:
    coord: Coordinate

    @classmethod
    def new(cls, x: Scalar, y: Scalar) -> "Point":
        return cls(Coordinate(x, y))

    @property
    def x(self) -> Scalar:
        return self.coord.x

    @property
    def y(self) -> Scalar:
        return self.coord.y

    # geographic aliases
    @property
    def lng(self) -> Scalar:
        return self.coord.x

    @property
    def lat(self) -> Scalar:
        return self.coord.y


CoordLike = Coordinate | Point | tuple[Scalar, Scalar]


def to_coordinate(c: CoordLike) -> Coordinate:
    if isinstance(c, Coordinate):
        return c
    if isinstance(c, Point):
        return c.coord
    return Coordinate.from_tuple(c)


def is_coord_like(c) -> bool:
    """True for a Coordinate, a Point, or a pair of real numbers."""
    if isinstance(c, (Coordinate, Point)):
        return True
    try:
        return len(c) == 2 and all(isinstance(v, Real) for v in c)
    except TypeError:
        return False


@dataclass(frozen=True)
class Line:
    """A line segment made up of exactly two coordinates."""

    start: Coordinate
    end: Coordinate

    @classmethod
    def from_pairs(cls, pairs) -> "Line":
        a, b = pairs
        return cls(to_coordinate(a), to_coordinate(b))

    def dx(self) -> Scalar:
        return self.end.x - self.start.x

    def dy(self) -> Scalar:
        return self.end.y - self.start.y

    def slope(self) -> Scalar:
        """dy / dx; unchanged when the endpoints are swapped. A vertical line gives +-inf."""
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.divide(self.dy(), self.dx())

    def determinant(self) -> Scalar:
        """start.x * end.y - start.y * end.x; flips sign when the endpoints are swapped."""
        return self.start.x * self.end.y - self.start.y * self.end.x

    def start_point(self) -> Point:
        return Point(self.start)

    def end_point(self) -> Point:
        return Point(self.end)

    def points(self) -> tuple[Point, Point]:
        return self.start_point(), self.end_point()


@dataclass(frozen=True)
class LineString:
    """
    Ordered sequence of coordinates describing a path between locations.
    Segments are derived on demand through lines(); they are never stored.
    """

    coords: tuple[Coordinate, ...] = ()

    @classmethod
    def from_iterable(cls, coords: Iterable[CoordLike]) -> "LineString":
        return cls(tuple(to_coordinate(c) for c in coords))

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.coords)

    def __len__(self) -> int:
        return len(self.coords)

    @property
    def dtype(self) -> np.dtype:
        return scalar_dtype(*(v for c in self.coords for v in c.x_y()))

    def points(self) -> list[Point]:
        return [Point(c) for c in self.coords]

    def lines(self) -> Iterator[Line]:
        """
        Yield one Line per consecutive coordinate pair, in order.
        N coordinates give N-1 lines; fewer than two give none.
        Every call starts a fresh iterator.
        """
        coords = self.coords
        for i in range(1, len(coords)):
            yield Line(coords[i - 1], coords[i])


@dataclass(frozen=True)
class MultiLineString:
    line_strings: tuple[LineString, ...] = ()

    @classmethod
    def from_iterable(cls, paths: Iterable) -> "MultiLineString":
        return cls(
            tuple(p if isinstance(p, LineString) else LineString.from_iterable(p) for p in paths)
        )

    def __iter__(self) -> Iterator[LineString]:
        return iter(self.line_strings)

    def __len__(self) -> int:
        return len(self.line_strings)

    @property
    def dtype(self) -> np.dtype:
        return scalar_dtype(*(v for ls in self.line_strings for c in ls for v in c.x_y()))
