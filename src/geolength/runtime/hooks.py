# runtime/hooks.py
from typing import Protocol

from geolength.domain.entities.geography import Coordinate


class SolverHooks(Protocol):
    def coincident(self, p1: Coordinate, p2: Coordinate): ...
    def converged(self, p1: Coordinate, p2: Coordinate, *, iterations, distance_m): ...
    def failed(self, p1: Coordinate, p2: Coordinate, *, reason: str, iterations): ...
    def length_done(self, *, kind: str, segments: int, length_m): ...
    def length_failed(self, *, kind: str, segment_index: int): ...


class NoopHooks:
    def coincident(self, *_, **__):
        pass

    def converged(self, *_, **__):
        pass

    def failed(self, *_, **__):
        pass

    def length_done(self, **_):
        pass

    def length_failed(self, **_):
        pass
