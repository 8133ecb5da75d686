"""Piecewise cubic Hermite splines over consecutive time segments."""

from __future__ import annotations

from typing import Sequence

from .polynomial import CubicHermitePolynomial, State

_EPS = 1e-10


def segment_id(t_global: float, durations: Sequence[float]) -> int:
    """Index of the segment containing ``t_global``; junctions belong to the earlier one."""
    if t_global < 0.0:
        raise ValueError(f"time {t_global} is negative")
    t = 0.0
    for i, d in enumerate(durations):
        t += d
        if t >= t_global - _EPS:
            return i
    raise ValueError(f"time {t_global} lies beyond the last segment")


def local_time(t_global: float, durations: Sequence[float]) -> tuple[int, float]:
    """Segment index and the time elapsed since that segment started."""
    index = segment_id(t_global, durations)
    t_local = t_global
    for d in list(durations)[:index]:
        t_local -= d
    return index, t_local


class Spline:
    """A sequence of cubic Hermite polynomials joined end to end."""

    def __init__(self, poly_durations: Sequence[float], n_dim: int) -> None:
        self.cubic_polys: list[CubicHermitePolynomial] = []
        for duration in poly_durations:
            poly = CubicHermitePolynomial(n_dim)
            poly.duration = float(duration)
            self.cubic_polys.append(poly)
        self.update_polynomial_coeff()

    def point(self, t_global: float) -> State:
        index, t_local = local_time(t_global, self.poly_durations())
        return self.point_in_poly(index, t_local)

    def point_in_poly(self, poly_id: int, t_local: float) -> State:
        return self.cubic_polys[poly_id].point(t_local)

    def update_polynomial_coeff(self) -> None:
        for poly in self.cubic_polys:
            poly.update_coeff()

    def polynomial_count(self) -> int:
        return len(self.cubic_polys)

    def poly_durations(self) -> list[float]:
        return [poly.duration for poly in self.cubic_polys]

    def total_time(self) -> float:
        return sum(self.poly_durations())