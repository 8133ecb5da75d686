"""Polynomials in time and cubic Hermite segments defined by two nodes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

import numpy as np


class Dx(IntEnum):
    """Order of time derivative."""

    POS = 0
    VEL = 1
    ACC = 2
    JERK = 3


@dataclass(eq=False)
class State:
    """Values of a quantity and its time derivatives, one row per derivative."""

    values: np.ndarray

    def __post_init__(self) -> None:
        self.values = np.array(self.values, dtype=float, ndmin=2)

    @classmethod
    def zeros(cls, dim: int, n_derivatives: int = 3) -> "State":
        return cls(np.zeros((n_derivatives, dim)))

    @property
    def dim(self) -> int:
        return self.values.shape[1]

    @property
    def n_derivatives(self) -> int:
        return self.values.shape[0]

    def __getitem__(self, deriv: int) -> np.ndarray:
        return self.values[deriv]

    def __setitem__(self, deriv: int, value) -> None:
        self.values[deriv] = value

    @property
    def p(self) -> np.ndarray:
        return self.values[Dx.POS]

    @p.setter
    def p(self, value) -> None:
        self.values[Dx.POS] = value

    @property
    def v(self) -> np.ndarray:
        return self.values[Dx.VEL]

    @v.setter
    def v(self, value) -> None:
        self.values[Dx.VEL] = value

    @property
    def a(self) -> np.ndarray:
        return self.values[Dx.ACC]

    @a.setter
    def a(self, value) -> None:
        self.values[Dx.ACC] = value

    def copy(self) -> "State":
        return State(self.values.copy())


class Polynomial:
    """A vector-valued polynomial ``sum_c coeff[c] * t**c``."""

    def __init__(self, order: int, dim: int) -> None:
        if order < 0:
            raise ValueError("polynomial order must not be negative")
        self.coeff = [np.zeros(dim) for _ in range(order + 1)]

    def point(self, t_local: float) -> State:
        """Position, velocity and acceleration at local time ``t_local``."""
        if t_local < 0.0:
            raise ValueError(f"polynomial evaluated at negative time {t_local}")
        out = State.zeros(self.coeff[0].size, 3)
        for d in (Dx.POS, Dx.VEL, Dx.ACC):
            out[d] = sum(
                self.derivative_wrt_coeff(t_local, d, c) * coeff
                for c, coeff in enumerate(self.coeff)
            )
        return out

    def derivative_wrt_coeff(self, t: float, deriv: Dx, c: int) -> float:
        """Sensitivity of the ``deriv``-th time derivative to coefficient ``c``."""
        if deriv == Dx.POS:
            return t ** c
        if deriv == Dx.VEL:
            return c * t ** (c - 1) if c >= 1 else 0.0
        if deriv == Dx.ACC:
            return c * (c - 1) * t ** (c - 2) if c >= 2 else 0.0
        raise ValueError(f"derivative {deriv!r} not defined")


class CubicHermitePolynomial(Polynomial):
    """Cubic polynomial fixed by position and velocity at both ends and a duration."""

    def __init__(self, dim: int) -> None:
        super().__init__(3, dim)
        self.n0 = State.zeros(dim, 2)
        self.n1 = State.zeros(dim, 2)
        self.duration = 0.0

    def set_nodes(self, n0: State, n1: State) -> None:
        self.n0 = n0.copy()
        self.n1 = n1.copy()

    def update_coeff(self) -> None:
        """Recompute the coefficients from the nodes and the duration."""
        T = self.duration
        p0, v0 = self.n0.p, self.n0.v
        p1, v1 = self.n1.p, self.n1.v
        self.coeff[0] = p0.copy()
        self.coeff[1] = v0.copy()
        with np.errstate(divide="ignore", invalid="ignore"):
            self.coeff[2] = -(3 * (p0 - p1) + T * (2 * v0 + v1)) / T ** 2
            self.coeff[3] = (2 * (p0 - p1) + T * (v0 + v1)) / T ** 3

    def derivative_wrt_start_node(self, dfdt: Dx, node_deriv: Dx, t_local: float) -> float:
        """Sensitivity of the ``dfdt`` value to the start node's ``node_deriv`` value."""
        if dfdt == Dx.POS:
            return self._pos_wrt_start(node_deriv, t_local)
        if dfdt == Dx.VEL:
            return self._vel_wrt_start(node_deriv, t_local)
        if dfdt == Dx.ACC:
            return self._acc_wrt_start(node_deriv, t_local)
        raise ValueError(f"derivative {dfdt!r} not implemented")

    def derivative_wrt_end_node(self, dfdt: Dx, node_deriv: Dx, t_local: float) -> float:
        """Sensitivity of the ``dfdt`` value to the end node's ``node_deriv`` value."""
        if dfdt == Dx.POS:
            return self._pos_wrt_end(node_deriv, t_local)
        if dfdt == Dx.VEL:
            return self._vel_wrt_end(node_deriv, t_local)
        if dfdt == Dx.ACC:
            return self._acc_wrt_end(node_deriv, t_local)
        raise ValueError(f"derivative {dfdt!r} not implemented")

    @staticmethod
    def _check_node_value(node_value: Dx) -> None:
        if node_value not in (Dx.POS, Dx.VEL):
            raise ValueError("nodes only hold position and velocity")

    def _pos_wrt_start(self, node_value: Dx, t: float) -> float:
        self._check_node_value(node_value)
        T = self.duration
        if node_value == Dx.POS:
            return (2 * t ** 3) / T ** 3 - (3 * t ** 2) / T ** 2 + 1
        return t - (2 * t ** 2) / T + t ** 3 / T ** 2

    def _vel_wrt_start(self, node_value: Dx, t: float) -> float:
        self._check_node_value(node_value)
        T = self.duration
        if node_value == Dx.POS:
            return (6 * t ** 2) / T ** 3 - (6 * t) / T ** 2
        return (3 * t ** 2) / T ** 2 - (4 * t) / T + 1

    def _acc_wrt_start(self, node_value: Dx, t: float) -> float:
        self._check_node_value(node_value)
        T = self.duration
        if node_value == Dx.POS:
            return (12 * t) / T ** 3 - 6 / T ** 2
        return (6 * t) / T ** 2 - 4 / T

    def _pos_wrt_end(self, node_value: Dx, t: float) -> float:
        self._check_node_value(node_value)
        T = self.duration
        if node_value == Dx.POS:
            return (3 * t ** 2) / T ** 2 - (2 * t ** 3) / T ** 3
        return t ** 3 / T ** 2 - t ** 2 / T

    def _vel_wrt_end(self, node_value: Dx, t: float) -> float:
        self._check_node_value(node_value)
        T = self.duration
        if node_value == Dx.POS:
            return (6 * t) / T ** 2 - (6 * t ** 2) / T ** 3
        return (3 * t ** 2) / T ** 2 - (2 * t) / T

    def _acc_wrt_end(self, node_value: Dx, t: float) -> float:
        self._check_node_value(node_value)
        T = self.duration
        if node_value == Dx.POS:
            return 6 / T ** 2 - (12 * t) / T ** 3
        return (6 * t) / T ** 2 - 2 / T

    def derivative_of_pos_wrt_duration(self, t: float) -> np.ndarray:
        """Sensitivity of the position at local time ``t`` to the duration."""
        x0, x1 = self.n0.p, self.n1.p
        v0, v1 = self.n0.v, self.n1.v
        T = self.duration
        t2, t3 = t ** 2, t ** 3
        return (
            (t3 * (v0 + v1)) / T ** 3
            - (t2 * (2 * v0 + v1)) / T ** 2
            - (3 * t3 * (2 * x0 - 2 * x1 + T * v0 + T * v1)) / T ** 4
            + (2 * t2 * (3 * x0 - 3 * x1 + 2 * T * v0 + T * v1)) / T ** 3
        )