"""Continuity of acceleration at the junctions of a node spline."""

from __future__ import annotations

import numpy as np

from .components import BOUND_ZERO, SPECIFY_LATER, Bounds, ConstraintSet
from .node_spline import NodeSpline
from .polynomial import Dx


class SplineAccConstraint(ConstraintSet):
    """Requires equal acceleration on both sides of every polynomial junction."""

    def __init__(self, spline: NodeSpline, node_variable_name: str) -> None:
        super().__init__(SPECIFY_LATER, f"splineacc-{node_variable_name}")
        self.spline = spline
        self.node_variables_id = node_variable_name
        self.n_dim = spline.point(0.0).p.size
        self.n_junctions = spline.polynomial_count() - 1
        self.durations = spline.poly_durations()
        self.rows = self.n_dim * self.n_junctions

    def _rows_of(self, junction: int) -> slice:
        return slice(junction * self.n_dim, (junction + 1) * self.n_dim)

    def values(self) -> np.ndarray:
        g = np.zeros(self.rows)
        for j in range(self.n_junctions):
            acc_prev = self.spline.point_in_poly(j, self.durations[j]).a
            acc_next = self.spline.point_in_poly(j + 1, 0.0).a
            g[self._rows_of(j)] = acc_prev - acc_next
        return g

    def bounds(self) -> list[Bounds]:
        return [BOUND_ZERO] * self.rows

    def fill_jacobian_block(self, var_set: str, jac: np.ndarray) -> None:
        if var_set != self.node_variables_id:
            return
        for j in range(self.n_junctions):
            acc_prev = self.spline.jacobian_wrt_nodes_in_poly(j, self.durations[j], Dx.ACC)
            acc_next = self.spline.jacobian_wrt_nodes_in_poly(j + 1, 0.0, Dx.ACC)
            jac[self._rows_of(j), :] = acc_prev - acc_next