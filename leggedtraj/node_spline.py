"""Splines whose polynomials are shaped by optimized node values."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .nodes_variables import NodesObserver, NodesVariables, Side, node_id
from .polynomial import Dx
from .spline import Spline, local_time


class NodeSpline(Spline, NodesObserver):
    """A spline kept in step with the node variables it is built from."""

    def __init__(self, node_variables: NodesVariables, polynomial_durations: Sequence[float]) -> None:
        Spline.__init__(self, polynomial_durations, node_variables.dim)
        NodesObserver.__init__(self, node_variables)
        self.update_nodes()
        self.jac_wrt_nodes_structure = np.zeros((node_variables.dim, node_variables.rows))

    def update_nodes(self) -> None:
        """Take over the current node values and recompute the coefficients."""
        for i, poly in enumerate(self.cubic_polys):
            start, end = self.node_values.boundary_nodes(i)
            poly.set_nodes(start, end)
        self.update_polynomial_coeff()

    def node_variables_count(self) -> int:
        return self.node_values.rows

    def jacobian_wrt_nodes(self, t_global: float, dxdt: Dx) -> np.ndarray:
        """Sensitivity of the ``dxdt`` value at ``t_global`` to every node variable."""
        poly_id, t_local = local_time(t_global, self.poly_durations())
        return self.jacobian_wrt_nodes_in_poly(poly_id, t_local, dxdt)

    def jacobian_wrt_nodes_in_poly(self, poly_id: int, t_local: float, dxdt: Dx) -> np.ndarray:
        """Sensitivity of the ``dxdt`` value of one polynomial to every node variable."""
        jac = self.jac_wrt_nodes_structure.copy()
        self.fill_jacobian_wrt_nodes(poly_id, t_local, dxdt, jac, False)
        return jac

    def fill_jacobian_wrt_nodes(
        self,
        poly_id: int,
        t_local: float,
        dxdt: Dx,
        jac: np.ndarray,
        fill_with_zeros: bool,
    ) -> None:
        """Add the node sensitivities of polynomial ``poly_id`` into ``jac``."""
        poly = self.cubic_polys[poly_id]
        for idx in range(jac.shape[1]):
            for nvi in self.node_values.node_values_info(idx):
                for side in (Side.START, Side.END):
                    if node_id(poly_id, side) != nvi.id:
                        continue
                    if side == Side.START:
                        val = poly.derivative_wrt_start_node(dxdt, nvi.deriv, t_local)
                    else:
                        val = poly.derivative_wrt_end_node(dxdt, nvi.deriv, t_local)
                    if fill_with_zeros:
                        val = 0.0
                    jac[nvi.dim, idx] += val