"""Quadratic cost on one dimension of one derivative of all spline nodes."""

from __future__ import annotations

from typing import Optional

import numpy as np

from .components import Composite, CostTerm
from .nodes_variables import NodesVariables
from .polynomial import Dx


class NodeCost(CostTerm):
    """Weighted sum of squares of a chosen node value over all nodes."""

    def __init__(self, nodes_id: str, deriv: Dx, dim: int, weight: float) -> None:
        super().__init__(f"{nodes_id}-dx_{int(deriv)}-dim_{dim}")
        self.node_id = nodes_id
        self.deriv = Dx(deriv)
        self.dim = dim
        self.weight = float(weight)
        self.nodes: Optional[NodesVariables] = None

    def init_variable_dependent_quantities(self, variables: Composite) -> None:
        self.nodes = variables.component(self.node_id)

    def _linked(self) -> NodesVariables:
        if self.nodes is None:
            raise RuntimeError(f"{self.name!r} is not linked to any variables")
        return self.nodes

    def cost(self) -> float:
        nodes = self._linked()
        return sum(self.weight * float(n[self.deriv][self.dim]) ** 2 for n in nodes.nodes)

    def fill_jacobian_block(self, var_set: str, jac: np.ndarray) -> None:
        if var_set != self.node_id:
            return
        nodes = self._linked()
        for i in range(nodes.rows):
            for nvi in nodes.node_values_info(i):
                if nvi.deriv == self.deriv and nvi.dim == self.dim:
                    val = nodes.nodes[nvi.id][self.deriv][self.dim]
                    jac[0, i] += self.weight * 2.0 * val