"""Node variables in which every position and velocity is optimized."""

from __future__ import annotations

from .nodes_variables import NodeValueInfo, NODE_DERIVATIVES, NodesVariables
from .polynomial import Dx


class NodesVariablesAll(NodesVariables):
    """Each value of every node is its own optimization variable."""

    def __init__(self, n_nodes: int, n_dim: int, variable_id: str) -> None:
        super().__init__(variable_id, n_nodes, n_dim)
        self.rows = n_nodes * NODE_DERIVATIVES * n_dim

    def node_values_info(self, idx: int) -> list[NodeValueInfo]:
        per_node = NODE_DERIVATIVES * self.dim
        internal_id = idx % per_node
        deriv = Dx.POS if internal_id < self.dim else Dx.VEL
        return [NodeValueInfo(idx // per_node, deriv, internal_id % self.dim)]