"""Optimization variables that hold the nodes of a spline, and their observers."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Sequence

import numpy as np

from .components import Bounds, NO_BOUND, VariableSet
from .polynomial import Dx, State

NODE_VALUE_NOT_OPTIMIZED = -1
"""Index returned for a node value that is not an optimization variable."""

NODE_DERIVATIVES = 2
"""A node holds a position and a velocity."""


class Side(IntEnum):
    """End of a polynomial that a node sits at."""

    START = 0
    END = 1


@dataclass(frozen=True)
class NodeValueInfo:
    """Which node, which derivative and which dimension a value belongs to."""

    id: int
    deriv: Dx
    dim: int


def node_id(poly_id: int, side: Side) -> int:
    """Id of the node at ``side`` of polynomial ``poly_id``."""
    return poly_id + int(side)


def make_node(dim: int) -> State:
    """A node of dimension ``dim`` with zero position and velocity."""
    return State.zeros(dim, NODE_DERIVATIVES)


class NodesVariables(VariableSet):
    """Position and velocity nodes of a spline, some of which are optimized over."""

    def __init__(self, name: str, n_nodes: int = 0, n_dim: int = 0) -> None:
        super().__init__(-1, name)
        self.dim = n_dim
        self.nodes: list[State] = [make_node(n_dim) for _ in range(n_nodes)]
        self._bounds: list[Bounds] = []
        self._observers: list[NodesObserver] = []

    @property
    def rows(self) -> int:
        return self._rows

    @rows.setter
    def rows(self, n: int) -> None:
        self._rows = n
        self._bounds = [NO_BOUND] * max(n, 0)

    @abc.abstractmethod
    def node_values_info(self, idx: int) -> list[NodeValueInfo]:
        """The node values that optimization variable ``idx`` stands for."""

    def opt_index(self, nvi: NodeValueInfo) -> int:
        """Index of the optimization variable holding ``nvi``."""
        for idx in range(self.rows):
            if nvi in self.node_values_info(idx):
                return idx
        return NODE_VALUE_NOT_OPTIMIZED

    def values(self) -> np.ndarray:
        x = np.zeros(max(self.rows, 0))
        for idx in range(x.size):
            for nvi in self.node_values_info(idx):
                x[idx] = self.nodes[nvi.id][nvi.deriv][nvi.dim]
        return x

    def set_variables(self, x) -> None:
        x = np.asarray(x, dtype=float).ravel()
        if x.size != self.rows:
            raise ValueError(f"expected {self.rows} values, got {x.size}")
        for idx, value in enumerate(x):
            for nvi in self.node_values_info(idx):
                self.nodes[nvi.id][nvi.deriv][nvi.dim] = value
        self.update_observers()

    def update_observers(self) -> None:
        for observer in self._observers:
            observer.update_nodes()

    def add_observer(self, observer: "NodesObserver") -> None:
        self._observers.append(observer)

    def boundary_nodes(self, poly_id: int) -> list[State]:
        """Start and end node of polynomial ``poly_id``."""
        return [
            self.nodes[node_id(poly_id, Side.START)],
            self.nodes[node_id(poly_id, Side.END)],
        ]

    def polynomial_count(self) -> int:
        return len(self.nodes) - 1

    def bounds(self) -> list[Bounds]:
        return list(self._bounds)

    def set_by_linear_interpolation(self, initial_val, final_val, t_total: float) -> None:
        """Place optimized positions on a straight line, velocities at the average rate."""
        initial = np.asarray(initial_val, dtype=float)
        dp = np.asarray(final_val, dtype=float) - initial
        average_velocity = dp / t_total
        num_nodes = len(self.nodes)

        for idx in range(self.rows):
            for nvi in self.node_values_info(idx):
                if nvi.deriv == Dx.POS:
                    pos = initial + nvi.id / float(num_nodes - 1) * dp
                    self.nodes[nvi.id][Dx.POS][nvi.dim] = pos[nvi.dim]
                if nvi.deriv == Dx.VEL:
                    self.nodes[nvi.id][Dx.VEL][nvi.dim] = average_velocity[nvi.dim]

    def add_bounds(self, node_id: int, deriv: Dx, dimensions: Iterable[int], val) -> None:
        """Fix the given dimensions of one node value to ``val``."""
        val = np.asarray(val, dtype=float)
        for dim in dimensions:
            self.add_bound(NodeValueInfo(node_id, deriv, dim), float(val[dim]))

    def add_bound(self, nvi: NodeValueInfo, val: float) -> None:
        for idx in range(self.rows):
            if nvi in self.node_values_info(idx):
                self._bounds[idx] = Bounds(val, val)

    def add_start_bound(self, deriv: Dx, dimensions: Sequence[int], val) -> None:
        self.add_bounds(0, deriv, dimensions, val)

    def add_final_bound(self, deriv: Dx, dimensions: Sequence[int], val) -> None:
        self.add_bounds(len(self.nodes) - 1, deriv, dimensions, val)


class NodesObserver(abc.ABC):
    """Something kept up to date whenever the node values change."""

    def __init__(self, subject: NodesVariables) -> None:
        self.node_values = subject
        subject.add_observer(self)

    @abc.abstractmethod
    def update_nodes(self) -> None:
        """React to changed node values."""