"""Node variables whose parameterization follows alternating contact phases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .nodes_variables import NodeValueInfo, NodesVariables, Side, node_id
from .polynomial import Dx

_DIM = 3
_Z = 2


@dataclass(frozen=True)
class PolyInfo:
    """Where a polynomial sits within the phases."""

    phase: int
    poly_in_phase: int
    n_polys_in_phase: int
    is_constant: bool


def build_poly_infos(
    phase_count: int, first_phase_constant: bool, n_polys_in_changing_phase: int
) -> list[PolyInfo]:
    """Polynomials of alternating constant (one each) and changing phases."""
    infos: list[PolyInfo] = []
    constant = first_phase_constant
    for phase in range(phase_count):
        if constant:
            infos.append(PolyInfo(phase, 0, 1, True))
        else:
            infos.extend(
                PolyInfo(phase, j, n_polys_in_changing_phase, False)
                for j in range(n_polys_in_changing_phase)
            )
        constant = not constant
    return infos


class NodesVariablesPhaseBased(NodesVariables):
    """Three-dimensional nodes in which constant phases share one set of variables."""

    def __init__(
        self,
        phase_count: int,
        first_phase_constant: bool,
        name: str,
        n_polys_in_changing_phase: int,
    ) -> None:
        self.polynomial_info = build_poly_infos(
            phase_count, first_phase_constant, n_polys_in_changing_phase
        )
        super().__init__(name, len(self.polynomial_info) + 1, _DIM)
        self._index_to_nvi: list[list[NodeValueInfo]] = []

    def _set_parameterization(self, index_to_nvi: list[list[NodeValueInfo]]) -> None:
        self._index_to_nvi = index_to_nvi
        self.rows = len(index_to_nvi)

    def node_values_info(self, idx: int) -> list[NodeValueInfo]:
        return list(self._index_to_nvi[idx])

    def convert_phase_to_poly_durations(self, phase_durations: Sequence[float]) -> list[float]:
        """Split each phase duration evenly among the polynomials of that phase."""
        return [
            phase_durations[info.phase] / info.n_polys_in_phase
            for info in self.polynomial_info[: self.polynomial_count()]
        ]

    def derivative_of_poly_duration_wrt_phase_duration(self, poly_id: int) -> float:
        return 1.0 / self.polynomial_info[poly_id].n_polys_in_phase

    def number_of_prev_polynomials_in_phase(self, poly_id: int) -> int:
        return self.polynomial_info[poly_id].poly_in_phase

    def is_constant_node(self, node_id: int) -> bool:
        """True if a polynomial on either side of the node lies in a constant phase."""
        return any(self.is_in_constant_phase(p) for p in self.adjacent_poly_ids(node_id))

    def is_in_constant_phase(self, poly_id: int) -> bool:
        return self.polynomial_info[poly_id].is_constant

    def indices_of_non_constant_nodes(self) -> list[int]:
        return [i for i in range(len(self.nodes)) if not self.is_constant_node(i)]

    def phase(self, node_id: int) -> int:
        """Phase of a non-constant node."""
        if self.is_constant_node(node_id):
            raise ValueError(f"node {node_id} borders a constant phase and has two phases")
        return self.polynomial_info[self.adjacent_poly_ids(node_id)[0]].phase

    def poly_id_at_start_of_phase(self, phase: int) -> int:
        for i, info in enumerate(self.polynomial_info):
            if info.phase == phase:
                return i
        raise ValueError(f"phase {phase} does not exist")

    def value_at_start_of_phase(self, phase: int) -> np.ndarray:
        return self.nodes[self.node_id_at_start_of_phase(phase)].p.copy()

    def node_id_at_start_of_phase(self, phase: int) -> int:
        return node_id(self.poly_id_at_start_of_phase(phase), Side.START)

    def adjacent_poly_ids(self, node_id: int) -> list[int]:
        last_node_id = len(self.nodes) - 1
        if node_id == 0:
            return [0]
        if node_id == last_node_id:
            return [last_node_id - 1]
        return [node_id - 1, node_id]


class NodesVariablesEEMotion(NodesVariablesPhaseBased):
    """Endeffector motion: the foot stands still during contact phases."""

    def __init__(
        self,
        phase_count: int,
        is_in_contact_at_start: bool,
        name: str,
        n_polys_in_changing_phase: int,
    ) -> None:
        super().__init__(phase_count, is_in_contact_at_start, name, n_polys_in_changing_phase)
        self._set_parameterization(self._parameterization())

    def _parameterization(self) -> list[list[NodeValueInfo]]:
        index_map: list[list[NodeValueInfo]] = []
        node = 0
        while node < len(self.nodes):
            if not self.is_constant_node(node):
                for dim in range(self.dim):
                    index_map.append([NodeValueInfo(node, Dx.POS, dim)])
                    if dim == _Z:
                        # vertical swing velocity fixed at zero: extreme reached mid-swing
                        self.nodes[node].v[_Z] = 0.0
                    else:
                        index_map.append([NodeValueInfo(node, Dx.VEL, dim)])
                node += 1
            else:
                self.nodes[node].v[:] = 0.0
                self.nodes[node + 1].v[:] = 0.0
                for dim in range(self.dim):
                    index_map.append(
                        [NodeValueInfo(node, Dx.POS, dim), NodeValueInfo(node + 1, Dx.POS, dim)]
                    )
                node += 2
        return index_map


class NodesVariablesEEForce(NodesVariablesPhaseBased):
    """Endeffector force: zero in the air, free during contact phases."""

    def __init__(
        self,
        phase_count: int,
        is_in_contact_at_start: bool,
        name: str,
        n_polys_in_changing_phase: int,
    ) -> None:
        super().__init__(
            phase_count, not is_in_contact_at_start, name, n_polys_in_changing_phase
        )
        self._set_parameterization(self._parameterization())

    def _parameterization(self) -> list[list[NodeValueInfo]]:
        index_map: list[list[NodeValueInfo]] = []
        node = 0
        while node < len(self.nodes):
            if not self.is_constant_node(node):
                for dim in range(self.dim):
                    index_map.append([NodeValueInfo(node, Dx.POS, dim)])
                    index_map.append([NodeValueInfo(node, Dx.VEL, dim)])
                node += 1
            else:
                for n in (node, node + 1):
                    self.nodes[n].p[:] = 0.0
                    self.nodes[n].v[:] = 0.0
                node += 2
        return index_map