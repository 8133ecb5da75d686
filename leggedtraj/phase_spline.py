"""Node splines whose polynomial durations follow optimized phase durations."""

from __future__ import annotations

import numpy as np

from .node_spline import NodeSpline
from .nodes_variables_phase_based import NodesVariablesPhaseBased
from .phase_durations import PhaseDurations, PhaseDurationsObserver
from .polynomial import Dx
from .spline import local_time, segment_id


class PhaseSpline(NodeSpline, PhaseDurationsObserver):
    """A spline over phase-based nodes that reacts to changing phase durations."""

    def __init__(self, nodes: NodesVariablesPhaseBased, phase_durations: PhaseDurations) -> None:
        NodeSpline.__init__(
            self, nodes, nodes.convert_phase_to_poly_durations(phase_durations.durations)
        )
        PhaseDurationsObserver.__init__(self, phase_durations)
        self.phase_nodes = nodes
        self.update_polynomial_durations()

        # any global time may fall into any polynomial once durations change
        for i in range(nodes.polynomial_count()):
            self.fill_jacobian_wrt_nodes(i, 0.0, Dx.POS, self.jac_wrt_nodes_structure, True)

    def update_polynomial_durations(self) -> None:
        poly_durations = self.phase_nodes.convert_phase_to_poly_durations(
            self.phase_durations.durations
        )
        for poly, duration in zip(self.cubic_polys, poly_durations):
            poly.duration = duration
        self.update_polynomial_coeff()

    def jacobian_of_pos_wrt_durations(self, t_global: float) -> np.ndarray:
        """Sensitivity of the position at ``t_global`` to the optimized phase durations."""
        dx_dT = self.derivative_of_pos_wrt_phase_duration(t_global)
        xd = self.point(t_global).v
        current_phase = segment_id(t_global, self.phase_durations.durations)
        return self.phase_durations.jacobian_of_pos(current_phase, dx_dT, xd)

    def derivative_of_pos_wrt_phase_duration(self, t_global: float) -> np.ndarray:
        """Sensitivity of the position at ``t_global`` to the duration of its own phase."""
        poly_id, t_local = local_time(t_global, self.poly_durations())
        vel = self.point(t_global).v
        dxdT = self.cubic_polys[poly_id].derivative_of_pos_wrt_duration(t_local)
        inner = self.phase_nodes.derivative_of_poly_duration_wrt_phase_duration(poly_id)
        prev_polys = self.phase_nodes.number_of_prev_polynomials_in_phase(poly_id)
        # earlier polynomials of the same phase shift this one in time
        return inner * (dxdT - prev_polys * vel)