"""Durations of alternating contact and swing phases as optimization variables."""

from __future__ import annotations

import abc
from typing import Sequence

import numpy as np

from .components import Bounds, VariableSet, ee_schedule
from .spline import segment_id


class PhaseDurations(VariableSet):
    """Phase durations of one endeffector; the last one fills up to the total time."""

    def __init__(
        self,
        ee: int,
        timings: Sequence[float],
        is_first_phase_in_contact: bool,
        min_duration: float,
        max_duration: float,
    ) -> None:
        super().__init__(len(timings) - 1, ee_schedule(ee))
        self.durations = [float(t) for t in timings]
        self.t_total = sum(self.durations)
        self.phase_duration_bounds = Bounds(min_duration, max_duration)
        self.initial_contact_state = bool(is_first_phase_in_contact)
        self._observers: list[PhaseDurationsObserver] = []

    def add_observer(self, observer: "PhaseDurationsObserver") -> None:
        self._observers.append(observer)

    def update_observers(self) -> None:
        for observer in self._observers:
            observer.update_polynomial_durations()

    def values(self) -> np.ndarray:
        return np.array(self.durations[: self.rows], dtype=float)

    def set_variables(self, x) -> None:
        x = np.asarray(x, dtype=float).ravel()
        if x.size != self.rows:
            raise ValueError(f"expected {self.rows} values, got {x.size}")
        total = float(x.sum())
        if not self.t_total > total:
            raise ValueError(
                f"phase durations sum to {total}, not less than the total time {self.t_total}"
            )
        self.durations[: self.rows] = x.tolist()
        self.durations[-1] = self.t_total - total
        self.update_observers()

    def bounds(self) -> list[Bounds]:
        return [self.phase_duration_bounds] * self.rows

    def is_contact_phase(self, t: float) -> bool:
        """Whether the endeffector touches the ground at time ``t``."""
        phase = segment_id(t, self.durations)
        return self.initial_contact_state if phase % 2 == 0 else not self.initial_contact_state

    def jacobian_of_pos(self, current_phase: int, dx_dT, xd) -> np.ndarray:
        """Sensitivity of a position in ``current_phase`` to every optimized duration."""
        dx_dT = np.asarray(dx_dT, dtype=float)
        xd = np.asarray(xd, dtype=float)
        jac = np.zeros((xd.size, self.rows))
        in_last_phase = current_phase == len(self.durations) - 1

        # the current phase stretches or compresses the spline
        if not in_last_phase:
            jac[:, current_phase] = dx_dT

        for phase in range(current_phase):
            # earlier phases shift the spline along the time axis
            jac[:, phase] = -xd
            # with the final time fixed, they also resize the last phase
            if in_last_phase:
                jac[:, phase] -= dx_dT
        return jac


class PhaseDurationsObserver(abc.ABC):
    """Something kept up to date whenever the phase durations change."""

    def __init__(self, subject: PhaseDurations) -> None:
        self.phase_durations = subject
        subject.add_observer(self)

    @abc.abstractmethod
    def update_polynomial_durations(self) -> None:
        """React to changed phase durations."""