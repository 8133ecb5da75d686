"""Gaits as sequences of timed contact states, turned into per-foot phase durations."""

from __future__ import annotations

import abc
from enum import Enum
from typing import Iterable, NamedTuple, Sequence

ContactState = tuple[bool, ...]
"""For each endeffector, whether it touches the ground."""


class Gaits(Enum):
    """Strides a gait generator may know."""

    STAND = "stand"
    FLIGHT = "flight"
    WALK1 = "walk1"
    WALK2 = "walk2"
    WALK2E = "walk2e"
    RUN1 = "run1"
    RUN2 = "run2"
    RUN2E = "run2e"
    RUN3 = "run3"
    RUN3E = "run3e"
    HOP1 = "hop1"
    HOP1E = "hop1e"
    HOP2 = "hop2"
    HOP3 = "hop3"
    HOP3E = "hop3e"
    HOP5 = "hop5"


class Combos(Enum):
    """Predefined sequences of strides."""

    C0 = 0
    C1 = 1
    C2 = 2
    C3 = 3
    C4 = 4


class GaitInfo(NamedTuple):
    """Durations of the phases of a stride and the contact state in each."""

    times: list[float]
    contacts: list[ContactState]


def contact_state(n_ee: int, in_contact: Iterable[int] = ()) -> ContactState:
    """Contact state of ``n_ee`` endeffectors with only ``in_contact`` on the ground."""
    touching = set(in_contact)
    return tuple(ee in touching for ee in range(n_ee))


class GaitGenerator(abc.ABC):
    """Builds the contact schedule of every endeffector from a sequence of strides."""

    def __init__(self) -> None:
        self.times: list[float] = []
        self.contacts: list[ContactState] = []

    @abc.abstractmethod
    def gait(self, gait: Gaits) -> GaitInfo:
        """Phase durations and contact states of one stride."""

    @abc.abstractmethod
    def set_combo(self, combo: Combos) -> None:
        """Use one of the predefined sequences of strides."""

    def set_gaits(self, gaits: Sequence[Gaits]) -> None:
        """Concatenate the given strides into the current schedule."""
        times: list[float] = []
        contacts: list[ContactState] = []
        for g in gaits:
            info = self.gait(g)
            if len(info.times) != len(info.contacts):
                raise ValueError(f"gait {g!r} has a different number of times and contacts")
            times.extend(info.times)
            contacts.extend(info.contacts)
        self.times = times
        self.contacts = contacts

    def _check_schedule(self) -> None:
        if not self.contacts:
            raise ValueError("no gaits have been set")

    def foot_durations(self) -> list[list[float]]:
        """For each endeffector, the durations of its alternating contact and swing phases."""
        self._check_schedule()
        n_ee = len(self.contacts[0])
        accumulated = [0.0] * n_ee
        durations: list[list[float]] = [[] for _ in range(n_ee)]

        for curr, nxt, t in zip(self.contacts, self.contacts[1:], self.times):
            for ee, (now, then) in enumerate(zip(curr, nxt)):
                accumulated[ee] += t
                # a change of contact in the next phase completes this one
                if now != then:
                    durations[ee].append(accumulated[ee])
                    accumulated[ee] = 0.0

        for ee in range(n_ee):
            durations[ee].append(accumulated[ee] + self.times[-1])
        return durations

    def phase_durations(self, t_total: float, ee: int) -> list[float]:
        """Phase durations of ``ee`` scaled to sum to ``t_total``."""
        return [d * t_total for d in self.normalized_phase_durations(ee)]

    def normalized_phase_durations(self, ee: int) -> list[float]:
        """Phase durations of ``ee`` as fractions of the whole schedule."""
        v = self.foot_durations()[ee]
        total = sum(v)
        return [d / total for d in v]

    def is_in_contact_at_start(self, ee: int) -> bool:
        self._check_schedule()
        return self.contacts[0][ee]

    def remove_transition(self, gait: GaitInfo) -> GaitInfo:
        """Drop the final transition phase, adding its duration to the phase before."""
        if len(gait.times) < 2:
            raise ValueError("a stride needs at least two phases to remove its transition")
        times = list(gait.times)
        last = times.pop()
        times[-1] += last
        return GaitInfo(times, list(gait.contacts[:-1]))


def make_gait_generator(leg_count: int) -> GaitGenerator:
    """Gait generator for a robot with ``leg_count`` legs (1, 2 or 4)."""
    if leg_count == 1:
        from .monoped_gait_generator import MonopedGaitGenerator
        return MonopedGaitGenerator()
    if leg_count == 2:
        from .biped_gait_generator import BipedGaitGenerator
        return BipedGaitGenerator()
    if leg_count == 4:
        from .quadruped_gait_generator import QuadrupedGaitGenerator
        return QuadrupedGaitGenerator()
    raise ValueError(f"no gait generator for {leg_count} legs")