"""Strides of a two-legged robot."""

from __future__ import annotations

from .gait_generator import (
    Combos, ContactState, GaitGenerator, GaitInfo, Gaits, contact_state,
)

L, R = 0, 1
_N_EE = 2


class BipedGaitGenerator(GaitGenerator):
    """Walking, running and hopping strides of two legs."""

    def __init__(self) -> None:
        super().__init__()
        self.I: ContactState = contact_state(_N_EE)
        self.P: ContactState = contact_state(_N_EE, [L])
        self.b: ContactState = contact_state(_N_EE, [R])
        self.B: ContactState = contact_state(_N_EE, [L, R])
        self.set_gaits([Gaits.STAND])

    def set_combo(self, combo: Combos) -> None:
        S = Gaits.STAND
        combos = {
            Combos.C0: [S, Gaits.WALK1, Gaits.WALK1, Gaits.WALK1, Gaits.WALK1, S],
            Combos.C1: [S, Gaits.RUN1, Gaits.RUN1, Gaits.RUN1, Gaits.RUN1, S],
            Combos.C2: [S, Gaits.HOP1, Gaits.HOP1, Gaits.HOP1, S],
            Combos.C3: [S, Gaits.HOP1, Gaits.HOP2, Gaits.HOP2, S],
            Combos.C4: [S, Gaits.HOP5, Gaits.HOP5, Gaits.HOP5, S],
        }
        if combo not in combos:
            raise ValueError(f"gait combo {combo!r} not defined")
        self.set_gaits(combos[combo])

    def gait(self, gait: Gaits) -> GaitInfo:
        strides = {
            Gaits.STAND: self._stand,
            Gaits.FLIGHT: self._flight,
            Gaits.WALK1: self._walk,
            Gaits.WALK2: self._walk,
            Gaits.RUN1: self._run,
            Gaits.RUN3: self._run,
            Gaits.HOP1: self._hop,
            Gaits.HOP2: self._left_hop,
            Gaits.HOP3: self._right_hop,
            Gaits.HOP5: self._gallop_hop,
        }
        if gait not in strides:
            raise ValueError(f"gait {gait!r} not implemented for a biped")
        return strides[gait]()

    def _stand(self) -> GaitInfo:
        return GaitInfo([0.2], [self.B])

    def _flight(self) -> GaitInfo:
        return GaitInfo([0.5], [self.I])

    def _walk(self) -> GaitInfo:
        step, stance = 0.3, 0.05
        return GaitInfo(
            [step, stance, step, stance],
            [self.b, self.B,   # swing left foot
             self.P, self.B],  # swing right foot
        )

    def _run(self) -> GaitInfo:
        flight, pushoff, landing = 0.4, 0.15, 0.15
        return GaitInfo(
            [pushoff, flight, landing + pushoff, flight, landing],
            [self.b, self.I,           # swing left foot
             self.P, self.I, self.b],  # swing right foot
        )

    def _hop(self) -> GaitInfo:
        return GaitInfo([0.15, 0.5, 0.15], [self.B, self.I, self.B])

    def _gallop_hop(self) -> GaitInfo:
        push, flight, land = 0.2, 0.3, 0.2
        return GaitInfo([push, flight, land, land], [self.P, self.I, self.b, self.B])

    def _left_hop(self) -> GaitInfo:
        return GaitInfo([0.15, 0.4, 0.15], [self.b, self.I, self.b])

    def _right_hop(self) -> GaitInfo:
        return GaitInfo([0.2, 0.2, 0.2], [self.P, self.I, self.P])