"""Strides of a four-legged robot."""

from __future__ import annotations

from .gait_generator import (
    Combos, ContactState, GaitGenerator, GaitInfo, Gaits, contact_state,
)

LF, RF, LH, RH = 0, 1, 2, 3
_N_EE = 4


def _state(*legs: int) -> ContactState:
    return contact_state(_N_EE, legs)


class QuadrupedGaitGenerator(GaitGenerator):
    """Walking, trotting, pacing, bounding, pronking and galloping strides."""

    def __init__(self) -> None:
        super().__init__()
        # flight phase
        self.II = _state()
        # one stance leg
        self.PI = _state(LH)
        self.bI = _state(RH)
        self.IP = _state(LF)
        self.Ib = _state(RF)
        # two stance legs
        self.Pb = _state(LH, RF)
        self.bP = _state(RH, LF)
        self.BI = _state(LH, RH)
        self.IB = _state(LF, RF)
        self.PP = _state(LH, LF)
        self.bb = _state(RH, RF)
        # three stance legs
        self.Bb = _state(LH, RH, RF)
        self.BP = _state(LH, RH, LF)
        self.bB = _state(RH, LF, RF)
        self.PB = _state(LH, LF, RF)
        # four stance legs
        self.BB = _state(LF, RF, LH, RH)

        self.set_gaits([Gaits.STAND])

    def set_combo(self, combo: Combos) -> None:
        S = Gaits.STAND
        combos = {
            # overlap-walk
            Combos.C0: [S, Gaits.WALK2, Gaits.WALK2, Gaits.WALK2, Gaits.WALK2E, S],
            # flying trot
            Combos.C1: [S, Gaits.RUN2, Gaits.RUN2, Gaits.RUN2, Gaits.RUN2E, S],
            # pace
            Combos.C2: [S, Gaits.RUN3, Gaits.RUN3, Gaits.RUN3, Gaits.RUN3E, S],
            # bound
            Combos.C3: [S, Gaits.HOP1, Gaits.HOP1, Gaits.HOP1, Gaits.HOP1E, S],
            # gallop
            Combos.C4: [S, Gaits.HOP3, Gaits.HOP3, Gaits.HOP3, Gaits.HOP3E, S],
        }
        if combo not in combos:
            raise ValueError(f"gait combo {combo!r} not defined")
        self.set_gaits(combos[combo])

    def gait(self, gait: Gaits) -> GaitInfo:
        strides = {
            Gaits.STAND: self._stand,
            Gaits.FLIGHT: self._flight,
            Gaits.WALK1: self._walk,
            Gaits.WALK2: self._walk_overlap,
            Gaits.WALK2E: lambda: self.remove_transition(self._walk_overlap()),
            Gaits.RUN1: self._trot,
            Gaits.RUN2: self._trot_fly,
            Gaits.RUN2E: self._trot_fly_end,
            Gaits.RUN3: self._pace,
            Gaits.RUN3E: self._pace_end,
            Gaits.HOP1: self._bound,
            Gaits.HOP1E: self._bound_end,
            Gaits.HOP2: self._pronk,
            Gaits.HOP3: self._gallop,
            Gaits.HOP3E: lambda: self.remove_transition(self._gallop()),
            Gaits.HOP5: self._limp,
        }
        if gait not in strides:
            raise ValueError(f"gait {gait!r} not implemented for a quadruped")
        return strides[gait]()

    def _stand(self) -> GaitInfo:
        return GaitInfo([0.3], [self.BB])

    def _flight(self) -> GaitInfo:
        return GaitInfo([0.3], [self.Bb])

    def _pronk(self) -> GaitInfo:
        return GaitInfo([0.3, 0.4, 0.3], [self.BB, self.II, self.BB])

    def _walk(self) -> GaitInfo:
        step, stand = 0.3, 0.2
        return GaitInfo(
            [step, stand] * 4,
            [self.bB, self.BB, self.Bb, self.BB,
             self.PB, self.BB, self.BP, self.BB],
        )

    def _walk_overlap(self) -> GaitInfo:
        three, lateral, diagonal = 0.25, 0.13, 0.13
        return GaitInfo(
            [three, lateral, three, diagonal, three, lateral, three, diagonal],
            [self.bB, self.bb, self.Bb,
             self.Pb,  # start lifting RH
             self.PB, self.PP, self.BP,
             self.bP],  # start lifting LH
        )

    def _trot(self) -> GaitInfo:
        step, stand = 0.3, 0.2
        return GaitInfo([step, stand, step, stand], [self.bP, self.BB, self.Pb, self.BB])

    def _trot_fly(self) -> GaitInfo:
        stand, flight = 0.4, 0.1
        return GaitInfo([stand, flight, stand, flight], [self.bP, self.II, self.Pb, self.II])

    def _trot_fly_end(self) -> GaitInfo:
        return GaitInfo([0.4], [self.bP])

    def _pace(self) -> GaitInfo:
        stand, flight = 0.3, 0.1
        return GaitInfo([stand, flight, stand, flight], [self.PP, self.II, self.bb, self.II])

    def _pace_end(self) -> GaitInfo:
        return GaitInfo([0.3], [self.PP])

    def _bound(self) -> GaitInfo:
        stand, flight = 0.3, 0.1
        return GaitInfo([stand, flight, stand, flight], [self.BI, self.II, self.IB, self.II])

    def _bound_end(self) -> GaitInfo:
        return GaitInfo([0.3], [self.BI])

    def _gallop(self) -> GaitInfo:
        a = 0.3  # both feet in air
        b = 0.2  # overlap
        c = 0.2  # transition front to hind
        return GaitInfo(
            [b, a, b, c, b, a, b, c],
            [self.Bb, self.BI, self.BP,  # front legs swing forward
             self.bP,                    # transition phase
             self.bB, self.IB, self.PB,  # hind legs swing forward
             self.Pb],
        )

    def _limp(self) -> GaitInfo:
        a = 0.1  # three in contact
        b = 0.2  # all in contact
        c = 0.1  # one in contact
        return GaitInfo(
            [a, b, c, a, b, c],
            [self.Bb, self.BB, self.IP, self.Bb, self.BB, self.IP],
        )