"""Strides of a one-legged hopper."""

from __future__ import annotations

from .gait_generator import Combos, ContactState, GaitGenerator, GaitInfo, Gaits


class MonopedGaitGenerator(GaitGenerator):
    """Standing, flying and hopping strides of a single leg."""

    def __init__(self) -> None:
        super().__init__()
        self.o: ContactState = (True,)
        self.x: ContactState = (False,)
        self.set_gaits([Gaits.STAND])

    def set_combo(self, combo: Combos) -> None:
        S, H1, H2 = Gaits.STAND, Gaits.HOP1, Gaits.HOP2
        combos = {
            Combos.C0: [S, H1, H1, H1, H1, S],
            Combos.C1: [S, H1, H1, H1, S],
            Combos.C2: [S, H1, H1, H1, H1, S],
            Combos.C3: [S, H2, H2, H2, S],
            Combos.C4: [S, H2, H2, H2, H2, H2, S],
        }
        if combo not in combos:
            raise ValueError(f"gait combo {combo!r} not defined")
        self.set_gaits(combos[combo])

    def gait(self, gait: Gaits) -> GaitInfo:
        strides = {
            Gaits.STAND: self._stand,
            Gaits.FLIGHT: self._flight,
            Gaits.HOP1: self._hop,
            Gaits.HOP2: self._hop_long,
        }
        if gait not in strides:
            raise ValueError(f"gait {gait!r} not implemented for a monoped")
        return strides[gait]()

    def _stand(self) -> GaitInfo:
        return GaitInfo([0.5], [self.o])

    def _flight(self) -> GaitInfo:
        return GaitInfo([0.5], [self.x])

    def _hop(self) -> GaitInfo:
        return GaitInfo([0.3, 0.3], [self.o, self.x])

    def _hop_long(self) -> GaitInfo:
        return GaitInfo([0.2, 0.3], [self.o, self.x])