import pytest

from leggedtraj.gait_generator import Combos, Gaits
from leggedtraj.quadruped_gait_generator import LF, LH, RF, RH, QuadrupedGaitGenerator


def test_default_is_standing_on_all_feet():
    gen = QuadrupedGaitGenerator()
    assert gen.contacts == [(True, True, True, True)]
    assert gen.foot_durations() == [[0.3]] * 4


def test_contact_state_naming():
    gen = QuadrupedGaitGenerator()
    assert gen.Pb == tuple(leg in (LH, RF) for leg in range(4))
    assert gen.bP == tuple(leg in (RH, LF) for leg in range(4))
    assert gen.II == (False,) * 4
    assert gen.BB == (True,) * 4


def test_trot_fly_stride():
    gen = QuadrupedGaitGenerator()
    info = gen.gait(Gaits.RUN2)
    assert info.times == [0.4, 0.1, 0.4, 0.1]
    assert info.contacts == [gen.bP, gen.II, gen.Pb, gen.II]


@pytest.mark.parametrize("full, end", [(Gaits.WALK2, Gaits.WALK2E), (Gaits.HOP3, Gaits.HOP3E)])
def test_end_strides_drop_transition(full, end):
    gen = QuadrupedGaitGenerator()
    full_info = gen.gait(full)
    end_info = gen.gait(end)
    assert end_info.contacts == full_info.contacts[:-1]
    assert sum(end_info.times) == pytest.approx(sum(full_info.times))


@pytest.mark.parametrize("gait", list(Gaits))
def test_every_gait_is_consistent(gait):
    info = QuadrupedGaitGenerator().gait(gait)
    assert len(info.times) == len(info.contacts)
    assert all(len(c) == 4 for c in info.contacts)
    assert all(t > 0 for t in info.times)


@pytest.mark.parametrize("combo", list(Combos))
def test_combos_start_and_end_standing(combo):
    gen = QuadrupedGaitGenerator()
    gen.set_combo(combo)
    assert gen.contacts[0] == gen.BB
    assert gen.contacts[-1] == gen.BB
    assert all(gen.is_in_contact_at_start(ee) for ee in range(4))


def test_gallop_feet_share_total_time():
    gen = QuadrupedGaitGenerator()
    gen.set_combo(Combos.C4)
    totals = [sum(d) for d in gen.foot_durations()]
    assert totals == pytest.approx([sum(gen.times)] * 4)


def test_unknown_combo_raises():
    with pytest.raises(ValueError):
        QuadrupedGaitGenerator().set_combo(None)