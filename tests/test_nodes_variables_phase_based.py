import numpy as np
import pytest

from leggedtraj.nodes_variables import NODE_VALUE_NOT_OPTIMIZED, NodeValueInfo
from leggedtraj.nodes_variables_phase_based import (
    NodesVariablesEEForce,
    NodesVariablesEEMotion,
    PolyInfo,
    build_poly_infos,
)
from leggedtraj.polynomial import Dx


@pytest.fixture
def motion():
    # stance, swing, stance with two polynomials per swing
    return NodesVariablesEEMotion(3, True, "ee-motion_0", 2)


@pytest.fixture
def force():
    # stance, swing, stance with three polynomials per stance
    return NodesVariablesEEForce(3, True, "ee-force_0", 3)


def test_build_poly_infos_alternates():
    infos = build_poly_infos(3, True, 2)
    assert infos == [
        PolyInfo(0, 0, 1, True),
        PolyInfo(1, 0, 2, False),
        PolyInfo(1, 1, 2, False),
        PolyInfo(2, 0, 1, True),
    ]


def test_motion_node_structure(motion):
    assert len(motion.nodes) == len(motion.polynomial_info) + 1
    assert motion.indices_of_non_constant_nodes() == [2]
    assert motion.is_constant_node(1)
    assert motion.rows == 11
    assert len(motion.bounds()) == motion.rows


def test_motion_stance_variable_drives_both_nodes(motion):
    assert motion.node_values_info(0) == [
        NodeValueInfo(0, Dx.POS, 0),
        NodeValueInfo(1, Dx.POS, 0),
    ]
    motion.set_variables(np.arange(1, motion.rows + 1, dtype=float))
    np.testing.assert_allclose(motion.nodes[0].p, motion.nodes[1].p)
    np.testing.assert_allclose(motion.nodes[3].p, motion.nodes[4].p)
    np.testing.assert_allclose(motion.nodes[0].v, np.zeros(3))


def test_motion_vertical_swing_velocity_not_optimized(motion):
    assert motion.opt_index(NodeValueInfo(2, Dx.VEL, 2)) == NODE_VALUE_NOT_OPTIMIZED
    assert motion.opt_index(NodeValueInfo(2, Dx.VEL, 0)) != NODE_VALUE_NOT_OPTIMIZED
    assert motion.nodes[2].v[2] == 0.0


def test_force_zero_during_swing(force):
    non_constant = force.indices_of_non_constant_nodes()
    assert force.rows == len(non_constant) * 2 * 3
    force.set_variables(np.ones(force.rows))
    for n in range(len(force.nodes)):
        expected = 0.0 if n not in non_constant else 1.0
        np.testing.assert_allclose(force.nodes[n].p, expected)
        np.testing.assert_allclose(force.nodes[n].v, expected)


def test_force_values_round_trip(force):
    x = np.linspace(0.0, 1.0, force.rows)
    force.set_variables(x)
    np.testing.assert_allclose(force.values(), x)


def test_convert_phase_to_poly_durations(motion):
    phases = [0.4, 0.2, 0.3]
    polys = motion.convert_phase_to_poly_durations(phases)
    assert len(polys) == motion.polynomial_count()
    assert sum(polys) == pytest.approx(sum(phases))
    assert polys[0] == pytest.approx(0.4)
    assert polys[-1] == pytest.approx(0.3)
    assert polys[1] == pytest.approx(polys[2])


def test_poly_duration_derivatives(motion):
    assert motion.derivative_of_poly_duration_wrt_phase_duration(0) == 1.0
    assert motion.derivative_of_poly_duration_wrt_phase_duration(1) == 0.5
    assert motion.number_of_prev_polynomials_in_phase(2) == 1
    assert motion.number_of_prev_polynomials_in_phase(1) == 0


def test_phase_of_nodes(motion):
    assert motion.phase(2) == 1
    with pytest.raises(ValueError):
        motion.phase(0)


def test_start_of_phase(motion):
    assert motion.poly_id_at_start_of_phase(1) == 1
    assert motion.node_id_at_start_of_phase(2) == 3
    with pytest.raises(ValueError):
        motion.poly_id_at_start_of_phase(5)


def test_value_at_start_of_phase(motion):
    motion.set_variables(np.arange(motion.rows, dtype=float))
    np.testing.assert_allclose(motion.value_at_start_of_phase(2), motion.nodes[3].p)
    np.testing.assert_allclose(motion.value_at_start_of_phase(0), motion.nodes[0].p)


def test_adjacent_poly_ids(motion):
    last = len(motion.nodes) - 1
    assert motion.adjacent_poly_ids(0) == [0]
    assert motion.adjacent_poly_ids(last) == [last - 1]
    assert motion.adjacent_poly_ids(2) == [1, 2]