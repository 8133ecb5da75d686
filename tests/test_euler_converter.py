import numpy as np
import pytest

from leggedtraj.euler_converter import (
    EulerConverter,
    angular_acceleration,
    angular_velocity,
    euler_rate_matrix,
    euler_rate_matrix_dot,
    quaternion,
    rotation_matrix,
)
from leggedtraj.node_spline import NodeSpline
from leggedtraj.nodes_variables_all import NodesVariablesAll
from leggedtraj.polynomial import State

H = 1e-6
T_EVAL = 0.3


def _setup(seed=0):
    nodes = NodesVariablesAll(3, 3, "base-ang")
    rng = np.random.default_rng(seed)
    nodes.set_variables(rng.uniform(-0.6, 0.6, nodes.rows))
    spline = NodeSpline(nodes, [0.5, 0.5])
    return nodes, EulerConverter(spline)


def _finite_diff(nodes, func):
    x0 = nodes.values()
    columns = []
    for i in range(x0.size):
        xp, xm = x0.copy(), x0.copy()
        xp[i] += H
        xm[i] -= H
        nodes.set_variables(xp)
        fp = np.asarray(func(), dtype=float)
        nodes.set_variables(xm)
        fm = np.asarray(func(), dtype=float)
        columns.append((fp - fm) / (2 * H))
    nodes.set_variables(x0)
    return np.stack(columns, axis=-1)


def _quat_to_matrix(q):
    w, x, y, z = q
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w)],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w)],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y)],
        ]
    )


def test_rotation_of_zero_angles_is_identity():
    assert np.allclose(rotation_matrix([0.0, 0.0, 0.0]), np.eye(3))


def test_pure_yaw_rotation():
    a = 0.7
    expected = np.array(
        [[np.cos(a), -np.sin(a), 0.0], [np.sin(a), np.cos(a), 0.0], [0.0, 0.0, 1.0]]
    )
    assert np.allclose(rotation_matrix([0.0, 0.0, a]), expected)


@pytest.mark.parametrize("angles", [(0.1, -0.4, 1.2), (2.9, 0.3, -2.8), (-1.0, 1.4, 3.0)])
def test_rotation_is_orthonormal(angles):
    r = rotation_matrix(angles)
    assert np.allclose(r @ r.T, np.eye(3))
    assert np.isclose(np.linalg.det(r), 1.0)


def test_quaternion_of_zero_angles():
    assert np.allclose(quaternion([0.0, 0.0, 0.0]), [1.0, 0.0, 0.0, 0.0])


@pytest.mark.parametrize(
    "angles", [(0.1, -0.4, 1.2), (3.0, 0.1, 0.2), (0.1, 3.0, 0.2), (0.0, 0.0, 3.1), (-2.0, 1.0, 2.5)]
)
def test_quaternion_matches_rotation_matrix(angles):
    q = quaternion(angles)
    assert np.isclose(np.linalg.norm(q), 1.0)
    assert np.allclose(_quat_to_matrix(q), rotation_matrix(angles))


def test_yaw_rate_gives_vertical_angular_velocity():
    omega = angular_velocity([0.0, 0.0, 0.0], [0.0, 0.0, 1.0])
    assert np.allclose(omega, [0.0, 0.0, 1.0])


def test_rate_matrix_dot_is_time_derivative():
    p = np.array([0.2, -0.3, 0.5])
    v = np.array([0.4, 1.1, -0.7])
    numeric = (euler_rate_matrix(p + H * v) - euler_rate_matrix(p - H * v)) / (2 * H)
    assert np.allclose(euler_rate_matrix_dot(p, v), numeric, atol=1e-6)


def test_angular_acceleration_is_derivative_of_velocity():
    p = np.array([0.2, -0.3, 0.5])
    v = np.array([0.4, 1.1, -0.7])
    a = np.array([0.3, -0.2, 0.9])
    state = State(np.vstack([p, v, a]))
    w_plus = angular_velocity(p + H * v, v + H * a)
    w_minus = angular_velocity(p - H * v, v - H * a)
    assert np.allclose(angular_acceleration(state), (w_plus - w_minus) / (2 * H), atol=1e-6)


def test_converter_matches_free_functions():
    _, conv = _setup()
    ori = conv.euler.point(T_EVAL)
    assert np.allclose(conv.rotation_matrix_base_to_world(T_EVAL), rotation_matrix(ori.p))
    assert np.allclose(conv.angular_velocity_in_world(T_EVAL), angular_velocity(ori.p, ori.v))
    assert np.allclose(conv.quaternion_base_to_world(T_EVAL), quaternion(ori.p))
    assert np.allclose(conv.angular_acceleration_in_world(T_EVAL), angular_acceleration(ori))


def test_rotation_matrix_derivative_matches_finite_differences():
    nodes, conv = _setup(1)
    analytic = conv.derivative_of_rotation_matrix_wrt_nodes(T_EVAL)
    numeric = _finite_diff(nodes, lambda: conv.rotation_matrix_base_to_world(T_EVAL))
    assert analytic.shape == numeric.shape
    assert np.allclose(analytic, numeric, atol=1e-6)


@pytest.mark.parametrize("inverse", [False, True])
def test_rot_vec_mult_derivative(inverse):
    nodes, conv = _setup(2)
    v = np.array([0.5, -1.2, 0.8])

    def product():
        r = conv.rotation_matrix_base_to_world(T_EVAL)
        return (r.T if inverse else r) @ v

    numeric = _finite_diff(nodes, product)
    assert np.allclose(conv.deriv_of_rot_vec_mult(T_EVAL, v, inverse), numeric, atol=1e-6)


def test_angular_velocity_derivative():
    nodes, conv = _setup(3)
    numeric = _finite_diff(nodes, lambda: conv.angular_velocity_in_world(T_EVAL))
    assert np.allclose(conv.deriv_of_ang_vel_wrt_euler_nodes(T_EVAL), numeric, atol=1e-5)


def test_angular_acceleration_derivative():
    nodes, conv = _setup(4)
    numeric = _finite_diff(nodes, lambda: conv.angular_acceleration_in_world(T_EVAL))
    assert np.allclose(conv.deriv_of_ang_acc_wrt_euler_nodes(T_EVAL), numeric, atol=1e-4)


@pytest.mark.parametrize("dim", [0, 1, 2])
def test_rate_matrix_row_derivatives(dim):
    nodes, conv = _setup(5)
    numeric = _finite_diff(nodes, lambda: euler_rate_matrix(conv.euler.point(T_EVAL).p)[dim])
    assert np.allclose(conv.deriv_m_wrt_nodes(T_EVAL, dim), numeric, atol=1e-6)


@pytest.mark.parametrize("dim", [0, 1, 2])
def test_rate_matrix_dot_row_derivatives(dim):
    nodes, conv = _setup(6)

    def row():
        ori = conv.euler.point(T_EVAL)
        return euler_rate_matrix_dot(ori.p, ori.v)[dim]

    numeric = _finite_diff(nodes, row)
    assert np.allclose(conv.deriv_mdot_wrt_nodes(T_EVAL, dim), numeric, atol=1e-5)


def test_invalid_dimension_rejected():
    _, conv = _setup()
    with pytest.raises(ValueError):
        conv.deriv_m_wrt_nodes(T_EVAL, 3)
    with pytest.raises(ValueError):
        conv.deriv_mdot_wrt_nodes(T_EVAL, -1)