import numpy as np
import pytest

from leggedtraj.polynomial import CubicHermitePolynomial, Dx, Polynomial, State


def node(p, v):
    return State(np.array([p, v], dtype=float))


def make_cubic():
    poly = CubicHermitePolynomial(2)
    poly.set_nodes(node([0.3, -1.0], [-0.2, 0.4]), node([1.1, 0.5], [0.5, -0.7]))
    poly.duration = 0.8
    poly.update_coeff()
    return poly


def test_state_accessors_share_storage():
    state = State.zeros(3, 2)
    state.v = [1.0, 2.0, 3.0]
    np.testing.assert_allclose(state[Dx.VEL], [1.0, 2.0, 3.0])
    np.testing.assert_allclose(state.p, np.zeros(3))
    assert state.dim == 3
    assert state.n_derivatives == 2


def test_state_copy_is_independent():
    state = State.zeros(2, 3)
    clone = state.copy()
    clone.a = [5.0, 6.0]
    np.testing.assert_allclose(state.a, np.zeros(2))


def test_derivative_wrt_coeff_at_zero():
    poly = Polynomial(3, 1)
    assert poly.derivative_wrt_coeff(0.0, Dx.POS, 0) == 1.0
    assert poly.derivative_wrt_coeff(0.0, Dx.VEL, 0) == 0.0
    assert poly.derivative_wrt_coeff(0.0, Dx.ACC, 1) == 0.0


def test_derivative_wrt_coeff_rejects_jerk():
    with pytest.raises(ValueError):
        Polynomial(3, 1).derivative_wrt_coeff(1.0, Dx.JERK, 0)


def test_linear_polynomial_point():
    poly = Polynomial(2, 2)
    poly.coeff[0] = np.array([1.0, 2.0])
    poly.coeff[1] = np.array([3.0, 4.0])
    np.testing.assert_allclose(poly.point(0.0).p, poly.coeff[0])
    state = poly.point(0.7)
    np.testing.assert_allclose(state.v, poly.coeff[1])
    np.testing.assert_allclose(state.a, np.zeros(2))


def test_point_rejects_negative_time():
    with pytest.raises(ValueError):
        make_cubic().point(-0.1)


def test_hermite_interpolates_nodes():
    poly = make_cubic()
    start = poly.point(0.0)
    end = poly.point(poly.duration)
    np.testing.assert_allclose(start.p, poly.n0.p)
    np.testing.assert_allclose(start.v, poly.n0.v)
    np.testing.assert_allclose(end.p, poly.n1.p, atol=1e-12)
    np.testing.assert_allclose(end.v, poly.n1.v, atol=1e-12)


@pytest.mark.parametrize("dfdt", [Dx.POS, Dx.VEL, Dx.ACC])
@pytest.mark.parametrize("node_deriv", [Dx.POS, Dx.VEL])
@pytest.mark.parametrize("start", [True, False])
def test_node_derivatives_match_finite_difference(dfdt, node_deriv, start):
    poly = make_cubic()
    t = 0.35
    h = 1e-6
    target = poly.n0 if start else poly.n1

    def value(shift):
        target[node_deriv][0] += shift
        poly.update_coeff()
        result = poly.point(t)[dfdt][0]
        target[node_deriv][0] -= shift
        return result

    numeric = (value(h) - value(-h)) / (2 * h)
    poly.update_coeff()
    if start:
        analytic = poly.derivative_wrt_start_node(dfdt, node_deriv, t)
    else:
        analytic = poly.derivative_wrt_end_node(dfdt, node_deriv, t)
    assert analytic == pytest.approx(numeric, abs=1e-6)


def test_derivative_wrt_duration_matches_finite_difference():
    poly = make_cubic()
    t = 0.3
    h = 1e-6
    base = poly.duration

    def position(duration):
        poly.duration = duration
        poly.update_coeff()
        return poly.point(t).p.copy()

    numeric = (position(base + h) - position(base - h)) / (2 * h)
    position(base)
    np.testing.assert_allclose(poly.derivative_of_pos_wrt_duration(t), numeric, atol=1e-5)


def test_invalid_derivative_requests():
    poly = make_cubic()
    with pytest.raises(ValueError):
        poly.derivative_wrt_start_node(Dx.JERK, Dx.POS, 0.1)
    with pytest.raises(ValueError):
        poly.derivative_wrt_end_node(Dx.POS, Dx.ACC, 0.1)