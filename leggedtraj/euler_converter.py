"""Euler ZYX angles: rotation matrices, angular rates and their node sensitivities."""

from __future__ import annotations

import numpy as np

from .node_spline import NodeSpline
from .polynomial import Dx, State

X, Y, Z = 0, 1, 2
_DIM = 3


def _check_dim(dim: int) -> None:
    if dim not in (X, Y, Z):
        raise ValueError(f"dimension {dim!r} is not one of x, y, z")


def euler_rate_matrix(xyz) -> np.ndarray:
    """Matrix mapping Euler ZYX angle rates to angular velocity in world frame."""
    y, z = float(xyz[Y]), float(xyz[Z])
    m = np.zeros((_DIM, _DIM))
    m[0, Y] = -np.sin(z)
    m[0, X] = np.cos(y) * np.cos(z)
    m[1, Y] = np.cos(z)
    m[1, X] = np.cos(y) * np.sin(z)
    m[2, Z] = 1.0
    m[2, X] = -np.sin(y)
    return m


def euler_rate_matrix_dot(xyz, xyz_d) -> np.ndarray:
    """Time derivative of :func:`euler_rate_matrix`."""
    y, z = float(xyz[Y]), float(xyz[Z])
    yd, zd = float(xyz_d[Y]), float(xyz_d[Z])
    m = np.zeros((_DIM, _DIM))
    m[0, Y] = -np.cos(z) * zd
    m[0, X] = -np.cos(z) * np.sin(y) * yd - np.cos(y) * np.sin(z) * zd
    m[1, Y] = -np.sin(z) * zd
    m[1, X] = np.cos(y) * np.cos(z) * zd - np.sin(y) * np.sin(z) * yd
    m[2, X] = -np.cos(y) * yd
    return m


def rotation_matrix(xyz) -> np.ndarray:
    """Rotation from base to world frame for Euler ZYX angles ``xyz``."""
    x, y, z = (float(v) for v in xyz[:3])
    cx, sx = np.cos(x), np.sin(x)
    cy, sy = np.cos(y), np.sin(y)
    cz, sz = np.cos(z), np.sin(z)
    return np.array(
        [
            [cy * cz, cz * sx * sy - cx * sz, sx * sz + cx * cz * sy],
            [cy * sz, cx * cz + sx * sy * sz, cx * sy * sz - cz * sx],
            [-sy, cy * sx, cx * cy],
        ]
    )


def quaternion(xyz) -> np.ndarray:
    """Quaternion ``(w, x, y, z)`` of the base-to-world rotation."""
    r = rotation_matrix(xyz)
    diag_sum = r[0, 0] + r[1, 1] + r[2, 2]
    if diag_sum > 0.0:
        s = np.sqrt(diag_sum + 1.0) * 2.0
        w = 0.25 * s
        qx = (r[2, 1] - r[1, 2]) / s
        qy = (r[0, 2] - r[2, 0]) / s
        qz = (r[1, 0] - r[0, 1]) / s
    elif r[0, 0] > r[1, 1] and r[0, 0] > r[2, 2]:
        s = np.sqrt(1.0 + r[0, 0] - r[1, 1] - r[2, 2]) * 2.0
        w = (r[2, 1] - r[1, 2]) / s
        qx = 0.25 * s
        qy = (r[0, 1] + r[1, 0]) / s
        qz = (r[0, 2] + r[2, 0]) / s
    elif r[1, 1] > r[2, 2]:
        s = np.sqrt(1.0 + r[1, 1] - r[0, 0] - r[2, 2]) * 2.0
        w = (r[0, 2] - r[2, 0]) / s
        qx = (r[0, 1] + r[1, 0]) / s
        qy = 0.25 * s
        qz = (r[1, 2] + r[2, 1]) / s
    else:
        s = np.sqrt(1.0 + r[2, 2] - r[0, 0] - r[1, 1]) * 2.0
        w = (r[1, 0] - r[0, 1]) / s
        qx = (r[0, 2] + r[2, 0]) / s
        qy = (r[1, 2] + r[2, 1]) / s
        qz = 0.25 * s
    return np.array([w, qx, qy, qz])


def angular_velocity(pos, vel) -> np.ndarray:
    """Angular velocity in world frame from Euler angles and their rates."""
    return euler_rate_matrix(pos) @ np.asarray(vel, dtype=float)


def angular_acceleration(state: State) -> np.ndarray:
    """Angular acceleration in world frame from Euler angles, rates and accelerations."""
    return (
        euler_rate_matrix_dot(state.p, state.v) @ state.v
        + euler_rate_matrix(state.p) @ state.a
    )


class EulerConverter:
    """Turns a spline of Euler ZYX angles into orientations and angular rates."""

    def __init__(self, euler: NodeSpline) -> None:
        self.euler = euler
        self._n_nodes = euler.node_variables_count()

    def _empty_jacobian(self) -> np.ndarray:
        return np.zeros((_DIM, self._n_nodes))

    def _jac(self, t: float, deriv: Dx, dim: int) -> np.ndarray:
        return self.euler.jacobian_wrt_nodes(t, deriv)[dim]

    def quaternion_base_to_world(self, t: float) -> np.ndarray:
        return quaternion(self.euler.point(t).p)

    def angular_velocity_in_world(self, t: float) -> np.ndarray:
        ori = self.euler.point(t)
        return angular_velocity(ori.p, ori.v)

    def angular_acceleration_in_world(self, t: float) -> np.ndarray:
        return angular_acceleration(self.euler.point(t))

    def rotation_matrix_base_to_world(self, t: float) -> np.ndarray:
        return rotation_matrix(self.euler.point(t).p)

    def deriv_of_ang_vel_wrt_euler_nodes(self, t: float) -> np.ndarray:
        """Sensitivity of the world angular velocity at ``t`` to the Euler nodes."""
        jac = self._empty_jacobian()
        ori = self.euler.point(t)
        d_vel = self.euler.jacobian_wrt_nodes(t, Dx.VEL)
        m = euler_rate_matrix(ori.p)
        for dim in (X, Y, Z):
            jac[dim] = ori.v @ self.deriv_m_wrt_nodes(t, dim) + m[dim] @ d_vel
        return jac

    def deriv_of_ang_acc_wrt_euler_nodes(self, t: float) -> np.ndarray:
        """Sensitivity of the world angular acceleration at ``t`` to the Euler nodes."""
        jac = self._empty_jacobian()
        ori = self.euler.point(t)
        d_vel = self.euler.jacobian_wrt_nodes(t, Dx.VEL)
        d_acc = self.euler.jacobian_wrt_nodes(t, Dx.ACC)
        m = euler_rate_matrix(ori.p)
        m_dot = euler_rate_matrix_dot(ori.p, ori.v)
        for dim in (X, Y, Z):
            jac[dim] = (
                ori.v @ self.deriv_mdot_wrt_nodes(t, dim)
                + m_dot[dim] @ d_vel
                + ori.a @ self.deriv_m_wrt_nodes(t, dim)
                + m[dim] @ d_acc
            )
        return jac

    def deriv_m_wrt_nodes(self, t: float, dim: int) -> np.ndarray:
        """Node sensitivity of row ``dim`` of the rate matrix, one row per column."""
        _check_dim(dim)
        p = self.euler.point(t).p
        y, z = p[Y], p[Z]
        jac_y = self._jac(t, Dx.POS, Y)
        jac_z = self._jac(t, Dx.POS, Z)
        jac = self._empty_jacobian()
        if dim == X:
            jac[Y] = -np.cos(z) * jac_z
            jac[X] = -np.cos(z) * np.sin(y) * jac_y - np.cos(y) * np.sin(z) * jac_z
        elif dim == Y:
            jac[Y] = -np.sin(z) * jac_z
            jac[X] = np.cos(y) * np.cos(z) * jac_z - np.sin(y) * np.sin(z) * jac_y
        else:
            jac[X] = -np.cos(y) * jac_y
        return jac

    def deriv_mdot_wrt_nodes(self, t: float, dim: int) -> np.ndarray:
        """Node sensitivity of row ``dim`` of the rate matrix derivative."""
        _check_dim(dim)
        ori = self.euler.point(t)
        y, z = ori.p[Y], ori.p[Z]
        yd, zd = ori.v[Y], ori.v[Z]
        jac_y = self._jac(t, Dx.POS, Y)
        jac_z = self._jac(t, Dx.POS, Z)
        jac_yd = self._jac(t, Dx.VEL, Y)
        jac_zd = self._jac(t, Dx.VEL, Z)
        sy, cy, sz, cz = np.sin(y), np.cos(y), np.sin(z), np.cos(z)
        jac = self._empty_jacobian()
        if dim == X:
            jac[Y] = sz * zd * jac_z - cz * jac_zd
            jac[X] = (
                sy * sz * yd * jac_z
                - cy * sz * jac_zd
                - cy * cz * yd * jac_y
                - cy * cz * zd * jac_z
                - cz * sy * jac_yd
                + sy * sz * jac_y * zd
            )
        elif dim == Y:
            jac[Y] = -sz * jac_zd - cz * zd * jac_z
            jac[X] = (
                cy * cz * jac_zd
                - sy * sz * jac_yd
                - cy * sz * yd * jac_y
                - cz * sy * yd * jac_z
                - cz * sy * jac_y * zd
                - cy * sz * zd * jac_z
            )
        else:
            jac[X] = sy * yd * jac_y - cy * jac_yd
        return jac

    def deriv_of_rot_vec_mult(self, t: float, v, inverse: bool) -> np.ndarray:
        """Node sensitivity of ``R v``, or of ``R^T v`` if ``inverse``, for fixed ``v``."""
        v = np.asarray(v, dtype=float)
        rd = self.derivative_of_rotation_matrix_wrt_nodes(t)
        jac = self._empty_jacobian()
        for row in (X, Y, Z):
            for col in (X, Y, Z):
                # the inverse of a rotation is its transpose
                jac_row = rd[col, row] if inverse else rd[row, col]
                jac[row] += v[col] * jac_row
        return jac

    def derivative_of_rotation_matrix_wrt_nodes(self, t: float) -> np.ndarray:
        """Node sensitivity of every rotation matrix entry, shape ``(3, 3, n)``."""
        p = self.euler.point(t).p
        x, y, z = p[X], p[Y], p[Z]
        jx = self._jac(t, Dx.POS, X)
        jy = self._jac(t, Dx.POS, Y)
        jz = self._jac(t, Dx.POS, Z)
        sx, cx = np.sin(x), np.cos(x)
        sy, cy = np.sin(y), np.cos(y)
        sz, cz = np.sin(z), np.cos(z)

        jac = np.zeros((_DIM, _DIM, self._n_nodes))
        jac[X, X] = -cz * sy * jy - cy * sz * jz
        jac[X, Y] = (sx * sz * jx - cx * cz * jz - sx * sy * sz * jz
                     + cx * cz * sy * jx + cy * cz * sx * jy)
        jac[X, Z] = (cx * sz * jx + cz * sx * jz - cz * sx * sy * jx
                     - cx * sy * sz * jz + cx * cy * cz * jy)

        jac[Y, X] = cy * cz * jz - sy * sz * jy
        jac[Y, Y] = (cx * sy * sz * jx - cx * sz * jz - cz * sx * jx
                     + cy * sx * sz * jy + cz * sx * sy * jz)
        jac[Y, Z] = (sx * sz * jz - cx * cz * jx - sx * sy * sz * jx
                     + cx * cy * sz * jy + cx * cz * sy * jz)

        jac[Z, X] = -cy * jy
        jac[Z, Y] = cx * cy * jx - sx * sy * jy
        jac[Z, Z] = -cy * sx * jx - cx * sy * jy
        return jac