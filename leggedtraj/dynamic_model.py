"""Dynamic models relating base motion and endeffector forces."""

from __future__ import annotations

import abc
from typing import Sequence

import numpy as np

from .euler_converter import EulerConverter

GRAVITY = 9.80665
_K3D = 3
_K6D = 6
_ANG = slice(0, 3)
_LIN = slice(3, 6)


def build_inertia_tensor(ixx: float, iyy: float, izz: float,
                         ixy: float, ixz: float, iyz: float) -> np.ndarray:
    """Symmetric inertia tensor from its six independent entries."""
    return np.array(
        [
            [ixx, -ixy, -ixz],
            [-ixy, iyy, -iyz],
            [-ixz, -iyz, izz],
        ],
        dtype=float,
    )


def cross_matrix(v) -> np.ndarray:
    """Matrix ``X`` with ``X @ w == cross(v, w)``."""
    v = np.asarray(v, dtype=float)
    return np.array(
        [
            [0.0, -v[2], v[1]],
            [v[2], 0.0, -v[0]],
            [-v[1], v[0], 0.0],
        ]
    )


class DynamicModel(abc.ABC):
    """A model whose violation is zero when the motion is dynamically feasible."""

    def __init__(self, mass: float, ee_count: int) -> None:
        self.m = float(mass)
        self.g = GRAVITY
        self.com_pos = np.zeros(_K3D)
        self.com_acc = np.zeros(_K3D)
        self.w_R_b = np.eye(_K3D)
        self.omega = np.zeros(_K3D)
        self.omega_dot = np.zeros(_K3D)
        self.ee_force = [np.zeros(_K3D) for _ in range(ee_count)]
        self.ee_pos = [np.zeros(_K3D) for _ in range(ee_count)]

    @property
    def ee_count(self) -> int:
        return len(self.ee_pos)

    def set_current(self, com_pos, com_acc, w_R_b, omega, omega_dot,
                    ee_force: Sequence, ee_pos: Sequence) -> None:
        """Set the state at which violation and Jacobians are evaluated."""
        if len(ee_force) != len(ee_pos):
            raise ValueError("need as many endeffector forces as positions")
        self.com_pos = np.array(com_pos, dtype=float)
        self.com_acc = np.array(com_acc, dtype=float)
        self.w_R_b = np.array(w_R_b, dtype=float)
        self.omega = np.array(omega, dtype=float)
        self.omega_dot = np.array(omega_dot, dtype=float)
        self.ee_force = [np.array(f, dtype=float) for f in ee_force]
        self.ee_pos = [np.array(p, dtype=float) for p in ee_pos]

    @abc.abstractmethod
    def dynamic_violation(self) -> np.ndarray:
        """Six-dimensional violation: angular rows first, then linear."""

    @abc.abstractmethod
    def jacobian_wrt_base_lin(self, jac_pos_base_lin, jac_acc_base_lin) -> np.ndarray:
        """Sensitivity of the violation to the linear base variables."""

    @abc.abstractmethod
    def jacobian_wrt_base_ang(self, base_euler: EulerConverter, t: float) -> np.ndarray:
        """Sensitivity of the violation to the angular base variables."""

    @abc.abstractmethod
    def jacobian_wrt_force(self, jac_force, ee: int) -> np.ndarray:
        """Sensitivity of the violation to the force variables of ``ee``."""

    @abc.abstractmethod
    def jacobian_wrt_ee_pos(self, jac_ee_pos, ee: int) -> np.ndarray:
        """Sensitivity of the violation to the position variables of ``ee``."""


class SingleRigidBodyDynamics(DynamicModel):
    """Newton-Euler equations of one rigid body driven by endeffector forces."""

    def __init__(self, mass: float, inertia_b, ee_count: int) -> None:
        super().__init__(mass, ee_count)
        inertia = np.asarray(inertia_b, dtype=float)
        if inertia.shape != (_K3D, _K3D):
            raise ValueError("inertia tensor must be a 3x3 matrix")
        self.inertia_b = inertia

    @classmethod
    def from_inertia_components(cls, mass: float, ixx: float, iyy: float, izz: float,
                                ixy: float, ixz: float, iyz: float,
                                ee_count: int) -> "SingleRigidBodyDynamics":
        return cls(mass, build_inertia_tensor(ixx, iyy, izz, ixy, ixz, iyz), ee_count)

    def _inertia_world(self) -> np.ndarray:
        return self.w_R_b @ self.inertia_b @ self.w_R_b.T

    def dynamic_violation(self) -> np.ndarray:
        f_sum = np.zeros(_K3D)
        tau_sum = np.zeros(_K3D)
        for f, p in zip(self.ee_force, self.ee_pos):
            tau_sum += np.cross(f, self.com_pos - p)
            f_sum += f

        i_w = self._inertia_world()
        acc = np.zeros(_K6D)
        acc[_ANG] = i_w @ self.omega_dot + np.cross(self.omega, i_w @ self.omega) - tau_sum
        acc[_LIN] = self.m * self.com_acc - f_sum - np.array([0.0, 0.0, -self.m * self.g])
        return acc

    def jacobian_wrt_base_lin(self, jac_pos_base_lin, jac_acc_base_lin) -> np.ndarray:
        jac_pos = np.asarray(jac_pos_base_lin, dtype=float)
        jac_acc = np.asarray(jac_acc_base_lin, dtype=float)
        n = jac_pos.shape[1]
        jac_tau_sum = np.zeros((_K3D, n))
        for f in self.ee_force:
            jac_tau_sum += cross_matrix(f) @ jac_pos

        jac = np.zeros((_K6D, n))
        jac[_ANG] = -jac_tau_sum
        jac[_LIN] = self.m * jac_acc
        return jac

    def jacobian_wrt_base_ang(self, base_euler: EulerConverter, t: float) -> np.ndarray:
        r = self.w_R_b
        i_b = self.inertia_b
        i_w = self._inertia_world()

        # derivative of R I_b R^T wd by the product rule
        jac11 = base_euler.deriv_of_rot_vec_mult(t, i_b @ r.T @ self.omega_dot, False)
        jac12 = r @ i_b @ base_euler.deriv_of_rot_vec_mult(t, self.omega_dot, True)
        jac13 = i_w @ base_euler.deriv_of_ang_acc_wrt_euler_nodes(t)
        jac1 = jac11 + jac12 + jac13

        # derivative of w x (I_w w)
        jac21 = base_euler.deriv_of_rot_vec_mult(t, i_b @ r.T @ self.omega, False)
        jac22 = r @ i_b @ base_euler.deriv_of_rot_vec_mult(t, self.omega, True)
        jac_ang_vel = base_euler.deriv_of_ang_vel_wrt_euler_nodes(t)
        jac23 = i_w @ jac_ang_vel
        jac2 = (cross_matrix(self.omega) @ (jac21 + jac22 + jac23)
                - cross_matrix(i_w @ self.omega) @ jac_ang_vel)

        jac = np.zeros((_K6D, jac_ang_vel.shape[1]))
        jac[_ANG] = jac1 + jac2
        return jac

    def jacobian_wrt_force(self, jac_force, ee: int) -> np.ndarray:
        jac_force = np.asarray(jac_force, dtype=float)
        r = self.com_pos - self.ee_pos[ee]
        jac_tau = -cross_matrix(r) @ jac_force
        jac = np.zeros((_K6D, jac_force.shape[1]))
        jac[_ANG] = -jac_tau
        jac[_LIN] = -jac_force
        return jac

    def jacobian_wrt_ee_pos(self, jac_ee_pos, ee: int) -> np.ndarray:
        jac_ee_pos = np.asarray(jac_ee_pos, dtype=float)
        jac_tau = cross_matrix(self.ee_force[ee]) @ (-jac_ee_pos)
        jac = np.zeros((_K6D, jac_tau.shape[1]))
        # linear dynamics do not depend on endeffector positions
        jac[_ANG] = -jac_tau
        return jac