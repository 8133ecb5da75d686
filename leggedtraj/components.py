"""Building blocks of a nonlinear program: variable sets, constraints and costs."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

import numpy as np

INF = 1.0e20
"""Magnitude treated as unbounded by the solver."""

SPECIFY_LATER = -1
"""Row count of a component whose size is only known once linked to variables."""

BASE_LIN_NODES = "base-lin"
BASE_ANG_NODES = "base-ang"


def ee_motion_nodes(ee: int) -> str:
    """Name of the motion node variables of endeffector ``ee``."""
    return f"ee-motion_{ee}"


def ee_force_nodes(ee: int) -> str:
    """Name of the force node variables of endeffector ``ee``."""
    return f"ee-force_{ee}"


def ee_schedule(ee: int) -> str:
    """Name of the contact schedule variables of endeffector ``ee``."""
    return f"ee-schedule{ee}"


@dataclass(frozen=True)
class Bounds:
    """Lower and upper limit of a single value."""

    lower: float = -INF
    upper: float = INF

    def __add__(self, offset: float) -> "Bounds":
        return Bounds(self.lower + offset, self.upper + offset)


NO_BOUND = Bounds()
BOUND_ZERO = Bounds(0.0, 0.0)
BOUND_GREATER_ZERO = Bounds(0.0, INF)
BOUND_SMALLER_ZERO = Bounds(-INF, 0.0)


class Component(abc.ABC):
    """A named block of rows with values and bounds."""

    def __init__(self, rows: int, name: str) -> None:
        self._rows = rows
        self.name = name

    @property
    def rows(self) -> int:
        return self._rows

    @rows.setter
    def rows(self, value: int) -> None:
        self._rows = value

    @abc.abstractmethod
    def values(self) -> np.ndarray:
        """Current values of all rows."""

    @abc.abstractmethod
    def bounds(self) -> list[Bounds]:
        """Bounds of all rows."""


class VariableSet(Component):
    """A set of optimization variables."""

    @abc.abstractmethod
    def set_variables(self, x) -> None:
        """Overwrite the variables with the values in ``x``."""


class Composite(Component):
    """An ordered collection of uniquely named components."""

    def __init__(self, components: Iterable[Component] = ()) -> None:
        super().__init__(0, "composite")
        self._components: dict[str, Component] = {}
        for component in components:
            self.add(component)

    def add(self, component: Component) -> None:
        if component.name in self._components:
            raise ValueError(f"component {component.name!r} already present")
        self._components[component.name] = component

    def component(self, name: str) -> Component:
        try:
            return self._components[name]
        except KeyError:
            raise KeyError(f"no component named {name!r}") from None

    def __iter__(self) -> Iterator[Component]:
        return iter(self._components.values())

    def __len__(self) -> int:
        return len(self._components)

    @property
    def rows(self) -> int:
        return sum(c.rows for c in self)

    def values(self) -> np.ndarray:
        parts = [np.asarray(c.values(), dtype=float).ravel() for c in self]
        return np.concatenate(parts) if parts else np.zeros(0)

    def bounds(self) -> list[Bounds]:
        return [b for c in self for b in c.bounds()]

    def set_variables(self, x) -> None:
        """Distribute ``x`` over the contained variable sets in order."""
        x = np.asarray(x, dtype=float).ravel()
        if x.size != self.rows:
            raise ValueError(f"expected {self.rows} values, got {x.size}")
        offset = 0
        for component in self:
            if not isinstance(component, VariableSet):
                raise TypeError(f"{component.name!r} is not a variable set")
            component.set_variables(x[offset:offset + component.rows])
            offset += component.rows


class ConstraintSet(Component):
    """A block of constraints that depends on a composite of variables."""

    def __init__(self, rows: int, name: str) -> None:
        super().__init__(rows, name)
        self._variables: Optional[Composite] = None

    @property
    def variables(self) -> Composite:
        if self._variables is None:
            raise RuntimeError(f"{self.name!r} is not linked to any variables")
        return self._variables

    def link_with_variables(self, variables: Composite) -> None:
        self._variables = variables
        self.init_variable_dependent_quantities(variables)

    def init_variable_dependent_quantities(self, variables: Composite) -> None:
        """Hook for quantities that can only be set up once variables are known."""

    def jacobian(self) -> np.ndarray:
        """Derivative of all rows with respect to all variables, in variable order."""
        blocks = []
        for var in self.variables:
            block = np.zeros((self.rows, var.rows))
            self.fill_jacobian_block(var.name, block)
            blocks.append(block)
        return np.hstack(blocks) if blocks else np.zeros((self.rows, 0))

    @abc.abstractmethod
    def fill_jacobian_block(self, var_set: str, jac: np.ndarray) -> None:
        """Write the derivative with respect to variable set ``var_set`` into ``jac``."""


class CostTerm(ConstraintSet):
    """A single scalar cost."""

    def __init__(self, name: str) -> None:
        super().__init__(1, name)

    def values(self) -> np.ndarray:
        return np.array([self.cost()])

    def bounds(self) -> list[Bounds]:
        return [NO_BOUND]

    @abc.abstractmethod
    def cost(self) -> float:
        """Current value of the cost."""


class LinearEqualityConstraint(ConstraintSet):
    """Constraint ``M x + v = 0`` on a single variable set."""

    def __init__(self, matrix, vector, variable_name: str) -> None:
        v = np.asarray(vector, dtype=float).ravel()
        m = np.atleast_2d(np.asarray(matrix, dtype=float))
        if m.shape[0] != v.size:
            raise ValueError("matrix rows and vector length differ")
        super().__init__(v.size, f"linear-equality-{variable_name}")
        self.matrix = m
        self.vector = v
        self.variable_name = variable_name

    def values(self) -> np.ndarray:
        x = np.asarray(self.variables.component(self.variable_name).values(), dtype=float)
        return self.matrix @ x

    def bounds(self) -> list[Bounds]:
        return [Bounds(-b, -b) for b in self.vector]

    def fill_jacobian_block(self, var_set: str, jac: np.ndarray) -> None:
        if var_set == self.variable_name:
            jac[:, :] = self.matrix


class SoftConstraint(CostTerm):
    """Turns a constraint into a weighted quadratic cost around its bound centres."""

    def __init__(self, constraint: ConstraintSet) -> None:
        super().__init__(f"soft-{constraint.name}")
        self.constraint = constraint
        self.targets = np.array(
            [(b.upper + b.lower) / 2.0 for b in constraint.bounds()], dtype=float
        )
        self.weights = np.ones(self.targets.size)

    def init_variable_dependent_quantities(self, variables: Composite) -> None:
        self.constraint.link_with_variables(variables)

    def _residual(self) -> np.ndarray:
        return np.asarray(self.constraint.values(), dtype=float) - self.targets

    def cost(self) -> float:
        r = self._residual()
        return 0.5 * float(r @ (self.weights * r))

    def fill_jacobian_block(self, var_set: str, jac: np.ndarray) -> None:
        block = np.zeros((self.targets.size, jac.shape[1]))
        self.constraint.fill_jacobian_block(var_set, block)
        jac[0, :] = block.T @ (self.weights * self._residual())