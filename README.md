# leggedtraj

Building blocks for writing trajectory optimization problems for legged
robots. Motions and forces are cubic Hermite splines, and their node values
are the decision variables. Constraints and costs give their values, bounds
and Jacobians as NumPy arrays. Any nonlinear solver can work with them.

## What is inside

- **Splines**
  - `leggedtraj.polynomial`: the `Dx` derivative orders, the `State` holder
    of position, velocity and acceleration, `Polynomial` and
    `CubicHermitePolynomial`.
  - `leggedtraj.spline`: `Spline`, `segment_id` and `local_time`.
  - `leggedtraj.node_spline`: `NodeSpline`, a spline that follows its node
    variables and gives Jacobians with respect to them.
  - `leggedtraj.phase_spline`: `PhaseSpline`, which also follows optimized
    phase durations. Its `jacobian_of_pos_wrt_durations` gives the position
    Jacobian with respect to those durations.
- **Variables**
  - `leggedtraj.nodes_variables`: the base `NodesVariables`, `NodeValueInfo`,
    `Side` and `NodesObserver`.
  - `leggedtraj.nodes_variables_all`: `NodesVariablesAll`, in which every
    position and velocity is optimized.
  - `leggedtraj.nodes_variables_phase_based`: `NodesVariablesEEMotion` and
    `NodesVariablesEEForce`. Here contact and swing phases alternate, and each
    constant phase shares one set of variables.
  - `leggedtraj.phase_durations`: `PhaseDurations`, the contact-schedule
    durations of one endeffector. The last phase fills up to the total time.
- **Problem components** (`leggedtraj.components`)
  - `Bounds`, `VariableSet`, `Composite`, `ConstraintSet` and `CostTerm`.
  - `LinearEqualityConstraint`, which requires `M x + v = 0`.
  - `SoftConstraint`, which turns a constraint into a weighted quadratic cost
    around the centres of its bounds.
  - The variable-name helpers `ee_motion_nodes`, `ee_force_nodes` and
    `ee_schedule`.
- **Further constraints and costs**
  - `leggedtraj.spline_acc_constraint.SplineAccConstraint`: equal
    acceleration on both sides of every polynomial junction.
  - `leggedtraj.node_cost.NodeCost`: a weighted sum of squares of one node
    value over all nodes.
- **Orientation and dynamics**
  - `leggedtraj.euler_converter`: Euler ZYX rotation matrices, quaternions
    in `(w, x, y, z)` order, and angular velocity and acceleration. Its
    `EulerConverter` gives the analytic derivatives of these with respect to
    spline nodes.
  - `leggedtraj.dynamic_model`: `DynamicModel` and
    `SingleRigidBodyDynamics`, which compute the Newton-Euler violation and
    its Jacobians. Also `build_inertia_tensor` and `cross_matrix`.
- **Gaits**
  - `leggedtraj.gait_generator`: `GaitGenerator`, `Gaits`, `Combos` and
    `make_gait_generator`.
  - The monoped, biped and quadruped generators: contact sequences, and
    phase durations for each foot.

## Installation

```
pip install .
```

To install the test dependencies too:

```
pip install ".[test]"
```

## Example: a gait schedule

```python
from leggedtraj.gait_generator import Combos, make_gait_generator

gen = make_gait_generator(4)   # quadruped
gen.set_combo(Combos.C1)       # flying trot
for ee in range(4):
    print(ee, gen.is_in_contact_at_start(ee), gen.phase_durations(2.4, ee))
```

`make_gait_generator` accepts 1, 2 or 4 legs. Any other count raises
`ValueError`.

## Example: a spline driven by node variables

```python
import numpy as np
from leggedtraj.nodes_variables_all import NodesVariablesAll
from leggedtraj.node_spline import NodeSpline
from leggedtraj.polynomial import Dx

nodes = NodesVariablesAll(3, 3, "base-lin")
nodes.set_by_linear_interpolation(np.zeros(3), np.array([1.0, 0.0, 0.5]), 1.0)
spline = NodeSpline(nodes, [0.5, 0.5])

state = spline.point(0.75)
print(state.p, state.v, state.a)
print(spline.jacobian_wrt_nodes(0.75, Dx.POS))   # sensitivity to node values
```

`nodes.set_variables(x)` sets new values. Every spline that observes those
nodes is then updated.

## Example: a cost linked to variables

```python
from leggedtraj.components import Composite
from leggedtraj.node_cost import NodeCost

variables = Composite([nodes])
cost = NodeCost("base-lin", Dx.VEL, 0, 1.0)
cost.link_with_variables(variables)
print(cost.cost())
print(cost.jacobian())   # one row, one column per optimization variable
```

## What this package does not do

- It contains no solver. It gives values, bounds and Jacobians, and the
  caller passes them to an optimizer of their choice.
- It has no terrain models. It also has no friction-cone or unilateral
  contact-force constraint, because that constraint needs terrain normals.
- It does not assemble the variables, constraints and costs into a complete
  problem for you.
- It has no command-line program.

## Running the tests

```
pytest
```