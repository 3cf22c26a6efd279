# romsx

Numerical kernels for a hydrostatic, terrain-following (sigma-coordinate)
regional ocean model. Values live in `Field` objects defined over integer
index boxes that may extend into ghost cells; every kernel updates the fields
it is given in place, over the boxes it is given.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Building blocks: `romsx.grid`

- `Box(lo, hi)`: an inclusive integer index range in `(i, j, k)`, with
  `size`, `is_empty`, `grow`, `contains`, `surrounding_nodes`, `make_slab`,
  `intersect` (raises `ValueError` when the boxes do not overlap) and
  `cells` (yields indices with `i` varying fastest).
- `Field(box, ncomp=1, value=0.0)`: NumPy-backed values on every cell of a
  box, indexed by global position as `f[i, j, k]` (component 0) or
  `f[i, j, k, n]`. Reading or writing outside the box, or a component that
  does not exist, raises `IndexError`. `fill` sets every value.
- `AdvectionScheme` (`UPSTREAM3`, `CENTERED4`) and `SolverChoice`
  (`flat_bathymetry`, `hadv_scheme`): choices for horizontal tracer advection.
- `velocity_to_momentum` and `momentum_to_velocity`: convert face velocities
  to face momenta and back using the density averaged onto each face. Both
  return new `(x, y, z)` fields; `velocity_to_momentum` starts each box at
  vertical index 0.

## Time-integration kernels

| Module | Functions |
| --- | --- |
| `romsx.massflux` | `set_massflux_3d`, `update_massflux_3d` (horizontal mass fluxes and their barotropic correction) |
| `romsx.vertical` | `vert_mean_3d` (vertical mean correction), `vert_visc_3d` (implicit vertical viscosity via a tridiagonal solve) |
| `romsx.velocity` | `update_vel_3d`, `prestep_uv_3d` (implicit vertical update of u, v or a tracer) |
| `romsx.eos` | `rho_eos` (linear equation of state, depth-averaged density and perturbation) |
| `romsx.mixing` | `t3dmix`, `uv3dmix` (harmonic horizontal diffusion and viscosity) |
| `romsx.tracer_prestep` | `prestep_t_3d` (vertical velocity, tracer advection predictor, implicit update) |
| `romsx.pressure` | `prsgrd` (baroclinic pressure gradient) |
| `romsx.tracer_rhs` | `rhs_t_3d` (horizontal and vertical tracer advection) |

The equation of state uses fixed coefficients, available as module constants
in `romsx.eos` (`T0`, `S0`, `R0`, `TCOEF`, `SCOEF`, `RHO0`).

`prestep_t_3d` and `rhs_t_3d` raise `ValueError` for an advection scheme they
do not recognise, and when the grown tile does not overlap the given box.

## Example

```python
from romsx.grid import Box, Field
from romsx.eos import rho_eos

box = Box((0, 0, 0), (3, 3, 4))
temp = Field(box, value=14.0)
salt = Field(box, value=35.0)
rho, rhoa, rhos, pden = (Field(box) for _ in range(4))
hz = Field(box, value=2.0)
z_w = Field(box, value=0.0)
h = Field(box, value=10.0)

rho_eos(box, temp, salt, rho, rhoa, rhos, pden, hz, z_w, h, nrhs=0, n=4)
print(rho[0, 0, 0])   # 27.0: density anomaly at the reference temperature
```

## What the package does not do

It is a set of kernels, not a running model. There is no command-line
program, no reading of input or grid files, no writing of output, no
time-stepping driver that calls the kernels in order, and no parallel or
distributed execution. The momentum advection terms of the right-hand side
are not computed here; callers supply them in the right-hand-side fields.