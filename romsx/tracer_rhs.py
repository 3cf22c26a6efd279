"""Right-hand side of the tracer equation: horizontal and vertical advection."""

from __future__ import annotations

from .grid import AdvectionScheme, Box, Field, SolverChoice

SIXTH = 1.0 / 6.0
THIRD = 1.0 / 3.0


def _horizontal_fluxes(tbxp1: Box, shift, flux: Field, mass: Field,
                       tempstore: Field, curv: Field, grad: Field, nrhs: int,
                       solver: SolverChoice) -> None:
    di, dj = shift
    cells = list(tbxp1.cells())
    flat = solver.flat_bathymetry

    for i, j, k in cells:
        flux[i, j, k] = tempstore[i, j, k, nrhs] - tempstore[i - di, j - dj, k, nrhs]

    if solver.hadv_scheme == AdvectionScheme.UPSTREAM3:
        for i, j, k in cells:
            curv[i, j, k] = flux[i + di, j + dj, k] - flux[i, j, k]
        if flat:
            values = mass.data[..., 0]
            upper, lower = float(values.max()), float(values.min())
        for i, j, k in cells:
            m = mass[i, j, k]
            centred = m * 0.5 * (tempstore[i, j, k] + tempstore[i - di, j - dj, k])
            if flat:
                flux[i, j, k] = centred + SIXTH * (curv[i, j, k] * lower
                                                   + curv[i - di, j - dj, k] * upper)
            else:
                flux[i, j, k] = centred - SIXTH * (curv[i, j, k] * min(m, 0.0)
                                                   + curv[i - di, j - dj, k] * max(m, 0.0))
    else:
        for i, j, k in cells:
            grad[i, j, k] = 0.5 * (flux[i, j, k] + flux[i + di, j + dj, k])
        for i, j, k in cells:
            m = mass[i, j, k]
            pair = tempstore[i, j, k] + tempstore[i - di, j - dj, k]
            correction = THIRD * (grad[i, j, k] + grad[i - di, j - dj, k])
            if flat:
                flux[i, j, k] = m * 0.5 * pair + correction
            else:
                flux[i, j, k] = m * 0.5 * (pair - correction)


def rhs_t_3d(bx: Box, gbx: Box, t: Field, tempstore: Field, huon: Field,
             hvom: Field, hz: Field, ohz: Field, pn: Field, pm: Field,
             w: Field, fc: Field, nrhs: int, nnew: int, n: int, dt_lev: float,
             solver: SolverChoice, ngrow: int) -> None:
    """Advect a tracer horizontally and vertically.

    Horizontal flux divergence of ``tempstore`` is subtracted from level
    ``nnew`` of ``t`` on the tile grown by ``ngrow - 1`` cells; the vertical
    fourth-order flux ``fc`` is then applied to level 0 of ``t``, which is
    divided by the layer thickness. ``ohz`` receives 1/``hz``.
    Raises ValueError for an unknown advection scheme or when the grown
    tile does not overlap ``gbx``.
    """
    if solver.hadv_scheme not in (AdvectionScheme.UPSTREAM3, AdvectionScheme.CENTERED4):
        raise ValueError(f"not a valid horizontal advection scheme: {solver.hadv_scheme!r}")

    tbxp2 = bx.grow((ngrow, ngrow, 0))
    tbxp1 = bx.grow((ngrow - 1, ngrow - 1, 0))
    gbx1 = tbxp1.intersect(gbx)

    grad, curv, fx, fe = (Field(tbxp2) for _ in range(4))

    for i, j, k in bx.cells():
        ohz[i, j, k] = 1.0 / hz[i, j, k]

    _horizontal_fluxes(tbxp1, (1, 0), fx, huon, tempstore, curv, grad, nrhs, solver)
    _horizontal_fluxes(tbxp1, (0, 1), fe, hvom, tempstore, curv, grad, nrhs, solver)

    for i, j, k in gbx1.cells():
        cff = dt_lev * pm[i, j, 0] * pn[i, j, 0]
        t[i, j, k, nnew] -= cff * (fx[i + 1, j, k] - fx[i, j, k]) + cff * (fe[i, j + 1, k] - fe[i, j, k])

    half, a2, a3 = 0.5, 7.0 / 12.0, 1.0 / 12.0
    for i, j, k in bx.cells():
        if 1 <= k <= n - 2:
            fc[i, j, k] = (a2 * (tempstore[i, j, k] + tempstore[i, j, k + 1])
                           - a3 * (tempstore[i, j, k - 1] + tempstore[i, j, k + 2])) * w[i, j, k]
        else:
            fc[i, j, n] = 0.0
            fc[i, j, n - 1] = (a2 * tempstore[i, j, n - 1] + half * tempstore[i, j, n]
                               - a3 * tempstore[i, j, n - 2]) * w[i, j, n - 1]
            fc[i, j, 0] = (a2 * tempstore[i, j, 1] + half * tempstore[i, j, 0]
                           - a3 * tempstore[i, j, 2]) * w[i, j, 0]

    for i, j, k in bx.cells():
        cff1 = dt_lev * pm[i, j, 0] * pn[i, j, 0]
        cff4 = fc[i, j, k] - fc[i, j, k - 1] if k >= 1 else fc[i, j, k]
        t[i, j, k] = ohz[i, j, k] * (t[i, j, k] - cff1 * cff4)