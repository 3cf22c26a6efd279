"""Predictor step for a tracer: advection, vertical velocity and implicit mixing."""

from __future__ import annotations

from .grid import AdvectionScheme, Box, Field, SolverChoice
from .velocity import update_vel_3d

GAMMA_T = 1.0 / 6.0
BACKGROUND_DIFFUSIVITY = 1.0e-6
MISSING_FLUX = 1.0e34


def _vertical_velocity(gbx1: Box, huon: Field, hvom: Field, w: Field,
                       z_w: Field, h: Field, n: int) -> None:
    """Integrate mass flux divergence upward and remove the free-surface part."""
    columns = [(i, j) for i, j, _ in gbx1.make_slab(2, 0).cells()]
    for i, j in columns:
        total = 0.0
        for k in range(n + 1):
            total -= (huon[i + 1, j, k] - huon[i, j, k]) + (hvom[i, j + 1, k] - hvom[i, j, k])
            w[i, j, k] = total

    for i, j, k in gbx1.cells():
        if k != n:
            wrk = w[i, j, n] / (z_w[i, j, n] + h[i, j, 0, 0])
            w[i, j, k] -= wrk * (z_w[i, j, k] + h[i, j, 0, 0])

    for i, j, k in gbx1.cells():
        if k == n:
            w[i, j, n] = 0.0


def _centred_fluxes(tbxp1: Box, direction: int, flux: Field, mass: Field,
                    tempold: Field) -> None:
    di, dj = (1, 0) if direction == 0 else (0, 1)
    for i, j, k in tbxp1.cells():
        if tempold.box.contains(i - di, j - dj, k):
            flux[i, j, k] = mass[i, j, k] * 0.5 * (tempold[i - di, j - dj, k] + tempold[i, j, k])
        else:
            flux[i, j, k] = MISSING_FLUX


def _differences(tbxp1: Box, direction: int, flux: Field, tempold: Field, nrhs: int) -> None:
    di, dj = (1, 0) if direction == 0 else (0, 1)
    for i, j, k in tbxp1.surrounding_nodes(direction).cells():
        flux[i, j, k] = tempold[i, j, k, nrhs] - tempold[i - di, j - dj, k, nrhs]


def _high_order_fluxes(tbx: Box, tbxp1: Box, direction: int, scheme: AdvectionScheme,
                       flux: Field, mass: Field, tempold: Field,
                       curv: Field, grad: Field) -> None:
    di, dj = (1, 0) if direction == 0 else (0, 1)
    if scheme == AdvectionScheme.UPSTREAM3:
        for i, j, k in tbxp1.cells():
            curv[i, j, k] = flux[i + di, j + dj, k] - flux[i, j, k]
        for i, j, k in tbxp1.cells():
            m = mass[i, j, k]
            flux[i, j, k] = (m * 0.5 * (tempold[i, j, k] + tempold[i - di, j - dj, k])
                             - (1.0 / 6.0) * (curv[i, j, k] * min(m, 0.0)
                                              + curv[i - di, j - dj, k] * max(m, 0.0)))
    elif scheme == AdvectionScheme.CENTERED4:
        for i, j, k in tbxp1.cells():
            grad[i, j, k] = 0.5 * (flux[i, j, k] + flux[i + di, j + dj, k])
        for i, j, k in tbx.surrounding_nodes(direction).cells():
            flux[i, j, k] = mass[i, j, k] * 0.5 * (
                tempold[i, j, k] + tempold[i - di, j - dj, k]
                - (1.0 / 3.0) * (grad[i, j, k] + grad[i - di, j - dj, k]))
    else:
        raise ValueError(f"not a valid horizontal advection scheme: {scheme!r}")


def prestep_t_3d(tbx: Box, gbx: Box, tempold: Field, temp: Field, tempcache: Field,
                 ru: Field, hz: Field, huon: Field, hvom: Field, pm: Field, pn: Field,
                 w: Field, dc: Field, fc: Field, tempstore: Field, z_r: Field,
                 z_w: Field, h: Field, iic: int, ntfirst: int, nnew: int, nstp: int,
                 nrhs: int, n: int, lam: float, dt_lev: float, solver: SolverChoice,
                 ngrow: int) -> None:
    """Predict a tracer at the intermediate time level.

    Computes the vertical velocity ``w`` from the horizontal mass fluxes,
    advects the tracer horizontally and vertically into ``tempstore``, and
    then applies the implicit vertical update to ``temp`` at level ``nnew``.
    Raises ValueError if the tile does not overlap ``gbx`` or the advection
    scheme is not recognised.
    """
    tbxp1 = tbx.grow((ngrow - 1, ngrow - 1, 0))
    tbxp2 = tbx.grow((ngrow, ngrow, 0))
    gbx1 = tbxp1.intersect(gbx)

    fx, fe, curv, grad = (Field(tbxp2) for _ in range(4))

    _vertical_velocity(gbx1, huon, hvom, w, z_w, h, n)

    akt = Field(tbxp2, value=BACKGROUND_DIFFUSIVITY)
    stflux = Field(tbxp2)
    btflux = Field(tbxp2)

    if solver.flat_bathymetry:
        _centred_fluxes(tbxp1, 0, fx, huon, tempold)
        _centred_fluxes(tbxp1, 1, fe, hvom, tempold)
    else:
        _differences(tbxp1, 0, fx, tempold, nrhs)
        _differences(tbxp1, 1, fe, tempold, nrhs)
        _high_order_fluxes(tbx, tbxp1, 0, solver.hadv_scheme, fx, huon, tempold, curv, grad)
        _high_order_fluxes(tbx, tbxp1, 1, solver.hadv_scheme, fe, hvom, tempold, curv, grad)

    if iic == ntfirst:
        cff, cff1, cff2 = 0.5 * dt_lev, 1.0, 0.0
    else:
        cff = (1.0 - GAMMA_T) * dt_lev
        cff1, cff2 = 0.5 + GAMMA_T, 0.5 - GAMMA_T

    for i, j, k in tbx.cells():
        tempstore[i, j, k] = (hz[i, j, k] * (cff1 * tempold[i, j, k] + cff2 * tempcache[i, j, k])
                              - cff * pm[i, j, 0] * pn[i, j, 0]
                              * (fx[i + 1, j, k] - fx[i, j, k] + fe[i, j + 1, k] - fe[i, j, k]))

    half, a2, a3 = 0.5, 7.0 / 12.0, 1.0 / 12.0
    for i, j, k in tbx.cells():
        if 1 <= k <= n - 2:
            fc[i, j, k] = (a2 * (tempold[i, j, k, nrhs] + tempold[i, j, k + 1, nrhs])
                           - a3 * (tempold[i, j, k - 1, nrhs] + tempold[i, j, k + 2, nrhs])
                           ) * w[i, j, k]
        else:
            fc[i, j, n] = 0.0
            fc[i, j, n - 1] = (a2 * tempold[i, j, n - 1, nrhs] + half * tempold[i, j, n, nrhs]
                               - a3 * tempold[i, j, n - 2, nrhs]) * w[i, j, n - 1]
            fc[i, j, 0] = (a2 * tempold[i, j, 1, nrhs] + half * tempold[i, j, 0, nrhs]
                           - a3 * tempold[i, j, 2, nrhs]) * w[i, j, 0]

    for i, j, k in tbxp1.cells():
        dw = w[i, j, k] - w[i, j, k - 1] if k >= 1 else w[i, j, k]
        dc[i, j, k] = 1.0 / (hz[i, j, k] - cff * pm[i, j, 0] * pn[i, j, 0]
                             * (huon[i + 1, j, k] - huon[i, j, k]
                                + hvom[i, j + 1, k] - hvom[i, j, k] + dw))

    for i, j, k in tbx.cells():
        scale = cff * pm[i, j, 0] * pn[i, j, 0]
        dfc = fc[i, j, k] - fc[i, j, k - 1] if k >= 1 else fc[i, j, k]
        tempstore[i, j, k] = dc[i, j, k] * (tempstore[i, j, k] - scale * dfc)

    update_vel_3d(tbx, gbx, 0, 0, temp, tempold, ru, hz, akt, dc, fc,
                  stflux, btflux, z_r, pm, pn, iic, iic, nnew, nstp, nrhs, n, lam, dt_lev)