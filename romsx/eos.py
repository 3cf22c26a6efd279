"""Linear equation of state and depth-averaged density terms."""

from __future__ import annotations

from .grid import Box, Field

T0 = 14.0
S0 = 35.0
R0 = 1027.0
TCOEF = 1.7e-4
SCOEF = 0.0
RHO0 = 1025.0


def rho_eos(phi_bx: Box, temp: Field, salt: Field, rho: Field, rhoa: Field,
            rhos: Field, pden: Field, hz: Field, z_w: Field, h: Field,
            nrhs: int, n: int) -> None:
    """Compute the density anomaly and its vertical mean and perturbation.

    ``rho`` and ``pden`` receive density minus 1000 kg/m3. Level 0 of
    ``rhoa`` holds the depth-averaged density and of ``rhos`` the density
    perturbation used by the barotropic pressure gradient, both over ``RHO0``.
    """
    for i, j, k in phi_bx.cells():
        value = R0 - R0 * TCOEF * (temp[i, j, k, nrhs] - T0)
        value += R0 * SCOEF * (salt[i, j, k, nrhs] - S0)
        value -= 1000.0
        rho[i, j, k] = value
        pden[i, j, k] = value

    columns = [(i, j) for i, j, _ in phi_bx.make_slab(2, 0).cells()]

    for i, j in columns:
        cff1 = rho[i, j, n] * hz[i, j, n]
        rhos[i, j, 0] = 0.5 * cff1 * hz[i, j, n]
        rhoa[i, j, 0] = cff1

    for i, j, k in phi_bx.cells():
        if k != 0:
            cff1 = rho[i, j, n - k] * hz[i, j, n - k]
            rhos[i, j, 0] += hz[i, j, n - k] * (rhoa[i, j, 0] + 0.5 * cff1)
            rhoa[i, j, 0] += cff1

    for i, j in columns:
        cff2 = 1.0 / RHO0
        cff1 = 1.0 / (z_w[i, j, n] + h[i, j, 0])
        rhoa[i, j, 0] = cff2 * cff1 * rhoa[i, j, 0]
        rhos[i, j, 0] = 2.0 * cff1 * cff1 * cff2 * rhos[i, j, 0]