"""Harmonic horizontal mixing of tracers and momentum along S-surfaces."""

from __future__ import annotations

from .grid import Box, Field


def t3dmix(bx: Box, t: Field, diff2: Field, hz: Field, pm: Field, pn: Field,
           pmon_u: Field, pnom_v: Field, nrhs: int, nnew: int, dt_lev: float,
           ngrow: int) -> None:
    """Add harmonic diffusion of tracer ``t`` (level ``nrhs``) to level ``nnew``."""
    gbx2 = bx.grow((ngrow, ngrow, 0))
    fx = Field(gbx2)
    fe = Field(gbx2)

    for i, j, k in bx.cells():
        cff = 0.25 * (diff2[i, j, 0] + diff2[i - 1, j, 0]) * pmon_u[i, j, 0]
        fx[i, j, k] = cff * (hz[i, j, k] + hz[i + 1, j, k]) * (t[i, j, k, nrhs] - t[i - 1, j, k, nrhs])

    for i, j, k in bx.cells():
        cff = 0.25 * (diff2[i, j, 0] + diff2[i, j - 1, 0]) * pnom_v[i, j, 0]
        fe[i, j, k] = cff * (hz[i, j, k] + hz[i, j - 1, k]) * (t[i, j, k, nrhs] - t[i, j - 1, k, nrhs])

    for i, j, k in bx.cells():
        cff = dt_lev * pm[i, j, 0] * pn[i, j, 0]
        cff1 = cff * (fx[i + 1, j, k] - fx[i, j, k])
        cff2 = cff * (fe[i, j + 1, k] - fe[i, j, k])
        t[i, j, k, nnew] += cff1 + cff2


def uv3dmix(bx: Box, u: Field, v: Field, uold: Field, vold: Field,
            rufrc: Field, rvfrc: Field, visc2_p: Field, visc2_r: Field,
            hz: Field, om_r: Field, on_r: Field, om_p: Field, on_p: Field,
            pm: Field, pn: Field, nrhs: int, nnew: int, dt_lev: float,
            ngrow: int) -> None:
    """Add harmonic viscosity to u and v and to the barotropic forcing.

    Works on the tile grown by ``ngrow - 1`` horizontal cells.
    """
    gbx2 = bx.grow((ngrow, ngrow, 0))
    gbx1 = bx.grow((ngrow - 1, ngrow - 1, 0))
    ufx, ufe, vfx, vfe = (Field(gbx2) for _ in range(4))

    for i, j, k in gbx1.cells():
        cff = 0.5 * hz[i, j, k] * (
            pm[i, j, 0] / pn[i, j, 0]
            * ((pn[i, j, 0] + pn[i + 1, j, 0]) * uold[i + 1, j, k, nrhs]
               - (pn[i - 1, j, 0] + pn[i, j, 0]) * uold[i, j, k, nrhs])
            - pn[i, j, 0] / pm[i, j, 0]
            * ((pm[i, j, 0] + pm[i, j + 1, 0]) * vold[i, j + 1, k, nrhs]
               - (pm[i, j - 1, 0] + pm[i, j, 0]) * vold[i, j, k, nrhs]))
        ufx[i, j, k] = on_r[i, j, 0] ** 2 * visc2_r[i, j, 0] * cff
        vfe[i, j, k] = om_r[i, j, 0] ** 2 * visc2_r[i, j, 0] * cff

    for i, j, k in gbx1.cells():
        cff = 0.125 * (hz[i - 1, j, k] + hz[i, j, k] + hz[i - 1, j - 1, k] + hz[i, j - 1, k]) * (
            pm[i, j, 0] / pn[i, j, 0]
            * ((pn[i, j - 1, 0] + pn[i, j, 0]) * vold[i, j, k, nrhs]
               - (pn[i - 1, j - 1, 0] + pn[i - 1, j, 0]) * vold[i - 1, j, k, nrhs])
            + pn[i, j, 0] / pm[i, j, 0]
            * ((pm[i - 1, j, 0] + pm[i, j, 0]) * uold[i, j, k, nrhs]
               - (pm[i - 1, j - 1, 0] + pm[i, j - 1, 0]) * uold[i, j - 1, k, nrhs]))
        ufe[i, j, k] = om_p[i, j, 0] ** 2 * visc2_p[i, j, 0] * cff
        vfx[i, j, k] = on_p[i, j, 0] ** 2 * visc2_p[i, j, 0] * cff

    for i, j, k in gbx1.cells():
        cff = dt_lev * 0.25 * (pm[i - 1, j, 0] + pm[i, j, 0]) * (pn[i - 1, j, 0] + pn[i, j, 0])
        cff1 = 0.5 * (pn[i - 1, j, 0] + pn[i, j, 0]) * (ufx[i, j, k] - ufx[i - 1, j, k])
        cff2 = 0.5 * (pm[i - 1, j, 0] + pm[i, j, 0]) * (ufe[i, j + 1, k] - ufe[i, j, k])
        rufrc[i, j, 0] += cff1 + cff2
        u[i, j, k, nnew] += cff * (cff1 + cff2)

    for i, j, k in gbx1.cells():
        cff = dt_lev * 0.25 * (pm[i, j, 0] + pm[i, j - 1, 0]) * (pn[i, j, 0] + pn[i, j - 1, 0])
        cff1 = 0.5 * (pn[i, j - 1, 0] + pn[i, j, 0]) * (vfx[i + 1, j, k] - vfx[i, j, k])
        cff2 = 0.5 * (pm[i, j - 1, 0] + pm[i, j, 0]) * (vfe[i, j, k] - vfe[i, j - 1, k])
        rvfrc[i, j, 0] += cff1 - cff2
        v[i, j, k, nnew] += cff * (cff1 - cff2)