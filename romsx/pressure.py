"""Baroclinic pressure gradient from a density Jacobian on terrain-following levels."""

from __future__ import annotations

from .eos import RHO0
from .grid import Box, Field

GRAVITY = 9.81
EPS = 1.0e-10
ONE_FIFTH = 0.2
ONE_TWELFTH = 1.0 / 12.0


def _harmonic_pair(a: float, b: float) -> float:
    """Harmonic-mean style average used for the spline derivatives; zero if not positive."""
    cff = 2.0 * a * b
    return cff / (a + b) if cff > EPS else 0.0


def _column_pressure(columns, rho: Field, z_r: Field, z_w: Field, dr: Field,
                     dz: Field, p: Field, n: int) -> None:
    grho = GRAVITY / RHO0
    grho0 = 1000.0 * grho
    half_grho = 0.5 * grho

    for i, j in columns:
        cff1 = 1.0 / (z_r[i, j, n] - z_r[i, j, n - 1])
        cff2 = 0.5 * (rho[i, j, n] - rho[i, j, n - 1]) * (z_w[i, j, n] - z_r[i, j, n]) * cff1
        p[i, j, n] = (grho0 * z_w[i, j, n]
                      + grho * (rho[i, j, n] + cff2) * (z_w[i, j, n] - z_r[i, j, n]))
        for k in range(n - 1, -1, -1):
            drho = rho[i, j, k + 1] - rho[i, j, k]
            dzr = z_r[i, j, k + 1] - z_r[i, j, k]
            p[i, j, k] = p[i, j, k + 1] + half_grho * (
                (rho[i, j, k + 1] + rho[i, j, k]) * dzr
                - ONE_FIFTH * ((dr[i, j, k + 1] - dr[i, j, k])
                               * (dzr - ONE_TWELFTH * (dz[i, j, k + 1] + dz[i, j, k]))
                               - (dz[i, j, k + 1] - dz[i, j, k])
                               * (drho - ONE_TWELFTH * (dr[i, j, k + 1] + dr[i, j, k]))))


def _horizontal_gradient(phi_bx: Box, columns, shift, r: Field, metric: Field,
                         rho: Field, fc: Field, aux: Field, drx: Field, dzx: Field,
                         p: Field, hz: Field, z_r: Field, nrhs: int, n: int) -> None:
    di, dj = shift
    half_grho = 0.5 * GRAVITY / RHO0
    slab = phi_bx.make_slab(2, 0)

    for i, j, k in phi_bx.cells():
        if phi_bx.contains(i - di, j - dj, k):
            fc[i, j, k] = rho[i, j, k] - rho[i - di, j - dj, k]
            aux[i, j, k] = z_r[i, j, k] - z_r[i - di, j - dj, k]
        else:
            fc[i, j, k] = 0.0
            aux[i, j, k] = 0.0

    for i, j in columns:
        has_next = slab.contains(i + di, j + dj, 0)
        for k in range(n, -1, -1):
            a, f = aux[i, j, k], fc[i, j, k]
            a_next = aux[i + di, j + dj, k] if has_next else a
            f_next = fc[i + di, j + dj, k] if has_next else f
            dzx[i, j, k] = _harmonic_pair(a, a_next)
            drx[i, j, k] = _harmonic_pair(f, f_next)

    for i, j in columns:
        if not slab.contains(i - di, j - dj, 0):
            continue
        ip, jp = i - di, j - dj
        for k in range(n, -1, -1):
            drho = rho[i, j, k] - rho[ip, jp, k]
            dzr = z_r[i, j, k] - z_r[ip, jp, k]
            r[i, j, k, nrhs] = metric[i, j, 0] * 0.5 * (hz[i, j, k] + hz[ip, jp, k]) * (
                p[ip, jp, k] - p[i, j, k]
                - half_grho * ((rho[i, j, k] + rho[ip, jp, k]) * dzr
                               - ONE_FIFTH * ((drx[i, j, k] - drx[ip, jp, k])
                                              * (dzr - ONE_TWELFTH * (dzx[i, j, k] + dzx[ip, jp, k]))
                                              - (dzx[i, j, k] - dzx[ip, jp, k])
                                              * (drho - ONE_TWELFTH * (drx[i, j, k] + drx[ip, jp, k])))))


def prsgrd(phi_bx: Box, ru: Field, rv: Field, on_u: Field, om_v: Field,
           rho: Field, fc: Field, hz: Field, z_r: Field, z_w: Field,
           nrhs: int, n: int) -> None:
    """Store the baroclinic pressure gradient force in ``ru`` and ``rv``.

    Pressure is integrated downward from the free surface with a
    parabolic-spline density Jacobian. The first column along each
    direction of ``phi_bx`` has no upstream neighbour and is left as it is.
    ``fc`` is used as workspace and ends holding the y-differences of ``rho``.
    """
    p, aux, dr, dz, drx, dzx = (Field(phi_bx) for _ in range(6))
    columns = [(i, j) for i, j, _ in phi_bx.make_slab(2, 0).cells()]

    for i, j, k in phi_bx.cells():
        if 0 <= k < n:
            dr[i, j, k] = rho[i, j, k + 1] - rho[i, j, k]
            dz[i, j, k] = z_r[i, j, k + 1] - z_r[i, j, k]
        else:
            dr[i, j, n] = rho[i, j, n] - rho[i, j, n - 1]
            dz[i, j, n] = z_r[i, j, n] - z_r[i, j, n - 1]

    for i, j in columns:
        for k in range(n, -1, -1):
            below = k - 1 if k > 0 else k
            dr[i, j, k] = _harmonic_pair(dr[i, j, k], dr[i, j, below])
            dz[i, j, k] = 2.0 * dz[i, j, k] * dz[i, j, below] / (dz[i, j, k] + dz[i, j, below])

    _column_pressure(columns, rho, z_r, z_w, dr, dz, p, n)

    _horizontal_gradient(phi_bx, columns, (1, 0), ru, on_u, rho, fc, aux,
                         drx, dzx, p, hz, z_r, nrhs, n)
    _horizontal_gradient(phi_bx, columns, (0, 1), rv, om_v, rho, fc, aux,
                         drx, dzx, p, hz, z_r, nrhs, n)