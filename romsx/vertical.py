"""Vertical mean correction and implicit vertical viscosity."""

from __future__ import annotations

from .grid import Box, Field


def _face_thickness(phi_bx: Box, ioff: int, joff: int, hz: Field, hzk: Field) -> None:
    for i, j, k in phi_bx.cells():
        hzk[i, j, k] = 0.5 * (hz[i - ioff, j - joff, k] + hz[i, j, k])


def vert_mean_3d(phi_bx: Box, ioff: int, joff: int, phi: Field, hz: Field,
                 hzk: Field, dphi_avg1: Field, dc: Field, cf: Field,
                 dxlen: Field, nnew: int, n: int) -> None:
    """Shift each column of ``phi`` so its vertical mean matches ``dphi_avg1``.

    Level -1 of ``cf`` receives the column depth and level -1 of ``dc`` the
    correction that is subtracted.
    """
    _face_thickness(phi_bx, ioff, joff, hz, hzk)
    columns = [(i, j) for i, j, _ in phi_bx.make_slab(2, 0).cells()]

    for i, j in columns:
        cf[i, j, -1] = sum(hzk[i, j, k] for k in range(n + 1))
        dc[i, j, -1] = sum(phi[i, j, k, nnew] * hzk[i, j, k] for k in range(n + 1))

    for i, j in columns:
        inverse_len = 1.0 / dxlen[i, j, 0]
        cff1 = 1.0 / (cf[i, j, -1] * inverse_len)
        dc[i, j, -1] = (dc[i, j, -1] * inverse_len - dphi_avg1[i, j, 0]) * cff1

    for i, j, k in phi_bx.cells():
        phi[i, j, k] -= dc[i, j, -1]


def vert_visc_3d(phi_bx: Box, ioff: int, joff: int, phi: Field, hz: Field,
                 hzk: Field, ohz: Field, ak: Field, akv: Field, bc: Field,
                 dc: Field, fc: Field, cf: Field, nnew: int, n: int,
                 dt_lev: float) -> None:
    """Apply vertical viscosity to ``phi`` implicitly.

    Uses a parabolic spline reconstruction of the vertical derivatives and
    solves the resulting tridiagonal system in each column.
    """
    _face_thickness(phi_bx, ioff, joff, hz, hzk)
    for i, j, k in phi_bx.cells():
        ohz[i, j, k] = 1.0 / hzk[i, j, k]
    for i, j, k in phi_bx.cells():
        ak[i, j, k] = 0.5 * (akv[i - ioff, j - joff, k] + akv[i, j, k])

    columns = [(i, j) for i, j, _ in phi_bx.make_slab(2, 0).cells()]
    sixth, third = 1.0 / 6.0, 1.0 / 3.0

    for i, j in columns:
        # LU decomposition and forward substitution
        for k in range(n + 1):
            if k >= 1:
                fc[i, j, k] = sixth * hzk[i, j, k] - dt_lev * ak[i, j, k - 1] * ohz[i, j, k]
            else:
                fc[i, j, k] = sixth * hzk[i, j, k]
            if k <= n - 1:
                cf[i, j, k] = sixth * hzk[i, j, k + 1] - dt_lev * ak[i, j, k + 1] * ohz[i, j, k + 1]
                bc[i, j, k] = (third * (hzk[i, j, k] + hzk[i, j, k + 1])
                               + dt_lev * ak[i, j, k] * (ohz[i, j, k] + ohz[i, j, k + 1]))
                jump = phi[i, j, k + 1, nnew] - phi[i, j, k, nnew]
                if k == 0:
                    cff = 1.0 / (bc[i, j, k] - fc[i, j, k] * 0.0)
                    cf[i, j, k] *= cff
                    dc[i, j, k] = cff * (jump - fc[i, j, k] * 0.0)
                else:
                    cff = 1.0 / (bc[i, j, k] - fc[i, j, k] * cf[i, j, k - 1])
                    cf[i, j, k] *= cff
                    dc[i, j, k] = cff * (jump - fc[i, j, k] * dc[i, j, k - 1])

    for i, j in columns:
        # backward substitution
        dc[i, j, n] = 0.0
        for k in range(1, n + 1):
            dc[i, j, n - k] -= cf[i, j, n - k] * dc[i, j, n - k + 1]

    for i, j, k in phi_bx.cells():
        dc[i, j, k] *= ak[i, j, k]

    for i, j, k in phi_bx.cells():
        below = dc[i, j, k - 1] if k >= 1 else 0.0
        phi[i, j, k] += dt_lev * ohz[i, j, k] * (dc[i, j, k] - below)