"""Horizontal mass fluxes through the faces of the vertical grid."""

from __future__ import annotations

from .grid import Box, Field


def set_massflux_3d(phi_bx: Box, ioff: int, joff: int, phi: Field, hphi: Field,
                    hz: Field, om_v_or_on_u: Field, nrhs: int) -> None:
    """Store the horizontal mass flux Hz*phi*metric in ``hphi``.

    The layer thickness is averaged onto the face where the neighbouring
    cell is available, and taken from the cell itself otherwise.
    """
    for i, j, k in phi_bx.cells():
        if hz.box.contains(i - ioff, j - joff, k):
            thickness = 0.5 * (hz[i, j, k] + hz[i - ioff, j - joff, k])
        else:
            thickness = hz[i, j, k]
        hphi[i, j, k] = thickness * phi[i, j, k, nrhs] * om_v_or_on_u[i, j, 0]


def update_massflux_3d(phi_bx: Box, domain: Box, periodic, ioff: int, joff: int,
                       phi: Field, hphi: Field, hz: Field, om_v_or_on_u: Field,
                       dphi_avg1: Field, dphi_avg2: Field, dc: Field, fc: Field,
                       cf: Field, nnew: int) -> None:
    """Correct the mass flux so that its vertical sum matches ``dphi_avg2``.

    ``periodic`` gives (x, y) periodicity of ``domain``. Level -1 of ``dc``
    and ``cf`` holds column totals. On non-periodic boundary columns the
    vertical mean of ``phi`` is corrected towards ``dphi_avg1``.
    """
    mn, mm, nz = domain.size
    n = nz - 1
    ew_periodic, ns_periodic = periodic

    for cell in phi_bx.grow((0, 0, 1)).cells():
        dc[cell] = 0.0
        cf[cell] = 0.0
    for cell in phi_bx.cells():
        fc[cell] = 0.0

    for i, j, k in phi_bx.cells():
        dc[i, j, k] = 0.5 * om_v_or_on_u[i, j, 0] * (hz[i, j, k] + hz[i - ioff, j - joff, k])

    columns = [(i, j) for i, j, _ in phi_bx.make_slab(2, 0).cells()]

    for i, j in columns:
        for k in range(n + 1):
            dc[i, j, -1] += dc[i, j, k]
            cf[i, j, -1] += dc[i, j, k] * phi[i, j, k, nnew]

    for i, j in columns:
        on_open_boundary = (((i < 0 or i >= mn + 1) and not ew_periodic)
                            or ((j < 0 or j >= mm + 1) and not ns_periodic))
        for k in range(n + 1):
            if k == 0:
                dc[i, j, -1] = 1.0 / dc[i, j, -1]
                cf[i, j, -1] = dc[i, j, -1] * (cf[i, j, -1] - dphi_avg1[i, j, 0])
            if on_open_boundary:
                phi[i, j, k] -= cf[i, j, -1]
            hphi[i, j, k] = 0.5 * (hphi[i, j, k] + phi[i, j, k, nnew] * dc[i, j, k])
            fc[i, j, 0] += hphi[i, j, k]

    for i, j in columns:
        fc[i, j, 0] = dc[i, j, -1] * (fc[i, j, 0] - dphi_avg2[i, j, 0])

    for i, j, k in phi_bx.cells():
        hphi[i, j, k] -= dc[i, j, k] * fc[i, j, 0]