"""Implicit vertical update of velocities and tracers, and the momentum prestep."""

from __future__ import annotations

from .grid import Box, Field


def update_vel_3d(vel_bx: Box, gbx: Box, ioff: int, joff: int, vel: Field,
                  vel_old: Field, rvel: Field, hz: Field, akv: Field, dc: Field,
                  fc: Field, sstr: Field, bstr: Field, z_r: Field, pm: Field,
                  pn: Field, iic: int, ntfirst: int, nnew: int, nstp: int,
                  nrhs: int, n: int, lam: float, dt_lev: float) -> None:
    """Time-step a velocity component or tracer with vertical fluxes.

    ``ioff``/``joff`` select the face: (1, 0) for u, (0, 1) for v and (0, 0)
    for a tracer. ``lam`` weights the implicit part of the vertical flux.
    For velocities after the first step the right-hand-side time levels in
    ``rvel`` are swapped and blended with Adams-Bashforth weights.
    Raises ValueError if ``vel_bx`` and ``gbx`` do not overlap.
    """
    gbxvel = vel_bx.intersect(gbx)
    oml_dt = dt_lev * (1.0 - lam)

    for i, j, k in vel_bx.cells():
        io, jo = i - ioff, j - joff
        if 0 <= k and k + 1 <= n:
            cff = 1.0 / (z_r[i, j, k + 1] + z_r[io, jo, k + 1]
                         - z_r[i, j, k] - z_r[io, jo, k])
            fc[i, j, k] = (oml_dt * cff
                           * (vel_old[i, j, k + 1, nstp] - vel_old[i, j, k, nstp])
                           * (akv[i, j, k] + akv[io, jo, k]))
        elif k == -1:
            fc[i, j, -1] = dt_lev * bstr[i, j, 0]
        elif k == n:
            fc[i, j, n] = dt_lev * sstr[i, j, 0]
        dc[i, j, k] = 0.25 * dt_lev * (pm[i, j, 0] + pm[io, jo, 0]) * (pn[i, j, 0] + pn[io, jo, 0])

    is_tracer = ioff == 0 and joff == 0
    indx = 0 if nrhs else 1

    def held_value(i: int, j: int, k: int) -> float:
        return vel_old[i, j, k, nstp] * 0.5 * (hz[i, j, k] + hz[i - ioff, j - joff, k])

    def vertical_flux(i: int, j: int, k: int) -> float:
        if k == 0:
            return fc[i, j, k] - dt_lev * bstr[i, j, 0]
        if k == n:
            return dt_lev * sstr[i, j, 0] - fc[i, j, k - 1]
        return fc[i, j, k] - fc[i, j, k - 1]

    def swap_rhs(i: int, j: int, k: int) -> None:
        rvel[i, j, k, indx], rvel[i, j, k, nrhs] = rvel[i, j, k, nrhs], rvel[i, j, k, indx]

    for i, j, k in gbxvel.cells():
        in_column = 0 <= k <= n
        if iic == ntfirst:
            if in_column:
                vel[i, j, k, nnew] = held_value(i, j, k) + vertical_flux(i, j, k)
        elif iic == ntfirst + 1:
            if in_column:
                held, flux = held_value(i, j, k), vertical_flux(i, j, k)
            else:
                held, flux = 0.0, 0.0
            if is_tracer:
                vel[i, j, k, nnew] = held + flux
            else:
                half_dc = 0.5 * dc[i, j, k]
                swap_rhs(i, j, k)
                vel[i, j, k, nnew] = held - half_dc * rvel[i, j, k, indx] + flux
        else:
            held, flux = held_value(i, j, k), vertical_flux(i, j, k)
            if is_tracer:
                vel[i, j, k, nnew] = held + flux
            else:
                swap_rhs(i, j, k)
                vel[i, j, k, nnew] = (held
                                      + dc[i, j, k] * (5.0 / 12.0 * rvel[i, j, k, nrhs]
                                                       - 16.0 / 12.0 * rvel[i, j, k, indx])
                                      + flux)
                rvel[i, j, k, nrhs] = 0.0


def prestep_uv_3d(tbx: Box, gbx: Box, uold: Field, vold: Field, u: Field,
                  v: Field, ru: Field, rv: Field, hz: Field, akv: Field,
                  pm: Field, pn: Field, dc: Field, fc: Field, z_r: Field,
                  sustr: Field, svstr: Field, bustr: Field, bvstr: Field,
                  iic: int, ntfirst: int, nnew: int, nstp: int, nrhs: int,
                  n: int, lam: float, dt_lev: float, ngrow: int) -> None:
    """Predict u and v on the tile grown by ``ngrow - 1`` horizontal cells."""
    tbxp1 = tbx.grow((ngrow - 1, ngrow - 1, 0))
    update_vel_3d(tbxp1, gbx, 1, 0, u, uold, ru, hz, akv, dc, fc,
                  sustr, bustr, z_r, pm, pn, iic, ntfirst, nnew, nstp, nrhs, n, lam, dt_lev)
    update_vel_3d(tbxp1, gbx, 0, 1, v, vold, rv, hz, akv, dc, fc,
                  svstr, bvstr, z_r, pm, pn, iic, ntfirst, nnew, nstp, nrhs, n, lam, dt_lev)