import random

import pytest

from romsx.grid import AdvectionScheme, Box, Field, SolverChoice
from romsx.tracer_rhs import rhs_t_3d

N = 3
NGROW = 2
BX = Box((0, 0, 0), (3, 3, N))
WIDE = BX.grow((2, 2, 0))
GBX = BX.grow((1, 1, 0))
T_NEW = 5.0

ALL_SOLVERS = [
    SolverChoice(flat_bathymetry=flat, hadv_scheme=scheme)
    for flat in (False, True)
    for scheme in (AdvectionScheme.UPSTREAM3, AdvectionScheme.CENTERED4)
]


def make_field(fn, ncomp=1):
    f = Field(WIDE, ncomp)
    for cell in WIDE.cells():
        value = fn(*cell)
        for c in range(ncomp):
            f[cell + (c,)] = value
    return f


def run(solver=None, ts_fn=lambda i, j, k: 1.0, huon=0.0, hvom=0.0,
        w_fn=lambda i, j, k: 0.0, t0_fn=lambda i, j, k: 4.0,
        hz_fn=lambda i, j, k: 2.0, dt=0.1, gbx=GBX):
    solver = solver or SolverChoice()
    t = Field(WIDE, 2)
    for cell in WIDE.cells():
        t[cell + (0,)] = t0_fn(*cell)
        t[cell + (1,)] = T_NEW
    tempstore = make_field(ts_fn)
    hz = make_field(hz_fn)
    ohz = Field(WIDE)
    fc = Field(WIDE)
    rhs_t_3d(BX, gbx, t, tempstore, make_field(lambda *_: huon), make_field(lambda *_: hvom),
             hz, ohz, make_field(lambda *_: 1.0), make_field(lambda *_: 1.0),
             make_field(w_fn), fc, 0, 1, N, dt, solver, NGROW)
    return t, ohz, hz


@pytest.mark.parametrize("solver", ALL_SOLVERS)
def test_uniform_tracer_in_uniform_flow_is_unchanged(solver):
    t, _, _ = run(solver, ts_fn=lambda *_: 3.0, huon=0.3, hvom=-0.2)
    for cell in BX.cells():
        assert t[cell + (1,)] == pytest.approx(T_NEW)


def test_still_water_divides_by_thickness():
    t, ohz, _ = run()
    for cell in BX.cells():
        assert ohz[cell] == pytest.approx(0.5)
        assert t[cell + (0,)] == pytest.approx(2.0)


def test_vertical_advection_conserves_column_content():
    rng = random.Random(3)
    ts = {cell: rng.uniform(0.0, 2.0) for cell in WIDE.cells()}
    ws = {cell: rng.uniform(-1.0, 1.0) for cell in WIDE.cells()}
    hzs = {cell: rng.uniform(1.0, 3.0) for cell in WIDE.cells()}
    t0s = {cell: rng.uniform(0.0, 5.0) for cell in WIDE.cells()}
    t, _, hz = run(ts_fn=lambda *c: ts[c], w_fn=lambda *c: ws[c],
                   hz_fn=lambda *c: hzs[c], t0_fn=lambda *c: t0s[c])
    for i, j, _ in BX.make_slab(2, 0).cells():
        after = sum(hz[i, j, k] * t[i, j, k, 0] for k in range(N + 1))
        before = sum(t0s[(i, j, k)] for k in range(N + 1))
        assert after == pytest.approx(before)


def test_horizontal_tendency_scales_with_time_step():
    tracer = lambda i, j, k: 0.5 * i * i + 2.0 * j
    t1, _, _ = run(ts_fn=tracer, huon=0.3, hvom=0.4, dt=0.1)
    t2, _, _ = run(ts_fn=tracer, huon=0.3, hvom=0.4, dt=0.2)
    for cell in BX.cells():
        d1 = t1[cell + (1,)] - T_NEW
        d2 = t2[cell + (1,)] - T_NEW
        assert d2 == pytest.approx(2.0 * d1)


@pytest.mark.parametrize("solver", ALL_SOLVERS)
def test_schemes_agree_on_linear_tracer(solver):
    tracer = lambda i, j, k: i + 2.0 * j
    reference, _, _ = run(ts_fn=tracer, huon=0.3, hvom=0.4)
    t, _, _ = run(solver, ts_fn=tracer, huon=0.3, hvom=0.4)
    for i, j, k in BX.cells():
        if i <= 2 and j <= 2:
            assert t[i, j, k, 1] == pytest.approx(reference[i, j, k, 1])


def test_unknown_scheme_rejected():
    with pytest.raises(ValueError):
        run(SolverChoice(hadv_scheme="bogus"))


def test_tile_outside_grown_box_rejected():
    far = Box((40, 40, 0), (45, 45, N))
    with pytest.raises(ValueError):
        run(gbx=far)