import pytest

from romsx.grid import AdvectionScheme, Box, Field, SolverChoice
from romsx.tracer_prestep import prestep_t_3d

N = 3
NGROW = 2
TBX = Box((0, 0, 0), (1, 1, N))
BIG = TBX.grow((NGROW + 2, NGROW + 2, 0))
GBX = TBX.grow((NGROW, NGROW, 0))


def _field(value=0.0, ncomp=1):
    return Field(BIG, ncomp, value)


def _state(tracer=5.0, thickness=2.0, huon_value=0.0, cache=None):
    s = {
        "tempold": _field(tracer, 2),
        "temp": _field(0.0, 2),
        "tempcache": _field(tracer if cache is None else cache),
        "ru": _field(0.0, 2),
        "hz": _field(thickness),
        "huon": _field(huon_value),
        "hvom": _field(0.0),
        "pm": _field(1.0),
        "pn": _field(1.0),
        "w": _field(),
        "dc": _field(),
        "fc": _field(),
        "tempstore": _field(),
        "z_r": _field(),
        "z_w": _field(),
        "h": _field(4.0),
    }
    for i, j, k in BIG.cells():
        s["z_r"][i, j, k] = float(k)
        s["z_w"][i, j, k] = float(k) - 3.0
    return s


def _run(s, solver, iic=0, ntfirst=0, gbx=GBX):
    prestep_t_3d(TBX, gbx, s["tempold"], s["temp"], s["tempcache"], s["ru"], s["hz"],
                 s["huon"], s["hvom"], s["pm"], s["pn"], s["w"], s["dc"], s["fc"],
                 s["tempstore"], s["z_r"], s["z_w"], s["h"], iic, ntfirst,
                 1, 0, 0, N, 1.0, 0.1, solver, NGROW)


SOLVERS = [
    SolverChoice(flat_bathymetry=False, hadv_scheme=AdvectionScheme.UPSTREAM3),
    SolverChoice(flat_bathymetry=False, hadv_scheme=AdvectionScheme.CENTERED4),
    SolverChoice(flat_bathymetry=True, hadv_scheme=AdvectionScheme.UPSTREAM3),
]


@pytest.mark.parametrize("solver", SOLVERS)
def test_uniform_tracer_at_rest_is_unchanged(solver):
    s = _state()
    _run(s, solver)
    for cell in TBX.cells():
        assert s["tempstore"][cell] == pytest.approx(5.0)


@pytest.mark.parametrize("solver", SOLVERS)
def test_uniform_tracer_in_uniform_flow_is_unchanged(solver):
    s = _state(huon_value=0.7)
    _run(s, solver)
    for cell in TBX.cells():
        assert s["tempstore"][cell] == pytest.approx(5.0)


def test_new_level_holds_thickness_weighted_tracer():
    s = _state(tracer=5.0, thickness=2.0)
    _run(s, SOLVERS[0])
    for i, j, k in TBX.cells():
        assert s["temp"][i, j, k, 1] == pytest.approx(5.0 * 2.0)


def test_vertical_velocity_vanishes_for_column_consistent_divergence():
    s = _state()
    for i, j, k in BIG.cells():
        s["huon"][i, j, k] = float(i)
    _run(s, SOLVERS[0])
    for cell in TBX.grow((NGROW - 1, NGROW - 1, 0)).cells():
        assert s["w"][cell] == pytest.approx(0.0, abs=1e-12)


def test_top_vertical_velocity_is_zero():
    s = _state()
    for i, j, k in BIG.cells():
        s["huon"][i, j, k] = float(i * i + k)
    _run(s, SOLVERS[1])
    for i, j, _ in TBX.grow((NGROW - 1, NGROW - 1, 0)).make_slab(2, 0).cells():
        assert s["w"][i, j, N] == 0.0


def test_later_step_blends_cached_tracer():
    s = _state(tracer=3.0, cache=6.0, thickness=1.0)
    _run(s, SOLVERS[0], iic=5, ntfirst=0)
    for cell in TBX.cells():
        assert s["tempstore"][cell] == pytest.approx(4.0)


def test_invalid_scheme_raises():
    s = _state()
    solver = SolverChoice(flat_bathymetry=False, hadv_scheme=None)
    with pytest.raises(ValueError):
        prestep_t_3d(TBX, GBX, s["tempold"], s["temp"], s["tempcache"], s["ru"], s["hz"],
                     s["huon"], s["hvom"], s["pm"], s["pn"], s["w"], s["dc"], s["fc"],
                     s["tempstore"], s["z_r"], s["z_w"], s["h"], 0, 0,
                     1, 0, 0, N, 1.0, 0.1, solver, NGROW)
    for cell in TBX.cells():
        assert s["tempstore"][cell] == 0.0


def test_flat_bathymetry_ignores_scheme():
    s = _state()
    solver = SolverChoice(flat_bathymetry=True, hadv_scheme=None)
    _run(s, solver)
    for cell in TBX.cells():
        assert s["tempstore"][cell] == pytest.approx(5.0)


def test_disjoint_grown_box_raises():
    s = _state()
    far = Box((50, 50, 0), (60, 60, N))
    with pytest.raises(ValueError):
        prestep_t_3d(TBX, far, s["tempold"], s["temp"], s["tempcache"], s["ru"], s["hz"],
                     s["huon"], s["hvom"], s["pm"], s["pn"], s["w"], s["dc"], s["fc"],
                     s["tempstore"], s["z_r"], s["z_w"], s["h"], 0, 0,
                     1, 0, 0, N, 1.0, 0.1, SOLVERS[0], NGROW)
    for cell in TBX.cells():
        assert s["tempstore"][cell] == 0.0
        assert s["w"][cell] == 0.0