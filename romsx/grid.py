"""Index boxes, cell-indexed fields and velocity/momentum conversion."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Union

import numpy as np

Index3 = tuple[int, int, int]


def _triple(amounts: Union[int, Sequence[int]]) -> Index3:
    if isinstance(amounts, int):
        return (amounts, amounts, amounts)
    values = tuple(int(a) for a in amounts)
    if len(values) != 3:
        raise ValueError(f"expected three values, got {len(values)}")
    return values  # type: ignore[return-value]


@dataclass(frozen=True)
class Box:
    """An inclusive range of integer cell indices in three dimensions."""

    lo: Index3
    hi: Index3

    def __post_init__(self) -> None:
        object.__setattr__(self, "lo", _triple(self.lo))
        object.__setattr__(self, "hi", _triple(self.hi))

    @property
    def size(self) -> Index3:
        """Number of cells along each direction."""
        return tuple(max(h - l + 1, 0) for l, h in zip(self.lo, self.hi))  # type: ignore[return-value]

    @property
    def is_empty(self) -> bool:
        return any(h < l for l, h in zip(self.lo, self.hi))

    def grow(self, amounts: Union[int, Sequence[int]]) -> "Box":
        """Return the box widened by ``amounts`` cells on both sides."""
        g = _triple(amounts)
        return Box(
            tuple(l - d for l, d in zip(self.lo, g)),
            tuple(h + d for h, d in zip(self.hi, g)),
        )

    def contains(self, i: int, j: int, k: int) -> bool:
        return all(l <= x <= h for l, x, h in zip(self.lo, (i, j, k), self.hi))

    def surrounding_nodes(self, direction: int) -> "Box":
        """Return the box of faces surrounding the cells along ``direction``."""
        hi = list(self.hi)
        hi[direction] += 1
        return Box(self.lo, tuple(hi))

    def make_slab(self, direction: int, index: int) -> "Box":
        """Return the box collapsed to a single plane ``index`` along ``direction``."""
        lo, hi = list(self.lo), list(self.hi)
        lo[direction] = hi[direction] = index
        return Box(tuple(lo), tuple(hi))

    def intersect(self, other: "Box") -> "Box":
        """Return the overlap of two boxes; raise ValueError if there is none."""
        result = Box(
            tuple(max(a, b) for a, b in zip(self.lo, other.lo)),
            tuple(min(a, b) for a, b in zip(self.hi, other.hi)),
        )
        if result.is_empty:
            raise ValueError(f"{self} and {other} do not intersect")
        return result

    def cells(self) -> Iterator[Index3]:
        """Yield every cell index, with i varying fastest and k slowest."""
        for k in range(self.lo[2], self.hi[2] + 1):
            for j in range(self.lo[1], self.hi[1] + 1):
                for i in range(self.lo[0], self.hi[0] + 1):
                    yield (i, j, k)


class Field:
    """Values stored on every cell of a box, with one or more components.

    Indexing uses the box's own coordinates: ``f[i, j, k]`` reads component 0
    and ``f[i, j, k, n]`` reads component ``n``.
    """

    def __init__(self, box: Box, ncomp: int = 1, value: float = 0.0) -> None:
        if ncomp < 1:
            raise ValueError("a field needs at least one component")
        self.box = box
        self.ncomp = ncomp
        self.data = np.full(box.size + (ncomp,), float(value), dtype=float)

    def _locate(self, key: tuple) -> tuple[int, int, int, int]:
        if not isinstance(key, tuple) or len(key) not in (3, 4):
            raise IndexError("index with (i, j, k) or (i, j, k, n)")
        i, j, k = (int(x) for x in key[:3])
        n = int(key[3]) if len(key) == 4 else 0
        if not self.box.contains(i, j, k):
            raise IndexError(f"({i}, {j}, {k}) lies outside {self.box}")
        if not 0 <= n < self.ncomp:
            raise IndexError(f"component {n} outside 0..{self.ncomp - 1}")
        lo = self.box.lo
        return (i - lo[0], j - lo[1], k - lo[2], n)

    def __getitem__(self, key: tuple) -> float:
        return float(self.data[self._locate(key)])

    def __setitem__(self, key: tuple, value: float) -> None:
        self.data[self._locate(key)] = value

    def fill(self, value: float) -> None:
        """Set every value of every component."""
        self.data.fill(value)

    def __repr__(self) -> str:
        return f"Field({self.box!r}, ncomp={self.ncomp})"


class AdvectionScheme(enum.Enum):
    UPSTREAM3 = "upstream3"
    CENTERED4 = "centered4"


@dataclass
class SolverChoice:
    """Run-time choices that select between numerical schemes."""

    flat_bathymetry: bool = False
    hadv_scheme: AdvectionScheme = field(default=AdvectionScheme.UPSTREAM3)


_SHIFTS: tuple[Index3, ...] = ((1, 0, 0), (0, 1, 0), (0, 0, 1))


def _face_density(cons: Field, i: int, j: int, k: int, direction: int, comp: int) -> float:
    di, dj, dk = _SHIFTS[direction]
    return 0.5 * (cons[i, j, k, comp] + cons[i - di, j - dj, k - dk, comp])


def velocity_to_momentum(xvel, yvel, zvel, cons, xbox, ybox, zbox, rho_comp=0):
    """Return face momenta (x, y, z) from face velocities and cell density.

    The vertical lower bound of each box is reset to zero.
    """
    result = []
    for direction, (vel, box) in enumerate(((xvel, xbox), (yvel, ybox), (zvel, zbox))):
        box = Box((box.lo[0], box.lo[1], 0), box.hi)
        mom = Field(box)
        for i, j, k in box.cells():
            mom[i, j, k] = vel[i, j, k] * _face_density(cons, i, j, k, direction, rho_comp)
        result.append(mom)
    return tuple(result)


def momentum_to_velocity(xmom, ymom, zmom, cons, xbox, ybox, zbox, rho_comp=0):
    """Return face velocities (x, y, z) from face momenta and cell density."""
    result = []
    for direction, (mom, box) in enumerate(((xmom, xbox), (ymom, ybox), (zmom, zbox))):
        vel = Field(box)
        for i, j, k in box.cells():
            vel[i, j, k] = mom[i, j, k] / _face_density(cons, i, j, k, direction, rho_comp)
        result.append(vel)
    return tuple(result)