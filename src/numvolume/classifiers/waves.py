# -----------------------------------------------------------------------------
#  waves.py
#  Triangle waves over periods 2, 3, 5, 7 and the 17-split
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple

from numvolume.utility import validate_dimension

WAVES = (2, 3, 5, 7)               # sum = 17
SPLIT_TOTAL = sum(WAVES)


class Dimension(IntEnum):
    """Six reference frames; 3..5 are the inverses of 0..2."""
    POS_0 = 0
    POS_1 = 1
    POS_2 = 2
    INV_0 = 3
    INV_1 = 4
    INV_2 = 5

    @property
    def inverse(self) -> bool:
        return self >= Dimension.INV_0

    @property
    def title(self) -> str:
        return f"{'Inv' if self.inverse else 'Pos'} {self % 3}"


# Anchor offset of the 2-beat per dimension: 0: 17|0, 1: 16|1, 2: 15|2, 3: 0|17, 4: 1|16, 5: 2|15
DIMENSION_OFFSETS: tuple[int, ...] = (2, 1, 0, -2, -1, 0)


class SplitPair(NamedTuple):
    L: int
    R: int


class WaveBreakdown(NamedTuple):
    k: int
    left: int
    right: int


@dataclass(frozen=True)
class Split:
    L: int
    R: int
    base_l: int
    w2: int
    w3: int
    w5: int
    w7: int
    orthogonal: tuple[SplitPair, ...]

    @property
    def pair(self) -> SplitPair:
        return SplitPair(self.L, self.R)


def wave_left(n: int, k: int) -> int:
    """Triangle wave of period 2k: left value of n in [0, k]."""
    if k <= 0:
        raise ValueError(f"wave size must be positive, got {k}")
    period = 2 * k
    m = abs(n) % period
    return k - min(m, period - m)


def _orthogonal(L: int, R: int) -> tuple[SplitPair, ...]:
    # Entries 1, 2 clamp each side on its own at the 0 and 17 walls.
    pos = (
        SplitPair(L, R),
        SplitPair(max(0, L - 1), min(SPLIT_TOTAL, R + 1)),
        SplitPair(max(0, L - 2), min(SPLIT_TOTAL, R + 2)),
    )
    return pos + tuple(SplitPair(p.R, p.L) for p in pos)


def get_split(n: int, dimension: int = 0) -> Split:
    """
    17-split of n in the given dimension.

    base_l = w3 + w5 + w7 is dimension independent; the dimension only moves
    the 2-wave anchor, and dimensions 3..5 read the split from the other side.
    """
    d = validate_dimension(dimension)
    w2, w3, w5, w7 = (wave_left(n, k) for k in WAVES)
    base_l = w3 + w5 + w7
    off = DIMENSION_OFFSETS[d]

    if d < Dimension.INV_0:
        L = base_l + off
    else:
        L = SPLIT_TOTAL - (base_l + abs(off))
    R = SPLIT_TOTAL - L

    return Split(L=L, R=R, base_l=base_l, w2=w2, w3=w3, w5=w5, w7=w7,
                 orthogonal=_orthogonal(L, R))


def wave_breakdown(split: Split) -> list[WaveBreakdown]:
    lefts = (split.w2, split.w3, split.w5, split.w7)
    return [WaveBreakdown(k, left, k - left) for k, left in zip(WAVES, lefts)]


def wave_curve(k: int, periods: int = 3) -> list[int]:
    """Sampled heights of the k-wave over `periods` full periods (one sample per step)."""
    period = 2 * k
    steps = period * periods
    return [k - min(i % period, period - i % period) for i in range(steps + 1)]


def orthogonal_name(i: int) -> str:
    return f"Pos {i}" if i < 3 else f"Neg {i - 3}"


def orthogonal_direction(pair: SplitPair) -> str:
    if pair.L > pair.R:
        return "RIGHT"
    if pair.R > pair.L:
        return "LEFT"
    return "CENTER"


def dimension_preview() -> list[tuple[Dimension, SplitPair]]:
    """Split of 0 in every dimension, i.e. where each frame anchors the 2-beat."""
    return [(d, get_split(0, d).pair) for d in Dimension]
