# -----------------------------------------------------------------------------
#  bending.py
#  Prime bending over the 210 (= 2·3·5·7) cycle
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import NamedTuple

CYCLE = 210

# 11/199, 13/197, 17/193, 19/191
QUAD_ANCHORS = frozenset({11, 13, 17, 19, 191, 193, 197, 199})


class Bending(NamedTuple):
    cycle_pos: int
    counterpart: int
    is_quad_anchor: bool
    pair: int | None          # 210 - cycle_pos for a quad anchor, else None


def get_bending(n: int) -> Bending:
    pos = abs(n) % CYCLE
    anchor = pos in QUAD_ANCHORS
    return Bending(
        cycle_pos=pos,
        counterpart=(CYCLE - pos) % CYCLE,
        is_quad_anchor=anchor,
        pair=(CYCLE - pos) if anchor else None,
    )
