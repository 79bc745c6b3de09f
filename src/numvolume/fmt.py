# src/numvolume/fmt.py
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

BLOCKS = "▁▂▃▄▅▆▇█"


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def visible_len(s: str | None) -> int:
    """Printable length (without ANSI)."""
    return len(strip_ansi(s))


def pad_visible(s: str, width: int) -> str:
    """Left-align s to `width` printable columns, ignoring ANSI codes."""
    return s + " " * max(0, width - visible_len(s))


def format_factorization(fac: Mapping[int, int]) -> str:
    """
    Turn {p: e, ...} into a tidy string like: 2^3 × 3 × 5^2
    """
    parts: list[str] = []
    for p, e in sorted(fac.items()):
        parts.append(f"{p}^{e}" if e > 1 else f"{p}")
    return " × ".join(parts) if parts else "1"


def format_split(L: int, R: int) -> str:
    return f"{L}|{R}"


def sparkline(values: Sequence[int], top: int) -> str:
    """Map 0..top onto the eight block glyphs."""
    if top <= 0:
        return BLOCKS[0] * len(values)
    last = len(BLOCKS) - 1
    return "".join(BLOCKS[round(v * last / top)] for v in values)


def bar(frac: float, width: int, fill: str = "█", empty: str = "·") -> str:
    frac = min(max(frac, 0.0), 1.0)
    n = round(frac * width)
    return fill * n + empty * (width - n)
