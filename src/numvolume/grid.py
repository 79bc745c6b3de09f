# src/numvolume/grid.py
"""
Grid views over precomputed records: color/split filters, pagination and the
split distribution shown above the grid.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from numvolume.classifiers.colors import COLOR_FILTER_OPTIONS
from numvolume.classifiers.waves import SPLIT_TOTAL
from numvolume.classify import ClassificationRecord
from numvolume.utility import UserInputError

GRID_COLS = 14
PAGE_SIZE = GRID_COLS * 10


@dataclass(frozen=True)
class Page:
    items: list[ClassificationRecord]
    page: int           # 0-based, already clamped
    total_pages: int    # 0 for an empty selection

    @property
    def display(self) -> str:
        return f"{self.page + 1}/{self.total_pages or 1}"

    @property
    def has_prev(self) -> bool:
        return self.page > 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages - 1


def normalize_color_filter(color: str | None) -> str:
    c = (color or "all").strip().lower()
    if c not in COLOR_FILTER_OPTIONS:
        raise UserInputError(
            f"Unknown color '{color}'. Choose one of: {', '.join(COLOR_FILTER_OPTIONS)}."
        )
    return c


def normalize_split_filter(split: int | None) -> int | None:
    if split is None:
        return None
    if isinstance(split, bool) or not isinstance(split, int) or not 0 <= split <= SPLIT_TOTAL:
        raise UserInputError(f"Split filter must be an integer in 0..{SPLIT_TOTAL}, got {split!r}.")
    return split


def filter_records(
    records: Sequence[ClassificationRecord],
    color: str | None = "all",
    split: int | None = None,
) -> list[ClassificationRecord]:
    want_color = normalize_color_filter(color)
    want_split = normalize_split_filter(split)
    out = list(records)
    if want_color != "all":
        out = [r for r in out if r.label.lower() == want_color]
    if want_split is not None:
        out = [r for r in out if r.L == want_split]
    return out


def paginate(records: Sequence[ClassificationRecord], page: int = 0, page_size: int = PAGE_SIZE) -> Page:
    if page_size < 1:
        raise UserInputError(f"page size must be >= 1, got {page_size}.")
    total = -(-len(records) // page_size)
    page = min(max(page, 0), max(total - 1, 0))
    start = page * page_size
    return Page(items=list(records[start:start + page_size]), page=page, total_pages=total)


def split_distribution(records: Sequence[ClassificationRecord]) -> list[int]:
    """Count of records per L in 0..17."""
    counts = [0] * (SPLIT_TOTAL + 1)
    for r in records:
        counts[r.L] += 1
    return counts
