from __future__ import annotations

import time
from dataclasses import dataclass
from multiprocessing import Pool

from numvolume.classifiers.bending import Bending, get_bending
from numvolume.classifiers.colors import (
    Axis,
    Color,
    ColorInfo,
    color_info,
    get_color_info,
    get_polarity_axis,
    is_colorless,
    is_transparent,
)
from numvolume.classifiers.waves import Split, WaveBreakdown, get_split, wave_breakdown
from numvolume.context import EngineCtx
from numvolume.runtime import debug, engine_ctx
from numvolume.utility import (
    ConfigurationError,
    factorize,
    is_prime_power,
    validate_dimension,
)

# ---------- Data models -------------------------------------------------------


@dataclass(frozen=True)
class ClassificationRecord:
    n: int
    dimension: int
    split: Split
    color: Color
    color_info: ColorInfo
    transparent: bool
    axis: Axis
    factors: dict[int, int]
    is_prime: bool
    is_prime_power: bool
    is_colorless: bool
    bending: Bending

    @property
    def magnitude(self) -> int:
        return abs(self.n)

    @property
    def L(self) -> int:
        return self.split.L

    @property
    def R(self) -> int:
        return self.split.R

    @property
    def label(self) -> str:
        return self.color.label

    @property
    def waves(self) -> list[WaveBreakdown]:
        return wave_breakdown(self.split)


# ---------- Main API ----------------------------------------------------------

def classify(n: int, dimension: int = 0, ctx: EngineCtx | None = None) -> ClassificationRecord:
    """
    Full classification of n in the given dimension.

    Raises ConfigurationError for a dimension outside 0..5 and OutOfRangeError
    when |n| is beyond the sieve of ctx (default: the active profile's MAX_N).
    Dimension affects only the split and the color.
    """
    d = validate_dimension(dimension)
    ctx = ctx or engine_ctx()
    m = ctx.check(abs(int(n)))

    color = get_color_info(n, d, ctx)
    return ClassificationRecord(
        n=int(n),
        dimension=d,
        split=get_split(n, d),
        color=color,
        color_info=color_info(color),
        transparent=is_transparent(n, ctx),
        axis=get_polarity_axis(n, ctx),
        factors=factorize(m),
        is_prime=ctx.is_prime[m],
        is_prime_power=is_prime_power(m),
        is_colorless=is_colorless(n, ctx),
        bending=get_bending(n),
    )


def range_members(min_n: int, max_n: int, include_negatives: bool = False) -> list[int]:
    """Integers of [min_n, max_n], plus -n for every positive member if requested; ascending."""
    members = set(range(min_n, max_n + 1))
    if include_negatives:
        members.update(-n for n in range(max(min_n, 1), max_n + 1))
    return sorted(members)


def _classify_chunk(numbers: list[int], dimension: int, ctx: EngineCtx) -> list[ClassificationRecord]:
    return [classify(n, dimension, ctx) for n in numbers]


def _partition(numbers: list[int], parts: int) -> list[list[int]]:
    size = -(-len(numbers) // parts)
    return [numbers[i:i + size] for i in range(0, len(numbers), size)]


def precompute_range(
    min_n: int,
    max_n: int,
    dimension: int = 0,
    include_negatives: bool = False,
    ctx: EngineCtx | None = None,
    workers: int = 1,
) -> list[ClassificationRecord]:
    """
    Classify every integer of [min_n, max_n] (and the negatives of its positive
    members when include_negatives), ordered by ascending n.

    workers > 1 splits the range over a process pool; each record is
    independent, so the result is the same as the serial run.
    """
    d = validate_dimension(dimension)
    if min_n > max_n:
        raise ConfigurationError(f"empty range: min_n ({min_n}) > max_n ({max_n}).")
    if workers < 1:
        raise ConfigurationError(f"workers must be >= 1, got {workers}.")
    ctx = ctx or engine_ctx()
    ctx.check(abs(min_n))
    ctx.check(abs(max_n))

    numbers = range_members(min_n, max_n, include_negatives)
    t0 = time.perf_counter()

    if workers == 1 or len(numbers) < 2 * workers:
        records = _classify_chunk(numbers, d, ctx)
    else:
        chunks = _partition(numbers, workers)
        with Pool(processes=workers) as pool:
            parts = pool.starmap(_classify_chunk, [(c, d, ctx) for c in chunks])
        records = [r for part in parts for r in part]

    dt = (time.perf_counter() - t0) * 1000.0
    debug(f"precomputed {len(records)} record(s) in {dt:.1f} ms "
          f"(dimension={d}, negatives={include_negatives}, workers={workers})")
    return records


# ---------- Cache -------------------------------------------------------------

class RecordCache:
    """
    One precomputed table for the active (dimension, include_negatives).

    Asking for another configuration rebuilds the table and drops the old one.
    """

    def __init__(self, ctx: EngineCtx | None = None, workers: int = 1):
        self.ctx = ctx or engine_ctx()
        self.workers = workers
        self._key: tuple[int, bool] | None = None
        self._records: list[ClassificationRecord] = []
        self._by_n: dict[int, ClassificationRecord] = {}
        self.rebuilds = 0

    @property
    def key(self) -> tuple[int, bool] | None:
        return self._key

    def records(self, dimension: int = 0, include_negatives: bool = False) -> list[ClassificationRecord]:
        key = (validate_dimension(dimension), bool(include_negatives))
        if key != self._key:
            self._records = precompute_range(
                0, self.ctx.max_n, key[0], key[1], ctx=self.ctx, workers=self.workers,
            )
            self._by_n = {r.n: r for r in self._records}
            self._key = key
            self.rebuilds += 1
            debug(f"record cache rebuilt for dimension={key[0]}, negatives={key[1]}")
        return self._records

    def lookup(self, n: int, dimension: int = 0, include_negatives: bool = False) -> ClassificationRecord:
        self.records(dimension, include_negatives)
        rec = self._by_n.get(n)
        if rec is None:
            # outside the cached table (e.g. a negative with negatives off)
            return classify(n, dimension, self.ctx)
        return rec

    def clear(self) -> None:
        self._key = None
        self._records = []
        self._by_n = {}
