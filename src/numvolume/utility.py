# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import os
import shutil
import sys
from functools import lru_cache
from math import isqrt

from numvolume.context import EngineCtx


class UserInputError(Exception):
    pass


class ConfigurationError(UserInputError):
    """Invalid dimension, MAX_N or profile value; raised before any computation."""


class OutOfRangeError(UserInputError):
    """Magnitude beyond the sieve built for the active MAX_N."""


# ---- Sieve tables ------------------------------------------------------------

@lru_cache(maxsize=16, typed=True)
def build_ctx(max_n: int) -> EngineCtx:
    """
    Build the Eratosthenes sieve and the prime-count prefix table for 0..max_n.

    Cached per max_n, so contexts for different ranges can live side by side.
    """
    if isinstance(max_n, bool) or not isinstance(max_n, int):
        raise ConfigurationError(f"MAX_N must be an integer, got {max_n!r}.")
    if max_n < 0:
        raise ConfigurationError(f"MAX_N must be >= 0, got {max_n}.")

    sieve = bytearray([1]) * (max_n + 1)
    sieve[0] = 0
    if max_n >= 1:
        sieve[1] = 0
    for i in range(2, isqrt(max_n) + 1):
        if sieve[i]:
            sieve[i * i::i] = bytes(len(range(i * i, max_n + 1, i)))

    is_prime = tuple(bool(b) for b in sieve)
    counts: list[int] = []
    running = 0
    for flag in is_prime:
        running += flag
        counts.append(running)

    return EngineCtx(max_n=max_n, is_prime=is_prime, prime_count=tuple(counts))


# ---- Factorization -----------------------------------------------------------

def factorize(n: int) -> dict[int, int]:
    """Trial-division factorization of |n| into {prime: exponent}; {} for |n| < 2."""
    m = abs(int(n))
    fac: dict[int, int] = {}
    if m < 2:
        return fac
    p = 2
    while p * p <= m:
        while m % p == 0:
            fac[p] = fac.get(p, 0) + 1
            m //= p
        p += 1
    if m > 1:
        fac[m] = fac.get(m, 0) + 1
    return fac


def is_prime_power(magnitude: int) -> bool:
    """True iff magnitude == p**k for its smallest prime divisor p (k >= 1)."""
    m = abs(int(magnitude))
    if m < 2:
        return False
    # smallest divisor > 1 is always prime
    p = next((d for d in range(2, isqrt(m) + 1) if m % d == 0), m)
    while m % p == 0:
        m //= p
    return m == 1


def total_exponent(fac: dict[int, int]) -> int:
    return sum(fac.values())


# ---- Validation --------------------------------------------------------------

DIMENSIONS = range(6)


def validate_dimension(dimension: object) -> int:
    """Return dimension as int, or raise ConfigurationError outside 0..5."""
    if isinstance(dimension, bool) or not isinstance(dimension, int):
        raise ConfigurationError(f"dimension must be an integer in 0..5, got {dimension!r}.")
    if dimension not in DIMENSIONS:
        raise ConfigurationError(f"dimension must be in 0..5, got {dimension}.")
    return int(dimension)


def parse_int(text: str) -> int | None:
    """Parse a plain integer (underscores and a leading sign allowed); None if not numeric."""
    s = text.strip().replace("_", "")
    if not s:
        return None
    body = s[1:] if s[0] in "+-" else s
    if not body.isdigit():
        return None
    return int(s)


# ---- Terminal ----------------------------------------------------------------

def get_terminal_width(default=80):
    """
    Return the terminal's character width if detected, else the default
    value (80 by default).
    """
    try:
        return shutil.get_terminal_size().columns
    except Exception:
        return default


def clear_screen() -> None:
    try:
        if os.name == "nt":
            os.system("cls")
        else:
            sys.stdout.write("\033[H\033[2J")
            sys.stdout.flush()
    except OSError:
        pass


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    out: dict[str, object] = {}
    for k, v in d.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
