# -----------------------------------------------------------------------------
#  colors.py
#  Transparency, polarity axis and the 16-label color taxonomy
# -----------------------------------------------------------------------------

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

from numvolume.context import EngineCtx
from numvolume.utility import factorize, is_prime_power, total_exponent, validate_dimension

SINGLE_DIGIT_PRIMES = frozenset({2, 3, 5, 7})


class Color(Enum):
    ZERO = "Zero"
    ONE = "One"
    PRIME = "Prime"
    PRIME_POW = "PrimePow"
    COLORLESS = "Colorless"
    # base colors (2, 3, 7)
    BLUE = "Blue"
    YELLOW = "Yellow"
    RED = "Red"
    # combinations
    GREEN = "Green"
    PURPLE = "Purple"
    ORANGE = "Orange"
    BROWN = "Brown"
    # 5-based
    SILVER = "Silver"
    GOLD = "Gold"
    GOLDEN_BROWN = "Golden Brown"
    COMPOSITE = "Composite"

    @property
    def label(self) -> str:
        return self.value


class ColorInfo(NamedTuple):
    label: str
    bg: str
    text: str
    glow: str


COLOR_MAP: dict[Color, ColorInfo] = {
    Color.ZERO:         ColorInfo("Zero", "#0D0D1A", "#4A4A6A", ""),
    Color.ONE:          ColorInfo("One", "#0F0F1F", "#3A3A5A", ""),
    Color.PRIME:        ColorInfo("Prime", "#0A0A12", "#5A5A72", "rgba(150,150,200,0.15)"),
    Color.PRIME_POW:    ColorInfo("PrimePow", "#0C0C18", "#4A4A62", "rgba(120,120,180,0.1)"),
    Color.COLORLESS:    ColorInfo("Colorless", "#08080C", "#3A3A4A", ""),
    Color.BLUE:         ColorInfo("Blue", "#001E48", "#60B4FF", "rgba(60,140,255,0.4)"),
    Color.YELLOW:       ColorInfo("Yellow", "#3A2F00", "#FFE040", "rgba(255,220,0,0.4)"),
    Color.RED:          ColorInfo("Red", "#3A0008", "#FF7080", "rgba(255,60,80,0.4)"),
    Color.GREEN:        ColorInfo("Green", "#003D20", "#80FFB0", "rgba(0,255,100,0.3)"),      # 2 & 3
    Color.PURPLE:       ColorInfo("Purple", "#25004A", "#D090FF", "rgba(160,80,255,0.35)"),   # 2 & 7
    Color.ORANGE:       ColorInfo("Orange", "#4A2000", "#FFAA60", "rgba(255,140,0,0.35)"),    # 3 & 7
    Color.BROWN:        ColorInfo("Brown", "#3E1A0A", "#D7A080", "rgba(180,100,40,0.3)"),     # 2 & 3 & 7
    Color.SILVER:       ColorInfo("Silver", "#404050", "#D0D0E0", "rgba(192,192,220,0.25)"),  # 5
    Color.GOLD:         ColorInfo("Gold", "#7A6000", "#FFE57F", "rgba(255,215,0,0.4)"),       # 2 & 5
    Color.GOLDEN_BROWN: ColorInfo("Golden Brown", "#7C5800", "#FFE082", "rgba(255,200,0,0.3)"),  # 2, 3, 5, 7
    Color.COMPOSITE:    ColorInfo("Composite", "#141420", "#606080", ""),
}

# (c2, c3, c7) per dimension
COLOR_SHIFTS: tuple[tuple[Color, Color, Color], ...] = (
    (Color.BLUE, Color.YELLOW, Color.RED),
    (Color.YELLOW, Color.RED, Color.BLUE),
    (Color.RED, Color.BLUE, Color.YELLOW),
    (Color.BLUE, Color.RED, Color.YELLOW),
    (Color.YELLOW, Color.BLUE, Color.RED),
    (Color.RED, Color.YELLOW, Color.BLUE),
)

COLOR_FILTER_OPTIONS: tuple[str, ...] = ("all",) + tuple(
    c.label.lower() for c in Color if c not in (Color.ZERO, Color.ONE)
)


class Axis(Enum):
    ORIGIN = "ORIGIN"
    TOP = "TOP (T)"
    BOTTOM = "BOTTOM (O)"
    RIGHT_POS = "RIGHT+ (T)"
    LEFT_POS = "LEFT+ (O)"
    LEFT_NEG = "LEFT− (T)"
    RIGHT_NEG = "RIGHT− (O)"


def color_info(color: Color) -> ColorInfo:
    return COLOR_MAP[color]


def color_from_label(label: str) -> Color:
    """Case-insensitive label lookup ('golden brown' -> Color.GOLDEN_BROWN)."""
    want = label.strip().lower()
    for c in Color:
        if c.label.lower() == want:
            return c
    raise KeyError(label)


def is_transparent(n: int, ctx: EngineCtx) -> bool:
    """Odd count of primes up to |n| (and |n| > 1)."""
    m = ctx.check(abs(n))
    return m > 1 and ctx.pi(m) % 2 == 1


def get_polarity_axis(n: int, ctx: EngineCtx) -> Axis:
    m = abs(n)
    if m == 0:
        return Axis.ORIGIN
    t = is_transparent(m, ctx)
    if m % 2 == 0:
        return Axis.TOP if t else Axis.BOTTOM
    if n >= 0:
        return Axis.RIGHT_POS if t else Axis.LEFT_POS
    return Axis.LEFT_NEG if t else Axis.RIGHT_NEG


def is_colorless(n: int, ctx: EngineCtx) -> bool:
    """
    Odd composites only:
      * p**q with q prime: colorless for odd q, not for q == 2
      * p*r with two distinct primes: colorless
      * anything else: not colorless
    Pinned as-is; do not reduce to a cleaner primality rule.
    """
    m = ctx.check(abs(n))
    if m < 2 or ctx.is_prime[m]:
        return False
    if m in SINGLE_DIGIT_PRIMES:
        return False
    # even numbers are exempt
    if m % 2 == 0:
        return False

    fac = factorize(m)
    keys = list(fac)

    if len(keys) == 1:
        q = fac[keys[0]]
        q_prime = ctx.prime(q)
        if q_prime and q % 2 == 0:
            return False
        if q_prime and q % 2 != 0:
            return True

    return total_exponent(fac) == 2 and len(keys) == 2


def get_color_info(n: int, dimension: int, ctx: EngineCtx) -> Color:
    """
    First match wins: 2·3·5·7, 2·5, 5, the {2,3,7} combinations (mirrored for
    negatives), bare 2/3/7, colorless, prime, prime power, composite.

    The dimension only rotates which base color plays c2, c3 and c7; it never
    changes which numbers end up grouped together.
    """
    d = validate_dimension(dimension)
    m = ctx.check(abs(n))
    neg = n < 0

    if m == 0:
        return Color.ZERO
    if m == 1:
        return Color.ONE

    c2, c3, c7 = COLOR_SHIFTS[d]

    if m % 2 == 0 and m % 3 == 0 and m % 5 == 0 and m % 7 == 0:
        return Color.GOLDEN_BROWN
    if m % 2 == 0 and m % 5 == 0:
        return Color.GOLD
    if m % 5 == 0:
        return Color.SILVER

    b2, b3, b7 = m % 2 == 0, m % 3 == 0, m % 7 == 0

    # A lone factor of 2, 3 or 7 does not color a number; only combinations do.
    if b2 and b3 and b7:
        return Color.BROWN
    if neg:
        # each pair takes the color of the factor it lacks
        if b3 and b7:
            return c2
        if b2 and b3:
            return c7
        if b2 and b7:
            return c3
    else:
        if b3 and b7:
            return Color.ORANGE
        if b2 and b3:
            return Color.GREEN
        if b2 and b7:
            return Color.PURPLE

    if m == 2:
        return c2
    if m == 3:
        return c3
    if m == 7:
        return c7

    if is_colorless(n, ctx):
        return Color.COLORLESS
    if ctx.is_prime[m]:
        return Color.PRIME
    if is_prime_power(m):
        return Color.PRIME_POW

    return Color.COMPOSITE
