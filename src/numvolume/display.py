# src/numvolume/display.py
from __future__ import annotations

from collections.abc import Sequence

from colorama import Fore, Style

from numvolume import __version__
from numvolume.classifiers.bending import CYCLE
from numvolume.classifiers.colors import COLOR_MAP, Color
from numvolume.classifiers.waves import (
    SPLIT_TOTAL,
    WAVES,
    Dimension,
    dimension_preview,
    orthogonal_direction,
    orthogonal_name,
    wave_curve,
)
from numvolume.classify import ClassificationRecord
from numvolume.fmt import bar, format_factorization, format_split, pad_visible, sparkline
from numvolume.grid import Page
from numvolume.runtime import CFG
from numvolume.utility import get_terminal_width

# Nearest terminal rendering of each palette entry
COLOR_STYLES: dict[Color, str] = {
    Color.ZERO:         Style.DIM + Fore.WHITE,
    Color.ONE:          Style.DIM + Fore.WHITE,
    Color.PRIME:        Fore.WHITE,
    Color.PRIME_POW:    Style.DIM + Fore.CYAN,
    Color.COLORLESS:    Style.DIM + Fore.BLACK,
    Color.BLUE:         Style.BRIGHT + Fore.BLUE,
    Color.YELLOW:       Style.BRIGHT + Fore.YELLOW,
    Color.RED:          Style.BRIGHT + Fore.RED,
    Color.GREEN:        Style.BRIGHT + Fore.GREEN,
    Color.PURPLE:       Style.BRIGHT + Fore.MAGENTA,
    Color.ORANGE:       Fore.LIGHTRED_EX,
    Color.BROWN:        Fore.RED,
    Color.SILVER:       Fore.LIGHTWHITE_EX,
    Color.GOLD:         Style.BRIGHT + Fore.LIGHTYELLOW_EX,
    Color.GOLDEN_BROWN: Fore.YELLOW,
    Color.COMPOSITE:    Style.DIM + Fore.LIGHTBLACK_EX,
}

ALIGN_WIDTH = 22  # label column
CELL_WIDTH = 12


def _use_color() -> bool:
    return bool(CFG("DISPLAY.USE_COLOR", True))


def paint(text: str, color: Color, *, transparent: bool = False) -> str:
    """Wrap text in the color's terminal style; transparent numbers are drawn dim."""
    if not _use_color():
        return text
    style = COLOR_STYLES[color]
    if transparent:
        style = Style.DIM + style.replace(Style.BRIGHT, "")
    return f"{style}{text}{Style.RESET_ALL}"


def _hl(text: str, style: str = Fore.YELLOW + Style.BRIGHT) -> str:
    return f"{style}{text}{Style.RESET_ALL}" if _use_color() else text


def _row(label: str, value: str) -> None:
    print(f"  {label + ':':<{ALIGN_WIDTH}}{value}")


# ---------- Detail view -------------------------------------------------------

def print_detail(rec: ClassificationRecord) -> None:
    """Everything known about one integer: split, waves, factors, axis, bending."""
    periods = int(CFG("DISPLAY.WAVE_PERIODS", 3))
    dim = Dimension(rec.dimension)
    title = paint(f" {rec.n} ", rec.color, transparent=False)

    print()
    print(f"{_hl('Number')} {title}  " + _hl(f"dimension {rec.dimension} ({dim.title})", Style.DIM))
    _row("Color", paint(rec.label, rec.color))
    ci = rec.color_info
    _row("Palette", f"bg {ci.bg}, text {ci.text}" + (f", glow {ci.glow}" if ci.glow else ""))
    _row("Visibility", "TRANSPARENT" if rec.transparent else "OPAQUE")
    _row("Polarity axis", rec.axis.value)
    _row("17-split", f"{format_split(rec.L, rec.R)}  [{bar(rec.L / SPLIT_TOTAL, SPLIT_TOTAL)}]")
    _row("Base L (3+5+7)", str(rec.split.base_l))

    # orthogonal views
    print(f"\n  {_hl('Orthogonal views')}")
    for i, pair in enumerate(rec.split.orthogonal):
        print(f"    {orthogonal_name(i):<6} {format_split(pair.L, pair.R):>6}  {orthogonal_direction(pair)}")

    # wave breakdown
    print(f"\n  {_hl('Waves')}  ({'+'.join(map(str, WAVES))}={SPLIT_TOTAL})")
    for w in rec.waves:
        period = 2 * w.k
        curve = wave_curve(w.k, periods)
        line = sparkline(curve, w.k)
        # marker sits in the middle period, as in the plotted curve
        pos = rec.magnitude % period + (period if periods > 1 else 0)
        if _use_color() and pos < len(line):
            line = line[:pos] + paint(line[pos], rec.color) + line[pos + 1:]
        print(f"    k={w.k}  L {w.left} | R {w.right}   {line}")

    # number theory
    print(f"\n  {_hl('Factors')}")
    if rec.factors:
        sign = "-1 × " if rec.n < 0 else ""
        _row("Prime factorization", sign + format_factorization(rec.factors))
    else:
        _row("Prime factorization", "none (|n| < 2)")
    _row("Prime", "Yes" if rec.is_prime else "No")
    _row("Prime power", "Yes" if rec.is_prime_power else "No")
    _row("Colorless rule", "Yes" if rec.is_colorless else "No")

    # prime bending
    b = rec.bending
    print(f"\n  {_hl(f'Prime bending ({CYCLE} cycle)')}")
    _row("Cycle position", str(b.cycle_pos))
    _row("Counterpart", str(b.counterpart))
    if b.is_quad_anchor:
        _row("Quad anchor", _hl(f"{b.cycle_pos} | {b.pair}", Fore.CYAN + Style.BRIGHT))
    else:
        _row("Quad anchor", "No")


# ---------- Grid --------------------------------------------------------------

def _cell(rec: ClassificationRecord) -> str:
    text = f"{rec.n:>5} {format_split(rec.L, rec.R):<5}"
    return paint(text, rec.color, transparent=rec.transparent)


def print_grid(page: Page, cols: int | None = None) -> None:
    cols = cols or int(CFG("DISPLAY.GRID_COLS", 14))
    fit = max(1, get_terminal_width() // (CELL_WIDTH + 1))
    cols = max(1, min(cols, fit))
    if not page.items:
        print("  (no numbers match the current filters)")
        return
    for i in range(0, len(page.items), cols):
        row = page.items[i:i + cols]
        print(" ".join(pad_visible(_cell(r), CELL_WIDTH) for r in row))


def print_split_distribution(counts: Sequence[int], selected: int | None = None, width: int = 30) -> None:
    top = max(counts) if counts else 0
    print(f"  {_hl('Split distribution')}")
    for L, cnt in enumerate(counts):
        frac = cnt / top if top else 0.0
        mark = "◀" if selected == L else " "
        print(f"    {format_split(L, SPLIT_TOTAL - L):>5} {bar(frac, width)} {cnt:>5} {mark}")


def print_legend(selected: str = "all") -> None:
    print(f"  {_hl('Legend')}")
    for color, ci in COLOR_MAP.items():
        if color in (Color.ZERO, Color.ONE):
            continue
        mark = " ◀" if selected == ci.label.lower() else ""
        print(f"    {paint('■■', color)} {ci.label:<13} {ci.bg}{mark}")


def print_dimensions(active: int = 0) -> None:
    print(f"  {_hl('Dimensions')}")
    for dim, pair in dimension_preview():
        mark = " ◀" if dim == active else ""
        print(f"    D{int(dim)}  {dim.title:<6} {format_split(pair.L, pair.R):>6}{mark}")


def print_header(*, dimension: int, include_negatives: bool, max_n: int,
                 color: str, split: int | None, page: Page) -> None:
    rng = f"±{max_n}" if include_negatives else f"0–{max_n}"
    waves = "+".join(map(str, WAVES))
    split_s = "all" if split is None else format_split(split, SPLIT_TOTAL - split)
    print(f"{_hl(f'Number Volume Space v{__version__}')}  {rng} • WAVES {waves}={SPLIT_TOTAL}")
    print(f"  D{dimension} ({Dimension(dimension).title}) • color: {color} • split: {split_s} "
          f"• page {page.display}")


def show_help() -> None:
    lines = [
        "Commands:",
        "  <integer>          show the detail view of that integer",
        "  g, grid            show the current grid page",
        "  n / p              next / previous page",
        "  d <0-5>            switch dimension",
        "  neg on|off         include negative numbers",
        "  color <label|all>  filter by color label",
        "  split <0-17|off>   filter by split L",
        "  legend, dims       show the color legend / dimension navigator",
        "  debug on|off       toggle debug output",
        "  h, help            this help",
        "  q, quit            leave",
    ]
    print("\n".join(lines))
