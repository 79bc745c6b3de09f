# src/numvolume/cli.py

"""
Number Volume Space - 17-split, color taxonomy and prime bending

Description:
    Classifies integers in a bounded range along the 2+3+5+7 = 17 wave split,
    a divisibility based color taxonomy, a polarity axis and the 210-cycle
    prime bending relation. Shows a single number in detail or pages through
    the colored grid.

usage: see numvolume -h
"""

from __future__ import annotations

import argparse
import faulthandler
import sys
import textwrap
import traceback
from dataclasses import dataclass

from colorama import Fore, Style
from colorama import init as colorama_init

from numvolume import __version__ as _ver
from numvolume import config as CONFIG
from numvolume.classify import RecordCache, classify
from numvolume.display import (
    print_detail,
    print_dimensions,
    print_grid,
    print_header,
    print_legend,
    print_split_distribution,
    show_help,
)
from numvolume.grid import (
    filter_records,
    normalize_color_filter,
    normalize_split_filter,
    paginate,
    split_distribution,
)
from numvolume.runtime import APPLY, CFG, debug, engine_ctx
from numvolume.runtime import current as _rt_current
from numvolume.utility import (
    UserInputError,
    clear_screen,
    flatten_dotted,
    parse_int,
    typename,
    validate_dimension,
)

COMMANDS = ("grid", "legend", "dims", "profiles")


@dataclass
class ViewState:
    """Grid selection carried between prompt-loop commands."""
    dimension: int = 0
    include_negatives: bool = False
    color: str = "all"
    split: int | None = None
    page: int = 0


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not (msg.startswith("Invalid input:") or msg.startswith("Error:")):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _install_loud_error_handlers(debug_on: bool) -> None:
    if not debug_on:
        return
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      grid
          Show one page of the colored grid with the split distribution.
      legend
          Show the color legend.
      dims
          Show the six dimensions and where each anchors the 2-beat.
      profiles
          List the packaged profiles.

    Without an integer or command an interactive prompt is started.
    """)

    p = argparse.ArgumentParser(
        prog="numvolume",
        description="Number Volume Space — 17-split, color taxonomy & prime bending",
        usage=(
            "numvolume [integer | command] [--dimension D] [--neg] [--color C] [--split L] [--page P]\n"
            "                 [--profile NAME|PATH] [--max-n N] [--workers W] [--no-color] [--debug]\n"
            "       numvolume -h | --help\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="integer|command",
                   help="an integer to classify, or one of: " + ", ".join(COMMANDS))
    p.add_argument("-d", "--dimension", type=int, default=None, help="reference frame 0..5")
    p.add_argument("--neg", action="store_true", default=None, help="include negative numbers in the grid")
    p.add_argument("--color", default="all", help="grid filter: color label or 'all'")
    p.add_argument("--split", type=int, default=None, help="grid filter: split L in 0..17")
    p.add_argument("--page", type=int, default=1, help="grid page (1-based)")
    p.add_argument("--profile", default=None, help="packaged profile name or path to a TOML profile")
    p.add_argument("--max-n", type=int, default=None, help="override ENGINE.MAX_N")
    p.add_argument("--workers", type=int, default=None, help="processes used to precompute the grid")
    p.add_argument("--no-color", action="store_true", help="plain output without ANSI colors")
    p.add_argument("--debug", action="store_true", help="show timings and internal trace info")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug_on = "--debug" in (argv if argv is not None else sys.argv)
        if debug_on:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _apply_profile(args) -> None:
    """Load the profile, layer the CLI overrides on top and install it."""
    settings = CONFIG.load_settings(args.profile or "default")
    data = settings.data
    if args.max_n is not None:
        data["ENGINE"]["MAX_N"] = args.max_n
    if args.dimension is not None:
        data["ENGINE"]["DIMENSION"] = args.dimension
    if args.neg:
        data["ENGINE"]["INCLUDE_NEGATIVES"] = True
    if args.workers is not None:
        data["BEHAVIOUR"]["WORKERS"] = args.workers
    if args.no_color:
        data["DISPLAY"]["USE_COLOR"] = False
    if args.debug:
        data["BEHAVIOUR"]["DEBUG"] = True
    CONFIG.validate_settings(data)
    APPLY(settings)

    debug(f"active profile: {settings.name}")
    if settings._source:
        debug(f"profile file: {settings._source}")
    for k, v in sorted(flatten_dotted(data).items(), key=lambda kv: kv[0].lower()):
        debug(f"  {k:.<30} {v!r} ({typename(v)})")


def _state_from_runtime(args) -> ViewState:
    return ViewState(
        dimension=validate_dimension(CFG("ENGINE.DIMENSION", 0)),
        include_negatives=bool(CFG("ENGINE.INCLUDE_NEGATIVES", False)),
        color=normalize_color_filter(args.color),
        split=normalize_split_filter(args.split),
        page=max(0, args.page - 1),
    )


def _page_size() -> int:
    return int(CFG("DISPLAY.GRID_COLS", 14)) * int(CFG("DISPLAY.PAGE_ROWS", 10))


def show_grid(cache: RecordCache, state: ViewState) -> None:
    records = cache.records(state.dimension, state.include_negatives)
    selected = filter_records(records, state.color, state.split)
    page = paginate(selected, state.page, _page_size())
    state.page = page.page
    print_header(dimension=state.dimension, include_negatives=state.include_negatives,
                 max_n=cache.ctx.max_n, color=state.color, split=state.split, page=page)
    print()
    print_grid(page)
    print()
    print_split_distribution(split_distribution(selected), state.split)


def show_number(n: int, state: ViewState) -> None:
    print_detail(classify(n, state.dimension, engine_ctx()))


# ---- main ----
def _main_impl(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    colorama_init(autoreset=True, strip=True if args.no_color else None)
    _install_loud_error_handlers(args.debug)

    _apply_profile(args)
    ctx = engine_ctx()
    debug(f"sieve ready for 0..{ctx.max_n} ({ctx.prime_count[-1]} primes)")

    state = _state_from_runtime(args)
    cache = RecordCache(ctx, workers=int(CFG("BEHAVIOUR.WORKERS", 1)))

    if args.items:
        head = args.items[0]
        n = parse_int(head)
        if n is not None:
            show_number(n, state)
            return 0
        cmd = head.lower()
        if cmd == "grid":
            show_grid(cache, state)
            return 0
        if cmd == "legend":
            print_legend(state.color)
            return 0
        if cmd == "dims":
            print_dimensions(state.dimension)
            return 0
        if cmd == "profiles":
            for name, desc in CONFIG.list_profiles_with_descriptions():
                print(f"  {name:<12} {desc}")
            return 0
        raise UserInputError(f"Invalid input: '{head}'. Expected an integer or one of: {', '.join(COMMANDS)}.")

    return repl(cache, state)


# ---- REPL ----
def _on_off(word: str | None, usage: str) -> bool:
    if word == "on":
        return True
    if word == "off":
        return False
    raise UserInputError(f"Usage: {usage}")


def handle_command(line: str, cache: RecordCache, state: ViewState) -> bool:
    """Run one prompt line; return False when the loop should end."""
    low = line.strip().lower()
    parts = low.split()
    arg = parts[1] if len(parts) > 1 else None

    if low in {"", "q", "quit"}:
        return False
    if low in {"h", "help"}:
        show_help()
        return True

    n = parse_int(low)
    if n is not None:
        show_number(n, state)
        return True

    cmd = parts[0]
    if cmd in {"g", "grid"}:
        show_grid(cache, state)
    elif cmd == "n":
        state.page += 1
        show_grid(cache, state)
    elif cmd == "p":
        state.page = max(0, state.page - 1)
        show_grid(cache, state)
    elif cmd == "d":
        if arg is None or parse_int(arg) is None:
            raise UserInputError("Usage: d <0-5>")
        state.dimension = validate_dimension(parse_int(arg))
        state.page = 0
        print(f"Dimension {state.dimension} active.")
    elif cmd == "neg":
        state.include_negatives = _on_off(arg, "neg on|off")
        state.page = 0
        print(f"Negatives {'included' if state.include_negatives else 'hidden'}.")
    elif cmd == "color":
        state.color = normalize_color_filter(" ".join(parts[1:]) or "all")
        state.page = 0
        print(f"Color filter: {state.color}")
    elif cmd == "split":
        if arg in {None, "off", "all"}:
            state.split = None
        elif parse_int(arg) is None:
            raise UserInputError("Usage: split <0-17|off>")
        else:
            state.split = normalize_split_filter(parse_int(arg))
        state.page = 0
        print(f"Split filter: {'off' if state.split is None else state.split}")
    elif cmd == "legend":
        print_legend(state.color)
    elif cmd == "dims":
        print_dimensions(state.dimension)
    elif cmd == "debug":
        rt = _rt_current()
        rt.debug = _on_off(arg, "debug on|off")
        print(f"Debug mode {'enabled' if rt.debug else 'disabled'} for this session.")
    else:
        raise UserInputError(f"Invalid input: '{line.strip()}'. Type H for help.")
    return True


def repl(cache: RecordCache, state: ViewState) -> int:
    if not _rt_current().debug:
        clear_screen()
    print(f"{Fore.YELLOW}{Style.BRIGHT}Number Volume Space v{_ver} — 17-split, colors & prime bending{Style.RESET_ALL}")

    while True:
        try:
            prompt = f"\nD{state.dimension} — Enter an integer or command (h=Help, q=Quit): "
            if not handle_command(input(prompt), cache, state):
                break
        except (EOFError, KeyboardInterrupt):
            print()
            break
        except UserInputError as e:
            _print_user_error(str(e))
        except Exception as e:
            if _rt_current().debug:
                traceback.print_exc()
            else:
                _print_user_error(f"{e.__class__.__name__}: {e}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
