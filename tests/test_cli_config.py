# tests/test_cli_config.py
"""
Profiles, runtime settings, the one-shot CLI and the prompt-loop commands.

Run: pytest -v
"""

from __future__ import annotations

import pytest

from numvolume import config as CONFIG
from numvolume.classify import RecordCache
from numvolume.cli import ViewState, handle_command, main
from numvolume.runtime import APPLY, CFG, debug, engine_ctx
from numvolume.runtime import current as _rt_current
from numvolume.utility import ConfigurationError, UserInputError, build_ctx


def _write(tmp_path, name, text):
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


# ---------- profiles ----------------------------------------------------------

def test_default_profile():
    s = CONFIG.load_settings("default")
    assert s.name == "default"
    assert s.data["ENGINE"] == {"MAX_N": 1680, "DIMENSION": 0, "INCLUDE_NEGATIVES": False}
    assert s.data["DISPLAY"]["GRID_COLS"] == 14
    assert "PROFILE" not in s.data
    assert s._source is not None and s._source.name == "default.toml"


def test_mirror_profile():
    s = CONFIG.load_settings("mirror")
    assert s.data["ENGINE"]["DIMENSION"] == 3
    assert s.data["ENGINE"]["INCLUDE_NEGATIVES"] is True


def test_list_and_has_profiles():
    names = [n for n, _ in CONFIG.list_profiles_with_descriptions()]
    assert names == ["default", "mirror"]
    assert CONFIG.has_profile("default")
    assert not CONFIG.has_profile("nope")


def test_partial_profile_is_filled_from_defaults(tmp_path):
    p = _write(tmp_path, "partial.toml", "[ENGINE]\nDIMENSION = 2\n")
    s = CONFIG.load_settings(str(p))
    assert s.name == "partial"
    assert s.data["ENGINE"]["DIMENSION"] == 2
    assert s.data["ENGINE"]["MAX_N"] == 1680
    assert s.data["BEHAVIOUR"]["WORKERS"] == 1
    # defaults are not shared between loads
    assert CONFIG.DEFAULTS["ENGINE"]["DIMENSION"] == 0


@pytest.mark.parametrize("body,needle", [
    ("[ENGINE]\nDIMENSION = 9\n", "ENGINE.DIMENSION"),
    ("[ENGINE]\nMAX_N = -1\n", "ENGINE.MAX_N"),
    ("[ENGINE]\nMAX_N = \"big\"\n", "ENGINE.MAX_N"),
    ("[DISPLAY]\nUSE_COLOR = \"yes\"\n", "DISPLAY.USE_COLOR"),
    ("[BEHAVIOUR]\nWORKERS = 0\n", "BEHAVIOUR.WORKERS"),
    ("ENGINE = 5\n", "[ENGINE]"),
    ("[ENGINE\nMAX_N = 1\n", "bad.toml"),
], ids=["dimension", "negative-max-n", "string-max-n", "use-color", "workers", "not-a-table", "malformed"])
def test_bad_profiles(tmp_path, body, needle):
    p = _write(tmp_path, "bad.toml", body)
    with pytest.raises(ConfigurationError) as ei:
        CONFIG.load_settings(str(p))
    assert needle in str(ei.value)


def test_missing_profile(tmp_path):
    with pytest.raises(UserInputError) as ei:
        CONFIG.load_settings(str(tmp_path / "absent.toml"))
    assert not isinstance(ei.value, ConfigurationError)
    assert "not found" in str(ei.value)


# ---------- runtime -----------------------------------------------------------

def test_apply_and_cfg():
    APPLY(CONFIG.load_settings("mirror"))
    rt = _rt_current()
    assert rt.profile_name == "mirror"
    assert CFG("ENGINE.DIMENSION") == 3
    assert CFG("ENGINE.NOPE", "fallback") == "fallback"
    assert rt.debug is False


def test_runtime_set_creates_sections():
    rt = _rt_current()
    rt.set("DISPLAY.GRID_COLS", 7)
    assert CFG("DISPLAY.GRID_COLS") == 7


def test_engine_ctx_follows_profile():
    assert engine_ctx().max_n == 1680
    APPLY({"ENGINE": {"MAX_N": 100}})
    assert engine_ctx().max_n == 100
    assert engine_ctx() is build_ctx(100)


def test_debug_lines_only_when_enabled(capsys):
    debug("hidden")
    assert capsys.readouterr().err == ""
    _rt_current().debug = True
    debug("sieve ready")
    err = capsys.readouterr().err
    assert "[debug]" in err and "sieve ready" in err


# ---------- one-shot CLI ------------------------------------------------------

def test_cli_detail_view(capsys):
    assert main(["7", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "Red" in out
    assert "6|11" in out
    assert "LEFT+ (O)" in out
    assert "OPAQUE" in out


def test_cli_negative_number(capsys):
    assert main(["-14", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "Yellow" in out
    assert "-1 × 2 × 7" in out


def test_cli_quad_anchor(capsys):
    assert main(["17", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "17 | 193" in out
    assert "Prime" in out


def test_cli_mirror_profile(capsys):
    assert main(["7", "--profile", "mirror", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "Inv 0" in out
    assert "Yellow" in out


@pytest.mark.parametrize("argv,needle", [
    (["1681", "--no-color"], "outside the sieve range"),
    (["7", "--max-n", "5", "--no-color"], "outside the sieve range"),
    (["7", "-d", "9", "--no-color"], "ENGINE.DIMENSION"),
    (["7", "--max-n", "-1", "--no-color"], "ENGINE.MAX_N"),
    (["bogus", "--no-color"], "Invalid input"),
    (["grid", "--color", "teal", "--no-color"], "Unknown color"),
    (["grid", "--split", "18", "--no-color"], "Split filter"),
    (["7", "--profile", "no/such/profile.toml", "--no-color"], "not found"),
], ids=["beyond-max-n", "small-max-n", "dimension", "negative-max-n", "unknown-command",
        "unknown-color", "split-range", "missing-profile"])
def test_cli_user_errors_exit_2(capsys, argv, needle):
    assert main(argv) == 2
    assert needle in capsys.readouterr().err


def test_cli_grid_with_color_filter(capsys):
    assert main(["grid", "--color", "golden brown", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "color: golden brown" in out
    assert "page 1/1" in out
    for n in (210, 420, 1680):
        assert f"{n:>5} 17|0" in out


def test_cli_grid_empty_selection(capsys):
    assert main(["grid", "--color", "brown", "--split", "0", "--no-color"]) == 0
    assert "no numbers match" in capsys.readouterr().out


def test_cli_legend_dims_profiles(capsys):
    assert main(["legend", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "Golden Brown" in out and "#7C5800" in out
    assert "Zero" not in out

    assert main(["dims", "-d", "3", "--no-color"]) == 0
    out = capsys.readouterr().out
    assert "17|0" in out and "0|17" in out
    assert "Inv 2" in out

    assert main(["profiles"]) == 0
    out = capsys.readouterr().out
    assert "default" in out and "mirror" in out


# ---------- prompt loop -------------------------------------------------------

@pytest.fixture
def session():
    return RecordCache(build_ctx(200)), ViewState()


@pytest.mark.parametrize("line", ["", "q", "QUIT", "  quit  "])
def test_quit_commands(session, line):
    assert handle_command(line, *session) is False


def test_state_commands(session, capsys):
    cache, state = session
    assert handle_command("d 3", cache, state)
    assert state.dimension == 3
    assert handle_command("neg on", cache, state)
    assert state.include_negatives is True
    assert handle_command("color Golden Brown", cache, state)
    assert state.color == "golden brown"
    assert handle_command("split 5", cache, state)
    assert state.split == 5
    assert handle_command("split off", cache, state)
    assert state.split is None
    out = capsys.readouterr().out
    assert "Dimension 3 active." in out
    assert "Negatives included." in out


def test_paging_clamps_to_last_page(session, capsys):
    cache, state = session
    handle_command("g", cache, state)
    assert state.page == 0
    handle_command("n", cache, state)
    handle_command("n", cache, state)
    assert state.page == 1          # 201 numbers, 140 per page
    handle_command("p", cache, state)
    handle_command("p", cache, state)
    assert state.page == 0
    assert "page 2/2" in capsys.readouterr().out


def test_number_and_help(session, capsys):
    handle_command("-14", *session)
    handle_command("h", *session)
    out = capsys.readouterr().out
    assert "Yellow" in out
    assert "Commands:" in out


def test_debug_toggle(session):
    handle_command("debug on", *session)
    assert _rt_current().debug is True
    handle_command("debug off", *session)
    assert _rt_current().debug is False


@pytest.mark.parametrize("line,exc", [
    ("d 9", ConfigurationError),
    ("d", UserInputError),
    ("d x", UserInputError),
    ("neg maybe", UserInputError),
    ("color teal", UserInputError),
    ("split 40", UserInputError),
    ("split x", UserInputError),
    ("debug", UserInputError),
    ("xyz", UserInputError),
])
def test_bad_commands(session, line, exc):
    cache, state = session
    before = (state.dimension, state.split, state.color)
    with pytest.raises(exc):
        handle_command(line, cache, state)
    assert (state.dimension, state.split, state.color) == before
