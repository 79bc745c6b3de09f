from __future__ import annotations

import copy
import tomllib as toml
from dataclasses import dataclass
from importlib.resources import files as pkg_files
from pathlib import Path
from typing import Any

from numvolume.utility import ConfigurationError, UserInputError, validate_dimension

DEFAULTS: dict[str, dict[str, Any]] = {
    "ENGINE": {
        "MAX_N": 1680,
        "DIMENSION": 0,
        "INCLUDE_NEGATIVES": False,
    },
    "DISPLAY": {
        "GRID_COLS": 14,
        "PAGE_ROWS": 10,
        "USE_COLOR": True,
        "WAVE_PERIODS": 3,
    },
    "BEHAVIOUR": {
        "DEBUG": False,
        "WORKERS": 1,
    },
}

# dotted key -> minimum allowed value for integer settings
_INT_MINIMUMS = {
    "ENGINE.MAX_N": 0,
    "DISPLAY.GRID_COLS": 1,
    "DISPLAY.PAGE_ROWS": 1,
    "DISPLAY.WAVE_PERIODS": 1,
    "BEHAVIOUR.WORKERS": 1,
}


@dataclass
class Settings:
    """
    Wrap the full TOML dict (without the [PROFILE] section).
    .as_dict() feeds runtime.apply().
    """
    data: dict[str, Any]
    name: str
    description: str
    _source: Path | None = None

    def as_dict(self) -> dict[str, Any]:
        return self.data


# --- Paths -----------------------------------------------------------------

def _packaged_profile(name: str) -> Path:
    return Path(str(pkg_files("numvolume") / "profiles" / f"{name}.toml"))


def _resolve_profile(name_or_path: str) -> Path:
    """Packaged profile name ('default', 'mirror') or a path to a .toml file."""
    p = Path(name_or_path).expanduser()
    if p.suffix.lower() == ".toml" or p.parent != Path("."):
        return p
    return _packaged_profile(name_or_path)


# --- I/O -------------------------------------------------------------------

def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return toml.load(f)
    except toml.TOMLDecodeError as e:
        lineno = getattr(e, "lineno", None)
        colno = getattr(e, "colno", None)
        msg = getattr(e, "msg", str(e))
        where = []
        if lineno is not None:
            where.append(f"line {lineno}")
        if colno is not None:
            where.append(f"column {colno}")
        loc = f" (at {', '.join(where)})" if where else ""
        # No traceback chaining
        raise ConfigurationError(f"reading {path.name}: {msg}{loc}.") from None


def _sanitize_oneline(s: str) -> str:
    return " ".join(str(s).split()) or "(no description)"


def _split_profile_data(raw: dict[str, Any], fallback_name: str) -> tuple[dict[str, Any], str, str]:
    """
    Extract [PROFILE] meta (name, description) and return:
      (settings_without_profile, resolved_name, resolved_description)
    """
    meta = raw.get("PROFILE") or {}
    data = {k: v for k, v in raw.items() if k != "PROFILE"}
    name = str(meta.get("name") or fallback_name)
    description = _sanitize_oneline(str(meta.get("description") or ""))
    return data, name, description


def _merge_defaults(data: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(DEFAULTS)
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


# --- Validation --------------------------------------------------------------

def validate_settings(data: dict[str, Any]) -> dict[str, Any]:
    """
    Check types and ranges of the known keys; raise ConfigurationError on the
    first bad value. Unknown keys are left alone.
    """
    for section in DEFAULTS:
        if not isinstance(data.get(section), dict):
            raise ConfigurationError(f"[{section}] must be a table.")

    for dotted, minimum in _INT_MINIMUMS.items():
        section, key = dotted.split(".")
        v = data.get(section, {}).get(key)
        if isinstance(v, bool) or not isinstance(v, int):
            raise ConfigurationError(f"{dotted} must be an integer, got {v!r}.")
        if v < minimum:
            raise ConfigurationError(f"{dotted} must be >= {minimum}, got {v}.")

    try:
        validate_dimension(data["ENGINE"]["DIMENSION"])
    except ConfigurationError as e:
        raise ConfigurationError(f"ENGINE.DIMENSION: {e}") from None

    for dotted in ("ENGINE.INCLUDE_NEGATIVES", "DISPLAY.USE_COLOR", "BEHAVIOUR.DEBUG"):
        section, key = dotted.split(".")
        v = data[section][key]
        if not isinstance(v, bool):
            raise ConfigurationError(f"{dotted} must be true or false, got {v!r}.")
    return data


# --- Public API ------------------------------------------------------------

def list_profiles_with_descriptions() -> list[tuple[str, str]]:
    """Return [(name, description), ...] for the packaged profiles."""
    items: list[tuple[str, str]] = []
    pdir = Path(str(pkg_files("numvolume") / "profiles"))
    for p in pdir.glob("*.toml"):
        try:
            _, nm, desc = _split_profile_data(_load_toml(p), p.stem)
        except ConfigurationError:
            nm, desc = p.stem, "(unreadable profile)"
        items.append((nm, desc))
    return sorted(items, key=lambda t: t[0].lower())


def has_profile(name_or_path: str) -> bool:
    return _resolve_profile(name_or_path).is_file()


def load_settings(name_or_path: str | None) -> Settings:
    """
    Load a profile by packaged name (default 'default') or by path, strip the
    [PROFILE] metadata, fill missing keys from DEFAULTS and validate.
    """
    path = _resolve_profile(name_or_path or "default")
    if not path.is_file():
        raise UserInputError(f"Profile '{name_or_path}' not found at {path}")

    raw = _load_toml(path)
    data, resolved_name, description = _split_profile_data(raw, path.stem)
    data = validate_settings(_merge_defaults(data))

    return Settings(
        data=data,
        name=resolved_name,
        description=description,
        _source=path,
    )
