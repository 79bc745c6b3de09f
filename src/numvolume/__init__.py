from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("numvolume")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .classifiers import Color, Dimension, get_split, wave_left
from .classify import ClassificationRecord, RecordCache, classify, precompute_range
from .config import load_settings
from .context import EngineCtx
from .runtime import APPLY, CFG
from .utility import (
    ConfigurationError,
    OutOfRangeError,
    UserInputError,
    build_ctx,
    factorize,
    is_prime_power,
)

__all__ = [
    "APPLY",
    "CFG",
    "ClassificationRecord",
    "Color",
    "ConfigurationError",
    "Dimension",
    "EngineCtx",
    "OutOfRangeError",
    "RecordCache",
    "UserInputError",
    "__version__",
    "build_ctx",
    "classify",
    "factorize",
    "get_split",
    "is_prime_power",
    "load_settings",
    "precompute_range",
    "wave_left",
]
