from __future__ import annotations

import pytest

from numvolume.runtime import current as _rt_current
from numvolume.utility import build_ctx

MAX_N = 1680


@pytest.fixture(scope="session")
def ctx():
    """Sieve tables for the default range, built once."""
    return build_ctx(MAX_N)


@pytest.fixture(autouse=True)
def _fresh_runtime():
    """Each test starts (and ends) without an applied profile."""
    rt = _rt_current()
    rt.settings = {}
    rt.debug = False
    rt.profile_name = "default"
    yield
    rt.settings = {}
    rt.debug = False
    rt.profile_name = "default"
