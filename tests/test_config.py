"""Module testing the runtime configuration of ``porefluid`` via a ``porefluid.cfg``
file in the working directory."""

from __future__ import annotations

import importlib

import pytest

import porefluid as pf


@pytest.fixture
def reload_in(tmp_path, monkeypatch):
    """Returns a function writing a config file to a temporary working directory and
    re-executing the package initialization. Flags are restored afterwards."""
    monkeypatch.chdir(tmp_path)
    for name in ["UNITY_TOLERANCE", "NUMBA_CACHE"]:
        monkeypatch.setattr(pf._core, name, getattr(pf._core, name))
    monkeypatch.setattr(pf, "UNITY_TOLERANCE", pf.UNITY_TOLERANCE)
    monkeypatch.setattr(pf, "config", pf.config)

    def _reload(content: str):
        (tmp_path / "porefluid.cfg").write_text(content)
        importlib.reload(pf)

    return _reload


def test_valid_config(reload_in):
    reload_in("[porefluid]\nunity_tolerance = 1e-6\nnumba_cache = no\n")

    assert pf._core.UNITY_TOLERANCE == 1e-6
    assert pf._core.NUMBA_CACHE is False


@pytest.mark.parametrize(
    "content, name",
    [
        ("[porefluid]\nunity_tolerance = abc\n", "unity_tolerance"),
        ("[porefluid]\nnumba_cache = sometimes\n", "numba_cache"),
    ],
)
def test_malformed_config_keeps_defaults(reload_in, content: str, name: str):
    """Malformed values do not break the import, but give a warning and keep the
    defaults."""
    tol = pf._core.UNITY_TOLERANCE
    cache = pf._core.NUMBA_CACHE

    with pytest.warns(UserWarning, match=name):
        reload_in(content)

    assert pf._core.UNITY_TOLERANCE == tol
    assert pf._core.NUMBA_CACHE == cache


def test_unparsable_config(reload_in):
    """A config file which can not be parsed is ignored."""
    tol = pf._core.UNITY_TOLERANCE

    reload_in("not an ini file\n")
    assert pf.config == {}
    assert pf._core.UNITY_TOLERANCE == tol
