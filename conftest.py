"""
Module containing configuration functions and shared fixtures for Pytest.

Credits: https://jwodder.github.io/kbits/posts/pytest-mark-off/ (Option 1).
"""

from __future__ import annotations

import numpy as np
import pytest

import porefluid as pf


def pytest_addoption(parser):
    """Adopt a new flag to run all tests, including skipped ones."""
    parser.addoption(
        "--run-skipped",
        action="store_true",
        default=False,
        help="Run skipped tests",
    )


def pytest_collection_modifyitems(config, items):
    """Identify tests mark with 'skipped' at collection."""
    if not config.getoption("--run-skipped"):
        skipper = pytest.mark.skip(reason="Only run when --run-skipped is given")
        for item in items:
            if "skipped" in item.keywords:
                item.add_marker(skipper)


def pytest_configure(config):
    # See https://docs.pytest.org/en/stable/how-to/mark.html
    config.addinivalue_line(
        "markers", "skipped: Mark test to be run only on demand and not during PR."
    )


@pytest.fixture
def molar_masses() -> np.ndarray:
    """Molar masses of water and CO2 in ``[kg / mol]``."""
    return np.array([0.018015, 0.04401])


@pytest.fixture
def two_phase_type() -> type[pf.ExplicitFluidState]:
    """A liquid-gas fluid state type with water as solvent and CO2 as trace."""
    return pf.fluid_state_type(
        2,
        2,
        num_solvents=1,
        phase_states=[pf.PhysicalState.liquid, pf.PhysicalState.gas],
        name="WaterCO2State",
    )


@pytest.fixture
def two_phase_state(two_phase_type, molar_masses) -> pf.ExplicitFluidState:
    """A populated fluid state of type ``two_phase_type`` for a single evaluation
    point."""
    return two_phase_type(
        saturations=[0.3, 0.7],
        mole_fractions=[[0.9, 0.1], [0.05, 0.95]],
        densities=[1000.0, 600.0],
        phase_pressures=[1.0e7, 1.01e7],
        temperature=350.0,
        molar_masses=molar_masses,
    )
