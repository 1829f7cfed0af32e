"""Module testing the invariant checks in :mod:`porefluid.consistency`."""

from __future__ import annotations

import logging

import numpy as np
import pytest

import porefluid as pf


def _populate(cls, molar_masses, **kwargs):
    """Populates a state of type ``cls`` with consistent two-phase values, where some
    can be overwritten by ``kwargs``."""
    values = dict(
        saturations=[0.3, 0.7],
        mole_fractions=[[0.9, 0.1], [0.05, 0.95]],
        densities=[1000.0, 600.0],
        phase_pressures=[1.0e7, 1.01e7],
        temperature=350.0,
        molar_masses=molar_masses,
    )
    values.update(kwargs)
    return cls(**values)


class DuckState:
    """A fluid state not inheriting the contract, with a wrong concentration."""

    num_phases = 1
    num_components = 2
    num_solvents = 2

    def saturation(self, phase_idx):
        return 1.0

    def mole_frac(self, phase_idx, comp_idx):
        return 0.5

    def density(self, phase_idx):
        return 100.0

    def average_molar_mass(self, phase_idx):
        return 0.05

    def concentration(self, phase_idx, comp_idx):
        return 1000.0 if comp_idx == 0 else 1.0


def test_consistent_state(two_phase_state):
    assert pf.check_saturation_unity(two_phase_state)
    assert pf.check_mole_fraction_unity(two_phase_state)
    assert pf.check_concentration_consistency(two_phase_state)
    assert pf.check_fluid_state(two_phase_state)


def test_saturation_unity_violated(two_phase_type, molar_masses):
    state = _populate(two_phase_type, molar_masses, saturations=[0.3, 0.6])

    assert not pf.check_saturation_unity(state)
    assert not pf.check_fluid_state(state)
    # the violation is within a large enough tolerance
    assert pf.check_saturation_unity(state, tol=0.2)
    with pytest.raises(pf.FluidStateConsistencyError, match="Saturations"):
        pf.check_saturation_unity(state, raise_error=True)


def test_mole_fraction_unity_violated(two_phase_type, molar_masses):
    state = _populate(
        two_phase_type, molar_masses, mole_fractions=[[0.9, 0.1], [0.05, 0.9]]
    )

    assert pf.check_saturation_unity(state)
    assert not pf.check_mole_fraction_unity(state)
    with pytest.raises(pf.FluidStateConsistencyError, match="phase 1"):
        pf.check_fluid_state(state, raise_error=True)
    # Consistency errors are value errors
    with pytest.raises(ValueError):
        pf.check_mole_fraction_unity(state, raise_error=True)


def test_vectorized_violation(two_phase_type, molar_masses):
    """A violation in a single value of a vectorized state is detected."""
    sat = np.array([[0.3, 0.3, 0.3], [0.7, 0.7, 0.71]])
    state = _populate(
        two_phase_type,
        molar_masses,
        saturations=sat,
        mole_fractions=np.repeat(
            np.array([[0.9, 0.1], [0.05, 0.95]])[:, :, np.newaxis], 3, axis=2
        ),
        densities=np.array([[1000.0] * 3, [600.0] * 3]),
        phase_pressures=np.full((2, 3), 1e7),
        temperature=np.full(3, 350.0),
    )
    assert not pf.check_saturation_unity(state)
    assert pf.check_mole_fraction_unity(state)
    assert pf.check_concentration_consistency(state)


def test_concentration_consistency_duck_typed():
    """Duck-typed states are checked with all accessors assumed to be implemented."""
    state = DuckState()

    assert pf.check_saturation_unity(state)
    assert pf.check_mole_fraction_unity(state)
    # 100 * 0.5 / 0.05 = 1000
    assert not pf.check_concentration_consistency(state)
    with pytest.raises(pf.FluidStateConsistencyError, match="component 1 in phase 0"):
        pf.check_fluid_state(state, raise_error=True)


def test_checks_skipped_for_unimplemented_accessors(caplog):
    """Checks requiring accessors which are not implemented are skipped, and the
    not-implemented error is not raised."""

    class SaturationOnlyState(pf.FluidState[float]):
        num_phases = 2
        num_components = 1
        num_solvents = 1

        def saturation(self, phase_idx: int) -> float:
            return 0.5

    caplog.set_level(logging.DEBUG, logger="porefluid.consistency")
    assert pf.check_fluid_state(SaturationOnlyState(), raise_error=True)
    assert "Skipping check_mole_fraction_unity" in caplog.text
    assert "Skipping check_concentration_consistency" in caplog.text

    # Calling a check directly propagates the not-implemented error
    with pytest.raises(pf.FluidStateNotImplementedError):
        pf.check_mole_fraction_unity(SaturationOnlyState())
