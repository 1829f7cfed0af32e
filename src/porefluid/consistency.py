"""Checks of the physical invariants which populated fluid states must fulfill.

The fluid state contract does not enforce these invariants, since the values are
provided by concrete equilibrium models. The functions here can be used by the
modeller to validate a fluid model, or by tests.

Each check returns a boolean, or raises a
:class:`~porefluid.utils.FluidStateConsistencyError` if ``raise_error=True``.
Vectorized states are checked value-wise.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

from . import _core
from .fluid_state import FLUID_STATE_ACCESSORS
from .utils import FluidStateConsistencyError, safe_sum

__all__ = [
    "check_saturation_unity",
    "check_mole_fraction_unity",
    "check_concentration_consistency",
    "check_fluid_state",
]

logger = logging.getLogger(__name__)


def _fail(msg: str, raise_error: bool) -> bool:
    if raise_error:
        raise FluidStateConsistencyError(msg)
    logger.debug(msg)
    return False


def check_saturation_unity(
    state: Any, tol: Optional[float] = None, raise_error: bool = False
) -> bool:
    """Checks that the saturations of all phases sum up to 1.

    Parameters:
        state: A fluid state.
        tol: ``default=None``

            Absolute tolerance. Defaults to :data:`~porefluid._core.UNITY_TOLERANCE`.
        raise_error: ``default=False``

            If True, an error is raised instead of returning False.

    Raises:
        FluidStateConsistencyError: If the check fails and ``raise_error`` is True.

    Returns:
        True if the invariant holds.

    """
    if tol is None:
        tol = _core.UNITY_TOLERANCE

    total = safe_sum([state.saturation(j) for j in range(state.num_phases)])
    if not np.allclose(total, 1.0, rtol=0.0, atol=tol):
        return _fail(
            f"Saturations of {type(state).__name__} sum up to {total}, not 1.",
            raise_error,
        )
    return True


def check_mole_fraction_unity(
    state: Any, tol: Optional[float] = None, raise_error: bool = False
) -> bool:
    """Checks that for each phase, the mole fractions of all components sum up to 1.

    See :func:`check_saturation_unity` for the parameters.

    """
    if tol is None:
        tol = _core.UNITY_TOLERANCE

    for j in range(state.num_phases):
        total = safe_sum(
            [state.mole_frac(j, i) for i in range(state.num_components)]
        )
        if not np.allclose(total, 1.0, rtol=0.0, atol=tol):
            return _fail(
                f"Mole fractions in phase {j} of {type(state).__name__} sum up to"
                + f" {total}, not 1.",
                raise_error,
            )
    return True


def check_concentration_consistency(
    state: Any, tol: Optional[float] = None, raise_error: bool = False
) -> bool:
    """Checks that the concentrations of a fluid state are consistent with densities,
    mole fractions and average molar masses,

    .. math::

        c_{ij} = \\frac{\\rho_j x_{ij}}{M_j}~.

    Absent phases with zero average molar mass are expected to have zero
    concentrations. The tolerance is relative. See :func:`check_saturation_unity` for
    the parameters.

    """
    if tol is None:
        tol = _core.UNITY_TOLERANCE

    for j in range(state.num_phases):
        rho = state.density(j)
        m_avg = np.asarray(state.average_molar_mass(j), dtype=np.float64)
        for i in range(state.num_components):
            expected = np.divide(
                rho * np.asarray(state.mole_frac(j, i), dtype=np.float64),
                m_avg,
                out=np.zeros(np.broadcast(rho, m_avg).shape),
                where=m_avg > 0.0,
            )
            c = state.concentration(j, i)
            if not np.allclose(c, expected, rtol=tol, atol=0.0):
                return _fail(
                    f"Concentration of component {i} in phase {j} of"
                    + f" {type(state).__name__} is {c}, expected {expected}.",
                    raise_error,
                )
    return True


_CHECKS = (
    (check_saturation_unity, {"saturation"}),
    (check_mole_fraction_unity, {"mole_frac"}),
    (
        check_concentration_consistency,
        {"concentration", "density", "mole_frac", "average_molar_mass"},
    ),
)
"""Checks performed by :func:`check_fluid_state` and the accessors they require."""


def check_fluid_state(
    state: Any, tol: Optional[float] = None, raise_error: bool = False
) -> bool:
    """Performs all consistency checks on a fluid state.

    Checks requiring accessors which the fluid state does not implement are skipped.
    For duck-typed states without
    :meth:`~porefluid.fluid_state.FluidState.implemented_accessors`, all accessors are
    assumed to be implemented.

    See :func:`check_saturation_unity` for the parameters.

    Returns:
        True if all performed checks passed.

    """
    get_implemented = getattr(type(state), "implemented_accessors", None)
    if get_implemented is None:
        implemented = set(FLUID_STATE_ACCESSORS)
    else:
        implemented = set(get_implemented())

    passed = True
    for check, required in _CHECKS:
        if not required.issubset(implemented):
            logger.debug(
                f"Skipping {check.__name__} for {type(state).__name__}, missing"
                + f" accessors {sorted(required - implemented)}."
            )
            continue
        passed = check(state, tol=tol, raise_error=raise_error) and passed

    return passed
