"""Contains utility functions for fluid states, as well as the custom exception
classes raised by the ``porefluid`` package."""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar, cast

import numba
import numpy as np

from ._core import NUMBA_CACHE, NUMBA_FAST_MATH, R_IDEAL_MOL

__all__ = [
    "safe_sum",
    "ideal_gas_fugacity",
    "average_molar_masses",
    "mixture_concentrations",
    "FluidStateNotImplementedError",
    "FluidStateConformanceError",
    "FluidStateConsistencyError",
]


_Addable = TypeVar("_Addable")
"""A type variable representing any type supporting the + overload.

Note:
    Used in :func:`safe_sum` to state that the return value type is the same as the
    argument type.

"""


def safe_sum(x: Sequence[_Addable]) -> _Addable:
    """Safely sum the elements, without creating a first addition with 0.

    This keeps the type of the summands (floats or vectorized values) intact.

    Parameters:
        x: A sequence of any objects which support the ``+`` operation.

    Returns:
        The sum of ``x``, or 0 if ``x`` is empty.

    """
    if len(x) >= 1:
        sum_ = x[0]
        for i in range(1, len(x)):
            sum_ = sum_ + x[i]  # type: ignore[operator]
        return sum_
    else:
        return cast(_Addable, 0)


def ideal_gas_fugacity(temperature, concentration):
    """Fugacity of a component in the ideal-gas limit, where it equals the partial
    pressure ``R * T * c``.

    Parameters:
        temperature: Temperature in ``[K]``, scalar or vectorized.
        concentration: Molar concentration of the component in ``[mol / m^3]``.

    Returns:
        The fugacity in ``[Pa]``.

    """
    return R_IDEAL_MOL * temperature * concentration


def average_molar_masses(x: np.ndarray, molar_masses: np.ndarray) -> np.ndarray:
    """Computes the mole-fraction-weighted molar masses of phases.

    Parameters:
        x: ``shape=(num_phases, num_components, ...)``

            Mole fractions per phase and component. A trailing axis can hold
            vectorized values.
        molar_masses: ``shape=(num_components,)``

            Molar masses of the components in ``[kg / mol]``.

    Raises:
        ValueError: If the number of molar masses does not match axis 1 of ``x``.

    Returns:
        An array of shape ``(num_phases, ...)`` with molar masses in ``[kg / mol]``.

    """
    if x.shape[1] != molar_masses.shape[0]:
        raise ValueError("Need exactly one molar mass per component.")
    return np.einsum("ji...,i->j...", x, molar_masses)


@numba.njit(
    "float64[:,:](float64[:],float64[:,:],float64[:])",
    fastmath=NUMBA_FAST_MATH,
    cache=NUMBA_CACHE,
)
def _mixture_concentrations(
    rho: np.ndarray, x: np.ndarray, molar_masses: np.ndarray
) -> np.ndarray:
    """Internal ``numba.njit``-decorated function for :func:`mixture_concentrations`.
    """
    nphase, ncomp = x.shape
    c = np.empty((nphase, ncomp))

    for j in range(nphase):
        m_avg = 0.0
        for i in range(ncomp):
            m_avg += x[j, i] * molar_masses[i]
        for i in range(ncomp):
            # absent phases (all fractions zero) have no concentration
            if m_avg > 0.0:
                c[j, i] = rho[j] * x[j, i] / m_avg
            else:
                c[j, i] = 0.0

    return c


def mixture_concentrations(
    rho: np.ndarray, x: np.ndarray, molar_masses: np.ndarray
) -> np.ndarray:
    r"""Computes the molar concentrations of all components in all phases for one
    evaluation point,

    .. math::

        c_{ij} = \frac{\rho_j x_{ij}}{\sum_k x_{kj} M_k}~.

    Phases with zero average molar mass (all fractions zero, i.e. absent phases in the
    unified setting) are assigned zero concentrations.

    NJIT-ed computations with signature
    ``(float64[:], float64[:,:], float64[:]) -> float64[:,:]``.

    Parameters:
        rho: ``shape=(num_phases,)``

            Mass densities of phases in ``[kg / m^3]``.
        x: ``shape=(num_phases, num_components)``

            Mole fractions, row-wise per phase.
        molar_masses: ``shape=(num_components,)``

            Molar masses of components in ``[kg / mol]``.

    Raises:
        ValueError: If the shapes of the arguments are inconsistent.

    Returns:
        An array of shape ``(num_phases, num_components)`` with concentrations in
        ``[mol / m^3]``.

    """
    # copies, since numba does not match read-only arrays with the signature
    rho = np.array(rho, dtype=np.float64)
    x = np.array(x, dtype=np.float64)
    molar_masses = np.array(molar_masses, dtype=np.float64)

    if x.ndim != 2 or rho.ndim != 1 or molar_masses.ndim != 1:
        raise ValueError("Expecting 1D densities, 2D fractions and 1D molar masses.")
    if x.shape != (rho.shape[0], molar_masses.shape[0]):
        raise ValueError(
            f"Fractions of shape {x.shape} inconsistent with {rho.shape[0]} densities"
            + f" and {molar_masses.shape[0]} molar masses."
        )

    return _mixture_concentrations(rho, x, molar_masses)


class FluidStateNotImplementedError(NotImplementedError):
    """Raised when a fluid state is asked for a property its implementation does not
    provide.

    This indicates a structural mismatch between what a solver requests and what a
    fluid model can deliver. It is not meant to be caught and recovered from.

    Parameters:
        operation: Name of the requested accessor, e.g. ``'FluidState.saturation()'``.
        implementation: ``default=None``

            Name of the concrete fluid state class which was asked.

    """

    def __init__(self, operation: str, implementation: Optional[str] = None) -> None:
        self.operation: str = operation
        """Name of the accessor which is not implemented."""

        self.implementation: Optional[str] = implementation
        """Name of the concrete fluid state class, if known."""

        if implementation is None:
            msg = operation
        else:
            msg = f"{operation} not implemented by {implementation}."
        super().__init__(msg)


class FluidStateConformanceError(TypeError):
    """Raised when a class bound to the fluid state contract does not declare the
    required capability constants ``num_phases``, ``num_components`` and
    ``num_solvents``, or declares invalid values.

    The error is raised when the class is defined, before any instance exists.

    """


class FluidStateConsistencyError(ValueError):
    """Raised by the consistency checks in :mod:`porefluid.consistency` if a populated
    fluid state violates a physical invariant, such as the unity of saturations."""
