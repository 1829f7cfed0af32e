"""This module contains the abstract contract for fluid states, i.e. thermodynamic
equilibrium properties and the composition of multiphase multicomponent fluids.

The contract does **not** provide an API for calculating the equilibrium from primary
variables. It merely defines how to access the resulting quantities once the
equilibrium has been computed by some equilibrium model (flash, correlations, ...).

Concrete fluid states inherit from :class:`FluidState` and

1. declare the capability constants :attr:`~FluidState.num_phases`,
   :attr:`~FluidState.num_components` and :attr:`~FluidState.num_solvents` as class
   attributes,
2. override the accessors they are able to provide.

The capability constants are checked when the concrete class is defined. A class
missing one of them can never be instantiated, hence the omission surfaces where the
fluid model is written, and not deep inside a solver.

Accessors which are not overridden raise a
:class:`~porefluid.utils.FluidStateNotImplementedError`.

Important:
    Units are SI units. Phase indices come before component indices in every accessor
    signature.

"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, TypeVar, Union

import numpy as np

from .utils import FluidStateConformanceError, FluidStateNotImplementedError

__all__ = [
    "ScalarType",
    "FLUID_STATE_ACCESSORS",
    "FluidState",
    "check_fluid_state_conformance",
]

logger = logging.getLogger(__name__)


ScalarType = TypeVar("ScalarType", bound=Union[float, np.ndarray])
"""Type variable for the numeric scalar type returned by fluid state accessors.

Either a single float for one evaluation point, or a 1D array with values per cell for
vectorized states.

"""

_ImplementationType = TypeVar("_ImplementationType", bound="FluidState")

_CAPABILITY_CONSTANTS: tuple[str, ...] = ("num_phases", "num_components", "num_solvents")

FLUID_STATE_ACCESSORS: tuple[str, ...] = (
    "saturation",
    "mole_frac",
    "phase_concentration",
    "concentration",
    "density",
    "average_molar_mass",
    "fugacity",
    "phase_pressure",
    "temperature",
)
"""Names of all read accessors defined by the fluid state contract."""


def check_fluid_state_conformance(cls: type) -> None:
    """Checks that a class declares the capability constants required by the fluid
    state contract.

    Called automatically when a subclass of :class:`FluidState` is defined, but it can
    be used on any duck-typed class as well.

    Parameters:
        cls: A class representing a fluid state.

    Raises:
        FluidStateConformanceError: If any of ``num_phases``, ``num_components`` or
            ``num_solvents`` is missing, not an integer or negative, or if there are
            more solvents than components.

    """
    missing = [name for name in _CAPABILITY_CONSTANTS if not hasattr(cls, name)]
    if missing:
        raise FluidStateConformanceError(
            f"Fluid state {cls.__name__} does not declare required constants: "
            + ", ".join(missing)
        )

    for name in _CAPABILITY_CONSTANTS:
        value = getattr(cls, name)
        # bool is a subclass of int, but not a count
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise FluidStateConformanceError(
                f"Constant {cls.__name__}.{name} must be an integer, got {value!r}."
            )
        if value < 0:
            raise FluidStateConformanceError(
                f"Constant {cls.__name__}.{name} must be non-negative, got {value}."
            )

    if cls.num_solvents > cls.num_components:  # type:ignore[attr-defined]
        raise FluidStateConformanceError(
            f"Fluid state {cls.__name__} declares more solvents"
            + f" ({cls.num_solvents}) than components"  # type:ignore[attr-defined]
            + f" ({cls.num_components})."  # type:ignore[attr-defined]
        )


class FluidState(Generic[ScalarType]):
    """Abstract base class representing a fluid state (thermodynamic equilibrium
    properties and composition) of multicomponent fluids.

    The base class holds no state. Every accessor raises a
    :class:`~porefluid.utils.FluidStateNotImplementedError` unless overridden.

    Subclasses are checked with :func:`check_fluid_state_conformance` at definition.
    Intermediate base classes which leave the capability constants to their children
    can opt out by passing ``abstract=True`` as a class keyword:

    .. code-block:: python

        class MyBase(FluidState[float], abstract=True):
            ...

        class MyState(MyBase):
            num_phases = 2
            num_components = 2
            num_solvents = 1

    """

    num_phases: ClassVar[int]
    """The maximal number of phases which can occur in the fluid system."""

    num_components: ClassVar[int]
    """The number of chemical (pseudo-) species in the fluid system."""

    num_solvents: ClassVar[int]
    """The number of 'highly' miscible components.

    Solvents are the first ``num_solvents`` components. Only traces of the remaining
    components are resolved in the liquid phases.

    """

    def __init_subclass__(cls, abstract: bool = False, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not abstract:
            check_fluid_state_conformance(cls)
            logger.debug(
                f"Fluid state {cls.__name__} conforms with (num_phases, num_components,"
                + f" num_solvents) = ({cls.num_phases}, {cls.num_components},"
                + f" {cls.num_solvents})."
            )

    @classmethod
    def implemented_accessors(cls) -> tuple[str, ...]:
        """Returns the names of the accessors overridden by this class, in the order of
        :data:`FLUID_STATE_ACCESSORS`."""
        return tuple(
            name
            for name in FLUID_STATE_ACCESSORS
            if getattr(cls, name) is not getattr(FluidState, name)
        )

    @property
    def phase_indices(self) -> range:
        """Valid phase indices ``0, ..., num_phases - 1``."""
        return range(self._as_imp().num_phases)

    @property
    def component_indices(self) -> range:
        """Valid component indices ``0, ..., num_components - 1``."""
        return range(self._as_imp().num_components)

    @property
    def solvent_indices(self) -> range:
        """Indices of the components which are solvents, the first ``num_solvents``
        components."""
        return range(self._as_imp().num_solvents)

    def saturation(self, phase_idx: int) -> ScalarType:
        """Returns the saturation of a phase, i.e. the fraction of pore volume occupied
        by the phase.

        Unit: ``[-]``

        """
        raise self._not_implemented("saturation")

    def mole_frac(self, phase_idx: int, comp_idx: int) -> ScalarType:
        """Returns the mole fraction of a component within a phase.

        Unit: ``[-]``

        """
        raise self._not_implemented("mole_frac")

    def phase_concentration(self, phase_idx: int) -> ScalarType:
        """Returns the sum of the concentrations of all components in a phase.

        Unit: ``[mol / m^3]``

        """
        raise self._not_implemented("phase_concentration")

    def concentration(self, phase_idx: int, comp_idx: int) -> ScalarType:
        """Returns the concentration of an individual component in a phase.

        Unit: ``[mol / m^3]``

        """
        raise self._not_implemented("concentration")

    def density(self, phase_idx: int) -> ScalarType:
        """Returns the mass density of a phase.

        Unit: ``[kg / m^3]``

        """
        raise self._not_implemented("density")

    def average_molar_mass(self, phase_idx: int) -> ScalarType:
        """Returns the average molar mass of a phase.

        This is the sum of all molar masses times their respective mole fractions in
        the phase.

        Unit: ``[kg / mol]``

        """
        raise self._not_implemented("average_molar_mass")

    def fugacity(self, component_idx: int) -> ScalarType:
        """Returns the fugacity of a component.

        For an ideal gas, this is the partial pressure ``R * T * c``.

        Unit: ``[Pa]``

        """
        raise self._not_implemented("fugacity")

    def phase_pressure(self, phase_idx: int) -> ScalarType:
        """Returns the total pressure of a phase.

        Unit: ``[Pa]``

        """
        raise self._not_implemented("phase_pressure")

    def temperature(self) -> ScalarType:
        """Returns the temperature at which the equilibrium was calculated.

        Unit: ``[K]``

        """
        raise self._not_implemented("temperature")

    def _as_imp(self: _ImplementationType) -> _ImplementationType:
        """Returns this instance typed as the concrete implementation."""
        return self

    def _not_implemented(self, accessor: str) -> FluidStateNotImplementedError:
        return FluidStateNotImplementedError(
            f"FluidState.{accessor}()", type(self._as_imp()).__name__
        )
