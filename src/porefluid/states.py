"""Module containing a storage-backed implementation of the fluid state contract.

An equilibrium model (flash, correlations, interpolated tables, ...) computes the
values and passes them to :class:`ExplicitFluidState`. Solvers then read them through
the accessors of :class:`~porefluid.fluid_state.FluidState`.

Concrete types for a fluid system are created with :func:`fluid_state_type`:

.. code-block:: python

    BrineCO2State = fluid_state_type(
        2, 2, num_solvents=1, phase_states=[PhysicalState.liquid, PhysicalState.gas]
    )
    state = BrineCO2State(
        saturations=..., mole_fractions=..., densities=..., phase_pressures=...,
        temperature=..., molar_masses=...,
    )

"""

from __future__ import annotations

import logging
from typing import ClassVar, Optional, Sequence, cast

import numpy as np

from ._core import PhysicalState
from .fluid_state import FluidState, ScalarType
from .utils import average_molar_masses, ideal_gas_fugacity, mixture_concentrations

__all__ = [
    "ExplicitFluidState",
    "fluid_state_type",
]

logger = logging.getLogger(__name__)


def _frozen(values: np.ndarray | Sequence | float, name: str) -> np.ndarray:
    """Copies values into a float array which is flagged as not writeable."""
    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Values for {name} are not numeric.") from err
    arr.flags.writeable = False
    return arr


class ExplicitFluidState(FluidState[ScalarType], abstract=True):
    """A fluid state which explicitly stores the values computed by an equilibrium
    model.

    Derived quantities are computed once at instantiation using standard mixture
    relations:

    - average molar mass :math:`M_j = \\sum_i x_{ij} M_i`,
    - concentrations :math:`c_{ij} = \\rho_j x_{ij} / M_j`,
    - phase concentrations :math:`c_j = \\rho_j / M_j = \\sum_i c_{ij}`.

    Absent phases, where all mole fractions and hence :math:`M_j` are zero, have zero
    concentrations.

    Values can be scalar per quantity, or vectorized with an additional trailing axis
    of length ``N`` (e.g. values per cell). All stored arrays are read-only.

    This class is abstract w.r.t. the capability constants. Use
    :func:`fluid_state_type` to create a concrete type.

    Parameters:
        saturations: ``shape=(num_phases, ...)``

            Volumetric phase fractions.
        mole_fractions: ``shape=(num_phases, num_components, ...)``

            Mole fractions of components per phase.
        densities: ``shape=(num_phases, ...)``

            Mass densities of phases in ``[kg / m^3]``.
        phase_pressures: ``shape=(num_phases, ...)``

            Phase pressures in ``[Pa]``.
        temperature: ``shape=(...)``

            Equilibrium temperature in ``[K]``.
        molar_masses: ``shape=(num_components,)``

            Molar masses of components in ``[kg / mol]``. Must be strictly positive.
        fugacities: ``default=None``, ``shape=(num_components, ...)``

            Fugacities of components in ``[Pa]``. If not given, the ideal-gas limit is
            computed using the concentrations in the first gas phase (see
            :meth:`fugacity`).

    Raises:
        ValueError: If any of the values are of shapes inconsistent with the capability
            constants of the class, or molar masses are not strictly positive.

    """

    phase_states: ClassVar[tuple[PhysicalState, ...]] = ()
    """Physical states per phase. Set by :func:`fluid_state_type`."""

    def __init__(
        self,
        *,
        saturations: np.ndarray | Sequence,
        mole_fractions: np.ndarray | Sequence,
        densities: np.ndarray | Sequence,
        phase_pressures: np.ndarray | Sequence,
        temperature: np.ndarray | float,
        molar_masses: np.ndarray | Sequence,
        fugacities: Optional[np.ndarray | Sequence] = None,
    ) -> None:
        nphase = self.num_phases
        ncomp = self.num_components

        self._saturations: np.ndarray = _frozen(saturations, "saturations")
        """Stored saturations, row-wise per phase."""

        self._mole_fractions: np.ndarray = _frozen(mole_fractions, "mole_fractions")
        """Stored mole fractions, with phases on axis 0 and components on axis 1."""

        self._densities: np.ndarray = _frozen(densities, "densities")
        """Stored mass densities, row-wise per phase."""

        self._phase_pressures: np.ndarray = _frozen(phase_pressures, "phase_pressures")
        """Stored phase pressures, row-wise per phase."""

        self._temperature: np.ndarray = _frozen(temperature, "temperature")
        """Stored temperature values."""

        self._molar_masses: np.ndarray = _frozen(molar_masses, "molar_masses")
        """Molar masses per component."""

        self._fugacities: Optional[np.ndarray] = (
            None if fugacities is None else _frozen(fugacities, "fugacities")
        )
        """Stored fugacities per component, if provided."""

        # shape of the values per quantity, () for scalar states
        self._value_shape: tuple[int, ...] = self._temperature.shape

        expected = {
            "saturations": (self._saturations, (nphase,)),
            "mole_fractions": (self._mole_fractions, (nphase, ncomp)),
            "densities": (self._densities, (nphase,)),
            "phase_pressures": (self._phase_pressures, (nphase,)),
        }
        if self._fugacities is not None:
            expected["fugacities"] = (self._fugacities, (ncomp,))
        for name, (arr, leading) in expected.items():
            if arr.shape != leading + self._value_shape:
                raise ValueError(
                    f"Expecting {name} of shape {leading + self._value_shape},"
                    + f" got {arr.shape}."
                )
        if self._molar_masses.shape != (ncomp,):
            raise ValueError(
                f"Expecting {ncomp} molar masses, got shape {self._molar_masses.shape}."
            )
        if np.any(self._molar_masses <= 0.0):
            raise ValueError("Molar masses must be strictly positive.")

        m_avg = average_molar_masses(self._mole_fractions, self._molar_masses)
        m_avg.flags.writeable = False
        self._average_molar_masses: np.ndarray = m_avg
        """Mole-fraction-weighted molar masses per phase."""

        if self._value_shape == ():
            c = mixture_concentrations(
                self._densities, self._mole_fractions, self._molar_masses
            )
        else:
            c = np.divide(
                self._densities[:, np.newaxis] * self._mole_fractions,
                m_avg[:, np.newaxis],
                out=np.zeros_like(self._mole_fractions),
                where=m_avg[:, np.newaxis] > 0.0,
            )
        c.flags.writeable = False
        self._concentrations: np.ndarray = c
        """Concentrations per phase and component. Zero for absent phases."""

        c_phase = np.divide(
            self._densities,
            m_avg,
            out=np.zeros_like(self._densities),
            where=m_avg > 0.0,
        )
        c_phase.flags.writeable = False
        self._phase_concentrations: np.ndarray = c_phase
        """Sum of concentrations per phase. Zero for absent phases."""

        logger.debug(
            f"Populated {type(self).__name__} with {nphase} phases and {ncomp}"
            + f" components (value shape {self._value_shape})."
        )

    @property
    def value_shape(self) -> tuple[int, ...]:
        """Shape of the value returned by each accessor. ``()`` for scalar states."""
        return self._value_shape

    def saturation(self, phase_idx: int) -> ScalarType:
        return cast(ScalarType, self._saturations[phase_idx])

    def mole_frac(self, phase_idx: int, comp_idx: int) -> ScalarType:
        return cast(ScalarType, self._mole_fractions[phase_idx, comp_idx])

    def phase_concentration(self, phase_idx: int) -> ScalarType:
        return cast(ScalarType, self._phase_concentrations[phase_idx])

    def concentration(self, phase_idx: int, comp_idx: int) -> ScalarType:
        return cast(ScalarType, self._concentrations[phase_idx, comp_idx])

    def density(self, phase_idx: int) -> ScalarType:
        return cast(ScalarType, self._densities[phase_idx])

    def average_molar_mass(self, phase_idx: int) -> ScalarType:
        return cast(ScalarType, self._average_molar_masses[phase_idx])

    def fugacity(self, component_idx: int) -> ScalarType:
        """Returns the stored fugacity of a component.

        If no fugacities were given at instantiation, the ideal-gas limit
        ``R * T * c`` is returned, with the concentration of the component in the first
        phase with :attr:`~porefluid._core.PhysicalState.gas` state.

        Raises:
            FluidStateNotImplementedError: If no fugacities were given and the fluid
                has no gas phase.

        """
        if self._fugacities is not None:
            return cast(ScalarType, self._fugacities[component_idx])

        for phase_idx, phase_state in enumerate(self.phase_states):
            if phase_state == PhysicalState.gas:
                return cast(
                    ScalarType,
                    ideal_gas_fugacity(
                        self._temperature,
                        self._concentrations[phase_idx, component_idx],
                    ),
                )

        raise self._not_implemented("fugacity")

    def phase_pressure(self, phase_idx: int) -> ScalarType:
        return cast(ScalarType, self._phase_pressures[phase_idx])

    def temperature(self) -> ScalarType:
        return cast(ScalarType, self._temperature[()])


def fluid_state_type(
    num_phases: int,
    num_components: int,
    num_solvents: Optional[int] = None,
    phase_states: Optional[Sequence[PhysicalState]] = None,
    name: Optional[str] = None,
) -> type[ExplicitFluidState]:
    """Creates a concrete subclass of :class:`ExplicitFluidState` for a fluid system.

    Parameters:
        num_phases: Number of phases in the fluid system.
        num_components: Number of components in the fluid system.
        num_solvents: ``default=None``

            Number of solvents. If None, all components are considered solvents.
        phase_states: ``default=None``

            Physical states per phase. If None, all phases are assigned a liquid state.
        name: ``default=None``

            Name of the created class. Defaults to a name containing the numbers of
            phases and components.

    Raises:
        FluidStateConformanceError: If the capability constants are invalid.
        ValueError: If the number of given phase states does not match
            ``num_phases``, or any of them is not a :class:`PhysicalState`.

    Returns:
        A concrete fluid state class.

    """
    if num_solvents is None:
        num_solvents = num_components
    if name is None:
        name = f"ExplicitFluidState{num_phases}p{num_components}c"

    # class creation runs the conformance check
    cls = cast(
        "type[ExplicitFluidState]",
        type(
            name,
            (ExplicitFluidState,),
            {
                "num_phases": num_phases,
                "num_components": num_components,
                "num_solvents": num_solvents,
                "__module__": __name__,
            },
        ),
    )

    if phase_states is None:
        cls.phase_states = tuple([PhysicalState.liquid] * num_phases)
    else:
        if len(phase_states) != num_phases:
            raise ValueError(
                f"Need {num_phases} phase states, got {len(phase_states)}."
            )
        for phase_state in phase_states:
            if not isinstance(phase_state, PhysicalState):
                raise ValueError(
                    f"Phase states must be of type PhysicalState, got {phase_state!r}."
                )
        cls.phase_states = tuple(phase_states)

    return cls
