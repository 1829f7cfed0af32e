"""This private module contains central constants and flags for the entire
``porefluid`` package.

Changes here should be done with much care. The flags in this module can be
overwritten at import time by a ``porefluid.cfg`` file in the working directory
(see :mod:`porefluid`).

"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "R_IDEAL_MOL",
    "UNITY_TOLERANCE",
    "PhysicalState",
]


NUMBA_CACHE: bool = True
"""Flag to instruct the numba compiler to cache (!and use cached!) functions.

Caching does not recognize changes in nested functions and hence does not trigger
re-compilation. Use with care during development.

See Also:
    https://numba.readthedocs.io/en/stable/user/jit.html#cache

"""

NUMBA_FAST_MATH: bool = False
"""Flag to instruct the numba compiler to use it's ``fastmath`` functions.

To be used with care, due to loss in precision.

"""

R_IDEAL_MOL: float = 8.31446261815324
"""Universal gas constant in ``[J / K mol]``."""

UNITY_TOLERANCE: float = 1e-10
"""Default absolute tolerance used when checking that families of fractions (
saturations, mole fractions) sum up to 1, and the default relative tolerance for
mixture relations between densities, molar masses and concentrations."""


class PhysicalState(Enum):
    """Enum object for characterizing the physical states of a phase.

    - :attr:`liquid`: liquid-like state (value 0)
    - :attr:`gas`: gas-like state (value 1)

    """

    liquid: int = 0
    gas: int = 1
