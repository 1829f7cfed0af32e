"""   porefluid.

Root directory for the porefluid package, which defines the contract for fluid states
of multiphase multicomponent fluids in porous media flow simulations.

Contains the following modules:

fluid_state: The abstract contract :class:`FluidState` and its conformance check.

states: A storage-backed fluid state and a factory for concrete fluid state types.

consistency: Checks of physical invariants of populated fluid states.

utils: Exception classes and mixture relations.

Units are SI units throughout.

isort:skip_file

"""

import configparser
import os
import warnings
from pathlib import Path

__version__ = "0.1.0"

from porefluid import _core

# Try to read the config file from the directory where python process was launched
try:
    cwd = Path(os.getcwd())
    pth = cwd / Path("porefluid.cfg")
    cfg = configparser.ConfigParser()
    cfg.read(pth)
    config = dict(cfg)
except (OSError, configparser.Error):
    # the assumption is that no configurations are given
    config = {}

# Flags must be set before the numba-compiled functions are imported.
# Malformed values are ignored with a warning, and the defaults are kept.
if "porefluid" in config:
    try:
        _core.UNITY_TOLERANCE = config["porefluid"].getfloat(
            "unity_tolerance", _core.UNITY_TOLERANCE
        )
    except ValueError:
        warnings.warn(
            "Malformed 'unity_tolerance' in porefluid.cfg. Using default value"
            + f" {_core.UNITY_TOLERANCE}."
        )
    try:
        _core.NUMBA_CACHE = config["porefluid"].getboolean(
            "numba_cache", _core.NUMBA_CACHE
        )
    except ValueError:
        warnings.warn(
            "Malformed 'numba_cache' in porefluid.cfg. Using default value"
            + f" {_core.NUMBA_CACHE}."
        )

from porefluid._core import *
from porefluid.utils import *
from porefluid.fluid_state import *
from porefluid.states import *
from porefluid.consistency import *

from porefluid import consistency, fluid_state, states, utils
