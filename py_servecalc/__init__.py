"""Library for computing tennis serve elevation and azimuth angles."""

import importlib.metadata

__version__ = importlib.metadata.version("py_servecalc")

# Standard library imports
import importlib.resources
import os
import sys

# Third-party imports
from typing_extensions import Dict, Optional

# Local imports
from .logger import logger as log
from .unit import Unit, PreferredUnits
from .engine import ServeEngineConfigDict
from .interface import set_default_config

if sys.version_info[:2] < (3, 11):
    import tomli as tomllib
else:
    import tomllib


def _load_config(filepath: Optional[str] = None, suppress_warnings: bool = False) -> None:
    """Load configuration from a .pyserve.toml file.

    Args:
        filepath: Path to configuration file. If None, searches for .pyserve.toml or pyserve.toml
        suppress_warnings: If True, suppress warning messages
    """
    def find_pyserve_toml(start_dir: str = os.getcwd()) -> Optional[str]:
        """Search for a pyserve config file starting from the specified directory and moving up."""
        current_dir = os.path.abspath(start_dir)
        while True:
            pyserve_paths = [
                os.path.join(current_dir, '.pyserve.toml'),
                os.path.join(current_dir, 'pyserve.toml'),
            ]
            for pyserve_path in pyserve_paths:
                if os.path.exists(pyserve_path):
                    return os.path.abspath(pyserve_path)

            parent_dir = os.path.dirname(current_dir)
            if parent_dir == current_dir:
                return None
            current_dir = parent_dir

    if filepath is None:
        filepath = find_pyserve_toml()

    if filepath is not None:
        log.debug(f"Found {os.path.basename(filepath)} at {os.path.dirname(filepath)}")

        with open(filepath, "rb") as fp:
            _config = tomllib.load(fp)

            if _pyserve := _config.get('pyserve'):
                if preferred_units := _pyserve.get('preferred_units'):
                    PreferredUnits.set(**preferred_units)
                elif not suppress_warnings:
                    log.warning("Config has no `pyserve.preferred_units` section")
                if engine := _pyserve.get('engine'):
                    set_default_config(ServeEngineConfigDict(**engine))
            elif not suppress_warnings:
                log.warning("Config has no `pyserve` section")

    log.debug("Calculator globals and PreferredUnits load success")


def _basic_config(filename: Optional[str] = None,
                  preferred_units: Optional[Dict[str, Unit]] = None,
                  engine: Optional[ServeEngineConfigDict] = None,
                  suppress_warnings: bool = False) -> None:
    """Load preferred units and engine defaults from file or Mapping.

    Args:
        filename: Configuration file path
        preferred_units: Dictionary of preferred units
        engine: Dictionary of engine config overrides
        suppress_warnings: If True, suppress warning messages

    Raises:
        ValueError: If both filename and preferred_units (or engine) are provided
        TypeError: If the engine overrides name an unknown ServeEngineConfig field
    """
    if filename and (preferred_units or engine):
        raise ValueError("Can't use preferred_units or engine and config file at same time")
    if not filename and (preferred_units or engine):
        if preferred_units:
            PreferredUnits.set(**preferred_units)
        if engine:
            set_default_config(engine)
    else:
        # trying to load definitions from pyserve.toml
        _load_config(filename, suppress_warnings)


def _resolve_resource_path(path: str) -> str:
    """Resolve a resource path relative to the package."""
    return str(importlib.resources.files('py_servecalc').joinpath(path))


def _load_imperial_units() -> None:
    """Load imperial unit preferences."""
    _basic_config(_resolve_resource_path('assets/.pyserve-imperial.toml'), suppress_warnings=True)


def _load_metric_units() -> None:
    """Load metric unit preferences."""
    _basic_config(_resolve_resource_path('assets/.pyserve-metric.toml'), suppress_warnings=True)


loadImperialUnits = _load_imperial_units
loadMetricUnits = _load_metric_units

basicConfig = _basic_config

basicConfig()


from .conditions import TargetZone, ServeSide, ServeInput, ServeProps
from .constants import (cBaselineToNet, cNetHeight, cServiceDepth, cHalfServiceWidth,
                        cGravityConstant)
from .engine import (create_serve_engine_config, ServeEngineConfig, DEFAULT_SERVE_ENGINE_CONFIG,
                     ServeEngine)
from .exceptions import (UnitTypeError, UnitConversionError, UnitAliasError,
                         SolverRuntimeError, BracketError)
from .interface import Calculator, compute_angles, get_default_config
from .logger import logger, set_debug, enable_file_logging, disable_file_logging
from .roots import Bracket, RootResult, find_bracket, bisect, find_root, golden_section_max
from .solution import ServeStatus, ServeCandidates, ServeSolution
from .trajectory import TrajectorySample, height_at, landing_distance, sample_trajectory
from .unit import Angular, Distance, Velocity, GenericDimension, UnitProps, UnitPropsDict, UnitAliases

# DRY: build __all__ from global symbols
_SKIP_GLOBALS = {
    # Skip Python builtins
    "__name__", "__doc__", "__package__", "__loader__", "__spec__",
    "__file__", "__cached__", "__builtins__",
    # Skip imported modules
    "tomllib", "sys", "os", "importlib",
    # Skip private/internal symbols
    "_load_config", "_basic_config", "_resolve_resource_path",
    "_load_imperial_units", "_load_metric_units", "log",
}
__all__ = [
    name for name in globals()
    if not name.startswith("_") and name not in _SKIP_GLOBALS
]
