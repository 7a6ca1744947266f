"""Serve calculator interface.

This module provides the `Calculator` class, the primary interface for serve
computations, and `compute_angles`, a one-call helper taking the flat form record.

Key Classes:
    - Calculator: Serve calculator delegating to a ServeEngine
"""
from dataclasses import dataclass, field
from typing import Any

from typing_extensions import Optional, Union

from py_servecalc.conditions import ServeInput, ServeProps, ServeSide, TargetZone
from py_servecalc.engine import (ServeEngine, ServeEngineConfig, ServeEngineConfigDict,
                                 create_serve_engine_config)
from py_servecalc.logger import logger
from py_servecalc.solution import ServeSolution

ConfigT = Union[ServeEngineConfigDict, ServeEngineConfig]

_default_config: ServeEngineConfigDict = {}


def set_default_config(config: Optional[ServeEngineConfigDict] = None) -> None:
    """Set the engine overrides used by calculators created without a config.

    Args:
        config: Override dict, or None to restore the built-in defaults.

    Raises:
        TypeError: If a key is not a ServeEngineConfig field. The previous default is kept.
    """
    global _default_config
    if config:
        create_serve_engine_config(config)
    _default_config = ServeEngineConfigDict(**config) if config else ServeEngineConfigDict()
    logger.debug(f"Default engine config set to {_default_config}")


def get_default_config() -> ServeEngineConfigDict:
    """Engine overrides used by calculators created without a config."""
    return ServeEngineConfigDict(**_default_config)


@dataclass
class Calculator:
    """Basic interface for the serve calculator."""

    config: Optional[ConfigT] = field(default=None)
    _engine_instance: ServeEngine = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        config = self.config if self.config is not None else get_default_config()
        self._engine_instance = ServeEngine(config)

    def __getattr__(self, item: str) -> Any:
        """Delegate attribute access to the underlying engine instance.

        Raises:
            AttributeError: If the attribute is found neither on the `Calculator`
                nor on its engine.
        """
        if item == '_engine_instance':
            raise AttributeError(item)
        if hasattr(self._engine_instance, item):
            return getattr(self._engine_instance, item)
        raise AttributeError(
            f"'{self.__class__.__name__}' object or its underlying engine "
            f"'{self._engine_instance.__class__.__name__}' has no attribute '{item}'"
        )

    def solve(self, serve_input: ServeInput) -> ServeSolution:
        """Compute elevation and azimuth for the serve.

        Args:
            serve_input: Serve parameters.

        Returns:
            ServeSolution. Never raises with the default (non-strict) configuration.
        """
        return self._engine_instance.solve(serve_input)

    def props(self, serve_input: ServeInput) -> ServeProps:
        """Sanitized SI parameters the engine would use for `serve_input`."""
        return ServeProps.from_input(serve_input, self._engine_instance.config)


def compute_angles(speed_mph: Optional[float],
                   height_feet: Optional[float],
                   height_inches: Optional[float],
                   target: Union[str, TargetZone],
                   step_in_m: Optional[float] = 0.5,
                   clearance_cm: Optional[float] = 20,
                   side: Union[str, ServeSide] = ServeSide.DEUCE,
                   config: Optional[ConfigT] = None) -> ServeSolution:
    """Compute serve angles from the flat form record.

    Examples:
        >>> solution = compute_angles(50, 5, 5, 'wide', 0.5, 20)
        >>> solution.clamped_to_service_line
        False
    """
    serve_input = ServeInput.from_record(speed_mph, height_feet, height_inches, target,
                                         step_in_m, clearance_cm, side)
    return Calculator(config=config).solve(serve_input)


__all__ = ('Calculator', 'compute_angles', 'set_default_config', 'get_default_config')
