"""Logging for the serve solvers.

The `py_servecalc` logger reports at INFO on the console. Solver internals (bracket
widening, bisection results, input floors, the maximum-range and maximum-height
searches) are logged at DEBUG. Switch them on with `set_debug(True)` or `pyserve -d`,
or send them to a file with `enable_file_logging`. File records carry the module and
function of the solver step that emitted them.

Examples:
    ```python
    from py_servecalc.logger import enable_file_logging, disable_file_logging

    enable_file_logging("serve_debug.log")
    ...  # every bracket search now lands in serve_debug.log
    disable_file_logging()
    ```
"""
import logging
from typing import Optional

__all__ = ('logger',
           'set_debug',
           'enable_file_logging',
           'disable_file_logging',
)

console_handler = logging.StreamHandler()
console_handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
console_handler.setLevel(logging.DEBUG)

logger: logging.Logger = logging.getLogger('py_servecalc')
logger.addHandler(console_handler)
logger.setLevel(logging.INFO)

file_handler: Optional[logging.FileHandler] = None


def set_debug(enabled: bool = True) -> int:
    """Toggle DEBUG output of the solver steps.

    Returns:
        The previous logger level, so callers can restore it.
    """
    previous = logger.level
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)
    if enabled:
        logger.info("Solver debug messages enabled")
    return previous


def enable_file_logging(filename: str = "serve_debug.log") -> None:
    """Write every solver message (DEBUG and above) to `filename`, appending.

    Replaces the file handler of a previous call.
    """
    global file_handler
    if file_handler is not None:
        disable_file_logging()

    file_handler = logging.FileHandler(filename)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s:%(levelname)s:%(module)s.%(funcName)s: %(message)s"))
    logger.addHandler(file_handler)


def disable_file_logging() -> None:
    """Detach and close the file handler, if any."""
    global file_handler
    if file_handler is not None:
        logger.removeHandler(file_handler)
        file_handler.close()
        file_handler = None
