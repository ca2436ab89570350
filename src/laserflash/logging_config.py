"""
Logging Setup
=============
Attaches handlers to the ``laserflash`` logger namespace.

The solver modules only create module-level loggers
(``logging.getLogger(__name__)``) and never configure them. A script or
host application calls :func:`setup_logging` once to see their output.

What gets logged
----------------
* DEBUG: grid, fine steps per sample, per-run constants of the schemes.
* INFO: start and end of a solve.
* WARNING: time-step refinement forced by a short pulse.
* ERROR: a nonlinear step hitting its iteration cap (the error is raised
  as well).
"""
import logging
import sys
from typing import Optional, Union

NAMESPACE = "laserflash"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Route solver messages to stdout and, optionally, to a file.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Numeric level or level name ("DEBUG", "info", ...).
        log_file: Path of a log file, truncated on every call.

    Returns:
        The configured ``laserflash`` logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {level}")

    solver_logger = logging.getLogger(NAMESPACE)
    solver_logger.setLevel(level)

    for handler in list(solver_logger.handlers):
        solver_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        solver_logger.addHandler(handler)

    solver_logger.debug(f"Logging to {len(handlers)} handler(s) at level {logging.getLevelName(level)}")
    return solver_logger
