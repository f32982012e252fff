#!/usr/bin/env python3

import logging

from rich.console import Console as RichConsole
from rich.logging import RichHandler

# Below DEBUG: per-unit token dumps.
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO, 2: logging.DEBUG}


def level_for_verbosity(verbosity: int) -> int:
    """Map a -v count to a logging level."""
    return VERBOSITY_LEVELS.get(verbosity, TRACE)


class Console:
    """Simple console wrapper for diagnostics on stderr."""

    def __init__(self):
        self._rich = RichConsole(stderr=True)

    def setup_logging(self, verbosity: int) -> logging.Logger:
        """Route the package logger through Rich at the level for ``verbosity``."""
        log = logging.getLogger("symcollect")
        log.setLevel(level_for_verbosity(verbosity))
        for handler in list(log.handlers):
            log.removeHandler(handler)
        log.addHandler(RichHandler(console=self._rich, show_path=False, markup=False))
        log.propagate = False
        return log
