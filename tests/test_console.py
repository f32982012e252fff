#!/usr/bin/env python3

import logging

import pytest

from symcollect.console import TRACE, Console, level_for_verbosity


@pytest.mark.parametrize(
    "verbosity,level",
    [
        (0, logging.WARNING),
        (1, logging.INFO),
        (2, logging.DEBUG),
        (3, TRACE),
        (5, TRACE),
    ],
)
def test_level_for_verbosity(verbosity, level):
    assert level_for_verbosity(verbosity) == level


def test_trace_is_below_debug():
    assert TRACE < logging.DEBUG
    assert logging.getLevelName(TRACE) == "TRACE"


def test_setup_logging_replaces_handlers():
    console = Console()
    console.setup_logging(1)
    log = console.setup_logging(2)
    assert log.level == logging.DEBUG
    assert len(log.handlers) == 1
    assert not log.propagate
