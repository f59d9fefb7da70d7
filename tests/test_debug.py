"""Logging levels and component filtering of the debug manager."""

import logging

import pytest

from gridgames.debug import DebugLevel, debug


@pytest.fixture
def debug_level():
    yield
    debug.configure(level=DebugLevel.INFO, components=[], enabled=True)


def test_component_filtering(caplog, debug_level):
    debug.configure(level=DebugLevel.DEBUG, components=["ai"])
    with caplog.at_level(logging.DEBUG, logger="gridgames"):
        debug.debug("hidden", "board")
        debug.debug("shown", "ai")
    messages = [record.getMessage() for record in caplog.records]
    assert "[ai] shown" in messages
    assert not any("hidden" in m for m in messages)


def test_level_threshold(caplog, debug_level):
    debug.configure(level=DebugLevel.WARNING)
    with caplog.at_level(logging.DEBUG, logger="gridgames"):
        debug.info("quiet")
        debug.warning("loud")
    messages = [record.getMessage() for record in caplog.records]
    assert messages == ["loud"]


def test_set_from_string(debug_level):
    assert debug.set_from_string("trace")
    assert debug.level == DebugLevel.TRACE
    assert not debug.set_from_string("verbose")
    assert debug.level == DebugLevel.TRACE


def test_timer_reports_elapsed(debug_level):
    debug.start_timer("t")
    assert debug.end_timer("t") >= 0.0
    assert debug.end_timer("t") is None
