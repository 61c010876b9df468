"""
Pytest configuration for PageQuill
"""

import logging
import sys
from pathlib import Path
from typing import Callable, List

import pytest

from pagequill.engine.measurement import MeasurementOracle
from pagequill.engine.page_style import PageStyle
from pagequill.exceptions import MeasurementUnavailableError
from pagequill.models.blocks import Generic, Heading, ManualBreak, TextRun


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid leaking handlers between tests."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(name)s - %(levelname)s - %(message)s'))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def style():
    """Default A4 page style."""
    return PageStyle()


class FakeTimer:
    """Timer stand-in that only fires when the test says so."""

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if self.started and not self.cancelled:
            self.callback()


class FakeTimerFactory:
    """Collects every timer created by a scheduler."""

    def __init__(self) -> None:
        self.timers: List[FakeTimer] = []

    def __call__(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]

    def fire_all(self) -> None:
        for timer in list(self.timers):
            timer.fire()


@pytest.fixture
def fake_timers():
    return FakeTimerFactory()


class UnmountedOracle(MeasurementOracle):
    """Oracle whose measuring surface is never available."""

    def capacity_for(self, style):
        raise MeasurementUnavailableError("surface detached")

    def fits(self, style, fragments):
        raise MeasurementUnavailableError("surface detached")


@pytest.fixture
def unmounted_oracle():
    return UnmountedOracle()


@pytest.fixture
def sample_blocks():
    """Small mixed document: heading, text, break, heading, paragraph."""
    return [
        Heading(level=1, text="Intro", markup="<h1>Intro</h1>"),
        TextRun("Hello world"),
        ManualBreak(),
        Heading(level=2, text="Details", markup="<h2>Details</h2>"),
        Generic(markup="<p>Body text</p>", text="Body text", tag="p"),
    ]


@pytest.fixture
def sample_html():
    return (
        "<h1>Intro</h1>"
        "<p>First paragraph</p>"
        "<hr>"
        "<h2>Details</h2>"
        "<p>Second paragraph</p>"
    )


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    # Ignore logging errors during tests
    logging.raiseExceptions = False
