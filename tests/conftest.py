"""Shared pytest fixtures and configuration for pytest."""

import sys

import pytest

from clipkeep.analysis.budget import AnalysisStats, PerformanceBudget
from clipkeep.capture.types import AvailableFormats
from clipkeep.core.errors import FormatReadError


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for platform-specific tests."""
    config.addinivalue_line("markers", "unix_only: mark test to run only on Unix")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Auto-skip tests based on platform markers."""
    skip_unix = pytest.mark.skip(reason="Unix-only test")

    for item in items:
        if "unix_only" in item.keywords and sys.platform == "win32":
            item.add_marker(skip_unix)


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


class ExpiringClock:
    """Clock that jumps one second on every read after the first.

    A budget built on it is already exhausted at its first check_timeout().
    """

    def __init__(self) -> None:
        self._calls = 0

    def __call__(self) -> float:
        value = float(self._calls)
        self._calls += 1
        return value


class FakeClipboard:
    """In-memory ClipboardSource.

    Pass content per format; pass an Exception instance to make that read fail.
    Formats are advertised when given (even when the read will fail).
    """

    def __init__(self, **formats: object) -> None:
        self.formats = formats
        self.reads: list[str] = []

    def available_formats(self) -> AvailableFormats:
        return AvailableFormats(**{name: True for name in self.formats})

    def _read(self, name: str) -> object:
        self.reads.append(name)
        value = self.formats[name]
        if isinstance(value, Exception):
            raise value
        return value

    def read_text(self) -> str:
        return self._read("text")

    def read_html(self) -> str:
        return self._read("html")

    def read_rtf(self) -> str:
        return self._read("rtf")

    def read_image_base64(self) -> str:
        return self._read("image")

    def read_files(self) -> list[str]:
        return self._read("files")


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stats() -> AnalysisStats:
    """Isolated counters so tests don't touch the process-wide stats."""
    return AnalysisStats()


@pytest.fixture
def budget(stats: AnalysisStats) -> PerformanceBudget:
    """A generous budget for tests that don't exercise timeouts."""
    return PerformanceBudget(60_000, 10 * 1024 * 1024, stats=stats)


@pytest.fixture
def read_error() -> FormatReadError:
    return FormatReadError("html", "clipboard busy")


@pytest.fixture
def expiring_clock() -> ExpiringClock:
    return ExpiringClock()


@pytest.fixture
def make_clipboard() -> type[FakeClipboard]:
    """Factory for in-memory clipboards: make_clipboard(text="hi", html=err)."""
    return FakeClipboard
