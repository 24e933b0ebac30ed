"""Tests for reporter abstraction."""

import pytest

from ramanmix.core.shared.reporter import NullReporter, Reporter
from ramanmix.ui.console import console
from ramanmix.ui.reporter import ConsoleReporter


class MockReporter:
    """Test double for capturing reporter calls."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def action(self, message: str) -> None:
        self.messages.append(("action", message))

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))


class TestReporterProtocol:
    """Tests for Reporter protocol compliance."""

    @pytest.mark.parametrize(
        "reporter",
        [
            NullReporter(),
            MockReporter(),
            ConsoleReporter(),
        ],
        ids=["null", "mock", "console"],
    )
    def test_satisfies_protocol(self, reporter) -> None:
        """Every reporter implementation satisfies the Reporter protocol."""
        assert isinstance(reporter, Reporter)


class TestNullReporter:
    """Tests for NullReporter."""

    def test_null_reporter_methods_return_none(self) -> None:
        """NullReporter methods should return None."""
        reporter = NullReporter()
        assert reporter.action("test") is None
        assert reporter.info("test") is None
        assert reporter.warning("test") is None
        assert reporter.error("test") is None
        assert reporter.success("test") is None


class TestConsoleReporter:
    """Tests for ConsoleReporter."""

    def test_prints_brackets_verbatim(self) -> None:
        """Sample names with square brackets are not parsed as markup."""
        reporter = ConsoleReporter()
        with console.capture() as capture:
            reporter.success("sample[1]: m1=3")
        assert "sample[1]: m1=3" in capture.get()
