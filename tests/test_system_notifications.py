"""Tests for native desktop notification dispatch."""

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from qdrant_local.notifications.system import send_system_notification
from qdrant_local.runners.command import CommandResult

OK = CommandResult(stdout="", stderr="", exit_code=0)
FAILED = CommandResult(stdout="", stderr="not found", exit_code=1)


@pytest.fixture
def runner() -> MagicMock:
    return MagicMock(return_value=OK)


class TestMacOS:
    """Tests for macOS notifications."""

    def test_terminal_notifier(self, runner):
        delivered = send_system_notification(
            "Test Message", title="Test Title", subtitle="Test Subtitle",
            platform="darwin", runner=runner,
        )

        assert delivered is True
        runner.assert_called_once_with(
            "terminal-notifier",
            [
                "-message", "Test Message",
                "-title", "Test Title",
                "-subtitle", "Test Subtitle",
                "-sound", "Tink",
            ],
        )

    def test_app_icon(self, runner):
        send_system_notification(
            "Msg", platform="darwin", runner=runner, app_icon=Path("/icons/qdrant.png")
        )
        args = runner.call_args.args[1]
        assert args[-2:] == ["-appIcon", "/icons/qdrant.png"]

    def test_falls_back_to_osascript(self, runner):
        runner.side_effect = [FAILED, OK]

        delivered = send_system_notification(
            "Test Message", title="Test Title", subtitle="Test Subtitle",
            platform="darwin", runner=runner,
        )

        assert delivered is True
        assert runner.call_count == 2
        command, args = runner.call_args.args
        assert command == "osascript"
        assert args == [
            "-e",
            'display notification "Test Message" with title "Test Title" '
            'subtitle "Test Subtitle" sound name "Tink"',
        ]

    def test_both_notifiers_fail(self, runner, caplog):
        runner.return_value = FAILED

        with caplog.at_level(logging.ERROR):
            delivered = send_system_notification("Msg", platform="darwin", runner=runner)

        assert delivered is False
        assert "Could not show system notification" in caplog.text

    def test_quotes_escaped(self, runner):
        runner.side_effect = [FAILED, OK]

        send_system_notification('Say "hi"', title='The "title"', platform="darwin", runner=runner)

        script = runner.call_args.args[1][1]
        assert 'display notification "Say \\"hi\\""' in script
        assert 'with title "The \\"title\\""' in script


class TestWindows:
    """Tests for Windows notifications."""

    def test_powershell_toast(self, runner):
        delivered = send_system_notification(
            "Test Message", subtitle="Test Subtitle", platform="win32", runner=runner
        )

        assert delivered is True
        command, args = runner.call_args.args
        assert command == "powershell"
        assert args[0] == "-Command"
        assert '<text id="1">Test Subtitle</text>' in args[1]
        assert '<text id="2">Test Message</text>' in args[1]
        assert 'CreateToastNotifier("Qdrant Local")' in args[1]

    def test_toast_text_is_xml_escaped(self, runner):
        send_system_notification("a < b & c", platform="win32", runner=runner)
        assert "a &lt; b &amp; c" in runner.call_args.args[1][1]

    def test_failure(self, runner):
        runner.return_value = FAILED
        assert send_system_notification("Msg", platform="win32", runner=runner) is False


class TestLinux:
    """Tests for Linux notifications."""

    def test_notify_send(self, runner):
        delivered = send_system_notification(
            "Test Message", title="Test Title", platform="linux", runner=runner
        )

        assert delivered is True
        runner.assert_called_once_with("notify-send", ["Test Title", "Test Message"])

    def test_subtitle_joined_with_message(self, runner):
        send_system_notification("Msg", subtitle="Sub", platform="linux", runner=runner)
        runner.assert_called_once_with("notify-send", ["Qdrant Local", "Sub\nMsg"])

    def test_failure_is_logged_not_raised(self, runner, caplog):
        runner.return_value = FAILED

        with caplog.at_level(logging.ERROR):
            delivered = send_system_notification("Msg", platform="linux", runner=runner)

        assert delivered is False
        assert "Failed to show Linux notification" in caplog.text


class TestDispatch:
    """Tests for platform-independent behavior."""

    def test_unsupported_platform(self, runner, caplog):
        with caplog.at_level(logging.ERROR):
            delivered = send_system_notification("Msg", platform="sunos5", runner=runner)

        assert delivered is False
        runner.assert_not_called()
        assert "Unsupported platform" in caplog.text

    def test_empty_message(self, runner):
        assert send_system_notification("", platform="linux", runner=runner) is False
        runner.assert_not_called()
