"""Native desktop notifications.

Dispatches to the notifier each platform ships with:
- macOS: terminal-notifier, falling back to osascript
- Windows: a PowerShell toast
- Linux: notify-send

Delivery is best-effort. Failures are logged, never raised to the caller.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from xml.sax.saxutils import escape as xml_escape

from qdrant_local.core.constants import DEFAULT_NOTIFICATION_TITLE
from qdrant_local.core.exceptions import NotificationError
from qdrant_local.runners.command import CommandRunner, run_command

logger = logging.getLogger(__name__)

MACOS_SOUND = "Tink"
WINDOWS_APP_ID = DEFAULT_NOTIFICATION_TITLE

_WINDOWS_TOAST_SCRIPT = """
[Windows.UI.Notifications.ToastNotificationManager, Windows.UI.Notifications, ContentType = WindowsRuntime] | Out-Null
[Windows.Data.Xml.Dom.XmlDocument, Windows.Data.Xml.Dom.XmlDocument, ContentType = WindowsRuntime] | Out-Null

$template = @"
<toast>
    <visual>
        <binding template="ToastText02">
            <text id="1">{subtitle}</text>
            <text id="2">{message}</text>
        </binding>
    </visual>
</toast>
"@

$xml = New-Object Windows.Data.Xml.Dom.XmlDocument
$xml.LoadXml($template)
$toast = [Windows.UI.Notifications.ToastNotification]::new($xml)
[Windows.UI.Notifications.ToastNotificationManager]::CreateToastNotifier("{app_id}").Show($toast)
"""


def _escape_quotes(value: str) -> str:
    return value.replace('"', '\\"')


def _show_macos(
    title: str,
    subtitle: str,
    message: str,
    runner: CommandRunner,
    app_icon: Path | None,
) -> None:
    args = ["-message", message]
    if title:
        args.extend(["-title", title])
    if subtitle:
        args.extend(["-subtitle", subtitle])
    args.extend(["-sound", MACOS_SOUND])
    if app_icon is not None:
        args.extend(["-appIcon", str(app_icon)])

    result = runner("terminal-notifier", args)
    if result.success:
        return
    # Not installed, or refused; osascript is always present on macOS.
    logger.debug(f"terminal-notifier failed, falling back to osascript: {result.stderr.strip()}")

    script = (
        f'display notification "{message}" with title "{title}" '
        f'subtitle "{subtitle}" sound name "{MACOS_SOUND}"'
    )
    result = runner("osascript", ["-e", script])
    if not result.success:
        raise NotificationError(f"Failed to show macOS notification: {result.stderr.strip()}")


def _show_windows(subtitle: str, message: str, runner: CommandRunner) -> None:
    script = _WINDOWS_TOAST_SCRIPT.format(
        subtitle=xml_escape(subtitle),
        message=xml_escape(message),
        app_id=WINDOWS_APP_ID,
    )
    result = runner("powershell", ["-Command", script])
    if not result.success:
        raise NotificationError(f"Failed to show Windows notification: {result.stderr.strip()}")


def _show_linux(title: str, subtitle: str, message: str, runner: CommandRunner) -> None:
    full_message = f"{subtitle}\n{message}" if subtitle else message
    result = runner("notify-send", [title, full_message])
    if not result.success:
        raise NotificationError(f"Failed to show Linux notification: {result.stderr.strip()}")


def send_system_notification(
    message: str,
    title: str | None = None,
    subtitle: str | None = None,
    *,
    platform: str | None = None,
    runner: CommandRunner | None = None,
    app_icon: Path | None = None,
) -> bool:
    """Show a desktop notification on the current platform.

    Args:
        message: Notification body (required)
        title: Heading, defaults to "Qdrant Local"
        subtitle: Optional second line
        platform: Override for ``sys.platform``
        runner: Command invocation primitive, ``run_command`` by default
        app_icon: Icon shown by terminal-notifier on macOS

    Returns:
        True if a notifier accepted the notification. Failures are logged.
    """
    runner = runner or run_command
    platform = platform or sys.platform

    try:
        if not message:
            raise NotificationError("Message is required")

        title = _escape_quotes(title or DEFAULT_NOTIFICATION_TITLE)
        subtitle = _escape_quotes(subtitle or "")
        message = _escape_quotes(message)

        if platform == "darwin":
            _show_macos(title, subtitle, message, runner, app_icon)
        elif platform == "win32":
            _show_windows(subtitle, message, runner)
        elif platform.startswith("linux"):
            _show_linux(title, subtitle, message, runner)
        else:
            raise NotificationError(f"Unsupported platform: {platform}")
    except NotificationError as e:
        logger.error(f"Could not show system notification: {e}")
        return False

    return True
