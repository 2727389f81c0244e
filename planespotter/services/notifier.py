"""Notification sinks for newly spotted aircraft."""

from __future__ import annotations

import logging
from pathlib import Path
import subprocess
import sys
from typing import Optional, Protocol

logger = logging.getLogger("planespotter.notifier")


class Notifier(Protocol):
    """Anything that can show a titled message to the user."""

    def notify(self, title: str, message: str) -> None:
        """Deliver one notification."""


class LogNotifier:
    """Write notifications to the application log."""

    def notify(self, title: str, message: str) -> None:
        logger.info("%s %s", title, message.replace("\n", " "))


class DesktopNotifier:
    """Show a desktop notification through the platform's notifier binary.

    Uses ``notify-send`` on Linux and ``osascript`` on macOS. A missing
    binary or a failing call is logged and does not interrupt spotting.
    """

    def __init__(self, icon_path: Optional[str] = None, platform: Optional[str] = None) -> None:
        self.icon_path = icon_path
        self.platform = platform or sys.platform

    def _command(self, title: str, message: str) -> list[str]:
        if self.platform == "darwin":
            script = 'display notification "{}" with title "{}"'.format(
                message.replace('"', '\\"'), title.replace('"', '\\"')
            )
            return ["osascript", "-e", script]

        command = ["notify-send"]
        if self.icon_path and Path(self.icon_path).exists():
            command += ["--icon", str(Path(self.icon_path).resolve())]
        return command + [title, message]

    def notify(self, title: str, message: str) -> None:
        command = self._command(title, message)
        try:
            subprocess.run(
                command,
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            logger.error("Error sending notification: %s", exc)


def get_notifier(kind: str, *, icon_path: Optional[str] = None) -> Notifier:
    """Return the notifier configured by ``kind`` ("desktop" or "log")."""

    if kind.lower() == "log":
        return LogNotifier()
    if kind.lower() == "desktop":
        return DesktopNotifier(icon_path=icon_path)
    raise ValueError(f"Unknown notifier: {kind}")


__all__ = ["DesktopNotifier", "LogNotifier", "Notifier", "get_notifier"]
