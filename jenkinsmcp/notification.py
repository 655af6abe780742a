"""Desktop notifications for finished builds."""

from __future__ import annotations

import json
import subprocess
import sys
from dataclasses import dataclass, field


def _detect_os() -> str:
    platform = sys.platform
    if platform.startswith("linux"):
        return "linux"
    if platform == "win32":
        return "windows"
    return platform


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


@dataclass
class Notifier:
    """Sends desktop notifications using the platform's notification tool."""

    os_type: str = field(default_factory=_detect_os)

    def send(self, title: str, message: str) -> None:
        """Show a notification; failures are reported on stderr, never raised."""
        if self.os_type == "darwin":
            script = f"display notification {_quote(message)} with title {_quote(title)}"
            command = ["osascript", "-e", script]
        elif self.os_type == "linux":
            command = ["notify-send", title, message]
        else:
            print(f"Desktop notifications not supported on {self.os_type}", file=sys.stderr)
            return

        try:
            subprocess.run(
                command,
                check=True,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            print(f"Failed to send desktop notification: {exc}", file=sys.stderr)


def send_build_complete(job: str, build_number: int, result: str) -> None:
    """Notify that a build of a job finished with the given result."""
    Notifier().send("Jenkins Build Complete", f"Job: {job} #{build_number} - {result}")