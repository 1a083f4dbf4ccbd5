"""Unity Hub installer output parser.

Converts raw progress text from ``Unity Hub --headless install`` into
InstallerEvent records. The hub interleaves diagnostic noise with its
progress protocol, so unrecognized lines are dropped silently.

Recognized lines:
    Error: <message>                      -> hub-level error event
    [<module>] <status>[ <progress>%][...] -> module status event
"""

import re

from .schema import InstallerEvent
from .schema import InstallerStatus

HUB_MODULE = "UnityHub"
"""Module id attached to process-level ``Error:`` lines."""

_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_ERROR_LINE = re.compile(r"^Error:.*$")
_STATUS_LINE = re.compile(r"^\[(?P<module>[^\]]+)\]\s+(?P<status>.+?)(?:\s+(?P<progress>\d+(?:\.\d+)?)%)?\.*$")


def _coerce_status(text: str) -> InstallerStatus | str:
    try:
        return InstallerStatus(text)
    except ValueError:
        return text


def parse_installer_output(raw: str) -> list[InstallerEvent]:
    """
    Parse a chunk of hub output into installer events.

    The error pass and the status pass scan every line independently, so the
    result lists all error events first and then all status events, each in
    source order.

    Args:
        raw: One or more lines of hub output, any line-ending style

    Returns:
        Parsed events; empty when nothing in the chunk is recognized

    Example:
        >>> parse_installer_output("[Android] Downloading 42%")
        [InstallerEvent(module='Android', status=<InstallerStatus.DOWNLOADING: 'Downloading'>, progress=42.0, error=None)]
    """
    lines = _LINE_BREAK.split(raw)
    events: list[InstallerEvent] = []

    for line in lines:
        if _ERROR_LINE.match(line):
            events.append(
                InstallerEvent(
                    module=HUB_MODULE,
                    status=InstallerStatus.ERROR,
                    error=line.strip(),
                )
            )

    for line in lines:
        match = _STATUS_LINE.match(line)
        if not match:
            continue

        status_text = match.group("status")
        if status_text.endswith("..."):
            status_text = status_text[:-3]
        status = _coerce_status(status_text.strip())

        progress_text = match.group("progress")
        if progress_text is not None:
            progress: float | None = min(float(progress_text), 100.0)
        elif status == InstallerStatus.DOWNLOADING:
            progress = 0.0
        else:
            progress = None

        events.append(
            InstallerEvent(
                module=match.group("module").strip(),
                status=status,
                progress=progress,
            )
        )

    return events
