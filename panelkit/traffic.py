"""Traffic shown in a persistent connection window, and its typed history."""

from __future__ import annotations

import html
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE


@dataclass
class TrafficEntry:
    """One packet sent or received on the connection.

    ``text`` is the packet's display text; when not given it is the data
    decoded as UTF-8.
    """

    data: bytes = b""
    from_ip: str = ""
    text: str | None = None

    def __post_init__(self) -> None:
        if self.text is None:
            self.text = self.data.decode("utf-8", errors="replace")

    @property
    def is_from_you(self) -> bool:
        return self.from_ip.lower() == "you"


@dataclass
class CommandHistory:
    """Commands typed into the connection, each kept once in first-use order."""

    commands: list[str] = field(default_factory=list)

    def add(self, command: str) -> bool:
        """Remember ``command``; return False if it is empty or already known."""
        if not command or command in self.commands:
            return False
        self.commands.append(command)
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def __contains__(self, command: object) -> bool:
        return command in self.commands


def format_elapsed(ms: int) -> str:
    """Connection time as hh:mm:ss; hours grow past two digits when needed."""
    if ms < 0:
        raise ValueError("elapsed time cannot be negative")
    hours, rest = divmod(int(ms), _MS_PER_HOUR)
    minutes, rest = divmod(rest, _MS_PER_MINUTE)
    seconds = rest // _MS_PER_SECOND
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def render_raw(entries: Iterable[TrafficEntry]) -> str:
    """All packet data decoded and run together, as the raw view shows it."""
    return "".join(entry.data.decode("utf-8", errors="replace") for entry in entries)


def _escape(text: str) -> str:
    return html.escape(text, quote=False).replace('"', "&quot;")


def render_html(entries: Iterable[TrafficEntry]) -> str:
    """An HTML page with a packet count and one paragraph per packet.

    Packets sent from this side are shown in light green.
    """
    items = list(entries)
    parts = ["<html>", f"<b>{len(items)} packets.</b><br>"]
    for entry in items:
        parts.append("<p style='color:lightgreen'>" if entry.is_from_you else "<p>")
        parts.append(_escape(entry.text or ""))
        parts.append("</p>")
    parts.append("</html>")
    return "".join(parts)