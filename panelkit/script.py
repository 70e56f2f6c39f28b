"""Button scripts: one command per line, checked first, then run in order."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable

COMMENT_PREFIXES = ("//", "#", ";")
DELAY_PREFIXES = ("sleep:", "delay:")
PANEL_PREFIX = "panel:"
SEND_PAUSE_SECONDS = 0.1

_UINT_MAX = 2**32 - 1
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1
_NUMBER = re.compile(r"[+-]?\d+")


class StepKind(Enum):
    """What a script line asks for."""

    DELAY = "delay"
    PANEL = "panel"
    PACKET = "packet"


@dataclass(frozen=True)
class ScriptStep:
    """One checked line of a script."""

    kind: StepKind
    line: str
    seconds: int = 0
    panel_id: int = 0

    @property
    def packet_name(self) -> str:
        return self.line


class ScriptError(ValueError):
    """A script holds lines that cannot be run; nothing of it is run."""

    def __init__(self, messages: Iterable[str]) -> None:
        self.messages = list(messages)
        super().__init__("\n".join(self.messages))


def _parse_int(text: str, low: int, high: int) -> int:
    text = text.strip()
    if not _NUMBER.fullmatch(text):
        return 0
    value = int(text)
    return value if low <= value <= high else 0


def _script_lines(script: str) -> Iterable[str]:
    for raw in script.split("\n"):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        yield line


def parse_script(
    script: str,
    panel_lookup: Callable[[int], Any],
    packet_lookup: Callable[[str], Any],
) -> list[ScriptStep]:
    """Check every line of ``script`` and return the steps to run.

    ``panel_lookup`` takes a panel id and returns a panel whose ``id`` is 0
    when there is no such panel. ``packet_lookup`` takes a packet name and
    returns something false when there is no such packet. Every problem
    found is gathered into one ScriptError.
    """
    errors: list[str] = []
    steps: list[ScriptStep] = []

    for line in _script_lines(script):
        parts = line.split(":")

        if line.startswith(DELAY_PREFIXES + (PANEL_PREFIX,)):
            if len(parts) < 2 or _parse_int(parts[1], 0, _UINT_MAX) < 1:
                errors.append(f"Invalid command:{line}")
                continue

            if line.startswith(PANEL_PREFIX):
                panel_id = _parse_int(parts[1], _INT_MIN, _INT_MAX)
                panel = panel_lookup(panel_id)
                if getattr(panel, "id", 0) == 0:
                    errors.append(f"Invalid panel id:{panel_id}")
                    continue
                steps.append(ScriptStep(StepKind.PANEL, line, panel_id=panel.id))
            else:
                seconds = _parse_int(parts[1], 0, _UINT_MAX)
                steps.append(ScriptStep(StepKind.DELAY, line, seconds=seconds))
            continue

        if not packet_lookup(line):
            errors.append(f"Unknown packet:{line}")
        steps.append(ScriptStep(StepKind.PACKET, line))

    if errors:
        raise ScriptError(errors)
    return steps


def run_script(
    steps: Iterable[ScriptStep],
    send_packet: Callable[[str], Any],
    sleep: Callable[[float], Any] = time.sleep,
) -> int:
    """Run checked steps in order and return the panel id to switch to, or 0.

    Delays call ``sleep`` with their seconds; each packet is handed to
    ``send_packet`` by name and followed by a short pause to let it go out.
    """
    to_load = 0
    for step in steps:
        if step.kind is StepKind.DELAY:
            sleep(step.seconds)
        elif step.kind is StepKind.PANEL:
            to_load = step.panel_id
        else:
            send_packet(step.packet_name)
            sleep(SEND_PAUSE_SECONDS)
    return to_load