"""Panels of script buttons and links, their JSON format and a file-backed store."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_SEQUENTIAL_ID = 65000


@dataclass
class PanelButton:
    """One button on a panel: a title and the script it runs."""

    id: int = 0
    title: str = ""
    script: str = ""


@dataclass
class Panel:
    """A named collection of buttons and status-bar links."""

    id: int = 0
    name: str = ""
    launch: int = 0
    modified: str = ""
    link_texts: list[str] = field(default_factory=list)
    link_urls: list[str] = field(default_factory=list)
    buttons: list[PanelButton] = field(default_factory=list)

    def is_new(self) -> bool:
        return self.id == 0

    def is_not_new(self) -> bool:
        return not self.is_new()

    def is_launch_panel(self) -> bool:
        return self.launch > 0

    def sort_buttons(self) -> None:
        """Order the buttons by their id."""
        self.buttons.sort(key=lambda button: button.id)

    def copy_from(self, other: Panel) -> None:
        """Make this panel an independent copy of ``other``."""
        self.id = other.id
        self.name = other.name
        self.launch = other.launch
        self.modified = other.modified
        self.buttons = [replace(button) for button in other.buttons]
        self.link_texts = list(other.link_texts)
        self.link_urls = list(other.link_urls)

    def last_modified(self) -> datetime | None:
        """The modification time, or None when it is missing or malformed."""
        try:
            return datetime.strptime(self.modified, DATETIME_FORMAT)
        except ValueError:
            return None

    def __str__(self) -> str:
        return (
            f"id:{self.id},name:{self.name},lastmodified:{self.modified},"
            f"launch:{self.launch}, buttonList:{len(self.buttons)}, "
            f"linkURLs:{len(self.link_urls)}"
        )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _number(value: Any) -> int:
    try:
        return int(_text(value).strip())
    except ValueError:
        return 0


def _object(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def export_json(panels: Iterable[Panel]) -> bytes:
    """Serialise panels; nameless panels and untitled buttons are left out."""
    document: list[dict] = []
    for panel in panels:
        if not panel.name:
            continue
        entry: dict[str, Any] = {
            "name": panel.name,
            "id": str(panel.id),
            "launch": str(panel.launch),
            "lastmodfied": panel.modified,
        }
        links: list[dict] = []
        for index, (text, url) in enumerate(zip(panel.link_texts, panel.link_urls)):
            links.insert(0, {"text": text, "url": url, "index": str(index)})
        entry["linkURLs"] = links

        buttons: list[dict] = []
        for button in panel.buttons:
            if not button.title:
                continue
            buttons.insert(
                0,
                {"title": button.title, "id": str(button.id), "script": button.script},
            )
        entry["buttonlist"] = buttons
        document.insert(0, entry)
    return (json.dumps(document, indent=4) + "\n").encode("utf-8")


def import_json(data: bytes | str) -> list[Panel]:
    """Parse panels from JSON; anything that is not a JSON array gives no panels."""
    try:
        document = json.loads(data)
    except (ValueError, UnicodeDecodeError):
        return []
    if not isinstance(document, list):
        return []

    panels: list[Panel] = []
    for item in document:
        entry = _object(item)
        panel = Panel(
            id=_number(entry.get("id")),
            name=_text(entry.get("name")),
            launch=_number(entry.get("launch")),
            modified=_text(entry.get("lastmodfied")),
        )
        button_list = entry.get("buttonlist")
        if isinstance(button_list, list):
            for raw in button_list:
                button = _object(raw)
                panel.buttons.append(
                    PanelButton(
                        id=_number(button.get("id")),
                        title=_text(button.get("title")),
                        script=_text(button.get("script")),
                    )
                )
        link_list = entry.get("linkURLs")
        if isinstance(link_list, list):
            links: dict[int, tuple[str, str]] = {}
            for raw in link_list:
                link = _object(raw)
                links[_number(link.get("index"))] = (
                    _text(link.get("text")),
                    _text(link.get("url")),
                )
            ordered = [links[key] for key in sorted(links)]
            panel.link_texts = [text for text, _ in ordered]
            panel.link_urls = [url for _, url in ordered]
        panel.sort_buttons()
        panels.append(panel)
    return sort_by_id(panels)


def sort_by_id(panels: Iterable[Panel]) -> list[Panel]:
    """Return the panels ordered by id."""
    return sorted(panels, key=lambda panel: panel.id)


class PanelStore:
    """Panels kept together in one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def fetch_all(self) -> list[Panel]:
        try:
            data = self.path.read_bytes()
        except OSError:
            return []
        return import_json(data)

    def _write(self, panels: Iterable[Panel]) -> None:
        self.path.write_bytes(export_json(panels))

    def save(self, panel: Panel) -> None:
        """Stamp the panel as modified now and store it, replacing one with its id."""
        panels = self.fetch_all()
        panel.modified = datetime.now().strftime(DATETIME_FORMAT)
        snapshot = Panel()
        snapshot.copy_from(panel)

        found = False
        for stored in panels:
            if stored.id == panel.id:
                stored.copy_from(snapshot)
                found = True
                break
            if panel.is_launch_panel():
                stored.launch = 0
        if not found:
            panels.append(snapshot)
        self._write(panels)

    def delete(self, panel_id: int) -> None:
        panels = self.fetch_all()
        for index, stored in enumerate(panels):
            if stored.id == panel_id:
                del panels[index]
                break
        self._write(panels)

    def by_id(self, panel_id: int) -> Panel:
        """The stored panel with this id, or a new empty panel."""
        return next((p for p in self.fetch_all() if p.id == panel_id), Panel())

    def by_name(self, name: str) -> Panel:
        """The stored panel with this name, or a new empty panel."""
        return next((p for p in self.fetch_all() if p.name == name), Panel())

    def launch_panel(self) -> Panel:
        """The first stored starter panel, or a new empty panel."""
        return next((p for p in self.fetch_all() if p.is_launch_panel()), Panel())

    def new_panel_id(self, panels: Iterable[Panel] | None = None) -> int:
        """The lowest free id, taken from ``panels`` or, if none given, the store."""
        known = list(panels or [])
        if not known:
            known = self.fetch_all()
        used = {panel.id for panel in known}
        for candidate in range(1, MAX_SEQUENTIAL_ID):
            if candidate not in used:
                return candidate
        return random.randrange(0, MAX_SEQUENTIAL_ID)