"""Editing operations on panels: links, buttons, naming and merging imports."""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Union

from panelkit.panel import Panel, PanelButton, sort_by_id

NEW_BUTTON_TITLE = "New Button"

_Edits = Union[Mapping[int, str], Iterable[tuple[int, str]]]


def _copy(panel: Panel) -> Panel:
    duplicate = Panel()
    duplicate.copy_from(panel)
    return duplicate


def _lowest_free_id(used: set[int]) -> int:
    candidate = 1
    while candidate in used:
        candidate += 1
    return candidate


def merge_panels(
    saved: Iterable[Panel], imported: Iterable[Panel], overwrite: bool
) -> list[Panel]:
    """Combine stored panels with imported ones, ordered by id.

    With ``overwrite`` an imported panel replaces a stored one that has the
    same id. Without it, an imported panel whose id is already taken by a
    stored panel is given the lowest free id and added alongside.
    """
    merged: dict[int, Panel] = {panel.id: _copy(panel) for panel in saved}
    for original in imported:
        panel = _copy(original)
        if not overwrite:
            existing = merged.get(panel.id)
            if existing is not None and existing.is_not_new():
                panel.id = _lowest_free_id(set(merged))
        merged[panel.id] = panel
    return sort_by_id(merged.values())


def add_link(panel: Panel, text: str, url: str) -> None:
    """Append a status-bar link to the panel."""
    panel.link_texts.append(text)
    panel.link_urls.append(url)


def _valid_link_index(panel: Panel, index: int) -> bool:
    return 0 <= index < len(panel.link_texts) and index < len(panel.link_urls)


def delete_link(panel: Panel, index: int) -> bool:
    """Remove the link at ``index``; return False if there is no such link."""
    if not _valid_link_index(panel, index):
        return False
    del panel.link_texts[index]
    del panel.link_urls[index]
    return True


def edit_link(panel: Panel, index: int, text: str, url: str) -> bool:
    """Replace the link at ``index``; return False if there is no such link."""
    if not _valid_link_index(panel, index):
        return False
    panel.link_texts[index] = text
    panel.link_urls[index] = url
    return True


def normalise_link_target(target: str) -> str:
    """Keep URLs as they are; turn a file path into its canonical form.

    A path may be wrapped in double quotes. A path that does not exist
    gives an empty string.
    """
    if "://" in target:
        return target
    path = target
    if path.startswith('"'):
        path = path[1:]
    if path.endswith('"'):
        path = path[:-1]
    if not path or not os.path.exists(path):
        return ""
    return os.path.realpath(path)


def buttons_from_edits(scripts: _Edits, titles: _Edits) -> list[PanelButton]:
    """Build buttons from edited scripts and titles keyed by button id.

    Ids of 0 or less are ignored, text is trimmed, and a button whose title
    is empty is dropped. The result is ordered by id.
    """
    buttons: dict[int, PanelButton] = {}
    for button_id, script in dict(scripts).items():
        if button_id > 0:
            buttons.setdefault(button_id, PanelButton(id=button_id)).script = (
                script.strip()
            )
    for button_id, title in dict(titles).items():
        if button_id > 0:
            buttons.setdefault(button_id, PanelButton(id=button_id)).title = (
                title.strip()
            )
    return [buttons[key] for key in sorted(buttons) if buttons[key].title]


def next_button_id(panel: Panel) -> int:
    """The id a newly added button gets: one past the last button's id."""
    if not panel.buttons:
        return 1
    return panel.buttons[-1].id + 1


def default_save_as_name(panel: Panel, today: date) -> str:
    """The name offered when saving a panel under a new name."""
    if panel.id == 0:
        return f"Panel {today.strftime('%Y-%m-%d')}"
    return f"{panel.name} - Copy"