"""Button panels, send scripts and networking helpers for a packet-sending workbench."""

__version__ = "0.1.0"

__all__ = [
    "editor",
    "headers",
    "panel",
    "postdata",
    "script",
    "settings",
    "subnet",
    "traffic",
]