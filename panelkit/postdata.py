"""Building form-encoded request bodies from editable key/value pairs."""

from __future__ import annotations

from urllib.parse import quote, unquote

_SAFE = "!$'()*+,;:@/?"


class PostData:
    """An ordered list of query parameters that can be edited and encoded."""

    def __init__(self, query: str = "") -> None:
        self.items: list[tuple[str, str]] = []
        for pair in query.split("&"):
            if not pair:
                continue
            key, _, value = pair.partition("=")
            self.items.append((unquote(key), unquote(value)))

    def __len__(self) -> int:
        return len(self.items)

    def add(self, key: str, value: str) -> bool:
        """Append a parameter; a parameter without a name is not added."""
        if not key:
            return False
        self.items.append((key, value))
        return True

    def _valid_row(self, row: int) -> bool:
        return 0 <= row < len(self.items)

    def edit(self, row: int, value: str, is_key: bool) -> bool:
        """Change the name or the value in ``row``; return False if there is no row."""
        if not self._valid_row(row):
            return False
        key, old_value = self.items[row]
        self.items[row] = (value, old_value) if is_key else (key, value)
        return True

    def remove(self, row: int) -> bool:
        """Delete ``row``; return False if there is no such row."""
        if not self._valid_row(row):
            return False
        del self.items[row]
        return True

    def encode(self) -> str:
        """The parameters as a fully percent-encoded query string."""
        return "&".join(
            f"{quote(key, safe=_SAFE)}={quote(value, safe=_SAFE)}"
            for key, value in self.items
        )