"""Custom HTTP headers kept per host in a JSON settings file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from panelkit.settings import ALL_HTTP_HOSTS, HTTP_HEADER_INDEX, header_to_keyvalue


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def _string_list(value: Any) -> list[str]:
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    if isinstance(value, str):
        return [value]
    return []


class HttpHeaderStore:
    """Headers sent with HTTP requests, grouped by host."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        return document if isinstance(document, dict) else {}

    def _store(self, document: dict[str, Any]) -> None:
        self.path.write_text(json.dumps(document, indent=4), encoding="utf-8")

    @staticmethod
    def _host_key(host: str) -> str:
        return HTTP_HEADER_INDEX + host

    def headers(self, host: str) -> list[str]:
        """The header lines stored for ``host``."""
        return _string_list(self._load().get(self._host_key(host)))

    def raw_headers(self, host: str) -> dict[str, str]:
        """Headers for ``host`` as key to value; keys shorter than two are skipped."""
        result: dict[str, str] = {}
        for header in self.headers(host):
            key, value = header_to_keyvalue(header)
            if len(key) > 1:
                result[key] = value
        return result

    def all_headers(self) -> dict[str, list[str]]:
        """Every known host with its header lines."""
        document = self._load()
        return {
            host: _string_list(document.get(self._host_key(host)))
            for host in _string_list(document.get(ALL_HTTP_HOSTS))
        }

    def save_header(self, host: str, header: str) -> None:
        """Store ``header`` for ``host``, replacing one with the same key."""
        document = self._load()
        key, _ = header_to_keyvalue(header)
        host_headers = _string_list(document.get(self._host_key(host)))
        for index, existing in enumerate(host_headers):
            if header_to_keyvalue(existing)[0] == key:
                del host_headers[index]
                break
        host_headers.append(header)
        document[self._host_key(host)] = _unique(host_headers)

        hosts = _string_list(document.get(ALL_HTTP_HOSTS))
        hosts.append(host)
        document[ALL_HTTP_HOSTS] = _unique(hosts)
        self._store(document)

    def delete_header(self, host: str, header: str) -> bool:
        """Remove ``header`` from ``host``; return False if it was not stored."""
        document = self._load()
        host_headers = _unique(_string_list(document.get(self._host_key(host))))
        if header not in host_headers:
            return False
        host_headers.remove(header)
        document[self._host_key(host)] = host_headers
        self._store(document)
        return True

    def clear_headers(self, host: str) -> bool:
        """Forget ``host`` and all its headers; return False if it was unknown."""
        document = self._load()
        hosts = _string_list(document.get(ALL_HTTP_HOSTS))
        if host not in hosts:
            return False
        hosts.remove(host)
        document[ALL_HTTP_HOSTS] = hosts
        document.pop(self._host_key(host), None)
        self._store(document)
        return True