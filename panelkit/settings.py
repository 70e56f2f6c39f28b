"""Helpers behind the settings dialog: port lists, HTTP headers, table columns."""

from __future__ import annotations

import base64
import re
from collections.abc import Iterable, Sequence

SEND_STR = "Send"
NAME_STR = "Name"
RESEND_STR = "Resend"
TOADDRESS_STR = "To Address"
TOPORT_STR = "To Port"
METHOD_STR = "Method"
ASCII_STR = "ASCII"
HEX_STR = "Hex"
REQUEST_STR = "Request Path"

TIME_STR = "Time"
FROMIP_STR = "From IP"
FROMPORT_STR = "From Port"
ERROR_STR = "Error"

ALL_HTTP_HOSTS = "HTTPHeaderHosts"
HTTP_HEADER_INDEX = "HTTPHeader:"

MAX_PORT = 65535

_PORT_SEPARATORS = re.compile(r"[,;&|.\r\n]")
_INTEGER = re.compile(r"[+-]?\d+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_LOG_HEADERS = frozenset(
    {
        SEND_STR,
        NAME_STR,
        RESEND_STR,
        TOADDRESS_STR,
        TOPORT_STR,
        METHOD_STR,
        REQUEST_STR,
        TIME_STR,
        FROMIP_STR,
        FROMPORT_STR,
        ERROR_STR,
    }
)

_LANGUAGES = ("Spanish", "German", "French", "Italian")
DEFAULT_LANGUAGE = "English"


def _to_int(token: str) -> int | None:
    if not _INTEGER.fullmatch(token):
        return None
    value = int(token)
    return value if _INT_MIN <= value <= _INT_MAX else None


def ports_to_int_list(ports: str) -> list[int]:
    """Parse a loosely separated list of ports.

    Commas, semicolons, ampersands, bars, dots and line breaks all separate
    ports. Invalid, duplicate and out-of-range entries are dropped; if
    nothing is left the result is ``[0]``.
    """
    result: list[int] = []
    for token in _PORT_SEPARATORS.sub(" ", ports).split():
        port = _to_int(token)
        if port is None or port in result:
            continue
        if 0 <= port <= MAX_PORT:
            result.append(port)
    return result or [0]


def int_list_to_ports(ports: Iterable[int]) -> str:
    """Join ports with ", "; an empty list gives "0"."""
    text = ", ".join(str(port) for port in ports)
    return text or "0"


def header_to_keyvalue(header: str) -> tuple[str, str]:
    """Split "Key: value" at its first colon; no colon gives two empty strings."""
    key, sep, value = header.partition(":")
    if not sep:
        return "", ""
    return key, value


def basic_auth_header(key: str, value: str) -> str:
    """An HTTP Basic Authorization header for a user name and a secret."""
    raw = f"{key}:{value}".encode("latin-1", errors="replace")
    return "Authorization: Basic " + base64.b64encode(raw).decode("ascii")


def default_packet_table_header() -> list[str]:
    """Column order of the saved-packets table."""
    return [
        SEND_STR,
        NAME_STR,
        RESEND_STR,
        TOADDRESS_STR,
        TOPORT_STR,
        METHOD_STR,
        ASCII_STR,
        HEX_STR,
    ]


def default_traffic_table_header() -> list[str]:
    """Column order of the traffic log table."""
    return [
        TIME_STR,
        FROMIP_STR,
        FROMPORT_STR,
        TOADDRESS_STR,
        TOPORT_STR,
        METHOD_STR,
        ERROR_STR,
        ASCII_STR,
        HEX_STR,
    ]


def log_header_translate(text: str) -> str:
    """The display text of a column name; unknown names are returned unchanged."""
    if text in _LOG_HEADERS:
        return text
    return text


def resolve_table_headers(
    saved: Sequence[str] | None, traffic: Sequence[str] | None
) -> tuple[list[str], list[str]]:
    """Pick the column orders to use from stored ones, falling back to defaults.

    A stored saved-packets order with an unknown column is discarded. A
    stored order is only used when it has as many columns as the default.
    """
    saved_default = default_packet_table_header()
    traffic_default = default_traffic_table_header()

    saved_headers = list(saved) if saved is not None else list(saved_default)
    if any(column not in saved_default for column in saved_headers):
        saved_headers = list(saved_default)
    if len(saved_headers) != len(saved_default):
        saved_headers = saved_default

    traffic_headers = list(traffic) if traffic is not None else list(traffic_default)
    if len(traffic_headers) != len(traffic_default):
        traffic_headers = traffic_default

    return saved_headers, traffic_headers


def language_from_setting(value: str | None) -> str:
    """Map a stored language choice to a supported language name."""
    lowered = (value if value is not None else DEFAULT_LANGUAGE).lower()
    for language in _LANGUAGES:
        if language.lower() in lowered:
            return language
    return DEFAULT_LANGUAGE


def validate_server_ports(tcp_ports: Iterable[int], ssl_ports: Iterable[int]) -> None:
    """Raise ValueError if TCP and SSL servers share a non-zero port."""
    ssl_set = {port for port in ssl_ports if port != 0}
    for port in tcp_ports:
        if port != 0 and port in ssl_set:
            raise ValueError(
                f"cannot bind TCP and SSL to the same port: {port}"
            )