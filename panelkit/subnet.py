"""IPv4 subnet arithmetic and checks of which local subnet holds an address."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Iterable
from dataclasses import dataclass

_MASK32 = 0xFFFFFFFF
_UINT_MAX = 2**32 - 1
_HEX = re.compile(r"(?:0[xX])?[0-9a-fA-F]+")


@dataclass(frozen=True)
class SubnetRange:
    """The usable host addresses and the broadcast address of an IPv4 subnet."""

    first: ipaddress.IPv4Address
    last: ipaddress.IPv4Address
    broadcast: ipaddress.IPv4Address


def _parse_hex(text: str) -> int | None:
    text = text.strip()
    if not _HEX.fullmatch(text):
        return None
    value = int(text, 16)
    return value if value <= _UINT_MAX else None


def mask_to_prefix(subnet: str) -> str:
    """Normalise the subnet part of an address.

    A leading or stray "/" is dropped. A colon-separated hexadecimal mask is
    turned into its prefix length; if one of its groups is not a contiguous
    run of ones it is returned unchanged. Anything else (a prefix length or
    a dotted netmask) is returned as it is.
    """
    cleaned = subnet.strip().replace("/", "")
    if ":" not in cleaned:
        return cleaned
    count = 0
    for part in cleaned.split(":"):
        value = _parse_hex(part)
        if value is None:
            continue
        bits = format(value, "b")
        if "01" in bits:
            return cleaned
        count += bits.count("1")
    return str(count)


def _is_netmask(text: str) -> bool:
    try:
        value = int(ipaddress.IPv4Address(text))
    except ValueError:
        return False
    inverted = ~value & _MASK32
    return (inverted + 1) & inverted == 0


def _interface(ip: str, subnet: str) -> ipaddress.IPv4Interface | ipaddress.IPv6Interface:
    if "." in subnet and not _is_netmask(subnet):
        raise ValueError(f"invalid netmask: {subnet}")
    return ipaddress.ip_interface(f"{ip}/{subnet}")


def ipv4_range(ip: str, subnet: str) -> SubnetRange | None:
    """First, last and broadcast address of the subnet ``ip`` lies in.

    ``subnet`` may be a prefix length, a dotted netmask or a colon-separated
    hexadecimal mask. Raises ValueError for an invalid address or subnet;
    returns None for a valid IPv6 address, which is not calculated.
    """
    prefix = mask_to_prefix(subnet)
    try:
        interface = _interface(ip.strip(), prefix)
    except ValueError as exc:
        raise ValueError(f"invalid address or subnet: {ip}/{subnet}") from exc
    if interface.version != 4:
        return None

    bits = interface.network.prefixlen
    start = int(interface.ip) & int(interface.netmask)
    count = 1 << (32 - bits)
    return SubnetRange(
        first=ipaddress.IPv4Address((start + 1) & _MASK32),
        last=ipaddress.IPv4Address((start + count - 2) & _MASK32),
        broadcast=ipaddress.IPv4Address((start + count - 1) & _MASK32),
    )


def find_containing(
    ip: str, entries: Iterable[tuple[str, str]]
) -> tuple[str, str] | None:
    """The first (address, netmask) entry whose subnet also holds ``ip``.

    Entries with an empty or unusable address or netmask are skipped.
    Raises ValueError when ``ip`` is not a valid address; returns None when
    no entry shares a subnet with it.
    """
    test = ip.strip()
    try:
        ipaddress.ip_interface(f"{test}/24")
    except ValueError as exc:
        raise ValueError(f"invalid address: {ip}") from exc

    for entry in entries:
        entry_ip, netmask = entry
        if not entry_ip:
            continue
        try:
            address = ipaddress.ip_address(entry_ip)
            network = _interface(test, netmask).network
        except ValueError:
            continue
        if address.version == network.version and address in network:
            return entry
    return None