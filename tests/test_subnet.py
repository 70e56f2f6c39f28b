import ipaddress

import pytest

from panelkit.subnet import SubnetRange, find_containing, ipv4_range, mask_to_prefix


def test_mask_to_prefix_strips_slash():
    assert mask_to_prefix("/24") == "24"


def test_mask_to_prefix_keeps_dotted_mask():
    assert mask_to_prefix(" 255.255.255.0 ") == "255.255.255.0"


def test_mask_to_prefix_counts_colon_mask():
    assert mask_to_prefix("ff:ff:ff") == "24"


def test_mask_to_prefix_rejects_non_contiguous_group():
    assert mask_to_prefix("f:5") == "f:5"


def test_range_of_class_c_subnet():
    result = ipv4_range("192.168.1.10", "24")
    assert result.first == ipaddress.IPv4Address("192.168.1.1")
    assert result.last == ipaddress.IPv4Address("192.168.1.254")
    assert result.broadcast == ipaddress.IPv4Address("192.168.1.255")


@pytest.mark.parametrize("subnet", ["/24", "255.255.255.0", "ff:ff:ff"])
def test_mask_forms_agree(subnet):
    assert ipv4_range("192.168.1.10", subnet) == ipv4_range("192.168.1.10", "24")


@pytest.mark.parametrize("prefix", ["8", "16", "20", "24", "30"])
def test_range_invariants(prefix):
    result = ipv4_range("10.20.30.40", prefix)
    assert isinstance(result, SubnetRange)
    assert int(result.last) + 1 == int(result.broadcast)
    assert int(result.first) <= int(result.last)
    network = ipaddress.ip_network(f"10.20.30.40/{prefix}", strict=False)
    assert result.first in network and result.broadcast in network


def test_single_host_subnet_broadcast_is_the_address():
    result = ipv4_range("10.0.0.7", "32")
    assert result.broadcast == ipaddress.IPv4Address("10.0.0.7")


@pytest.mark.parametrize(
    "ip, subnet",
    [("300.1.1.1", "24"), ("10.0.0.1", "33"), ("", "24"), ("10.0.0.1", "0.0.0.255")],
)
def test_invalid_input_raises(ip, subnet):
    with pytest.raises(ValueError):
        ipv4_range(ip, subnet)


def test_ipv6_address_is_not_calculated():
    assert ipv4_range("fe80::1", "64") is None


ENTRIES = [
    ("", "255.255.255.0"),
    ("fe80::1", "ffff:ffff:ffff:ffff::"),
    ("10.0.0.5", "255.0.0.0"),
    ("192.168.1.20", "255.255.255.0"),
]


def test_find_containing_returns_matching_entry():
    assert find_containing("192.168.1.99", ENTRIES) == ("192.168.1.20", "255.255.255.0")


def test_find_containing_first_match_wins():
    assert find_containing(" 10.200.1.1 ", ENTRIES) == ("10.0.0.5", "255.0.0.0")


def test_find_containing_none_when_outside():
    assert find_containing("172.16.0.1", ENTRIES) is None


def test_find_containing_rejects_invalid_address():
    with pytest.raises(ValueError):
        find_containing("not-an-ip", ENTRIES)