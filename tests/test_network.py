import socket
from collections import namedtuple
from unittest import mock

import pytest

from statusline import network
from statusline.util import fmt_human

Addr = namedtuple("Addr", "family address")

_FAKE_ADDRS = {
    "eth0": [Addr(socket.AF_INET6, "fe80::1"), Addr(socket.AF_INET, "192.0.2.5")],
}

_WIRELESS_HEADER = (
    "Inter-| sta-|   Quality        |   Discarded packets               | Missed | WE\n"
    " face | tus | link level noise |  nwid  crypt   frag  retry   misc | beacon | 22\n"
)


def test_ipv4_picks_inet_address():
    with mock.patch("psutil.net_if_addrs", return_value=_FAKE_ADDRS):
        assert network.ipv4("eth0") == "192.0.2.5"


def test_ipv6_picks_inet6_address():
    with mock.patch("psutil.net_if_addrs", return_value=_FAKE_ADDRS):
        assert network.ipv6("eth0") == "fe80::1"


def test_ip_unknown_interface_is_none():
    with mock.patch("psutil.net_if_addrs", return_value=_FAKE_ADDRS):
        assert network.ipv4("wlan9") is None


def _write_counter(base, interface, direction, value):
    stats = base / interface / "statistics"
    stats.mkdir(parents=True, exist_ok=True)
    (stats / f"{direction}_bytes").write_text(f"{value}\n")


def test_netspeed_first_read_is_none(tmp_path):
    _write_counter(tmp_path, "eth0", "rx", 1000)
    speed = network.NetSpeed("rx", 1000, str(tmp_path))
    assert speed.read("eth0") is None


def test_netspeed_second_read_reports_delta(tmp_path):
    speed = network.NetSpeed("tx", 1000, str(tmp_path))
    _write_counter(tmp_path, "eth0", "tx", 1000)
    speed.read("eth0")
    _write_counter(tmp_path, "eth0", "tx", 3048)
    assert speed.read("eth0") == fmt_human(3048 - 1000, 1024)


def test_netspeed_missing_counter_is_none(tmp_path):
    speed = network.NetSpeed("rx", 1000, str(tmp_path))
    assert speed.read("nope") is None


def test_netspeed_rejects_bad_direction():
    with pytest.raises(ValueError):
        network.NetSpeed("up")


def test_netspeed_rejects_zero_interval():
    with pytest.raises(ValueError):
        network.NetSpeed("rx", 0)


def test_rssi_bounds():
    assert network.rssi_to_perc(-50) == 100
    assert network.rssi_to_perc(-20) == 100
    assert network.rssi_to_perc(-100) == 0
    assert network.rssi_to_perc(-120) == 0


def test_rssi_monotonic():
    values = [network.rssi_to_perc(r) for r in range(-110, -40)]
    assert values == sorted(values)
    assert all(0 <= v <= 100 for v in values)


def _setup_wifi(tmp_path, state, line):
    iface = tmp_path / "net" / "wlan0"
    iface.mkdir(parents=True)
    (iface / "operstate").write_text(state)
    wireless = tmp_path / "wireless"
    wireless.write_text(_WIRELESS_HEADER + line)
    return str(tmp_path / "net"), str(wireless)


def test_wifi_perc_full_link(tmp_path):
    base, wireless = _setup_wifi(
        tmp_path, "up\n", " wlan0: 0000   70.  -40.  -256        0      0      0      0      0        0\n"
    )
    assert network.wifi_perc("wlan0", base, wireless) == "100"


def test_wifi_perc_interface_down(tmp_path):
    base, wireless = _setup_wifi(
        tmp_path, "down\n", " wlan0: 0000   70.  -40.  -256        0      0      0      0      0        0\n"
    )
    assert network.wifi_perc("wlan0", base, wireless) is None


def test_wifi_perc_no_data_line(tmp_path):
    base, wireless = _setup_wifi(tmp_path, "up\n", "")
    assert network.wifi_perc("wlan0", base, wireless) is None


def test_wifi_perc_interface_not_listed(tmp_path):
    base, wireless = _setup_wifi(
        tmp_path, "up\n", " wlan1: 0000   70.  -40.  -256        0      0      0      0      0        0\n"
    )
    assert network.wifi_perc("wlan0", base, wireless) is None


def test_wifi_essid_name_too_long():
    assert network.wifi_essid("x" * 20) is None


def test_wifi_essid_unknown_interface():
    assert network.wifi_essid("nosuchif0") is None