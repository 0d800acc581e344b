"""Network readings: addresses, throughput and wireless link."""

from __future__ import annotations

import array
import os
import re
import socket
import struct

import psutil

from .util import fmt_human, read_int, warn

NET_CLASS = "/sys/class/net"
PROC_WIRELESS = "/proc/net/wireless"
INTERVAL = 1000

IFNAMSIZ = 16
IW_ESSID_MAX_SIZE = 32
SIOCGIWESSID = 0x8B1B
_IWREQ_SIZE = 32
_LINE_LIMIT = 1022

_LINK_RE = re.compile(r"\s*[+-]?\d+\s*([+-]?\d+)")


def _ip(interface: str, family: int) -> str | None:
    try:
        addresses = psutil.net_if_addrs()
    except OSError:
        warn("getifaddrs:")
        return None
    for address in addresses.get(interface, ()):
        if address.family == family:
            return address.address
    return None


def ipv4(interface: str) -> str | None:
    """First IPv4 address of an interface."""
    return _ip(interface, socket.AF_INET)


def ipv6(interface: str) -> str | None:
    """First IPv6 address of an interface."""
    return _ip(interface, socket.AF_INET6)


class NetSpeed:
    """Byte rate of an interface between successive reads."""

    def __init__(self, direction: str, interval: int = INTERVAL, base: str = NET_CLASS) -> None:
        if direction not in ("rx", "tx"):
            raise ValueError(f"direction must be 'rx' or 'tx', not {direction!r}")
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.direction = direction
        self.interval = interval
        self.base = base
        self._bytes = 0

    def read(self, interface: str) -> str | None:
        """Bytes per second since the previous read; None on the first."""
        path = os.path.join(self.base, interface, "statistics", f"{self.direction}_bytes")
        value = read_int(path)
        if value is None:
            return None
        previous, self._bytes = self._bytes, value
        if previous == 0:
            return None
        delta = (value - previous) % (1 << 64)
        return fmt_human(delta * 1000 // self.interval, 1024)


_rx = NetSpeed("rx")
_tx = NetSpeed("tx")


def netspeed_rx(interface: str) -> str | None:
    """Receive rate of an interface."""
    return _rx.read(interface)


def netspeed_tx(interface: str) -> str | None:
    """Transmit rate of an interface."""
    return _tx.read(interface)


def rssi_to_perc(rssi: int) -> int:
    """Map a signal strength in dBm onto 0..100."""
    if rssi >= -50:
        return 100
    if rssi <= -100:
        return 0
    return 2 * (rssi + 100)


def wifi_perc(interface: str, base: str = NET_CLASS, wireless_path: str = PROC_WIRELESS) -> str | None:
    """Link quality of a wireless interface in percent."""
    operstate = os.path.join(base, interface, "operstate")
    try:
        with open(operstate, encoding="ascii", errors="replace") as fh:
            status = fh.readline(4)
    except OSError:
        warn(f"fopen '{operstate}':")
        return None
    if status != "up\n":
        return None

    try:
        with open(wireless_path, encoding="ascii", errors="replace") as fh:
            lines = [fh.readline(_LINE_LIMIT) for _ in range(3)]
    except OSError:
        warn(f"fopen '{wireless_path}':")
        return None
    line = lines[2]
    if not line:
        return None

    start = line.find(interface)
    if start < 0:
        return None
    match = _LINK_RE.match(line, start + len(interface) + 2)
    if match is None:
        return None
    link = int(match.group(1))
    # 70 is the maximum link quality reported by the kernel
    return str(int(link / 70 * 100))


def wifi_essid(interface: str) -> str | None:
    """ESSID a wireless interface is associated with."""
    import fcntl

    name = interface.encode()
    if len(name) >= IFNAMSIZ:
        return None
    essid = array.array("b", bytes(IW_ESSID_MAX_SIZE + 1))
    address, length = essid.buffer_info()
    request = struct.pack("16sPHH", name, address, length, 0).ljust(_IWREQ_SIZE, b"\0")

    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    except OSError:
        warn("socket 'AF_INET':")
        return None
    with sock:
        try:
            fcntl.ioctl(sock.fileno(), SIOCGIWESSID, request)
        except OSError:
            warn("ioctl 'SIOCGIWESSID':")
            return None

    value = essid.tobytes().split(b"\0", 1)[0]
    return value.decode("utf-8", errors="replace") or None