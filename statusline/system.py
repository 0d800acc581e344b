"""Miscellaneous system readings: files, time, disks, identity and load."""

from __future__ import annotations

import os
import pwd
import socket
import subprocess
import sys
import time

from .util import fmt_human, read_first_line, read_int, warn

ENTROPY_AVAIL = "/proc/sys/kernel/random/entropy_avail"

# Size of the shared output buffer; single lines are cut to fit in it.
BUFSIZE = 1024
_LINE_LIMIT = BUFSIZE - 2


def _uptime_clock() -> int:
    for name in ("CLOCK_BOOTTIME", "CLOCK_UPTIME", "CLOCK_MONOTONIC"):
        clock = getattr(time, name, None)
        if clock is not None:
            return clock
    raise RuntimeError("no monotonic clock available")


def cat(path: str) -> str | None:
    """First line of a file, or None if it cannot be read or is empty."""
    line = read_first_line(path)
    if not line:
        return None
    return line[:_LINE_LIMIT] or None


def datetime(fmt: str) -> str | None:
    """Local date and time formatted with strftime."""
    result = time.strftime(fmt, time.localtime())
    if not result or len(result) >= BUFSIZE:
        warn("strftime: Result string exceeds buffer size")
        return None
    return result


def _statvfs(path: str) -> os.statvfs_result | None:
    try:
        return os.statvfs(path)
    except OSError:
        warn(f"statvfs '{path}':")
        return None


def disk_free(path: str) -> str | None:
    """Space available to unprivileged users, binary prefixed."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_bavail, 1024)


def disk_perc(path: str) -> str | None:
    """Disk usage in percent."""
    fs = _statvfs(path)
    if fs is None or fs.f_blocks == 0:
        return None
    return str(int(100 * (1 - fs.f_bavail / fs.f_blocks)))


def disk_total(path: str) -> str | None:
    """Total size of the file system, binary prefixed."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * fs.f_blocks, 1024)


def disk_used(path: str) -> str | None:
    """Used space of the file system, binary prefixed."""
    fs = _statvfs(path)
    if fs is None:
        return None
    return fmt_human(fs.f_frsize * (fs.f_blocks - fs.f_bfree), 1024)


def entropy(arg: str | None = None, path: str = ENTROPY_AVAIL) -> str | None:
    """Available kernel entropy; infinite on the BSDs."""
    if sys.platform.startswith(("openbsd", "freebsd")):
        return "\u221E"
    value = read_int(path)
    return None if value is None else str(value)


def hostname(arg: str | None = None) -> str | None:
    """Host name of this machine."""
    try:
        return socket.gethostname()
    except OSError:
        warn("gethostname:")
        return None


def kernel_release(arg: str | None = None) -> str | None:
    """Kernel release, as printed by `uname -r`."""
    try:
        return os.uname().release
    except OSError:
        warn("uname:")
        return None


def load_avg(arg: str | None = None) -> str | None:
    """The 1, 5 and 15 minute load averages."""
    try:
        one, five, fifteen = os.getloadavg()
    except OSError:
        warn("getloadavg: Failed to obtain load average")
        return None
    return f"{one:.2f} {five:.2f} {fifteen:.2f}"


def num_files(path: str) -> str | None:
    """Number of entries in a directory."""
    try:
        with os.scandir(path) as entries:
            count = sum(1 for _ in entries)
    except OSError:
        warn(f"opendir '{path}':")
        return None
    return str(count)


def run_command(cmd: str) -> str | None:
    """First line of a shell command's output, or None if there is none."""
    try:
        proc = subprocess.Popen(cmd, shell=True, stdout=subprocess.PIPE)
    except OSError:
        warn(f"popen '{cmd}':")
        return None
    with proc:
        assert proc.stdout is not None
        raw = proc.stdout.readline(_LINE_LIMIT)
    line = raw.decode("utf-8", errors="replace")
    if line.endswith("\n"):
        line = line[:-1]
    return line or None


def temp(file: str) -> str | None:
    """Temperature in degrees Celsius from a millidegree sensor file."""
    value = read_int(file)
    if value is None:
        return None
    degrees = abs(value) // 1000
    return str(degrees if value >= 0 else -degrees)


def uptime(arg: str | None = None) -> str | None:
    """Time since boot as 'Hh Mm'."""
    clock = _uptime_clock()
    try:
        seconds = int(time.clock_gettime(clock))
    except OSError:
        warn(f"clock_gettime {clock}")
        return None
    hours, rest = divmod(seconds, 3600)
    return f"{hours}h {rest // 60}m"


def gid(arg: str | None = None) -> str:
    """Real group id of the current process."""
    return str(os.getgid())


def uid(arg: str | None = None) -> str:
    """Effective user id of the current process."""
    return str(os.geteuid())


def username(arg: str | None = None) -> str | None:
    """Name of the effective user."""
    euid = os.geteuid()
    try:
        return pwd.getpwuid(euid).pw_name
    except KeyError:
        warn(f"getpwuid '{euid}':")
        return None