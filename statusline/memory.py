"""RAM and swap figures from /proc/meminfo."""

from __future__ import annotations

from .util import fmt_human, warn

MEMINFO = "/proc/meminfo"


def parse_meminfo(path: str = MEMINFO) -> dict[str, int] | None:
    """Map each meminfo field name to its value in kB."""
    try:
        with open(path, encoding="ascii", errors="replace") as fh:
            lines = fh.readlines()
    except OSError:
        warn(f"fopen '{path}':")
        return None

    fields: dict[str, int] = {}
    for line in lines:
        key, sep, rest = line.partition(":")
        parts = rest.split()
        if not sep or not parts:
            continue
        try:
            fields[key.strip()] = int(parts[0])
        except ValueError:
            continue
    return fields


def _values(path: str, *names: str) -> tuple[int, ...] | None:
    fields = parse_meminfo(path)
    if fields is None or any(name not in fields for name in names):
        return None
    return tuple(fields[name] for name in names)


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


_RAM_FIELDS = ("MemTotal", "MemFree", "MemAvailable", "Buffers", "Cached")
_SWAP_FIELDS = ("SwapTotal", "SwapFree", "SwapCached")


def ram_free(arg: str | None = None, meminfo: str = MEMINFO) -> str | None:
    """Available memory, binary prefixed."""
    values = _values(meminfo, *_RAM_FIELDS[:3])
    if values is None:
        return None
    return fmt_human(values[2] * 1024, 1024)


def ram_perc(arg: str | None = None, meminfo: str = MEMINFO) -> str | None:
    """Memory in use, excluding buffers and cache, in percent."""
    values = _values(meminfo, *_RAM_FIELDS)
    if values is None:
        return None
    total, free, _available, buffers, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * ((total - free) - (buffers + cached)), total))


def ram_total(arg: str | None = None, meminfo: str = MEMINFO) -> str | None:
    """Total memory in whole GiB, rounded down."""
    values = _values(meminfo, "MemTotal")
    if values is None:
        return None
    return f"{values[0] // 1024 // 1024}G"


def ram_used(arg: str | None = None, meminfo: str = MEMINFO) -> str | None:
    """Memory in use in whole GiB, rounded down."""
    values = _values(meminfo, *_RAM_FIELDS)
    if values is None:
        return None
    total, free, _available, buffers, cached = values
    return f"{(total - free - buffers - cached) // 1024 // 1024}G"


def swap_free(arg: str | None = None, meminfo: str = MEMINFO) -> str | None:
    """Free swap, binary prefixed."""
    values = _values(meminfo, "SwapFree")
    if values is None:
        return None
    return fmt_human(values[0] * 1024, 1024)


def swap_perc(arg: str | None = None, meminfo: str = MEMINFO) -> str | None:
    """Swap in use, excluding swap cache, in percent."""
    values = _values(meminfo, *_SWAP_FIELDS)
    if values is None:
        return None
    total, free, cached = values
    if total == 0:
        return None
    return str(_trunc_div(100 * (total - free - cached), total))


def swap_total(arg: str | None = None, meminfo: str = MEMINFO) -> str | None:
    """Total swap, binary prefixed."""
    values = _values(meminfo, "SwapTotal")
    if values is None:
        return None
    return fmt_human(values[0] * 1024, 1024)


def swap_used(arg: str | None = None, meminfo: str = MEMINFO) -> str | None:
    """Swap in use, excluding swap cache, binary prefixed."""
    values = _values(meminfo, *_SWAP_FIELDS)
    if values is None:
        return None
    total, free, cached = values
    return fmt_human((total - free - cached) * 1024, 1024)