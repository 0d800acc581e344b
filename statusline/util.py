"""Shared helpers: diagnostics, human-readable sizes and small file readers."""

from __future__ import annotations

import re
import sys

_PREFIXES = {
    1000: ("", "k", "M", "G", "T", "P", "E", "Z", "Y"),
    1024: ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"),
}

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _describe(exc: BaseException | None) -> str:
    if exc is None:
        return "Success"
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


def warn(message: str) -> None:
    """Print a diagnostic to stderr.

    A message ending in ':' is followed by a description of the exception
    currently being handled, if any.
    """
    text = message
    if message.endswith(":"):
        text = f"{message} {_describe(sys.exc_info()[1])}"
    print(text, file=sys.stderr)


def die(message: str) -> None:
    """Print a diagnostic like :func:`warn` and exit with status 1."""
    warn(message)
    raise SystemExit(1)


def fmt_human(num: float, base: int) -> str:
    """Format ``num`` scaled by ``base`` (1000 or 1024) with a unit prefix."""
    try:
        prefixes = _PREFIXES[base]
    except KeyError:
        raise ValueError(f"fmt_human: Invalid base {base!r}") from None

    scaled = float(num)
    index = 0
    while index < len(prefixes) - 1 and scaled >= base:
        scaled /= base
        index += 1
    return f"{scaled:.1f} {prefixes[index]}"


def read_first_line(path: str) -> str | None:
    """Return the first line of a file without its newline.

    Returns None if the file cannot be opened or is empty.
    """
    try:
        with open(path, encoding="utf-8", errors="replace") as fh:
            line = fh.readline()
    except OSError:
        warn(f"fopen '{path}':")
        return None
    if not line:
        return None
    return line[:-1] if line.endswith("\n") else line


def read_int(path: str) -> int | None:
    """Read the leading integer of a file, or None if there is none."""
    try:
        with open(path, encoding="utf-8", errors="replace") as fh:
            text = fh.read()
    except OSError:
        warn(f"fopen '{path}':")
        return None
    match = _LEADING_INT.match(text)
    if match is None:
        return None
    return int(match.group(1))