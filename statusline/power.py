"""Battery readings from the Linux power-supply class."""

from __future__ import annotations

import os
import re

from .util import read_first_line, read_int

POWER_SUPPLY = "/sys/class/power_supply"

_STATE_SYMBOLS = {
    "Charging": "+",
    "Discharging": "-",
    "Full": "o",
    "Not charging": "o",
}

_STATE_RE = re.compile(r"[a-zA-Z ]{1,12}")


def _read_state(bat: str, base: str) -> str | None:
    line = read_first_line(os.path.join(base, bat, "status"))
    if line is None:
        return None
    match = _STATE_RE.match(line)
    return match.group(0) if match else None


def _pick(bat: str, base: str, *names: str) -> str | None:
    for name in names:
        path = os.path.join(base, bat, name)
        if os.access(path, os.R_OK):
            return path
    return None


def battery_perc(bat: str, base: str = POWER_SUPPLY) -> str | None:
    """Battery capacity in percent."""
    capacity = read_int(os.path.join(base, bat, "capacity"))
    return None if capacity is None else str(capacity)


def battery_state(bat: str, base: str = POWER_SUPPLY) -> str | None:
    """Charging state as '+', '-', 'o' or '?'."""
    state = _read_state(bat, base)
    if state is None:
        return None
    return _STATE_SYMBOLS.get(state, "?")


def battery_remaining(bat: str, base: str = POWER_SUPPLY) -> str | None:
    """Remaining time as 'Hh Mm' while discharging, '' otherwise."""
    state = _read_state(bat, base)
    if state is None:
        return None

    charge_path = _pick(bat, base, "charge_now", "energy_now")
    if charge_path is None:
        return None
    charge_now = read_int(charge_path)
    if charge_now is None:
        return None

    if state != "Discharging":
        return ""

    current_path = _pick(bat, base, "current_now", "power_now")
    if current_path is None:
        return None
    current_now = read_int(current_path)
    if not current_now:
        return None

    timeleft = charge_now / current_now
    hours = int(timeleft)
    minutes = int((timeleft - hours) * 60)
    return f"{hours}h {minutes}m"