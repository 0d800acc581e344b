"""CPU frequency and utilisation."""

from __future__ import annotations

from .util import fmt_human, read_first_line, read_int

PROC_STAT = "/proc/stat"
CPU_FREQ = "/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq"

# user nice system idle iowait irq softirq; busy = all but idle and iowait
_BUSY_FIELDS = (0, 1, 2, 5, 6)


class CpuUsage:
    """Utilisation between successive samples of the aggregate CPU line."""

    def __init__(self, stat_path: str = PROC_STAT) -> None:
        self.stat_path = stat_path
        self._previous = [0.0] * 7

    def _sample(self) -> list[float] | None:
        line = read_first_line(self.stat_path)
        if line is None:
            return None
        fields = line.split()[1:8]
        if len(fields) != 7:
            return None
        try:
            return [float(field) for field in fields]
        except ValueError:
            return None

    def percent(self) -> str | None:
        """Percentage busy since the previous call; None on the first call."""
        current = self._sample()
        if current is None:
            return None
        previous, self._previous = self._previous, current

        if previous[0] == 0:
            return None
        total = sum(previous) - sum(current)
        if total == 0:
            return None
        busy = sum(previous[i] for i in _BUSY_FIELDS) - sum(
            current[i] for i in _BUSY_FIELDS
        )
        return str(int(100 * busy / total))


_usage = CpuUsage()


def cpu_freq(arg: str | None = None, path: str = CPU_FREQ) -> str | None:
    """Current frequency of the first CPU, in Hz with a decimal prefix."""
    freq_khz = read_int(path)
    if freq_khz is None:
        return None
    return fmt_human(freq_khz * 1000, 1000)


def cpu_perc(arg: str | None = None) -> str | None:
    """System-wide CPU utilisation in percent."""
    return _usage.percent()