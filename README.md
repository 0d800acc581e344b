# statusline

A small status monitor for Linux. It gathers pieces of system information,
such as CPU usage, memory in use, battery state, network addresses and the
date and time, and joins them into one status line, refreshed once per
interval (1000 ms by default).

## Installation

```sh
pip install .
```

To run the tests as well:

```sh
pip install ".[test]"
pytest
```

## Usage

```sh
statusline         # set the X root window name to the status line, every interval
statusline -s      # write the status line to stdout, every interval
statusline -1      # write the status line to stdout once and exit
statusline -v      # print "statusline-1.0" to stderr and exit with status 1
```

Without `-s` or `-1` the line is stored as the name of the X root window,
where bars such as those of tiling window managers read it. This is done by
running `xsetroot -name`; if `DISPLAY` is unset or `xsetroot` is not on the
`PATH`, the command stops with "XOpenDisplay: Failed to open display". On
exit the root window name is cleared.

Flags may be combined (`-s1`) and `--` ends the options. Any other option,
or any extra argument, prints a usage message to stderr and exits with
status 1. `SIGINT` and `SIGTERM` stop the loop after the current update.
`SIGUSR1` cuts the wait short and causes an immediate refresh.

The default line shows CPU usage, memory used, total memory and the local
date and time (`%m-%d-%Y %I:%M:%S %p`). It is defined by `ARGS` in
`statusline.status`.

## Components

Each component takes one argument and returns a string. It returns `None`
when the value cannot be read, usually after printing a diagnostic to
stderr, and the status line then shows `n/a` in its place.

| Module                | Functions                                                                 |
|-----------------------|---------------------------------------------------------------------------|
| `statusline.power`    | `battery_perc`, `battery_state`, `battery_remaining`                      |
| `statusline.cpu`      | `cpu_freq`, `cpu_perc`, `CpuUsage`                                        |
| `statusline.memory`   | `parse_meminfo`, `ram_free`, `ram_perc`, `ram_total`, `ram_used`, `swap_free`, `swap_perc`, `swap_total`, `swap_used` |
| `statusline.system`   | `cat`, `datetime`, `disk_free`, `disk_perc`, `disk_total`, `disk_used`, `entropy`, `hostname`, `kernel_release`, `load_avg`, `num_files`, `run_command`, `temp`, `uptime`, `gid`, `uid`, `username` |
| `statusline.network`  | `ipv4`, `ipv6`, `netspeed_rx`, `netspeed_tx`, `rssi_to_perc`, `wifi_perc`, `wifi_essid`, `NetSpeed` |
| `statusline.volume`   | `vol_perc`                                                                |

A few notes on their behaviour:

- Battery readings come from `/sys/class/power_supply/<name>/`, e.g.
  `battery_perc("BAT0")`. `battery_state` gives `+` (charging), `-`
  (discharging), `o` (full or not charging) or `?`. `battery_remaining`
  gives `Hh Mm` while discharging and an empty string otherwise.
- `cpu_perc`, `netspeed_rx` and `netspeed_tx` compare with the previous
  call, so their first call returns `None`. `CpuUsage` and `NetSpeed` keep
  that state for your own instances.
- `ram_total` and `ram_used` give whole GiB with a `G` suffix; the other
  sizes are formatted by `fmt_human` with binary prefixes.
- `run_command` runs its argument through the shell and returns the first
  line of its output.
- `vol_perc` reads the master channel of an OSS mixer (`/dev/mixer` by
  default).

## Building your own line

The line is described by a list of `Arg` entries. Each entry holds a
component function, a format in which `%s` stands for the value and `%%`
for a percent sign, and the argument for the component:

```python
from statusline.status import Arg, build_status
from statusline.cpu import cpu_perc
from statusline.memory import ram_used, ram_total
from statusline.system import datetime

args = [
    Arg(cpu_perc, "cpu %s%%", None),
    Arg(ram_used, " mem %s", None),
    Arg(ram_total, "/%s", None),
    Arg(datetime, " %s", "%F %T"),
]
print(build_status(args, "n/a", 2048))
```

`build_status` keeps the line shorter than its `maxlen`; a piece that does
not fit is cut, a warning is printed and the remaining entries are left
out. `run(options, args, interval, write)` drives the update loop with
your own entries and, if given, your own `write` function.

Sizes are shown in human-readable units through `statusline.util.fmt_human`,
which accepts a base of 1000 or 1024 and raises `ValueError` for any other.
For example, `fmt_human(1536, 1024)` gives `"1.5 Ki"`.

## What it does not do

- Readings come from Linux interfaces (`/proc`, `/sys`, wireless ioctls);
  there is no support for other kernels.
- There are no components for keyboard lock indicators or the keyboard
  layout.
- The line is configured in Python through `ARGS`; there is no
  configuration file.