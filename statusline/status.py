"""Status line assembly and the main update loop."""

from __future__ import annotations

import contextlib
import os
import re
import shutil
import signal
import subprocess
import sys
import threading
import time
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

from .cpu import cpu_perc
from .memory import ram_total, ram_used
from .system import datetime
from .util import die, warn

PROGRAM = "statusline"
VERSION = "1.0"

# Interval between updates, in milliseconds.
INTERVAL = 1000
# Text shown when a component cannot produce a value.
UNKNOWN_STR = "n/a"
# Maximum size of the status line, terminator included.
MAXLEN = 2048

_DIRECTIVE = re.compile(r"%([%s])")


@dataclass(frozen=True)
class Arg:
    """One component of the status line: a reader, its format and argument."""

    func: Callable[[str | None], str | None]
    fmt: str
    args: str | None = None


@dataclass(frozen=True)
class Options:
    """Command-line options."""

    once: bool = False
    stdout: bool = False


ARGS: tuple[Arg, ...] = (
    Arg(cpu_perc, "  %s%%", None),
    Arg(ram_used, "  %s", None),
    Arg(ram_total, "/%s", None),
    Arg(datetime, "  %s", "%m-%d-%Y %I:%M:%S %p "),
)


def _usage() -> None:
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else PROGRAM
    die(f"usage: {prog} [-v] [-s] [-1]")


def parse_options(argv: Sequence[str]) -> Options:
    """Parse the arguments that follow the program name."""
    once = stdout = False
    remaining = list(argv)
    while remaining:
        current = remaining[0]
        if not current.startswith("-") or len(current) < 2:
            break
        remaining.pop(0)
        if current == "--":
            break
        for flag in current[1:]:
            if flag == "v":
                die(f"{PROGRAM}-{VERSION}")
            elif flag == "1":
                once = True
                stdout = True
            elif flag == "s":
                stdout = True
            else:
                _usage()
    if remaining:
        _usage()
    return Options(once=once, stdout=stdout)


def _expand(fmt: str, value: str) -> str:
    return _DIRECTIVE.sub(lambda m: value if m.group(1) == "s" else "%", fmt)


def build_status(
    args: Sequence[Arg], unknown: str = UNKNOWN_STR, maxlen: int = MAXLEN
) -> str:
    """Render every component into one line of fewer than ``maxlen`` characters."""
    parts: list[str] = []
    length = 0
    for arg in args:
        value = arg.func(arg.args)
        if value is None:
            value = unknown
        piece = _expand(arg.fmt, value)
        room = maxlen - length
        if len(piece) >= room:
            parts.append(piece[: max(room - 1, 0)])
            warn("vsnprintf: Output truncated")
            break
        parts.append(piece)
        length += len(piece)
    return "".join(parts)


class _Wakeup(Exception):
    """Raised from a signal handler to cut a sleep short."""


class _LoopState:
    def __init__(self, done: bool) -> None:
        self.done = done
        self._sleeping = False

    def _handle(self, signo: int, _frame: object) -> None:
        if signo != signal.SIGUSR1:
            self.done = True
        if self._sleeping:
            raise _Wakeup

    def sleep(self, seconds: float) -> None:
        self._sleeping = True
        try:
            time.sleep(seconds)
        except _Wakeup:
            pass
        finally:
            self._sleeping = False

    @contextlib.contextmanager
    def handlers(self) -> Iterator[None]:
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        signals = (signal.SIGINT, signal.SIGTERM, signal.SIGUSR1)
        previous = {signo: signal.getsignal(signo) for signo in signals}
        for signo in signals:
            signal.signal(signo, self._handle)
        try:
            yield
        finally:
            for signo, handler in previous.items():
                signal.signal(signo, handler)


class _RootName:
    """Sets the name of the X root window, where bars read their status."""

    def __init__(self) -> None:
        self._tool = shutil.which("xsetroot")
        if not os.environ.get("DISPLAY") or self._tool is None:
            die("XOpenDisplay: Failed to open display")

    def store(self, name: str) -> None:
        try:
            subprocess.run([self._tool, "-name", name], check=True)
        except (OSError, subprocess.CalledProcessError):
            die("XStoreName: Allocation failed")

    def clear(self) -> None:
        try:
            subprocess.run([self._tool, "-name", ""], check=False)
        except OSError:
            die("XCloseDisplay: Failed to close display")


def _write_stdout(status: str) -> None:
    try:
        print(status, flush=True)
    except OSError:
        die("puts:")


def run(
    options: Options,
    args: Sequence[Arg] = ARGS,
    interval: int = INTERVAL,
    write: Callable[[str], None] | None = None,
) -> None:
    """Render the status line every ``interval`` ms until told to stop."""
    state = _LoopState(done=options.once)
    display: _RootName | None = None
    if write is None:
        if options.stdout:
            write = _write_stdout
        else:
            display = _RootName()
            write = display.store

    with state.handlers():
        while True:
            start = time.monotonic()
            write(build_status(args))
            if state.done:
                break
            wait = interval / 1000 - (time.monotonic() - start)
            if wait > 0:
                state.sleep(wait)
            if state.done:
                break

    if display is not None:
        display.clear()


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the status command."""
    options = parse_options(sys.argv[1:] if argv is None else argv)
    run(options, ARGS, INTERVAL)
    return 0