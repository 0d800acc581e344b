"""Master volume from an OSS mixer device."""

from __future__ import annotations

import fcntl
import os
import struct

from .util import warn

DEFAULT_MIXER = "/dev/mixer"

SOUND_DEVICE_NAMES = (
    "vol", "bass", "treble", "synth", "pcm", "speaker", "line", "mic", "cd",
    "mix", "pcm2", "rec", "igain", "ogain", "line1", "line2", "line3",
    "dig1", "dig2", "dig3", "phin", "phout", "video", "radio", "monitor",
)

SOUND_MIXER_DEVMASK = 0xFE
# _IOR('M', 0, int)
_MIXER_READ_BASE = 0x80044D00


def _mixer_read(device: int) -> int:
    return _MIXER_READ_BASE | device


def _ioctl_int(fd: int, request: int) -> int:
    result = fcntl.ioctl(fd, request, struct.pack("i", 0))
    return struct.unpack("i", result)[0]


def vol_perc(card: str = DEFAULT_MIXER) -> str | None:
    """Volume of the master channel in percent."""
    try:
        fd = os.open(card, os.O_RDONLY | os.O_NONBLOCK)
    except OSError:
        warn(f"open '{card}':")
        return None

    value = None
    try:
        try:
            devmask = _ioctl_int(fd, _mixer_read(SOUND_MIXER_DEVMASK))
        except OSError:
            warn("ioctl 'SOUND_MIXER_READ_DEVMASK':")
            return None
        for index, name in enumerate(SOUND_DEVICE_NAMES):
            if devmask & (1 << index) and name == "vol":
                try:
                    value = _ioctl_int(fd, _mixer_read(index))
                except OSError:
                    warn(f"ioctl 'MIXER_READ({index})':")
                    return None
    finally:
        os.close(fd)

    if value is None:
        return None
    return str(value & 0xFF)