import struct
from unittest import mock

from statusline import volume


def _fake_ioctl(devmask, level, fail_read=False):
    def ioctl(fd, request, arg):
        if request & 0xFF == volume.SOUND_MIXER_DEVMASK:
            return struct.pack("i", devmask)
        if fail_read:
            raise OSError("read failed")
        return struct.pack("i", level)

    return ioctl


def test_missing_device_is_none(tmp_path):
    assert volume.vol_perc(str(tmp_path / "mixer")) is None


def test_regular_file_is_not_a_mixer(tmp_path):
    card = tmp_path / "mixer"
    card.write_bytes(b"")
    assert volume.vol_perc(str(card)) is None


def test_reads_left_channel(tmp_path):
    card = tmp_path / "mixer"
    card.write_bytes(b"")
    with mock.patch("fcntl.ioctl", side_effect=_fake_ioctl(1, 75 | (80 << 8))):
        assert volume.vol_perc(str(card)) == str(75)


def test_no_volume_channel_is_none(tmp_path):
    card = tmp_path / "mixer"
    card.write_bytes(b"")
    with mock.patch("fcntl.ioctl", side_effect=_fake_ioctl(1 << 4, 75)):
        assert volume.vol_perc(str(card)) is None


def test_read_failure_is_none(tmp_path):
    card = tmp_path / "mixer"
    card.write_bytes(b"")
    with mock.patch("fcntl.ioctl", side_effect=_fake_ioctl(1, 75, fail_read=True)):
        assert volume.vol_perc(str(card)) is None