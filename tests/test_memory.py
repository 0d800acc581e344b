import pytest

from statusline.memory import (
    parse_meminfo,
    ram_free,
    ram_perc,
    ram_total,
    ram_used,
    swap_free,
    swap_perc,
    swap_total,
    swap_used,
)
from statusline.util import fmt_human

MEMINFO = """MemTotal:       16777216 kB
MemFree:         4194304 kB
MemAvailable:    8388608 kB
Buffers:         1048576 kB
Cached:          2097152 kB
SwapCached:            0 kB
Active:          3000000 kB
SwapTotal:       2097152 kB
SwapFree:        1048576 kB
HugePages_Total:       0
"""


@pytest.fixture
def meminfo(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(MEMINFO)
    return str(path)


def test_parse_meminfo(meminfo):
    fields = parse_meminfo(meminfo)
    assert fields["MemTotal"] == 16777216
    assert fields["SwapFree"] == 1048576
    assert fields["HugePages_Total"] == 0


def test_parse_meminfo_missing(tmp_path):
    assert parse_meminfo(str(tmp_path / "missing")) is None


def test_ram_total(meminfo):
    assert ram_total(None, meminfo) == "16G"


def test_ram_used(meminfo):
    assert ram_used(None, meminfo) == "9G"


def test_ram_perc(meminfo):
    assert ram_perc(None, meminfo) == "56"


def test_ram_free_uses_available(meminfo):
    assert ram_free(None, meminfo) == fmt_human(8388608 * 1024, 1024)


def test_ram_perc_zero_total(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text(MEMINFO.replace("16777216", "0"))
    assert ram_perc(None, str(path)) is None


def test_swap_totals(meminfo):
    assert swap_total(None, meminfo) == fmt_human(2097152 * 1024, 1024)
    assert swap_free(None, meminfo) == fmt_human(1048576 * 1024, 1024)


def test_swap_used_equals_free_when_half_used(meminfo):
    assert swap_used(None, meminfo) == swap_free(None, meminfo)


def test_swap_perc_bounded(meminfo):
    assert 0 <= int(swap_perc(None, meminfo)) <= 100


def test_swap_perc_zero_total(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("SwapTotal: 0 kB\nSwapFree: 0 kB\nSwapCached: 0 kB\n")
    assert swap_perc(None, str(path)) is None


def test_missing_fields(tmp_path):
    path = tmp_path / "meminfo"
    path.write_text("MemTotal: 1024 kB\n")
    assert ram_used(None, str(path)) is None
    assert swap_total(None, str(path)) is None


@pytest.mark.parametrize(
    "func",
    [ram_free, ram_perc, ram_total, ram_used, swap_free, swap_perc, swap_total, swap_used],
)
def test_missing_file(func, tmp_path):
    assert func(None, str(tmp_path / "missing")) is None