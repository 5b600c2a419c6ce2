import pytest

from swaprouter.storagesize import StorageSize


def test_exactly_one_kib_stays_in_bytes():
    assert str(StorageSize(1024)) == "1024.00 B"


def test_zero():
    assert str(StorageSize(0)) == "0.00 B"


def test_mebibytes_value():
    assert str(StorageSize(1.5 * 1048576)) == "1.50 MiB"


@pytest.mark.parametrize(
    "size, unit",
    [
        (512, " B"),
        (1025, " KiB"),
        (1048577, " MiB"),
        (1073741825, " GiB"),
        (1099511627777, " TiB"),
        (5 * 1099511627776, " TiB"),
    ],
)
def test_units(size, unit):
    assert str(StorageSize(size)).endswith(unit)


@pytest.mark.parametrize("size", [0, 100, 2048, 3 * 1048576, 7 * 1073741824, 9e12])
def test_terminal_string_drops_space(size):
    value = StorageSize(size)
    assert value.terminal_string() == str(value).replace(" ", "")


def test_larger_sizes_do_not_print_smaller_units():
    assert str(StorageSize(2 * 1073741824)).endswith("GiB")
    assert not str(StorageSize(2 * 1073741824)).endswith("MiB")