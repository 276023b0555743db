import pytest

from rvsim.dram import Dram
from rvsim.exception import LoadAccessFault, StoreAMOAccessFault
from rvsim.param import DRAM_BASE, DRAM_END


@pytest.fixture(scope="module")
def dram():
    return Dram(bytes([0x13, 0x0F, 0xA0, 0x02]))


def test_code_is_loaded_little_endian(dram):
    assert dram.load(DRAM_BASE, 8) == 0x13
    assert dram.load(DRAM_BASE, 32) == int.from_bytes(bytes([0x13, 0x0F, 0xA0, 0x02]), "little")


@pytest.mark.parametrize("size", [8, 16, 32, 64])
def test_round_trip(dram, size):
    addr = DRAM_BASE + 0x1000
    value = (1 << size) - 2
    dram.store(addr, size, value)
    assert dram.load(addr, size) == value


def test_store_keeps_only_low_bits(dram):
    addr = DRAM_BASE + 0x2000
    dram.store(addr, 64, 0)
    dram.store(addr, 8, 0x1FF)
    assert dram.load(addr, 64) == 0xFF


def test_bytes_are_little_endian(dram):
    addr = DRAM_BASE + 0x3000
    dram.store(addr, 16, 0x0102)
    assert dram.load(addr, 8) == 0x02
    assert dram.load(addr + 1, 8) == 0x01


@pytest.mark.parametrize("size", [0, 4, 24, 128])
def test_bad_load_size(dram, size):
    with pytest.raises(LoadAccessFault) as info:
        dram.load(DRAM_BASE, size)
    assert info.value.value == DRAM_BASE


@pytest.mark.parametrize("size", [0, 12, 48])
def test_bad_store_size(dram, size):
    with pytest.raises(StoreAMOAccessFault) as info:
        dram.store(DRAM_BASE + 8, size, 1)
    assert info.value.value == DRAM_BASE + 8


def test_access_past_end_faults(dram):
    with pytest.raises(LoadAccessFault):
        dram.load(DRAM_END, 64)
    with pytest.raises(StoreAMOAccessFault):
        dram.store(DRAM_END, 32, 1)