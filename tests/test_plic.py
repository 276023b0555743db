import pytest

from rvsim.exception import LoadAccessFault, StoreAMOAccessFault
from rvsim.param import PLIC_BASE, PLIC_PENDING, PLIC_SCLAIM, PLIC_SENABLE, PLIC_SPRIORITY
from rvsim.plic import Plic

REGS = [PLIC_PENDING, PLIC_SENABLE, PLIC_SPRIORITY, PLIC_SCLAIM]


@pytest.mark.parametrize("addr", REGS)
def test_round_trip(addr):
    plic = Plic()
    assert plic.load(addr, 32) == 0
    plic.store(addr, 32, 10)
    assert plic.load(addr, 32) == 10


def test_registers_are_independent():
    plic = Plic()
    for n, addr in enumerate(REGS, start=1):
        plic.store(addr, 32, n)
    assert [plic.load(addr, 32) for addr in REGS] == [1, 2, 3, 4]


def test_unknown_address_reads_zero_and_ignores_writes():
    plic = Plic()
    plic.store(PLIC_BASE, 32, 77)
    assert plic.load(PLIC_BASE, 32) == 0


@pytest.mark.parametrize("size", [8, 16, 64])
def test_wrong_size(size):
    plic = Plic()
    with pytest.raises(LoadAccessFault) as load_info:
        plic.load(PLIC_SCLAIM, size)
    assert load_info.value.value == PLIC_SCLAIM
    with pytest.raises(StoreAMOAccessFault) as store_info:
        plic.store(PLIC_SCLAIM, size, 1)
    assert store_info.value.value == PLIC_SCLAIM