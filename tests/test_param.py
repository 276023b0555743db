import pytest

from rvsim import param
from rvsim.clint import Clint
from rvsim.exception import LoadAccessFault
from rvsim.plic import Plic


def test_clint_timer_registers_are_separate():
    clint = Clint()
    clint.store(param.CLINT_MTIME, 64, 7)
    clint.store(param.CLINT_MTIMECMP, 64, 9)
    assert clint.load(param.CLINT_MTIME, 64) == 7
    assert clint.load(param.CLINT_MTIMECMP, 64) == 9


def test_clint_base_is_not_a_register():
    with pytest.raises(LoadAccessFault) as info:
        Clint().load(param.CLINT_BASE, 64)
    assert info.value.value == param.CLINT_BASE


def test_clint_timer_registers_start_at_zero():
    clint = Clint()
    assert clint.load(param.CLINT_MTIME, 64) == 0
    assert clint.load(param.CLINT_MTIMECMP, 64) == 0


def test_plic_registers_are_separate():
    plic = Plic()
    regs = [param.PLIC_PENDING, param.PLIC_SENABLE, param.PLIC_SPRIORITY, param.PLIC_SCLAIM]
    for value, reg in enumerate(regs, start=1):
        plic.store(reg, 32, value)
    assert [plic.load(reg, 32) for reg in regs] == [1, 2, 3, 4]


def test_plic_base_reads_zero():
    plic = Plic()
    plic.store(param.PLIC_PENDING, 32, 5)
    assert plic.load(param.PLIC_BASE, 32) == 0