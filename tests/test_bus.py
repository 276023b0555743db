import io

import pytest

from rvsim.bus import Bus
from rvsim.exception import LoadAccessFault, StoreAMOAccessFault
from rvsim.param import CLINT_MTIMECMP, DRAM_BASE, PLIC_SENABLE, UART_BASE, UART_LCR, UART_THR
from rvsim.uart import Uart


@pytest.fixture(scope="module")
def output():
    return io.StringIO()


@pytest.fixture(scope="module")
def bus(output):
    uart = Uart(input_stream=io.BytesIO(b""), output_stream=output)
    return Bus(bytes([0x01, 0x02]), uart=uart)


def test_code_visible_through_bus(bus):
    assert bus.load(DRAM_BASE, 16) == int.from_bytes(bytes([0x01, 0x02]), "little")


def test_dram_round_trip(bus):
    bus.store(DRAM_BASE + 0x100, 64, 0x8000_0000)
    assert bus.load(DRAM_BASE + 0x100, 64) == 0x8000_0000


def test_clint_routed(bus):
    bus.store(CLINT_MTIMECMP, 64, 42)
    assert bus.load(CLINT_MTIMECMP, 64) == 42
    assert bus.clint.mtimecmp == 42


def test_plic_routed(bus):
    bus.store(PLIC_SENABLE, 32, 10)
    assert bus.load(PLIC_SENABLE, 32) == 10
    assert bus.plic.senable == 10


def test_uart_routed(bus, output):
    bus.store(UART_BASE + UART_THR, 8, ord("H"))
    assert output.getvalue().endswith("H")
    bus.store(UART_BASE + UART_LCR, 8, 3)
    assert bus.load(UART_BASE + UART_LCR, 8) == 3


def test_device_errors_propagate(bus):
    with pytest.raises(LoadAccessFault):
        bus.load(CLINT_MTIMECMP, 32)


def test_unmapped_load(bus):
    with pytest.raises(LoadAccessFault) as info:
        bus.load(0x0, 8)
    assert info.value.value == 0


def test_unmapped_store(bus):
    with pytest.raises(StoreAMOAccessFault) as info:
        bus.store(0x100, 8, 1)
    assert info.value.value == 0x100