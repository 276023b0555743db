"""System bus routing physical addresses to memory and devices."""

from __future__ import annotations

from .clint import Clint
from .dram import Dram
from .exception import LoadAccessFault, StoreAMOAccessFault
from .param import CLINT_BASE, CLINT_END, DRAM_BASE, DRAM_END, PLIC_BASE, PLIC_END, UART_BASE, UART_END
from .plic import Plic
from .uart import Uart


class Bus:
    """Connects DRAM, CLINT, PLIC and UART at their fixed address ranges."""

    def __init__(self, code: bytes = b"", uart: Uart | None = None) -> None:
        self.dram = Dram(code)
        self.clint = Clint()
        self.plic = Plic()
        self.uart = uart if uart is not None else Uart()

    def _device(self, addr: int) -> Clint | Plic | Dram | Uart | None:
        for start, end, device in (
            (CLINT_BASE, CLINT_END, self.clint),
            (PLIC_BASE, PLIC_END, self.plic),
            (DRAM_BASE, DRAM_END, self.dram),
            (UART_BASE, UART_END, self.uart),
        ):
            if start <= addr <= end:
                return device
        return None

    def load(self, addr: int, size: int) -> int:
        device = self._device(addr)
        if device is None:
            raise LoadAccessFault(addr)
        return device.load(addr, size)

    def store(self, addr: int, size: int, value: int) -> None:
        device = self._device(addr)
        if device is None:
            raise StoreAMOAccessFault(addr)
        device.store(addr, size, value)