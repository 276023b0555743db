"""Main memory."""

from __future__ import annotations

from .exception import LoadAccessFault, RiscvException, StoreAMOAccessFault
from .param import DRAM_BASE, DRAM_SIZE

_ACCESS_SIZES = frozenset({8, 16, 32, 64})


class Dram:
    """Little-endian byte-addressed memory starting at DRAM_BASE, preloaded with a program image."""

    def __init__(self, code: bytes = b"") -> None:
        if len(code) > DRAM_SIZE:
            raise ValueError(f"program of {len(code)} bytes does not fit in {DRAM_SIZE} bytes of memory")
        self.data = bytearray(DRAM_SIZE)
        self.data[: len(code)] = code

    def _span(self, addr: int, size: int, fault: type[RiscvException]) -> slice:
        if size not in _ACCESS_SIZES:
            raise fault(addr)
        index = addr - DRAM_BASE
        nbytes = size // 8
        if index < 0 or index + nbytes > len(self.data):
            raise fault(addr)
        return slice(index, index + nbytes)

    def load(self, addr: int, size: int) -> int:
        """Read `size` bits at `addr`."""
        return int.from_bytes(self.data[self._span(addr, size, LoadAccessFault)], "little")

    def store(self, addr: int, size: int, value: int) -> None:
        """Write the low `size` bits of `value` at `addr`."""
        span = self._span(addr, size, StoreAMOAccessFault)
        self.data[span] = (value & ((1 << size) - 1)).to_bytes(size // 8, "little")