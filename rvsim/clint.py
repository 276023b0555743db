"""Core-local interruptor: the machine timer registers."""

from __future__ import annotations

from .exception import LoadAccessFault, StoreAMOAccessFault
from .param import CLINT_MTIME, CLINT_MTIMECMP


class Clint:
    """Holds mtime and mtimecmp; both are accessed only as 64-bit words."""

    def __init__(self) -> None:
        self.mtime = 0
        self.mtimecmp = 0

    def load(self, addr: int, size: int) -> int:
        if size != 64:
            raise LoadAccessFault(addr)
        if addr == CLINT_MTIMECMP:
            return self.mtimecmp
        if addr == CLINT_MTIME:
            return self.mtime
        raise LoadAccessFault(addr)

    def store(self, addr: int, size: int, value: int) -> None:
        if size != 64:
            raise LoadAccessFault(addr)
        if addr == CLINT_MTIMECMP:
            self.mtimecmp = value
        elif addr == CLINT_MTIME:
            self.mtime = value
        else:
            raise StoreAMOAccessFault(addr)