"""Platform-level interrupt controller."""

from __future__ import annotations

from .exception import LoadAccessFault, StoreAMOAccessFault
from .param import PLIC_PENDING, PLIC_SCLAIM, PLIC_SENABLE, PLIC_SPRIORITY

_REGISTERS = {
    PLIC_PENDING: "pending",
    PLIC_SENABLE: "senable",
    PLIC_SPRIORITY: "spriority",
    PLIC_SCLAIM: "sclaim",
}


class Plic:
    """Pending, enable, priority and claim registers; other addresses read as zero and ignore writes."""

    def __init__(self) -> None:
        self.pending = 0
        self.senable = 0
        self.spriority = 0
        self.sclaim = 0

    def load(self, addr: int, size: int) -> int:
        if size != 32:
            raise LoadAccessFault(addr)
        name = _REGISTERS.get(addr)
        return getattr(self, name) if name else 0

    def store(self, addr: int, size: int, value: int) -> None:
        if size != 32:
            raise StoreAMOAccessFault(addr)
        name = _REGISTERS.get(addr)
        if name:
            setattr(self, name, value)