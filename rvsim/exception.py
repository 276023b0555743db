"""Synchronous RISC-V exceptions raised by the hart and its devices."""

from __future__ import annotations

from typing import ClassVar


class RiscvException(Exception):
    """Base class for RISC-V traps; carries the faulting address, instruction or pc."""

    code: ClassVar[int]
    description: ClassVar[str]
    fatal: ClassVar[bool] = False

    def __init__(self, value: int) -> None:
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"{self.description} {self.value:#x}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value:#x})"

    def is_fatal(self) -> bool:
        """Whether the emulator should stop after trapping on this exception."""
        return self.fatal


class InstructionAddrMisaligned(RiscvException):
    code = 0
    description = "Instruction address misaligned"
    fatal = True


class InstructionAccessFault(RiscvException):
    code = 1
    description = "Instruction access fault"
    fatal = True


class IllegalInstruction(RiscvException):
    code = 2
    description = "Illegal instruction"
    fatal = True


class Breakpoint(RiscvException):
    code = 3
    description = "Breakpoint"


class LoadAccessMisaligned(RiscvException):
    code = 4
    description = "Load access"


class LoadAccessFault(RiscvException):
    code = 5
    description = "Load access fault"
    fatal = True


class StoreAMOAddrMisaligned(RiscvException):
    code = 6
    description = "Store or AMO address misaliged"
    fatal = True


class StoreAMOAccessFault(RiscvException):
    code = 7
    description = "Store or AMO access fault"
    fatal = True


class EnvironmentCallFromUMode(RiscvException):
    code = 8
    description = "Environment call from U-mode"


class EnvironmentCallFromSMode(RiscvException):
    code = 9
    description = "Environment call from S-mode"


class EnvironmentCallFromMMode(RiscvException):
    code = 11
    description = "Environment call from M-mode"


class InstructionPageFault(RiscvException):
    code = 12
    description = "Instruction page fault"


class LoadPageFault(RiscvException):
    code = 13
    description = "Load page fault"


class StoreAMOPageFault(RiscvException):
    code = 15
    description = "Store or AMO page fault"