"""Control and status registers."""

from __future__ import annotations

import sys

MASK64 = (1 << 64) - 1

NUM_CSRS = 4096

# Machine-level CSRs.
MHARTID = 0xF14
MSTATUS = 0x300
MEDELEG = 0x302
MIDELEG = 0x303
MIE = 0x304
MTVEC = 0x305
MCOUNTEREN = 0x306
MSCRATCH = 0x340
MEPC = 0x341
MCAUSE = 0x342
MTVAL = 0x343
MIP = 0x344

# Supervisor-level CSRs.
SSTATUS = 0x100
SIE = 0x104
STVEC = 0x105
SSCRATCH = 0x140
SEPC = 0x141
SCAUSE = 0x142
STVAL = 0x143
SIP = 0x144
SATP = 0x180

# mstatus and sstatus fields.
MASK_SIE = 1 << 1
MASK_MIE = 1 << 3
MASK_SPIE = 1 << 5
MASK_UBE = 1 << 6
MASK_MPIE = 1 << 7
MASK_SPP = 1 << 8
MASK_VS = 0b11 << 9
MASK_MPP = 0b11 << 11
MASK_FS = 0b11 << 13
MASK_XS = 0b11 << 15
MASK_MPRV = 1 << 17
MASK_SUM = 1 << 18
MASK_MXR = 1 << 19
MASK_TVM = 1 << 20
MASK_TW = 1 << 21
MASK_TSR = 1 << 22
MASK_UXL = 0b11 << 32
MASK_SXL = 0b11 << 34
MASK_SBE = 1 << 36
MASK_MBE = 1 << 37
MASK_SD = 1 << 63
MASK_SSTATUS = (
    MASK_SIE | MASK_SPIE | MASK_UBE | MASK_SPP | MASK_FS
    | MASK_XS | MASK_SUM | MASK_MXR | MASK_UXL | MASK_SD
)

# MIP / SIP fields.
MASK_SSIP = 1 << 1
MASK_MSIP = 1 << 3
MASK_STIP = 1 << 5
MASK_MTIP = 1 << 7
MASK_SEIP = 1 << 9
MASK_MEIP = 1 << 11


class Csr:
    """The 4096 CSRs of a hart; sstatus, sie and sip are views of their machine counterparts."""

    def __init__(self) -> None:
        self._csrs = [0] * NUM_CSRS

    def load(self, addr: int) -> int:
        csrs = self._csrs
        if addr == SIE:
            return csrs[MIE] & csrs[MIDELEG]
        if addr == SIP:
            return csrs[MIP] & csrs[MIDELEG]
        if addr == SSTATUS:
            return csrs[MSTATUS] & MASK_SSTATUS
        return csrs[addr]

    def store(self, addr: int, value: int) -> None:
        csrs = self._csrs
        value &= MASK64
        if addr == SIE:
            csrs[MIE] = (csrs[MIE] & ~csrs[MIDELEG] & MASK64) | (value & csrs[MIDELEG])
        elif addr == SIP:
            csrs[MIP] = (csrs[MIE] & ~csrs[MIDELEG] & MASK64) | (value & csrs[MIDELEG])
        elif addr == SSTATUS:
            csrs[MSTATUS] = (csrs[MSTATUS] & ~MASK_SSTATUS & MASK64) | (value & MASK_SSTATUS)
        else:
            csrs[addr] = value

    def is_medelegated(self, cause: int) -> bool:
        return (self._csrs[MEDELEG] >> (cause % 64)) & 1 == 1

    def is_midelegated(self, cause: int) -> bool:
        return (self._csrs[MIDELEG] >> (cause % 64)) & 1 == 1

    def format_csrs(self) -> str:
        """Render the main trap-related CSRs as a report."""
        machine = (
            f"mstatus = {self.load(MSTATUS):<#18x}  mtvec = {self.load(MTVEC):<#18x}  "
            f"mepc = {self.load(MEPC):<#18x}  mcause = {self.load(MCAUSE):<#18x}"
        )
        supervisor = (
            f"sstatus = {self.load(SSTATUS):<#18x}  stvec = {self.load(STVEC):<#18x}  "
            f"sepc = {self.load(SEPC):<#18x}  scause = {self.load(SCAUSE):<#18x}"
        )
        header = f"{'control status registers':-^80}"
        return f"{header}\n{machine}\n{supervisor}\n"

    def dump_csrs(self) -> None:
        """Write the CSR report to standard output."""
        out = sys.stdout
        out.write(self.format_csrs())
        out.write("\n")
        out.flush()