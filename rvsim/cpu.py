"""The RV64 hart: registers, privilege mode, trap handling and instruction execution."""

from __future__ import annotations

from enum import IntEnum

from . import alu
from .bus import Bus
from .csr import (
    MASK_MIE,
    MASK_MPIE,
    MASK_MPP,
    MASK_MPRV,
    MASK_SIE,
    MASK_SPIE,
    MASK_SPP,
    MCAUSE,
    MCOUNTEREN,
    MEDELEG,
    MEPC,
    MHARTID,
    MIP,
    MSCRATCH,
    MSTATUS,
    MTVAL,
    MTVEC,
    SATP,
    SCAUSE,
    SEPC,
    SIP,
    SSCRATCH,
    SSTATUS,
    STVAL,
    STVEC,
    Csr,
)
from .decode import Instruction, sign_extend
from .exception import (
    Breakpoint,
    EnvironmentCallFromMMode,
    EnvironmentCallFromSMode,
    EnvironmentCallFromUMode,
    IllegalInstruction,
    InstructionAccessFault,
    RiscvException,
)
from .param import DRAM_BASE, DRAM_END
from .uart import Uart

MASK64 = (1 << 64) - 1


class Mode(IntEnum):
    """RISC-V privilege modes."""

    USER = 0b00
    SUPERVISOR = 0b01
    MACHINE = 0b11


RVABI = (
    "zero", "ra", "sp", "gp", "tp", "t0", "t1", "t2",
    "s0", "s1", "a0", "a1", "a2", "a3", "a4", "a5",
    "a6", "a7", "s2", "s3", "s4", "s5", "s6", "s7",
    "s8", "s9", "s10", "s11", "t3", "t4", "t5", "t6",
)

_CSR_NAMES = {
    "mhartid": MHARTID,
    "mstatus": MSTATUS,
    "mtvec": MTVEC,
    "mepc": MEPC,
    "mcause": MCAUSE,
    "mtval": MTVAL,
    "medeleg": MEDELEG,
    "mscratch": MSCRATCH,
    "MIP": MIP,
    "mcounteren": MCOUNTEREN,
    "sstatus": SSTATUS,
    "stvec": STVEC,
    "sepc": SEPC,
    "scause": SCAUSE,
    "stval": STVAL,
    "sscratch": SSCRATCH,
    "SIP": SIP,
    "SATP": SATP,
}

_LOAD_WIDTHS = {
    0x0: (8, True),   # lb
    0x1: (16, True),  # lh
    0x2: (32, True),  # lw
    0x3: (64, False),  # ld
    0x4: (8, False),  # lbu
    0x5: (16, False),  # lhu
    0x6: (32, False),  # lwu
}

_STORE_WIDTHS = {0x0: 8, 0x1: 16, 0x2: 32, 0x3: 64}


def _as_mode(value: int) -> Mode | int:
    try:
        return Mode(value)
    except ValueError:
        return value


class Cpu:
    """A single hart with 32 integer registers, a pc, a privilege mode, a bus and CSRs."""

    def __init__(self, code: bytes = b"", uart: Uart | None = None) -> None:
        self.regs = [0] * 32
        self.regs[2] = DRAM_END
        self.pc = DRAM_BASE
        self.mode: Mode | int = Mode.MACHINE
        self.bus = Bus(code, uart)
        self.csr = Csr()

    def reg(self, name: str) -> int:
        """Read a register by ABI name, xN name, "pc", "fp" or CSR name."""
        if name in RVABI:
            return self.regs[RVABI.index(name)]
        if name == "pc":
            return self.pc
        if name == "fp":
            return self.reg("s0")
        if name.startswith("x"):
            digits = name[1:]
            if digits.isdigit() and int(digits) <= 31:
                return self.regs[int(digits)]
            raise ValueError(f"Invalid register {name}")
        if name in _CSR_NAMES:
            return self.csr.load(_CSR_NAMES[name])
        raise ValueError(f"Invalid register {name}")

    def format_pc(self) -> str:
        header = f"{'PC register':-^80}"
        return f"{header}\nPC = {self.pc:#x}\n"

    def format_registers(self) -> str:
        self.regs[0] = 0
        lines = []
        for base in range(0, 32, 4):
            cells = [
                f"{'x' + str(i):<3}({RVABI[i]:^4}) = {self.regs[i]:<#18x}"
                for i in range(base, base + 4)
            ]
            lines.append(" ".join(cells) + "\n")
        header = f"{'registers':-^80}"
        return f"{header}\n{''.join(lines)}"

    def dump_pc(self) -> None:
        print(self.format_pc())

    def dump_registers(self) -> None:
        print(self.format_registers())

    def dump_csrs(self) -> None:
        """Print values in some CSRs."""
        self.csr.dump_csrs()

    def handle_exception(self, exc: RiscvException) -> None:
        """Take a trap into S-mode or M-mode for `exc`."""
        pc = self.pc
        mode = int(self.mode)
        cause = exc.code
        # Exceptions raised in U- or S-mode and delegated by medeleg are handled in S-mode.
        if mode <= Mode.SUPERVISOR and self.csr.is_medelegated(cause):
            self.mode = Mode.SUPERVISOR
            status_addr, tvec, cause_addr, tval, epc = SSTATUS, STVEC, SCAUSE, STVAL, SEPC
            mask_pie, pie_i, mask_ie, ie_i, mask_pp, pp_i = MASK_SPIE, 5, MASK_SIE, 1, MASK_SPP, 8
        else:
            self.mode = Mode.MACHINE
            status_addr, tvec, cause_addr, tval, epc = MSTATUS, MTVEC, MCAUSE, MTVAL, MEPC
            mask_pie, pie_i, mask_ie, ie_i, mask_pp, pp_i = MASK_MPIE, 7, MASK_MIE, 3, MASK_MPP, 11

        # The trap vector base must be 4-byte aligned.
        self.pc = self.csr.load(tvec) & ~0b11 & MASK64
        self.csr.store(epc, pc)
        self.csr.store(cause_addr, cause)
        self.csr.store(tval, exc.value)

        status = self.csr.load(status_addr)
        ie = (status & mask_ie) >> ie_i
        status = (status & ~mask_pie & MASK64) | (ie << pie_i)
        status &= ~mask_ie & MASK64
        status = (status & ~mask_pp & MASK64) | (mode << pp_i)
        self.csr.store(status_addr, status)

    def load(self, addr: int, size: int) -> int:
        return self.bus.load(addr, size)

    def store(self, addr: int, size: int, value: int) -> None:
        self.bus.store(addr, size, value & MASK64)

    def fetch(self) -> int:
        """Read the 32-bit instruction at pc."""
        try:
            return self.bus.load(self.pc, 32)
        except RiscvException:
            raise InstructionAccessFault(self.pc) from None

    def update_pc(self) -> int:
        return self.pc + 4

    def execute(self, inst: int) -> int:
        """Execute one instruction and return the address of the next one."""
        ins = Instruction(inst)
        opcode, rd, rs1, rs2 = ins.opcode, ins.rd, ins.rs1, ins.rs2
        funct3, funct7 = ins.funct3, ins.funct7
        regs = self.regs
        # x0 is hardwired to zero.
        regs[0] = 0

        if opcode == 0x03:
            addr = (regs[rs1] + ins.i_imm()) & MASK64
            width = _LOAD_WIDTHS.get(funct3)
            if width is None:
                raise IllegalInstruction(inst)
            size, signed = width
            value = self.load(addr, size)
            regs[rd] = sign_extend(value, size) & MASK64 if signed else value
            return self.update_pc()

        if opcode == 0x0F:
            # Fences are no-ops for a sequential single-hart emulator.
            if funct3 == 0x0:
                return self.update_pc()
            raise IllegalInstruction(inst)

        if opcode == 0x13:
            regs[rd] = alu.op_imm(ins, regs[rs1])
            return self.update_pc()

        if opcode == 0x17:  # auipc
            regs[rd] = (self.pc + ins.u_imm()) & MASK64
            return self.update_pc()

        if opcode == 0x1B:
            regs[rd] = alu.op_imm_32(ins, regs[rs1])
            return self.update_pc()

        if opcode == 0x23:
            addr = (regs[rs1] + ins.s_imm()) & MASK64
            size = _STORE_WIDTHS.get(funct3)
            if size is None:
                raise IllegalInstruction(inst)
            self.store(addr, size, regs[rs2])
            return self.update_pc()

        if opcode == 0x2F:
            return self._execute_amo(ins, inst)

        if opcode == 0x33:
            regs[rd] = alu.op(ins, regs[rs1], regs[rs2])
            return self.update_pc()

        if opcode == 0x37:  # lui
            regs[rd] = ins.u_imm() & MASK64
            return self.update_pc()

        if opcode == 0x3B:
            regs[rd] = alu.op_32(ins, regs[rs1], regs[rs2])
            return self.update_pc()

        if opcode == 0x63:
            if alu.branch_taken(ins, regs[rs1], regs[rs2]):
                return (self.pc + ins.b_imm()) & MASK64
            return self.update_pc()

        if opcode == 0x67:  # jalr
            link = self.pc + 4
            new_pc = ((regs[rs1] + ins.i_imm()) & MASK64) & ~1
            regs[rd] = link
            return new_pc

        if opcode == 0x6F:  # jal
            regs[rd] = self.pc + 4
            return (self.pc + ins.j_imm()) & MASK64

        if opcode == 0x73:
            return self._execute_system(ins, inst)

        raise IllegalInstruction(inst)

    def _execute_amo(self, ins: Instruction, inst: int) -> int:
        regs = self.regs
        funct5 = (ins.funct7 & 0b1111100) >> 2
        key = (ins.funct3, funct5)
        sizes = {0x2: 32, 0x3: 64}
        size = sizes.get(ins.funct3)
        if size is None or funct5 not in (0x00, 0x01):
            raise IllegalInstruction(inst)
        addr = regs[ins.rs1]
        old = self.load(addr, size)
        if key[1] == 0x00:  # amoadd
            self.store(addr, size, old + regs[ins.rs2])
        else:  # amoswap
            self.store(addr, size, regs[ins.rs2])
        regs[ins.rd] = old
        return self.update_pc()

    def _execute_system(self, ins: Instruction, inst: int) -> int:
        regs = self.regs
        rd, rs1 = ins.rd, ins.rs1
        funct3 = ins.funct3
        csr_addr = ins.csr

        if funct3 == 0x0:
            rs2, funct7 = ins.rs2, ins.funct7
            if (rs2, funct7) == (0x0, 0x0):  # ecall
                if self.mode == Mode.USER:
                    raise EnvironmentCallFromUMode(self.pc)
                if self.mode == Mode.SUPERVISOR:
                    raise EnvironmentCallFromSMode(self.pc)
                if self.mode == Mode.MACHINE:
                    raise EnvironmentCallFromMMode(self.pc)
                raise IllegalInstruction(inst)
            if (rs2, funct7) == (0x1, 0x0):  # ebreak
                raise Breakpoint(self.pc)
            if (rs2, funct7) == (0x2, 0x8):  # sret
                sstatus = self.csr.load(SSTATUS)
                self.mode = _as_mode((sstatus & MASK_SPP) >> 8)
                spie = (sstatus & MASK_SPIE) >> 5
                sstatus = (sstatus & ~MASK_SIE & MASK64) | (spie << 1)
                sstatus |= MASK_SPIE
                sstatus &= ~MASK_SPP & MASK64
                self.csr.store(SSTATUS, sstatus)
                return self.csr.load(SEPC) & ~0b11 & MASK64
            if (rs2, funct7) == (0x2, 0x18):  # mret
                mstatus = self.csr.load(MSTATUS)
                self.mode = _as_mode((mstatus & MASK_MPP) >> 11)
                mpie = (mstatus & MASK_MPIE) >> 7
                mstatus = (mstatus & ~MASK_MIE & MASK64) | (mpie << 3)
                mstatus |= MASK_MPIE
                mstatus &= ~MASK_MPP & MASK64
                mstatus &= ~MASK_MPRV & MASK64
                self.csr.store(MSTATUS, mstatus)
                return self.csr.load(MEPC) & ~0b11 & MASK64
            if funct7 == 0x9:  # sfence.vma
                return self.update_pc()
            raise IllegalInstruction(inst)

        if funct3 == 0x1:  # csrrw
            old = self.csr.load(csr_addr)
            self.csr.store(csr_addr, regs[rs1])
            regs[rd] = old
        elif funct3 == 0x2:  # csrrs
            old = self.csr.load(csr_addr)
            self.csr.store(csr_addr, old | regs[rs1])
            regs[rd] = old
        elif funct3 == 0x3:  # csrrc
            old = self.csr.load(csr_addr)
            self.csr.store(csr_addr, old & ~regs[rs1] & MASK64)
            regs[rd] = old
        elif funct3 == 0x5:  # csrrwi
            regs[rd] = self.csr.load(csr_addr)
            self.csr.store(csr_addr, rs1)
        elif funct3 == 0x6:  # csrrsi
            old = self.csr.load(csr_addr)
            self.csr.store(csr_addr, old | rs1)
            regs[rd] = old
        elif funct3 == 0x7:  # csrrci
            old = self.csr.load(csr_addr)
            self.csr.store(csr_addr, old & ~rs1 & MASK64)
            regs[rd] = old
        else:
            raise IllegalInstruction(inst)
        return self.update_pc()