"""Instruction field extraction and immediate decoding for RV64 instructions."""

from __future__ import annotations

from dataclasses import dataclass

_WORD = 0xFFFF_FFFF


def sign_extend(value: int, bits: int) -> int:
    """Interpret the low `bits` bits of `value` as a two's-complement number."""
    if bits <= 0:
        raise ValueError(f"bit width must be positive, got {bits}")
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


@dataclass(frozen=True)
class Instruction:
    """A fetched 32-bit instruction word with accessors for its fields.

    The immediate methods return signed Python integers.
    """

    raw: int

    @property
    def word(self) -> int:
        return self.raw & _WORD

    @property
    def opcode(self) -> int:
        return self.word & 0x7F

    @property
    def rd(self) -> int:
        return (self.word >> 7) & 0x1F

    @property
    def funct3(self) -> int:
        return (self.word >> 12) & 0x7

    @property
    def rs1(self) -> int:
        return (self.word >> 15) & 0x1F

    @property
    def rs2(self) -> int:
        return (self.word >> 20) & 0x1F

    @property
    def funct7(self) -> int:
        return (self.word >> 25) & 0x7F

    @property
    def csr(self) -> int:
        """The 12-bit CSR address of a system instruction."""
        return (self.word >> 20) & 0xFFF

    def i_imm(self) -> int:
        """imm[11:0] = inst[31:20]."""
        return sign_extend(self.word >> 20, 12)

    def s_imm(self) -> int:
        """imm[11:5|4:0] = inst[31:25|11:7]."""
        word = self.word
        return sign_extend(((word >> 25) << 5) | ((word >> 7) & 0x1F), 12)

    def b_imm(self) -> int:
        """imm[12|10:5|4:1|11] = inst[31|30:25|11:8|7]."""
        word = self.word
        imm = (
            ((word >> 31) << 12)
            | (((word >> 7) & 0x1) << 11)
            | (((word >> 25) & 0x3F) << 5)
            | (((word >> 8) & 0xF) << 1)
        )
        return sign_extend(imm, 13)

    def u_imm(self) -> int:
        """imm[31:12] = inst[31:12], low 12 bits zero."""
        return sign_extend(self.word & 0xFFFF_F000, 32)

    def j_imm(self) -> int:
        """imm[20|10:1|11|19:12] = inst[31|30:21|20|19:12]."""
        word = self.word
        imm = (
            ((word >> 31) << 20)
            | (word & 0xFF000)
            | (((word >> 20) & 0x1) << 11)
            | (((word >> 21) & 0x3FF) << 1)
        )
        return sign_extend(imm, 21)