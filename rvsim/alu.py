"""Integer arithmetic, logic, shift and branch-condition units of the RV64 hart."""

from __future__ import annotations

from .decode import Instruction, sign_extend
from .exception import IllegalInstruction

MASK64 = (1 << 64) - 1
_WORD = 0xFFFF_FFFF


def _instruction(inst: Instruction | int) -> Instruction:
    return inst if isinstance(inst, Instruction) else Instruction(inst)


def _signed(value: int) -> int:
    return sign_extend(value, 64)


def _sext32(value: int) -> int:
    """Sign-extend the low 32 bits of `value` into an unsigned 64-bit result."""
    return sign_extend(value, 32) & MASK64


def op_imm(inst: Instruction | int, a: int) -> int:
    """Evaluate an OP-IMM (opcode 0x13) instruction with rs1 holding `a`."""
    inst = _instruction(inst)
    a &= MASK64
    imm = inst.i_imm() & MASK64
    # RV64I encodes the shift amount in the low 6 bits of the immediate.
    shamt = imm & 0x3F
    funct3 = inst.funct3
    if funct3 == 0x0:  # addi
        return (a + imm) & MASK64
    if funct3 == 0x1:  # slli
        return (a << shamt) & MASK64
    if funct3 == 0x2:  # slti
        return int(_signed(a) < _signed(imm))
    if funct3 == 0x3:  # sltiu
        return int(a < imm)
    if funct3 == 0x4:  # xori
        return a ^ imm
    if funct3 == 0x5:
        kind = inst.funct7 >> 1
        if kind == 0x00:  # srli
            return a >> shamt
        if kind == 0x10:  # srai
            return (_signed(a) >> shamt) & MASK64
        raise IllegalInstruction(inst.raw)
    if funct3 == 0x6:  # ori
        return a | imm
    if funct3 == 0x7:  # andi
        return a & imm
    raise IllegalInstruction(inst.raw)


def op_imm_32(inst: Instruction | int, a: int) -> int:
    """Evaluate an OP-IMM-32 (opcode 0x1b) instruction with rs1 holding `a`."""
    inst = _instruction(inst)
    a &= MASK64
    imm = inst.i_imm() & MASK64
    shamt = imm & 0x1F
    funct3 = inst.funct3
    if funct3 == 0x0:  # addiw
        return _sext32(a + imm)
    if funct3 == 0x1:  # slliw
        return _sext32(a << shamt)
    if funct3 == 0x5:
        funct7 = inst.funct7
        if funct7 == 0x00:  # srliw
            return _sext32((a & _WORD) >> shamt)
        if funct7 == 0x20:  # sraiw
            return (sign_extend(a, 32) >> shamt) & MASK64
        raise IllegalInstruction(inst.raw)
    raise IllegalInstruction(inst.raw)


def op(inst: Instruction | int, a: int, b: int) -> int:
    """Evaluate an OP (opcode 0x33) instruction with rs1 = `a` and rs2 = `b`."""
    inst = _instruction(inst)
    a &= MASK64
    b &= MASK64
    # Only the low 6 bits of rs2 give the shift amount in RV64I.
    shamt = b & 0x3F
    key = (inst.funct3, inst.funct7)
    if key == (0x0, 0x00):  # add
        return (a + b) & MASK64
    if key == (0x0, 0x01):  # mul
        return (a * b) & MASK64
    if key == (0x0, 0x20):  # sub
        return (a - b) & MASK64
    if key == (0x1, 0x00):  # sll
        return (a << shamt) & MASK64
    if key == (0x2, 0x00):  # slt
        return int(_signed(a) < _signed(b))
    if key == (0x3, 0x00):  # sltu
        return int(a < b)
    if key == (0x4, 0x00):  # xor
        return a ^ b
    if key == (0x5, 0x00):  # srl
        return a >> shamt
    if key == (0x5, 0x20):  # sra
        return (_signed(a) >> shamt) & MASK64
    if key == (0x6, 0x00):  # or
        return a | b
    if key == (0x7, 0x00):  # and
        return a & b
    raise IllegalInstruction(inst.raw)


def op_32(inst: Instruction | int, a: int, b: int) -> int:
    """Evaluate an OP-32 (opcode 0x3b) instruction with rs1 = `a` and rs2 = `b`."""
    inst = _instruction(inst)
    a &= MASK64
    b &= MASK64
    shamt = b & 0x1F
    key = (inst.funct3, inst.funct7)
    if key == (0x0, 0x00):  # addw
        return _sext32(a + b)
    if key == (0x0, 0x20):  # subw
        return _sext32(a - b)
    if key == (0x1, 0x00):  # sllw
        return _sext32((a & _WORD) << shamt)
    if key == (0x5, 0x00):  # srlw
        return _sext32((a & _WORD) >> shamt)
    if key == (0x5, 0x01):  # divu
        return MASK64 if b == 0 else a // b
    if key == (0x5, 0x20):  # sraw
        return (sign_extend(a, 32) >> shamt) & MASK64
    if key == (0x7, 0x01):  # remuw
        if b == 0:
            return a
        return _sext32((a & _WORD) % (b & _WORD))
    raise IllegalInstruction(inst.raw)


def branch_taken(inst: Instruction | int, a: int, b: int) -> bool:
    """Decide whether a BRANCH (opcode 0x63) instruction comparing `a` with `b` is taken."""
    inst = _instruction(inst)
    a &= MASK64
    b &= MASK64
    funct3 = inst.funct3
    if funct3 == 0x0:  # beq
        return a == b
    if funct3 == 0x1:  # bne
        return a != b
    if funct3 == 0x4:  # blt
        return _signed(a) < _signed(b)
    if funct3 == 0x5:  # bge
        return _signed(a) >= _signed(b)
    if funct3 == 0x6:  # bltu
        return a < b
    if funct3 == 0x7:  # bgeu
        return a >= b
    raise IllegalInstruction(inst.raw)