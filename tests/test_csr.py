import pytest

from rvsim import csr
from rvsim.csr import Csr


def test_fresh_registers_are_zero():
    c = Csr()
    assert c.load(csr.MSTATUS) == 0
    assert c.load(csr.MTVEC) == 0


@pytest.mark.parametrize("addr", [csr.MTVEC, csr.MEPC, csr.STVEC, csr.SEPC, csr.SATP])
def test_plain_round_trip(addr):
    c = Csr()
    c.store(addr, 0x8000_0000)
    assert c.load(addr) == 0x8000_0000


def test_sstatus_is_masked_view_of_mstatus():
    c = Csr()
    c.store(csr.MSTATUS, csr.MASK64)
    assert c.load(csr.SSTATUS) == csr.MASK_SSTATUS


def test_sstatus_store_keeps_machine_bits():
    c = Csr()
    c.store(csr.MSTATUS, csr.MASK_MPP | csr.MASK_MIE)
    c.store(csr.SSTATUS, csr.MASK_SIE | csr.MASK_MPP)
    mstatus = c.load(csr.MSTATUS)
    assert mstatus & csr.MASK_MPP == csr.MASK_MPP
    assert mstatus & csr.MASK_MIE == csr.MASK_MIE
    assert mstatus & csr.MASK_SIE == csr.MASK_SIE


def test_sstatus_store_ignores_non_supervisor_bits():
    c = Csr()
    c.store(csr.SSTATUS, csr.MASK_MPP)
    assert c.load(csr.MSTATUS) == 0


def test_sie_follows_mideleg():
    c = Csr()
    deleg = csr.MASK_SSIP | csr.MASK_STIP
    c.store(csr.MIDELEG, deleg)
    c.store(csr.SIE, csr.MASK64)
    assert c.load(csr.MIE) == deleg
    assert c.load(csr.SIE) == deleg


def test_sip_reads_masked_mip():
    c = Csr()
    c.store(csr.MIP, csr.MASK_SSIP | csr.MASK_MTIP)
    c.store(csr.MIDELEG, csr.MASK_SSIP)
    assert c.load(csr.SIP) == csr.MASK_SSIP


def test_medeleg():
    c = Csr()
    c.store(csr.MEDELEG, 1 << 8)
    assert c.is_medelegated(8) is True
    assert c.is_medelegated(9) is False


def test_mideleg():
    c = Csr()
    c.store(csr.MIDELEG, 1 << 5)
    assert c.is_midelegated(5) is True
    assert c.is_midelegated(1) is False


def test_store_truncates_to_64_bits():
    c = Csr()
    c.store(csr.MEPC, (1 << 64) | 7)
    assert c.load(csr.MEPC) == 7


def test_format_csrs_layout():
    c = Csr()
    c.store(csr.MSTATUS, 1)
    text = c.format_csrs()
    lines = text.split("\n")
    assert len(lines[0]) == 80
    assert lines[0].strip("-") == "control status registers"
    assert lines[1].startswith("mstatus = 0x1 ")
    assert lines[2].startswith("sstatus = 0x0 ")
    assert text.endswith("\n")


def test_dump_csrs_prints_report(capsys):
    c = Csr()
    c.store(csr.MEPC, 0x8000_0000)
    c.dump_csrs()
    out = capsys.readouterr().out
    assert out == c.format_csrs() + "\n"
    assert "mepc = 0x80000000" in out