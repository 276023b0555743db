# rvsim

`rvsim` emulates a small 64-bit RISC-V machine. Its CPU runs RV64I together
with `mul`, `divu`, `remuw`, `amoadd.w/d` and `amoswap.w/d`, the Zicsr
instructions, `ecall`, `ebreak`, `sret` and `mret`, and it takes exceptions
into machine or supervisor mode. The CPU is attached to a system bus with

- 128 MiB of DRAM at `0x8000_0000`,
- a core-local interruptor (CLINT) at `0x0200_0000`, holding `mtime` and
  `mtimecmp`,
- a platform-level interrupt controller (PLIC) at `0x0c00_0000`, holding the
  pending, enable, priority and claim registers,
- a 16550a-style UART at `0x1000_0000`, wired to standard input and output.

## Installing

```
pip install .
```

## Running a program

Build a flat binary linked at address 0 (for example with
`-Wl,-Ttext=0x0 -nostdlib` and then `objcopy -O binary`) and pass it to the
emulator:

```
rvsim program.bin
```

A second argument is accepted but not used. With no file or more than two
arguments the command prints its usage and exits.

The binary is loaded at the start of DRAM and executed until a fatal
exception occurs: an illegal instruction, a misaligned or faulting fetch, or a
faulting load or store (for example fetching from an address outside every
device). Non-fatal exceptions such as `ecall` and `ebreak` trap to the handler
at `mtvec` (or `stvec` when delegated through `medeleg`) and execution goes on
from there. Bytes the program writes to the UART transmit register appear on
standard output, and bytes read from standard input can be read from the UART
receive register, with bit 0 of the line status register set while a byte is
waiting. When the run stops, the exception, the integer registers, the main
control and status registers and the program counter are printed.

## Using it from Python

```python
from rvsim.cpu import Cpu
from rvsim.main import run

code = bytes.fromhex("930f a002")  # addi x31, x0, 42
cpu = Cpu(code)
inst = cpu.fetch()
cpu.pc = cpu.execute(inst)
print(cpu.reg("x31"))  # 42
```

- `Cpu(code, uart=None)` builds a hart with `sp` set to the top of DRAM and
  `pc` at `DRAM_BASE`, in machine mode (`rvsim.cpu.Mode`).
- `Cpu.execute(inst)` returns the address of the next instruction and raises a
  subclass of `rvsim.exception.RiscvException` on a trap.
- `Cpu.handle_exception(exc)` takes such an exception into machine or
  supervisor mode, updating `xepc`, `xcause`, `xtval` and the status register.
- `Cpu.reg(name)` reads a register by ABI name, `xN`, `pc`, `fp`, or one of
  several CSR names; an unknown name raises `ValueError`.
- `Cpu.format_registers()`, `Cpu.format_pc()` and `Csr.format_csrs()` return
  the reports that `dump_registers`, `dump_pc` and `dump_csrs` print.
- `run(cpu)` drives the fetch–execute loop until a fatal exception, prints it
  and returns it.

The pieces can also be used on their own: `rvsim.bus.Bus`, `rvsim.dram.Dram`,
`rvsim.clint.Clint`, `rvsim.plic.Plic`, `rvsim.uart.Uart` (which takes
`input_stream` and `output_stream` arguments in place of the standard
streams), `rvsim.csr.Csr`, the decoder `rvsim.decode.Instruction` with
`sign_extend`, and the arithmetic helpers in `rvsim.alu`. The memory map lives
in `rvsim.param`.

## What it does not do

- Interrupts are never delivered to the CPU: the CLINT timer does not count,
  and the UART only records that a byte arrived (`Uart.is_interrupting`).
- There is no address translation; `satp` can be written but memory is always
  accessed physically.
- There is no floating point, no compressed instruction set, and only the
  multiply, divide and atomic instructions listed above.
- Only a single hart is emulated, and there is no disk or other block device.

## Tests

```
pip install .[test]
pytest
```