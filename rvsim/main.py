"""Command-line entry point: load a raw binary into DRAM and run it until a fatal trap."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence

from .cpu import Cpu
from .exception import RiscvException

USAGE = "usage: rvsim <filename> [image]"


def run(cpu: Cpu) -> RiscvException:
    """Fetch and execute instructions, trapping on exceptions, until one is fatal.

    Every exception is handed to the hart's trap handler first; the fatal one
    that ends the run is printed and returned.
    """
    while True:
        try:
            inst = cpu.fetch()
            cpu.pc = cpu.execute(inst)
        except RiscvException as exc:
            cpu.handle_exception(exc)
            if exc.is_fatal():
                print(exc)
                return exc


def main(argv: Sequence[str] | None = None) -> int:
    """Run the program image named on the command line and dump the hart state."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) not in (1, 2):
        raise SystemExit(USAGE)

    path = Path(args[0])
    try:
        binary = path.read_bytes()
    except OSError as err:
        print(f"{path}: {err.strerror or err}", file=sys.stderr)
        return 1

    cpu = Cpu(binary)
    run(cpu)
    cpu.dump_registers()
    cpu.dump_csrs()
    cpu.dump_pc()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())