"""A small RV64 system emulator: CPU, CSRs, DRAM, CLINT, PLIC and UART on a system bus."""

__version__ = "0.1.0"