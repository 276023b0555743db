"""Physical memory map of the emulated machine and device register offsets."""

DRAM_BASE = 0x8000_0000
DRAM_SIZE = 1024 * 1024 * 128
DRAM_END = DRAM_SIZE + DRAM_BASE - 1

# Core-local interruptor: timer and per-hart software interrupts.
CLINT_BASE = 0x200_0000
CLINT_SIZE = 0x10000
CLINT_END = CLINT_BASE + CLINT_SIZE - 1

CLINT_MTIMECMP = CLINT_BASE + 0x4000
CLINT_MTIME = CLINT_BASE + 0xBFF8

# Platform-level interrupt controller: routes external interrupts to harts.
PLIC_BASE = 0xC00_0000
PLIC_SIZE = 0x4000000
PLIC_END = PLIC_BASE + PLIC_SIZE - 1

PLIC_PENDING = PLIC_BASE + 0x1000
PLIC_SENABLE = PLIC_BASE + 0x2000
PLIC_SPRIORITY = PLIC_BASE + 0x201000
PLIC_SCLAIM = PLIC_BASE + 0x201004

# 16550a UART.
UART_BASE = 0x1000_0000
UART_SIZE = 0x100
UART_END = UART_BASE + UART_SIZE - 1
UART_IRQ = 10
# Receive holding register (input bytes).
UART_RHR = 0
# Transmit holding register (output bytes).
UART_THR = 0
# Line control register.
UART_LCR = 3
# Line status register: bit 0 is "data received", bit 5 is "transmitter empty".
UART_LSR = 5
MASK_UART_LSR_RX = 1
MASK_UART_LSR_TX = 1 << 5