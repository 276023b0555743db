"""A 16550a-style UART backed by the host's standard streams."""

from __future__ import annotations

import sys
import threading
from typing import BinaryIO, TextIO

from .exception import LoadAccessFault, StoreAMOAccessFault
from .param import (
    MASK_UART_LSR_RX,
    MASK_UART_LSR_TX,
    UART_BASE,
    UART_LSR,
    UART_RHR,
    UART_SIZE,
    UART_THR,
)


class Uart:
    """UART whose receiver is fed by a background thread reading one byte at a time.

    Bytes written to THR go to `output_stream` (standard output by default).
    """

    def __init__(
        self,
        input_stream: BinaryIO | None = None,
        output_stream: TextIO | None = None,
    ) -> None:
        self._regs = bytearray(UART_SIZE)
        self._regs[UART_LSR] |= MASK_UART_LSR_TX
        self._cond = threading.Condition()
        self._interrupt = False
        self._output = output_stream
        if input_stream is None and sys.stdin is not None:
            input_stream = getattr(sys.stdin, "buffer", sys.stdin)
        if input_stream is not None:
            threading.Thread(
                target=self._receive, args=(input_stream,), name="uart-rx", daemon=True
            ).start()

    def _receive(self, stream: BinaryIO) -> None:
        while True:
            try:
                chunk = stream.read(1)
            except (OSError, ValueError) as err:
                print(err)
                return
            if not chunk:
                return
            byte = chunk[0] if isinstance(chunk, (bytes, bytearray)) else ord(chunk[0]) & 0xFF
            with self._cond:
                # Wait until the previous byte has been read by the guest.
                while self._regs[UART_LSR] & MASK_UART_LSR_RX:
                    self._cond.wait()
                self._regs[UART_RHR] = byte
                self._interrupt = True
                self._regs[UART_LSR] |= MASK_UART_LSR_RX

    def is_interrupting(self) -> bool:
        """Return whether an interrupt is pending, clearing the flag."""
        with self._cond:
            pending, self._interrupt = self._interrupt, False
        return pending

    def load(self, addr: int, size: int) -> int:
        index = addr - UART_BASE
        if size != 8 or not 0 <= index < UART_SIZE:
            raise LoadAccessFault(addr)
        with self._cond:
            if index == UART_RHR:
                self._cond.notify()
                self._regs[UART_LSR] &= ~MASK_UART_LSR_RX & 0xFF
                return self._regs[UART_RHR]
            return self._regs[index]

    def store(self, addr: int, size: int, value: int) -> None:
        index = addr - UART_BASE
        if size != 8 or not 0 <= index < UART_SIZE:
            raise StoreAMOAccessFault(addr)
        with self._cond:
            if index == UART_THR:
                out = self._output if self._output is not None else sys.stdout
                out.write(chr(value & 0xFF))
                out.flush()
            else:
                self._regs[index] = value & 0xFF