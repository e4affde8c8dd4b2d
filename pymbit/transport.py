"""
Abstract Transport Interface
============================

The adapter talks to the micro:bit through a duplex line channel.
Implement this interface to add a new link type (BLE UART, TCP bridge...).

A transport:
1. Frames inbound bytes into lines and hands each line to a handler
2. Sends outbound messages, appending the line terminator
3. Raises TransportError when closed or when a write fails

Example Implementation
----------------------
>>> class MyTransport(Transport):
...     def open(self, line_handler):
...         self._line_handler = line_handler
...         self._link = MyLink.connect()
...     def close(self):
...         self._link.disconnect()
...     @property
...     def is_open(self):
...         return self._link.connected
...     def send(self, data):
...         self._link.write(data + self.line_ending.terminator)
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List, Optional, Sequence

import serial

from .errors import TransportError
from .framing import LineEnding, LineFramer
from .numeric import encode_signed_hex16

logger = logging.getLogger(__name__)

LineHandler = Callable[[str], None]


class Transport(ABC):
    """
    Abstract base class for micro:bit links.

    The minimum implementation requires:
    - open(): Connect and start delivering lines to the handler
    - close(): Disconnect
    - is_open: Connection state
    - send(): Write one message (terminator appended by the transport)
    """

    def __init__(self, line_ending: LineEnding = LineEnding.LF):
        self.line_ending = line_ending
        self._line_handler: Optional[LineHandler] = None

    @property
    @abstractmethod
    def is_open(self) -> bool:
        """Check if the link is usable."""
        pass

    @abstractmethod
    def open(self, line_handler: LineHandler) -> None:
        """
        Open the link.

        Parameters
        ----------
        line_handler : callable
            Called with every complete inbound line

        Raises
        ------
        TransportError
            If the link cannot be opened
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """
        Close the link. Safe to call when already closed.
        """
        pass

    @abstractmethod
    def send(self, data: bytes) -> None:
        """
        Send one message.

        Parameters
        ----------
        data : bytes
            Encoded command without terminator

        Raises
        ------
        TransportError
            If the link is closed or the write fails
        """
        pass


class SerialTransport(Transport):
    """
    Serial (USB CDC or BLE-serial bridge) link using pyserial.

    Inbound data is read on a background thread and delivered to the line
    handler from that thread.
    """

    def __init__(
        self,
        port: str = "/dev/ttyACM0",
        baudrate: int = 115200,
        timeout: float = 0.1,
        line_ending: LineEnding = LineEnding.LF,
    ):
        """
        Args:
            port: Serial port path (e.g., '/dev/ttyACM0', 'COM3')
            baudrate: Serial baudrate (default: 115200)
            timeout: Serial read timeout in seconds
            line_ending: Terminator for inbound framing and outbound sends
        """
        super().__init__(line_ending)
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout

        self._ser: Optional[serial.Serial] = None
        self._framer = LineFramer(line_ending)
        self._read_thread: Optional[threading.Thread] = None
        self._running = False
        self._write_lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._ser is not None and self._ser.is_open

    def open(self, line_handler: LineHandler) -> None:
        if self.is_open:
            return

        try:
            self._ser = serial.Serial(
                self.port,
                baudrate=self.baudrate,
                timeout=self.timeout,
            )
        except (serial.SerialException, OSError) as e:
            self._ser = None
            raise TransportError(f"Cannot open {self.port}: {e}") from e

        logger.info("Opened serial port %s at %d baud", self.port, self.baudrate)
        self._line_handler = line_handler
        self._framer.reset()
        self._running = True
        self._read_thread = threading.Thread(target=self._read_serial, daemon=True)
        self._read_thread.start()

    def close(self) -> None:
        self._running = False

        if self._read_thread is not None:
            if self._read_thread is not threading.current_thread():
                self._read_thread.join(timeout=1.0)
            self._read_thread = None

        if self._ser is not None:
            try:
                self._ser.close()
            except (serial.SerialException, OSError) as e:
                logger.warning("Error closing %s: %s", self.port, e)
            self._ser = None
            logger.info("Closed serial port %s", self.port)

    def send(self, data: bytes) -> None:
        if not self.is_open:
            raise TransportError("Not connected to micro:bit")

        with self._write_lock:
            try:
                self._ser.write(data + self.line_ending.terminator)  # type: ignore[union-attr]
            except (serial.SerialException, OSError) as e:
                raise TransportError(f"Write to {self.port} failed: {e}") from e

    def _read_serial(self) -> None:
        """Background thread for reading serial data."""
        while self._running:
            try:
                ser = self._ser
                if ser is None:
                    break
                data = ser.read(ser.in_waiting or 1)
            except (serial.SerialException, OSError) as e:
                if self._running:
                    logger.error("Serial read from %s failed: %s", self.port, e)
                    self._running = False
                break

            if not data:
                continue
            for line in self._framer.feed(data):
                if self._line_handler is None:
                    continue
                try:
                    self._line_handler(line)
                except Exception:
                    # one bad line must not stop the reader
                    logger.exception("Line handler failed for %r", line)


class DummyTransport(Transport):
    """
    In-memory transport for testing without hardware.

    Sent messages are recorded as text; inject_line() plays the part of
    the micro:bit and delivers a line synchronously.
    """

    def __init__(self, line_ending: LineEnding = LineEnding.LF):
        super().__init__(line_ending)
        self.sent: List[str] = []
        self.broken = False
        self._open = False
        self._framer = LineFramer(line_ending)
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self, line_handler: LineHandler) -> None:
        self._line_handler = line_handler
        self._open = True

    def close(self) -> None:
        self._open = False
        self._line_handler = None

    def send(self, data: bytes) -> None:
        if not self._open:
            raise TransportError("Not connected to micro:bit")
        if self.broken:
            raise TransportError("Simulated write failure")
        with self._lock:
            self.sent.append(data.decode("utf-8"))

    def inject_line(self, line: str) -> None:
        """Deliver a line as if the micro:bit had sent it."""
        if self._open and self._line_handler is not None:
            self._line_handler(line)

    def inject_vector(self, tag: str, values: Sequence[int]) -> None:
        """Deliver a hex vector line, e.g. inject_vector('A', [0, 0, -1024])."""
        self.inject_line(tag + ":" + "".join(encode_signed_hex16(v) for v in values))

    def inject_bytes(self, data: bytes) -> None:
        """Deliver raw bytes through the line framer (partial lines are kept)."""
        for line in self._framer.feed(data):
            self.inject_line(line)

    def get_last_command(self) -> str:
        """Get the last command sent."""
        with self._lock:
            return self.sent[-1] if self.sent else ""

    def get_all_commands(self) -> List[str]:
        """Get all commands sent."""
        with self._lock:
            return list(self.sent)

    def clear_sent(self) -> None:
        """Clear command history."""
        with self._lock:
            self.sent.clear()
