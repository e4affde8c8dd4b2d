"""
micro:bit UART Adapter
======================

Ties the line decoder, the command encoder and a transport together for
one connected micro:bit.

Inbound lines update a SensorState owned by the adapter; the UI layer
reads it through the accessor properties. Outbound commands are issued
with the issue_command() coroutine, which completes once the command's
settle delay has elapsed. Commands are serialized: a second command waits
until the previous delay is over.

Example:
    >>> import asyncio
    >>> from pymbit import MBitUART, LinkConfig, CommandCode, SensorMask
    >>>
    >>> async def main():
    ...     with MBitUART.from_serial(LinkConfig(port='/dev/ttyACM0')) as mbit:
    ...         await mbit.issue_command(CommandCode.SENSOR, SensorMask.BASIC)
    ...         await mbit.issue_command(CommandCode.DISPLAY_TEXT, "Hello!")
    ...         print(mbit.temperature, mbit.acceleration)
    >>>
    >>> asyncio.run(main())
"""

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Union

from .commands import CommandCode
from .config import LinkConfig
from .data_types import SensorState
from .decoder import LineDecoder
from .encoder import CommandEncoder, EncodedCommand, Payload, led_matrix_rows
from .transport import SerialTransport, Transport

logger = logging.getLogger(__name__)


@dataclass
class MBitCallbacks:
    """
    Optional hooks invoked by the adapter.

    Inbound hooks run on the transport's reader thread.
    """
    on_line: Optional[Callable[[str], None]] = None          # every inbound line
    on_update: Optional[Callable[[str], None]] = None        # recognized lines
    on_unrecognized: Optional[Callable[[str], None]] = None  # everything else
    on_command: Optional[Callable[[EncodedCommand], None]] = None  # after each send


class MBitUART:
    """
    Adapter for one micro:bit running the UART firmware.

    Attributes:
        config: Link configuration
        transport: Link to the device (injected)
        callbacks: Optional hooks
    """

    def __init__(
        self,
        transport: Transport,
        config: Optional[LinkConfig] = None,
        callbacks: Optional[MBitCallbacks] = None,
    ):
        """
        Args:
            transport: Transport to the device; opened by attach()
            config: Link configuration (defaults to LinkConfig())
            callbacks: Optional hooks for inbound lines and sent commands
        """
        self.config = config or LinkConfig()
        self.transport = transport
        self.callbacks = callbacks or MBitCallbacks()

        self._state = SensorState()
        self._decoder = LineDecoder(self._state, self.config.vector_fill)
        self._encoder = CommandEncoder(
            send_interval_ms=self.config.send_interval_ms,
            scroll_step_ms=self.config.scroll_step_ms,
            max_text_length=self.config.max_text_length,
        )
        self._state_lock = threading.Lock()
        self._send_lock = asyncio.Lock()

    @classmethod
    def from_serial(cls, config: LinkConfig, callbacks: Optional[MBitCallbacks] = None) -> 'MBitUART':
        """Create an adapter on a SerialTransport built from config."""
        transport = SerialTransport(
            config.port,
            baudrate=config.baudrate,
            timeout=config.timeout,
            line_ending=config.line_ending,
        )
        return cls(transport, config, callbacks)

    def __enter__(self) -> 'MBitUART':
        """Context manager entry."""
        self.attach()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.detach()

    # =========================================================================
    # Connection Management
    # =========================================================================

    def attach(self) -> None:
        """
        Start a session: fresh sensor state, transport opened.

        Raises:
            TransportError: If the transport cannot be opened
        """
        with self._state_lock:
            self._state.reset()
        self.transport.open(self.on_line)
        logger.info("Attached to micro:bit")

    def detach(self) -> None:
        """Close the transport and discard the sensor state."""
        self.transport.close()
        with self._state_lock:
            self._state.reset()
        logger.info("Detached from micro:bit")

    @property
    def is_connected(self) -> bool:
        return self.transport.is_open

    # =========================================================================
    # Inbound
    # =========================================================================

    def on_line(self, line: str) -> bool:
        """
        Decode one inbound line into the sensor state.

        Decodes never interleave; readers see either the state before or
        after a line, never a partial update.

        Returns:
            True if the line was recognized
        """
        with self._state_lock:
            recognized = self._decoder.decode(line)

        cb = self.callbacks
        if cb.on_line:
            cb.on_line(line)
        if recognized and cb.on_update:
            cb.on_update(line)
        elif not recognized and cb.on_unrecognized:
            cb.on_unrecognized(line)
        return recognized

    @property
    def state(self) -> SensorState:
        """Consistent copy of the whole sensor state."""
        with self._state_lock:
            return self._state.snapshot()

    @property
    def decoder(self) -> LineDecoder:
        return self._decoder

    def _read(self, name: str) -> Any:
        with self._state_lock:
            value = getattr(self._state, name)
        return list(value) if isinstance(value, list) else value

    @property
    def button_a(self) -> int:
        return self._read("button_a")

    @property
    def button_b(self) -> int:
        return self._read("button_b")

    @property
    def touch_logo(self) -> int:
        return self._read("touch_logo")

    @property
    def touch_pins(self) -> List[int]:
        return self._read("touch_pins")

    @property
    def gesture(self) -> str:
        return self._read("gesture")

    @property
    def led_matrix(self) -> List[int]:
        return self._read("led_matrix")

    @property
    def light_level(self) -> int:
        return self._read("light_level")

    @property
    def temperature(self) -> int:
        return self._read("temperature")

    @property
    def microphone_level(self) -> int:
        return self._read("microphone_level")

    @property
    def magnetic_force(self) -> List[int]:
        return self._read("magnetic_force")

    @property
    def acceleration(self) -> List[int]:
        return self._read("acceleration")

    @property
    def rotation(self) -> List[int]:
        return self._read("rotation")

    @property
    def playing_sound(self) -> int:
        return self._read("playing_sound")

    # =========================================================================
    # Outbound
    # =========================================================================

    def encode(self, command: Union[CommandCode, str], payload: Payload = "") -> EncodedCommand:
        """Encode without sending (see CommandEncoder.encode)."""
        return self._encoder.encode(command, payload)

    async def issue_command(self, command: Union[CommandCode, str], payload: Payload = "") -> EncodedCommand:
        """
        Send one command and wait for its settle delay.

        The command is validated before anything is sent.

        Raises:
            UnknownCommand: Command code outside the protocol
            InvalidPayload: Payload outside the command's range
            TransportError: Link closed or write failed
        """
        encoded = self._encoder.encode(command, payload)
        await self._issue(encoded)
        return encoded

    def submit(self, command: Union[CommandCode, str], payload: Payload = "") -> 'asyncio.Task[EncodedCommand]':
        """
        Schedule a command on the running loop and return its task.

        Validation errors are raised here, immediately; the task completes
        when the settle delay has elapsed.
        """
        encoded = self._encoder.encode(command, payload)

        async def run() -> EncodedCommand:
            await self._issue(encoded)
            return encoded

        return asyncio.get_running_loop().create_task(run())

    async def show_led_matrix(self, symbol: str) -> EncodedCommand:
        """
        Show a 5x5 pattern and record it in the LED matrix state.

        The state is only updated once the command has been written.
        """
        rows = led_matrix_rows(symbol)
        encoded = self._encoder.encode(CommandCode.DISPLAY_LED, symbol)

        def remember() -> None:
            with self._state_lock:
                self._state.led_matrix = rows

        await self._issue(encoded, on_sent=remember)
        return encoded

    async def _issue(self, encoded: EncodedCommand, on_sent: Optional[Callable[[], None]] = None) -> None:
        async with self._send_lock:
            self.transport.send(encoded.data)
            logger.debug("Sent %r, settling %d ms", encoded.data, encoded.delay_ms)
            if on_sent:
                on_sent()
            if self.callbacks.on_command:
                self.callbacks.on_command(encoded)
            await asyncio.sleep(encoded.delay)
