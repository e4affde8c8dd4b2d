"""
Outbound command encoder
========================

Builds the exact bytes for one command and the settle delay the caller
must wait before the next command. The encoder is stateless: it never
clamps, and it rejects bad input before anything is sent.

Wire format: <2-char code><payload>, no separator. The transport adds
the line terminator.

Timing:
    CT (display text)  120 ms * (6 px per char + 6 px margin)
    everything else    100 ms
"""

import re
from typing import List, NamedTuple, Union

from .commands import (
    EXPRESSIONS,
    LED_ALPHABET,
    LED_MATRIX_SIZE,
    LED_ROWS,
    MAX_TEXT_LENGTH,
    PIN_MODE_COMMANDS,
    PIN_MODE_RANGE,
    PIN_VALUE_RANGE,
    PIN_WRITE_COMMANDS,
    ROUND_RANGE,
    SCROLL_STEP_MS,
    SEND_INTERVAL_MS,
    SENSOR_MASK_RANGE,
    TONE_COMMAND_SET,
    TONE_RANGE,
    CommandCode,
)
from .errors import InvalidPayload, UnknownCommand

Payload = Union[str, int]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_WHITESPACE_RE = re.compile(r"\s")

_ROUND_COMMANDS = frozenset((
    CommandCode.MAGNETIC_FORCE,
    CommandCode.ACCELERATION,
    CommandCode.ROTATION,
    CommandCode.MICROPHONE,
))


class EncodedCommand(NamedTuple):
    """Bytes to send and how long the command stays in flight."""
    data: bytes
    delay_ms: int

    @property
    def delay(self) -> float:
        """Delay in seconds."""
        return self.delay_ms / 1000.0


def led_matrix_rows(symbol: str) -> List[int]:
    """
    Convert a 5x5 pattern to five 5-bit row masks.

    Args:
        symbol: 25 characters, row-major; '0' is off, anything else on.
            Whitespace is ignored.

    Returns:
        Five integers in 0..31, row 0 first

    Raises:
        InvalidPayload: If the pattern does not have 25 symbols
    """
    symbol = _WHITESPACE_RE.sub("", str(symbol))
    if len(symbol) != LED_MATRIX_SIZE:
        raise InvalidPayload(f"LED pattern needs {LED_MATRIX_SIZE} symbols, got {len(symbol)}")

    mask = 0
    for index, c in enumerate(symbol):
        if c != "0":
            mask |= 1 << index
    return [(mask >> (5 * row)) & 0x1F for row in range(LED_ROWS)]


def led_rows_to_payload(rows: List[int]) -> str:
    """Render row masks with the 32-symbol LED alphabet."""
    return "".join(LED_ALPHABET[row & 0x1F] for row in rows)


def _check_int(command: CommandCode, payload: Payload, limits: tuple) -> int:
    if isinstance(payload, bool) or not (isinstance(payload, int) or _INT_RE.fullmatch(str(payload))):
        raise InvalidPayload(f"{command.name} expects an integer, got {payload!r}")
    value = int(payload)
    low, high = limits
    if not low <= value <= high:
        raise InvalidPayload(f"{command.name} value {value} outside {low}..{high}")
    return value


class CommandEncoder:
    """
    Encodes commands for the micro:bit UART firmware.

    Args:
        send_interval_ms: Settle delay for all commands except display-text
        scroll_step_ms: Per-column scroll delay for display-text
        max_text_length: Display-text truncation length

    Example:
        >>> encoder = CommandEncoder()
        >>> encoder.encode(CommandCode.DISPLAY_TEXT, "Hi")
        EncodedCommand(data=b'CTHi', delay_ms=2160)
    """

    def __init__(
        self,
        send_interval_ms: int = SEND_INTERVAL_MS,
        scroll_step_ms: int = SCROLL_STEP_MS,
        max_text_length: int = MAX_TEXT_LENGTH,
    ):
        self.send_interval_ms = send_interval_ms
        self.scroll_step_ms = scroll_step_ms
        self.max_text_length = max_text_length

    @staticmethod
    def resolve(command: Union[CommandCode, str]) -> CommandCode:
        """
        Map a code string or CommandCode to a CommandCode.

        Raises:
            UnknownCommand: If the code is not part of the protocol
        """
        try:
            return CommandCode(command)
        except ValueError:
            raise UnknownCommand(f"Unknown command code: {command!r}") from None

    def text_delay_ms(self, text: str) -> int:
        """Time the display needs to scroll text across (already truncated)."""
        return self.scroll_step_ms * (6 * len(text) + 6)

    def encode(self, command: Union[CommandCode, str], payload: Payload = "") -> EncodedCommand:
        """
        Encode one command.

        Args:
            command: CommandCode or its two-character string
            payload: Command argument; integers or integer strings for the
                numeric commands, a 25-symbol pattern for DISPLAY_LED

        Returns:
            EncodedCommand with wire bytes (no terminator) and delay

        Raises:
            UnknownCommand: Command code outside the protocol
            InvalidPayload: Payload outside the command's range
        """
        command = self.resolve(command)

        if command == CommandCode.DISPLAY_TEXT:
            text = str(payload)[:self.max_text_length]
            return EncodedCommand(self._wire(command, text), self.text_delay_ms(text))

        return EncodedCommand(self._wire(command, self._payload(command, payload)), self.send_interval_ms)

    def _payload(self, command: CommandCode, payload: Payload) -> str:
        """Validate and render the payload of a fixed-delay command."""
        if command == CommandCode.DISPLAY_LED:
            return led_rows_to_payload(led_matrix_rows(payload))
        if command == CommandCode.SENSOR:
            return str(_check_int(command, payload, SENSOR_MASK_RANGE))
        if command in _ROUND_COMMANDS:
            return str(_check_int(command, payload, ROUND_RANGE))
        if command in TONE_COMMAND_SET:
            return str(_check_int(command, payload, TONE_RANGE))
        if command in PIN_MODE_COMMANDS:
            return str(_check_int(command, payload, PIN_MODE_RANGE))
        if command in PIN_WRITE_COMMANDS:
            return str(_check_int(command, payload, PIN_VALUE_RANGE))
        if command == CommandCode.PLAY_EXPRESS:
            if payload not in EXPRESSIONS:
                raise InvalidPayload(f"Unknown expression: {payload!r}")
            return payload
        raise UnknownCommand(f"No payload rule for {command.value}")

    @staticmethod
    def _wire(command: CommandCode, payload: str) -> bytes:
        return (command.value + payload).encode("utf-8")
