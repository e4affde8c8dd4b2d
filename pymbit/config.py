"""
Link configuration
==================

All tunables of one adapter instance in a single dataclass. Defaults are
the values the micro:bit UART firmware expects.
"""

from dataclasses import dataclass

from .commands import MAX_TEXT_LENGTH, SCROLL_STEP_MS, SEND_INTERVAL_MS
from .data_types import VectorFill
from .framing import LineEnding


@dataclass
class LinkConfig:
    """
    Configuration for a micro:bit UART link.

    Attributes
    ----------
    port : str
        Serial port or device path
    baudrate : int
        Serial baudrate
    timeout : float
        Serial read timeout in seconds
    line_ending : LineEnding
        Terminator used for both inbound framing and outbound sends
    send_interval_ms : int
        Settle delay after every command except display-text
    scroll_step_ms : int
        Scroll delay per pixel column used for the display-text delay
    max_text_length : int
        Display-text payloads are truncated to this many characters
    vector_fill : VectorFill
        Policy for short vector payloads
    """
    port: str = "/dev/ttyACM0"
    baudrate: int = 115200
    timeout: float = 0.1
    line_ending: LineEnding = LineEnding.LF
    send_interval_ms: int = SEND_INTERVAL_MS
    scroll_step_ms: int = SCROLL_STEP_MS
    max_text_length: int = MAX_TEXT_LENGTH
    vector_fill: VectorFill = VectorFill.ZERO
