"""
pymbit - micro:bit UART Python Library
======================================

A Python library for talking to a BBC micro:bit running the UART
bridge firmware: sensor lines in, display/sound/pin commands out.

Example:
    >>> import asyncio
    >>> from pymbit import MBitUART, MBitBlocks, LinkConfig
    >>>
    >>> async def main(mbit):
    ...     blocks = MBitBlocks(mbit)
    ...     await blocks.set_sensor(True)
    ...     await blocks.display_text("Hello!")
    ...     print(blocks.get_temperature())
    >>>
    >>> with MBitUART.from_serial(LinkConfig(port='/dev/ttyACM0')) as mbit:
    ...     asyncio.run(main(mbit))
"""

from .mbit import MBitUART, MBitCallbacks
from .blocks import MBitBlocks, TonePitch
from .config import LinkConfig
from .data_types import SensorState, VectorFill, TiltDirection, Button
from .decoder import LineDecoder
from .encoder import CommandEncoder, EncodedCommand
from .framing import LineEnding, LineFramer
from .transport import Transport, SerialTransport, DummyTransport
from .numeric import decode_signed_hex16, decode_hex_triple, encode_signed_hex16
from .commands import (
    CommandCode,
    PinMode,
    SensorMask,
    EXPRESSIONS,
    GESTURES,
)
from .errors import (
    MBitError,
    MalformedField,
    UnknownCommand,
    InvalidPayload,
    TransportError,
)

__version__ = "1.0.0"
__all__ = [
    "MBitUART",
    "MBitCallbacks",
    "MBitBlocks",
    "TonePitch",
    "LinkConfig",
    "SensorState",
    "VectorFill",
    "TiltDirection",
    "Button",
    "LineDecoder",
    "CommandEncoder",
    "EncodedCommand",
    "LineEnding",
    "LineFramer",
    "Transport",
    "SerialTransport",
    "DummyTransport",
    "decode_signed_hex16",
    "decode_hex_triple",
    "encode_signed_hex16",
    "CommandCode",
    "PinMode",
    "SensorMask",
    "EXPRESSIONS",
    "GESTURES",
    "MBitError",
    "MalformedField",
    "UnknownCommand",
    "InvalidPayload",
    "TransportError",
]
