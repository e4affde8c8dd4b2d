"""
Inbound line decoder
====================

Classifies one line from the micro:bit by its tag (first character) and,
for B and D lines, its subtag (second character), and applies it to a
SensorState.

Lines are self-contained: no buffering, no reassembly. Anything that is
not recognized, including malformed numbers, leaves the state untouched
and makes decode() return False. Peripheral noise never raises.
"""

import logging
import re
import string
from typing import Callable, Dict, List

from .commands import ButtonSubtag, DeviceSubtag, InputTag
from .data_types import SensorState, VectorFill
from .errors import MalformedField
from .numeric import decode_hex_triple

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")

# Characters that may start a payload; anything else at offset 1 is a separator
_INT_START = frozenset("+-" + string.digits)
_HEX_START = frozenset(string.hexdigits)
_NAME_START = frozenset(string.ascii_letters + string.digits)

_BUTTON_FIELDS = {
    ButtonSubtag.A: "button_a",
    ButtonSubtag.B: "button_b",
    ButtonSubtag.LOGO: "touch_logo",
}


def _payload(line: str, starts: frozenset) -> str:
    if line[1:2] and line[1] in starts:
        return line[1:]
    return line[2:]


def _parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise MalformedField(f"not an integer: {text!r}")
    return int(text)


class LineDecoder:
    """
    Applies inbound protocol lines to a SensorState.

    Args:
        state: State record to update (shared with readers)
        vector_fill: Policy for vector payloads with fewer than the
            expected number of hex fields

    Example:
        >>> state = SensorState()
        >>> decoder = LineDecoder(state)
        >>> decoder.decode("BA1")
        True
        >>> state.button_a
        1
    """

    def __init__(self, state: SensorState, vector_fill: VectorFill = VectorFill.ZERO):
        self.state = state
        self.vector_fill = VectorFill(vector_fill)
        self.lines_decoded = 0
        self.lines_rejected = 0
        self._handlers: Dict[str, Callable[[str], bool]] = {
            InputTag.BUTTON: self._decode_button,
            InputTag.GESTURE: self._decode_gesture,
            InputTag.LIGHT: self._decode_light,
            InputTag.TEMPERATURE: self._decode_temperature,
            InputTag.MAGNETIC: self._decode_magnetic,
            InputTag.ACCELERATION: self._decode_acceleration,
            InputTag.ROTATION: self._decode_rotation,
            InputTag.MICROPHONE: self._decode_microphone,
            InputTag.DEVICE: self._decode_device,
        }

    def decode(self, line: str) -> bool:
        """
        Decode one line and update the state.

        Args:
            line: One line without terminator

        Returns:
            True if the line was recognized and applied, False otherwise
        """
        handler = self._handlers.get(line[:1])
        recognized = False
        if handler is not None:
            try:
                recognized = handler(line)
            except MalformedField as e:
                logger.debug("Malformed line %r: %s", line, e)

        if recognized:
            self.lines_decoded += 1
            logger.debug("Decoded %r", line)
        else:
            self.lines_rejected += 1
            logger.debug("Unrecognized line %r", line)
        return recognized

    # =========================================================================
    # Tag handlers
    # =========================================================================

    def _decode_button(self, line: str) -> bool:
        subtag = line[1:2]
        if subtag in _BUTTON_FIELDS:
            setattr(self.state, _BUTTON_FIELDS[subtag], _parse_int(line[2:3]))
            return True
        if subtag and subtag in ButtonSubtag.PINS:
            pins = list(self.state.touch_pins)
            pins[int(subtag)] = _parse_int(line[2:3])
            self.state.touch_pins = pins
            return True
        return False

    def _decode_gesture(self, line: str) -> bool:
        self.state.gesture = _payload(line, _NAME_START)
        return True

    def _decode_light(self, line: str) -> bool:
        self.state.light_level = _parse_int(_payload(line, _INT_START))
        return True

    def _decode_temperature(self, line: str) -> bool:
        self.state.temperature = _parse_int(_payload(line, _INT_START))
        return True

    def _decode_microphone(self, line: str) -> bool:
        self.state.microphone_level = _parse_int(_payload(line, _INT_START))
        return True

    def _decode_magnetic(self, line: str) -> bool:
        self.state.magnetic_force = self._vector(line, self.state.magnetic_force)
        return True

    def _decode_acceleration(self, line: str) -> bool:
        self.state.acceleration = self._vector(line, self.state.acceleration)
        return True

    def _decode_rotation(self, line: str) -> bool:
        # roll, pitch: only the first two fields are meaningful
        self.state.rotation = self._vector(line, self.state.rotation)
        return True

    def _decode_device(self, line: str) -> bool:
        if line[1:2] != DeviceSubtag.TONE:
            return False
        self.state.playing_sound = 1 if line[2:3] == DeviceSubtag.PLAYING else 0
        return True

    def _vector(self, line: str, previous: List[int]) -> List[int]:
        """Build the replacement list for a vector field."""
        size = len(previous)
        values = decode_hex_triple(_payload(line, _HEX_START))[:size]
        if not values:
            raise MalformedField("no complete hex field")
        if len(values) < size:
            if self.vector_fill == VectorFill.RETAIN:
                values += previous[len(values):]
            else:
                values += [0] * (size - len(values))
        return values
