"""
Data Types for the micro:bit UART Adapter
=========================================

This module contains the sensor state record shared by the line decoder
(writer) and the UI layer (readers). It is a plain dataclass with a few
derived accessors; all protocol knowledge lives in decoder.py and
encoder.py.
"""

import copy
import math
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import List

from .commands import TILT_THRESHOLD


class VectorFill(str, Enum):
    """What happens to trailing axes missing from a short vector payload."""
    ZERO = "zero"        # replaced array is zero-filled
    RETAIN = "retain"    # missing axes keep their previous value


class TiltDirection:
    """Tilt directions derived from the rotation reading."""
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"
    ANY = "any"


class Button:
    """Button selectors."""
    A = "A"
    B = "B"
    ANY = "any"


def _round_half_away(value: float) -> int:
    # halves round away from zero: 1.5 -> 2, -1.5 -> -2
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class SensorState:
    """
    Latest known value of every sensor field of one micro:bit.

    Every field holds the most recently decoded value for its tag.
    Vector fields are always replaced by a new list, never mutated
    per axis, so a reader holding a reference never sees a half update.

    Units:
        - light_level: 0..255
        - temperature: Celsius
        - magnetic_force: raw compass units (x, y, z)
        - acceleration: milli-g (x, y, z)
        - rotation: tenths of a degree (roll, pitch)
        - led_matrix: 5 row masks, bit n = column n
    """
    button_a: int = 0
    button_b: int = 0
    touch_logo: int = 0
    touch_pins: List[int] = field(default_factory=lambda: [0, 0, 0])
    gesture: str = ""
    led_matrix: List[int] = field(default_factory=lambda: [0] * 5)
    light_level: int = 0
    temperature: int = 0
    microphone_level: int = 0
    magnetic_force: List[int] = field(default_factory=lambda: [0, 0, 0])
    acceleration: List[int] = field(default_factory=lambda: [0, 0, 0])
    rotation: List[int] = field(default_factory=lambda: [0, 0])
    playing_sound: int = 0

    def reset(self) -> None:
        """Restore every field to its default (connection torn down)."""
        defaults = SensorState()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))

    def snapshot(self) -> 'SensorState':
        """Return an independent copy of the current state."""
        return copy.deepcopy(self)

    @property
    def roll(self) -> int:
        return self.rotation[0]

    @property
    def pitch(self) -> int:
        return self.rotation[1]

    def is_button_pressed(self, button: str = Button.ANY) -> bool:
        """Check button A, B or either."""
        if button == Button.A:
            return self.button_a != 0
        if button == Button.B:
            return self.button_b != 0
        if button == Button.ANY:
            return (self.button_a | self.button_b) != 0
        return False

    def tilt_angle(self, direction: str) -> int:
        """
        Tilt angle in degrees towards a direction.

        tilt_angle(front) == -tilt_angle(back) and
        tilt_angle(left) == -tilt_angle(right).

        Raises:
            ValueError: For an unknown direction (including 'any')
        """
        if direction == TiltDirection.FRONT:
            return _round_half_away(self.pitch / -10)
        if direction == TiltDirection.BACK:
            return _round_half_away(self.pitch / 10)
        if direction == TiltDirection.LEFT:
            return _round_half_away(self.roll / -10)
        if direction == TiltDirection.RIGHT:
            return _round_half_away(self.roll / 10)
        raise ValueError(f"Unknown tilt direction: {direction}")

    def is_tilted(self, direction: str = TiltDirection.ANY) -> bool:
        """True if tilted at least TILT_THRESHOLD degrees towards direction."""
        if direction == TiltDirection.ANY:
            return (abs(self.roll / 10) >= TILT_THRESHOLD or
                    abs(self.pitch / 10) >= TILT_THRESHOLD)
        return self.tilt_angle(direction) >= TILT_THRESHOLD
