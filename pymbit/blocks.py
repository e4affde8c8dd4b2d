"""
UI command layer
================

One entry point per logical block: commands are coroutines that encode,
send and wait out their settle delay; queries read the adapter's sensor
state and never touch the link.

The adapter is passed in, so several micro:bits can be driven side by
side:

    >>> blocks = MBitBlocks(mbit)
    >>> await blocks.display_text("Hello!")
    >>> await blocks.play_tone(TonePitch.MIDDLE, 9, 4)     # A4 for 4 beats
    >>> blocks.is_tilted(TiltDirection.FRONT)
"""

from typing import Union

from .commands import (
    PIN_MODE_COMMANDS,
    PIN_WRITE_COMMANDS,
    TONE_COMMANDS,
    TONE_TABLE,
    CommandCode,
    PinMode,
    SensorMask,
)
from .data_types import Button, TiltDirection
from .encoder import EncodedCommand
from .mbit import MBitUART


# Rounding defaults used by the firmware's own examples
DEFAULT_ROUND = 10
DEFAULT_MICROPHONE_ROUND = 5

_AXES = {"x": 0, "y": 1, "z": 2}
_ROTATION_AXES = {"roll": 0, "pitch": 1}


class TonePitch:
    """Pitch levels (rows of the tone table)."""
    LOW = 0
    MIDDLE = 1
    HIGH = 2


def tone_frequency(level: int, note: int) -> int:
    """
    Look up a tone frequency.

    Args:
        level: TonePitch value (0..2)
        note: Semitone within the octave (0 = do .. 11 = si)

    Raises:
        ValueError: If level or note is out of range
    """
    if not 0 <= level < len(TONE_TABLE):
        raise ValueError(f"Invalid pitch level: {level}")
    if not 0 <= note < len(TONE_TABLE[level]):
        raise ValueError(f"Invalid note: {note}")
    return TONE_TABLE[level][note]


def tone_command(beats: int) -> CommandCode:
    """Tone command for a length in beats; unknown lengths play 16 beats."""
    return TONE_COMMANDS.get(beats, CommandCode.PLAY_TONE_16)


def _axis_index(axis: Union[str, int], names: dict) -> int:
    if isinstance(axis, int) and not isinstance(axis, bool):
        if 0 <= axis < len(names):
            return axis
    elif axis in names:
        return names[axis]
    raise ValueError(f"Unknown axis: {axis!r}")


def _pin_index(pin: int) -> int:
    if isinstance(pin, bool) or not isinstance(pin, int) or not 0 <= pin < len(PIN_MODE_COMMANDS):
        raise ValueError(f"Invalid pin: {pin!r}")
    return pin


class MBitBlocks:
    """
    Block-level commands and queries for one micro:bit.

    Attributes:
        mbit: The adapter all blocks operate on
    """

    def __init__(self, mbit: MBitUART):
        self.mbit = mbit

    # =========================================================================
    # Display
    # =========================================================================

    async def display_text(self, text: str) -> EncodedCommand:
        """Scroll text; waits until it has scrolled across (max 18 chars)."""
        return await self.mbit.issue_command(CommandCode.DISPLAY_TEXT, str(text))

    async def display_symbol(self, symbol: str) -> EncodedCommand:
        """Show a 25-symbol 5x5 pattern ('0' off, anything else on)."""
        return await self.mbit.show_led_matrix(symbol)

    async def display_clear(self) -> EncodedCommand:
        """Blank the display by scrolling empty text; the LED matrix state is kept."""
        return await self.mbit.issue_command(CommandCode.DISPLAY_TEXT, "")

    # =========================================================================
    # Sensor configuration
    # =========================================================================

    async def set_sensor(self, enable: bool) -> EncodedCommand:
        mask = SensorMask.BASIC if enable else SensorMask.DISABLE
        return await self.mbit.issue_command(CommandCode.SENSOR, mask)

    async def set_magnetic_force(self, rounding: int = DEFAULT_ROUND) -> EncodedCommand:
        return await self.mbit.issue_command(CommandCode.MAGNETIC_FORCE, rounding)

    async def set_acceleration(self, rounding: int = DEFAULT_ROUND) -> EncodedCommand:
        return await self.mbit.issue_command(CommandCode.ACCELERATION, rounding)

    async def set_rotation(self, rounding: int = DEFAULT_ROUND) -> EncodedCommand:
        return await self.mbit.issue_command(CommandCode.ROTATION, rounding)

    async def set_microphone(self, rounding: int = DEFAULT_MICROPHONE_ROUND) -> EncodedCommand:
        return await self.mbit.issue_command(CommandCode.MICROPHONE, rounding)

    # =========================================================================
    # Sound
    # =========================================================================

    async def play_tone(self, level: int, note: int, beats: int) -> EncodedCommand:
        """
        Play a note from the tone table.

        Args:
            level: TonePitch value
            note: 0..11
            beats: 1, 2, 4, 8 or 16 (anything else plays 16 beats)
        """
        frequency = tone_frequency(level, note)
        return await self.mbit.issue_command(tone_command(beats), frequency)

    async def play_expression(self, expression: str) -> EncodedCommand:
        """Play one of the built-in sounds (see EXPRESSIONS)."""
        return await self.mbit.issue_command(CommandCode.PLAY_EXPRESS, expression)

    # =========================================================================
    # Pins
    # =========================================================================

    async def set_pin_mode(self, pin: int, mode: Union[str, int]) -> EncodedCommand:
        """
        Configure a pin.

        Args:
            pin: 0..2
            mode: PinMode value, or 'onoff' / 'value' ('none' otherwise)
        """
        if isinstance(mode, str):
            mode = {"onoff": PinMode.ONOFF, "value": PinMode.VALUE}.get(mode, PinMode.NONE)
        return await self.mbit.issue_command(PIN_MODE_COMMANDS[_pin_index(pin)], mode)

    async def write_pin(self, pin: int, value: int) -> EncodedCommand:
        """Write 0..1023 to a pin (0/1 for on/off pins)."""
        return await self.mbit.issue_command(PIN_WRITE_COMMANDS[_pin_index(pin)], value)

    # =========================================================================
    # Queries
    # =========================================================================

    def is_button_pressed(self, button: str = Button.ANY) -> bool:
        return self.mbit.state.is_button_pressed(button)

    def is_logo_touched(self) -> bool:
        return self.mbit.touch_logo != 0

    def is_pin_touched(self, pin: int) -> bool:
        return self.mbit.touch_pins[_pin_index(pin)] != 0

    def is_gesture(self, gesture: str) -> bool:
        return self.mbit.gesture == gesture

    def get_gesture(self) -> str:
        return self.mbit.gesture

    def tilt_angle(self, direction: str) -> int:
        return self.mbit.state.tilt_angle(direction)

    def is_tilted(self, direction: str = TiltDirection.ANY) -> bool:
        return self.mbit.state.is_tilted(direction)

    def get_magnetic_force(self, axis: Union[str, int]) -> int:
        return self.mbit.magnetic_force[_axis_index(axis, _AXES)]

    def get_acceleration(self, axis: Union[str, int]) -> int:
        return self.mbit.acceleration[_axis_index(axis, _AXES)]

    def get_rotation(self, axis: Union[str, int]) -> int:
        return self.mbit.rotation[_axis_index(axis, _ROTATION_AXES)]

    def get_light_level(self) -> int:
        return self.mbit.light_level

    def get_temperature(self) -> int:
        return self.mbit.temperature

    def get_microphone_level(self) -> int:
        return self.mbit.microphone_level

    def is_playing_sound(self) -> bool:
        return self.mbit.playing_sound != 0
