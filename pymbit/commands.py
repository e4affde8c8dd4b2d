"""
Command Protocol for the micro:bit UART Firmware
================================================

This module defines the line-based protocol used to communicate
with a micro:bit running the UART bridge firmware (BLE UART or USB serial).

Protocol Overview
-----------------
Every message is a single line. Inbound lines start with a one-character
tag, optionally followed by a subtag; outbound messages start with a
two-character command code followed directly by the payload.

Output (Device → Host):
    BA<n> / BB<n>      - Button A / B state (0/1)
    BL<n>              - Touch logo state (0/1, micro:bit v2)
    B0<n> .. B2<n>     - Touch pin 0..2 state (0/1)
    G:<name>           - Gesture name (Shake, LogoUp, ...)
    V:<int>            - Light level
    T:<int>            - Temperature
    F:<hex12>          - Magnetic force x,y,z (3 x signed 16-bit hex)
    A:<hex12>          - Acceleration x,y,z (3 x signed 16-bit hex)
    R:<hex8>           - Rotation roll,pitch (2 x signed 16-bit hex)
    P:<int>            - Microphone level (micro:bit v2)
    DTS / DT<other>    - Sound playing / not playing

    For tags without a subtag the character at offset 1 is an optional
    separator (the firmware sends ':'); it is skipped when it cannot
    start the payload, so "T:-5" and "T-5" both decode to -5.

Input (Host → Device):
    CT<text>           - Scroll text (max 18 chars)
    CM<5 chars>        - Show 5x5 LED pattern (base-32 row masks)
    RM<mask>           - Enable/disable sensor reporting
    RF/RG/RR/RP<n>     - Rounding for magnetic force/acceleration/rotation/mic
    T1/T2/T4/T8/TX<hz> - Play tone for 1/2/4/8/16 beats
    R0..R2<mode>       - Pin mode (0 none, 1 on/off, 2 value)
    P0..P2<value>      - Write pin value
    TT<name>           - Play sound expression
"""

from enum import Enum


class CommandCode(str, Enum):
    """Two-character codes for messages from host to device."""
    DISPLAY_TEXT = "CT"
    DISPLAY_LED = "CM"
    SENSOR = "RM"
    MAGNETIC_FORCE = "RF"
    ACCELERATION = "RG"
    ROTATION = "RR"
    MICROPHONE = "RP"
    PLAY_TONE_16 = "TX"
    PLAY_TONE_8 = "T8"
    PLAY_TONE_4 = "T4"
    PLAY_TONE_2 = "T2"
    PLAY_TONE_1 = "T1"
    MODE_PIN_0 = "R0"
    MODE_PIN_1 = "R1"
    MODE_PIN_2 = "R2"
    WRITE_PIN_0 = "P0"
    WRITE_PIN_1 = "P1"
    WRITE_PIN_2 = "P2"
    PLAY_EXPRESS = "TT"


class InputTag:
    """Leading characters of messages from device to host."""
    BUTTON = "B"         # Buttons, logo, touch pins (subtag at offset 1)
    GESTURE = "G"        # Gesture name
    LIGHT = "V"          # Light level
    TEMPERATURE = "T"    # Temperature
    MAGNETIC = "F"       # Magnetic force hex triple
    ACCELERATION = "A"   # Acceleration hex triple
    ROTATION = "R"       # Rotation hex pair
    MICROPHONE = "P"     # Microphone level
    DEVICE = "D"         # Device status (subtag at offset 1)


class ButtonSubtag:
    """Subtags of B lines."""
    A = "A"
    B = "B"
    LOGO = "L"
    PINS = ("0", "1", "2")


class DeviceSubtag:
    """Subtags of D lines."""
    TONE = "T"           # DTS: sound playing
    PLAYING = "S"


class PinMode:
    """Pin configuration values for the R0..R2 commands."""
    NONE = 0
    ONOFF = 1
    VALUE = 2


class SensorMask:
    """Bits of the RM sensor-enable mask."""
    DISABLE = 0
    BASIC = 1 + 2 + 4 + 16   # logo, buttons, light level, temperature


# Per-pin command lookups
PIN_MODE_COMMANDS = (
    CommandCode.MODE_PIN_0,
    CommandCode.MODE_PIN_1,
    CommandCode.MODE_PIN_2,
)
PIN_WRITE_COMMANDS = (
    CommandCode.WRITE_PIN_0,
    CommandCode.WRITE_PIN_1,
    CommandCode.WRITE_PIN_2,
)

# Tone length in beats -> command
TONE_COMMANDS = {
    1: CommandCode.PLAY_TONE_1,
    2: CommandCode.PLAY_TONE_2,
    4: CommandCode.PLAY_TONE_4,
    8: CommandCode.PLAY_TONE_8,
    16: CommandCode.PLAY_TONE_16,
}
TONE_COMMAND_SET = frozenset(TONE_COMMANDS.values())

# Tone frequencies (Hz) by pitch level (low/mid/high) and note (do .. si)
TONE_TABLE = (
    (131, 139, 147, 156, 165, 175, 185, 196, 208, 220, 233, 247),
    (262, 277, 294, 311, 330, 349, 370, 392, 415, 440, 466, 498),
    (523, 554, 587, 622, 659, 698, 740, 784, 831, 880, 932, 988),
)

# Built-in sound expressions accepted by TT
EXPRESSIONS = (
    "giggle", "happy", "hello", "mysterious", "sad",
    "slide", "soaring", "spring", "twinkle", "yawn",
)

# Gesture names reported on G lines
GESTURES = (
    "Shake", "FreeFall", "ScreenUp", "ScreenDown",
    "3G", "6G", "8G", "TiltLeft", "TiltRight", "LogoDown", "LogoUp",
)

# Timing (milliseconds)
SEND_INTERVAL_MS = 100       # settle delay for every command except CT
SCROLL_STEP_MS = 120         # default scroll delay per pixel column
MAX_TEXT_LENGTH = 18

# One char per 5-bit LED row
LED_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUV"
LED_MATRIX_SIZE = 25
LED_ROWS = 5

# Payload limits (inclusive)
SENSOR_MASK_RANGE = (0, 0x1F)
ROUND_RANGE = (1, 32767)
TONE_RANGE = (20, 20000)
PIN_MODE_RANGE = (PinMode.NONE, PinMode.VALUE)
PIN_VALUE_RANGE = (0, 1023)

# Rotation is reported in tenths of a degree
TILT_THRESHOLD = 15
