"""
Tests for the block-level command and query layer.

Run with:
    pytest tests/test_blocks.py -v
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from pymbit import (
    MBitUART, MBitBlocks, DummyTransport, TonePitch, TiltDirection, Button,
    InvalidPayload,
)
from pymbit.blocks import tone_frequency, tone_command


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def transport():
    return DummyTransport()


@pytest.fixture
def blocks(transport):
    mbit = MBitUART(transport)
    mbit.attach()
    with patch('pymbit.mbit.asyncio.sleep', new_callable=AsyncMock):
        yield MBitBlocks(mbit)
    mbit.detach()


def run(coro):
    return asyncio.run(coro)


# =============================================================================
# COMMANDS
# =============================================================================

class TestDisplayBlocks:

    def test_display_text(self, blocks, transport):
        result = run(blocks.display_text("Hello!"))
        assert transport.get_last_command() == "CTHello!"
        assert result.delay_ms == 120 * (6 * 6 + 6)

    def test_display_number(self, blocks, transport):
        run(blocks.display_text(42))
        assert transport.get_last_command() == "CT42"

    def test_display_symbol(self, blocks, transport):
        run(blocks.display_symbol("00000" "01010" "00000" "10001" "01110"))
        assert transport.get_last_command() == "CM0A0HE"
        assert blocks.mbit.led_matrix == [0, 10, 0, 17, 14]

    def test_display_clear(self, blocks, transport):
        run(blocks.display_symbol("1" * 25))
        result = run(blocks.display_clear())
        assert transport.get_all_commands() == ["CMVVVVV", "CT"]
        assert result.delay_ms == 720
        assert blocks.mbit.led_matrix == [31] * 5


class TestSensorBlocks:

    def test_enable_disable(self, blocks, transport):
        run(blocks.set_sensor(True))
        run(blocks.set_sensor(False))
        assert transport.get_all_commands() == ["RM23", "RM0"]

    def test_rounding_defaults(self, blocks, transport):
        run(blocks.set_magnetic_force())
        run(blocks.set_acceleration())
        run(blocks.set_rotation())
        run(blocks.set_microphone())
        assert transport.get_all_commands() == ["RF10", "RG10", "RR10", "RP5"]

    def test_rounding_value(self, blocks, transport):
        run(blocks.set_acceleration(50))
        assert transport.get_last_command() == "RG50"

    def test_rounding_out_of_range(self, blocks, transport):
        with pytest.raises(InvalidPayload):
            run(blocks.set_rotation(0))
        assert transport.sent == []


class TestSoundBlocks:

    def test_tone_table(self):
        assert tone_frequency(TonePitch.LOW, 0) == 131
        assert tone_frequency(TonePitch.MIDDLE, 9) == 440
        assert tone_frequency(TonePitch.HIGH, 11) == 988

    @pytest.mark.parametrize("level,note", [(-1, 0), (3, 0), (0, 12), (1, -1)])
    def test_tone_out_of_table(self, level, note):
        with pytest.raises(ValueError):
            tone_frequency(level, note)

    @pytest.mark.parametrize("beats,code", [(1, "T1"), (2, "T2"), (4, "T4"), (8, "T8"), (16, "TX"), (3, "TX")])
    def test_tone_command(self, beats, code):
        assert tone_command(beats).value == code

    def test_play_tone(self, blocks, transport):
        run(blocks.play_tone(TonePitch.MIDDLE, 9, 4))
        assert transport.get_last_command() == "T4440"

    def test_play_tone_any_length(self, blocks, transport):
        run(blocks.play_tone(TonePitch.HIGH, 0, 5))
        assert transport.get_last_command() == "TX523"

    def test_play_expression(self, blocks, transport):
        run(blocks.play_expression("twinkle"))
        assert transport.get_last_command() == "TTtwinkle"

    def test_unknown_expression(self, blocks, transport):
        with pytest.raises(ValueError):
            run(blocks.play_expression("angry"))
        assert transport.sent == []


class TestPinBlocks:

    @pytest.mark.parametrize("mode,wire", [("onoff", "R11"), ("value", "R12"), ("none", "R10"), (2, "R12")])
    def test_pin_mode(self, blocks, transport, mode, wire):
        run(blocks.set_pin_mode(1, mode))
        assert transport.get_last_command() == wire

    def test_write_pin(self, blocks, transport):
        run(blocks.write_pin(2, 512))
        run(blocks.write_pin(0, 1))
        assert transport.get_all_commands() == ["P2512", "P01"]

    @pytest.mark.parametrize("pin", [-1, 3, "0", True])
    def test_invalid_pin(self, blocks, transport, pin):
        with pytest.raises(ValueError):
            run(blocks.write_pin(pin, 1))
        assert transport.sent == []

    def test_write_pin_out_of_range(self, blocks):
        with pytest.raises(InvalidPayload):
            run(blocks.write_pin(0, 2000))


# =============================================================================
# QUERIES
# =============================================================================

class TestQueries:

    def test_buttons(self, blocks, transport):
        assert not blocks.is_button_pressed()
        transport.inject_line("BA1")
        assert blocks.is_button_pressed(Button.A)
        assert not blocks.is_button_pressed(Button.B)
        assert blocks.is_button_pressed(Button.ANY)

    def test_touch(self, blocks, transport):
        transport.inject_line("BL1")
        transport.inject_line("B11")
        assert blocks.is_logo_touched()
        assert blocks.is_pin_touched(1)
        assert not blocks.is_pin_touched(0)

    def test_gesture(self, blocks, transport):
        transport.inject_line("G:LogoUp")
        assert blocks.is_gesture("LogoUp")
        assert not blocks.is_gesture("Shake")
        assert blocks.get_gesture() == "LogoUp"

    def test_tilt(self, blocks, transport):
        transport.inject_line("R0000FF38")     # roll 0, pitch -200
        assert blocks.tilt_angle(TiltDirection.FRONT) == 20
        assert blocks.tilt_angle(TiltDirection.BACK) == -20
        assert blocks.is_tilted(TiltDirection.FRONT)
        assert not blocks.is_tilted(TiltDirection.LEFT)
        assert blocks.is_tilted()

    def test_axes(self, blocks, transport):
        transport.inject_line("F03E8FFFF07D0")
        transport.inject_line("A:FC1800000064")
        transport.inject_line("R0064FF9C")
        assert blocks.get_magnetic_force("x") == 1000
        assert blocks.get_magnetic_force(2) == 2000
        assert blocks.get_acceleration("x") == -1000
        assert blocks.get_acceleration("z") == 100
        assert blocks.get_rotation("roll") == 100
        assert blocks.get_rotation("pitch") == -100

    @pytest.mark.parametrize("axis", ["w", 3, -1, "roll"])
    def test_unknown_axis(self, blocks, axis):
        with pytest.raises(ValueError):
            blocks.get_acceleration(axis)

    def test_scalars(self, blocks, transport):
        for line in ("V:99", "T:23", "P:12", "DTS"):
            transport.inject_line(line)
        assert blocks.get_light_level() == 99
        assert blocks.get_temperature() == 23
        assert blocks.get_microphone_level() == 12
        assert blocks.is_playing_sound()
        transport.inject_line("DTE")
        assert not blocks.is_playing_sound()

    def test_queries_do_not_send(self, blocks, transport):
        blocks.is_button_pressed()
        blocks.get_acceleration("x")
        blocks.is_tilted()
        assert transport.sent == []
