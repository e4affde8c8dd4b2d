"""
micro:bit monitor tool
======================

Connects to a micro:bit over serial, enables sensor reporting and prints
the decoded sensor state at a fixed interval.

Entry point for the `pymbit-monitor` command:

    pymbit-monitor --port /dev/ttyACM0 --duration 10 --text "Hi"
"""

import argparse
import asyncio
import logging
import sys

from ..config import LinkConfig
from ..blocks import MBitBlocks
from ..errors import MBitError
from ..mbit import MBitCallbacks, MBitUART

logger = logging.getLogger(__name__)


def format_state(mbit: MBitUART) -> str:
    """One-line summary of the current sensor state."""
    s = mbit.state
    return (
        f"A={s.button_a} B={s.button_b} logo={s.touch_logo} pins={s.touch_pins} "
        f"light={s.light_level} temp={s.temperature} mic={s.microphone_level} "
        f"mag={s.magnetic_force} acc={s.acceleration} rot={s.rotation} "
        f"gesture={s.gesture or '-'} sound={s.playing_sound}"
    )


async def monitor(mbit: MBitUART, args: argparse.Namespace) -> None:
    blocks = MBitBlocks(mbit)

    if args.enable_sensors:
        await blocks.set_sensor(True)
    if args.text:
        print(f"Scrolling {args.text!r}...")
        await blocks.display_text(args.text)

    loop = asyncio.get_running_loop()
    end = loop.time() + args.duration
    while loop.time() < end:
        print(format_state(mbit))
        await asyncio.sleep(args.interval)

    if args.enable_sensors:
        await blocks.set_sensor(False)


def run_monitor_cli():
    """
    Interactive sensor monitor for real hardware.

    Entry point for `pymbit-monitor` command.
    """
    parser = argparse.ArgumentParser(description="micro:bit UART Monitor")
    parser.add_argument('--port', '-p', default='/dev/ttyACM0',
                        help='Serial port (default: /dev/ttyACM0)')
    parser.add_argument('--baudrate', '-b', type=int, default=115200,
                        help='Baudrate (default: 115200)')
    parser.add_argument('--duration', '-d', type=float, default=10.0,
                        help='Seconds to monitor (default: 10)')
    parser.add_argument('--interval', '-i', type=float, default=0.5,
                        help='Seconds between state prints (default: 0.5)')
    parser.add_argument('--text', '-t', default='',
                        help='Text to scroll on the display before monitoring')
    parser.add_argument('--no-sensors', dest='enable_sensors', action='store_false',
                        help='Do not send the sensor-enable command')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Log every inbound line')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    )

    print("=" * 60)
    print("micro:bit UART Monitor")
    print("=" * 60)
    print(f"\nConnecting to {args.port}...")

    def on_unrecognized(line):
        logger.debug("Ignored line: %r", line)

    config = LinkConfig(port=args.port, baudrate=args.baudrate)
    mbit = MBitUART.from_serial(config, MBitCallbacks(on_unrecognized=on_unrecognized))

    try:
        with mbit:
            print("✓ Connected!\n")
            asyncio.run(monitor(mbit, args))
            decoder = mbit.decoder
            print(f"\nLines decoded: {decoder.lines_decoded}, rejected: {decoder.lines_rejected}")
    except KeyboardInterrupt:
        print("\nInterrupted")
    except MBitError as e:
        print(f"✗ {e}")
        sys.exit(1)


if __name__ == '__main__':
    run_monitor_cli()
