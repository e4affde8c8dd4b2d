"""
Exceptions for the micro:bit UART adapter
=========================================

MalformedField is raised by the numeric helpers and swallowed by the
line decoder. UnknownCommand and InvalidPayload are raised by the
command encoder before anything reaches the wire.
"""


class MBitError(Exception):
    """Base class for all pymbit errors."""


class MalformedField(MBitError, ValueError):
    """An inbound numeric or hex field could not be parsed."""


class UnknownCommand(MBitError, LookupError):
    """Encode was requested for a command code outside the fixed set."""


class InvalidPayload(MBitError, ValueError):
    """A command payload is outside the documented range for its command."""


class TransportError(MBitError):
    """The transport is closed or failed to write."""
