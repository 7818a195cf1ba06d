"""
Relay exceptions.
"""


class RelayError(Exception):
    """Base class for relay errors."""


class HandshakeError(RelayError):
    """The connection failed before a nickname was negotiated."""


class ChannelClosedError(RelayError):
    """An event was sent after the coordinator's channel was closed."""
