"""
Ingestion worker module.

This module owns one client connection end-to-end: it negotiates the nickname,
then turns every line the client sends into an event for the coordinator.
"""

import socket
import time
from typing import Optional, Union

from common.constants import DisconnectReasons, ENCODING, Prompts
from common.protocol_definitions import is_valid_chat_line, is_valid_nickname, normalize_nickname
from relay.errors import HandshakeError
from relay.events import Chat, Disconnect, EventChannel, Join
from relay.transport import TransportHandle
from relay.utils.config import RelayConfig
from relay.utils.logger import logger


def negotiate_nickname(transport: TransportHandle) -> str:
    """
    Prompt the client until it sends an acceptable nickname.

    Only the shape of the nickname is checked here; uniqueness is decided by
    the coordinator when the Join event is applied.

    Raises:
        HandshakeError: on any I/O failure, or if the client hangs up first.
    """
    try:
        while True:
            transport.write_text(Prompts.NICK_PROMPT)
            data = transport.read_line()
            if not data:
                raise HandshakeError("Connection closed before a nick was chosen")

            nickname = normalize_nickname(data.decode(ENCODING, errors='replace'))
            if not nickname:
                transport.write_line(Prompts.NICK_EMPTY)
            elif not is_valid_nickname(nickname):
                transport.write_line(Prompts.NICK_NOT_ALPHANUMERIC)
            else:
                return nickname
    except OSError as e:
        raise HandshakeError(f"I/O failure during handshake: {e}") from e


class IngestionWorker:
    """Reads one client's lines and forwards them as events."""

    def __init__(self, identity: int, nickname: str, transport: TransportHandle,
                 events: EventChannel, poll_interval: float):
        self.identity = identity
        self.nickname = nickname
        self.transport: Optional[TransportHandle] = transport
        self.events = events
        self.poll_interval = poll_interval

    @classmethod
    def create(cls, identity: int, connection: Union[socket.socket, TransportHandle],
               events: EventChannel, config: RelayConfig = None) -> Optional['IngestionWorker']:
        """
        Run the handshake and build a worker for the connection.

        Returns None if the handshake failed; the connection has then been
        shut down and no event was emitted.
        """
        config = config or RelayConfig()
        if isinstance(connection, TransportHandle):
            transport = connection
        else:
            transport = TransportHandle(connection)

        try:
            nickname = negotiate_nickname(transport)
        except HandshakeError as e:
            logger.info(f"Handshake failed for uid={identity}: {e}")
            _abandon(identity, transport)
            return None

        transport.set_nonblocking()
        logger.debug(f"uid={identity} negotiated nick '{nickname}'")
        return cls(identity, nickname, transport, events, config.poll_interval)

    def signal(self, event):
        """Push an event to the coordinator. A closed channel is fatal for this worker."""
        self.events.send(event)

    def run(self):
        """Emit Join, then forward lines until the connection ends."""
        try:
            self.signal(Join(self.identity, self.nickname, self.transport))

            while True:
                try:
                    data = self.transport.read_line()
                except BlockingIOError:
                    time.sleep(self.poll_interval)
                    continue
                except OSError as e:
                    self.signal(Disconnect(self.identity, type(e).__name__))
                    break

                if not data:
                    self.signal(Disconnect(self.identity, DisconnectReasons.CLEAN))
                    break

                line = data.decode(ENCODING, errors='replace')
                if is_valid_chat_line(line):
                    self.signal(Chat(self.identity, line.strip()))
                else:
                    logger.debug(f"Dropped line with control characters from uid={self.identity}")
        finally:
            self._release()

    def _release(self):
        transport, self.transport = self.transport, None
        try:
            transport.close()
        except OSError as e:
            logger.log_error(f"closing uid={self.identity}", e)


def _abandon(identity: int, transport: TransportHandle):
    """Best-effort shutdown of a connection that never joined."""
    try:
        transport.shutdown()
    except OSError as e:
        logger.log_error(f"shutting down uid={identity}", e)
    try:
        transport.close()
    except OSError as e:
        logger.log_error(f"closing uid={identity}", e)
