"""
Coordinator module.

This module owns the roster of connected users. Every roster change and every
outbound line goes through the single thread running Coordinator.start(), which
applies events strictly in the order they were put on the channel.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List

from common.constants import Prompts
from common.protocol_definitions import (
    create_chat_line, create_join_line, create_leave_line, create_online_line
)
from relay.events import Chat, Disconnect, Event, Join
from relay.transport import TransportHandle
from relay.utils.logger import logger


@dataclass
class RosterEntry:
    """A connected user: their nickname and the handle used to write to them."""
    nickname: str
    transport: TransportHandle


class Coordinator:
    """Applies events from every ingestion worker to the roster."""

    def __init__(self):
        # Only touched from the thread draining the channel, so no lock
        self.roster: Dict[int, RosterEntry] = {}

    def start(self, events: Iterable[Event]):
        """Drain events in arrival order until the channel closes."""
        for event in events:
            self.handle_event(event)

    def handle_event(self, event: Event):
        if isinstance(event, Join):
            self.join(event.identity, event.nickname, event.transport)
        elif isinstance(event, Disconnect):
            self.disconnect(event.identity, event.reason)
        elif isinstance(event, Chat):
            self.chat(event.identity, event.text)
        else:
            logger.warning(f"Ignoring unknown event {event!r}")

    def join(self, identity: int, nickname: str, transport: TransportHandle):
        """
        Admit a user whose nickname is free, or turn the connection away.

        A duplicate nickname gets a private rejection and a closed connection;
        nobody else hears about it. Otherwise the others see the arrival first,
        and the newcomer then receives the roster including itself.
        """
        if self.is_nickname_taken(nickname):
            logger.log_rejected(nickname, identity)
            self._send(transport, Prompts.ALREADY_PRESENT, nickname)
            try:
                transport.shutdown()
            except OSError as e:
                logger.log_error(f"shutting down {nickname}", e)
            return

        self.broadcast(create_join_line(nickname))
        self.roster[identity] = RosterEntry(nickname, transport)
        logger.log_join(nickname, identity)

        self._send(transport, create_online_line(self.nicknames()), nickname)

    def disconnect(self, identity: int, reason: str):
        """Remove a user and tell everyone left. Unknown identities are ignored."""
        entry = self.roster.pop(identity, None)
        if entry is None:
            return

        logger.log_disconnect(entry.nickname, identity, reason)
        self.broadcast(create_leave_line(entry.nickname, reason))

    def chat(self, identity: int, text: str):
        entry = self.roster.get(identity)
        if entry is None:
            return

        logger.log_chat(entry.nickname, identity, text)
        self.broadcast(create_chat_line(entry.nickname, text))

    def broadcast(self, line: str):
        """
        Send a line to every user in the roster, the sender included.

        A failed write is logged and skipped; the recipient stays in the
        roster until its own Disconnect event arrives.
        """
        logger.log_broadcast(line)
        for entry in list(self.roster.values()):
            self._send(entry.transport, line, entry.nickname)

    def _send(self, transport: TransportHandle, line: str, nickname: str) -> bool:
        try:
            transport.write_line(line)
            return True
        except OSError as e:
            logger.log_error(f"sending to {nickname}", e)
            return False

    def is_nickname_taken(self, nickname: str) -> bool:
        return any(entry.nickname == nickname for entry in self.roster.values())

    def nicknames(self) -> List[str]:
        """Nicknames currently online, in the order they joined."""
        return [entry.nickname for entry in self.roster.values()]

    def __contains__(self, identity: int) -> bool:
        return identity in self.roster

    def __len__(self) -> int:
        return len(self.roster)
