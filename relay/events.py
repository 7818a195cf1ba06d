"""
Event definitions for the chat relay.

Ingestion workers describe everything that happens on their connection as
events and push them onto a single shared EventChannel; the coordinator drains
that channel in arrival order.
"""

import queue
import threading
from dataclasses import dataclass
from typing import Iterator, Union

from relay.errors import ChannelClosedError
from relay.transport import TransportHandle


@dataclass(frozen=True)
class Join:
    """A connection finished its handshake and asks to enter the roster."""
    identity: int
    nickname: str
    transport: TransportHandle


@dataclass(frozen=True)
class Chat:
    """One accepted input line from a connection."""
    identity: int
    text: str


@dataclass(frozen=True)
class Disconnect:
    """Terminal event for a connection whose read loop has ended."""
    identity: int
    reason: str


Event = Union[Join, Chat, Disconnect]


class EventChannel:
    """
    Unbounded FIFO of events with many senders and one receiver.

    close() enqueues an end marker: the receiver still gets every event sent
    before it, and send() fails from then on.
    """

    _CLOSED = object()

    def __init__(self):
        self._queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False

    def send(self, event: Event):
        """Enqueue an event. Raises ChannelClosedError after close()."""
        with self._lock:
            if self._closed:
                raise ChannelClosedError(f"Couldn't send {type(event).__name__} event: channel closed")
            self._queue.put(event)

    def close(self):
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(self._CLOSED)

    def receive(self):
        """Block until the next event. Returns None once the channel is drained and closed."""
        item = self._queue.get()
        if item is self._CLOSED:
            # Keep the marker visible to any later receive() call
            self._queue.put(item)
            return None
        return item

    def __iter__(self) -> Iterator[Event]:
        while True:
            event = self.receive()
            if event is None:
                return
            yield event
