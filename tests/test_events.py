#!/usr/bin/env python3
"""
Unit tests for relay/events.py

Tests ordering and close semantics of the EventChannel.
"""

import threading
import unittest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from relay.errors import ChannelClosedError
from relay.events import Chat, Disconnect, EventChannel


class TestEventChannel(unittest.TestCase):
    """Test cases for the shared event channel."""

    def setUp(self):
        self.channel = EventChannel()

    def test_fifo_order(self):
        """Test that events come out in the order they were sent."""
        events = [Chat(1, "a"), Chat(2, "b"), Disconnect(1, "Disconnected"), Chat(2, "c")]
        for event in events:
            self.channel.send(event)
        self.channel.close()

        self.assertEqual(list(self.channel), events)

    def test_close_delivers_queued_events_then_stops(self):
        self.channel.send(Chat(0, "before"))
        self.channel.close()

        self.assertEqual(self.channel.receive(), Chat(0, "before"))
        self.assertIsNone(self.channel.receive())
        self.assertIsNone(self.channel.receive())

    def test_send_after_close_raises(self):
        """Test that a closed channel is reported to the sender."""
        self.channel.close()
        with self.assertRaises(ChannelClosedError):
            self.channel.send(Chat(0, "late"))

    def test_close_is_idempotent(self):
        self.channel.close()
        self.channel.close()
        self.assertEqual(list(self.channel), [])

    def test_per_sender_order_preserved_with_many_senders(self):
        """Test that each sender's events stay in its own emission order."""
        def sender(identity):
            for n in range(200):
                self.channel.send(Chat(identity, str(n)))

        threads = [threading.Thread(target=sender, args=(i,)) for i in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.channel.close()

        received = list(self.channel)
        self.assertEqual(len(received), 800)
        for identity in range(4):
            texts = [event.text for event in received if event.identity == identity]
            self.assertEqual(texts, [str(n) for n in range(200)])

    def test_events_are_immutable(self):
        event = Chat(3, "hi")
        with self.assertRaises(AttributeError):
            event.text = "changed"


if __name__ == '__main__':
    unittest.main()
