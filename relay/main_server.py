#!/usr/bin/env python3
"""
LAN Chat Relay - Server

This module binds the listening socket, runs the coordinator on its own
thread, and gives every accepted connection an identity and an ingestion
worker thread.
"""

import argparse
import itertools
import logging
import socket
import threading
from typing import Optional, Tuple

from common.constants import SHUTDOWN_JOIN_TIMEOUT
from relay.chat.coordinator import Coordinator
from relay.chat.ingestion_worker import IngestionWorker
from relay.events import EventChannel
from relay.utils.config import RelayConfig
from relay.utils.logger import logger


class RelayServer:
    """Main server class that wires workers to the coordinator."""

    def __init__(self, config: RelayConfig = None):
        self.config = config or RelayConfig()
        self.events = EventChannel()
        self.coordinator = Coordinator()
        self.listener: Optional[socket.socket] = None
        self.coordinator_thread: Optional[threading.Thread] = None
        self.running = False
        self._identities = itertools.count()

    @property
    def address(self) -> Optional[Tuple[str, int]]:
        """Bound (host, port), available once the listener is up."""
        if self.listener is None:
            return None
        return self.listener.getsockname()[:2]

    def bind(self):
        """Create the listening socket and start the coordinator thread."""
        self.listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self.listener.bind((self.config.host, self.config.port))
        self.listener.listen(self.config.listen_backlog)

        self.coordinator_thread = threading.Thread(
            target=self.coordinator.start, args=(self.events,),
            name='coordinator', daemon=True
        )
        self.coordinator_thread.start()

        self.running = True
        host, port = self.address
        logger.log_listening(host, port)

    def start(self):
        """Start the server and accept connections until stop() is called."""
        if self.listener is None:
            self.bind()

        while self.running:
            try:
                conn, addr = self.listener.accept()
            except OSError as e:
                if self.running:
                    logger.log_error("accept", e)
                    continue
                break

            uid = next(self._identities)
            logger.log_connection(addr, uid)
            threading.Thread(
                target=self.handle_client, args=(uid, conn),
                name=f'worker-{uid}', daemon=True
            ).start()

    def handle_client(self, uid: int, conn: socket.socket):
        """
        Handshake and run one connection.

        Errors escaping the worker end its thread and are reported once, by
        threading.excepthook.
        """
        worker = IngestionWorker.create(uid, conn, self.events, self.config)
        if worker is not None:
            worker.run()

    def stop(self):
        """Stop accepting, then let the coordinator finish queued events."""
        logger.info("Stopping...")
        self.running = False

        if self.listener:
            try:
                # Wakes a thread blocked in accept() on Linux
                self.listener.shutdown(socket.SHUT_RDWR)
            except OSError:
                logger.debug("Listener was not accepting")
            try:
                self.listener.close()
            except OSError as e:
                logger.log_error("closing listener", e)

        self.events.close()
        if self.coordinator_thread:
            self.coordinator_thread.join(timeout=SHUTDOWN_JOIN_TIMEOUT)

        logger.info("Stopped")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='LAN Chat Relay')
    parser.add_argument('--host', type=str, default=None,
                        help='Host to bind to (default: 0.0.0.0)')
    parser.add_argument('--port', type=int, default=None,
                        help='TCP port (default: 9000)')
    parser.add_argument('--poll-interval', type=float, default=None,
                        help='Seconds between reads on an idle connection (default: 0.1)')
    parser.add_argument('--logs-dir', type=str, default=None,
                        help='Directory for the chat log (default: logs)')
    parser.add_argument('--no-chat-log', action='store_true',
                        help='Do not append chat lines to the chat log file')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    return parser


def config_from_args(args: argparse.Namespace) -> RelayConfig:
    config = RelayConfig()
    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    if args.poll_interval is not None:
        config.poll_interval = args.poll_interval
    if args.logs_dir is not None:
        config.logs_dir = args.logs_dir
    if args.no_chat_log:
        config.chat_log_enabled = False
    return config


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    config = config_from_args(args)

    logger.configure(
        logs_dir=config.logs_dir,
        log_level=logging.DEBUG if args.debug else logging.INFO,
        chat_log_enabled=config.chat_log_enabled
    )

    server = RelayServer(config)
    try:
        server.start()
    except KeyboardInterrupt:
        logger.info("Server shutting down...")
    except OSError as e:
        logger.log_error("server", e)
        return 1
    finally:
        server.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
