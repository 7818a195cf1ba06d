"""
Transport module.

This module wraps a connected client socket in a handle that can be shared
between the connection's ingestion worker (reads) and the coordinator (writes).
"""

import socket
import threading
from typing import Optional, Tuple

from common.constants import ENCODING, RECV_CHUNK_SIZE


class TransportHandle:
    """
    Line-buffered, lock-guarded view of one client socket.

    A single lock guards the whole handle. It is taken for the duration of one
    read, write, mode change or shutdown call and released right after, so a
    reader polling the socket never holds it while sleeping.
    """

    def __init__(self, sock: socket.socket, chunk_size: int = RECV_CHUNK_SIZE):
        self.sock = sock
        self.chunk_size = chunk_size
        self.lock = threading.Lock()
        self._buffer = bytearray()
        self._eof = False
        self._peer: Optional[Tuple] = None
        try:
            self._peer = sock.getpeername()
        except OSError:
            pass

    @property
    def peer(self) -> Optional[Tuple]:
        """Remote address captured at construction, if it was available."""
        return self._peer

    def read_line(self) -> bytes:
        """
        Read one line, including its trailing newline.

        Returns b"" at end of stream. A final unterminated line is returned
        as-is before end of stream is reported. In non-blocking mode raises
        BlockingIOError when no complete line is available yet; bytes already
        received stay buffered for the next call.
        """
        with self.lock:
            while True:
                newline = self._buffer.find(b'\n')
                if newline != -1:
                    return self._take(newline + 1)
                if self._eof:
                    return self._take(len(self._buffer))

                chunk = self.sock.recv(self.chunk_size)
                if not chunk:
                    self._eof = True
                else:
                    self._buffer.extend(chunk)

    def _take(self, size: int) -> bytes:
        data = bytes(self._buffer[:size])
        del self._buffer[:size]
        return data

    def write(self, data: bytes):
        """Write raw bytes to the client."""
        with self.lock:
            self.sock.sendall(data)

    def write_text(self, text: str):
        """Write text to the client without adding a newline."""
        self.write(text.encode(ENCODING))

    def write_line(self, line: str):
        """Write one newline-terminated line to the client."""
        self.write((line + '\n').encode(ENCODING))

    def set_nonblocking(self):
        """Switch the socket to non-blocking mode."""
        with self.lock:
            self.sock.setblocking(False)

    def shutdown(self):
        """Shut down both directions of the connection."""
        with self.lock:
            self.sock.shutdown(socket.SHUT_RDWR)

    def close(self):
        """Release the socket. Later reads and writes fail with OSError."""
        with self.lock:
            self.sock.close()

    def __repr__(self):
        return f"TransportHandle(peer={self._peer!r})"
