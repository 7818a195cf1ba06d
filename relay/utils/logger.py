"""
Relay logging module.

This module handles relay-side logging functionality.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from common.constants import CHAT_LOG_FILE, LOG_DIR, LOGGER_NAME


class RelayLogger:
    """Relay logging class."""

    def __init__(self, logs_dir: str = LOG_DIR, log_level: int = logging.INFO, chat_log_enabled: bool = False):
        self.logger = logging.getLogger(LOGGER_NAME)
        self.configure(logs_dir, log_level, chat_log_enabled)

    def configure(self, logs_dir: str = LOG_DIR, log_level: int = logging.INFO, chat_log_enabled: bool = False):
        """(Re)build the console handler and choose where the chat log goes."""
        self.logger.setLevel(log_level)

        # Remove existing handlers
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        formatter = logging.Formatter(
            '%(asctime)s [%(levelname)s] %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        self.logs_dir = Path(logs_dir)
        self.chat_log_path: Optional[Path] = None
        if chat_log_enabled:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            self.chat_log_path = self.logs_dir / CHAT_LOG_FILE

    def info(self, message: str):
        """Log info message."""
        self.logger.info(message)

    def error(self, message: str):
        """Log error message."""
        self.logger.error(message)

    def warning(self, message: str):
        """Log warning message."""
        self.logger.warning(message)

    def debug(self, message: str):
        """Log debug message."""
        self.logger.debug(message)

    def log_listening(self, host: str, port: int):
        self.info(f"Listening on {host}:{port}")

    def log_connection(self, addr: tuple, uid: int):
        """Log client connection."""
        self.info(f"Connection received on {addr}, assigned uid={uid}")

    def log_join(self, nickname: str, uid: int):
        """Log a user entering the roster."""
        self.info(f"User '{nickname}' joined with uid={uid}")

    def log_rejected(self, nickname: str, uid: int):
        """Log a join refused because the nickname is taken."""
        self.warning(f"Rejected uid={uid}: nick '{nickname}' already present")

    def log_disconnect(self, nickname: str, uid: int, reason: str):
        """Log user disconnect."""
        self.info(f"User {nickname} (uid={uid}) disconnected: {reason}")

    def log_chat(self, nickname: str, uid: int, message: str):
        """Log chat message."""
        self.debug(f"Chat from {nickname} (uid={uid}): {message}")
        if self.chat_log_path is not None:
            self._write_to_file(self.chat_log_path, f"{datetime.now().isoformat()} | {nickname} (uid={uid}) | {message}")

    def log_broadcast(self, line: str):
        """Log a line sent to every connected client."""
        self.info(line)

    def log_error(self, operation: str, error: Exception):
        """Log error with operation context."""
        self.error(f"Error in {operation}: {error}")

    def _write_to_file(self, file_path: Path, content: str):
        """Write content to log file."""
        try:
            with open(file_path, 'a', encoding='utf-8') as f:
                f.write(content + '\n')
        except OSError as e:
            self.error(f"Failed to write to log file {file_path}: {e}")


# Global logger instance
logger = RelayLogger()
