"""
Relay configuration module.

This module handles relay-side configuration settings.
"""

from common.constants import DEFAULT_SERVER_HOST, DEFAULT_PORT, LISTEN_BACKLOG, LOG_DIR, POLL_INTERVAL


class RelayConfig:
    """Relay configuration class."""

    def __init__(self, host: str = DEFAULT_SERVER_HOST, port: int = DEFAULT_PORT,
                 poll_interval: float = POLL_INTERVAL, logs_dir: str = LOG_DIR,
                 chat_log_enabled: bool = True):
        self.host = host
        self.port = port

        # Ingestion settings
        self.poll_interval = poll_interval

        # Logging configuration
        self.logs_dir = logs_dir
        self.chat_log_enabled = chat_log_enabled

        # Connection settings
        self.listen_backlog = LISTEN_BACKLOG

    def get_connection_info(self):
        """Get connection information."""
        return {
            'host': self.host,
            'port': self.port
        }

    def get_log_settings(self):
        """Get logging settings."""
        return {
            'logs_dir': self.logs_dir,
            'chat_log_enabled': self.chat_log_enabled
        }
