"""
Shared constants for the LAN chat relay.

This module contains all constants used across the relay components.
"""

# Network Configuration
DEFAULT_SERVER_HOST = '0.0.0.0'
DEFAULT_PORT = 9000
LISTEN_BACKLOG = 128

# Buffer Sizes
RECV_CHUNK_SIZE = 4096

# Timeouts
POLL_INTERVAL = 0.1  # seconds between non-blocking read attempts
SHUTDOWN_JOIN_TIMEOUT = 1.0  # seconds

# Encoding
ENCODING = 'utf-8'

# Logging
LOG_DIR = 'logs'
CHAT_LOG_FILE = 'chat_history.log'
LOGGER_NAME = 'chat_relay'


# Wire texts
class Prompts:
    NICK_PROMPT = 'Please enter your nick.\n> '
    NICK_EMPTY = "Nick can't be empty.\n"
    NICK_NOT_ALPHANUMERIC = 'Nick must be alphanumeric.\n'
    ALREADY_PRESENT = 'Already present.'


# Disconnect reasons
class DisconnectReasons:
    CLEAN = 'Disconnected'
