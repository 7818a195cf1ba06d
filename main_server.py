#!/usr/bin/env python3
"""
LAN Chat Relay - Main Entry Point

Usage:
    python main_server.py

Optional arguments:
    --host HOST             Bind address (default: 0.0.0.0)
    --port PORT             TCP port (default: 9000)
    --poll-interval SECS    Idle read polling interval (default: 0.1)
    --logs-dir DIR          Chat log directory (default: logs)
    --no-chat-log           Disable the chat log file
    --debug                 Enable debug logging
"""

if __name__ == "__main__":
    from relay.main_server import main

    raise SystemExit(main())
