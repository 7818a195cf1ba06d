"""
Relay package for the LAN chat relay.

This package contains all server-side functionality including:
- Per-connection nickname handshake and line ingestion
- The coordinator that owns the roster and broadcasts
- Configuration and utilities
"""
