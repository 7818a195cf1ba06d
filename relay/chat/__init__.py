"""
Chat module for relay-side messaging functionality.

Handles:
- Nickname negotiation
- Turning client lines into events
- Roster ownership and broadcasting
"""
