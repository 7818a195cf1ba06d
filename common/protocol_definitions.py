"""
Protocol definitions for the LAN chat relay.

This module defines the line formats exchanged between clients and the relay,
and the validation rules applied to nicknames and chat lines.
"""

import string
from typing import Iterable, Optional


# ASCII whitespace that is allowed through the control-character filter
ALLOWED_CONTROL_WHITESPACE = frozenset('\t\n\x0c\r')

# Unicode White_Space; unlike str.isspace() this leaves \x1c-\x1f alone
NICKNAME_TRIM_CHARS = (
    '\t\n\x0b\x0c\r \x85\xa0\u1680'
    '\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a'
    '\u2028\u2029\u202f\u205f\u3000'
)

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def normalize_nickname(raw: str) -> str:
    """Trim whitespace and lowercase ASCII letters only."""
    return raw.strip(NICKNAME_TRIM_CHARS).translate(_ASCII_LOWER)


def is_valid_nickname(nickname: str) -> bool:
    """Return True if the nickname is non-empty and entirely ASCII alphanumeric."""
    return bool(nickname) and all(c.isascii() and c.isalnum() for c in nickname)


def parse_nickname(raw: str) -> Optional[str]:
    """
    Normalize and validate a nickname line.

    Returns the accepted nickname, or None if the line is rejected.
    """
    nickname = normalize_nickname(raw)
    if not is_valid_nickname(nickname):
        return None
    return nickname


def is_ascii_control(char: str) -> bool:
    """Return True for ASCII control characters (0x00-0x1F and 0x7F)."""
    code = ord(char)
    return code < 0x20 or code == 0x7F


def is_valid_chat_line(line: str) -> bool:
    """Reject lines carrying control characters other than whitespace."""
    return all(not is_ascii_control(c) or c in ALLOWED_CONTROL_WHITESPACE for c in line)


def create_join_line(nickname: str) -> str:
    """Create the line announcing a new user."""
    return f"[+] {nickname}"


def create_leave_line(nickname: str, reason: str) -> str:
    """Create the line announcing a departed user."""
    return f"[-] {nickname} ({reason})"


def create_chat_line(nickname: str, text: str) -> str:
    """Create a chat line attributed to a user."""
    return f"<{nickname}> {text}"


def create_online_line(nicknames: Iterable[str]) -> str:
    """Create the private roster listing sent to a user who just joined."""
    return f"online: {' '.join(nicknames)}"
