"""
Host runtime contracts.

- protocol.py: Protocols for the extension API (HostAPI, ExtensionContext, HostUI)
- keys.py: Raw terminal key matching
"""

from turn_retry.host.keys import matches_enter
from turn_retry.host.protocol import (
    CommandHandler,
    EventHandler,
    ExtensionContext,
    HostAPI,
    HostUI,
    InputHandler,
)

__all__ = [
    "matches_enter",
    "CommandHandler",
    "EventHandler",
    "ExtensionContext",
    "HostAPI",
    "HostUI",
    "InputHandler",
]
