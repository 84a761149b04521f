"""
Turn retry coordinator for streaming agent runtimes.

Installs into a host agent runtime and:
- Auto-retries turns that end in transient failures the host's own retry
  does not cover, with exponential backoff
- Re-drives the turn through a hidden marker message that is stripped from
  the next model context
- Offers manual retry through a `retry` command and an empty-editor Enter
- Writes one JSONL audit record per retry decision

Architecture: host event subscriptions + pattern classifier + attempt state machine
"""

__version__ = "0.1.0"
