"""Raw terminal key matching."""

# Carriage return, line feed, kitty keyboard protocol, keypad (application mode)
ENTER_SEQUENCES = frozenset({"\r", "\n", "\r\n", "\x1b[13u", "\x1bOM"})


def matches_enter(data: str) -> bool:
    """True if the raw input sequence is a plain Enter keypress."""
    return data in ENTER_SEQUENCES
