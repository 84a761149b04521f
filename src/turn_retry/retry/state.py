"""
Process-local coordinator state.

One CoordinatorState is owned by each RetryCoordinator and mutated only from
host callbacks. The host delivers events one at a time on its event loop,
so no lock is taken.
"""

from dataclasses import dataclass


@dataclass
class CoordinatorState:
    """
    Flags shared by the coordinator components.

    Attributes:
        last_turn_failed: Most recent completed turn stopped with error/aborted.
            Gates manual retry; set even for failures the classifier won't retry.
        pending_marker: A retry marker was sent and not yet scrubbed from context.
    """

    last_turn_failed: bool = False
    pending_marker: bool = False
