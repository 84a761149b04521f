"""
Integration tests for the turn retry coordinator.

Drive the installed coordinator end to end through an in-memory host:
failed runs, backoff, hidden trigger, context scrubbing, recovery and
manual retry.
"""
