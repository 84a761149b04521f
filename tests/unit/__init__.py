"""
Unit tests for the turn retry coordinator.

Test individual components in isolation against a mocked host:
- Models (audit record serialization, host message helpers)
- Error classifier (verdict precedence, configurable patterns)
- Attempt tracker and backoff scheduler
- Retry trigger, context scrubber and manual retry surfaces
- Audit log and coordinator event handling
"""
