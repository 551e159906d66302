# tests/fixtures/__init__.py
"""Shared test doubles for fetchcell tests.

Available doubles:
- FakeSource: in-memory ResourceSource with per-path payloads and delays
- RecordingBus: EventBus that keeps every emitted record
- sequential_ids: deterministic id generator
"""

from tests.fixtures.doubles import FakeSource, RecordingBus, sequential_ids

__all__ = [
    "FakeSource",
    "RecordingBus",
    "sequential_ids",
]
