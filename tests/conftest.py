# tests/conftest.py
"""Shared test fixtures and configuration.

Fixtures wire the engine against in-memory doubles (see tests.fixtures):
sources answer from canned payloads, history records land on a
RecordingBus and status notifications on an EditorStatusChannel.

Async code is driven with asyncio.run() inside ordinary test functions.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from fetchcell.engine import BindingApplier, FetchExecutor, FetchOrchestrator
from fetchcell.environment import Environment
from fetchcell.reporting import ConsoleHistory, EditorStatusChannel
from tests.fixtures import FakeSource, RecordingBus, sequential_ids

# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def environment() -> Environment:
    return Environment()


@pytest.fixture
def applier(environment: Environment) -> BindingApplier:
    return BindingApplier(environment)


@pytest.fixture
def local_source() -> FakeSource:
    return FakeSource("local")


@pytest.fixture
def parent_source() -> FakeSource:
    return FakeSource("parent")


@pytest.fixture
def executor(local_source: FakeSource, parent_source: FakeSource, applier: BindingApplier) -> FetchExecutor:
    return FetchExecutor(local=local_source, parent=parent_source, applier=applier)


@pytest.fixture
def bus() -> RecordingBus:
    return RecordingBus()


@pytest.fixture
def history(bus: RecordingBus) -> ConsoleHistory:
    return ConsoleHistory(bus)


@pytest.fixture
def status_channel() -> EditorStatusChannel:
    return EditorStatusChannel()


@pytest.fixture
def orchestrator(
    executor: FetchExecutor,
    history: ConsoleHistory,
    status_channel: EditorStatusChannel,
    environment: Environment,
) -> FetchOrchestrator:
    return FetchOrchestrator(
        executor=executor,
        reporter=history,
        notifier=status_channel,
        namespace=environment.namespace,
        id_generator=sequential_ids("history"),
    )


# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
