"""Shared fixtures."""

import pytest

from tests.fakes import FakeGleanClient, FakeGleanState


@pytest.fixture
def glean_state() -> FakeGleanState:
    return FakeGleanState()


@pytest.fixture
def fake_client(glean_state: FakeGleanState) -> FakeGleanClient:
    return glean_state.client()
