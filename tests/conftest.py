"""Shared test fixtures for adaptivemaps tests."""

from __future__ import annotations

import pytest

from adaptivemaps.contracts.marker import LatLng
from adaptivemaps.platforms.memory import InMemoryPlatform
from tests.fakes.backend import FakeNativeBackend, FakeWebBackend


@pytest.fixture
def memory_platform() -> InMemoryPlatform:
    return InMemoryPlatform()


@pytest.fixture
def web_backend() -> FakeWebBackend:
    return FakeWebBackend()


@pytest.fixture
def native_backend() -> FakeNativeBackend:
    return FakeNativeBackend()


@pytest.fixture
def stockholm() -> LatLng:
    return LatLng(lat=59.3293, lng=18.0686)
