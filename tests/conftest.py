"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import pytest

from groupchess.core.models import User
from groupchess.db.memory_registry import InMemorySessionRegistry
from groupchess.engine.rules import PythonChessRules
from groupchess.services.referee import ChessReferee


class FakeClock:
    """Manually advanced replacement for time.monotonic."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def alice() -> User:
    return User(id=1, name="alice")


@pytest.fixture
def bob() -> User:
    return User(id=2, name="bob")


@pytest.fixture
def carol() -> User:
    return User(id=3, name="carol")


@pytest.fixture
def engine() -> PythonChessRules:
    return PythonChessRules()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def registry(clock: FakeClock) -> InMemorySessionRegistry:
    return InMemorySessionRegistry(clock=clock)


@pytest.fixture
def referee(registry: InMemorySessionRegistry, engine: PythonChessRules) -> ChessReferee:
    return ChessReferee(registry, engine)
