"""
anystub Test Suite — Shared Fixtures

Every test gets freshly built classes so that a stub leaking out of one
test can never be mistaken for the behaviour of another. The
``interceptor`` fixture runs each test once per restoration strategy.
"""

from __future__ import annotations

import os
import sys

import pytest

# ---------------------------------------------------------------------------
# Ensure the project root is importable
# ---------------------------------------------------------------------------
sys.path.insert(
    0,
    os.path.dirname(
        os.path.dirname(os.path.abspath(__file__))
    ),
)

from anystub import (  # noqa: E402
    AnyInstanceInterceptor,
    InterceptorConfig,
    StrategyName,
)
from anystub.testing.pytest_plugin import (  # noqa: E402, F401
    any_instance,
)

ALL_STRATEGIES = [
    StrategyName.LOOKUP_HOOK,
    StrategyName.DIRECT_OVERWRITE,
]


# ============================================================================
# Class factories
# ============================================================================


def build_account_class():
    class Account:
        def balance(self):
            return 100

        def deposit(self, amount):
            return 100 + amount

        def _audit(self):
            return "audited"

        def __secret(self):
            return "secret"

        def reveal(self):
            return self.__secret()

    return Account


def build_hierarchy():
    class Base:
        def name(self):
            return "base"

        def greet(self, other):
            return f"hello {other}"

    class Sub(Base):
        pass

    return Base, Sub


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture(
    params=ALL_STRATEGIES, ids=lambda s: s.value
)
def strategy_name(request) -> StrategyName:
    return request.param


@pytest.fixture
def interceptor(strategy_name):
    """Interceptor for one strategy, torn down after the test."""
    instance = AnyInstanceInterceptor(
        config=InterceptorConfig(strategy=strategy_name)
    )
    yield instance
    instance.reset()


@pytest.fixture
def account_class():
    return build_account_class()


@pytest.fixture
def hierarchy():
    return build_hierarchy()
