"""
anystub - Any-instance stubbing for Python tests

Replace a method on every instance of a class with a test double, and get
the original back exactly as it was when the test ends.

Quick Start:

    from anystub import AnyInstanceInterceptor

    interceptor = AnyInstanceInterceptor()
    interceptor.stub(Account, "balance")
    interceptor.mock_for(Account).on("balance", returns=42)

    Account().balance()   # -> 42
    interceptor.unstub(Account, "balance")
    Account().balance()   # -> 100

Scoped:

    from anystub.testing import any_instance_scope

    with any_instance_scope() as stubs:
        stubs.stub(Account, "balance")
        ...
    # every stub released here, even if the block raised

pytest:

    pytest_plugins = ["anystub.testing.pytest_plugin"]

    def test_balance(any_instance):
        any_instance.stub(Account, "balance")

CLI:

    anystub info                          # Show detected strategy
    anystub visibility myapp:Account      # Method visibility table
"""

__version__ = "0.1.0"

# =============================================================================
# CORE TYPES
# =============================================================================

from .types import (
    AnyInstance,
    InterceptionState,
    InterceptorConfig,
    SingleObject,
    StrategyName,
    StubTarget,
    Visibility,
)

# =============================================================================
# LOGGING
# =============================================================================

from .logging import AnyStubLogger, get_logger, setup_logging

# =============================================================================
# MOCK COLLABORATOR
# =============================================================================

from .mocking import (
    Invocation,
    MockHandle,
    MockRegistry,
    UnexpectedInvocation,
)

# =============================================================================
# INTERCEPTION
# =============================================================================

from .interception import (
    AlreadyRestored,
    AnyInstanceInterceptor,
    AnyInstanceMethod,
    DispatchShim,
    InterceptionError,
    NotSupported,
    OriginalMethodRecord,
    OriginalMethodRegistry,
    RestorationFailed,
    VisibilityMismatch,
    determine_visibility,
)
from .testing import any_instance_scope

__all__ = [
    "__version__",
    # Types
    "AnyInstance",
    "InterceptionState",
    "InterceptorConfig",
    "SingleObject",
    "StrategyName",
    "StubTarget",
    "Visibility",
    # Logging
    "AnyStubLogger",
    "get_logger",
    "setup_logging",
    # Mocking
    "Invocation",
    "MockHandle",
    "MockRegistry",
    "UnexpectedInvocation",
    # Interception
    "AnyInstanceInterceptor",
    "AnyInstanceMethod",
    "DispatchShim",
    "OriginalMethodRecord",
    "OriginalMethodRegistry",
    "determine_visibility",
    "any_instance_scope",
    # Errors
    "InterceptionError",
    "NotSupported",
    "AlreadyRestored",
    "VisibilityMismatch",
    "RestorationFailed",
]
