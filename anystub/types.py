"""
anystub - Core Types

Design Philosophy:
- A stub target is either one object or every instance of a class
- Visibility follows Python naming conventions, probed from a method table
- Restoration strategy is chosen once, never per call
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# =============================================================================
# VISIBILITY
# =============================================================================


class Visibility(str, Enum):
    """
    Accessibility of a method as seen from outside its class.

    Python does not enforce visibility, so this mirrors the naming
    conventions the interpreter and tooling honour:

    - PUBLIC:    ``balance``, ``__len__``
    - PROTECTED: ``_balance``
    - PRIVATE:   ``_Account__balance`` (written ``__balance`` in the class)
    """

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    UNDEFINED = "undefined"


# =============================================================================
# STUB TARGETS
# =============================================================================


@dataclass(frozen=True, eq=False)
class SingleObject:
    """Interception scoped to one object."""

    obj: Any

    @property
    def key(self) -> tuple[str, int]:
        return ("object", id(self.obj))

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, SingleObject)
            and other.obj is self.obj
        )

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"#<{type(self.obj).__name__}:{id(self.obj):#x}>"


@dataclass(frozen=True, eq=False)
class AnyInstance:
    """Interception scoped to every instance of a class."""

    klass: type

    @property
    def key(self) -> tuple[str, int]:
        return ("any_instance", id(self.klass))

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, AnyInstance)
            and other.klass is self.klass
        )

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"{self.klass.__qualname__}.any_instance"


StubTarget = Union[SingleObject, AnyInstance]


# =============================================================================
# INTERCEPTION STATE
# =============================================================================


class InterceptionState(str, Enum):
    """Lifecycle of one (class, method name) pair."""

    UNSTUBBED = "unstubbed"
    STUBBED = "stubbed"
    RESTORED = "restored"


# =============================================================================
# CONFIGURATION
# =============================================================================


class StrategyName(str, Enum):
    """How forwarding entries are placed in front of a class."""

    AUTO = "auto"
    LOOKUP_HOOK = "lookup_hook"
    DIRECT_OVERWRITE = "direct_overwrite"


@dataclass
class InterceptorConfig:
    """Configuration for an AnyInstanceInterceptor."""

    strategy: StrategyName = StrategyName.AUTO

    # Re-probe visibility after every restore and fail on drift
    verify_visibility: bool = True

    # Names that may never be stubbed, on any class
    protected_names: frozenset[str] = field(
        default_factory=lambda: frozenset(
            {
                "__getattribute__",
                "__class__",
                "__dict__",
                "__init_subclass__",
            }
        )
    )
