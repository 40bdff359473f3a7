from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from anystub.types import Visibility


class InterceptionError(Exception):
    pass


class NotSupported(InterceptionError):

    def __init__(self, target: Any, reason: str) -> None:
        self.target: Any = target
        self.reason: str = reason
        super().__init__(
            f"Cannot stub any instance of {target!r}: {reason}"
        )


class AlreadyRestored(InterceptionError):

    def __init__(self, label: str) -> None:
        self.label: str = label
        super().__init__(f"{label} has already been restored")


class VisibilityMismatch(InterceptionError):

    def __init__(
        self,
        owner: type,
        method_name: str,
        expected: Visibility,
        actual: Visibility,
    ) -> None:
        self.owner: type = owner
        self.method_name: str = method_name
        self.expected: Visibility = expected
        self.actual: Visibility = actual
        super().__init__(
            f"{owner.__qualname__}.{method_name} restored as "
            f"{actual.value}, captured as {expected.value}"
        )


class RestorationFailed(InterceptionError):

    def __init__(self, errors: list[BaseException]) -> None:
        self.errors: list[BaseException] = list(errors)
        details = "; ".join(
            f"{type(e).__name__}: {e}" for e in self.errors
        )
        super().__init__(
            f"{len(self.errors)} restoration(s) failed: {details}"
        )
