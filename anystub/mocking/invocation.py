from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional


@dataclass
class Invocation:
    method_name: str
    args: tuple = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    receiver: Any = None

    @property
    def block(self) -> Optional[Callable[..., Any]]:
        """The trailing callable argument, if the call ended with one."""
        if self.args and callable(self.args[-1]):
            return self.args[-1]
        return None

    def __str__(self) -> str:
        parts = [repr(arg) for arg in self.args]
        parts.extend(
            f"{key}={value!r}"
            for key, value in self.kwargs.items()
        )
        return f"{self.method_name}({', '.join(parts)})"
