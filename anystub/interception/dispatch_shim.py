from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Callable, Optional

from .markers import FORWARDER_ATTRIBUTE

if TYPE_CHECKING:
    from anystub.mocking import MockHandle

MockResolver = Callable[[type], "MockHandle"]


class DispatchShim:
    """
    Forwarding table placed in front of one class.

    Exactly one shim exists per class while any of its methods are
    stubbed. The strategy that installed it decides how lookups reach
    the table. Calls are answered by the mock of the receiver's own
    class, which for instances of a subclass is not the stubbed class.
    """

    def __init__(
        self,
        target: type,
        owner: Any,
        mock_resolver: MockResolver,
    ) -> None:
        self.target: type = target
        self.owner: Any = owner
        self.previous_lookup: Any = None
        self._mock_resolver: MockResolver = mock_resolver
        self._entries: dict[str, Callable[..., Any]] = {}

    def __repr__(self) -> str:
        return (
            f"<DispatchShim {self.target.__qualname__} "
            f"forwarding={sorted(self._entries)}>"
        )

    @property
    def names(self) -> list[str]:
        return list(self._entries)

    @property
    def is_empty(self) -> bool:
        return not self._entries

    def has_entry(self, method_name: str) -> bool:
        return method_name in self._entries

    def entry(self, method_name: str) -> Callable[..., Any]:
        return self._entries[method_name]

    def define_forwarding_entry(
        self, method_name: str, is_async: bool = False
    ) -> Callable[..., Any]:
        existing = self._entries.get(method_name)
        if existing is not None:
            return existing
        forwarder = build_forwarder(self, method_name, is_async)
        self._entries[method_name] = forwarder
        return forwarder

    def remove_forwarding_entry(
        self, method_name: str
    ) -> Optional[Callable[..., Any]]:
        return self._entries.pop(method_name, None)

    def intercepts(self, receiver: Any, method_name: str) -> bool:
        """
        Whether a lookup of ``method_name`` on ``receiver`` reaches this shim.

        Instance attributes and overrides in subclasses that sit before
        the target in the receiver's MRO take precedence.
        """
        if method_name not in self._entries:
            return False
        try:
            instance_dict = object.__getattribute__(
                receiver, "__dict__"
            )
        except AttributeError:
            instance_dict = {}
        if method_name in instance_dict:
            return False
        for klass in type(receiver).__mro__:
            if klass is self.target:
                return True
            if method_name in klass.__dict__:
                return False
        return False

    def dispatch(
        self,
        receiver: Any,
        method_name: str,
        args: tuple,
        kwargs: dict,
    ) -> Any:
        handle = self._mock_resolver(type(receiver))
        return handle.dispatch(
            method_name, args, kwargs, receiver=receiver
        )


def build_forwarder(
    shim: DispatchShim, method_name: str, is_async: bool
) -> Callable[..., Any]:
    if is_async:

        async def forward(receiver, *args, **kwargs):
            return shim.dispatch(
                receiver, method_name, args, kwargs
            )

    else:

        def forward(receiver, *args, **kwargs):
            return shim.dispatch(
                receiver, method_name, args, kwargs
            )

    forward.__name__ = method_name
    forward.__qualname__ = (
        f"{shim.target.__qualname__}.{method_name}"
    )
    setattr(forward, FORWARDER_ATTRIBUTE, True)
    return forward


def is_coroutine_method(klass: type, method_name: str) -> bool:
    value = inspect.getattr_static(klass, method_name, None)
    if isinstance(value, (staticmethod, classmethod)):
        value = value.__func__
    return inspect.iscoroutinefunction(value)
