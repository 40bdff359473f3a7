from __future__ import annotations

from types import MethodType
from typing import TYPE_CHECKING, Any, Callable

from anystub.types import StrategyName

from ..markers import LOOKUP_HOOK_ATTRIBUTE, is_lookup_hook
from .base_strategy import BaseRestorationStrategy

if TYPE_CHECKING:
    from ..dispatch_shim import DispatchShim


def build_lookup_hook(
    shim: DispatchShim, previous: Any
) -> Callable[[Any, str], Any]:
    target = shim.target

    def __getattribute__(receiver, name):
        if shim.intercepts(receiver, name):
            return MethodType(shim.entry(name), receiver)
        if previous is not None:
            return previous(receiver, name)
        return super(target, receiver).__getattribute__(name)

    __getattribute__.__qualname__ = (
        f"{target.__qualname__}.__getattribute__"
    )
    setattr(__getattribute__, LOOKUP_HOOK_ATTRIBUTE, True)
    return __getattribute__


class LookupHookStrategy(BaseRestorationStrategy):
    """
    Route instance lookups through the shim before the class's own lookup.

    The hook consults the shim ahead of any ``__getattribute__`` the class
    already defines, so a custom lookup cannot hide a stubbed name from
    its instances. Forwarding entries are also written into the class's
    namespace: ``super()`` and class-qualified calls read the namespace
    directly and never pass through the hook.
    """

    @property
    def name(self) -> StrategyName:
        return StrategyName.LOOKUP_HOOK

    def install_shim(self, shim: DispatchShim) -> None:
        target = shim.target
        shim.previous_lookup = target.__dict__.get(
            "__getattribute__"
        )
        super().install_shim(shim)
        try:
            setattr(
                target,
                "__getattribute__",
                build_lookup_hook(shim, shim.previous_lookup),
            )
        except (TypeError, AttributeError):
            super().remove_shim(shim)
            raise

    def remove_shim(self, shim: DispatchShim) -> None:
        target = shim.target
        current = target.__dict__.get("__getattribute__")
        if is_lookup_hook(current):
            if shim.previous_lookup is None:
                delattr(target, "__getattribute__")
            else:
                setattr(
                    target,
                    "__getattribute__",
                    shim.previous_lookup,
                )
        super().remove_shim(shim)

    def define_entry(
        self,
        shim: DispatchShim,
        method_name: str,
        forwarder: Callable[..., Any],
    ) -> None:
        setattr(shim.target, method_name, forwarder)
