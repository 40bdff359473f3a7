from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable

from anystub.types import StrategyName

from .base_strategy import BaseRestorationStrategy

if TYPE_CHECKING:
    from ..dispatch_shim import DispatchShim


class DirectOverwriteStrategy(BaseRestorationStrategy):
    """
    Write forwarding entries straight into the class's own namespace.

    Used where a lookup hook cannot be installed. Restoration puts the
    captured definition back with a single assignment, or deletes the
    forwarder when the class never defined the name itself.
    """

    @property
    def name(self) -> StrategyName:
        return StrategyName.DIRECT_OVERWRITE

    def define_entry(
        self,
        shim: DispatchShim,
        method_name: str,
        forwarder: Callable[..., Any],
    ) -> None:
        setattr(shim.target, method_name, forwarder)
