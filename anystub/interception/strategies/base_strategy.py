from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Protocol

from anystub.types import StrategyName

from ..markers import SHIM_ATTRIBUTE, installed_shim

if TYPE_CHECKING:
    from ..dispatch_shim import DispatchShim


class RestorationStrategy(Protocol):

    @property
    def name(self) -> StrategyName: ...

    def install_shim(self, shim: DispatchShim) -> None: ...

    def remove_shim(self, shim: DispatchShim) -> None: ...

    def define_entry(
        self,
        shim: DispatchShim,
        method_name: str,
        forwarder: Callable[..., Any],
    ) -> None: ...


class BaseRestorationStrategy:

    def install_shim(self, shim: DispatchShim) -> None:
        setattr(shim.target, SHIM_ATTRIBUTE, shim)

    def remove_shim(self, shim: DispatchShim) -> None:
        if installed_shim(shim.target) is shim:
            delattr(shim.target, SHIM_ATTRIBUTE)
