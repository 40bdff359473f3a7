from __future__ import annotations

import functools
from typing import Dict, Type

from anystub.types import StrategyName

from .base_strategy import (
    BaseRestorationStrategy,
    RestorationStrategy,
)
from .direct_overwrite import DirectOverwriteStrategy
from .lookup_hook import LookupHookStrategy, build_lookup_hook

STRATEGY_REGISTRY: Dict[
    StrategyName, Type[RestorationStrategy]
] = {
    StrategyName.LOOKUP_HOOK: LookupHookStrategy,
    StrategyName.DIRECT_OVERWRITE: DirectOverwriteStrategy,
}


@functools.lru_cache(maxsize=None)
def lookup_hook_supported() -> bool:
    """Check once per process that a late-installed lookup hook takes effect."""

    class _Probe:
        def value(self):
            return "original"

    def hook(receiver, name):
        if name == "value":
            return lambda: "shimmed"
        return object.__getattribute__(receiver, name)

    try:
        _Probe.__getattribute__ = hook
        shimmed = _Probe().value() == "shimmed"
        del _Probe.__getattribute__
        restored = _Probe().value() == "original"
    except (TypeError, AttributeError):
        return False
    return shimmed and restored


def get_strategy(
    name: StrategyName,
) -> RestorationStrategy:
    strategy_class: Type[RestorationStrategy] | None = (
        STRATEGY_REGISTRY.get(name)
    )
    if strategy_class is None:
        raise ValueError(f"Unknown restoration strategy: {name}")
    return strategy_class()


def select_strategy(
    name: StrategyName = StrategyName.AUTO,
) -> tuple[RestorationStrategy, bool]:
    """
    Resolve a configured strategy name to an instance.

    Returns:
        The strategy and whether it was chosen by capability detection.
    """
    name = StrategyName(name)
    if name is not StrategyName.AUTO:
        return get_strategy(name), False
    if lookup_hook_supported():
        return LookupHookStrategy(), True
    return DirectOverwriteStrategy(), True


__all__: list[str] = [
    "RestorationStrategy",
    "BaseRestorationStrategy",
    "STRATEGY_REGISTRY",
    "get_strategy",
    "select_strategy",
    "lookup_hook_supported",
    "build_lookup_hook",
    "LookupHookStrategy",
    "DirectOverwriteStrategy",
]
