"""
Any-instance interception.

Stubs a method for every current and future instance of a class by
placing a DispatchShim in front of the class, and restores the class
exactly as it was when the stub is released.

Usage:
    interceptor = AnyInstanceInterceptor()
    interceptor.stub(Account, "balance")
    interceptor.mock_for(Account).on("balance", returns=42)

    Account().balance()  # -> 42

    interceptor.unstub(Account, "balance")
    Account().balance()  # -> original result
"""

from __future__ import annotations

from typing import Optional

from anystub.logging import get_logger
from anystub.mocking import MockHandle, MockRegistry
from anystub.types import (
    AnyInstance,
    InterceptionState,
    InterceptorConfig,
    Visibility,
)

from .any_instance_method import AnyInstanceMethod
from .dispatch_shim import DispatchShim
from .exceptions import NotSupported, RestorationFailed
from .markers import installed_shim
from .original_method_registry import OriginalMethodRegistry
from .strategies import RestorationStrategy, select_strategy
from .visibility import determine_visibility, mangle

logger = get_logger("interception")

# Type flags from CPython's object.h
_TPFLAGS_IMMUTABLETYPE = 1 << 8
_TPFLAGS_HEAPTYPE = 1 << 9


class AnyInstanceInterceptor:

    def __init__(
        self,
        mock_registry: Optional[MockRegistry] = None,
        config: Optional[InterceptorConfig] = None,
        strategy: Optional[RestorationStrategy] = None,
    ) -> None:
        self.config: InterceptorConfig = (
            config or InterceptorConfig()
        )
        self.mock_registry: MockRegistry = (
            mock_registry or MockRegistry()
        )
        self.registry: OriginalMethodRegistry = (
            OriginalMethodRegistry(
                verify_visibility=self.config.verify_visibility
            )
        )

        detected = False
        if strategy is None:
            strategy, detected = select_strategy(
                self.config.strategy
            )
        self.strategy: RestorationStrategy = strategy
        logger.strategy_selected(
            self.strategy.name.value, detected
        )

        self._methods: dict[tuple[int, str], AnyInstanceMethod] = {}
        self._restoration_stack: list[AnyInstanceMethod] = []
        self._shims: dict[int, DispatchShim] = {}

    # =========================================================================
    # STUB / UNSTUB
    # =========================================================================

    def stub(
        self, klass: type, method_name: str
    ) -> AnyInstanceMethod:
        self._ensure_hostable(klass, method_name)
        name = mangle(klass, method_name)
        key = (id(klass), name)

        existing = self._methods.get(key)
        if (
            existing is not None
            and existing.state is InterceptionState.STUBBED
        ):
            return existing

        method = AnyInstanceMethod(self, klass, name).stub()
        self._methods[key] = method
        self._restoration_stack.append(method)
        return method

    def unstub(self, klass: type, method_name: str) -> bool:
        name = mangle(klass, method_name)
        method = self._methods.get((id(klass), name))
        if method is None:
            logger.unstub_ignored(
                f"{klass.__qualname__}.any_instance.{name}",
                "not stubbed",
            )
            return False
        self._release(method)
        return True

    def unstub_all(self) -> None:
        """
        Restore every stubbed method, most recently stubbed first.

        A failing restoration is logged and collected; the remaining
        methods are still restored before RestorationFailed is raised.
        """
        errors: list[BaseException] = []
        while self._restoration_stack:
            method = self._restoration_stack[-1]
            try:
                self._release(method)
            except Exception as error:
                logger.restore_failed(str(method), error)
                errors.append(error)
        if errors:
            raise RestorationFailed(errors)

    def reset(self) -> None:
        try:
            self.unstub_all()
        finally:
            self.mock_registry.reset_all()

    def _release(self, method: AnyInstanceMethod) -> None:
        try:
            method.unstub()
        finally:
            self._restoration_stack.remove(method)
            self._methods.pop(
                (id(method.stubbee), method.method_name), None
            )
            if not self.stubbed_methods(method.stubbee):
                self.release_shim(method.stubbee)

    # =========================================================================
    # QUERIES
    # =========================================================================

    def mock_for(self, klass: type) -> MockHandle:
        return self.mock_registry.mock_for(AnyInstance(klass))

    def determine_visibility(
        self, klass: type, method_name: str
    ) -> Visibility:
        return determine_visibility(klass, method_name)

    def is_stubbed(self, klass: type, method_name: str) -> bool:
        method = self._methods.get(
            (id(klass), mangle(klass, method_name))
        )
        return (
            method is not None
            and method.state is InterceptionState.STUBBED
        )

    def stubbed_methods(
        self, klass: Optional[type] = None
    ) -> list[AnyInstanceMethod]:
        return [
            method
            for method in self._restoration_stack
            if klass is None or method.stubbee is klass
        ]

    def shim_for(self, klass: type) -> Optional[DispatchShim]:
        return self._shims.get(id(klass))

    # =========================================================================
    # SHIM LIFECYCLE
    # =========================================================================

    def ensure_shim(
        self, klass: type
    ) -> tuple[DispatchShim, bool]:
        shim = self._shims.get(id(klass))
        if shim is not None:
            return shim, False

        shim = DispatchShim(
            klass, owner=self, mock_resolver=self.mock_for
        )
        try:
            self.strategy.install_shim(shim)
        except (TypeError, AttributeError) as error:
            raise NotSupported(
                klass, f"refused structural modification: {error}"
            ) from error

        self._shims[id(klass)] = shim
        logger.shim_installed(
            klass.__qualname__, self.strategy.name.value
        )
        return shim, True

    def release_shim(self, klass: type) -> None:
        shim = self._shims.pop(id(klass), None)
        if shim is None:
            return
        self.strategy.remove_shim(shim)
        logger.shim_removed(klass.__qualname__)

    def _ensure_hostable(
        self, klass: type, method_name: str
    ) -> None:
        if not isinstance(klass, type):
            raise NotSupported(klass, "not a class")

        flags = klass.__flags__
        if not flags & _TPFLAGS_HEAPTYPE:
            raise NotSupported(
                klass, "built-in and extension types are sealed"
            )
        if flags & _TPFLAGS_IMMUTABLETYPE:
            raise NotSupported(klass, "type is immutable")

        if method_name in self.config.protected_names:
            raise NotSupported(
                klass, f"{method_name} is reserved for the shim"
            )

        existing = installed_shim(klass)
        if existing is not None and existing.owner is not self:
            raise NotSupported(
                klass,
                "already hosts a dispatch shim owned by another interceptor",
            )
