from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from anystub.logging import get_logger
from anystub.types import InterceptionState

from .dispatch_shim import is_coroutine_method
from .exceptions import AlreadyRestored, NotSupported
from .visibility import mangle

if TYPE_CHECKING:
    from anystub.mocking import MockHandle

    from .any_instance_interceptor import AnyInstanceInterceptor
    from .original_method_record import OriginalMethodRecord

logger = get_logger("interception.method")


class AnyInstanceMethod:
    """One (class, method name) pair and its stub lifecycle."""

    def __init__(
        self,
        interceptor: AnyInstanceInterceptor,
        stubbee: type,
        method_name: str,
    ) -> None:
        self.stubbee: type = stubbee
        self.method_name: str = mangle(stubbee, method_name)
        self.state: InterceptionState = InterceptionState.UNSTUBBED
        self.record: Optional[OriginalMethodRecord] = None
        self._interceptor: AnyInstanceInterceptor = interceptor

    def __str__(self) -> str:
        return f"{self.stubbee.__qualname__}.any_instance.{self.method_name}"

    def __repr__(self) -> str:
        return f"<AnyInstanceMethod {self} {self.state.value}>"

    @property
    def mock(self) -> MockHandle:
        return self._interceptor.mock_for(self.stubbee)

    def matches(self, other: object) -> bool:
        return (
            isinstance(other, AnyInstanceMethod)
            and other.stubbee is self.stubbee
            and other.method_name == self.method_name
        )

    def stub(self) -> AnyInstanceMethod:
        if self.state is InterceptionState.STUBBED:
            return self

        interceptor = self._interceptor
        record = interceptor.registry.capture(
            self.stubbee, self.method_name
        )
        is_async = is_coroutine_method(
            self.stubbee, self.method_name
        )

        shim, created = interceptor.ensure_shim(self.stubbee)
        try:
            forwarder = shim.define_forwarding_entry(
                self.method_name, is_async
            )
            interceptor.strategy.define_entry(
                shim, self.method_name, forwarder
            )
        except (TypeError, AttributeError) as error:
            shim.remove_forwarding_entry(self.method_name)
            if created:
                interceptor.release_shim(self.stubbee)
            raise NotSupported(
                self.stubbee,
                f"refused definition of {self.method_name!r}: {error}",
            ) from error

        self.record = record
        self.state = InterceptionState.STUBBED
        self.mock.mirror_visibility(
            self.method_name, record.visibility
        )
        logger.method_stubbed(
            str(self),
            record.visibility.value,
            record.existed_before,
        )
        return self

    def unstub(self, strict: bool = False) -> bool:
        """
        Put the original definition back.

        Returns False without touching the class when there is nothing
        to restore; with ``strict`` that case raises AlreadyRestored.
        """
        if self.state is not InterceptionState.STUBBED:
            if strict:
                raise AlreadyRestored(str(self))
            return False

        shim = self._interceptor.shim_for(self.stubbee)
        try:
            if shim is not None:
                shim.remove_forwarding_entry(self.method_name)
            self._interceptor.registry.restore(self.record)
        finally:
            self.state = InterceptionState.RESTORED
        return True

    def reset_mock(self) -> None:
        self.mock.reset()
