from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from anystub.types import StubTarget, Visibility

from .exceptions import UnexpectedInvocation
from .invocation import Invocation

Raisable = Union[BaseException, type]


@dataclass
class CannedResponse:
    returns: Any = None
    raises: Optional[Raisable] = None
    side_effect: Optional[Callable[..., Any]] = None

    def produce(self, invocation: Invocation) -> Any:
        if self.raises is not None:
            raise self.raises
        if self.side_effect is not None:
            return self.side_effect(
                *invocation.args, **invocation.kwargs
            )
        return self.returns


class MockHandle:
    """
    Produces results for calls routed from a stub target.

    Responses are configured per method name with ``on()``; every
    dispatched call is recorded in ``invocations``.
    """

    def __init__(self, target: StubTarget) -> None:
        self.target: StubTarget = target
        self.invocations: list[Invocation] = []
        self._responses: dict[str, CannedResponse] = {}
        self._visibilities: dict[str, Visibility] = {}

    def __repr__(self) -> str:
        return f"<MockHandle {self.name}>"

    @property
    def name(self) -> str:
        return str(self.target)

    def on(
        self,
        method_name: str,
        returns: Any = None,
        raises: Optional[Raisable] = None,
        side_effect: Optional[Callable[..., Any]] = None,
    ) -> MockHandle:
        self._responses[method_name] = CannedResponse(
            returns=returns,
            raises=raises,
            side_effect=side_effect,
        )
        return self

    def dispatch(
        self,
        method_name: str,
        args: tuple,
        kwargs: Optional[dict[str, Any]] = None,
        receiver: Any = None,
    ) -> Any:
        invocation = Invocation(
            method_name=method_name,
            args=tuple(args),
            kwargs=dict(kwargs or {}),
            receiver=receiver,
        )
        self.invocations.append(invocation)

        response = self._responses.get(method_name)
        if response is None:
            raise UnexpectedInvocation(self.name, invocation)
        return response.produce(invocation)

    def invocations_of(self, method_name: str) -> list[Invocation]:
        return [
            invocation
            for invocation in self.invocations
            if invocation.method_name == method_name
        ]

    # =========================================================================
    # VISIBILITY MIRRORING
    # =========================================================================

    def mirror_visibility(
        self, method_name: str, visibility: Visibility
    ) -> None:
        self._visibilities[method_name] = visibility

    def visibility_of(self, method_name: str) -> Visibility:
        return self._visibilities.get(
            method_name, Visibility.UNDEFINED
        )

    def responds_to(
        self, method_name: str, include_all: bool = False
    ) -> bool:
        if (
            method_name not in self._responses
            and method_name not in self._visibilities
        ):
            return False
        if include_all:
            return True
        return self.visibility_of(method_name) in (
            Visibility.PUBLIC,
            Visibility.UNDEFINED,
        )

    def reset(self) -> None:
        self.invocations.clear()
        self._responses.clear()
        self._visibilities.clear()
