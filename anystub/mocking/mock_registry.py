from __future__ import annotations

from typing import Callable

from anystub.types import StubTarget

from .mock_handle import MockHandle

HandleFactory = Callable[[StubTarget], MockHandle]


class MockRegistry:

    def __init__(
        self, handle_factory: HandleFactory = MockHandle
    ) -> None:
        self._handle_factory: HandleFactory = handle_factory
        self._handles: dict[tuple[str, int], MockHandle] = {}

    def mock_for(self, target: StubTarget) -> MockHandle:
        handle = self._handles.get(target.key)
        if handle is None:
            handle = self._handle_factory(target)
            self._handles[target.key] = handle
        return handle

    def has_mock(self, target: StubTarget) -> bool:
        return target.key in self._handles

    def handles(self) -> list[MockHandle]:
        return list(self._handles.values())

    def discard(self, target: StubTarget) -> None:
        handle = self._handles.pop(target.key, None)
        if handle is not None:
            handle.reset()

    def reset_all(self) -> None:
        for handle in self._handles.values():
            handle.reset()
        self._handles.clear()
