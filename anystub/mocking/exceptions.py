from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .invocation import Invocation


class UnexpectedInvocation(AssertionError):

    def __init__(
        self, mock_name: str, invocation: Invocation
    ) -> None:
        self.mock_name: str = mock_name
        self.invocation: Invocation = invocation
        super().__init__(
            f"unexpected invocation: {mock_name}.{invocation}"
        )
