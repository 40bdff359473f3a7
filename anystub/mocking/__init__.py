from .exceptions import UnexpectedInvocation
from .invocation import Invocation
from .mock_handle import CannedResponse, MockHandle
from .mock_registry import MockRegistry

__all__: list[str] = [
    "CannedResponse",
    "Invocation",
    "MockHandle",
    "MockRegistry",
    "UnexpectedInvocation",
]
