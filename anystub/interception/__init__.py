from .any_instance_interceptor import AnyInstanceInterceptor
from .any_instance_method import AnyInstanceMethod
from .dispatch_shim import DispatchShim
from .exceptions import (
    AlreadyRestored,
    InterceptionError,
    NotSupported,
    RestorationFailed,
    VisibilityMismatch,
)
from .original_method_record import OriginalMethodRecord
from .original_method_registry import OriginalMethodRegistry
from .visibility import determine_visibility

__all__: list[str] = [
    "AnyInstanceInterceptor",
    "AnyInstanceMethod",
    "DispatchShim",
    "OriginalMethodRecord",
    "OriginalMethodRegistry",
    "determine_visibility",
    "InterceptionError",
    "NotSupported",
    "AlreadyRestored",
    "VisibilityMismatch",
    "RestorationFailed",
]
