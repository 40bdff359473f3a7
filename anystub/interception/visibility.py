"""
Visibility and owner probing.

Visibility is read off a method table built from ``dir(klass)``, so it
covers inherited methods the same way the class's instances see them.
Attributes are fetched with ``inspect.getattr_static`` to avoid running
descriptors while probing.
"""

from __future__ import annotations

import inspect
import re
from typing import Any, Optional

from anystub.types import Visibility

_SPECIAL_NAME = re.compile(r"^__\w+__$")


def mangle(klass: type, method_name: str) -> str:
    """Apply private name mangling the way the compiler does inside ``klass``."""
    if method_name.startswith("__") and not method_name.endswith(
        "__"
    ):
        stripped = klass.__name__.lstrip("_")
        if stripped:
            return f"_{stripped}{method_name}"
    return method_name


def is_method_like(value: Any) -> bool:
    if isinstance(value, type):
        return False
    if isinstance(value, (staticmethod, classmethod)):
        return True
    return inspect.isroutine(value) or callable(value)


def _private_prefixes(klass: type) -> tuple[str, ...]:
    prefixes = []
    for base in klass.__mro__:
        stripped = base.__name__.lstrip("_")
        if stripped:
            prefixes.append(f"_{stripped}__")
    return tuple(prefixes)


def classify_name(klass: type, method_name: str) -> Visibility:
    if _SPECIAL_NAME.match(method_name):
        return Visibility.PUBLIC
    for prefix in _private_prefixes(klass):
        if method_name.startswith(prefix) and len(
            method_name
        ) > len(prefix):
            return Visibility.PRIVATE
    if method_name.startswith("_"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


def method_table(klass: type) -> dict[str, Visibility]:
    """Snapshot every method reachable on instances of ``klass``."""
    table: dict[str, Visibility] = {}
    for name in dir(klass):
        try:
            value = inspect.getattr_static(klass, name)
        except AttributeError:
            continue
        if is_method_like(value):
            table[name] = classify_name(klass, name)
    return table


def method_names(
    klass: type, visibility: Visibility
) -> set[str]:
    return {
        name
        for name, found in method_table(klass).items()
        if found == visibility
    }


def public_method_names(klass: type) -> set[str]:
    return method_names(klass, Visibility.PUBLIC)


def protected_method_names(klass: type) -> set[str]:
    return method_names(klass, Visibility.PROTECTED)


def private_method_names(klass: type) -> set[str]:
    return method_names(klass, Visibility.PRIVATE)


def determine_visibility(
    klass: type,
    method_name: str,
    table: Optional[dict[str, Visibility]] = None,
) -> Visibility:
    """
    Look a method name up in the class's method table.

    Args:
        klass: Class whose instances are being inspected
        method_name: Name as written in source; ``__name`` is mangled
        table: Method table to probe instead of a fresh snapshot

    Returns:
        The visibility recorded for the name, or
        ``Visibility.UNDEFINED`` when the table has no such method.
    """
    name = mangle(klass, method_name)
    if table is None:
        table = method_table(klass)
    return table.get(name, Visibility.UNDEFINED)


def owner_of(klass: type, method_name: str) -> Optional[type]:
    """Return the class in ``klass.__mro__`` that defines the name directly."""
    name = mangle(klass, method_name)
    for base in klass.__mro__:
        if name in base.__dict__:
            return base
    return None


def defines_directly(klass: type, method_name: str) -> bool:
    return mangle(klass, method_name) in klass.__dict__
