from __future__ import annotations

from typing import Any

SHIM_ATTRIBUTE = "__anystub_shim__"
FORWARDER_ATTRIBUTE = "__anystub_forwarder__"
LOOKUP_HOOK_ATTRIBUTE = "__anystub_lookup_hook__"


def is_forwarding_entry(value: Any) -> bool:
    return getattr(value, FORWARDER_ATTRIBUTE, False) is True


def is_lookup_hook(value: Any) -> bool:
    return getattr(value, LOOKUP_HOOK_ATTRIBUTE, False) is True


def installed_shim(klass: type) -> Any:
    """Return the shim stored directly on ``klass``, ignoring ancestors."""
    return klass.__dict__.get(SHIM_ATTRIBUTE)
