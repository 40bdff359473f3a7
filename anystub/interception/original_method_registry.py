from __future__ import annotations

from anystub.logging import get_logger
from anystub.types import Visibility

from .exceptions import VisibilityMismatch
from .markers import is_forwarding_entry
from .original_method_record import OriginalMethodRecord
from .visibility import determine_visibility, mangle, method_table

logger = get_logger("interception.registry")


class OriginalMethodRegistry:

    def __init__(self, verify_visibility: bool = True) -> None:
        self.verify_visibility: bool = verify_visibility

    def capture(
        self, klass: type, method_name: str
    ) -> OriginalMethodRecord:
        name = mangle(klass, method_name)
        table = method_table(klass)
        visibility = determine_visibility(klass, name, table)

        if name in klass.__dict__:
            return OriginalMethodRecord(
                owner=klass,
                method_name=name,
                implementation=klass.__dict__[name],
                visibility=visibility,
                existed_before=True,
            )

        # Inherited or undefined: restoring means removing our entry.
        return OriginalMethodRecord(
            owner=klass,
            method_name=name,
            implementation=None,
            visibility=visibility,
            existed_before=False,
        )

    def restore(self, record: OriginalMethodRecord) -> None:
        owner = record.owner
        name = record.method_name
        current = owner.__dict__.get(name)

        if record.existed_before:
            if current is not record.implementation:
                # One assignment replaces the forwarder in place.
                setattr(owner, name, record.implementation)
            self._verify(record)
        elif name in owner.__dict__ and is_forwarding_entry(
            current
        ):
            delattr(owner, name)

        logger.method_restored(record.label)

    def _verify(self, record: OriginalMethodRecord) -> None:
        if not self.verify_visibility:
            return
        actual: Visibility = determine_visibility(
            record.owner, record.method_name
        )
        if actual != record.visibility:
            raise VisibilityMismatch(
                record.owner,
                record.method_name,
                record.visibility,
                actual,
            )
