from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from anystub.types import Visibility


@dataclass(frozen=True)
class OriginalMethodRecord:
    owner: type
    method_name: str
    implementation: Any
    visibility: Visibility
    existed_before: bool

    @property
    def label(self) -> str:
        return f"{self.owner.__qualname__}.any_instance.{self.method_name}"
