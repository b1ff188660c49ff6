"""Small value objects shared by claims and references."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NamespacedName:
    """Identity of a namespaced record, also used for cross-record links."""

    namespace: str = ""
    name: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.namespace and not self.name

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True)
class LegalEntity:
    name: str
    id: str
