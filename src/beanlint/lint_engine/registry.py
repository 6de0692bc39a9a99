"""Name-keyed registries for pluggable parts of the lint engine.

One `Registry` holds the lint classes (keyed by lint id, in registration
order) and another holds the appendix extractor factories (keyed by a
case-insensitive strategy name). Both reject duplicate keys.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Generic, List, Optional, Type, TypeVar

if TYPE_CHECKING:
    from .lint import Lint

T = TypeVar("T")


class Registry(Generic[T]):
    def __init__(self, kind: str, *, normalize: Optional[Callable[[str], str]] = None):
        self.kind = kind
        self._normalize = normalize or (lambda name: name)
        self._items: Dict[str, T] = {}

    def register(self, name: str, item: T) -> T:
        key = self._normalize(name or "")
        if not key:
            raise ValueError(f"{self.kind} registered without a name")
        if key in self._items:
            raise ValueError(f"Duplicate {self.kind} registered: {key}")
        self._items[key] = item
        return item

    def get(self, name: str) -> T:
        key = self._normalize(name or "")
        if key not in self._items:
            known = ", ".join(sorted(self._items))
            raise ValueError(f"Unknown {self.kind} '{name}' (expected one of: {known}).")
        return self._items[key]

    def ids(self) -> List[str]:
        return list(self._items)

    def values(self) -> List[T]:
        return list(self._items.values())


registry: Registry[Type["Lint"]] = Registry("lint")


def register_lint(lint_cls: Type["Lint"]) -> Type["Lint"]:
    return registry.register(getattr(lint_cls, "lint_id", ""), lint_cls)


def create_lints() -> List["Lint"]:
    return [lint_cls() for lint_cls in registry.values()]
