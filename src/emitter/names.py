"""Identifier helpers for generated code."""

import re
from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from document.models import Element

_WORD_SPLIT = re.compile(r"[^0-9A-Za-z]+")
_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def to_pascal_case(text: str, fallback: str = "Component") -> str:
    """
    Convert free text to a PascalCase identifier.

    Examples:
        >>> to_pascal_case("hero button copy")
        'HeroButtonCopy'
        >>> to_pascal_case("2 columns")
        'C2Columns'
    """
    words = [w for w in _WORD_SPLIT.split(text) if w]
    name = "".join(w[:1].upper() + w[1:] for w in words) or fallback
    return f"C{name}" if name[0].isdigit() else name


def camel_to_kebab(text: str) -> str:
    """``backgroundColor`` -> ``background-color``"""
    return _CAMEL_BOUNDARY.sub(r"\1-\2", text).lower()


def to_kebab_case(text: str) -> str:
    """``Hero Button`` -> ``hero-button``"""
    return camel_to_kebab(to_pascal_case(text))


class NameAllocator:
    """
    Deterministic element id -> component identifier table.

    Names are derived from element names in depth-first tree order;
    collisions get a numeric suffix (``Button``, ``Button2``, ...). The
    same allocator is shared by every file of one export so references
    and paths line up.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, str] = {}
        self._used: dict[str, int] = {}

    @classmethod
    def from_elements(cls, roots: Iterable["Element"]) -> "NameAllocator":
        allocator = cls()
        for root in roots:
            for element in root.walk():
                allocator.allocate(element)
        return allocator

    def allocate(self, element: "Element") -> str:
        if element.id in self._by_id:
            return self._by_id[element.id]

        base = to_pascal_case(element.name, fallback=to_pascal_case(element.type))
        count = self._used.get(base, 0) + 1
        self._used[base] = count
        name = base if count == 1 else f"{base}{count}"

        # A suffixed name may itself collide with a literal name seen later
        while name in self._used and name != base:
            count += 1
            self._used[base] = count
            name = f"{base}{count}"
        self._used.setdefault(name, 1)

        self._by_id[element.id] = name
        return name

    def name_for(self, element: "Element") -> str:
        return self._by_id.get(element.id) or self.allocate(element)

    def __contains__(self, element_id: str) -> bool:
        return element_id in self._by_id
