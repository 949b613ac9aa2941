# src/recordfsm/contracts/value.py
"""Field values extracted by the template engine.

A field holds either one string (Single) or an ordered list of strings (List).
The wire form is untagged: a bare string is a Single, a list of strings is a
List. Values are immutable; a record changes a field's shape by replacing the
stored value inside its merge operations.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeAlias

from recordfsm.contracts.errors import WireFormatError


@dataclass(frozen=True, slots=True)
class Single:
    """One extracted string."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True, slots=True)
class List:
    """Ordered strings extracted for a field that matched more than once.

    Items keep insertion order and may repeat.
    """

    items: tuple[str, ...]

    def __init__(self, items: Iterable[str] = ()) -> None:
        object.__setattr__(self, "items", tuple(items))

    def __str__(self) -> str:
        return json.dumps(list(self.items), ensure_ascii=False)

    def __len__(self) -> int:
        return len(self.items)

    def extended(self, more: Iterable[str]) -> "List":
        """Return a new List with ``more`` appended after the current items."""
        return List((*self.items, *more))


Value: TypeAlias = Single | List

WireValue: TypeAlias = str | list[str]


def value_to_wire(value: Value) -> WireValue:
    """Render a value in its untagged wire shape."""
    if isinstance(value, Single):
        return value.text
    return list(value.items)


def value_from_wire(obj: Any, *, path: str = "") -> Value:
    """Read an untagged wire literal back into a Value.

    Args:
        obj: A string or a list of strings
        path: Location of the literal, used in error messages

    Raises:
        WireFormatError: If the literal is neither shape
    """
    if isinstance(obj, str):
        return Single(obj)
    if isinstance(obj, list):
        for index, item in enumerate(obj):
            if not isinstance(item, str):
                raise WireFormatError(
                    f"list items must be strings, got {type(item).__name__}",
                    path=f"{path}[{index}]",
                )
        return List(obj)
    raise WireFormatError(
        f"expected a string or a list of strings, got {type(obj).__name__}",
        path=path,
    )
