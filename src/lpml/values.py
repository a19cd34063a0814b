"""Value types for LPML."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union


class _Null:
    """Singleton for ``null`` / ``~`` / ``undefined``."""

    _instance: "_Null | None" = None

    def __new__(cls) -> "_Null":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return "null"

    def __copy__(self) -> "_Null":
        return self

    def __deepcopy__(self, memo: dict) -> "_Null":
        return self


Null = _Null()
VNull = _Null


@dataclass(slots=True)
class VBool:
    value: bool

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass(slots=True)
class VInt:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(slots=True)
class VFloat:
    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(slots=True)
class VString:
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(slots=True)
class VList:
    items: list["Value"] = field(default_factory=list)

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]


@dataclass(slots=True)
class VMapping:
    entries: dict[str, "Value"] = field(default_factory=dict)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.entries.items()) + "}"

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, key: str) -> "Value":
        return self.entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self.entries


Value = Union[VBool, VInt, VFloat, VString, VList, VMapping, _Null]


# ---------------------------------------------------------------------------
# Conversion to / from plain Python
# ---------------------------------------------------------------------------

def to_python(value: Value) -> Any:
    """Unwrap a Value tree into ``None``/``bool``/``int``/``float``/``str``/``list``/``dict``."""
    if isinstance(value, _Null):
        return None
    if isinstance(value, VList):
        return [to_python(v) for v in value.items]
    if isinstance(value, VMapping):
        return {k: to_python(v) for k, v in value.entries.items()}
    return value.value


def from_python(obj: Any) -> Value:
    """Wrap plain Python data into the matching Value variant."""
    if obj is None:
        return Null
    # bool before int: bool is an int subclass
    if isinstance(obj, bool):
        return VBool(obj)
    if isinstance(obj, int):
        return VInt(obj)
    if isinstance(obj, float):
        return VFloat(obj)
    if isinstance(obj, str):
        return VString(obj)
    if isinstance(obj, dict):
        return VMapping({str(k): from_python(v) for k, v in obj.items()})
    if isinstance(obj, (list, tuple)):
        return VList([from_python(v) for v in obj])
    raise TypeError(f"cannot convert {type(obj).__name__} to an LPML value")
