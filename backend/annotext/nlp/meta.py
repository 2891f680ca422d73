from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from annotext.core.errors import AnnotextError


MetaKind = Literal[
    "bool",
    "str",
    "i8",
    "u8",
    "i16",
    "u16",
    "i32",
    "u32",
    "i64",
    "u64",
    "usize",
    "i128",
    "u128",
    "vec",
    "map",
]

INTEGER_RANGES: dict[str, tuple[int, int]] = {
    "i8": (-(2**7), 2**7 - 1),
    "u8": (0, 2**8 - 1),
    "i16": (-(2**15), 2**15 - 1),
    "u16": (0, 2**16 - 1),
    "i32": (-(2**31), 2**31 - 1),
    "u32": (0, 2**32 - 1),
    "i64": (-(2**63), 2**63 - 1),
    "u64": (0, 2**64 - 1),
    "usize": (0, 2**64 - 1),
    "i128": (-(2**127), 2**127 - 1),
    "u128": (0, 2**128 - 1),
}

META_KINDS: frozenset[str] = frozenset(INTEGER_RANGES) | {"bool", "str", "vec", "map"}


class MetaKindMismatchError(AnnotextError, TypeError):
    def __init__(self, expected: str, found: Meta):
        self.expected = expected
        self.found = found
        super().__init__(f"Expected {expected} value. Found [{found!r}]")


@dataclass(frozen=True)
class Meta:
    """A token annotation value tagged with its kind.

    Integer kinds carry a fixed width; `vec` holds a tuple of Meta and `map`
    holds `(key, Meta)` pairs sorted by key. Readers always name the kind
    they expect and get `MetaKindMismatchError` otherwise.
    """

    kind: MetaKind
    value: Any

    def __post_init__(self) -> None:
        if self.kind not in META_KINDS:
            raise ValueError(f"Unknown meta kind: {self.kind}")
        if self.kind == "bool":
            if not isinstance(self.value, bool):
                raise ValueError(f"bool meta requires a bool, got {self.value!r}")
        elif self.kind == "str":
            if not isinstance(self.value, str):
                raise ValueError(f"str meta requires a str, got {self.value!r}")
        elif self.kind == "vec":
            items = tuple(self.value)
            if not all(isinstance(item, Meta) for item in items):
                raise ValueError("vec meta items must be Meta values")
            object.__setattr__(self, "value", items)
        elif self.kind == "map":
            pairs = self.value.items() if isinstance(self.value, Mapping) else self.value
            entries = tuple(sorted(((str(key), item) for key, item in pairs), key=lambda pair: pair[0]))
            if not all(isinstance(item, Meta) for _, item in entries):
                raise ValueError("map meta values must be Meta values")
            object.__setattr__(self, "value", entries)
        else:
            lower, upper = INTEGER_RANGES[self.kind]
            if isinstance(self.value, bool) or not isinstance(self.value, int):
                raise ValueError(f"{self.kind} meta requires an int, got {self.value!r}")
            if not lower <= self.value <= upper:
                raise ValueError(f"{self.value} is out of range for {self.kind}")

    @classmethod
    def boolean(cls, value: bool) -> Meta:
        return cls("bool", value)

    @classmethod
    def string(cls, value: str) -> Meta:
        return cls("str", value)

    @classmethod
    def i64(cls, value: int) -> Meta:
        return cls("i64", value)

    @classmethod
    def u64(cls, value: int) -> Meta:
        return cls("u64", value)

    @classmethod
    def usize(cls, value: int) -> Meta:
        return cls("usize", value)

    @classmethod
    def vec(cls, items: Iterable[Meta]) -> Meta:
        return cls("vec", tuple(items))

    @classmethod
    def mapping(cls, entries: Mapping[str, Meta]) -> Meta:
        return cls("map", entries)

    def _expect(self, kind: str) -> Any:
        if self.kind != kind:
            raise MetaKindMismatchError(kind, self)
        return self.value

    def as_bool(self) -> bool:
        return self._expect("bool")

    def as_str(self) -> str:
        return self._expect("str")

    def as_int(self, kind: str) -> int:
        if kind not in INTEGER_RANGES:
            raise ValueError(f"{kind} is not an integer meta kind")
        return self._expect(kind)

    def as_i64(self) -> int:
        return self.as_int("i64")

    def as_u64(self) -> int:
        return self.as_int("u64")

    def as_usize(self) -> int:
        return self.as_int("usize")

    def as_vec(self) -> tuple[Meta, ...]:
        return self._expect("vec")

    def as_map(self) -> dict[str, Meta]:
        return dict(self._expect("map"))

    def to_json(self) -> dict[str, Any]:
        if self.kind == "vec":
            value: Any = [item.to_json() for item in self.value]
        elif self.kind == "map":
            value = {key: item.to_json() for key, item in self.value}
        else:
            value = self.value
        return {"kind": self.kind, "value": value}

    @classmethod
    def from_json(cls, payload: Mapping[str, Any]) -> Meta:
        try:
            kind = payload["kind"]
            value = payload["value"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed meta payload: {payload!r}") from exc
        if kind == "vec":
            if not isinstance(value, list):
                raise ValueError("vec meta payload requires a list")
            return cls("vec", tuple(cls.from_json(item) for item in value))
        if kind == "map":
            if not isinstance(value, Mapping):
                raise ValueError("map meta payload requires an object")
            return cls("map", {key: cls.from_json(item) for key, item in value.items()})
        return cls(kind, value)
