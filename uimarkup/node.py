from __future__ import annotations

import types
import typing as t

import attr


@attr.s(frozen=True, slots=True)
class StringValue:
    value: str = attr.ib()


@attr.s(frozen=True, slots=True)
class IntegerValue:
    value: int = attr.ib()


@attr.s(frozen=True, slots=True)
class BooleanValue:
    value: bool = attr.ib()


Value = t.Union[StringValue, IntegerValue, BooleanValue]

_V = t.TypeVar("_V", StringValue, IntegerValue, BooleanValue)


def _freeze_attributes(attributes: t.Mapping[str, Value]) -> t.Mapping[str, Value]:
    return types.MappingProxyType(dict(attributes))


@attr.s(frozen=True, slots=True)
class Node:
    """One parsed element: id, type, typed attributes and ordered children."""

    id_: str = attr.ib()
    type_: str = attr.ib()
    attributes: t.Mapping[str, Value] = attr.ib(
        factory=dict, converter=_freeze_attributes
    )
    children: tuple[Node, ...] = attr.ib(default=(), converter=tuple)

    def _lookup(self, key: str, variant: type[_V]) -> t.Optional[_V]:
        value = self.attributes.get(key)
        if isinstance(value, variant):
            return value
        return None

    def get_string(self, key: str) -> t.Optional[str]:
        if (value := self._lookup(key, StringValue)) is not None:
            return value.value
        return None

    def get_integer(self, key: str) -> t.Optional[int]:
        if (value := self._lookup(key, IntegerValue)) is not None:
            return value.value
        return None

    def get_boolean(self, key: str) -> t.Optional[bool]:
        if (value := self._lookup(key, BooleanValue)) is not None:
            return value.value
        return None
