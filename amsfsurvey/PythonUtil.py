'''
See COPYRIGHT.md for copyright information.
'''
from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any, Generic, TypeVar

OptionalString = TypeVar("OptionalString", str, None)


def strTruncate(value: Any, length: int) -> str:
    _s = str(value).strip()
    if len(_s) <= length:
        return _s
    return _s[0:length-3] + "..."


def normalizeSpace(s: OptionalString) -> OptionalString:
    if isinstance(s, str):
        return " ".join(s.split())
    return s


KT = TypeVar('KT')
VT = TypeVar('VT')


class FrozenDict(Generic[KT, VT], Mapping[KT, VT]):
    def __init__(self, data: Mapping[KT, VT] | None = None) -> None:
        self._dict: Mapping[KT, VT] = MappingProxyType(dict(data) if data is not None else dict())
        self._hash: int | None = None

    def __getitem__(self, key: KT) -> VT:
        return self._dict[key]

    def __iter__(self) -> Iterator[KT]:
        return iter(self._dict)

    def __len__(self) -> int:
        return len(self._dict)

    def __repr__(self) -> str:
        if not self:
            return f'{self.__class__.__name__}()'
        return f"{self.__class__.__name__}({dict(self._dict)})"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FrozenDict):
            return self._dict == other._dict
        if isinstance(other, Mapping):
            return self._dict == other
        return NotImplemented

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(tuple(sorted(self._dict.items())))
        return self._hash
