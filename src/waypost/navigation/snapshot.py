"""Collection snapshots — the immutable result of a parent's resolve step.

A snapshot is produced once per parent-route activation and shared
read-only with every child that resolves against it.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, slots=True, eq=False)
class Item:
    """A keyed record. Equality and hashing use the key only.

    Sources may yield plain mappings or objects instead; ``Item`` is the
    explicit form when a source wants to attach arbitrary fields::

        Item("tesla", {"top_speed": 250})
    """

    key: str
    fields: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __getitem__(self, name: str) -> Any:
        return self.fields[name]


def key_of(item: Any, key_field: str) -> Any:
    """Read an item's identifying key.

    ``Item`` exposes ``key``; mappings are indexed by *key_field*; any
    other object is read with ``getattr``. Returns ``None`` when the
    item has no such key.
    """
    if isinstance(item, Item):
        return item.key
    if isinstance(item, Mapping):
        return item.get(key_field)
    return getattr(item, key_field, None)


def freeze_item(item: Any) -> Any:
    """Detach *item* from its source.

    ``Item`` is already immutable. Mappings become read-only copies.
    Anything else is shallow-copied, so later edits by the source do not
    reach the snapshot.
    """
    if isinstance(item, Item):
        return item
    if isinstance(item, Mapping):
        return MappingProxyType(dict(item))
    return copy.copy(item)


@dataclass(frozen=True, slots=True)
class CollectionSnapshot:
    """An ordered, immutable sequence of items.

    Items are frozen on construction and their keys captured, so neither
    the source nor a child holding a resolved item can change what the
    snapshot matches::

        snapshot = CollectionSnapshot.of([{"name": "tesla"}, {"name": "arrinera"}])
        snapshot.find("tesla")  # {"name": "tesla"} (read-only)
        snapshot.find("Tesla")  # None — exact, case-sensitive match
    """

    items: tuple[Any, ...] = ()
    key_field: str = "name"
    _keys: tuple[Any, ...] = field(init=False, repr=False, compare=False, default=())

    def __post_init__(self) -> None:
        frozen = tuple(freeze_item(item) for item in self.items)
        object.__setattr__(self, "items", frozen)
        object.__setattr__(self, "_keys", tuple(key_of(item, self.key_field) for item in frozen))

    @classmethod
    def of(cls, items: Iterable[Any], *, key_field: str = "name") -> CollectionSnapshot:
        return cls(items=tuple(items), key_field=key_field)

    def find(self, key: str) -> Any | None:
        """Return the first item whose key equals *key*, or ``None``.

        Linear scan in sequence order over the keys captured at
        construction. Keys are compared with ``==`` and never normalized,
        so a non-string key never matches a URL segment.
        """
        for item_key, item in zip(self._keys, self.items, strict=True):
            if item_key == key:
                return item
        return None

    def keys(self) -> list[Any]:
        return list(self._keys)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.find(key) is not None
