"""Handle-based storage of bodies with their collision groups."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from unisonphys.bodies import BodyHandle, CollisionGroups

B = TypeVar("B")


@dataclass
class _Entry(Generic[B]):
    body: B
    groups: CollisionGroups


class BodyRegistry(Generic[B]):
    """Bodies keyed by handles that are never reused after removal.

    Iteration follows the order in which bodies were added.
    """

    def __init__(self) -> None:
        self._entries: dict[int, _Entry[B]] = {}
        self._next_handle = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, BodyHandle) and self.contains(handle)

    def add(self, body: B, groups: CollisionGroups | None = None) -> BodyHandle:
        """Store a body and return its new handle."""
        handle = BodyHandle(self._next_handle)
        self._next_handle += 1
        self._entries[handle.index] = _Entry(
            body, groups if groups is not None else CollisionGroups()
        )
        return handle

    def remove(self, handle: BodyHandle) -> bool:
        """Remove a body; False when the handle is unknown."""
        return self._entries.pop(handle.index, None) is not None

    def contains(self, handle: BodyHandle) -> bool:
        return handle.index in self._entries

    def get(self, handle: BodyHandle) -> B | None:
        entry = self._entries.get(handle.index)
        return entry.body if entry is not None else None

    def groups_of(self, handle: BodyHandle) -> CollisionGroups | None:
        entry = self._entries.get(handle.index)
        return entry.groups if entry is not None else None

    def set_groups(self, handle: BodyHandle, groups: CollisionGroups) -> bool:
        """Replace a body's collision groups; False when the handle is unknown."""
        entry = self._entries.get(handle.index)
        if entry is None:
            return False
        entry.groups = groups
        return True

    def handles(self) -> Iterator[BodyHandle]:
        return (BodyHandle(index) for index in list(self._entries))

    def items(self) -> Iterator[tuple[BodyHandle, B]]:
        return (
            (BodyHandle(index), entry.body)
            for index, entry in list(self._entries.items())
        )

    def bodies(self) -> list[B]:
        """All bodies in storage order."""
        return [entry.body for entry in self._entries.values()]

    def all_groups(self) -> list[CollisionGroups]:
        """Collision groups parallel to :meth:`bodies`."""
        return [entry.groups for entry in self._entries.values()]