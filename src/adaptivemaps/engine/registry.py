"""Keyed store of live marker handles."""

from __future__ import annotations

from collections.abc import Hashable, Iterator

from adaptivemaps.contracts.exceptions import DuplicateKeyError, MarkerNotFoundError
from adaptivemaps.contracts.platform import MarkerHandle


class MarkerRegistry:
    """Maps document identity to the one marker handle rendered for it.

    Keys iterate in insertion order.
    """

    def __init__(self) -> None:
        self._handles: dict[Hashable, MarkerHandle] = {}

    def insert(self, doc_id: Hashable, handle: MarkerHandle) -> None:
        if doc_id in self._handles:
            raise DuplicateKeyError(f"marker already registered for {doc_id!r}", doc_id=doc_id)
        self._handles[doc_id] = handle

    def get(self, doc_id: Hashable) -> MarkerHandle:
        try:
            return self._handles[doc_id]
        except KeyError:
            raise MarkerNotFoundError(f"no marker registered for {doc_id!r}", doc_id=doc_id) from None

    def remove(self, doc_id: Hashable) -> None:
        if doc_id not in self._handles:
            raise MarkerNotFoundError(f"no marker registered for {doc_id!r}", doc_id=doc_id)
        del self._handles[doc_id]

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(list(self._handles))

    def keys(self) -> list[Hashable]:
        return list(self._handles)
