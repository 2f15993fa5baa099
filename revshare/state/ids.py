"""
Deterministic object identifiers.

Ids are 0x-prefixed 32-byte hex strings derived from a namespace and a
monotone counter, so a replay of the same operations yields the same ids.
"""

from __future__ import annotations

import hashlib

ObjectId = str


class IdAllocator:
    """Allocate unique ids within one namespace (normally an asset kind)."""

    def __init__(self, namespace: str, next_index: int = 0) -> None:
        if next_index < 0:
            raise ValueError(f"next_index must be non-negative: {next_index}")
        self._namespace = namespace
        self._next = next_index

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def next_index(self) -> int:
        return self._next

    def allocate(self) -> ObjectId:
        digest = hashlib.sha256(f"{self._namespace}:{self._next}".encode("utf-8")).hexdigest()
        self._next += 1
        return "0x" + digest

    def __repr__(self) -> str:
        return f"IdAllocator({self._namespace!r}, next={self._next})"
