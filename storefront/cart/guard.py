"""In-flight guard: reserve a composite key for the duration of an add."""
from contextlib import contextmanager
from typing import FrozenSet, Iterator, Set

from storefront.errors import KeyAlreadyReserved
from .models import CompositeKey


class InFlightGuard:
    """
    Set of composite keys whose insertion is in progress.

    ``reserve`` adds the key synchronously on entry and discards it on every
    exit path, including exceptions and task cancellation. Valid under a
    single-threaded event loop: no await happens between the membership
    check and the insertion.
    """

    def __init__(self) -> None:
        self._pending: Set[CompositeKey] = set()

    def is_pending(self, key: CompositeKey) -> bool:
        return key in self._pending

    @property
    def pending_keys(self) -> FrozenSet[CompositeKey]:
        return frozenset(self._pending)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)

    @contextmanager
    def reserve(self, key: CompositeKey) -> Iterator[CompositeKey]:
        if key in self._pending:
            raise KeyAlreadyReserved(key)
        self._pending.add(key)
        try:
            yield key
        finally:
            self._pending.discard(key)
