"""Mini README: Growable slot buffer backing the transaction ledger.

Structure:
    * StorageExhaustedError - fatal failure to obtain more ledger slots.
    * TransactionStore - preallocated slots with an explicit growth policy.

The store keeps a logical length separate from its allocated capacity.
When every slot is used, capacity doubles; if that allocation fails, a
smaller fixed increment is tried once; if that fails too the store raises
``StorageExhaustedError`` and keeps its previous slots, length and capacity.
Fresh slots are always empty (``None``) before they are written.

Allocation goes through an injectable ``allocator`` callable that returns a
block of empty slots or raises ``MemoryError``, which lets callers simulate
resource exhaustion.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, List, Optional, TypeVar

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

T = TypeVar("T")

Allocator = Callable[[int], List[Optional[T]]]

DEFAULT_INITIAL_CAPACITY = 50
DEFAULT_FALLBACK_INCREMENT = 50


class StorageExhaustedError(RuntimeError):
    """Ledger storage could not be expanded; record keeping cannot continue."""

    def __init__(self, capacity: int, attempted: List[int]) -> None:
        attempts = ", ".join(str(size) for size in attempted)
        super().__init__(
            f"Transaction storage exhausted at capacity {capacity}; "
            f"could not allocate {attempts} slots"
        )
        self.capacity = capacity
        self.attempted = attempted


def allocate_slots(size: int) -> List[Optional[T]]:
    """Default allocator returning ``size`` empty slots."""

    return [None] * size


class TransactionStore(Generic[T]):
    """Append-only sequence with amortised constant-time appends."""

    def __init__(
        self,
        initial_capacity: int = DEFAULT_INITIAL_CAPACITY,
        *,
        fallback_increment: int = DEFAULT_FALLBACK_INCREMENT,
        allocator: Optional[Allocator] = None,
    ) -> None:
        if initial_capacity < 1:
            raise ValueError("Initial capacity must be at least one slot.")
        if fallback_increment < 1:
            raise ValueError("Fallback increment must be at least one slot.")
        self._allocator: Allocator = allocator or allocate_slots
        self._fallback_increment = fallback_increment
        self._length = 0
        self._capacity = 0
        try:
            self._slots = self._allocate(initial_capacity)
        except MemoryError as error:
            LOGGER.critical("Failed to allocate initial transaction storage of %s slots", initial_capacity)
            raise StorageExhaustedError(0, [initial_capacity]) from error
        self._capacity = initial_capacity
        LOGGER.debug("Transaction store allocated with capacity %s", self._capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, index: int) -> T:
        """Return the entry at ``index`` in insertion order."""

        if index < 0:
            index += self._length
        if not 0 <= index < self._length:
            raise IndexError(f"Transaction index {index} out of range for {self._length} entries")
        return self._slots[index]

    def __iter__(self) -> Iterator[T]:
        for index in range(self._length):
            yield self._slots[index]

    def __reversed__(self) -> Iterator[T]:
        for index in range(self._length - 1, -1, -1):
            yield self._slots[index]

    def append(self, item: T) -> int:
        """Store ``item`` in the next free slot and return its index."""

        self.reserve_one()
        index = self._length
        self._slots[index] = item
        self._length += 1
        return index

    def reserve_one(self) -> None:
        """Guarantee one free slot, growing the buffer if every slot is used."""

        if self._length < self._capacity:
            return
        self._grow()

    def _allocate(self, size: int) -> List[Optional[T]]:
        block = self._allocator(size)
        if len(block) != size or any(slot is not None for slot in block):
            raise ValueError(f"Allocator returned an invalid block for {size} slots")
        return block

    def _grow(self) -> None:
        doubled = self._capacity * 2
        try:
            block = self._allocate(doubled)
            new_capacity = doubled
        except MemoryError:
            LOGGER.warning(
                "Failed to expand transaction storage to %s records; trying +%s",
                doubled,
                self._fallback_increment,
            )
            fallback = self._capacity + self._fallback_increment
            try:
                block = self._allocate(fallback)
                new_capacity = fallback
            except MemoryError as error:
                LOGGER.critical(
                    "Transaction storage expansion failed at capacity %s", self._capacity
                )
                raise StorageExhaustedError(self._capacity, [doubled, fallback]) from error

        block[: self._length] = self._slots[: self._length]
        self._slots = block
        self._capacity = new_capacity
        LOGGER.debug("Transaction store grew to capacity %s", new_capacity)
