"""
Hash Table -- Separate chaining with doubling resize.

Maps keys to values through an array of buckets. Each key's native hash picks a
bucket, and keys that collide on the same bucket are kept in a singly linked
chain of entries. Lookups, inserts and removals walk a single chain, so they run
in O(1) on average as long as chains stay short. To keep them short the table
doubles its bucket array whenever the load factor (entries / buckets) reaches
0.75, rehashing every entry into the larger array. A rehash costs O(n), but
because capacity doubles each time the cost amortizes to O(1) per insertion.

Keys must implement __hash__ and __eq__ consistently (equal keys hash equal)
and must not be mutated in any hash-relevant way after insertion.
"""

from typing import Generic, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar('K')
V = TypeVar('V')

INITIAL_CAPACITY = 16
LOAD_FACTOR_THRESHOLD = 0.75

_MISSING = object()


class Entry(Generic[K, V]):
    def __init__(self, key: K, value: V) -> None:
        self.key = key
        self.value = value
        self.next: Optional['Entry[K, V]'] = None


Bucket = Optional[Entry]


def bucket_index(key, capacity: int) -> int:
    """Map a key to a slot in [0, capacity), masking the hash to non-negative."""
    return (hash(key) & 0x7FFFFFFF) % capacity


def rehash(buckets: List[Bucket], new_capacity: int) -> List[Bucket]:
    """Build a new bucket array of new_capacity holding every entry of buckets.

    The input array and its entries are left untouched. Entries that land in
    the same new bucket keep the order in which the old array is traversed.
    """
    new_buckets: List[Bucket] = [None] * new_capacity
    tails: List[Bucket] = [None] * new_capacity
    for head in buckets:
        current = head
        while current is not None:
            index = bucket_index(current.key, new_capacity)
            moved = Entry(current.key, current.value)
            if tails[index] is None:
                new_buckets[index] = moved
            else:
                tails[index].next = moved
            tails[index] = moved
            current = current.next
    return new_buckets


class HashTable(Generic[K, V]):
    Entry = Entry

    def __init__(self, capacity: int = INITIAL_CAPACITY) -> None:
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 1:
            raise ValueError("capacity must be a positive integer")
        self._capacity = capacity
        self._size = 0
        self._buckets: List[Bucket] = [None] * capacity

    def _find(self, key: K) -> Optional[Entry]:
        current = self._buckets[bucket_index(key, self._capacity)]
        while current is not None:
            if current.key == key:
                return current
            current = current.next
        return None

    def _resize(self) -> None:
        new_capacity = self._capacity * 2
        self._buckets = rehash(self._buckets, new_capacity)
        self._capacity = new_capacity

    def put(self, key: K, value: V) -> None:
        """Insert key with value, or overwrite the value if key is present."""
        index = bucket_index(key, self._capacity)
        current = self._buckets[index]
        if current is None:
            self._buckets[index] = Entry(key, value)
        else:
            while True:
                if current.key == key:
                    current.value = value
                    return
                if current.next is None:
                    break
                current = current.next
            current.next = Entry(key, value)
        self._size += 1
        if self._size >= self._capacity * LOAD_FACTOR_THRESHOLD:
            self._resize()

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Return the value stored for key, or default when key is absent."""
        entry = self._find(key)
        if entry is None:
            return default
        return entry.value

    def remove(self, key: K, default: Optional[V] = None) -> Optional[V]:
        """Unlink key's entry and return its value, or default when absent.

        Capacity is never reduced.
        """
        index = bucket_index(key, self._capacity)
        current = self._buckets[index]
        prev = None
        while current is not None:
            if current.key == key:
                if prev is None:
                    self._buckets[index] = current.next
                else:
                    prev.next = current.next
                self._size -= 1
                return current.value
            prev = current
            current = current.next
        return default

    def contains(self, key: K) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def capacity(self) -> int:
        return self._capacity

    def load_factor(self) -> float:
        return self._size / self._capacity

    def clear(self) -> None:
        self._buckets = [None] * self._capacity
        self._size = 0

    def _entries(self) -> Iterator[Entry]:
        for head in self._buckets:
            current = head
            while current is not None:
                yield current
                current = current.next

    def keys(self) -> List[K]:
        return [entry.key for entry in self._entries()]

    def values(self) -> List[V]:
        return [entry.value for entry in self._entries()]

    def items(self) -> List[Tuple[K, V]]:
        return [(entry.key, entry.value) for entry in self._entries()]

    def chain_lengths(self) -> List[int]:
        """Number of entries in each bucket, in bucket order."""
        lengths = []
        for head in self._buckets:
            count = 0
            current = head
            while current is not None:
                count += 1
                current = current.next
            lengths.append(count)
        return lengths

    def copy(self) -> 'HashTable[K, V]':
        """Create a copy of this HashTable.

        Note: This performs a shallow copy of values. If values are mutable
        objects, modifications to them will be visible in both tables.
        """
        clone: HashTable[K, V] = HashTable(self._capacity)
        clone._buckets = rehash(self._buckets, self._capacity)
        clone._size = self._size
        return clone

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key) -> bool:
        return self.contains(key)

    def __getitem__(self, key: K) -> V:
        entry = self._find(key)
        if entry is None:
            raise KeyError(key)
        return entry.value

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        if self.remove(key, _MISSING) is _MISSING:
            raise KeyError(key)

    def __iter__(self) -> Iterator[K]:
        for entry in self._entries():
            yield entry.key
