"""
forthseek Symbol Table

A chained hash table from a name (a byte sequence) to a serial number.
One table exists per wordlist that has seen at least one definition.

Key properties:
- Fixed bucket count: the table never resizes, chains just get longer
- Head insertion: a new entry becomes the first link of its chain
- Shadowing: redefining a name hides the older entry forever, nothing is deleted
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Union

DEFAULT_CAPACITY = 4000

Name = Union[bytes, memoryview]


@dataclass(frozen=True)
class Entry:
    """One definition: a name and the serial number it was given."""
    name: Name
    serialno: int

    @property
    def name_len(self) -> int:
        return len(self.name)

    def matches(self, name: Name) -> bool:
        return len(name) == len(self.name) and name == self.name

    def __repr__(self) -> str:
        return f"<Entry {bytes(self.name)!r} #{self.serialno}>"


def hash_name(name: Name, capacity: int) -> int:
    """Big-endian accumulate with 64-bit wraparound, reduced modulo capacity.

    Shifting a 64-bit accumulator left by one byte per step drops
    everything but the last eight bytes, so only those are read.
    """
    return int.from_bytes(name[-8:], "big") % capacity


class SymbolTable:
    """Chained hash table with most-recently-inserted-first chains.

    Usage:
        table = SymbolTable()
        table.insert(b"dup", 1)
        table.insert(b"dup", 2)
        table.lookup(b"dup")   # -> 2, entry #1 is shadowed
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Symbol table needs at least one bucket, got {capacity}")
        self._capacity = capacity
        # Each bucket is a list used head-at-the-end: appending is the O(1)
        # push-front, scanning runs from the last element back.
        self._buckets: list[list[Entry]] = [[] for _ in range(capacity)]
        self._count = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def hash(self, name: Name) -> int:
        """Bucket index for a name, in [0, capacity)."""
        return hash_name(name, self._capacity)

    def insert(self, name: Name, serialno: int) -> Entry:
        """Link a new entry as the head of its bucket's chain."""
        entry = Entry(name=name, serialno=serialno)
        self._buckets[self.hash(name)].append(entry)
        self._count += 1
        return entry

    def lookup(self, name: Name) -> Optional[int]:
        """Serial number of the newest entry for name, or None."""
        entry = self.find_entry(name)
        return entry.serialno if entry is not None else None

    def find_entry(self, name: Name) -> Optional[Entry]:
        for entry in self.chain(self.hash(name)):
            if entry.matches(name):
                return entry
        return None

    def chain(self, bucket: int) -> Iterator[Entry]:
        """Walk one bucket from head (newest) to tail (oldest)."""
        return reversed(self._buckets[bucket])

    def chain_lengths(self) -> list[int]:
        return [len(b) for b in self._buckets]

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, (bytes, bytearray, memoryview)):
            return False
        return self.find_entry(name) is not None

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        used = sum(1 for b in self._buckets if b)
        return f"<SymbolTable: {self._count} entries in {used}/{self._capacity} buckets>"
