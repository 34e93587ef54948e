"""
forthseek Wordlists and Search Order

The WordlistRegistry maps a single-byte identifier to a SymbolTable that is
created on the first definition into that wordlist. The SearchOrder is the
sequence of identifiers consulted by lookups, bottom first and top last.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional

from forthseek.table import DEFAULT_CAPACITY, Entry, Name, SymbolTable

logger = logging.getLogger(__name__)

WORDLIST_COUNT = 256


class WordlistRegistry:
    """Fixed 256-slot registry of lazily created symbol tables."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"Wordlist tables need at least one bucket, got {capacity}")
        self._capacity = capacity
        self._tables: list[Optional[SymbolTable]] = [None] * WORDLIST_COUNT

    @property
    def capacity(self) -> int:
        """Bucket count given to every table this registry creates."""
        return self._capacity

    def define(self, wordlist: int, name: Name, serialno: int) -> Entry:
        """Insert name into the table for wordlist, creating it if needed."""
        _check_wordlist(wordlist)
        table = self._tables[wordlist]
        if table is None:
            table = SymbolTable(self._capacity)
            self._tables[wordlist] = table
            logger.debug("created wordlist %#04x with %d buckets", wordlist, self._capacity)
        return table.insert(name, serialno)

    def get_table(self, wordlist: int) -> Optional[SymbolTable]:
        _check_wordlist(wordlist)
        return self._tables[wordlist]

    @property
    def created(self) -> list[int]:
        """Identifiers that own a table, in ascending order."""
        return [i for i, t in enumerate(self._tables) if t is not None]

    def __len__(self) -> int:
        return len(self.created)

    def __repr__(self) -> str:
        return f"<WordlistRegistry: {len(self)} of {WORDLIST_COUNT} wordlists created>"


class SearchOrder:
    """The current search order. Only ever replaced as a whole."""

    def __init__(self) -> None:
        self._order = b""

    def set(self, identifiers: Iterable[int]) -> None:
        """Replace the whole order; the last identifier becomes the top."""
        order = bytes(identifiers)
        self._order = order
        logger.debug("search order set to %r", order)

    def as_sequence(self) -> bytes:
        """Bottom-first view of the order."""
        return self._order

    def top_down(self) -> Iterator[int]:
        return reversed(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"<SearchOrder: {self._order!r}>"


def _check_wordlist(wordlist: int) -> None:
    if not 0 <= wordlist < WORDLIST_COUNT:
        raise ValueError(f"Wordlist identifier must be a byte (0-255), got {wordlist}")
