"""
forthseek Resolver

Finds a name through the search order. The top of the order (the last
identifier given) is searched first and the bottom last, so wordlists
named later in a set-order command take priority. Identifiers without a
table are skipped.
"""

from __future__ import annotations

from typing import Optional

from forthseek.table import Name
from forthseek.wordlists import SearchOrder, WordlistRegistry


class Resolver:
    """Read-only name resolution over a registry and a search order."""

    def __init__(self, registry: WordlistRegistry, order: SearchOrder) -> None:
        self._registry = registry
        self._order = order

    def find(self, name: Name) -> Optional[int]:
        """Serial number of the first match from the top of the order, or None."""
        found = self.find_with_wordlist(name)
        return found[1] if found is not None else None

    def find_with_wordlist(self, name: Name) -> Optional[tuple[int, int]]:
        """Like find(), but also report which wordlist matched."""
        for wordlist in self._order.top_down():
            table = self._registry.get_table(wordlist)
            if table is None:
                continue
            serialno = table.lookup(name)
            if serialno is not None:
                return wordlist, serialno
        return None
