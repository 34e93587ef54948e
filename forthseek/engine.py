"""
forthseek Engine

Replays a command buffer against one registry and one search order and
folds every successful lookup into a 64-bit fingerprint.

The Engine:
1. Takes a terminated byte buffer
2. Steps through each command in input order
3. Maintains state (wordlists, search order, next serial number, fingerprint)
4. Produces a RunResult (fingerprint plus counters)

All state lives on the Engine instance, so independent engines never
share tables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Optional, Union

from forthseek.resolver import Resolver
from forthseek.stream import Buffer, Command, CommandType, scan, terminate
from forthseek.table import DEFAULT_CAPACITY, Name
from forthseek.wordlists import SearchOrder, WordlistRegistry

logger = logging.getLogger(__name__)

K = 0xB64D532AAAAAAAD5
MASK64 = 0xFFFFFFFFFFFFFFFF
SHIFT = 41

# Called for every lookup with the name and the serial number found (0 for a miss)
TraceHook = Callable[[bytes, int], None]


def mix(fingerprint: int, found: int) -> int:
    """Fold one serial number into the fingerprint, unsigned 64-bit."""
    fingerprint = ((fingerprint ^ found) * K) & MASK64
    return fingerprint ^ (fingerprint >> SHIFT)


@dataclass
class RunStats:
    """Counters collected while replaying a buffer."""
    defines: int = 0
    order_changes: int = 0
    lookups: int = 0
    hits: int = 0
    wordlists: int = 0

    @property
    def misses(self) -> int:
        return self.lookups - self.hits


@dataclass
class RunResult:
    """The result of replaying one buffer."""
    fingerprint: int
    stats: RunStats = field(default_factory=RunStats)

    @property
    def hex(self) -> str:
        """Fingerprint as lower-case hex digits, no prefix or padding."""
        return f"{self.fingerprint:x}"

    def summary(self) -> str:
        s = self.stats
        lines = [
            f"fingerprint {self.hex}",
            f"  Defines: {s.defines} into {s.wordlists} wordlist(s)",
            f"  Order changes: {s.order_changes}",
            f"  Lookups: {s.lookups} ({s.hits} found, {s.misses} missing)",
        ]
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<RunResult: {self.hex} lookups={self.stats.lookups}>"


class Engine:
    """Search-order engine.

    Usage:
        engine = Engine()
        result = engine.run(b"\\nAfoo\\tA foo")
        print(result.hex)

    One engine replays one buffer; serial numbers and the fingerprint keep
    counting if run() is called again on the same instance.
    """

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        trace: Optional[TraceHook] = None,
    ) -> None:
        self.registry = WordlistRegistry(capacity)
        self.order = SearchOrder()
        self.resolver = Resolver(self.registry, self.order)
        self.fingerprint = 0
        self.next_serial = 1
        self.stats = RunStats()
        self._trace = trace

    # ------------------------------------------------------------------
    # Single steps
    # ------------------------------------------------------------------

    def define(self, wordlist: int, name: Name) -> int:
        """Define name in wordlist; return the serial number it was given."""
        serialno = self.next_serial
        created = self.registry.get_table(wordlist) is None
        self.registry.define(wordlist, name, serialno)
        self.next_serial += 1
        self.stats.defines += 1
        if created:
            self.stats.wordlists += 1
        return serialno

    def set_order(self, identifiers: bytes) -> None:
        self.order.set(identifiers)
        self.stats.order_changes += 1

    def lookup(self, name: Name) -> int:
        """Resolve name; fold a hit into the fingerprint. Returns 0 on a miss."""
        found = self.resolver.find(name) or 0
        self.stats.lookups += 1
        if found != 0:
            self.stats.hits += 1
            self.fingerprint = mix(self.fingerprint, found)
        if self._trace is not None:
            self._trace(bytes(name), found)
        return found

    # ------------------------------------------------------------------
    # Whole buffers
    # ------------------------------------------------------------------

    def run(self, data: Buffer) -> RunResult:
        """Replay every command in data up to the end marker.

        Raises ScanError on an invalid command byte; nothing after it runs.
        """
        handlers: dict[CommandType, Callable[[Command], None]] = {
            CommandType.DEFINE: self._exec_define,
            CommandType.SET_ORDER: self._exec_set_order,
            CommandType.LOOKUP: self._exec_lookup,
        }
        for command in scan(data):
            if command.type is CommandType.END:
                break
            handlers[command.type](command)

        logger.debug(
            "run finished: %d defines, %d lookups, fingerprint %x",
            self.stats.defines, self.stats.lookups, self.fingerprint,
        )
        return RunResult(fingerprint=self.fingerprint, stats=replace(self.stats))

    def _exec_define(self, command: Command) -> None:
        self.define(command.wordlist, command.text)

    def _exec_set_order(self, command: Command) -> None:
        self.set_order(command.text)

    def _exec_lookup(self, command: Command) -> None:
        self.lookup(command.text)

    def __repr__(self) -> str:
        return (
            f"<Engine: {len(self.registry)} wordlists, "
            f"next serial {self.next_serial}, fingerprint {self.fingerprint:x}>"
        )


def run_file(path: Union[str, Path], **engine_kwargs) -> RunResult:
    """Read a whole file, terminate it and replay it on a fresh Engine."""
    data = terminate(Path(path).read_bytes())
    logger.info("replaying %s (%d bytes)", path, len(data))
    return Engine(**engine_kwargs).run(data)
