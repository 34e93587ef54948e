"""
forthseek Command Scanner

Splits an input buffer into commands. The leading byte selects the command:

    '\\n' <wordlist> <name>     define name in wordlist
    '\\t' <wordlist>...         set the search order, bottom first
    ' '  <name>                look up name through the search order
    '\\0'                       end of input

A name (or an order) runs until the first byte <= 0x20. That byte is not
consumed: it is the leading byte of the next command.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional, Union

END_MARKER = 0x00
DEFINE_BYTE = 0x0A   # \n
ORDER_BYTE = 0x09    # \t
LOOKUP_BYTE = 0x20   # space

# Bytes above 0x20 may appear in names; everything else delimits.
_RUN = re.compile(rb"[\x21-\xff]*")

Buffer = Union[bytes, bytearray, memoryview]


class CommandType(Enum):
    DEFINE = auto()
    SET_ORDER = auto()
    LOOKUP = auto()
    END = auto()


@dataclass
class Command:
    type: CommandType
    offset: int
    wordlist: Optional[int] = None
    # Zero-copy slice of the input: the name, or the order's identifiers
    text: memoryview = field(default_factory=lambda: memoryview(b""))

    def __repr__(self) -> str:
        wl = f" wl={self.wordlist:#04x}" if self.wordlist is not None else ""
        return f"<{self.type.name}@{self.offset}{wl}:{bytes(self.text)!r}>"


class ScanError(Exception):
    def __init__(self, message: str, offset: int, byte: Optional[int] = None):
        found = f" (byte {byte:#04x})" if byte is not None else ""
        super().__init__(f"Offset {offset}: {message}{found}")
        self.offset = offset
        self.byte = byte


def terminate(data: Buffer) -> bytes:
    """Return data as bytes ending in the end marker."""
    data = bytes(data)
    if not data or data[-1] != END_MARKER:
        data += bytes([END_MARKER])
    return data


def scan(data: Buffer) -> Iterator[Command]:
    """Yield the commands in data, in input order, ending with an END command.

    Running off the end of the buffer counts as the end marker.
    Raises ScanError on the first invalid leading byte.
    """
    # Names are stored as views, so anything mutable is copied once here
    if not isinstance(data, bytes):
        data = bytes(data)
    view = memoryview(data)
    size = len(data)
    pos = 0

    while True:
        if pos >= size or data[pos] == END_MARKER:
            yield Command(CommandType.END, pos)
            return

        lead = data[pos]

        if lead == DEFINE_BYTE:
            if pos + 1 >= size or data[pos + 1] == END_MARKER:
                raise ScanError("Define is missing its wordlist byte", pos + 1)
            end = _run_end(data, pos + 2)
            yield Command(CommandType.DEFINE, pos, data[pos + 1], view[pos + 2:end])
            pos = end

        elif lead == ORDER_BYTE:
            end = _run_end(data, pos + 1)
            yield Command(CommandType.SET_ORDER, pos, text=view[pos + 1:end])
            pos = end

        elif lead == LOOKUP_BYTE:
            end = _run_end(data, pos + 1)
            yield Command(CommandType.LOOKUP, pos, text=view[pos + 1:end])
            pos = end

        else:
            raise ScanError("Invalid command byte", pos, lead)


def _run_end(data: bytes, start: int) -> int:
    return _RUN.match(data, start).end()
