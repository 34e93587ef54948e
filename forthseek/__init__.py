"""
forthseek - wordlist search-order micro-engine
Replays define / set-order / lookup commands over 256 hashed wordlists.

The Table: chained hash tables, newest definition first in every bucket
The Order: a wholesale-replaced stack of wordlist identifiers
The Engine: a single-pass scanner folding every hit into a 64-bit fingerprint
"""

__version__ = "0.1.0"

from forthseek.table import SymbolTable, Entry, DEFAULT_CAPACITY, hash_name
from forthseek.wordlists import WordlistRegistry, SearchOrder
from forthseek.resolver import Resolver
from forthseek.stream import scan, terminate, Command, CommandType, ScanError
from forthseek.engine import Engine, RunResult, RunStats, mix, run_file

__all__ = [
    "SymbolTable",
    "Entry",
    "DEFAULT_CAPACITY",
    "hash_name",
    "WordlistRegistry",
    "SearchOrder",
    "Resolver",
    "scan",
    "terminate",
    "Command",
    "CommandType",
    "ScanError",
    "Engine",
    "RunResult",
    "RunStats",
    "mix",
    "run_file",
]
