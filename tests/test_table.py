"""
forthseek Symbol Table Tests

Tests:
1. Bucket hashing (range, stability, last-eight-bytes rule)
2. Insert / lookup
3. Head insertion and shadowing
4. Collisions in a single-bucket table
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from forthseek.table import SymbolTable, Entry, DEFAULT_CAPACITY, hash_name


# ============================================================================
# 1. Hashing
# ============================================================================

def test_hash_in_range():
    table = SymbolTable(7)
    for name in (b"", b"a", b"dup", b"a-much-longer-name-than-eight", b"\xff" * 20):
        assert 0 <= table.hash(name) < 7


def test_hash_is_stable():
    table = SymbolTable()
    assert table.hash(b"katze") == table.hash(b"katze")
    assert table.hash(memoryview(b"katze")) == table.hash(b"katze")


def test_hash_big_endian_accumulate():
    # "ab" -> 0x6162
    assert hash_name(b"ab", 1 << 20) == 0x6162
    assert hash_name(b"ab", 100) == 0x6162 % 100
    assert hash_name(b"", 100) == 0


def test_hash_only_last_eight_bytes_count():
    assert hash_name(b"xx12345678", 4093) == hash_name(b"yy12345678", 4093)


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        SymbolTable(0)
    assert SymbolTable().capacity == DEFAULT_CAPACITY == 4000


# ============================================================================
# 2. Insert / lookup
# ============================================================================

def test_insert_then_lookup():
    table = SymbolTable()
    entry = table.insert(b"esel", 23)
    table.insert(b"katze", 25)
    assert entry == Entry(b"esel", 23)
    assert entry.name_len == 4
    assert table.lookup(b"esel") == 23
    assert table.lookup(b"katze") == 25
    assert len(table) == 2


def test_lookup_missing():
    table = SymbolTable()
    assert table.lookup(b"nothing") is None
    table.insert(b"something", 1)
    assert table.lookup(b"some") is None
    assert table.lookup(b"somethingelse") is None
    assert b"something" in table
    assert b"nothing" not in table


def test_lookup_with_memoryview_slice():
    buf = memoryview(b" katze ")
    table = SymbolTable()
    table.insert(buf[1:6], 9)
    assert table.lookup(b"katze") == 9


# ============================================================================
# 3. Shadowing
# ============================================================================

def test_redefinition_shadows():
    table = SymbolTable()
    table.insert(b"esel", 23)
    table.insert(b"esel", 24)
    assert table.lookup(b"esel") == 24
    # The older entry is still stored, only unreachable
    assert len(table) == 2
    chain = list(table.chain(table.hash(b"esel")))
    assert [e.serialno for e in chain] == [24, 23]


# ============================================================================
# 4. Collisions
# ============================================================================

def test_single_bucket_chain():
    table = SymbolTable(1)
    for serial, name in enumerate([b"a", b"bb", b"ccc", b"a"], 1):
        table.insert(name, serial)
    assert table.chain_lengths() == [4]
    assert table.lookup(b"a") == 4
    assert table.lookup(b"bb") == 2
    assert table.lookup(b"ccc") == 3
    assert table.lookup(b"dddd") is None
