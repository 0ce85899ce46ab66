import pytest

from r85.alphabet import BASE, POOL, POW85, Alphabet, derive, to_phrase


def test_pool_and_powers():
    """The pool is every printable ASCII byte, and the power table is fixed."""
    assert POOL == bytes(range(0x21, 0x7F))
    assert len(POOL) == 94
    assert POW85 == (1, 85, 7225, 614125, 52200625)


@pytest.mark.parametrize("key", [None, "", b""])
def test_default_alphabet(key):
    """An absent or empty key gives the first 85 printable ASCII bytes."""
    alphabet = derive(key)
    assert alphabet.symbols == bytes(range(0x21, 0x76))
    assert alphabet.symbols[0] == ord("!") and alphabet.symbols[-1] == ord("u")


def test_alphabet_validity(any_key):
    """Every derived alphabet has 85 distinct printable symbols."""
    alphabet = derive(any_key)
    assert len(alphabet) == BASE
    assert len(set(alphabet.symbols)) == BASE
    assert all(0x21 <= s <= 0x7E for s in alphabet.symbols)


def test_reverse_lookup(any_key):
    """The reverse lookup inverts the alphabet and only knows its symbols."""
    alphabet = derive(any_key)
    for i, s in enumerate(alphabet.symbols):
        assert alphabet.reverse[s] == i
        assert s in alphabet
    assert set(alphabet.reverse) == set(alphabet.symbols)
    for s in set(POOL) - set(alphabet.symbols):
        assert s not in alphabet.reverse


def test_determinism(any_key):
    """Deriving twice from the same key gives identical tables."""
    a, b = derive(any_key), derive(any_key)
    assert a == b
    assert a.symbols == b.symbols
    assert dict(a.reverse) == dict(b.reverse)


def test_keyed_derivation_by_hand():
    """A single-byte phrase is reused for every pick from the shrinking pool."""
    # 0x00 % remaining is always 0, so the pool is consumed from the front
    assert derive(b"\x00").symbols == POOL[:85]
    # 'A' (65): picks POOL[65], then the byte after it (shifted into the same place), etc.
    picks = derive(b"A").symbols
    assert picks[0] == POOL[65]
    assert picks[1] == POOL[66]
    # once the pool has 65 or fewer symbols left, 65 % remaining wraps around
    assert picks[29] == POOL[0]


def test_keyed_alphabet_for_s3cret():
    """The reference key produces a different alphabet that reaches past 'u'."""
    alphabet = derive("s3cret")
    assert alphabet != derive()
    assert alphabet.symbols[0] == POOL[ord("s") % 94]
    assert any(s > ord("u") for s in alphabet.symbols)


def test_phrase_is_clipped():
    """Only the first 85 bytes of a key take part in derivation."""
    key = bytes(range(1, 86))
    assert to_phrase(key + b"extra bytes") == key
    assert derive(key + b"extra bytes") == derive(key)
    assert derive(key[:84]) != derive(key)


def test_phrase_conversion():
    """String keys are encoded as UTF-8; bytes-like keys are used as-is."""
    assert to_phrase(None) == b""
    assert to_phrase("ü") == b"\xc3\xbc"
    assert to_phrase(bytearray(b"key")) == b"key"
    assert to_phrase(memoryview(b"key")) == b"key"
    assert derive("ü") == derive(b"\xc3\xbc")


def test_tables():
    """The translation tables and the invalid-symbol pattern agree with the alphabet."""
    alphabet = derive("s3cret")
    digits = bytes(range(BASE))
    assert digits.translate(alphabet.encode_table) == alphabet.symbols
    assert alphabet.symbols.translate(alphabet.decode_table) == digits
    assert alphabet.invalid.search(alphabet.symbols) is None
    outside = bytes(set(range(256)) - set(alphabet.symbols))
    assert all(alphabet.invalid.fullmatch(bytes((b,))) for b in outside)


@pytest.mark.parametrize(
    "symbols",
    [
        POOL[:84],  # too short
        POOL[:84] + b"!",  # duplicate
        POOL[:84] + b" ",  # not printable
    ],
)
def test_alphabet_rejects_bad_symbols(symbols):
    """An Alphabet can only be built from 85 distinct printable symbols."""
    with pytest.raises(ValueError):
        Alphabet(symbols)


def test_alphabet_is_immutable():
    """Alphabets cannot be modified after derivation."""
    alphabet = derive()
    with pytest.raises(AttributeError):
        alphabet.symbols = b""
    with pytest.raises(TypeError):
        alphabet.reverse[0x21] = 5
