#!/bin/python3

'''
    Derives the 85-symbol alphabets used by the R85 codec

    Without a key, the alphabet is the first 85 printable ASCII characters (`!` through `u`)
    With a key, the alphabet is sampled from all 94 printable ASCII characters without replacement,
        where each pick is driven by one byte of the key (clipped to `PHRASE_LEN` bytes and reused cyclically)
    Note that this only obscures the encoded text, it is *not* encryption
'''

#> Imports
import typing
from types import MappingProxyType

from .util import logger
from .util.retools import byte_class
#</Imports

#> Header >/
__all__ = ('BASE', 'POOL', 'POW85', 'PHRASE_LEN',
           'Alphabet', 'derive', 'to_phrase')

logger = logger.get_logger('alphabet')

BASE = 85
POOL = bytes(range(0x21, 0x7F)) # all 94 printable ASCII characters
POW85 = tuple(BASE**p for p in range(5))
PHRASE_LEN = BASE

class Alphabet:
    '''
        An immutable ordered set of `BASE` symbols, as well as tables derived from it
            `symbols` maps indexes to symbols, and `reverse` maps symbols back to indexes
            `encode_table` and `decode_table` are `bytes.translate()` tables for the above mappings
            `invalid` matches any byte that is not a symbol of this alphabet
    '''
    __slots__ = ('symbols', 'reverse', 'encode_table', 'decode_table', 'invalid')

    def __init__(self, symbols: bytes):
        symbols = bytes(symbols)
        if len(symbols) != BASE:
            raise ValueError(f'An alphabet must have exactly {BASE} symbols, not {len(symbols)}')
        if len(set(symbols)) != BASE:
            raise ValueError('An alphabet cannot contain duplicate symbols')
        if not set(symbols) <= set(POOL):
            raise ValueError('An alphabet can only contain printable ASCII symbols')
        set_ = object.__setattr__
        set_(self, 'symbols', symbols)
        set_(self, 'reverse', MappingProxyType({s: i for i,s in enumerate(symbols)}))
        set_(self, 'encode_table', symbols + bytes(256 - BASE))
        dtable = bytearray(256)
        for i,s in enumerate(symbols): dtable[s] = i
        set_(self, 'decode_table', bytes(dtable))
        set_(self, 'invalid', byte_class(symbols, negate=True))

    def __setattr__(self, attr: str, value: typing.Any):
        raise AttributeError(f'{self.__class__.__qualname__} is immutable')
    __delattr__ = __setattr__

    def __len__(self) -> int:
        return len(self.symbols)
    def __iter__(self) -> typing.Iterator[int]:
        return iter(self.symbols)
    def __contains__(self, symbol: int) -> bool:
        return symbol in self.reverse
    def __getitem__(self, idx: int) -> int:
        return self.symbols[idx]
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet): return NotImplemented
        return self.symbols == other.symbols
    def __hash__(self) -> int:
        return hash(self.symbols)
    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self.symbols!r})'

def to_phrase(key: str | bytes | bytearray | memoryview | None) -> bytes:
    '''Converts `key` into the phrase that drives derivation (`str` keys are encoded as UTF-8)'''
    if not key: return b''
    if isinstance(key, str): key = key.encode('utf-8')
    return bytes(key[:PHRASE_LEN])

def derive(key: str | bytes | bytearray | memoryview | None = None) -> Alphabet:
    '''Derives an `Alphabet` from `key`, which is deterministic (including for an empty or missing `key`)'''
    phrase = to_phrase(key)
    if not phrase:
        return Alphabet(POOL[:BASE])
    pool = bytearray(POOL)
    symbols = bytearray()
    for i in range(BASE):
        # removing from the middle keeps the remaining symbols in order, which later picks depend on
        symbols.append(pool.pop(phrase[i % len(phrase)] % len(pool)))
    logger.debug('Derived keyed alphabet from a %d-byte phrase', len(phrase))
    return Alphabet(symbols)
