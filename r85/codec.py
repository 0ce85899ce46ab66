#!/bin/python3

'''
    The R85 codec: a base-85 binary-to-text encoding with an optionally keyed alphabet

    Data is encoded in groups of 4 bytes, each producing 5 symbols;
        a trailing group of 1-3 bytes produces 1 more symbol than it has bytes
    Within a group, bytes and digits are both ordered least-significant first
    Methods that start with `i` work incrementally on iterables of chunks
'''

#> Imports
import struct
import typing
from functools import lru_cache

from . import alphabet as alphabet_
from .alphabet import BASE, POW85
from .exceptions import InvalidSymbolError, InvalidTrailingGroupLengthError
from .util import logger
from .util.seqtools import regroup
#</Imports

#> Header >/
__all__ = ('R85', 'codec_for', 'BYTES_PER_GROUP', 'SYMBOLS_PER_GROUP')

logger = logger.get_logger('codec')

BYTES_PER_GROUP = 4
SYMBOLS_PER_GROUP = 5

Key = str | bytes | bytearray | memoryview | None
BytesLike = bytes | bytearray | memoryview

class R85:
    '''
        Encodes and decodes data with an alphabet derived from `key` at construction
            Instances are immutable, and can be shared freely between threads
    '''
    __slots__ = ('alphabet',)

    TEXT_ENCODING = 'UTF-8'
    SYMBOL_ENCODING = 'ASCII'

    S_GROUP = struct.Struct('<I')

    def __init__(self, key: Key = None):
        object.__setattr__(self, 'alphabet', alphabet_.derive(key))
        logger.debug('Created codec (keyed: %s)', self.alphabet != _DEFAULT_ALPHABET)

    def __setattr__(self, attr: str, value: typing.Any):
        raise AttributeError(f'{self.__class__.__qualname__} is immutable')
    __delattr__ = __setattr__

    def __repr__(self) -> str:
        return f'<{self.__class__.__qualname__} {self.alphabet.symbols.decode(self.SYMBOL_ENCODING)!r}>'

    @property
    def symbols(self) -> bytes:
        '''The symbols of this codec's alphabet, in order'''
        return self.alphabet.symbols
    @property
    def reverse(self) -> typing.Mapping[int, int]:
        '''A read-only mapping of symbols to their index in this codec's alphabet'''
        return self.alphabet.reverse

    # Input normalization
    @classmethod
    def _data(cls, data: BytesLike | str) -> bytes:
        if isinstance(data, str): return data.encode(cls.TEXT_ENCODING)
        return bytes(data)
    @classmethod
    def _symbols(cls, data: BytesLike | str, offset: int = 0) -> bytes:
        if not isinstance(data, str): return bytes(data)
        try: return data.encode(cls.SYMBOL_ENCODING)
        except UnicodeEncodeError as e:
            raise InvalidSymbolError(data[e.start], offset + e.start) from e

    # Group arithmetic
    @staticmethod
    def _digits(v: int, n: int) -> bytes:
        return bytes((v // p) % BASE for p in POW85[:n])
    @staticmethod
    def _value(digits: bytes) -> int:
        return sum(d * p for d,p in zip(digits, POW85))

    def _encode(self, data: bytes) -> bytes:
        full = len(data) - (len(data) % BYTES_PER_GROUP)
        digits = bytearray()
        for (v,) in self.S_GROUP.iter_unpack(data[:full]):
            digits += self._digits(v, SYMBOLS_PER_GROUP)
        if full != len(data):
            digits += self._digits(int.from_bytes(data[full:], 'little'), len(data) - full + 1)
        return bytes(digits.translate(self.alphabet.encode_table))
    def _check(self, data: bytes, offset: int = 0):
        if (m := self.alphabet.invalid.search(data)) is not None:
            raise InvalidSymbolError(data[m.start()], offset + m.start())
    def _decode(self, data: bytes) -> bytes:
        digits = data.translate(self.alphabet.decode_table)
        full = len(digits) - (len(digits) % SYMBOLS_PER_GROUP)
        out = bytearray()
        for i in range(0, full, SYMBOLS_PER_GROUP):
            # 5 digits can exceed 32 bits, only the low 32 are kept
            out += self.S_GROUP.pack(self._value(digits[i:i+SYMBOLS_PER_GROUP]) & 0xFFFFFFFF)
        if (tail := len(digits) - full):
            n = tail - 1
            out += (self._value(digits[full:]) & ((1 << (8*n)) - 1)).to_bytes(n, 'little')
        return bytes(out)

    # One-shot
    def encode(self, data: BytesLike | str) -> bytes:
        '''Encodes `data` (`str`s are encoded as UTF-8 first) into R85 symbols'''
        data = self._data(data)
        out = self._encode(data)
        logger.debug('Encoded %d byte(s) into %d symbol(s)', len(data), len(out))
        return out
    def decode(self, data: BytesLike | str) -> bytes:
        '''
            Decodes R85 symbols `data` into bytes
                Raises `InvalidTrailingGroupLengthError` if `data` ends in a single-symbol group
                Raises `InvalidSymbolError` if `data` contains anything that isn't in this codec's alphabet
        '''
        data = self._symbols(data)
        if len(data) % SYMBOLS_PER_GROUP == 1:
            raise InvalidTrailingGroupLengthError(len(data))
        self._check(data)
        out = self._decode(data)
        logger.debug('Decoded %d symbol(s) into %d byte(s)', len(data), len(out))
        return out
    def encode_to_string(self, data: BytesLike | str) -> str:
        '''Encodes `data` into R85 symbols as a `str`'''
        return self.encode(data).decode(self.SYMBOL_ENCODING)
    def decode_to_string(self, data: BytesLike | str) -> str:
        '''
            Decodes R85 symbols `data` into a UTF-8 `str`
                Bytes that aren't valid UTF-8 (such as from decoding with the wrong key) become U+FFFD
        '''
        return self.decode(data).decode(self.TEXT_ENCODING, errors='replace')

    def is_valid(self, data: BytesLike | str) -> bool:
        '''Checks if `data` would be decoded without error'''
        try: data = self._symbols(data)
        except InvalidSymbolError: return False
        return (len(data) % SYMBOLS_PER_GROUP != 1) and (self.alphabet.invalid.search(data) is None)

    # Incremental
    def iencode(self, chunks: typing.Iterable[BytesLike | str]) -> typing.Iterator[bytes]:
        '''
            Encodes an iterable of chunks of any size, yielding chunks of symbols
                Joining the output gives the same result as `.encode()` on the joined input
        '''
        for chunk in regroup(map(self._data, chunks), BYTES_PER_GROUP):
            yield self._encode(chunk)
    def idecode(self, chunks: typing.Iterable[BytesLike | str]) -> typing.Iterator[bytes]:
        '''
            Decodes an iterable of chunks of symbols of any size, yielding chunks of bytes
                Errors are the same as in `.decode()`, with positions relative to the start of the stream
                Chunks preceding an invalid one are still yielded
        '''
        def isymbols() -> typing.Iterator[bytes]:
            offset = 0
            for chunk in chunks:
                chunk = self._symbols(chunk, offset)
                offset += len(chunk)
                yield chunk
        offset = 0
        for chunk in regroup(isymbols(), SYMBOLS_PER_GROUP):
            self._check(chunk, offset)
            offset += len(chunk)
            if len(chunk) % SYMBOLS_PER_GROUP == 1:
                raise InvalidTrailingGroupLengthError(offset)
            yield self._decode(chunk)

_DEFAULT_ALPHABET = alphabet_.derive()

@lru_cache(maxsize=16)
def _codec_for(phrase: bytes) -> R85:
    return R85(phrase)
def codec_for(key: Key = None) -> R85:
    '''Returns a (possibly cached) `R85` instance for `key`'''
    return _codec_for(alphabet_.to_phrase(key))
