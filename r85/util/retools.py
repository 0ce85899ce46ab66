#!/bin/python3

'''Utilities for working with and generating regular expressions'''

#> Imports
import re
import typing

from .seqtools import sequential
#</Imports

#> Header >/
__all__ = ('ibyte_patt', 'byte_patt', 'byte_class')

def ibyte_patt(chars: bytes) -> typing.Iterator[bytes]:
    '''
        Converts a set of bytes into a more compact set of regular expressions that match them
            Yields a series of byte-strings for each group of bytes (could be a single byte or a range)
    '''
    for seq in map(bytes, sequential(chars)):
        if len(seq) < 3: yield re.escape(seq)
        else: yield re.escape(seq[:1]) + b'-' + re.escape(seq[-1:])
def byte_patt(chars: bytes) -> bytes:
    '''
        Converts a set of bytes into the body of a compact character class that matches them
        Returns bytes instead of a `re.Pattern` so that it can be embedded into a larger pattern
    '''
    return b''.join(ibyte_patt(chars))
def byte_class(chars: bytes, *, negate: bool = False) -> re.Pattern[bytes]:
    '''Compiles a character class matching any of `chars` (or, if `negate` is true, any byte *not* in `chars`)'''
    return re.compile(b'[' + (b'^' if negate else b'') + byte_patt(chars) + b']')
