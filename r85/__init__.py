#!/bin/python3

'''
    R85: a base-85 binary-to-text codec with an optionally keyed alphabet

    A key only changes which printable characters are used and in what order,
        so it obscures the encoded text but provides *no* confidentiality
'''

#> Package >/
__all__ = ('R85', 'encode', 'decode', 'encode_to_string', 'decode_to_string',
           'alphabet', 'codec', 'exceptions', 'util')

from . import util
from . import alphabet, codec, exceptions
from .codec import R85, codec_for
from .exceptions import *

__all__ += exceptions.__all__

def encode(data: bytes | str, key: str | bytes | None = None) -> bytes:
    '''Encodes `data` with the alphabet derived from `key`'''
    return codec_for(key).encode(data)
def decode(data: bytes | str, key: str | bytes | None = None) -> bytes:
    '''Decodes `data` with the alphabet derived from `key`'''
    return codec_for(key).decode(data)
def encode_to_string(data: bytes | str, key: str | bytes | None = None) -> str:
    return codec_for(key).encode_to_string(data)
def decode_to_string(data: bytes | str, key: str | bytes | None = None) -> str:
    return codec_for(key).decode_to_string(data)
