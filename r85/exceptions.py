#!/bin/python3

'''Exceptions raised by the R85 codec'''

#> Header >/
class R85Exception(Exception):
    '''The base class for all codec-related exceptions'''
    __slots__ = ()
class DecodeError(R85Exception, ValueError):
    '''Input could not be decoded as R85 text'''
    __slots__ = ()
class InvalidSymbolError(DecodeError):
    '''Input contains a symbol that is not a part of the current alphabet'''
    __slots__ = ('symbol', 'position')
    def __init__(self, symbol: int | str, position: int, *args, **kwargs):
        self.symbol = symbol
        self.position = position
        if not args:
            args = (f'Invalid symbol {chr(symbol) if isinstance(symbol, int) else symbol!r} at position {position}',)
        super().__init__(*args, **kwargs)
class InvalidTrailingGroupLengthError(DecodeError):
    '''Input ends in a single-symbol group, which no encoder output can produce'''
    __slots__ = ('length',)
    def __init__(self, length: int, *args, **kwargs):
        self.length = length
        if not args:
            args = (f'Input of length {length} ends in a 1-symbol group',)
        super().__init__(*args, **kwargs)

# __all__ #
__all__ = tuple(n for n in dir() if isinstance((c := globals()[n]), type) and issubclass(c, R85Exception))
