#!/bin/python3

'''Iterator/sequence utilities not found in the built-in utilities'''

#> Imports
import typing
#</Imports

#> Header >/
__all__ = ('sequential', 'regroup')

def sequential(seq: typing.Iterable[int]) -> typing.Iterator[tuple[int, ...]]:
    '''
        Yields tuples of runs of consecutive integers
            The sequence is sorted and deduplicated first
    '''
    working = []
    for n in sorted(set(seq)):
        if working and (n - 1) != working[-1]:
            yield tuple(working)
            working.clear()
        working.append(n)
    if working: yield tuple(working)

def regroup(chunks: typing.Iterable[bytes], size: int) -> typing.Iterator[bytes]:
    '''
        Re-slices an iterable of arbitrarily sized byte chunks so that every yielded chunk's length is a multiple of `size`
            Whatever remains at the end (shorter than `size`) is yielded last, if non-empty
            Empty chunks are never yielded
    '''
    if size < 1:
        raise ValueError(f'size must be positive, not {size}')
    pending = b''
    for chunk in chunks:
        if not chunk: continue
        buf = pending + bytes(chunk)
        cut = len(buf) - (len(buf) % size)
        if cut: yield buf[:cut]
        pending = buf[cut:]
    if pending: yield pending
