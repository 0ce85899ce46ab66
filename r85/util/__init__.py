#!/bin/python3

'''Utilities that are shared across the `r85` package'''

#> Package >/
__all__ = ('logger', 'retools', 'seqtools')

from . import logger, retools, seqtools
