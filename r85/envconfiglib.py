#!/bin/python3

'''
    Read-only configuration populated from an environment variable

    The variable holds shell-quoted `key=value` pairs (for example `R85CFG='extension=.b85 chunk_size=4096'`)
    If `./<VARIABLE>.r85.env` exists, its pairs are read first, so the environment variable wins
'''

#> Imports
import os
import shlex
import typing
from pathlib import Path
from collections import UserDict
#</Imports

#> Header >/
__all__ = ('EnvConfig',)

class EnvConfig(UserDict):
    'A read-only, case-insensitive dictionary that is populated by an environment variable or .r85.env file'

    FILE_SUFFIX = '.r85.env'

    def __init__(self, var: str, type_: type | typing.Callable[[str], typing.Any] = str, *,
                 defaults: typing.Mapping[str, typing.Any] | None = None, root: Path = Path('.'), freeze: bool = True):
        self._is_frozen = False
        self._envvar = var
        self._type = type_
        self._rawenv = os.getenv(self._envvar, '')
        if (p := root / f'{self._envvar}{self.FILE_SUFFIX}').is_file():
            self._rawenv = f'{p.read_text()} {self._rawenv}'.strip()
        super().__init__({k.lower(): v for k,v in (defaults or {}).items()})
        self.data |= {k.lower(): self._type(v) for k,v in (kv.split('=', 1)
                                                 for kv in shlex.split(self._rawenv, comments=True)
                                                 if '=' in kv)
                      if not k.startswith('_')}
        self._is_frozen = freeze

    @staticmethod
    def _bool(v: str) -> bool:
        '''Converts a string into a boolean in a shell-like way ("" and "0" = False)'''
        return bool(v) and v != '0'
    def get_bool(self, k: str, default: str | bool = False) -> bool:
        '''Converts an key's item into a boolean in a shell-like way'''
        v = self.get(k, default)
        if isinstance(v, bool): return v
        if isinstance(v, str): return self._bool(v)
        return bool(v) # let other types resolve normally
    def get_int(self, k: str, default: int = 0) -> int:
        '''Converts a key's item into an integer, raising `ValueError` if it isn't one'''
        v = self.get(k, default)
        try: return int(v)
        except (TypeError, ValueError) as e:
            raise ValueError(f'{self._envvar}: {k} must be an integer, not {v!r}') from e

    def __getitem__(self, item: str) -> typing.Any:
        return super().__getitem__(item.lower())
    def __contains__(self, item: object) -> bool:
        return isinstance(item, str) and (item.lower() in self.data)
    def __getattr__(self, attr: str) -> typing.Any:
        if attr.startswith('_'): raise AttributeError(attr)
        try: return self[attr]
        except KeyError as e: raise AttributeError(attr) from e

    def __setitem__(self, item: str, value: typing.Any):
        if getattr(self, '_is_frozen', False):
            raise TypeError(f'{self.__class__.__qualname__} is frozen')
        super().__setitem__(item.lower(), value)
    def __delitem__(self, item: str):
        if getattr(self, '_is_frozen', False):
            raise TypeError(f'{self.__class__.__qualname__} is frozen')
        super().__delitem__(item.lower())

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self._envvar!r})'
