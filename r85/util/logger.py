#!/bin/python3

'''
    Sets up logging for R85

    Every module logs through a child of `root_logger` (`R85.<name>`), and nothing is emitted until `init()` or `configure()` is called
    Configuration is a `logging.config.dictConfig()`-style dictionary (usually loaded from `logging.toml`) on top of `DEFAULTS`,
        extended with two non-standard sections:
      - `names`: a mapping of level-names to replacement level-names
      - `styling`: `do_style` (enables ANSI-styled records on a terminal) and `levels` (mapping of level-names to SGR codes)
    Library modules only log at `DEBUG` and below; `VERBOSE` and up are for the command-line tool
'''

#> Imports
import os
import sys
import tomllib
import logging, logging.config
from copy import deepcopy
from pathlib import Path
from functools import partialmethod
#</Imports

#> Header >/
__all__ = ('root_logger', 'get_logger', 'DEFAULTS', 'VERBOSITY_LEVELS',
           'config', 'init', 'initted', 'reconfigure', 'configure', 'level_for')

root_logger = logging.getLogger('R85')
root_logger.addHandler(logging.NullHandler())

def get_logger(name: str) -> logging.Logger:
    '''Returns the child logger of `root_logger` named `name`'''
    return root_logger.getChild(name)

# Extra levels, registered by `init()`
LEVELS = {
    'trace': logging.NOTSET + ((logging.DEBUG - logging.NOTSET) // 2),
    'verbose': logging.DEBUG + ((logging.INFO - logging.DEBUG) // 2),
    'terse': logging.INFO + ((logging.WARNING - logging.INFO) // 2),
    'fatal': logging.CRITICAL * 2,
}
# Indexed by the number of `-v`s given
VERBOSITY_LEVELS = ('WARNING', 'INFO', 'VERBOSE', 'DEBUG', 'TRACE')

DEFAULTS = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'stylish': {'()': f'{__name__}.StylishFormatter', 'fmt': '[{levelname}] {name}: {message}', 'style': '{'},
    },
    'handlers': {
        'stderr': {'class': 'logging.StreamHandler', 'formatter': 'stylish', 'stream': 'ext://sys.stderr'},
    },
    'loggers': {
        root_logger.name: {'handlers': ['stderr'], 'level': 'WARNING', 'propagate': False},
    },
    'names': {},
    'styling': {'do_style': False, 'try_style_windows': False,
                'levels': {'TRACE': '2', 'DEBUG': '2', 'VERBOSE': '36', 'TERSE': '1',
                           'WARNING': '33', 'ERROR': '31', 'CRITICAL': '1;31', 'FATAL': '1;41'}},
}

# Active configuration, merged into by `reconfigure()`
config = {'version': 1, 'disable_existing_loggers': False, 'names': {}, 'styling': {'do_style': False}}
def reconfigure(conf: dict):
    '''Merges `conf` into the active configuration and applies it'''
    for k,v in conf.items():
        if (k in config) and isinstance(v, dict): config[k] |= v
        else: config[k] = v
    for oln,nln in config['names'].items():
        logging.addLevelName(logging.getLevelName(oln), nln)
    StylishFormatter._restyle()
    logging.config.dictConfig(config)

class StylishFormatter(logging.Formatter):
    '''Wraps records in ANSI SGR codes according to `config['styling']`, only when stderr is a terminal'''
    FORMAT_STYLE = '\x1b[{}m{{}}\x1b[0m'
    FORMAT_NO_STYLE = '{}'

    _styles = {}
    _do_style = False

    @classmethod
    def _restyle(cls):
        styling = config['styling']
        cls._do_style = styling.get('do_style', False) and sys.stderr.isatty() \
                        and ((os.name != 'nt') or styling.get('try_style_windows', False))
        if not cls._do_style: return
        lnames = logging.getLevelNamesMapping()
        cls._styles = {lnames[ln]: cls.FORMAT_STYLE.format(s) if s else cls.FORMAT_NO_STYLE
                       for ln,s in styling.get('levels', {}).items() if ln in lnames}
    def format(self, record: logging.LogRecord) -> str:
        if not self._do_style: return super().format(record)
        return self._styles.get(record.levelno, self.FORMAT_NO_STYLE).format(super().format(record))

_initted = False
def initted() -> bool:
    return _initted
def init(conf: dict):
    '''Registers the extra levels, then applies `conf`; can only be called once'''
    global _initted
    if _initted:
        raise RuntimeError('Logging was already initialized! Maybe you meant `reconfigure()`?')
    _initted = True
    logcls = logging.getLoggerClass()
    for name,level in LEVELS.items():
        setattr(logging, name.upper(), level)
        logging.addLevelName(level, name.upper())
        setattr(logcls, name, partialmethod(logcls.log, level))
    reconfigure(conf)

def level_for(verbosity: int) -> int:
    '''Converts a count of `-v`s into a level, saturating at the most verbose'''
    return logging.getLevelName(VERBOSITY_LEVELS[max(0, min(verbosity, len(VERBOSITY_LEVELS)-1))])
def configure(path: Path | None = None, *, verbosity: int = 0, style: bool = False):
    '''
        Sets up logging for the command-line tool: `DEFAULTS`, overlaid by the TOML file at `path` (if it exists)
            If `verbosity` is non-zero, it overrides the configured level of `root_logger`
            Safe to call repeatedly, unlike `init()`
    '''
    conf = deepcopy(DEFAULTS) | (tomllib.loads(path.read_text()) if (path is not None) and path.is_file() else {})
    conf['styling'] = conf.get('styling', {}) | {'do_style': style}
    (reconfigure if _initted else init)(conf)
    if verbosity:
        root_logger.setLevel(level_for(verbosity))
