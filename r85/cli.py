#!/bin/python3

'''The `r85` command-line tool'''

#> Imports
import click
import typing
import itertools
from pathlib import Path
from functools import partial

from .codec import R85
from .envconfiglib import EnvConfig
from .exceptions import R85Exception
from .util import logger as loglib
#</Imports

#> Header
__all__ = ('cli',)

logger = loglib.get_logger('cli')

CONFIG_VAR = 'R85CFG'
CONFIG_DEFAULTS = {
    'extension': '.r85',
    'chunk_size': 20 * 4096,
    'log_config': 'logging.toml',
    'style': False,
}

# Helper functions
def load_config() -> EnvConfig:
    cfg = EnvConfig(CONFIG_VAR, defaults=CONFIG_DEFAULTS)
    try: chunk_size = cfg.get_int('chunk_size')
    except ValueError as e: raise click.ClickException(str(e)) from e
    # chunks must hold whole groups both ways (lcm(4, 5) == 20)
    if (chunk_size < 1) or (chunk_size % 20):
        raise click.ClickException(f'{CONFIG_VAR}: chunk_size must be a positive multiple of 20, not {chunk_size}')
    return cfg

def has_ext(file: Path, ext: str) -> bool:
    return file.name.lower().endswith(ext.lower()) and (len(file.name) > len(ext))
def auto_output(file: Path | None, method: typing.Literal['encode', 'decode'], ext: str) -> Path:
    '''Names the output after `file`: adds `ext` when encoding, and removes it when decoding'''
    if file is None:
        raise click.UsageError('Please specify the output filename with --out FILE (--auto-out needs an input FILE)')
    if method == 'encode':
        return file.with_name(f'{file.name}{ext}')
    if not has_ext(file, ext):
        raise click.UsageError(f'Please specify the output filename with --out FILE ({file.name} does not end with {ext})')
    return file.with_name(file.name[:-len(ext)])

def open_file(path: Path | None, mode: str, *, atomic: bool = False) -> typing.BinaryIO:
    '''Opens `path`, or stdin/stdout if it is `None`'''
    try: return click.open_file('-' if path is None else str(path), mode, atomic=atomic)
    except OSError as e:
        raise click.ClickException(f'Cannot open {path}: {e.strerror or e}') from e

def split_key_line(chunks: typing.Iterator[bytes]) -> tuple[bytes, typing.Iterator[bytes]]:
    '''Splits the first line off of `chunks`, returning it (without its line-ending) and the remaining chunks'''
    buf = b''
    for chunk in chunks:
        buf += chunk
        if (i := buf.find(b'\n')) != -1:
            return (buf[:i].removesuffix(b'\r'), itertools.chain((buf[i+1:],), chunks))
    raise click.UsageError('Expected a key on the first line of stdin')

def write_file(out: Path, data: typing.Iterable[bytes]) -> int:
    '''
        Writes `data` into a temporary file next to `out`, which only replaces `out` once all of `data` was written
            On failure, the temporary file is discarded and `out` is left untouched
    '''
    with open_file(out, 'wb', atomic=True) as f:
        return sum(map(f.write, data))
def write_stdout(data: typing.Iterable[bytes], *, buffer: bool) -> int:
    '''Writes `data` to stdout; if `buffer` is true, nothing is written unless all of `data` is produced'''
    if buffer: data = [b''.join(data)]
    with open_file(None, 'wb') as f:
        written = sum(map(f.write, data))
        f.flush()
    return written
#</Header

#> Main >/
@click.command(context_settings={'help_option_names': ('-h', '--help', '-?'), 'max_content_width': 160})
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path), required=False)
@click.option('-e', '--encode', 'encode_', help='Encodes FILE (default if FILE does not have the .r85 extension)', is_flag=True, default=False)
@click.option('-d', '--decode', 'decode_', help='Decodes FILE (default if FILE has the .r85 extension)', is_flag=True, default=False)
@click.option('-o', '--out', type=click.Path(dir_okay=False, path_type=Path), help='The file to write to (defaults to stdout)', default=None)
@click.option('-O', '--auto-out', help='Writes to FILE.r85 when encoding, or FILE without .r85 when decoding', is_flag=True, default=False)
@click.option('-k', '--key', help='A key to obscure/reveal the data with', default=None)
@click.option('-K', '--prompt-key', help='Like --key, but prompts for the key (or, without FILE, reads it from the first line of stdin)', is_flag=True, default=False)
@click.option('-f', '--force', help='Overwrites the output file if it exists', is_flag=True, default=False)
@click.option('-v', '--verbose', help='Logs more (can be repeated)', count=True)
def cli(*, file: Path | None, encode_: bool, decode_: bool, out: Path | None, auto_out: bool,
        key: str | None, prompt_key: bool, force: bool, verbose: int):
    '''
        Encodes or decodes FILE (or stdin) to stdout (or --out)

        Note that a key only changes the symbols that are used, it does *not* encrypt the data

        With no FILE, reads stdin; with no FILE and --prompt-key, the key is the first line of stdin

        Nothing is written if decoding fails, and an existing output file is only replaced once decoding succeeds
    '''
    cfg = load_config()
    loglib.configure(Path(cfg['log_config']), verbosity=verbose, style=cfg.get_bool('style'))
    ext = cfg['extension']
    # Check options
    if encode_ and decode_:
        raise click.UsageError('Please specify either --encode (-e) or --decode (-d), not both')
    if (key is not None) and prompt_key:
        raise click.UsageError('Please specify either --key (-k) or --prompt-key (-K), not both')
    if (out is not None) and auto_out:
        raise click.UsageError('Please specify either --out (-o) or --auto-out (-O), not both')
    method = 'encode' if encode_ else 'decode' if decode_ \
             else 'decode' if (file is not None) and has_ext(file, ext) else 'encode'
    if auto_out: out = auto_output(file, method, ext)
    if out is not None:
        if (file is not None) and out.resolve() == file.resolve():
            raise click.UsageError('The output file cannot be the same as the input FILE')
        if out.exists() and not force:
            raise click.ClickException(f'Output file {out} exists, please use --force (-f) to overwrite')
    # Get key
    if prompt_key and (file is not None):
        key = click.prompt('Key', hide_input=True, err=True)
    # Run
    with open_file(file, 'rb') as inf:
        chunks = iter(partial(inf.read, cfg.get_int('chunk_size')), b'')
        if prompt_key and (file is None):
            key,chunks = split_key_line(chunks)
        logger.verbose('%s %s -> %s', method, '<stdin>' if file is None else file, '<stdout>' if out is None else out)
        data = getattr(R85(key), f'i{method}')(chunks)
        try:
            written = write_stdout(data, buffer=(method == 'decode')) if out is None \
                      else write_file(out, data)
        except (R85Exception, OSError) as e:
            raise click.ClickException(str(e)) from e
    logger.verbose('Wrote %d byte(s)', written)
