#!/bin/python3

#> Main >/
from .cli import cli

cli(prog_name='r85')
