"""
printf placeholder grammar
==========================

A small pyparsing grammar for C-style ``printf`` conversion specifications,
used to compare placeholders between a catalog source string and its
translation::

    %[position$][flags][width][.precision][length]conversion

``%%`` is a literal percent sign and never yields a command.
"""
from __future__ import annotations

import re
from typing import List, Tuple

from pyparsing import Combine, Literal, Opt, Regex, one_of

PERCENT_LITERAL = Literal("%%")
POSITION = Regex(r"[0-9]+\$")
FLAGS = Regex(r"[-+ #0']+")
WIDTH = Regex(r"[0-9]+|\*")
PRECISION = Regex(r"\.(?:[0-9]+|\*)?")
LENGTH = one_of("hh h ll l L q j z Z t I32 I64 I")
CONVERSION = Regex(r"[diouxXeEfFgGaAcCsSpn]")

PRINTF_COMMAND = Combine(
    Literal("%")
    + Opt(POSITION)
    + Opt(FLAGS)
    + Opt(WIDTH)
    + Opt(PRECISION)
    + Opt(LENGTH)
    + CONVERSION
)

_PRINTF_TOKEN = (PERCENT_LITERAL | PRINTF_COMMAND).leave_whitespace()

_POSITIONAL_RE = re.compile(r'^%([0-9]+)\$(.*)')
_SINGLE_INTEGER_RE = re.compile(r'%([+]|[-] #)?(d|i|o|u|zu|c|C|e|E|l|I|I32|I64)(l)?')


def scan_printf_commands(text: str) -> List[str]:
    """Returns every printf command in ``text``, in order of appearance."""
    commands = []
    for tokens, _start, _end in _PRINTF_TOKEN.scan_string(text):
        token = tokens[0]
        if token != "%%":
            commands.append(token)
    return commands


def order_positional_commands(commands: List[str]) -> Tuple[List[str], str]:
    """Reorders positional commands (``%2$s``) by their argument position.

    Returns the adjusted command list and an explanation when the commands
    are inconsistent (empty if they are fine). Positional arguments are
    rewritten without their position (``%2$s`` -> ``%s``) so they compare
    equal to the same non-positional command.
    """
    positional = {}
    non_positional = 0
    for command in commands:
        match = _POSITIONAL_RE.match(command)
        if match is None:
            non_positional += 1
            continue
        position = int(match.group(1)) - 1
        adjusted = "%" + match.group(2)
        previous = positional.setdefault(position, adjusted)
        if previous != adjusted:
            return [], (f"('{command}': positional argument provided more than once, "
                        "but with different data types.)")

    if not positional:
        return list(commands), ""
    error_info = ""
    if non_positional:
        error_info = "(Positional and non-positional commands mixed in the same printf string.)"
    return [positional[key] for key in sorted(positional)], error_info


def load_printf_commands(text: str) -> Tuple[List[str], str]:
    """Scans and normalizes the printf commands of a string for comparison."""
    return order_positional_commands(scan_printf_commands(text))


def is_single_integer_command(text: str) -> bool:
    """True for strings that are only a lone integer/character printf command."""
    return _SINGLE_INTEGER_RE.fullmatch(text) is not None
