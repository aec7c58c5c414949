"""
Lexical primitives
==================

Character classes, escape handling and small search helpers shared by the
scanners and the classifier. Everything here works on plain ``str`` values or
on the mutable ``list`` buffers the scanners walk.
"""
from __future__ import annotations

import bisect
import re
from typing import List, Optional, Sequence, Tuple

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_APOSTROPHES = frozenset("'’‘`")
_WEB_EXTENSIONS = frozenset({"au", "biz", "ca", "com", "edu", "gov", "ly", "org", "uk"})
_URL_PROTOCOLS = ("http:", "https:", "ftp:", "www.", "mailto:", "file:", "gopher:")
_POSIX_ROOTS = ("usr/", "var/", "tmp/", "sys/", "srv/", "mnt/", "etc/", "dev/",
                "bin/", "sbin/", "root/", "proc/", "boot/", "home/")

_HEX_COLOR_RE = re.compile(r'#[0-9a-fA-F]{6}')
_BR_RE = re.compile(r'<br[ ]*/>')
# longer length modifiers first so "%lu" is consumed whole
_PRINTF_COMMAND_RE = re.compile(
    r'([^%\\]|^|\b)%[-+0 #]{0,4}[.\d]*'
    r'(?:llu|lld|lu|ld|lx|lX|lo|zu|c|C|d|i|o|u|x|X|e|E|f|g|G|a|A|n|p|s|S|Z|Y|H|M)')
_LINE_BREAK_CHARS = str.maketrans({"\n": " ", "\t": " ", "\r": " "})
_ABBREVIATION_RE = re.compile(r"^[A-Za-z]{1,4}\.$")


def is_name_char(ch: str) -> bool:
    """Characters that can appear in a C-like identifier."""
    return ch.isalnum() or ch == '_'


def is_name_char_ex(ch: str) -> bool:
    """Identifier characters plus member/namespace/template punctuation."""
    return ch.isalnum() or ch in '_.:<>'


def is_space(ch: str) -> bool:
    return ch in ' \t\r\n\f\v'


def is_hex_digit(ch: str) -> bool:
    return ch in _HEX_DIGITS


def count_preceding_backslashes(text: Sequence[str], pos: int, start: int = 0) -> int:
    """Number of consecutive backslashes immediately before ``pos``."""
    count = 0
    pos -= 1
    while pos >= start and text[pos] == '\\':
        count += 1
        pos -= 1
    return count


def find_unescaped_char(text: Sequence[str], ch: str, start: int = 0, end: Optional[int] = None) -> int:
    """Finds ``ch`` not escaped by an odd run of backslashes. Returns -1 if not found."""
    end = len(text) if end is None else end
    pos = start
    while pos < end:
        if text[pos] == ch and count_preceding_backslashes(text, pos, start) % 2 == 0:
            return pos
        pos += 1
    return -1


def _matches_at(text: Sequence[str], pos: int, tag: str) -> bool:
    return ''.join(text[pos:pos + len(tag)]) == tag


def find_matching_close_tag(text: Sequence[str], open_tag: str, close_tag: str, start: int = 0) -> int:
    """Finds the close tag matching an opening tag that ends just before ``start``.

    Nested open/close pairs in between are skipped. Works for single
    characters as well as multi-character tags (``"#if"``/``"#endif"``).
    Returns -1 if no match exists.
    """
    depth = 0
    pos = start
    length = len(text)
    while pos < length:
        ch = text[pos]
        if ch == open_tag[0] and _matches_at(text, pos, open_tag):
            depth += 1
            pos += len(open_tag)
            continue
        if ch == close_tag[0] and _matches_at(text, pos, close_tag):
            if depth == 0:
                return pos
            depth -= 1
        pos += 1
    return -1


def find_last_of(text: Sequence[str], chars: str, pos: int, start: int = 0) -> int:
    """Searches backward from ``pos`` (inclusive) for any of ``chars``."""
    while pos >= start:
        if text[pos] in chars:
            return pos
        pos -= 1
    return -1


def replace_escaped_control_chars(text: str) -> str:
    """Replaces ``\\n``, ``\\r`` and ``\\t`` escapes with two spaces."""
    chars = list(text)
    for i in range(len(chars) - 1):
        if chars[i] == '\\' and chars[i + 1] in 'nrt' and \
                (i == 0 or chars[i - 1] != '\\'):
            chars[i] = chars[i + 1] = ' '
    return ''.join(chars)


def remove_escaped_unicode_values(text: str) -> str:
    """Blanks out ``\\uXXXX``, ``\\UXXXXXXXX``, ``\\xXXXX`` and ``\\xXX`` escapes."""
    chars = list(text)
    length = len(chars)

    def hex_run(begin: int, count: int) -> bool:
        return begin + count <= length and all(is_hex_digit(c) for c in chars[begin:begin + count])

    i = 0
    while i < length:
        if chars[i] == '\\' and (i == 0 or chars[i - 1] != '\\') and i + 1 < length:
            marker = chars[i + 1]
            width = 0
            if marker == 'u' and hex_run(i + 2, 4):
                width = 6
            elif marker == 'U' and hex_run(i + 2, 8):
                width = 10
            elif marker == 'x' and hex_run(i + 2, 4):
                width = 6
            elif marker == 'x' and hex_run(i + 2, 2):
                width = 4
            if width:
                chars[i:i + width] = ' ' * width
                i += width
                continue
        i += 1
    return ''.join(chars)


def remove_hex_color_values(text: str) -> str:
    return _HEX_COLOR_RE.sub('', text)


def remove_printf_commands(text: str) -> str:
    """Removes printf commands (e.g. ``%d``, ``%-5.06f``) while keeping ``%%``."""
    return _PRINTF_COMMAND_RE.sub(r'\1', text)


def has_surrounding_spaces(text: str) -> bool:
    return bool(text) and (text[0] in ' \t' or text[-1] in ' \t')


def is_string_ambiguous(text: str) -> bool:
    """Whether a message is too terse to translate without a comment.

    That is printf commands joined only by punctuation (``"%s (%s)"``) or a
    lone abbreviation (``"Min."``).
    """
    text = text.strip()
    if _ABBREVIATION_RE.match(text):
        return True
    if len(_PRINTF_COMMAND_RE.findall(text)) < 2:
        return False
    return not any(ch.isalnum() for ch in remove_printf_commands(text))


def replace_line_breaks(text: str) -> str:
    return text.translate(_LINE_BREAK_CHARS)


def replace_html_breaks(text: str) -> str:
    return _BR_RE.sub('\n', text)


def _strip_possessive(text: str) -> str:
    if len(text) >= 3 and text[-2] in _APOSTROPHES and text[-1] in 'sS':
        return text[:-2]
    return text


def is_url(text: str) -> bool:
    """Heuristic check for web addresses (``www.x.org``, ``ibm.com/``, ``mailto:``)."""
    if len(text) < 5:
        return False
    lowered = text.lower()
    if lowered.startswith(_URL_PROTOCOLS):
        return True

    # a URL missing its "www" prefix (e.g., ibm.com/index.html)
    first_slash = text.find('/')
    if first_slash != -1:
        last_dot = text.rfind('.', 0, first_slash)
        if last_dot != -1 and last_dot + 4 == first_slash and \
                text[last_dot + 1:first_slash].isalpha():
            return True

    text = _strip_possessive(text)
    period = text.rfind('.')
    if period != -1 and period < len(text) - 1:
        return text[period + 1:] in _WEB_EXTENSIONS
    return False


def _is_typo_case(first: str, second: str) -> bool:
    # "end of sentence.Next one" is a missing space, not a file name
    return first.isupper() and not second.isupper()


def is_file_address(text: str) -> bool:
    """Heuristic check for file paths, file names, URLs and email addresses."""
    if len(text) < 5:
        return False
    if is_url(text):
        return True
    # UNC path
    if text.startswith('\\\\'):
        return True
    # Windows path
    if text[0].isalpha() and text[1] == ':' and text[2] in '\\/':
        return True
    # UNIX path
    if text[0] == '/' and text.find('/', 2) != -1:
        return True
    if '/' in text and text.startswith(_POSIX_ROOTS):
        return True

    # email address
    at_sign = text.find('@', 1)
    if at_sign != -1 and text.find(' ', 1) == -1:
        dot = text.find('.', at_sign)
        if dot != -1 and dot < len(text) - 1:
            return True

    # anything this long is more likely a sentence ending with a file name
    if len(text) > 128:
        return False

    # a sentence that mentions a file ("Failed adding book helpfiles/another.hhp")
    if any(is_space(ch) for ch in text):
        return False

    text = _strip_possessive(text)
    length = len(text)
    # 3-letter extension
    if length >= 4 and text[-4] == '.' and text[-3:].isalpha():
        if _is_typo_case(text[-3], text[-2]):
            return False
        # a file filter (e.g., "*.txt")
        return not (length >= 5 and text[-5] == '*')
    # 4-letter Office XML extension
    if length >= 5 and text[-5] == '.' and text[-4:-1].isalpha() and text[-1] in 'xX':
        if _is_typo_case(text[-4], text[-3]):
            return False
        return not (length >= 6 and text[-6] == '*')
    if length >= 5 and text[-5] == '.' and text[-4:].lower() == 'html':
        return not (length >= 6 and text[-6] == '*')
    # translation, source and doc files
    if length >= 3 and text[-3] == '.' and text[-2:].lower() in ('mo', 'po', 'cs', 'js', 'db', 'md'):
        return True
    # tarball
    if length >= 7 and text[-7:-2].lower() == '.tar.':
        return not _is_typo_case(text[-4], text[-3])
    # C header/source, common in documentation
    if length >= 3 and text[-2] == '.' and text[-1] in 'hc':
        return True
    return False


class LineIndex:
    """Offset to (line, column) lookups for one text, 1-based.

    Scanners blank out processed spans but keep line breaks in place, so an
    index built from the original text stays valid for the working buffer.
    """

    _BREAK_RE = re.compile(r'\r\n|\r|\n')

    def __init__(self, text: str):
        self._starts: List[int] = [0]
        self._starts.extend(match.end() for match in self._BREAK_RE.finditer(text))
        self._length = len(text)

    def locate(self, pos: Optional[int]) -> Optional[Tuple[int, int]]:
        if pos is None or pos < 0 or pos > self._length:
            return None
        line = bisect.bisect_right(self._starts, pos)
        return line, pos - self._starts[line - 1] + 1
