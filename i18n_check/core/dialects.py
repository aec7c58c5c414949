"""
Source dialects
===============

The few places where C-family and C# sources differ: which characters prefix
a string literal, how raw/verbatim literals are delimited, and how a resolved
function or variable name is cleaned up. ``SourceReviewer`` runs the same
scanning algorithm for both and asks its dialect about these details.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .string_util import is_name_char

_SHARED_PTR_FACTORIES = ("std::make_shared", "make_shared", "std::shared_ptr", "shared_ptr")


@dataclass
class RawLiteral:
    """Location of a raw literal's content inside the source text."""
    content_start: int
    content_end: int
    # first position after the closing delimiter
    resume_at: int
    # escaped-quote pairs ("") to collapse in the content
    collapse_double_quotes: bool = False


class DialectProfile:
    """Interface for dialect-specific literal and name handling."""

    name = "generic"
    # markers that exempt a line from the line-width check
    raw_markers: Tuple[str, ...] = ()

    def prefix_start(self, text: str, quote_pos: int) -> int:
        """Position of the first prefix character in front of the quote at ``quote_pos``."""
        return quote_pos

    def read_raw_literal(self, text: str, quote_pos: int, prefix_start: int) -> Optional[RawLiteral]:
        """Returns the raw literal starting at ``quote_pos``, or None for an ordinary one.

        A raw literal without its closing delimiter yields a ``RawLiteral``
        whose ``content_end`` is -1.
        """
        return None

    def remove_decorations(self, name: str) -> str:
        return name


def _strip_leading_accessors(name: str) -> str:
    # "::GlobalFunction", "->Method", ".Method"
    if name and name[0] in ':>.':
        return name.lstrip(':>.')
    return name


class CFamilyDialect(DialectProfile):
    """C and C++: ``L``, ``u``, ``U``, ``u8`` prefixes and ``R"delim(...)delim"`` raw strings."""

    name = "c-family"
    raw_markers = ('R"',)

    def prefix_start(self, text: str, quote_pos: int) -> int:
        pos = quote_pos
        if pos > 0 and text[pos - 1] == 'R':
            pos -= 1
        if pos > 1 and text[pos - 2:pos] == 'u8':
            pos -= 2
        elif pos > 0 and text[pos - 1] in 'LuU':
            pos -= 1
        # part of a longer identifier (e.g., a macro ending with 'R'), not a prefix
        if pos != quote_pos and pos > 0 and is_name_char(text[pos - 1]):
            return quote_pos
        return pos

    def read_raw_literal(self, text: str, quote_pos: int, prefix_start: int) -> Optional[RawLiteral]:
        if prefix_start == quote_pos or text[quote_pos - 1] != 'R':
            return None
        open_paren = text.find('(', quote_pos + 1)
        if open_paren == -1:
            return RawLiteral(quote_pos + 1, -1, len(text))
        delimiter = text[quote_pos + 1:open_paren]
        closing = ')' + delimiter + '"'
        end = text.find(closing, open_paren + 1)
        if end == -1:
            return RawLiteral(open_paren + 1, -1, len(text))
        return RawLiteral(open_paren + 1, end, end + len(closing))

    def remove_decorations(self, name: str) -> str:
        name = name.rstrip('&')
        if name.endswith('>'):
            template_start = name.rfind('<')
            if template_start != -1:
                # constructing a shared_ptr, so use the type it is constructing
                if name[:template_start] in _SHARED_PTR_FACTORIES:
                    name = name[template_start + 1:-1]
                else:
                    name = name[:template_start]
        name = _strip_leading_accessors(name)
        # "str.Format" -> "Format", "ptr->Run" -> "Run"
        accessor = min((pos for pos in (name.find('>'), name.find('.')) if pos != -1), default=-1)
        if accessor != -1:
            name = name[accessor + 1:]
        return name


class CSharpDialect(DialectProfile):
    """C#: ``@"..."`` verbatim strings, ``$`` interpolation and ``\"\"\"`` raw literals."""

    name = "csharp"
    raw_markers = ('@"', '"""')

    def prefix_start(self, text: str, quote_pos: int) -> int:
        pos = quote_pos
        while pos > 0 and text[pos - 1] in '@$':
            pos -= 1
        return pos

    @staticmethod
    def _quote_run(text: str, pos: int) -> int:
        end = pos
        while end < len(text) and text[end] == '"':
            end += 1
        return end - pos

    def read_raw_literal(self, text: str, quote_pos: int, prefix_start: int) -> Optional[RawLiteral]:
        opening_quotes = self._quote_run(text, quote_pos)
        # """raw literal""" (any run of three or more quotes)
        if opening_quotes >= 3:
            content_start = quote_pos + opening_quotes
            end = text.find('"' * opening_quotes, content_start)
            if end == -1:
                return RawLiteral(content_start, -1, len(text))
            return RawLiteral(content_start, end, end + opening_quotes)
        if '@' not in text[prefix_start:quote_pos]:
            return None
        # @"verbatim" where "" is an embedded quote
        end, pos = self.find_verbatim_end(text, quote_pos + 1)
        if end == -1:
            return RawLiteral(quote_pos + 1, -1, len(text))
        return RawLiteral(quote_pos + 1, end, pos, collapse_double_quotes=True)

    @staticmethod
    def find_verbatim_end(text: str, pos: int) -> Tuple[int, int]:
        """Finds the closing quote of a verbatim string, stepping over doubled quotes."""
        length = len(text)
        while pos < length:
            if text[pos] != '"':
                pos += 1
            elif pos + 1 < length and text[pos + 1] == '"':
                pos += 2
            else:
                return pos, pos + 1
        return -1, length

    def remove_decorations(self, name: str) -> str:
        name = _strip_leading_accessors(name)
        accessor = name.find('>')
        if accessor != -1:
            name = name[accessor + 1:]
        return name
