"""
Context resolver
================

Walks backward from a string literal to find what it belongs to: the
function call it is an argument of, the variable it is assigned to (with the
variable's declared type when it can be read), or nothing at all (an
"orphan", e.g. a comparison or a ``return``).

Wrapper constructors and legacy text macros (``_T("...")``,
``std::wstring("...")``) are stepped over so the literal is attributed to
whatever encloses the wrapper.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from .heuristics import HeuristicTables
from .string_util import find_last_of, is_name_char_ex, is_space

# type qualifiers that are read past to get to the real type
_TYPE_DECORATORS = frozenset({"const", "static", "constexpr", "volatile", "mutable",
                              "inline", "unsigned", "signed", "extern", "thread_local"})

DiagnosticSink = Callable[[str, str, Optional[int]], None]


@dataclass
class ResolvedContext:
    """What a string literal was found in."""
    function_name: str = ""
    variable_name: str = ""
    variable_type: str = ""
    deprecated_macro: str = ""
    parameter_position: int = 0
    # position of the resolved name; resolving again from here finds the outer call
    outer_position: int = 0


class ContextResolver:
    """Backward scanner recovering the call or assignment around a literal.

    ``remove_decorations`` is the dialect-specific cleanup applied to every
    name that is read (templates, namespaces, member accessors).
    """

    def __init__(self, tables: HeuristicTables,
                 remove_decorations: Callable[[str], str],
                 on_diagnostic: Optional[DiagnosticSink] = None):
        self.tables = tables
        self.remove_decorations = remove_decorations
        self.on_diagnostic = on_diagnostic

    def _log(self, subject: str, message: str, position: Optional[int]) -> None:
        if self.on_diagnostic is not None:
            self.on_diagnostic(subject, message, position)

    @staticmethod
    def _read_name_backward(text: Sequence[str], pos: int, sentinel: int, allow_ampersand: bool = False) -> int:
        """Returns the first index of the name that ends at ``pos``."""
        while pos > sentinel and (is_name_char_ex(text[pos]) or (allow_ampersand and text[pos] == '&')):
            pos -= 1
        # stopped on a separator rather than on the start of the buffer
        if not is_name_char_ex(text[pos]):
            pos += 1
        return pos

    def _read_variable_type(self, text: Sequence[str], name_pos: int, sentinel: int):
        """Reads the declared type in front of the name at ``name_pos``.

        Returns ``(type, position)``; the type is empty if none could be read.
        """
        def load(pos: int):
            if pos <= sentinel:
                return "", pos
            pos -= 1
            while pos > sentinel and is_space(text[pos]):
                pos -= 1
            type_end = pos + 1
            # step over template arguments to the root type
            if pos > sentinel and text[pos] == '>':
                # pointer accessor, not a declaration
                if pos - 1 > sentinel and text[pos - 1] == '-':
                    return "", pos
                opening_angle = find_last_of(text, '<', pos, sentinel)
                if opening_angle == -1:
                    self._log("Template parse error",
                              "Unable to find opening < for template variable.", pos)
                    return "", pos
                pos = opening_angle
            pos = self._read_name_backward(text, pos, sentinel, allow_ampersand=True)
            variable_type = ''.join(text[pos:type_end])
            # must be a word, not something like "<<"
            if variable_type and not variable_type[0].isalpha():
                variable_type = ""
            return self.remove_decorations(variable_type), pos

        variable_type, pos = load(name_pos)
        if variable_type in _TYPE_DECORATORS:
            variable_type, pos = load(pos)
        # case labels, else, return, ...
        if self.tables.is_keyword(variable_type) or variable_type.endswith(':'):
            variable_type = ""
        return variable_type, pos

    def read_var_or_function_name(self, text: Sequence[str], start: int, sentinel: int = 0) -> ResolvedContext:
        """Resolves the context of a literal whose opening quote follows ``start``.

        ``start`` is the last character before the quote (after any string
        prefix and whitespace); ``sentinel`` is the lowest position the scan
        may visit.
        """
        tables = self.tables
        result = ResolvedContext(outer_position=start)
        close_paren_count = 0
        close_brace_count = 0
        quote_wrapped_in_ctor = False
        pos = start

        while pos > sentinel:
            ch = text[pos]
            if ch == ')':
                close_paren_count += 1
                pos -= 1
            elif ch == '}':
                close_brace_count += 1
                pos -= 1
            elif ch in '({':
                opening = ch
                pos -= 1
                if opening == '(':
                    close_paren_count -= 1
                else:
                    close_brace_count -= 1
                # closing a nested call's parameter list, keep looking for the outer call
                if close_paren_count >= 0 and close_brace_count >= 0:
                    continue
                while pos > sentinel and is_space(text[pos]):
                    pos -= 1
                name_pos = self._read_name_backward(text, pos, sentinel)
                result.outer_position = name_pos
                function_name = ''.join(text[name_pos:pos + 1])
                has_extraneous_parens = not function_name
                function_name = self.remove_decorations(function_name)
                if has_extraneous_parens or function_name in tables.ctors_to_ignore:
                    pos = min(pos, name_pos)
                    if opening == '(':
                        close_paren_count = 0
                    else:
                        close_brace_count = 0
                    if tables.deprecated_macro_message(function_name) is not None:
                        result.deprecated_macro = function_name
                    # expect a '+', ',' or opening paren in front of the wrapper next
                    if text[pos] not in ',+&=':
                        quote_wrapped_in_ctor = True
                    if not has_extraneous_parens:
                        pos -= 1
                    continue
                # constructing a type whose arguments are never translatable
                if tables.is_ignored_type(function_name):
                    result.function_name = function_name
                    break
                if function_name:
                    result.function_name = function_name
                    # a constructor call such as "wxFont font(...)"
                    if not result.variable_name and \
                            not tables.is_i18n_function(function_name) and \
                            not tables.is_non_i18n_function(function_name) and \
                            function_name not in tables.internal_functions and \
                            not tables.is_log_function(function_name) and \
                            not tables.is_keyword(function_name):
                        variable_type, _ = self._read_variable_type(text, name_pos, sentinel)
                        if variable_type:
                            result.variable_name = function_name
                            result.variable_type = variable_type
                            result.function_name = ""
                    break
            elif ch == '=' and (pos + 1 >= len(text) or text[pos + 1] != '=') and \
                    text[pos - 1] not in '=!><':
                pos -= 1
                # skip spaces and "+=" tokens
                while pos > sentinel and (is_space(text[pos]) or text[pos] == '+'):
                    pos -= 1
                # skip array subscripts
                if pos > sentinel and text[pos] == ']':
                    while pos > sentinel and text[pos] != '[':
                        pos -= 1
                    pos -= 1
                    while pos > sentinel and is_space(text[pos]):
                        pos -= 1
                name_pos = self._read_name_backward(text, pos, sentinel)
                result.outer_position = name_pos
                result.variable_name = ''.join(text[name_pos:pos + 1])
                result.variable_type, _ = self._read_variable_type(text, name_pos, sentinel)
                if result.variable_name:
                    break
            elif is_space(ch):
                pos -= 1
            elif quote_wrapped_in_ctor:
                if ch not in ',+&':
                    break
                quote_wrapped_in_ctor = False
            # "<<" stream operator; also steps over a ')' before it, as in "qDebug() << ..."
            elif ch == '<':
                pos -= 1
                if pos > sentinel and text[pos] == '<':
                    pos -= 1
                    while pos > sentinel and is_space(text[pos]):
                        pos -= 1
                    if pos > sentinel and text[pos] == ')':
                        pos -= 1
            else:
                if ch == ',':
                    result.parameter_position += 1
                pos -= 1

        return result
