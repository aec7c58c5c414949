"""
Source scanners
===============

Forward-scanning state machine shared by the C-family and C# reviewers.

The scanner walks a mutable copy of the file. Comments, preprocessor blocks,
inline assembly and every string literal it has consumed are blanked out
(line breaks are kept so positions stay valid), which lets the backward
context resolver look at "code only" when it inspects what surrounds the
next literal.
"""
from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple

from .context_resolver import ContextResolver, ResolvedContext
from .dialects import CFamilyDialect, CSharpDialect, DialectProfile
from .exceptions import ParseError
from .heuristics import HeuristicTables
from .models import ReviewStyle, UsageInfo
from .reviewer import Reviewer
from .string_util import (count_preceding_backslashes, find_last_of, find_matching_close_tag,
                          find_unescaped_char, is_name_char, is_space)

_MULTILINE_DIRECTIVES = ("if", "ifdef", "ifndef", "else", "elif", "endif", "undef",
                         "define", "error", "warning")
_SINGLE_LINE_DIRECTIVES = ("pragma", "include", "region", "endregion", "line", "nullable")

# ranges of Windows resource IDs (MFC technical note 20)
_MENU_ID_PARTS = ("IDR_", "IDD_", "IDM_", "IDC_", "IDI_", "IDB_")
_STRING_ID_PARTS = ("IDS_", "IDP_")
_MFC_ID_SUFFIXES = ("R_", "D_", "C_", "I_", "B_", "S_", "M_", "P_")
_GENERIC_IDS = ("wxID_ANY", "wxID_NONE", "-1", "0")


class SourceReviewer(Reviewer):
    """Extracts and classifies string literals from C-family or C# source."""

    def __init__(self, dialect: Optional[DialectProfile] = None,
                 tables: Optional[HeuristicTables] = None,
                 review_style: ReviewStyle = ReviewStyle.DEFAULT_CHECKS,
                 min_words: int = 2,
                 allow_punctuation_only: bool = False,
                 log_messages_can_be_translatable: bool = True,
                 exceptions_should_be_translatable: bool = True,
                 max_line_length: int = 120):
        super().__init__(tables, review_style, min_words, allow_punctuation_only,
                         log_messages_can_be_translatable, exceptions_should_be_translatable)
        self.dialect = dialect if dialect is not None else CFamilyDialect()
        self.max_line_length = max_line_length
        self.resolver = ContextResolver(self.tables, self.dialect.remove_decorations,
                                        self.log_message)

        self._buffer: List[str] = []
        self._source = ""

        self._eol_re = re.compile(r'[\r\n]')
        # integer format macros that join two literals ("%" PRId64 "\n")
        self._printf_macro_re = re.compile(
            r'PR[IN][uidoxX](?:(?:FAST|LEAST)?(?:8|16|32|64)|MAX|PTR)(?![A-Za-z0-9_])')
        self._debug_re = re.compile(r'_*DEBUG_*')
        self._release_re = re.compile(r'NDEBUG|_*RELEASE_*')
        self._debug_level_re = re.compile(r'[a-zA-Z_]*DEBUG_LEVEL|0')

        names = sorted(self.tables.deprecated_functions, key=len, reverse=True)
        self._deprecated_function_re = re.compile(
            r'(?<![A-Za-z0-9_])(' + '|'.join(re.escape(name) for name in names) + r')(?=[^A-Za-z0-9_])'
        ) if names else None

        self._define_id_re = re.compile(
            r'^[ \t]*#[ \t]*define[ \t]+([A-Za-z0-9_]+)[ \t]+([^\r\n]*)', re.MULTILINE)
        self._const_id_re = re.compile(
            r'\b(?:const|constexpr)\s+(?:static\s+)?(?:unsigned\s+)?'
            r'(?:int|long|short|UINT|DWORD|WORD|int32_t|uint32_t|wxWindowID|auto)\s+'
            r'([A-Za-z0-9_]+)\s*=\s*([^;,\r\n]*)')
        self._id_name_re = re.compile(r'([a-zA-Z0-9_]*?)(ID)([a-zA-Z0-9_]*)')
        self._id_part_re = re.compile(r'[a-zA-Z0-9_]*?(ID[A-Z]?_?)')
        self._number_re = re.compile(r'-?[0-9]+')

    # ------------------------------------------------------------------
    # entry point
    # ------------------------------------------------------------------

    def scan(self, text: str, file_name: str = "") -> None:
        """Reviews one source file; call ``review_strings`` after the last file."""
        if not text:
            return
        self._begin_file(text, file_name)
        try:
            self.load_id_assignments(text)
            self.load_deprecated_functions(text)
            self._source = text
            self._buffer = list(text)
            self._scan()
        except ParseError as exc:
            # keep what was found before the anomaly
            self.log_message("Parse error", str(exc), exc.position)
        finally:
            self._buffer = []
            self._source = ""
            self._end_file()

    def _scan(self) -> None:
        buf = self._buffer
        length = len(buf)
        pos = 0
        while pos < length:
            ch = buf[pos]
            if ch == '/':
                pos = self._process_comment(pos)
            elif ch == '#':
                pos = self._process_preprocessor_directive(pos)
            elif (pos == 0 or not is_name_char(buf[pos - 1])) and self._is_assembly_block(pos):
                pos = self._process_assembly_block(pos)
            elif ch == '"':
                pos = self._process_literal(pos)
            elif ch == ';' and pos + 1 < length and buf[pos + 1] == '}':
                self.log_message("MISSING SPACE",
                                 "Space or newline should be inserted between ';' and '}'.", pos)
                pos += 1
            else:
                self._check_formatting(pos)
                pos += 1
        # a last line without a line break
        if length and buf[-1] not in '\r\n':
            self._check_line_width(length)

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _clear(self, start: int, end: int) -> None:
        """Blanks a processed span, keeping line breaks."""
        buf = self._buffer
        for i in range(max(start, 0), min(end, len(buf))):
            if buf[i] not in '\r\n':
                buf[i] = ' '

    def _line_end(self, pos: int) -> int:
        match = self._eol_re.search(self._source, pos)
        return match.start() if match else len(self._source)

    def _skip_spaces(self, pos: int) -> int:
        src = self._source
        while pos < len(src) and is_space(src[pos]):
            pos += 1
        return pos

    # ------------------------------------------------------------------
    # comments
    # ------------------------------------------------------------------

    def _process_comment(self, pos: int) -> int:
        src = self._source
        if pos + 1 >= len(src):
            return pos + 1
        if src[pos + 1] == '*':
            end = src.find('*/', pos + 2)
            if end == -1:
                raise ParseError("Block comment is missing its closing '*/'.", pos)
            self._clear(pos, end + 2)
            return end + 2
        if src[pos + 1] == '/' and pos + 2 < len(src):
            end = self._line_end(pos)
            # something like "//--------" is OK
            if self.is_enabled(ReviewStyle.CHECK_SPACE_AFTER_COMMENT) and \
                    src[pos + 2].isalnum() and src[pos + 2] != '-':
                self.results.comments_missing_space.append(self.make_record("", UsageInfo(), pos))
            self._clear(pos, end)
            return end
        return pos + 1

    # ------------------------------------------------------------------
    # preprocessor
    # ------------------------------------------------------------------

    def _find_section_end(self, pos: int) -> int:
        src = self._source
        candidates = []
        for tag in ("#elif", "#endif"):
            found = find_matching_close_tag(src, "#if", tag, pos)
            if found != -1:
                candidates.append((found, tag))
        if not candidates:
            raise ParseError("Debug preprocessor block is missing its closing '#endif'.", pos)
        found, tag = min(candidates)
        return found + len(tag)

    def _skip_debug_block(self, start: int) -> Optional[int]:
        """End of a debug-only ``#if`` section starting at ``start``, or None."""
        src = self._source
        for directive, symbol_re in (("ifndef", self._release_re),
                                     ("ifdef", self._debug_re),
                                     ("if defined", self._debug_re),
                                     ("if", self._debug_level_re)):
            if not src.startswith(directive, start):
                continue
            symbol_start = start + len(directive)
            while symbol_start < len(src) and (is_space(src[symbol_start]) or src[symbol_start] == '('):
                symbol_start += 1
            symbol_end = symbol_start
            while symbol_end < len(src) and is_name_char(src[symbol_end]):
                symbol_end += 1
            if symbol_re.fullmatch(src[symbol_start:symbol_end]):
                return self._find_section_end(symbol_end)
            return None
        return None

    def _directive_end(self, start: int) -> int:
        """End of a directive, following backslash line continuations."""
        src = self._source
        end = start
        while end < len(src):
            if src[end] in '\r\n':
                back = end
                while back > start and is_space(src[back]):
                    back -= 1
                if not (back > start and src[back] == '\\'):
                    break
            end += 1
        return end

    def _process_define(self, pos: int, end: int) -> int:
        """Reviews ``#define NAME "text"``; returns where scanning resumes."""
        src = self._source
        length = len(src)
        while pos < length and src[pos] in ' \t':
            pos += 1
        if pos >= length:
            return end
        term_end = pos
        while term_end < end and is_name_char(src[term_end]):
            term_end += 1
        defined_term = src[pos:term_end]

        pos = term_end + 1
        while pos < length and src[pos] in ' \t(':
            pos += 1
        if pos >= length:
            return end
        function_end = pos
        while function_end < length and is_name_char(src[function_end]):
            function_end += 1
        # "#define NAME _T("text")"
        if function_end < length and src[function_end] == '(' and \
                src[pos:function_end] in self.tables.ctors_to_ignore:
            pos = function_end + 1

        if pos < length and (src[pos] == '"' or (pos + 1 < length and src[pos + 1] == '"')):
            quote = pos if src[pos] == '"' else pos + 1
            quote_end = find_unescaped_char(src, '"', quote + 1)
            if quote_end != -1:
                self.process_variable("", defined_term, src[quote + 1:quote_end], quote + 1)
            return end
        # a constant such as "#define VALUE 0x5"
        if '(' not in src[pos:end]:
            return end
        # a function-like macro: let the main loop review its body
        return pos

    def _process_preprocessor_directive(self, pos: int) -> int:
        src = self._source
        start = pos + 1
        while start < len(src) and src[start] in ' \t':
            start += 1

        block_end = self._skip_debug_block(start)
        if block_end is not None:
            self._clear(pos, block_end)
            return block_end

        if src.startswith(_SINGLE_LINE_DIRECTIVES, start):
            end = min(self._line_end(start) + 1, len(src))
            self._clear(pos, end)
            return end
        if src.startswith(_MULTILINE_DIRECTIVES, start):
            end = self._directive_end(start)
            if src.startswith("define", start):
                end = self._process_define(start + len("define"), end)
            self._clear(pos, end)
            return end
        # unknown directive, just step over the '#'
        return start + 1

    # ------------------------------------------------------------------
    # inline assembly
    # ------------------------------------------------------------------

    def _is_assembly_block(self, pos: int) -> bool:
        src = self._source
        if src.startswith(("asm ", "__asm "), pos):
            return True
        return src.startswith("__asm__", pos) and pos + 7 < len(src) and \
            (is_space(src[pos + 7]) or src[pos + 7] == '(')

    def _process_assembly_block(self, pos: int) -> int:
        src = self._source
        if src.startswith(("__asm__", "asm"), pos):
            # GCC: asm [volatile] ( ... )
            start = self._skip_spaces(pos + (7 if src.startswith("__asm__", pos) else 3))
            for modifier in ("__volatile__", "volatile"):
                if src.startswith(modifier, start):
                    start = self._skip_spaces(start + len(modifier))
                    break
            open_tag, close_tag, command = '(', ')', "asm"
        else:
            # MSVC: __asm { ... }
            start = self._skip_spaces(pos + 5)
            open_tag, close_tag, command = '{', '}', "__asm"

        if start < len(src) and src[start] == open_tag:
            end = find_matching_close_tag(src, open_tag, close_tag, start + 1)
            if end == -1:
                raise ParseError(f"Missing closing '{close_tag}' in {command} block.", start)
            self._clear(pos, end + 1)
            return end + 1
        if start < len(src):
            end = min(self._line_end(start) + 1, len(src))
            self._clear(pos, end)
            return end
        return len(src)

    # ------------------------------------------------------------------
    # string literals
    # ------------------------------------------------------------------

    def _read_quoted_segments(self, pos: int) -> Tuple[Optional[List[Tuple[int, int]]], int]:
        """Reads an ordinary literal plus any literals joined to it.

        Returns the (start, end) content spans and the position after the
        last closing quote; spans are None if the literal never closes.
        """
        src = self._source
        segments = []
        segment_start = search = pos
        while True:
            end = src.find('"', search)
            if end == -1:
                return None, len(src)
            # "hello\\\" there" has an escaped quote, "hello\\" does not
            if count_preceding_backslashes(src, end) % 2:
                search = end + 1
                continue
            segments.append((segment_start, end))
            following = self._skip_spaces(end + 1)
            if following < len(src) and src[following] == '"':
                segment_start = search = following + 1
                continue
            macro = self._printf_macro_re.match(src, following)
            if macro:
                following = self._skip_spaces(macro.end())
                if following < len(src) and src[following] == '"':
                    segment_start = search = following + 1
                    continue
            return segments, end + 1

    def _resolve_context(self, quote: int, prefix_start: int) -> ResolvedContext:
        buf = self._buffer
        start = prefix_start - 1
        while start > 0 and is_space(buf[start]):
            start -= 1
        if start < 0:
            return ResolvedContext()
        if is_name_char(buf[start]):
            # a #defined name or keyword right in front of the quote
            name_start = start
            while name_start > 0 and is_name_char(buf[name_start - 1]):
                name_start -= 1
            name = ''.join(buf[name_start:start + 1])
            if self.tables.is_keyword(name):
                return ResolvedContext()
            return ResolvedContext(variable_name=name, outer_position=name_start)
        return self.resolver.read_var_or_function_name(buf, start)

    def _process_literal(self, quote: int) -> int:
        buf = self._buffer
        src = self._source
        # escaped quote, or a quote character literal ('"')
        if quote > 1 and buf[quote - 1] == '\\' and buf[quote - 2] != '\\':
            return quote + 1
        if quote > 1 and buf[quote - 1] == "'" and quote + 1 < len(buf) and buf[quote + 1] == "'":
            return quote + 1

        prefix_start = self.dialect.prefix_start(src, quote)
        context = self._resolve_context(quote, prefix_start)

        raw = self.dialect.read_raw_literal(src, quote, prefix_start)
        if raw is not None:
            if raw.content_end == -1:
                raise ParseError("Raw string is missing its closing delimiter.", quote)
            text = src[raw.content_start:raw.content_end]
            if raw.collapse_double_quotes:
                text = text.replace('""', '"')
            content_start, resume_at = raw.content_start, raw.resume_at
        else:
            segments, resume_at = self._read_quoted_segments(quote + 1)
            if segments is None:
                return quote + 1
            text = ''.join(src[start:end] for start, end in segments)
            content_start = segments[0][0]

        self.process_quote(text, content_start, context)
        self._clear(content_start, resume_at)
        return resume_at

    def process_quote(self, text: str, pos: int, context: ResolvedContext) -> None:
        """Files a literal under the bucket its context calls for."""
        tables = self.tables
        results = self.results
        if context.deprecated_macro and self.is_enabled(ReviewStyle.CHECK_DEPRECATED_MACROS):
            results.deprecated_macros.append(self._deprecated_macro_record(context.deprecated_macro, pos))

        if context.variable_name:
            self.process_variable(context.variable_type, context.variable_name, text, pos)
            return
        function_name = context.function_name
        if not function_name or tables.is_keyword(function_name):
            self.classify_non_localizable_string(text, UsageInfo.orphan(), pos)
            return

        usage = UsageInfo.function(function_name)
        if self.classifier.is_diagnostic_function(function_name):
            results.internal_strings.append(self.make_record(text, usage, pos))
        elif tables.is_i18n_function(function_name):
            # context arguments of functions like tr() or wxGetTranslation()
            if tables.is_translation_context_parameter(function_name, context.parameter_position):
                results.internal_strings.append(self.make_record(text, usage, pos))
            else:
                results.localizable_strings.append(self.make_record(text, usage, pos))
                if self.is_enabled(ReviewStyle.CHECK_SUSPECT_L10N_STRING_USAGE):
                    self._review_outer_call(text, pos, context.outer_position)
        elif tables.is_non_i18n_function(function_name):
            results.marked_as_non_localizable_strings.append(self.make_record(text, usage, pos))
        elif tables.is_ignored_type(function_name):
            results.internal_strings.append(self.make_record(text, usage, pos))
        else:
            self.classify_non_localizable_string(text, usage, pos)

    def _deprecated_macro_record(self, macro: str, pos: int):
        message = self.tables.deprecated_macro_message(macro) or ""
        return self.make_record(macro, UsageInfo.function(message), pos)

    def _review_outer_call(self, text: str, pos: int, outer_position: int) -> None:
        """Flags translatable text passed on to an internal function or variable."""
        outer = self.resolver.read_var_or_function_name(self._buffer, outer_position)
        if outer.deprecated_macro and self.is_enabled(ReviewStyle.CHECK_DEPRECATED_MACROS):
            self.results.deprecated_macros.append(self._deprecated_macro_record(outer.deprecated_macro, pos))

        suspect = self.results.localizable_strings_in_internal_call
        if self.classifier.is_diagnostic_function(outer.function_name) or \
                self.tables.is_ignored_type(outer.function_name):
            suspect.append(self.make_record(text, UsageInfo.function(outer.function_name), pos))
        elif self.tables.is_ignored_type(outer.variable_type) or \
                (outer.variable_name and self.is_ignored_variable_name(outer.variable_name, pos)):
            suspect.append(self.make_record(
                text, UsageInfo.variable(outer.variable_name, outer.variable_type), pos))

    def process_variable(self, variable_type: str, variable_name: str, value: str, pos: int) -> None:
        """Classifies a literal by the variable it is assigned to."""
        usage = UsageInfo.variable(variable_name, variable_type)
        if self.tables.is_ignored_type(variable_type) or \
                self.is_ignored_variable_name(variable_name, pos):
            self.results.internal_strings.append(self.make_record(value, usage, pos))
        else:
            self.classify_non_localizable_string(value, usage, pos)

    # ------------------------------------------------------------------
    # formatting
    # ------------------------------------------------------------------

    def _check_formatting(self, pos: int) -> None:
        buf = self._buffer
        ch = buf[pos]
        results = self.results
        if ch == '\t':
            if self.is_enabled(ReviewStyle.CHECK_TABS):
                results.tabs.append(self.make_record("", UsageInfo(), pos))
        elif ch == ' ' and (pos + 1 == len(buf) or buf[pos + 1] in '\r\n'):
            if self.is_enabled(ReviewStyle.CHECK_TRAILING_SPACES):
                line_start = find_last_of(buf, '\r\n', pos) + 1
                code_line = ''.join(buf[line_start:pos]).lstrip()
                results.trailing_spaces.append(self.make_record(code_line, UsageInfo(), pos))
        elif ch in '\r\n' and pos > 0:
            self._check_line_width(pos)

    def _check_line_width(self, pos: int) -> None:
        """Reports the line ending at ``pos`` if it is too long."""
        if not self.is_enabled(ReviewStyle.CHECK_LINE_WIDTH):
            return
        buf = self._buffer
        line_start = find_last_of(buf, '\r\n', pos - 1) + 1
        line_length = pos - line_start
        if line_length > self.max_line_length:
            line = self._source[line_start:pos]
            # raw strings are hard to split and long bitmasks are left alone
            if not any(marker in line for marker in self.dialect.raw_markers) and '|' not in line:
                self.results.wide_lines.append(self.make_record(
                    line[:32] + "...", UsageInfo.orphan(str(line_length)), pos))

    # ------------------------------------------------------------------
    # whole-file checks
    # ------------------------------------------------------------------

    def load_deprecated_functions(self, text: str) -> None:
        """Records calls to deprecated functions along with their replacement."""
        if self._deprecated_function_re is None or \
                not self.is_enabled(ReviewStyle.CHECK_DEPRECATED_MACROS):
            return
        for match in self._deprecated_function_re.finditer(text):
            name = match.group(1)
            self.results.deprecated_macros.append(self.make_record(
                name, UsageInfo.function(self.tables.deprecated_functions[name]), match.start()))

    def _iter_id_assignments(self, text: str):
        for regex in (self._define_id_re, self._const_id_re):
            for match in regex.finditer(text):
                name = match.group(1)
                value = match.group(2).split('//')[0].strip()
                # function calls or constructed objects assigning an ID
                if not value or value[0] in '({':
                    continue
                value = value.replace("'", "").replace(" ", "")
                parts = self._id_name_re.fullmatch(name)
                if parts is None:
                    continue
                prefix, suffix = parts.group(1), parts.group(3)
                # MFC IDs (IDS_, IDD_, ...)
                if (not prefix or not prefix[-1].isupper()) and suffix.startswith(_MFC_ID_SUFFIXES):
                    yield name, value, match.start()
                    continue
                # "ID" inside a word like "WIDTH" or "IDENTITY"
                if (prefix and prefix[-1].isupper()) or (suffix and suffix[0].isupper()):
                    continue
                yield name, value, match.start()

    def load_id_assignments(self, text: str) -> None:
        """Checks numbers assigned to resource/menu IDs and values shared by several IDs."""
        if not self.is_enabled(ReviewStyle.CHECK_ID_ASSIGNMENTS):
            return
        results = self.results
        assigned: Dict[str, str] = {}
        for name, value, pos in sorted(self._iter_id_assignments(text), key=lambda item: item[2]):
            id_part_match = self._id_part_re.match(name)
            id_part = id_part_match.group(1) if id_part_match else ""
            try:
                id_value: Optional[int] = int(value, 0)
            except ValueError:
                id_value = None

            message = None
            if id_value is not None and not 1 <= id_value <= 0x6FFF and id_part in _MENU_ID_PARTS:
                message = (f"{value} assigned to {name}; value should be between 1 and 0x6FFF "
                           "if this is an MFC project.")
            elif id_value is not None and not 1 <= id_value <= 0x7FFF and id_part in _STRING_ID_PARTS:
                message = (f"{value} assigned to {name}; value should be between 1 and 0x7FFF "
                           "if this is an MFC project.")
            elif id_value is not None and not 8 <= id_value <= 0xDFFF and id_part == "IDC_":
                message = (f"{value} assigned to {name}; value should be between 8 and 0xDFFF "
                           "if this is an MFC project.")
            # -1 and 0 are usually framework defaults or temporary values
            elif len(id_part) <= 3 and self._number_re.fullmatch(value) and value not in ("-1", "0"):
                message = f"{value} assigned to {name}"
            if message:
                results.ids_assigned_number.append(self.make_record(message, UsageInfo(), pos))

            previous = assigned.setdefault(value, name)
            if previous != name and value not in _GENERIC_IDS:
                results.duplicates_value_assigned_to_ids.append(self.make_record(
                    f"{value} has been assigned to multiple ID variables.", UsageInfo(), pos))


class CppReviewer(SourceReviewer):
    """Reviewer for C and C++ sources."""

    def __init__(self, tables: Optional[HeuristicTables] = None, **options):
        super().__init__(CFamilyDialect(), tables, **options)


class CSharpReviewer(SourceReviewer):
    """Reviewer for C# sources."""

    def __init__(self, tables: Optional[HeuristicTables] = None, **options):
        super().__init__(CSharpDialect(), tables, **options)
