"""
Translation catalog review
==========================

Parses gettext catalogs (``.po``/``.pot``) into ``CatalogEntry`` objects and,
once every catalog has been loaded, compares each source message with its
translation.

Entry layout handled by the parser::

    #: src/frame.cpp:826
    #, c-format, fuzzy
    msgctxt "context"
    msgid "Incorrect frame size (%u, %s) "
    "for the frame #%u"
    msgid_plural "..."
    msgstr[0] "..."
    msgstr[1] "..."

Extracted (``#.``) and translator (``# ``) comment lines are kept on the entry.
Previous (``#|``) and obsolete (``#~``) lines are ignored.
"""
from __future__ import annotations

import re
from typing import List, Optional, Tuple

from .exceptions import CatalogError
from .heuristics import HeuristicTables
from .models import CatalogEntry, IssueKind, PrintfFormat, ReviewStyle
from .printf_grammar import load_printf_commands
from .reviewer import Reviewer
from .string_util import count_preceding_backslashes, has_surrounding_spaces, is_string_ambiguous

_FORMAT_FLAGS = ("c-format", "cpp-format")
_FULL_STOPS = ".!?。！？"
_EXCLAMATIONS = "!！"
_CLOSE_PARENS = ")）"

_KEYWORD_RE = re.compile(r'^(msgctxt|msgid_plural|msgid|msgstr(?:\[([0-9]+)\])?)[ \t]+(.*)$')
_FLAG_RE = re.compile(r'\b[a-zA-Z\-]+\b')
_BLANK_LINE_RE = re.compile(r'(?:\r?\n[ \t]*){2,}')


def _unquote(text: str) -> str:
    """Returns the content of a quoted catalog line, escapes left as is."""
    text = text.strip()
    if text.startswith('"'):
        text = text[1:]
    # "C:\\" ends with an escaped backslash, not an escaped quote
    if text and text[-1] == '"' and count_preceding_backslashes(text, len(text) - 1) % 2 == 0:
        text = text[:-1]
    return text


def split_catalog_entries(text: str) -> List[Tuple[int, str]]:
    """Splits catalog text into (first line number, entry text) blocks."""
    blocks = []
    line = 1
    pos = 0
    for separator in _BLANK_LINE_RE.finditer(text):
        block = text[pos:separator.start()]
        if block.strip():
            blocks.append((line, block))
        line += text.count('\n', pos, separator.end())
        pos = separator.end()
    if text[pos:].strip():
        blocks.append((line, text[pos:]))
    return blocks


def parse_catalog_entry(block: str, first_line: int = 1) -> CatalogEntry:
    """Parses one entry; raises ``CatalogError`` if it has no ``msgid``."""
    fields = {}
    format_kind = PrintfFormat.NONE
    fuzzy = False
    current: Optional[str] = None
    msgid_line = None
    comments = []

    for offset, line in enumerate(block.splitlines()):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith('#'):
            current = None
            # "#." extracted and "# " translator comments
            if stripped.startswith('#.') or stripped == '#' or stripped[1] in ' \t':
                comments.append(stripped[2:].strip())
            elif stripped.startswith('#,'):
                for flag in _FLAG_RE.findall(stripped[2:]):
                    if flag in _FORMAT_FLAGS:
                        format_kind = PrintfFormat.CPP
                    elif flag == "fuzzy":
                        fuzzy = True
            continue
        if stripped.startswith('"'):
            # continuation of the previous keyword
            if current is not None:
                fields[current] += _unquote(stripped)
            continue
        match = _KEYWORD_RE.match(stripped)
        if match is None:
            current = None
            continue
        keyword, plural_index, value = match.groups()
        if plural_index is not None:
            keyword = "msgstr" if plural_index == "0" else f"msgstr[{plural_index}]"
        current = keyword
        fields[keyword] = _unquote(value)
        if keyword == "msgid":
            msgid_line = first_line + offset

    if "msgid" not in fields:
        raise CatalogError("Catalog entry is missing its msgid.")
    return CatalogEntry(
        source=fields["msgid"],
        source_plural=fields.get("msgid_plural", ""),
        translation=fields.get("msgstr", ""),
        translation_plural=fields.get("msgstr[1]", ""),
        format_kind=format_kind,
        line=msgid_line,
        fuzzy=fuzzy,
        comment=" ".join(comment for comment in comments if comment),
        context=fields.get("msgctxt", ""),
    )


class CatalogReviewer(Reviewer):
    """Loads catalogs and checks their translations against the source messages."""

    def __init__(self, tables: Optional[HeuristicTables] = None,
                 review_fuzzy: bool = False, **options):
        super().__init__(tables, **options)
        self.review_fuzzy = review_fuzzy or self.is_enabled(ReviewStyle.CHECK_FUZZY)
        # (file name, entry) for every loaded entry
        self.catalog_entries: List[Tuple[str, CatalogEntry]] = []
        # "&" followed by a letter or digit, but not an HTML entity like "&quot;"
        self._accelerator_re = re.compile(r'&(?![A-Za-z]{2,8};|#[0-9]{2,4};)[A-Za-z0-9]')

    def clear_results(self) -> None:
        super().clear_results()
        self.catalog_entries.clear()

    def scan(self, text: str, file_name: str = "") -> None:
        if not text:
            return
        self._begin_file(text, file_name)
        try:
            for first_line, block in split_catalog_entries(text):
                try:
                    entry = parse_catalog_entry(block, first_line)
                except CatalogError:
                    continue
                # the header entry
                if not entry.source:
                    continue
                self.catalog_entries.append((file_name, entry))
        finally:
            self._end_file()

    def review_strings(self) -> None:
        for _file_name, entry in self.catalog_entries:
            self.review_entry(entry)

    def review_entry(self, entry: CatalogEntry) -> None:
        """Records the issues of one entry on the entry itself."""
        sources = [entry.source]
        if entry.source_plural:
            sources.append(entry.source_plural)

        if self.is_enabled(ReviewStyle.CHECK_L10N_STRINGS):
            for source in sources:
                if self.is_untranslatable_string(source, False):
                    entry.issues.append((IssueKind.SUSPECT_SOURCE, source))
        if self.is_enabled(ReviewStyle.CHECK_L10N_CONTAINS_URL):
            for source in sources:
                if self._url_email_re.search(source):
                    entry.issues.append((IssueKind.SUSPECT_SOURCE, source))
        if self.is_enabled(ReviewStyle.CHECK_L10N_HAS_SURROUNDING_SPACES):
            for source in sources:
                if has_surrounding_spaces(source):
                    entry.issues.append((IssueKind.SOURCE_SURROUNDING_SPACES, source))
        if self.is_enabled(ReviewStyle.CHECK_NEEDING_CONTEXT) and not entry.comment and \
                not entry.context and is_string_ambiguous(entry.source):
            entry.issues.append((IssueKind.SOURCE_NEEDING_CONTEXT, entry.source))

        if entry.fuzzy and not self.review_fuzzy:
            return

        pairs = [(entry.source, entry.translation)]
        if entry.translation_plural:
            pairs.append((entry.source_plural, entry.translation_plural))

        if self.is_enabled(ReviewStyle.CHECK_PRINTF_MISMATCH) and entry.format_kind == PrintfFormat.CPP:
            for source, translation in pairs:
                if translation:
                    self._review_printf(entry, source, translation)
        if self.is_enabled(ReviewStyle.CHECK_ACCELERATOR_MISMATCH):
            for source, translation in pairs:
                if translation and \
                        bool(self._accelerator_re.search(source)) != bool(self._accelerator_re.search(translation)):
                    entry.issues.append((IssueKind.ACCELERATOR_MISMATCH, f"'{source}' vs. '{translation}'"))
        if self.is_enabled(ReviewStyle.CHECK_CONSISTENCY) and entry.source and entry.translation:
            if not self.is_consistent(entry.source, entry.translation):
                entry.issues.append((IssueKind.CONSISTENCY_MISMATCH,
                                     f"'{entry.source}' vs. '{entry.translation}'"))

    @staticmethod
    def _review_printf(entry: CatalogEntry, source: str, translation: str) -> None:
        source_commands, source_error = load_printf_commands(source)
        translation_commands, translation_error = load_printf_commands(translation)
        if (source_commands or translation_commands) and source_commands != translation_commands:
            entry.issues.append((IssueKind.PRINTF_MISMATCH,
                                 f"'{source}' vs. '{translation}'{translation_error or source_error}"))

    @staticmethod
    def is_consistent(source: str, translation: str) -> bool:
        """Compares the trailing whitespace/punctuation and leading case of both strings."""
        last_source, last_translation = source[-1], translation[-1]
        source_is_stop = last_source in _FULL_STOPS
        translation_is_stop = last_translation in _FULL_STOPS
        if last_source.isspace() != last_translation.isspace() or \
                (source_is_stop and not translation_is_stop):
            # dropping an exclamation is fine, as is a closing parenthesis after a sentence
            if last_source in _EXCLAMATIONS and not translation_is_stop:
                return True
            return source_is_stop and last_translation in _CLOSE_PARENS
        return not (source[0].isupper() and translation[0].islower())
