"""
Resource script review
======================

Reviews Windows resource scripts (``.rc``): the entries of ``STRINGTABLE``
blocks and the ``FONT`` declarations of dialogs.
"""
from __future__ import annotations

import re
from typing import Iterator, Optional, Tuple

from .heuristics import HeuristicTables
from .models import ReviewStyle, UsageInfo
from .reviewer import Reviewer

MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 10
SYSTEM_DIALOG_FONTS = ("MS Shell Dlg", "MS Shell Dlg 2")


class RcReviewer(Reviewer):
    """Reviewer for resource scripts.

    String tables are located with two separate searches (start tag, then the
    nearest end tag) instead of one regex for the whole block, which can
    backtrack badly on large files.
    """

    def __init__(self, tables: Optional[HeuristicTables] = None, **options):
        super().__init__(tables, **options)
        self._table_start_re = re.compile(r'STRINGTABLE(?:[ \t]+[A-Z]+)*\s*(BEGIN|\{)\s*')
        self._table_end_re = re.compile(r'(?:[\r\n]+[ \t]*|(?<=")[ \t]*)(END|\})(?![A-Za-z0-9_])')
        self._entry_re = re.compile(r'"((?:[^"\r\n]|"")*)"')
        self._font_re = re.compile(r'\bFONT[ ]*([0-9]+),[ ]*"([^"]*)"')

    def scan(self, text: str, file_name: str = "") -> None:
        if not text:
            return
        self._begin_file(text, file_name)
        try:
            if self.is_enabled(ReviewStyle.CHECK_L10N_STRINGS):
                self._review_string_tables(text)
            if self.is_enabled(ReviewStyle.CHECK_FONTS):
                self._review_fonts(text)
        finally:
            self._end_file()

    def iter_string_tables(self, text: str) -> Iterator[Tuple[int, int]]:
        """Yields the (start, end) span of every string table's body."""
        pos = 0
        while True:
            start = self._table_start_re.search(text, pos)
            if start is None:
                return
            end = self._table_end_re.search(text, start.end())
            if end is None:
                self.log_message("STRINGTABLE", "String table is missing its closing END.", start.start())
                return
            yield start.end(), end.start()
            pos = end.end()

    def _review_string_tables(self, text: str) -> None:
        for body_start, body_end in self.iter_string_tables(text):
            for entry in self._entry_re.finditer(text, body_start, body_end):
                value = entry.group(1).replace('""', '"')
                self.results.localizable_strings.append(
                    self.make_record(value, UsageInfo.orphan(), entry.start(1)))

    def _review_fonts(self, text: str) -> None:
        results = self.results
        for match in self._font_re.finditer(text):
            declaration = match.group(0)
            size, face = match.group(1), match.group(2)
            # 8 is the standard size, but up to 10 is fine
            if not MIN_FONT_SIZE <= int(size) <= MAX_FONT_SIZE:
                results.bad_font_sizes.append(self.make_record(
                    f"{declaration}: font size {size} is non-standard (8 is recommended).",
                    UsageInfo.orphan(size), match.start()))
            if face not in SYSTEM_DIALOG_FONTS:
                results.non_system_font_faces.append(self.make_record(
                    f"{declaration}: font name '{face}' may not map well on some systems "
                    "(MS Shell Dlg is recommended).",
                    UsageInfo.orphan(face), match.start()))
