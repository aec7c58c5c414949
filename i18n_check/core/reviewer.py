"""
Review engine base
==================

State and rules shared by every scanner: the heuristic tables, the active
review style, the result buckets, diagnostic logging and the finalize pass
that runs once after all files have been fed.
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from .classifier import Classifier
from .exceptions import PatternError
from .heuristics import HeuristicTables
from .models import DiagnosticMessage, ReviewResults, ReviewStyle, StringRecord, UsageInfo, UsageType
from .printf_grammar import is_single_integer_command
from .string_util import LineIndex

URL_EMAIL_PATTERN = (r"((https?|ftp)://|www\.)[\w\-.~:/?#@!$&'*+,;=%]+"
                     r"|[\w.+\-]+@[A-Za-z0-9\-]+(\.[A-Za-z0-9\-]+)+")

# "< b>", "</ i>" and entities missing their semicolon ("&amp ")
MALFORMED_MARKUP_PATTERN = (r"<\s+/?\s*(?:b|i|u|a|p|br|em|strong|span|div)\s*/?>"
                            r"|</\s+(?:b|i|u|a|p|em|strong|span|div)\s*>"
                            r"|&(?:amp|lt|gt|quot|apos|nbsp)(?![;A-Za-z])")

UNKNOWN_USAGE_MESSAGE = "Unknown function or variable assignment for this string."


class Reviewer:
    """Base class for the source, resource and catalog reviewers."""

    def __init__(self, tables: Optional[HeuristicTables] = None,
                 review_style: ReviewStyle = ReviewStyle.DEFAULT_CHECKS,
                 min_words: int = 2,
                 allow_punctuation_only: bool = False,
                 log_messages_can_be_translatable: bool = True,
                 exceptions_should_be_translatable: bool = True):
        self.logger = logging.getLogger(__name__)
        self.tables = tables if tables is not None else HeuristicTables.default()
        self.review_style = ReviewStyle(review_style)
        self.classifier = Classifier(
            self.tables,
            min_words=min_words,
            allow_punctuation_only=allow_punctuation_only,
            log_messages_can_be_translatable=log_messages_can_be_translatable,
            exceptions_should_be_translatable=exceptions_should_be_translatable,
        )
        self.results = ReviewResults()
        self.file_name = ""
        self._lines: Optional[LineIndex] = None
        self._url_email_re = re.compile(URL_EMAIL_PATTERN)
        self._malformed_markup_re = re.compile(MALFORMED_MARKUP_PATTERN)

    def is_enabled(self, check: ReviewStyle) -> bool:
        return bool(self.review_style & check)

    def clear_results(self) -> None:
        """Empties the result buckets; the heuristic tables are kept."""
        self.results.clear()

    # ------------------------------------------------------------------
    # per-file bookkeeping
    # ------------------------------------------------------------------

    def _begin_file(self, text: str, file_name: str) -> None:
        if not self.tables.frozen:
            self.tables.freeze()
        self.file_name = file_name
        self._lines = LineIndex(text)

    def _end_file(self) -> None:
        self.file_name = ""
        self._lines = None

    def get_line_and_column(self, pos: Optional[int]):
        """1-based (line, column) of ``pos`` in the current file, or ``(None, None)``."""
        if self._lines is None:
            return None, None
        location = self._lines.locate(pos)
        return location if location is not None else (None, None)

    def make_record(self, text: str, usage: Optional[UsageInfo] = None,
                    pos: Optional[int] = None) -> StringRecord:
        line, column = self.get_line_and_column(pos)
        return StringRecord(text, usage if usage is not None else UsageInfo(),
                            self.file_name, line, column)

    def log_message(self, subject: str, message: str, pos: Optional[int] = None) -> None:
        """Records a parser diagnostic; never fatal."""
        line, column = self.get_line_and_column(pos)
        diagnostic = DiagnosticMessage(self.file_name, line, column, subject, message)
        self.results.debug_log.append(diagnostic)
        self.logger.debug("%s", diagnostic)

    # ------------------------------------------------------------------
    # classification
    # ------------------------------------------------------------------

    def is_untranslatable_string(self, text: str, limit_word_count: bool,
                                 pos: Optional[int] = None) -> bool:
        result = self.classifier.classify(text, limit_word_count)
        if result.error:
            self.log_message(text, result.error, pos)
        return result.untranslatable

    def classify_non_localizable_string(self, text: str, usage: UsageInfo, pos: Optional[int]) -> None:
        """Sorts a hard-coded string into "not exposed" or "internal"."""
        if not self.is_enabled(ReviewStyle.CHECK_NOT_AVAILABLE_FOR_L10N):
            return
        if self.classifier.is_exempt_usage(usage.value):
            return
        result = self.classifier.classify(text, True)
        if result.error:
            self.log_message(text, result.error, pos)
        record = self.make_record(text, usage, pos)
        if result.untranslatable:
            self.results.internal_strings.append(record)
        else:
            self.results.not_available_for_localization_strings.append(record)

    def is_ignored_variable_name(self, name: str, pos: Optional[int]) -> bool:
        try:
            return self.tables.matches_ignored_variable_pattern(name)
        except PatternError as exc:
            self.log_message(name, str(exc), pos)
            return False

    # ------------------------------------------------------------------
    # finalize
    # ------------------------------------------------------------------

    def review_strings(self) -> None:
        """Runs the cross-file checks once every file has been fed."""
        results = self.results
        if self.is_enabled(ReviewStyle.CHECK_L10N_STRINGS):
            for record in results.localizable_strings:
                if record.text and self.classifier.is_untranslatable_string(record.text, False):
                    results.unsafe_localizable_strings.append(record)

        if self.is_enabled(ReviewStyle.CHECK_L10N_CONTAINS_URL):
            for record in results.localizable_strings:
                if self._url_email_re.search(record.text):
                    results.localizable_strings_with_urls.append(record)

        if self.is_enabled(ReviewStyle.CHECK_MALFORMED_STRINGS):
            for record in results.localizable_strings:
                if self._malformed_markup_re.search(record.text):
                    results.malformed_strings.append(record)

        if self.is_enabled(ReviewStyle.CHECK_UNENCODED_EXT_ASCII):
            for record in self._iter_records(
                    results.localizable_strings,
                    results.marked_as_non_localizable_strings,
                    results.internal_strings,
                    results.not_available_for_localization_strings,
                    results.unsafe_localizable_strings,
                    results.localizable_strings_in_internal_call):
                if any(ord(ch) > 127 for ch in record.text):
                    results.unencoded_strings.append(record)

        if self.is_enabled(ReviewStyle.CHECK_PRINTF_SINGLE_NUMBER):
            for record in self._iter_records(results.internal_strings,
                                              results.localizable_strings_in_internal_call):
                if is_single_integer_command(record.text):
                    results.printf_single_numbers.append(record)

        self.run_diagnostics()

    def run_diagnostics(self) -> None:
        results = self.results
        for record in self._iter_records(
                results.localizable_strings,
                results.not_available_for_localization_strings,
                results.marked_as_non_localizable_strings,
                results.internal_strings,
                results.unsafe_localizable_strings):
            if not record.usage.value and record.usage.kind != UsageType.ORPHAN:
                diagnostic = DiagnosticMessage(record.file_name, record.line, record.column,
                                               record.text, UNKNOWN_USAGE_MESSAGE)
                results.debug_log.append(diagnostic)
                self.logger.debug("%s", diagnostic)

    @staticmethod
    def _iter_records(*buckets: List[StringRecord]) -> Iterable[StringRecord]:
        for bucket in buckets:
            yield from bucket
