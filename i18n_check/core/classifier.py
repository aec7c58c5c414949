"""
String classifier
=================

Decides whether a string literal reads like a real user-facing message or
like something internal (file names, markup, identifiers, SQL, ...) that
should never be exposed for translation.

The checks run in a fixed order and stop at the first decisive one:

1. normalize escapes and whitespace
2. bare function signatures (``Open(file)``) are internal, ``Item(s)`` is not
3. strip hex colors, printf commands, escaped unicode and HTML markup
4. optional minimum word count
5. punctuation-only and "N/A" exceptions
6. length/shape rules, RTF, hashtags, keyboard shortcuts
7. long prose is always a message
8. the ordered list of "looks internal" patterns
9. font names, file extensions and file addresses
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from .exceptions import PatternError
from .heuristics import PUNCT, SQL_CODE, HeuristicTables
from .models import Classification
from . import string_util

_HTML_TAGS = (r"span|object|property|div|p|ul|ol|li|img|html|[?]xml|meta|body|table|tbody|tr|td|"
              r"thead|head|title|a\s|!--|/|!DOCTYPE|br|center|dd|em|dl|dt|tt|font|form|h\d|"
              r"hr|main|map|pre|script")


class Classifier:
    """Heuristic engine behind ``is_untranslatable_string``."""

    MAX_WORD_SIZE = 20
    MIN_MESSAGE_LENGTH = 200

    def __init__(self, tables: HeuristicTables, min_words: int = 2,
                 allow_punctuation_only: bool = False,
                 log_messages_can_be_translatable: bool = True,
                 exceptions_should_be_translatable: bool = True):
        self.logger = logging.getLogger(__name__)
        self.tables = tables
        self.min_words = min_words
        self.allow_punctuation_only = allow_punctuation_only
        self.log_messages_can_be_translatable = log_messages_can_be_translatable
        self.exceptions_should_be_translatable = exceptions_should_be_translatable

        self._html_re = re.compile(rf"[^\w<]*<({_HTML_TAGS})[\s\S]*", re.IGNORECASE)
        self._html_element_re = re.compile(r"[^\w<]*<[A-Za-z]+[^<>]*>[\s\S]*</[A-Za-z]+>[\s\S]*")
        self._html_tag_re = re.compile(r"&[a-zA-Z]{2,5};[\s\S]*")
        self._html_tag_unicode_re = re.compile(r"&#\d{2,4};[\s\S]*")
        self._script_re = re.compile(r"<script[\d\D]*?>[\d\D]*?</script>")
        self._style_re = re.compile(r"<style[\d\D]*?>[\d\D]*?</style>")
        self._tag_re = re.compile(r"<[?]?[A-Za-z0-9+_/\-.'\"=;:!%\s\\,()]+[?]?>")
        self._entity_re = re.compile(r"&[^\W\d_]{2,5};")
        self._numeric_entity_re = re.compile(r"&#\d{2,4};")

        self._one_word_re = re.compile(r"\b[a-zA-Z'\-]+(?:[.\-/:]*[\w'\-]*)*")
        self._two_letter_re = re.compile(r"[^\W\d_]{2,}")
        self._punctuation_re = re.compile(rf"[{PUNCT}]+")
        self._hashtag_re = re.compile(r"#[\w\-]{2,}")
        self._key_shortcut_re = re.compile(
            r"(CTRL|SHIFT|CMD|ALT)([+](CTRL|SHIFT|CMD|ALT))*([+][A-Za-z0-9])+", re.IGNORECASE)
        self._function_signature_re = re.compile(
            r"[A-Za-z0-9_]{2,}[(][A-Za-z0-9_]+(,\s*[A-Za-z0-9_]+)*[)]")
        self._open_function_signature_re = re.compile(r"[A-Za-z0-9_]{2,}[(]")
        self._plural_re = re.compile(r"[A-Za-z0-9_]{2,}[(]s[)]")
        self._lorem_ipsum_re = re.compile(r"Lorem ipsum.*")
        self._sql_re = re.compile(*SQL_CODE)

    def classify(self, text: str, limit_word_count: bool) -> Classification:
        """Classifies ``text``; never raises.

        A failing caller-supplied pattern yields ``untranslatable=False`` with
        the problem described in ``error``.
        """
        normalized = string_util.replace_escaped_control_chars(text).strip()
        if (self._function_signature_re.fullmatch(normalized) or
                self._open_function_signature_re.fullmatch(normalized)) and \
                not self._plural_re.fullmatch(normalized):
            return Classification(True, normalized)

        normalized = string_util.remove_hex_color_values(normalized)
        normalized = string_util.remove_printf_commands(normalized)
        normalized = string_util.remove_escaped_unicode_values(normalized)
        normalized = string_util.replace_line_breaks(normalized.strip()).strip()
        normalized = string_util.replace_html_breaks(normalized).strip()

        if self._is_html(normalized):
            normalized = self._strip_html(normalized)

        try:
            return Classification(self._is_untranslatable(normalized, limit_word_count), normalized)
        except PatternError as exc:
            return Classification(False, normalized, str(exc))

    def is_untranslatable_string(self, text: str, limit_word_count: bool) -> bool:
        """Returns True if ``text`` should not be translated."""
        result = self.classify(text, limit_word_count)
        if result.error:
            self.logger.debug("Classification of %r failed: %s", text, result.error)
        return result.untranslatable

    def _is_html(self, text: str) -> bool:
        return bool(self._html_re.fullmatch(text) or self._html_element_re.fullmatch(text) or
                    self._html_tag_re.fullmatch(text) or self._html_tag_unicode_re.fullmatch(text))

    def _strip_html(self, text: str) -> str:
        text = self._script_re.sub("", text)
        text = self._style_re.sub("", text)
        text = self._tag_re.sub("", text)
        text = self._entity_re.sub("", text)
        return self._numeric_entity_re.sub("", text)

    def count_words(self, text: str) -> int:
        return sum(1 for _ in self._one_word_re.finditer(text))

    def _is_untranslatable(self, text: str, limit_word_count: bool) -> bool:
        if limit_word_count and self.count_words(text) < self.min_words:
            return True

        if self.allow_punctuation_only and self._punctuation_re.fullmatch(text):
            return False

        # "N/A" does not have two consecutive letters
        if len(text) == 3 and text[0] in "Nn" and text[1] == "/" and text[2] in "Aa":
            return False

        if len(text) <= 1 or not self._two_letter_re.search(text):
            return True
        # long single "word" without separators reads like an identifier
        if len(text) > self.MAX_WORD_SIZE and \
                not any(ch in text for ch in " \n\t\r/-") and \
                "\\n" not in text and "\\r" not in text and "\\t" not in text:
            return True
        if self.tables.is_known_internal_string(text):
            return True

        # RTF
        if text.startswith("{\\\\"):
            return True
        if self._hashtag_re.fullmatch(text) or self._key_shortcut_re.fullmatch(text):
            return True

        if len(text) > self.MIN_MESSAGE_LENGTH and \
                not self._lorem_ipsum_re.fullmatch(text) and not self._sql_re.fullmatch(text):
            return False

        for pattern in self.tables.iter_untranslatable_regexes():
            if pattern.fullmatch(text):
                return True

        return (self.tables.is_font_name(text) or self.tables.is_file_extension(text) or
                string_util.is_file_address(text))

    # ------------------------------------------------------------------
    # function name rules
    # ------------------------------------------------------------------

    @staticmethod
    def extract_base_function(name: str) -> str:
        """``wxSystemOptions::SetOption`` -> ``SetOption``; ``obj.run`` -> ``run``."""
        for separator in ("::", "."):
            pos = name.rfind(separator)
            if pos != -1:
                name = name[pos + len(separator):]
        return name

    def is_diagnostic_function(self, name: str) -> bool:
        """Debugging, assertion, system or (optionally) logging functions."""
        tables = self.tables
        return bool(tables.diagnostic_function_regex.fullmatch(name) or
                    name in tables.internal_functions or
                    self.extract_base_function(name) in tables.internal_functions or
                    (not self.log_messages_can_be_translatable and tables.is_log_function(name)))

    def is_exempt_usage(self, name: str) -> Optional[str]:
        """Why a not-exposed string in a call to ``name`` should not be reported."""
        if not self.exceptions_should_be_translatable and self.tables.is_exception(name):
            return "exception"
        if self.tables.is_log_function(name):
            return "log"
        return None
