"""
Data model shared by the scanners, the classifier and the reporting layer.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum, IntFlag
from typing import List, Optional, Tuple


class ReviewStyle(IntFlag):
    """Independently toggleable checks."""
    NO_CHECKS = 0
    CHECK_L10N_STRINGS = 1 << 0
    CHECK_SUSPECT_L10N_STRING_USAGE = 1 << 1
    CHECK_NOT_AVAILABLE_FOR_L10N = 1 << 2
    CHECK_DEPRECATED_MACROS = 1 << 3
    CHECK_UTF8_ENCODED = 1 << 4
    CHECK_UNENCODED_EXT_ASCII = 1 << 5
    CHECK_PRINTF_SINGLE_NUMBER = 1 << 6
    CHECK_L10N_CONTAINS_URL = 1 << 7
    CHECK_MALFORMED_STRINGS = 1 << 8
    CHECK_FONTS = 1 << 9
    CHECK_ID_ASSIGNMENTS = 1 << 10
    CHECK_UTF8_WITH_SIGNATURE = 1 << 11
    CHECK_PRINTF_MISMATCH = 1 << 12
    CHECK_ACCELERATOR_MISMATCH = 1 << 13
    CHECK_CONSISTENCY = 1 << 14
    CHECK_TRAILING_SPACES = 1 << 15
    CHECK_TABS = 1 << 16
    CHECK_LINE_WIDTH = 1 << 17
    CHECK_SPACE_AFTER_COMMENT = 1 << 18
    CHECK_FUZZY = 1 << 19
    CHECK_L10N_HAS_SURROUNDING_SPACES = 1 << 20
    CHECK_NEEDING_CONTEXT = 1 << 21

    ALL_I18N_CHECKS = (CHECK_L10N_STRINGS | CHECK_SUSPECT_L10N_STRING_USAGE |
                       CHECK_NOT_AVAILABLE_FOR_L10N | CHECK_DEPRECATED_MACROS |
                       CHECK_UTF8_ENCODED | CHECK_UNENCODED_EXT_ASCII |
                       CHECK_PRINTF_SINGLE_NUMBER | CHECK_L10N_CONTAINS_URL |
                       CHECK_MALFORMED_STRINGS | CHECK_FONTS |
                       CHECK_ID_ASSIGNMENTS | CHECK_UTF8_WITH_SIGNATURE)
    ALL_L10N_CHECKS = (CHECK_PRINTF_MISMATCH | CHECK_ACCELERATOR_MISMATCH |
                       CHECK_CONSISTENCY | CHECK_L10N_HAS_SURROUNDING_SPACES |
                       CHECK_NEEDING_CONTEXT)
    ALL_CODE_FORMATTING_CHECKS = (CHECK_TRAILING_SPACES | CHECK_TABS |
                                  CHECK_LINE_WIDTH | CHECK_SPACE_AFTER_COMMENT)
    ALL_CHECKS = ALL_I18N_CHECKS | ALL_L10N_CHECKS | ALL_CODE_FORMATTING_CHECKS
    DEFAULT_CHECKS = (ALL_I18N_CHECKS & ~CHECK_UTF8_WITH_SIGNATURE
                      & ~CHECK_UNENCODED_EXT_ASCII) | CHECK_PRINTF_MISMATCH | \
        CHECK_ACCELERATOR_MISMATCH | CHECK_L10N_HAS_SURROUNDING_SPACES

    @classmethod
    def from_names(cls, names) -> "ReviewStyle":
        """Build a style from flag names such as ``"check_tabs"`` or ``"CHECK_TABS"``."""
        style = cls.NO_CHECKS
        for name in names:
            key = name.strip().upper()
            if not key:
                continue
            if not key.startswith("CHECK_") and not key.startswith("ALL_") \
                    and key not in ("DEFAULT_CHECKS", "NO_CHECKS"):
                key = "CHECK_" + key
            style |= cls[key]
        return style

    def to_names(self) -> List[str]:
        return [member.name for member in ReviewStyle
                if member.name.startswith("CHECK_") and member in self]


class UsageType(Enum):
    """What a string literal was found in."""
    FUNCTION = "function"
    VARIABLE = "variable"
    ORPHAN = "orphan"


@dataclass(frozen=True)
class UsageInfo:
    kind: UsageType = UsageType.ORPHAN
    value: str = ""
    variable_type: str = ""

    @classmethod
    def function(cls, name: str) -> "UsageInfo":
        return cls(UsageType.FUNCTION, name)

    @classmethod
    def variable(cls, name: str, variable_type: str = "") -> "UsageInfo":
        return cls(UsageType.VARIABLE, name, variable_type)

    @classmethod
    def orphan(cls, value: str = "") -> "UsageInfo":
        return cls(UsageType.ORPHAN, value)


@dataclass(frozen=True)
class StringRecord:
    """A string literal (or finding) together with its context and position."""
    text: str
    usage: UsageInfo = field(default_factory=UsageInfo)
    file_name: str = ""
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass(frozen=True)
class DiagnosticMessage:
    """Internal parser warning. Never fatal."""
    file_name: str
    line: Optional[int]
    column: Optional[int]
    subject: str
    message: str

    def __str__(self) -> str:
        location = self.file_name
        if self.line is not None:
            location += f":{self.line}:{self.column}"
        return f"{location} [{self.subject}] {self.message}"


@dataclass(frozen=True)
class Classification:
    """Result of classifying a candidate string."""
    untranslatable: bool
    normalized: str
    error: Optional[str] = None


class PrintfFormat(Enum):
    NONE = "none"
    CPP = "c-format"


class IssueKind(Enum):
    PRINTF_MISMATCH = "printf_mismatch"
    SUSPECT_SOURCE = "suspect_source"
    ACCELERATOR_MISMATCH = "accelerator_mismatch"
    CONSISTENCY_MISMATCH = "consistency_mismatch"
    SOURCE_SURROUNDING_SPACES = "source_surrounding_spaces"
    SOURCE_NEEDING_CONTEXT = "source_needing_context"


@dataclass
class CatalogEntry:
    """One msgid/msgstr translation unit of a gettext catalog."""
    source: str
    source_plural: str = ""
    translation: str = ""
    translation_plural: str = ""
    format_kind: PrintfFormat = PrintfFormat.NONE
    issues: List[Tuple[IssueKind, str]] = field(default_factory=list)
    line: Optional[int] = None
    fuzzy: bool = False
    # translator and extracted comments
    comment: str = ""
    context: str = ""


@dataclass
class ReviewResults:
    """Per-run result buckets of a scanner."""
    localizable_strings: List[StringRecord] = field(default_factory=list)
    not_available_for_localization_strings: List[StringRecord] = field(default_factory=list)
    marked_as_non_localizable_strings: List[StringRecord] = field(default_factory=list)
    internal_strings: List[StringRecord] = field(default_factory=list)
    localizable_strings_in_internal_call: List[StringRecord] = field(default_factory=list)
    unsafe_localizable_strings: List[StringRecord] = field(default_factory=list)
    localizable_strings_with_urls: List[StringRecord] = field(default_factory=list)
    deprecated_macros: List[StringRecord] = field(default_factory=list)
    printf_single_numbers: List[StringRecord] = field(default_factory=list)
    unencoded_strings: List[StringRecord] = field(default_factory=list)
    duplicates_value_assigned_to_ids: List[StringRecord] = field(default_factory=list)
    ids_assigned_number: List[StringRecord] = field(default_factory=list)
    malformed_strings: List[StringRecord] = field(default_factory=list)
    trailing_spaces: List[StringRecord] = field(default_factory=list)
    tabs: List[StringRecord] = field(default_factory=list)
    wide_lines: List[StringRecord] = field(default_factory=list)
    comments_missing_space: List[StringRecord] = field(default_factory=list)
    bad_font_sizes: List[StringRecord] = field(default_factory=list)
    non_system_font_faces: List[StringRecord] = field(default_factory=list)
    debug_log: List[DiagnosticMessage] = field(default_factory=list)

    def clear(self) -> None:
        for f in fields(self):
            getattr(self, f.name).clear()

    def record_buckets(self):
        """Yields (name, bucket) for every StringRecord bucket."""
        for f in fields(self):
            if f.name != "debug_log":
                yield f.name, getattr(self, f.name)
