# -*- coding: utf-8 -*-
"""
i18n-check Batch Analysis
=========================

Feeds a set of files to the scanners, runs the finalize pass once all of them
are loaded and renders the findings as a tab-separated report.

Files are dispatched by extension:
1. ``.rc`` -> resource script review
2. ``.po``/``.pot`` -> translation catalog review
3. ``.cs`` -> C# source review
4. everything else -> C/C++ source review
"""

import fnmatch
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from i18n_check.core.exceptions import EncodingError
from i18n_check.core.heuristics import HeuristicTables
from i18n_check.core.models import IssueKind, ReviewStyle, StringRecord, UsageType
from i18n_check.core.po_review import CatalogReviewer
from i18n_check.core.rc_review import RcReviewer
from i18n_check.core.source_review import CppReviewer, CSharpReviewer
from i18n_check.utils.config import ReviewSettings, build_tables
from i18n_check.utils.encoding import read_source_file

logger = logging.getLogger(__name__)

CPP_EXTENSIONS = {".c", ".cpp", ".cc", ".cxx", ".h", ".hpp", ".hxx"}
CSHARP_EXTENSIONS = {".cs"}
RC_EXTENSIONS = {".rc"}
CATALOG_EXTENSIONS = {".po", ".pot"}
REVIEWED_EXTENSIONS = CPP_EXTENSIONS | CSHARP_EXTENSIONS | RC_EXTENSIONS | CATALOG_EXTENSIONS

# scratch files from CMake and generated pseudo-translations are never reviewed
_SKIPPED_FILE_PATTERNS = ("CMakeCXXCompilerId.cpp", "CMakeCCompilerId.c", "catch*.hpp", "pseudo_*")
_SKIPPED_DIR_NAMES = {"CMakeFiles", ".git", ".svn"}

REPORT_HEADER = "File\tLine\tColumn\tValue\tExplanation\tWarningID"

ProgressCallback = Callable[[int, int, str], None]


class FileReviewType(Enum):
    """Which scanner a file is fed to."""
    CPP = "cpp"
    CSHARP = "csharp"
    RC = "rc"
    CATALOG = "po"


def file_review_type(path: Path) -> FileReviewType:
    ext = Path(path).suffix.lower()
    if ext in RC_EXTENSIONS:
        return FileReviewType.RC
    if ext in CATALOG_EXTENSIONS:
        return FileReviewType.CATALOG
    if ext in CSHARP_EXTENSIONS:
        return FileReviewType.CSHARP
    return FileReviewType.CPP


def _is_excluded(path: Path, excluded: List[Path]) -> bool:
    resolved = path.resolve()
    for excluded_path in excluded:
        if resolved == excluded_path or excluded_path in resolved.parents:
            return True
    return False


def get_files_to_analyze(paths: Iterable, excluded: Iterable = ()) -> List[Path]:
    """Collects the reviewable files under ``paths``, recursively.

    Files given explicitly are kept whatever their extension; directories
    contribute only files with a reviewed extension.
    """
    excluded_paths = [Path(p).resolve() for p in excluded]
    files: List[Path] = []
    for entry in paths:
        path = Path(entry)
        if not path.exists():
            logger.warning(f"Path not found: {path}")
            continue
        if _is_excluded(path, excluded_paths):
            continue
        if path.is_file():
            files.append(path)
            continue
        for candidate in sorted(path.rglob("*")):
            if not candidate.is_file() or candidate.suffix.lower() not in REVIEWED_EXTENSIONS:
                continue
            if any(part in _SKIPPED_DIR_NAMES for part in candidate.parts):
                continue
            if any(fnmatch.fnmatch(candidate.name, pattern) for pattern in _SKIPPED_FILE_PATTERNS):
                continue
            if _is_excluded(candidate, excluded_paths):
                continue
            files.append(candidate)
    return files


@dataclass
class FileFindings:
    """File-level encoding findings."""
    not_utf8: List[str] = field(default_factory=list)
    utf8_with_bom: List[str] = field(default_factory=list)
    unreadable: List[str] = field(default_factory=list)


class BatchAnalyzer:
    """Runs every scanner over a set of files.

    Cancellation is cooperative: ``cancel()`` stops the run before the next
    file is read.
    """

    def __init__(self, settings: Optional[ReviewSettings] = None,
                 tables: Optional[HeuristicTables] = None,
                 progress: Optional[ProgressCallback] = None):
        self.logger = logging.getLogger(__name__)
        self.settings = settings if settings is not None else ReviewSettings()
        self.tables = tables if tables is not None else build_tables(self.settings)
        self.progress = progress
        self.should_stop = False

        options = self.settings.reviewer_options()
        self.review_style: ReviewStyle = options["review_style"]
        self.cpp = CppReviewer(self.tables, max_line_length=self.settings.max_line_length, **options)
        self.csharp = CSharpReviewer(self.tables, max_line_length=self.settings.max_line_length, **options)
        self.rc = RcReviewer(self.tables, **options)
        self.po = CatalogReviewer(self.tables, review_fuzzy=self.settings.review_fuzzy_translations,
                                  **options)
        self.file_findings = FileFindings()
        self.files_analyzed = 0

    @property
    def reviewers(self):
        return [self.cpp, self.csharp, self.rc, self.po]

    @property
    def cancelled(self) -> bool:
        return self.should_stop

    def cancel(self) -> None:
        self.should_stop = True
        self.logger.info("Analysis stop requested")

    def clear_results(self) -> None:
        for reviewer in self.reviewers:
            reviewer.clear_results()
        self.file_findings = FileFindings()
        self.files_analyzed = 0
        self.should_stop = False

    def _reviewer_for(self, path: Path):
        return {
            FileReviewType.CPP: self.cpp,
            FileReviewType.CSHARP: self.csharp,
            FileReviewType.RC: self.rc,
            FileReviewType.CATALOG: self.po,
        }[file_review_type(path)]

    def analyze_file(self, path: Path) -> bool:
        """Feeds one file to its scanner; returns False if it could not be read."""
        try:
            decoded = read_source_file(path)
        except EncodingError as e:
            self.logger.error(str(e))
            self.file_findings.unreadable.append(str(path))
            return False

        if decoded.had_bom and decoded.encoding == "utf-8" and \
                self.review_style & ReviewStyle.CHECK_UTF8_WITH_SIGNATURE:
            self.file_findings.utf8_with_bom.append(str(path))
        if (decoded.used_fallback or decoded.encoding.startswith("utf-16")) and \
                self.review_style & ReviewStyle.CHECK_UTF8_ENCODED:
            self.file_findings.not_utf8.append(str(path))

        self._reviewer_for(path).scan(decoded.text, str(path))
        self.files_analyzed += 1
        return True

    def analyze(self, files: List[Path]) -> bool:
        """Loads every file, then runs the finalize pass.

        Returns False if the run was cancelled; results gathered so far are
        still finalized.
        """
        total = len(files)
        completed = True
        for index, path in enumerate(files, 1):
            if self.cancelled:
                self.logger.info(f"Analysis cancelled after {index - 1} of {total} files")
                completed = False
                break
            if self.progress is not None:
                self.progress(index, total, str(path))
            self.analyze_file(Path(path))

        for reviewer in self.reviewers:
            reviewer.review_strings()
        return completed

    def finding_count(self) -> int:
        count = len(self.file_findings.not_utf8) + len(self.file_findings.utf8_with_bom)
        for reviewer in (self.cpp, self.csharp, self.rc):
            results = reviewer.results
            count += sum(len(bucket) for bucket in (
                results.unsafe_localizable_strings,
                results.localizable_strings_with_urls,
                results.localizable_strings_in_internal_call,
                results.not_available_for_localization_strings,
                results.deprecated_macros,
                results.printf_single_numbers,
                results.duplicates_value_assigned_to_ids,
                results.ids_assigned_number,
                results.malformed_strings,
                results.unencoded_strings,
                results.trailing_spaces,
                results.tabs,
                results.wide_lines,
                results.comments_missing_space,
                results.bad_font_sizes,
                results.non_system_font_faces,
            ))
        count += sum(len(entry.issues) for _file_name, entry in self.po.catalog_entries)
        return count


# ============================================================================
# REPORT
# ============================================================================

def _clean(text: str) -> str:
    return text.replace("\t", " ").replace("\r", " ").replace("\n", " ")


def _location(record: StringRecord) -> str:
    line = "" if record.line is None else str(record.line)
    column = "" if record.column is None else str(record.column)
    return f"{record.file_name}\t{line}\t{column}"


def _usage_explanation(record: StringRecord, function_text: str, variable_text: str,
                       other_text: str) -> str:
    if record.usage.kind == UsageType.FUNCTION:
        return function_text + record.usage.value
    if record.usage.kind == UsageType.VARIABLE:
        return variable_text + record.usage.value
    return other_text + record.usage.value


def _encoding_recommendation(text: str) -> str:
    return ''.join(f"\\U{ord(ch):08X}" if ord(ch) > 127 else ch for ch in _clean(text))


_CATALOG_EXPLANATIONS = {
    IssueKind.PRINTF_MISMATCH: ("Mismatching printf command between source and translation strings.",
                                "printfMismatch"),
    IssueKind.ACCELERATOR_MISMATCH: ("Mismatching keyboard accelerator between source and "
                                     "translation strings.", "acceleratorMismatch"),
    IssueKind.SUSPECT_SOURCE: ("String available for translation that probably should not be.",
                               "suspectSource"),
    IssueKind.CONSISTENCY_MISMATCH: ("Mismatching trailing punctuation, spaces or capitalization "
                                     "between source and translation strings.", "consistencyMismatch"),
    IssueKind.SOURCE_SURROUNDING_SPACES: ("String available for translation begins or ends with spaces.",
                                          "L10NStringSurroundingSpaces"),
    IssueKind.SOURCE_NEEDING_CONTEXT: ("Ambiguous string available for translation without a "
                                       "translator comment or context.", "L10NStringNeedsContext"),
}


def _format_source_results(reviewer, rows: List[str]) -> None:
    results = reviewer.results

    for val in results.unsafe_localizable_strings:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t" + _usage_explanation(
            val, "String available for translation that probably should not be in function call: ",
            "String available for translation that probably should not be assigned to variable: ",
            "String available for translation that probably should not be within ")
            + "\t[suspectL10NString]")

    for val in results.localizable_strings_with_urls:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t" + _usage_explanation(
            val, "String available for translation that contains an URL or email address in function call: ",
            "String available for translation that contains an URL or email address assigned to variable: ",
            "String available for translation that contains an URL or email address within ")
            + "\t[urlInL10NString]")

    for val in results.localizable_strings_in_internal_call:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t" + _usage_explanation(
            val, "Localizable string being used within non-user facing function call: ",
            "Localizable string being assigned to non-user facing variable: ",
            "Localizable string being assigned to ")
            + "\t[suspectL10NUsage]")

    for val in results.not_available_for_localization_strings:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t" + _usage_explanation(
            val, "String not available for translation in function call: ",
            "String not available for translation assigned to variable: ",
            "String not available for translation assigned to ")
            + "\t[notL10NAvailable]")

    for val in results.deprecated_macros:
        rows.append(f"{_location(val)}\t{_clean(val.text)}\t{val.usage.value}\t[deprecatedMacro]")

    for val in results.printf_single_numbers:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t"
                    "Prefer using std::to_[w]string() instead of printf() formatting a single number."
                    "\t[printfSingleNumber]")

    for val in results.duplicates_value_assigned_to_ids:
        rows.append(f"{val.file_name}\t\t\t{_clean(val.text)}\t"
                    "Verify that duplicate assignment was intended. If correct, consider assigning "
                    "the first ID variable by name to the second one to make this intention clear."
                    "\t[dupValAssignedToIds]")

    for val in results.ids_assigned_number:
        rows.append(f"{val.file_name}\t\t\t{_clean(val.text)}\t"
                    "Prefer using ID constants provided by your framework when assigning values "
                    "to an ID variable.\t[numberAssignedToId]")

    for val in results.malformed_strings:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\tMalformed syntax in string."
                    "\t[malformedString]")

    for val in results.unencoded_strings:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t"
                    "String contains extended ASCII characters that should be encoded. "
                    f"Recommended change: '{_encoding_recommendation(val.text)}'\t[unencodedExtASCII]")

    for val in results.bad_font_sizes + results.non_system_font_faces:
        rows.append(f"{val.file_name}\t\t\t\"{_clean(val.text)}\"\t"
                    "Font issue in resource file dialog definition.\t[fontIssue]")

    for val in results.trailing_spaces:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t"
                    "Trailing space(s) detected at end of line.\t[trailingSpaces]")

    for val in results.tabs:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t"
                    "Tab detected in file; prefer using spaces.\t[tabs]")

    for val in results.wide_lines:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t"
                    f"Line is {val.usage.value} characters long.\t[wideLine]")

    for val in results.comments_missing_space:
        rows.append(f"{_location(val)}\t\"{_clean(val.text)}\"\t"
                    "Space should be inserted between comment tag and comment.\t[commentMissingSpace]")


def format_results(analyzer: BatchAnalyzer, verbose: bool = False) -> str:
    """Renders all findings as a tab-separated report."""
    rows = [REPORT_HEADER]

    for reviewer in (analyzer.cpp, analyzer.csharp, analyzer.rc):
        _format_source_results(reviewer, rows)

    for file_name in analyzer.file_findings.not_utf8:
        rows.append(f"{file_name}\t\t\t\tFile contains extended ASCII characters, "
                    "but is not encoded as UTF-8.\t[nonUTF8File]")
    for file_name in analyzer.file_findings.utf8_with_bom:
        rows.append(f"{file_name}\t\t\t\tFile contains UTF-8 signature; It is recommended to save "
                    "without the file signature for best compiler portability.\t[UTF8FileWithBOM]")

    for file_name, entry in analyzer.po.catalog_entries:
        line = "" if entry.line is None else str(entry.line)
        for kind, detail in entry.issues:
            explanation, warning_id = _CATALOG_EXPLANATIONS[kind]
            rows.append(f"{file_name}\t{line}\t\t{_clean(detail)}\t{explanation}\t[{warning_id}]")

    if verbose:
        for reviewer in analyzer.reviewers:
            for message in reviewer.results.debug_log:
                line = "" if message.line is None else str(message.line)
                column = "" if message.column is None else str(message.column)
                rows.append(f"{message.file_name}\t{line}\t{column}\t{_clean(message.subject)}\t"
                            f"{_clean(message.message)}\t[debugParserInfo]")

    return "\n".join(rows) + "\n"


_SUMMARY_CHECKS = (
    (ReviewStyle.CHECK_L10N_STRINGS, "suspectL10NString"),
    (ReviewStyle.CHECK_SUSPECT_L10N_STRING_USAGE, "suspectL10NUsage"),
    (ReviewStyle.CHECK_PRINTF_MISMATCH, "printfMismatch"),
    (ReviewStyle.CHECK_ACCELERATOR_MISMATCH, "acceleratorMismatch"),
    (ReviewStyle.CHECK_CONSISTENCY, "consistencyMismatch"),
    (ReviewStyle.CHECK_L10N_HAS_SURROUNDING_SPACES, "L10NStringSurroundingSpaces"),
    (ReviewStyle.CHECK_NEEDING_CONTEXT, "L10NStringNeedsContext"),
    (ReviewStyle.CHECK_L10N_CONTAINS_URL, "urlInL10NString"),
    (ReviewStyle.CHECK_NOT_AVAILABLE_FOR_L10N, "notL10NAvailable"),
    (ReviewStyle.CHECK_DEPRECATED_MACROS, "deprecatedMacro"),
    (ReviewStyle.CHECK_UTF8_ENCODED, "nonUTF8File"),
    (ReviewStyle.CHECK_UTF8_WITH_SIGNATURE, "UTF8FileWithBOM"),
    (ReviewStyle.CHECK_UNENCODED_EXT_ASCII, "unencodedExtASCII"),
    (ReviewStyle.CHECK_PRINTF_SINGLE_NUMBER, "printfSingleNumber"),
    (ReviewStyle.CHECK_ID_ASSIGNMENTS, "numberAssignedToId"),
    (ReviewStyle.CHECK_ID_ASSIGNMENTS, "dupValAssignedToIds"),
    (ReviewStyle.CHECK_MALFORMED_STRINGS, "malformedString"),
    (ReviewStyle.CHECK_FONTS, "fontIssue"),
    (ReviewStyle.CHECK_TRAILING_SPACES, "trailingSpaces"),
    (ReviewStyle.CHECK_TABS, "tabs"),
    (ReviewStyle.CHECK_LINE_WIDTH, "wideLine"),
    (ReviewStyle.CHECK_SPACE_AFTER_COMMENT, "commentMissingSpace"),
)


def format_summary(analyzer: BatchAnalyzer) -> str:
    """Lists the checks performed and a few statistics."""
    separator = "#" * 51
    lines = ["Checks Performed", separator]
    lines.extend(name for check, name in _SUMMARY_CHECKS if analyzer.review_style & check)
    lines.extend([
        "",
        "Statistics",
        separator,
        f"Files analyzed: {analyzer.files_analyzed}",
        "Strings available for translation within C/C++ source files: "
        f"{len(analyzer.cpp.results.localizable_strings)}",
        "Strings available for translation within C# source files: "
        f"{len(analyzer.csharp.results.localizable_strings)}",
        f"String table entries within Windows resource files: {len(analyzer.rc.results.localizable_strings)}",
        f"Translation entries within PO message catalog files: {len(analyzer.po.catalog_entries)}",
        f"Findings: {analyzer.finding_count()}",
    ])
    return "\n".join(lines) + "\n"
