# -*- coding: utf-8 -*-
"""
i18n-check CLI Main Module
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from i18n_check import __version__
from i18n_check.core.exceptions import ConfigError
from i18n_check.core.models import ReviewStyle
from i18n_check.tools.analyze import BatchAnalyzer, format_results, format_summary, get_files_to_analyze
from i18n_check.utils.config import ConfigManager, ReviewSettings

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="i18n-check",
        description=f"i18n-check V{__version__}: internationalization and localization analysis "
                    "of C/C++, C#, resource and gettext catalog files")
    parser.add_argument("paths", nargs='+', help="Files or directories to analyze")
    parser.add_argument("--output", "-o", help="Write the report to this file instead of stdout")
    parser.add_argument("--config", help="Path to JSON configuration file")
    parser.add_argument("--enable", default=None,
                        help="Comma-separated checks to run, replacing the configured ones "
                             "(e.g. suspectL10NString,printfMismatch or check_tabs)")
    parser.add_argument("--disable", default=None,
                        help="Comma-separated checks to turn off")
    parser.add_argument("--exclude", action="append", default=[],
                        help="File or folder to skip (may be repeated)")
    parser.add_argument("--fuzzy", action="store_true", help="Also review fuzzy catalog translations")
    parser.add_argument("--min-words", type=int, default=None,
                        help="Minimum word count for a hard-coded string to be reported as "
                             "not available for translation")
    parser.add_argument("--cpp-version", type=int, default=None, choices=[11, 14, 17, 20, 23],
                        help="Minimum C++ standard the code targets")
    parser.add_argument("--max-line-length", type=int, default=None,
                        help="Line width above which wideLine is reported")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable verbose logging and parser diagnostics in the report")
    return parser


# report ids accepted by --enable/--disable alongside the flag names
CHECK_IDS = {
    "suspectL10NString": ReviewStyle.CHECK_L10N_STRINGS,
    "suspectL10NUsage": ReviewStyle.CHECK_SUSPECT_L10N_STRING_USAGE,
    "notL10NAvailable": ReviewStyle.CHECK_NOT_AVAILABLE_FOR_L10N,
    "deprecatedMacro": ReviewStyle.CHECK_DEPRECATED_MACROS,
    "nonUTF8File": ReviewStyle.CHECK_UTF8_ENCODED,
    "UTF8FileWithBOM": ReviewStyle.CHECK_UTF8_WITH_SIGNATURE,
    "unencodedExtASCII": ReviewStyle.CHECK_UNENCODED_EXT_ASCII,
    "printfSingleNumber": ReviewStyle.CHECK_PRINTF_SINGLE_NUMBER,
    "urlInL10NString": ReviewStyle.CHECK_L10N_CONTAINS_URL,
    "malformedString": ReviewStyle.CHECK_MALFORMED_STRINGS,
    "fontIssue": ReviewStyle.CHECK_FONTS,
    "numberAssignedToId": ReviewStyle.CHECK_ID_ASSIGNMENTS,
    "dupValAssignedToIds": ReviewStyle.CHECK_ID_ASSIGNMENTS,
    "printfMismatch": ReviewStyle.CHECK_PRINTF_MISMATCH,
    "acceleratorMismatch": ReviewStyle.CHECK_ACCELERATOR_MISMATCH,
    "consistencyMismatch": ReviewStyle.CHECK_CONSISTENCY,
    "L10NStringSurroundingSpaces": ReviewStyle.CHECK_L10N_HAS_SURROUNDING_SPACES,
    "L10NStringNeedsContext": ReviewStyle.CHECK_NEEDING_CONTEXT,
    "trailingSpaces": ReviewStyle.CHECK_TRAILING_SPACES,
    "tabs": ReviewStyle.CHECK_TABS,
    "wideLine": ReviewStyle.CHECK_LINE_WIDTH,
    "commentMissingSpace": ReviewStyle.CHECK_SPACE_AFTER_COMMENT,
    "fuzzy": ReviewStyle.CHECK_FUZZY,
}


def parse_check_list(text: str) -> ReviewStyle:
    """Turns "tabs,check_fonts,all_l10n_checks" into review style flags."""
    style = ReviewStyle(0)
    names = [name.strip() for name in text.split(',') if name.strip()]
    for name in names:
        if name in CHECK_IDS:
            style |= CHECK_IDS[name]
            continue
        try:
            style |= ReviewStyle.from_names([name])
        except KeyError:
            raise ConfigError(f"Unknown check name: {name}")
    return style


def apply_arguments(settings: ReviewSettings, args) -> ReviewSettings:
    """Command-line options take priority over the configuration file."""
    style = settings.style()
    if args.enable is not None:
        style = parse_check_list(args.enable)
    if args.disable is not None:
        style &= ~parse_check_list(args.disable)
    settings.review_style = ReviewStyle(style).to_names()

    if args.fuzzy:
        settings.review_fuzzy_translations = True
    if args.min_words is not None:
        settings.min_words_for_classifying_unavailable_string = args.min_words
    if args.cpp_version is not None:
        settings.min_cpp_version = args.cpp_version
    if args.max_line_length is not None:
        settings.max_line_length = args.max_line_length
    settings.excluded_paths = list(settings.excluded_paths) + list(args.exclude)
    return settings


def print_progress(current: int, total: int, text: str) -> None:
    percent = int((current / total) * 100) if total > 0 else 0
    sys.stderr.write(f"\rProgress: [{current}/{total}] {percent}% - {text[-50:].ljust(50)}")
    sys.stderr.flush()
    if current == total:
        sys.stderr.write("\n")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    config_manager = ConfigManager(args.config) if args.config else ConfigManager()
    if args.config:
        if not Path(args.config).exists():
            print(f"Error: Config file not found: {args.config}")
            return 2
        if not config_manager.load_config():
            print(f"Error: Invalid config file: {args.config}")
            return 2

    try:
        settings = apply_arguments(config_manager.settings, args)
        analyzer = BatchAnalyzer(settings, config_manager.build_tables(),
                                 progress=None if args.verbose else print_progress)
    except ConfigError as e:
        print(f"Error: {e}")
        return 2

    files = get_files_to_analyze(args.paths, settings.excluded_paths)
    if not files:
        print("Error: No files to analyze were found.")
        return 2

    logger.info(f"Analyzing {len(files)} files")
    try:
        analyzer.analyze(files)
    except KeyboardInterrupt:
        analyzer.cancel()
        print("\nAnalysis interrupted.")
        return 1

    report = format_results(analyzer, verbose=args.verbose)
    if args.output:
        try:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(report)
        except OSError as e:
            print(f"Error: Unable to write report to {args.output}: {e}")
            return 2
        print(f"Report written to: {args.output}")
    else:
        print(report)

    print("\n" + "=" * 60)
    print(format_summary(analyzer))
    print("=" * 60)

    return 1 if analyzer.finding_count() else 0


if __name__ == "__main__":
    sys.exit(main())
