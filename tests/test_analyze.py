import codecs
import textwrap

import pytest

from i18n_check.cli_main import main, parse_check_list
from i18n_check.core.exceptions import ConfigError
from i18n_check.core.models import ReviewStyle
from i18n_check.tools.analyze import (REPORT_HEADER, BatchAnalyzer, FileReviewType, file_review_type,
                                      format_results, format_summary, get_files_to_analyze)
from i18n_check.utils.config import ReviewSettings

HARD_CODED = 'MessageBox("Failed adding book helpfiles/another.hhp");\n'

CATALOG = textwrap.dedent('''\
    msgid ""
    msgstr ""
    "Content-Type: text/plain; charset=UTF-8\\n"

    #, c-format
    msgid "Incorrect frame size (%u, %s) for the frame #%u"
    msgstr "Taille de cadre incorrecte (%u, %d) pour le cadre #%u"
    ''')


def all_checks():
    return ReviewSettings(review_style=ReviewStyle.ALL_CHECKS.to_names())


@pytest.mark.parametrize("name,expected", [
    ("app.cpp", FileReviewType.CPP),
    ("app.H", FileReviewType.CPP),
    ("Form1.cs", FileReviewType.CSHARP),
    ("app.rc", FileReviewType.RC),
    ("fr.po", FileReviewType.CATALOG),
    ("messages.pot", FileReviewType.CATALOG),
])
def test_file_review_type(name, expected):
    assert file_review_type(name) == expected


def test_file_discovery(tmp_path):
    src = tmp_path / "src"
    (src / "CMakeFiles").mkdir(parents=True)
    (src / "third_party").mkdir()
    (src / "app.cpp").write_text("int x;\n", encoding="utf-8")
    (src / "app.rc").write_text("", encoding="utf-8")
    (src / "readme.txt").write_text("", encoding="utf-8")
    (src / "pseudo_fr.po").write_text("", encoding="utf-8")
    (src / "CMakeFiles" / "CMakeCXXCompilerId.cpp").write_text("", encoding="utf-8")
    (src / "third_party" / "lib.cpp").write_text("", encoding="utf-8")
    notes = tmp_path / "notes.txt"
    notes.write_text("", encoding="utf-8")

    files = get_files_to_analyze([src, notes, tmp_path / "missing"], excluded=[src / "third_party"])
    assert sorted(path.name for path in files) == ["app.cpp", "app.rc", "notes.txt"]


def test_report_for_hard_coded_string(tmp_path):
    path = tmp_path / "app.cpp"
    path.write_text(HARD_CODED, encoding="utf-8")
    analyzer = BatchAnalyzer()
    assert analyzer.analyze([path])

    report = format_results(analyzer)
    lines = report.splitlines()
    assert lines[0] == REPORT_HEADER
    assert lines[1] == (f"{path}\t1\t13\t\"Failed adding book helpfiles/another.hhp\"\t"
                        "String not available for translation in function call: MessageBox"
                        "\t[notL10NAvailable]")
    assert analyzer.files_analyzed == 1
    assert analyzer.finding_count() == 1


def test_files_are_dispatched_by_extension(tmp_path):
    (tmp_path / "app.rc").write_text('STRINGTABLE\nBEGIN\n    IDS_A "Open the file"\nEND\n',
                                     encoding="utf-8")
    (tmp_path / "Form1.cs").write_text('var label = _("Open the file");\n', encoding="utf-8")
    (tmp_path / "fr.po").write_text(CATALOG, encoding="utf-8")
    analyzer = BatchAnalyzer()
    analyzer.analyze(get_files_to_analyze([tmp_path]))

    assert len(analyzer.rc.results.localizable_strings) == 1
    assert len(analyzer.csharp.results.localizable_strings) == 1
    assert len(analyzer.po.catalog_entries) == 1
    assert analyzer.cpp.results.localizable_strings == []

    summary = format_summary(analyzer)
    assert summary.startswith("Checks Performed\n")
    assert "Files analyzed: 3" in summary
    assert "String table entries within Windows resource files: 1" in summary
    assert "Translation entries within PO message catalog files: 1" in summary


def test_catalog_mismatch_in_report(tmp_path):
    path = tmp_path / "fr.po"
    path.write_text(CATALOG, encoding="utf-8")
    analyzer = BatchAnalyzer()
    analyzer.analyze([path])
    report = format_results(analyzer)
    assert f"{path}\t6\t\t" in report
    assert "[printfMismatch]" in report


def test_utf8_signature_is_reported(tmp_path):
    path = tmp_path / "bom.cpp"
    path.write_bytes(codecs.BOM_UTF8 + b"int x = 0;\n")
    analyzer = BatchAnalyzer(all_checks())
    analyzer.analyze([path])
    assert analyzer.file_findings.utf8_with_bom == [str(path)]
    assert "[UTF8FileWithBOM]" in format_results(analyzer)

    default = BatchAnalyzer()
    default.analyze([path])
    assert default.file_findings.utf8_with_bom == []


def test_legacy_encoding_is_reported(tmp_path):
    path = tmp_path / "legacy.cpp"
    path.write_bytes(b"// Caf\xe9 au lait, tr\xe8s bien\nint x = 0;\n")
    analyzer = BatchAnalyzer(all_checks())
    analyzer.analyze([path])
    assert analyzer.file_findings.not_utf8 == [str(path)]
    assert "[nonUTF8File]" in format_results(analyzer)


def test_unreadable_file_is_recorded(tmp_path):
    analyzer = BatchAnalyzer()
    assert analyzer.analyze_file(tmp_path / "missing.cpp") is False
    assert analyzer.file_findings.unreadable == [str(tmp_path / "missing.cpp")]


def test_progress_callback(tmp_path):
    paths = [tmp_path / "a.cpp", tmp_path / "b.cpp"]
    for path in paths:
        path.write_text("int x;\n", encoding="utf-8")
    calls = []
    analyzer = BatchAnalyzer(progress=lambda index, total, name: calls.append((index, total, name)))
    analyzer.analyze(paths)
    assert calls == [(1, 2, str(paths[0])), (2, 2, str(paths[1]))]


def test_cancel_before_analysis(tmp_path):
    path = tmp_path / "app.cpp"
    path.write_text(HARD_CODED, encoding="utf-8")
    analyzer = BatchAnalyzer()
    analyzer.cancel()
    assert analyzer.analyze([path]) is False
    assert analyzer.files_analyzed == 0

    analyzer.clear_results()
    assert not analyzer.cancelled
    assert analyzer.analyze([path])
    assert analyzer.finding_count() == 1


def test_parse_check_list():
    assert parse_check_list("tabs, printfMismatch") == ReviewStyle.CHECK_TABS | ReviewStyle.CHECK_PRINTF_MISMATCH
    assert parse_check_list("check_fonts") == ReviewStyle.CHECK_FONTS
    assert parse_check_list("all_l10n_checks") == ReviewStyle.ALL_L10N_CHECKS
    with pytest.raises(ConfigError):
        parse_check_list("bogus")


def test_cli_writes_report(tmp_path):
    source = tmp_path / "app.cpp"
    source.write_text(HARD_CODED, encoding="utf-8")
    output = tmp_path / "report.tsv"
    assert main([str(source), "-o", str(output)]) == 1
    report = output.read_text(encoding="utf-8")
    assert report.startswith(REPORT_HEADER)
    assert "[notL10NAvailable]" in report


def test_cli_disable_check(tmp_path):
    source = tmp_path / "app.cpp"
    source.write_text(HARD_CODED, encoding="utf-8")
    assert main([str(source), "--disable", "notL10NAvailable", "-o", str(tmp_path / "out.tsv")]) == 0


def test_cli_clean_file(tmp_path, capsys):
    source = tmp_path / "app.cpp"
    source.write_text("int main() { return 0; }\n", encoding="utf-8")
    assert main([str(source)]) == 0
    assert "Checks Performed" in capsys.readouterr().out


def test_cli_errors(tmp_path):
    source = tmp_path / "app.cpp"
    source.write_text(HARD_CODED, encoding="utf-8")
    assert main([str(source), "--config", str(tmp_path / "missing.json")]) == 2
    assert main([str(source), "--enable", "bogus"]) == 2
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert main([str(source), "--config", str(broken)]) == 2
    unknown_check = tmp_path / "unknown-check.json"
    unknown_check.write_text('{"review_style": ["check_everything"]}', encoding="utf-8")
    assert main([str(source), "--config", str(unknown_check)]) == 2
    empty = tmp_path / "empty"
    empty.mkdir()
    assert main([str(empty)]) == 2


def test_cli_applies_config_file(tmp_path):
    source = tmp_path / "app.cpp"
    source.write_text(HARD_CODED, encoding="utf-8")
    config_file = tmp_path / "i18n-check.json"
    config_file.write_text('{"review_style": ["check_tabs"]}', encoding="utf-8")
    assert main([str(source), "--config", str(config_file), "-o", str(tmp_path / "out.tsv")]) == 0


def test_catalog_source_checks_in_report(tmp_path):
    path = tmp_path / "fr.po"
    path.write_text(textwrap.dedent('''\
        msgid " Open the file"
        msgstr " Ouvrir le fichier"

        #, c-format
        msgid "%s (%s)"
        msgstr "%s (%s)"
        '''), encoding="utf-8")
    analyzer = BatchAnalyzer(ReviewSettings(review_style=["check_l10n_has_surrounding_spaces",
                                                          "check_needing_context"]))
    analyzer.analyze([path])
    report = format_results(analyzer)
    assert f"{path}\t1\t\t Open the file\t" in report
    assert "[L10NStringSurroundingSpaces]" in report
    assert "[L10NStringNeedsContext]" in report
    assert "L10NStringNeedsContext" in format_summary(analyzer)
    assert parse_check_list("L10NStringNeedsContext") == ReviewStyle.CHECK_NEEDING_CONTEXT
