import textwrap

import pytest

from i18n_check.core.exceptions import CatalogError
from i18n_check.core.models import IssueKind, PrintfFormat, ReviewStyle
from i18n_check.core.po_review import CatalogReviewer, parse_catalog_entry, split_catalog_entries

HEADER = textwrap.dedent('''\
    msgid ""
    msgstr ""
    "Content-Type: text/plain; charset=UTF-8\\n"

    ''')


def catalog(*entries):
    return HEADER + "\n".join(textwrap.dedent(entry) for entry in entries)


def review(text, **options):
    reviewer = CatalogReviewer(**options)
    reviewer.scan(text, "fr.po")
    reviewer.review_strings()
    return reviewer


def issue_kinds(entry):
    return [kind for kind, _detail in entry.issues]


def test_parse_entry_with_continuation_lines():
    entry = parse_catalog_entry(textwrap.dedent('''\
        #: src/frame.cpp:826
        #, c-format
        msgid "Incorrect frame size (%u, %s) "
        "for the frame #%u"
        msgstr "Taille de cadre incorrecte (%u, %s) "
        "pour le cadre #%u"
        '''))
    assert entry.source == "Incorrect frame size (%u, %s) for the frame #%u"
    assert entry.translation == "Taille de cadre incorrecte (%u, %s) pour le cadre #%u"
    assert entry.format_kind == PrintfFormat.CPP
    assert not entry.fuzzy
    assert entry.line == 3


def test_parse_plural_entry():
    entry = parse_catalog_entry(textwrap.dedent('''\
        #, c-format, fuzzy
        msgid "%d file"
        msgid_plural "%d files"
        msgstr[0] "%d fichier"
        msgstr[1] "%d fichiers"
        '''))
    assert entry.source == "%d file"
    assert entry.source_plural == "%d files"
    assert entry.translation == "%d fichier"
    assert entry.translation_plural == "%d fichiers"
    assert entry.fuzzy


def test_previous_and_obsolete_lines_are_ignored():
    entry = parse_catalog_entry(textwrap.dedent('''\
        #| msgid "Old text"
        msgid "New text"
        msgstr "Nouveau texte"
        #~ msgid "Obsolete text"
        '''))
    assert entry.source == "New text"
    assert entry.translation == "Nouveau texte"
    assert entry.format_kind == PrintfFormat.NONE


def test_trailing_backslashes_before_closing_quote():
    entry = parse_catalog_entry(textwrap.dedent('''\
        msgid "Path C:\\\\"
        msgstr "Say \\"hi\\""
        '''))
    assert entry.source == "Path C:\\\\"
    assert entry.translation == 'Say \\"hi\\"'


def test_entry_without_msgid():
    with pytest.raises(CatalogError):
        parse_catalog_entry("#: src/frame.cpp:826\n")


def test_split_entries_tracks_lines():
    blocks = split_catalog_entries(catalog('''\
        msgid "One"
        msgstr "Un"
        ''', '''\
        msgid "Two"
        msgstr "Deux"
        '''))
    assert [line for line, _block in blocks] == [1, 5, 8]


def test_header_is_not_an_entry():
    reviewer = review(catalog('''\
        msgid "Open the file"
        msgstr "Ouvrir le fichier"
        '''))
    assert [entry.source for _file, entry in reviewer.catalog_entries] == ["Open the file"]
    assert reviewer.catalog_entries[0][0] == "fr.po"


def test_printf_mismatch():
    reviewer = review(catalog('''\
        #: src/frame.cpp:826
        #, c-format
        msgid "Incorrect frame size (%u, %s) for the frame #%u"
        msgstr "Taille de cadre incorrecte (%u, %d) pour le cadre #%u"
        '''))
    entry = reviewer.catalog_entries[0][1]
    assert issue_kinds(entry) == [IssueKind.PRINTF_MISMATCH]
    assert entry.issues[0][1].startswith("'Incorrect frame size (%u, %s) for the frame #%u' vs. ")


def test_matching_printf_commands():
    reviewer = review(catalog('''\
        #, c-format
        msgid "Incorrect frame size (%u, %s) for the frame #%u"
        msgstr "Taille de cadre incorrecte (%u, %s) pour le cadre #%u"
        '''))
    assert reviewer.catalog_entries[0][1].issues == []


def test_printf_commands_only_compared_for_format_entries():
    reviewer = review(catalog('''\
        msgid "Saved %s of the document"
        msgstr "Enregistré %d du document"
        '''))
    assert reviewer.catalog_entries[0][1].issues == []


def test_positional_translation():
    reviewer = review(catalog('''\
        #, c-format
        msgid "%s has %d items"
        msgstr "%2$d éléments dans %1$s"
        '''))
    assert reviewer.catalog_entries[0][1].issues == []


def test_mixed_positional_translation():
    reviewer = review(catalog('''\
        #, c-format
        msgid "%s has %d items"
        msgstr "%2$d éléments dans %s"
        '''))
    entry = reviewer.catalog_entries[0][1]
    assert issue_kinds(entry) == [IssueKind.PRINTF_MISMATCH]
    assert "Positional and non-positional" in entry.issues[0][1]


def test_plural_translation_mismatch():
    reviewer = review(catalog('''\
        #, c-format
        msgid "%d file was removed"
        msgid_plural "%d files were removed"
        msgstr[0] "%d fichier a été supprimé"
        msgstr[1] "%s fichiers ont été supprimés"
        '''))
    entry = reviewer.catalog_entries[0][1]
    assert issue_kinds(entry) == [IssueKind.PRINTF_MISMATCH]
    assert "%s fichiers" in entry.issues[0][1]


FUZZY_ENTRY = '''\
    #, fuzzy, c-format
    msgid "Incorrect frame size (%u, %s) for the frame #%u"
    msgstr "Taille de cadre incorrecte (%u, %d) pour le cadre #%u"
    '''


def test_fuzzy_entries_are_skipped_by_default():
    reviewer = review(catalog(FUZZY_ENTRY))
    entry = reviewer.catalog_entries[0][1]
    assert entry.fuzzy
    assert entry.issues == []


def test_fuzzy_entries_reviewed_on_request():
    assert issue_kinds(review(catalog(FUZZY_ENTRY), review_fuzzy=True).catalog_entries[0][1]) == [
        IssueKind.PRINTF_MISMATCH]
    style = ReviewStyle.DEFAULT_CHECKS | ReviewStyle.CHECK_FUZZY
    assert issue_kinds(review(catalog(FUZZY_ENTRY), review_style=style).catalog_entries[0][1]) == [
        IssueKind.PRINTF_MISMATCH]


def test_accelerator_mismatch():
    reviewer = review(catalog('''\
        msgid "&Open the file"
        msgstr "Ouvrir le fichier"
        '''))
    assert issue_kinds(reviewer.catalog_entries[0][1]) == [IssueKind.ACCELERATOR_MISMATCH]


def test_html_entities_are_not_accelerators():
    reviewer = review(catalog('''\
        msgid "Open &quot;here&quot; now"
        msgstr "Ouvrir ici maintenant"
        '''))
    assert IssueKind.ACCELERATOR_MISMATCH not in issue_kinds(reviewer.catalog_entries[0][1])


def test_suspect_source_string():
    reviewer = review(catalog('''\
        msgid "image.bmp"
        msgstr "image.bmp"
        '''))
    assert issue_kinds(reviewer.catalog_entries[0][1]) == [IssueKind.SUSPECT_SOURCE]


def test_source_with_surrounding_spaces():
    reviewer = review(catalog('''\
        msgid " Open the file"
        msgstr " Ouvrir le fichier"
        ''', '''\
        msgid "Open the file"
        msgid_plural "Open the files "
        msgstr[0] "Ouvrir le fichier"
        msgstr[1] "Ouvrir les fichiers "
        '''))
    first, second = [entry for _file, entry in reviewer.catalog_entries]
    assert first.issues == [(IssueKind.SOURCE_SURROUNDING_SPACES, " Open the file")]
    assert second.issues == [(IssueKind.SOURCE_SURROUNDING_SPACES, "Open the files ")]


def test_parse_entry_comments_and_context():
    entry = parse_catalog_entry(textwrap.dedent('''\
        # Shown in the status bar
        #. Minimum value of the range
        #: src/range.cpp:12
        msgctxt "range"
        msgid "Min."
        msgstr "Min."
        '''))
    assert entry.comment == "Shown in the status bar Minimum value of the range"
    assert entry.context == "range"


AMBIGUOUS_ENTRY = '''\
    #, c-format
    msgid "%s (%s)"
    msgstr "%s (%s)"
    '''


def test_source_needing_context():
    style = ReviewStyle.CHECK_NEEDING_CONTEXT
    reviewer = review(catalog(AMBIGUOUS_ENTRY, '''\
        msgid "Min."
        msgstr "Min."
        ''', '''\
        msgid "Open the file"
        msgstr "Ouvrir le fichier"
        '''), review_style=style)
    assert [issue_kinds(entry) for _file, entry in reviewer.catalog_entries] == [
        [IssueKind.SOURCE_NEEDING_CONTEXT], [IssueKind.SOURCE_NEEDING_CONTEXT], []]


def test_comment_or_context_explains_ambiguous_source():
    style = ReviewStyle.CHECK_NEEDING_CONTEXT
    reviewer = review(catalog('''\
        #. file name (folder name)
        #, c-format
        msgid "%s (%s)"
        msgstr "%s (%s)"
        ''', '''\
        msgctxt "minimum"
        msgid "Min."
        msgstr "Min."
        '''), review_style=style)
    assert [entry.issues for _file, entry in reviewer.catalog_entries] == [[], []]


def test_needing_context_is_off_by_default():
    entry = review(catalog(AMBIGUOUS_ENTRY)).catalog_entries[0][1]
    assert IssueKind.SOURCE_NEEDING_CONTEXT not in issue_kinds(entry)


def test_consistency_check():
    reviewer = review(catalog('''\
        msgid "Open the file."
        msgstr "Ouvrir le fichier"
        '''), review_style=ReviewStyle.ALL_L10N_CHECKS)
    assert issue_kinds(reviewer.catalog_entries[0][1]) == [IssueKind.CONSISTENCY_MISMATCH]


@pytest.mark.parametrize("source,translation,expected", [
    ("Open file.", "Ouvrir fichier.", True),
    ("Open file.", "Ouvrir fichier", False),
    ("Open file!", "Ouvrir fichier", True),
    ("Open file.", "Ouvrir fichier (beta)", True),
    ("Name: ", "Nom :", False),
    ("Open file", "ouvrir fichier", False),
    ("open file", "Ouvrir fichier", True),
])
def test_is_consistent(source, translation, expected):
    assert CatalogReviewer.is_consistent(source, translation) == expected


def test_clear_results():
    reviewer = review(catalog(FUZZY_ENTRY))
    reviewer.clear_results()
    assert reviewer.catalog_entries == []
