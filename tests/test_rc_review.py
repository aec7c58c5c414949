import textwrap

from i18n_check.core.models import ReviewStyle, UsageType
from i18n_check.core.rc_review import RcReviewer

STRING_TABLE = textwrap.dedent('''\
    #include "resource.h"

    STRINGTABLE
    BEGIN
        IDS_OPEN_FILE "Open the selected file"
        IDS_SAVE_FILE "Save the current document"
        IDS_IMAGE "image.bmp"
        IDS_FORMAT "%s"
        IDS_CLOSE "Close all of the windows"
        IDS_QUOTE "Press ""OK"" to continue"
        IDS_EXIT "Exit the application"
        IDS_HELP "Show the help topics"
    END
    ''')

DIALOGS = textwrap.dedent('''\
    IDD_ABOUT DIALOGEX 0, 0, 235, 55
    STYLE DS_SETFONT | DS_MODALFRAME
    FONT 8, "MS Shell Dlg"
    BEGIN
    END

    IDD_OPTIONS DIALOGEX 0, 0, 235, 55
    FONT 7, "MS Shell Dlg"
    BEGIN
    END

    IDD_FANCY DIALOGEX 0, 0, 235, 55
    FONT 18, "Comic Sans MS"
    BEGIN
    END
    ''')


def texts(records):
    return [record.text for record in records]


def test_string_table_entries():
    reviewer = RcReviewer()
    reviewer.scan(STRING_TABLE, "app.rc")
    records = reviewer.results.localizable_strings
    assert len(records) == 8
    assert records[0].text == "Open the selected file"
    assert records[0].usage.kind == UsageType.ORPHAN
    assert records[0].line == 5
    assert 'Press "OK" to continue' in texts(records)


def test_string_table_round_trip():
    reviewer = RcReviewer()
    reviewer.scan(STRING_TABLE, "app.rc")
    reviewer.review_strings()
    assert texts(reviewer.results.unsafe_localizable_strings) == ["image.bmp", "%s"]


def test_single_string_table_in_braces():
    reviewer = RcReviewer()
    reviewer.scan('STRINGTABLE { IDS_A "image.bmp" }\n')
    reviewer.review_strings()
    assert texts(reviewer.results.localizable_strings) == ["image.bmp"]
    assert texts(reviewer.results.unsafe_localizable_strings) == ["image.bmp"]


def test_several_string_tables():
    reviewer = RcReviewer()
    reviewer.scan(textwrap.dedent('''\
        STRINGTABLE DISCARDABLE
        BEGIN
            IDS_ONE "First message text"
        END
        STRINGTABLE
        BEGIN
            IDS_TWO "Second message text"
        END
        '''))
    assert texts(reviewer.results.localizable_strings) == ["First message text", "Second message text"]


def test_entries_sharing_a_line():
    reviewer = RcReviewer()
    reviewer.scan(textwrap.dedent('''\
        STRINGTABLE
        BEGIN
            IDS_ONE "First message text" IDS_TWO "Say ""hello"" twice"
            IDS_EMPTY ""
        END
        '''))
    assert texts(reviewer.results.localizable_strings) == [
        "First message text", 'Say "hello" twice', ""]


def test_unclosed_string_table_is_logged():
    reviewer = RcReviewer()
    reviewer.scan('STRINGTABLE\nBEGIN\n    IDS_ONE "First message text"\n')
    assert reviewer.results.localizable_strings == []
    assert [message.message for message in reviewer.results.debug_log] == [
        "String table is missing its closing END."]


def test_dialog_fonts():
    reviewer = RcReviewer()
    reviewer.scan(DIALOGS, "app.rc")
    results = reviewer.results
    assert [record.usage.value for record in results.bad_font_sizes] == ["7", "18"]
    assert [record.usage.value for record in results.non_system_font_faces] == ["Comic Sans MS"]
    assert results.non_system_font_faces[0].text.startswith('FONT 18, "Comic Sans MS"')


def test_font_check_can_be_disabled():
    reviewer = RcReviewer(review_style=ReviewStyle.CHECK_L10N_STRINGS)
    reviewer.scan(DIALOGS + STRING_TABLE)
    assert reviewer.results.bad_font_sizes == []
    assert len(reviewer.results.localizable_strings) == 8
