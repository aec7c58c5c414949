import textwrap

import pytest

from i18n_check.core.models import ReviewStyle, UsageInfo, UsageType
from i18n_check.core.source_review import CppReviewer, CSharpReviewer


def texts(records):
    return [record.text for record in records]


@pytest.fixture
def cpp():
    return CppReviewer()


def test_hard_coded_message_in_function_call(cpp):
    cpp.scan('MessageBox("Failed adding book helpfiles/another.hhp");\n', "test.cpp")
    results = cpp.results
    assert len(results.not_available_for_localization_strings) == 1
    record = results.not_available_for_localization_strings[0]
    assert record.text == "Failed adding book helpfiles/another.hhp"
    assert record.usage == UsageInfo.function("MessageBox")
    assert record.file_name == "test.cpp"
    assert (record.line, record.column) == (1, 13)


def test_define_of_message(cpp):
    cpp.scan('#define REV_TIME "unknown date and time"\n')
    records = cpp.results.not_available_for_localization_strings
    assert texts(records) == ["unknown date and time"]
    assert records[0].usage == UsageInfo.variable("REV_TIME", "")


def test_comparison_is_orphan(cpp):
    cpp.scan(textwrap.dedent('''\
        if (value == "my message")
            return;
        '''))
    records = cpp.results.not_available_for_localization_strings
    assert texts(records) == ["my message"]
    assert records[0].usage.kind == UsageType.ORPHAN


def test_returned_string_is_orphan(cpp):
    cpp.scan('return "Something went wrong";\n')
    records = cpp.results.not_available_for_localization_strings
    assert texts(records) == ["Something went wrong"]
    assert records[0].usage.kind == UsageType.ORPHAN


def test_adjacent_literals_are_joined(cpp):
    cpp.scan(textwrap.dedent('''\
        _("This is a long "
          "message across "
          "multiple lines");
        '''))
    assert texts(cpp.results.localizable_strings) == ["This is a long message across multiple lines"]


def test_literals_joined_by_integer_format_macro(cpp):
    cpp.scan('_("The amount is %" PRId64 " dollars");\n')
    assert texts(cpp.results.localizable_strings) == ["The amount is % dollars"]


def test_unknown_format_macro_does_not_join(cpp):
    cpp.scan('_("The amount is %" PRIu46 " dollars");\n')
    assert texts(cpp.results.localizable_strings) == ["The amount is %"]
    assert texts(cpp.results.internal_strings) == [" dollars"]


def test_deprecated_macro_wrapper(cpp):
    cpp.scan('MessageBox(_T("Failed adding book helpfiles/another.hhp"));\n')
    results = cpp.results
    assert texts(results.deprecated_macros) == ["_T"]
    records = results.not_available_for_localization_strings
    assert texts(records) == ["Failed adding book helpfiles/another.hhp"]
    assert records[0].usage == UsageInfo.function("MessageBox")


def test_deprecated_function_call():
    reviewer = CppReviewer()
    reviewer.scan('size_t len = _tcslen(buffer);\n')
    records = reviewer.results.deprecated_macros
    assert texts(records) == ["_tcslen"]
    assert "wcslen" in records[0].usage.value


def test_newer_standard_suggestions_need_newer_cpp_version():
    from i18n_check.core.heuristics import HeuristicTables

    assert "WXUNUSED" not in HeuristicTables.default(14).deprecated_functions
    assert "WXUNUSED" in HeuristicTables.default(17).deprecated_functions


def test_translatable_string_in_assert(cpp):
    cpp.scan('wxASSERT_MSG(ok, _("Unable to load the configuration file"));\n')
    results = cpp.results
    assert texts(results.localizable_strings) == ["Unable to load the configuration file"]
    suspect = results.localizable_strings_in_internal_call
    assert texts(suspect) == ["Unable to load the configuration file"]
    assert suspect[0].usage == UsageInfo.function("wxASSERT_MSG")


def test_strings_in_internal_functions(cpp):
    cpp.scan('printf("Loading %s from cache\\n", name);\n')
    assert texts(cpp.results.internal_strings) == ["Loading %s from cache\\n"]
    assert cpp.results.not_available_for_localization_strings == []


def test_non_localizable_marker(cpp):
    cpp.scan('wxString name = _DT("Application Title Bar");\n')
    assert texts(cpp.results.marked_as_non_localizable_strings) == ["Application Title Bar"]


def test_translation_context_argument(cpp):
    cpp.scan('wxGetTranslation("Open the file", "my_domain");\n')
    assert texts(cpp.results.localizable_strings) == ["Open the file"]
    assert texts(cpp.results.internal_strings) == ["my_domain"]


def test_ignored_variable_name(cpp):
    cpp.scan('const char* debugMessage = "Entering the main loop now";\n')
    records = cpp.results.internal_strings
    assert texts(records) == ["Entering the main loop now"]
    assert records[0].usage.value == "debugMessage"


def test_log_messages_are_exempt(cpp):
    cpp.scan('wxLogMessage("Connection to the server was lost");\n')
    assert cpp.results.not_available_for_localization_strings == []


def test_debug_only_blocks_are_skipped(cpp):
    cpp.scan(textwrap.dedent('''\
        #ifndef NDEBUG
        wxMessageBox("Debug only message here");
        #endif
        #ifdef _DEBUG
        wxMessageBox("Another debug message here");
        #endif
        #if 0
        wxMessageBox("Disabled code path here");
        #endif
        wxMessageBox("Shown to every user");
        '''))
    assert texts(cpp.results.not_available_for_localization_strings) == ["Shown to every user"]


def test_debug_block_ends_at_elif_or_endif(cpp):
    cpp.scan(textwrap.dedent('''\
        #ifdef _DEBUG
        wxMessageBox("Debug only message here");
        #elif defined(__WXMSW__)
        wxMessageBox("Windows message for users");
        #endif
        #ifdef _DEBUG
        wxMessageBox("Another debug message here");
        #else
        wxMessageBox("Release branch message here");
        #endif
        wxMessageBox("Shown to every user");
        '''))
    assert texts(cpp.results.not_available_for_localization_strings) == [
        "Windows message for users", "Shown to every user"]


def test_comments_are_skipped(cpp):
    cpp.scan(textwrap.dedent('''\
        // MessageBox("Hidden message text");
        /* MessageBox("Another hidden
           message text"); */
        MessageBox("Visible message text");
        '''))
    assert texts(cpp.results.not_available_for_localization_strings) == ["Visible message text"]


def test_comment_missing_space():
    reviewer = CppReviewer(review_style=ReviewStyle.CHECK_SPACE_AFTER_COMMENT)
    reviewer.scan(textwrap.dedent('''\
        //no space here
        // fine
        //----------
        int x = 0;
        '''))
    records = reviewer.results.comments_missing_space
    assert len(records) == 1
    assert records[0].line == 1


def test_unterminated_block_comment_is_logged(cpp):
    cpp.scan('MessageBox("Visible message text");\n/* never closed\n')
    results = cpp.results
    assert texts(results.not_available_for_localization_strings) == ["Visible message text"]
    assert [message.subject for message in results.debug_log] == ["Parse error"]


@pytest.mark.parametrize("code", [
    '__asm__("movl %eax, %ebx");\nint x = 0;\n',
    '__asm__ volatile ("nop" : : : "memory");\nint x = 0;\n',
    '__asm { mov eax, "not a message at all" }\nint x = 0;\n',
])
def test_assembly_blocks_are_skipped(cpp, code):
    cpp.scan(code)
    for _name, bucket in cpp.results.record_buckets():
        assert bucket == []
    assert cpp.results.debug_log == []


def test_unterminated_assembly_block_is_logged(cpp):
    cpp.scan('__asm__("movl %eax, %ebx";\n')
    assert [message.message for message in cpp.results.debug_log] == ["Missing closing ')' in asm block."]


def test_cpp_raw_string(cpp):
    cpp.scan('auto s = R"(a "quoted" word here)";\n')
    records = cpp.results.not_available_for_localization_strings
    assert texts(records) == ['a "quoted" word here']
    assert records[0].usage == UsageInfo.variable("s", "auto")


def test_escaped_quotes_stay_in_literal(cpp):
    cpp.scan('MessageBox("Unable to open \\"file\\" right now");\n')
    assert texts(cpp.results.not_available_for_localization_strings) == [
        'Unable to open \\"file\\" right now']


def test_quote_character_literal(cpp):
    cpp.scan("char c = '\"';\nMessageBox(\"Visible message text\");\n")
    assert texts(cpp.results.not_available_for_localization_strings) == ["Visible message text"]


def test_formatting_checks():
    reviewer = CppReviewer(review_style=ReviewStyle.ALL_CHECKS)
    long_line = "int value = " + "1 + " * 30 + "1;"
    reviewer.scan("\tint x = 1;\nint y = 2; \n" + long_line + "\nint z = 3;\n")
    results = reviewer.results
    assert [record.line for record in results.tabs] == [1]
    assert texts(results.trailing_spaces) == ["int y = 2;"]
    assert len(results.wide_lines) == 1
    assert results.wide_lines[0].usage.value == str(len(long_line))
    assert results.wide_lines[0].line == 3


def test_long_bitmask_lines_are_not_wide():
    reviewer = CppReviewer(review_style=ReviewStyle.ALL_CHECKS)
    long_line = "int flags = " + "FLAG_A | " * 20 + "FLAG_B;"
    reviewer.scan(long_line + "\nint z = 3;\n")
    assert reviewer.results.wide_lines == []


@pytest.mark.parametrize("ending", ["\n", "\r\n", ""])
def test_last_line_is_checked_for_width(ending):
    reviewer = CppReviewer(review_style=ReviewStyle.ALL_CHECKS)
    long_line = "int value = " + "1 + " * 30 + "1;"
    reviewer.scan("int x = 1;\n" + long_line + ending)
    results = reviewer.results
    assert len(results.wide_lines) == 1
    assert results.wide_lines[0].line == 2
    assert results.wide_lines[0].usage.value == str(len(long_line))


def test_last_line_is_checked_for_trailing_space():
    reviewer = CppReviewer(review_style=ReviewStyle.ALL_CHECKS)
    reviewer.scan("int x = 1;\nint y = 2; ")
    assert texts(reviewer.results.trailing_spaces) == ["int y = 2;"]
    assert reviewer.results.trailing_spaces[0].line == 2


def test_comment_marker_at_end_of_file(cpp):
    cpp.scan('MessageBox("Visible message text");\n/')
    assert texts(cpp.results.not_available_for_localization_strings) == ["Visible message text"]
    assert cpp.results.debug_log == []


def test_formatting_checks_are_off_by_default(cpp):
    cpp.scan("\tint x = 1; \nint y = 2;\n")
    assert cpp.results.tabs == []
    assert cpp.results.trailing_spaces == []


def test_missing_space_before_closing_brace(cpp):
    cpp.scan("void f() { run(); }\nvoid g() { run();}\n")
    assert [message.subject for message in cpp.results.debug_log] == ["MISSING SPACE"]


def test_numbers_assigned_to_ids(cpp):
    cpp.scan(textwrap.dedent('''\
        #define ID_FILE_OPEN 1000
        #define ID_FILE_SAVE 1000
        #define WIDTH 1000
        '''))
    results = cpp.results
    assert texts(results.ids_assigned_number) == [
        "1000 assigned to ID_FILE_OPEN",
        "1000 assigned to ID_FILE_SAVE",
    ]
    assert texts(results.duplicates_value_assigned_to_ids) == [
        "1000 has been assigned to multiple ID variables."]


def test_mfc_id_out_of_range(cpp):
    cpp.scan("#define IDS_HELLO 0x8000\n")
    assert texts(cpp.results.ids_assigned_number) == [
        "0x8000 assigned to IDS_HELLO; value should be between 1 and 0x7FFF if this is an MFC project."]


def test_finalize_flags_unsafe_and_url_strings(cpp):
    cpp.scan(textwrap.dedent('''\
        SetLabel(_("image.bmp"));
        SetLabel(_("Visit https://example.com for help"));
        SetLabel(_("Click < b>here</b> to continue"));
        '''))
    cpp.review_strings()
    results = cpp.results
    assert texts(results.unsafe_localizable_strings) == ["image.bmp"]
    assert texts(results.localizable_strings_with_urls) == ["Visit https://example.com for help"]
    assert texts(results.malformed_strings) == ["Click < b>here</b> to continue"]


def test_finalize_flags_single_number_format():
    reviewer = CppReviewer()
    reviewer.scan('wxString s = wxString::Format("%d", count);\n')
    reviewer.review_strings()
    assert texts(reviewer.results.printf_single_numbers) == ["%d"]


def test_finalize_flags_unencoded_characters():
    reviewer = CppReviewer(review_style=ReviewStyle.ALL_CHECKS)
    reviewer.scan('MessageBox(_("Café is closed today"));\n')
    reviewer.review_strings()
    assert texts(reviewer.results.unencoded_strings) == ["Café is closed today"]


def test_clear_results(cpp):
    cpp.scan('MessageBox("Failed adding book helpfiles/another.hhp");\n')
    cpp.clear_results()
    for _name, bucket in cpp.results.record_buckets():
        assert bucket == []


def test_csharp_verbatim_string():
    reviewer = CSharpReviewer()
    reviewer.scan('MessageBox.Show(@"Say ""hello"" to everyone");\n')
    records = reviewer.results.not_available_for_localization_strings
    assert texts(records) == ['Say "hello" to everyone']
    assert records[0].usage == UsageInfo.function("MessageBox.Show")


def test_csharp_raw_string():
    reviewer = CSharpReviewer()
    reviewer.scan('var message = """Raw text for the user""";\n')
    records = reviewer.results.not_available_for_localization_strings
    assert texts(records) == ["Raw text for the user"]
    assert records[0].usage == UsageInfo.variable("message", "var")


def test_csharp_unterminated_raw_string_is_logged():
    reviewer = CSharpReviewer()
    reviewer.scan('var message = """Raw text that never ends;\n')
    assert [message.message for message in reviewer.results.debug_log] == [
        "Raw string is missing its closing delimiter."]
