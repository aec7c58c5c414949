"""
Heuristic tables
================

Name sets and regular expressions used to decide whether a string is
user-facing or internal, and how the context resolver treats the names it
recovers. One ``HeuristicTables`` instance is built (``default()``), extended
through the ``add_*`` registration methods, then frozen and shared read-only
by every scanner of an analysis run.
"""
from __future__ import annotations

import re
from typing import Dict, Iterable, Iterator, List, Optional, Pattern, Set, Tuple

from .exceptions import ConfigError, PatternError


# [[:punct:]] of POSIX classes, in a form usable inside a character class
PUNCT = r"!-/:-@\[-`{-~"

_FILE_NAME_CHARS = r"\w~!@#$%&;',+={}().^\[\]\-"

DEPRECATED_TEXT_MACRO_MESSAGE = ("Deprecated text macro can be removed. "
                                 "(Add 'L' in front of string to make it double-byte.)")

FONT_NAMES = (
    "Arial", "Courier New", "Garamond", "Calibri", "Gabriola",
    ".Helvetica Neue DeskInterface", ".Lucida Grande UI", "Times New Roman",
    "Georgia", "Segoe UI", "Segoe Script", "Century Gothic", "Century",
    "Cascadia Mono", "URW Bookman L", "AR Berkley", "Brush Script", "Consolas",
    "Century Schoolbook L", "Lucida Grande", "Helvetica Neue", "Liberation Serif",
    "Luxi Serif", "Ms Shell Dlg", "Ms Shell Dlg 2", "Bitstream Vera Serif",
    "URW Palladio L", "URW Chancery L", "Comic Sans MS", "DejaVu Serif",
    "DejaVu LGC Serif", "Nimbus Sans L", "URW Gothic L", "Lucida Sans",
    "Andale Mono", "Luxi Sans", "Liberation Sans", "Bitstream Vera Sans",
    "DejaVu LGC Sans", "DejaVu Sans", "Nimbus Mono L", "Lucida Sans Typewriter",
    "Luxi Mono", "DejaVu Sans Mono", "DejaVu LGC Sans Mono",
    "Bitstream Vera Sans Mono", "Liberation Mono", "Franklin Gothic", "Aptos",
    "Grandview", "Bierstadt",
)

FILE_EXTENSIONS = (
    # documents
    "xml", "html", "htm", "xhtml", "rtf", "doc", "docx", "dot", "docm", "txt", "ppt",
    "pptx", "pdf", "ps", "odt", "ott", "odp", "otp", "pptm", "md", "xaml",
    # Visual Studio
    "sln", "csproj", "json", "pbxproj", "apk", "tlb", "ocx", "pdb", "tlh", "hlp",
    "msi", "rc", "vcxproj",
    # macOS
    "dmg", "proj", "xbuild", "xmlns",
    # databases
    "mdb", "db",
    # markdown and help
    "Rmd", "qmd", "hhc", "hhk", "hhp",
    # spreadsheets
    "xls", "xlsx", "ods", "csv",
    # images
    "gif", "jpg", "jpeg", "jpe", "bmp", "tiff", "tif", "png", "tga", "svg", "xcf",
    "ico", "psd", "hdr", "pcx",
    # web
    "asp", "aspx", "cfm", "cfml", "php", "php3", "php4", "sgml", "wmf", "js", "css",
    # movies and music
    "mov", "qt", "rv", "rm", "wmv", "mpg", "mpeg", "mpe", "avi",
    "mp3", "wav", "wma", "midi", "ra", "ram",
    # programs and sources
    "exe", "swf", "vbs", "cpp", "h", "c", "idl", "cs",
    # archives
    "gzip", "bz2",
)

DEPRECATED_MACROS = {
    name: DEPRECATED_TEXT_MACRO_MESSAGE
    for name in ("wxT", "wxT_2", "wxS", "_T", "TEXT", "_TEXT", "__TEXT", "_WIDE")
}

_WCS_FUNCTIONS = ("cat", "chr", "cmp", "coll", "cpy", "dup", "ncat", "ncpy",
                  "pbrk", "rchr", "spn", "str", "tok", "xfrm")
_LOG_TRACE_MESSAGE = ("Use one of the wxLogTrace() functions or one of the "
                      "wxVLogTrace() functions instead.")

# (name, suggestion, minimum C++ standard the suggestion needs)
DEPRECATED_FUNCTIONS: Tuple[Tuple[str, str, int], ...] = tuple(
    [(f"_tcs{suffix}", f"Use std::wcs{suffix}() instead.", 11) for suffix in _WCS_FUNCTIONS] +
    [
        ("_tcslen", "Use std::wcslen() or (wrap in a std::wstring_view) instead.", 11),
        ("_tcsnccmp", "Use std::wcsncmp() instead.", 11),
        ("wsprintf", "Use std::swprintf() instead.", 11),
        ("_stprintf", "Use std::swprintf() instead.", 11),
        ("TCHAR", "Use wchar_t instead.", 11),
        ("wxStrlen", "Use std::wcslen() or (wrap in a std::wstring_view) instead.", 11),
    ] +
    [(f"wxStr{suffix}", f"Use std::wcs{suffix}() instead.", 11)
     for suffix in ("str", "chr", "dup", "cpy", "ncpy", "cat", "ncat", "tok", "rchr", "pbrk", "xfrm")] +
    [
        ("wxIsEmpty", "Use wxString's empty() member instead.", 11),
        ("wxIsdigit", "Use std::iswdigit() instead.", 11),
        ("wxIsalnum", "Use std::iswalnum() instead.", 11),
        ("wxIsalpha", "Use std::iswalpha() instead.", 11),
        ("wxIsctrl", "Use std::iswctrl() instead.", 11),
        ("wxIspunct", "Use std::iswpunct() instead.", 11),
        ("wxIsspace", "Use std::iswspace() instead.", 11),
        ("wxChar", "Use wchar_t instead.", 11),
        ("wxStrftime", "Use wxDateTime's formatting functions instead.", 11),
        ("wxStrtod", "Use wxString::ToDouble() instead.", 11),
        ("wxTrace", _LOG_TRACE_MESSAGE, 11),
        ("WXTRACE", _LOG_TRACE_MESSAGE, 11),
        ("wxTraceLevel", _LOG_TRACE_MESSAGE, 11),
        ("wxUnix2DosFilename", "Construct a wxFileName with wxPATH_UNIX and then use "
                               "wxFileName::GetFullPath(wxPATH_DOS) instead.", 11),
        ("wxSplitPath", "This function is obsolete, please use wxFileName::SplitPath() instead.", 11),
        ("wxMin", "Use std::min() instead.", 11),
        ("wxMax", "Use std::max() instead.", 11),
        ("wxRound", "Use std::lround() instead.", 11),
        ("wxIsNan", "Use std::isnan() instead.", 11),
        ("__WXMAC__", "Use __WXOSX__ instead.", 11),
        ("wxOVERRIDE", "Use override or final instead.", 11),
        ("wxNOEXCEPT", "Use noexcept instead (requires C++17).", 17),
        ("WXUNUSED", "Use [[maybe_unused]] instead (requires C++17).", 17),
        ("wxDECLARE_NO_COPY_CLASS", "Delete the copy CTOR and assignment operator instead.", 11),
    ]
)

LOCALIZATION_FUNCTIONS = (
    # gettext
    "_", "gettext", "dgettext", "ngettext", "dngettext", "pgettext", "dpgettext",
    "npgettext", "dnpgettext", "dcgettext", "proper_name", "proper_name_utf8",
    # wxWidgets
    "wxPLURAL", "wxGETTEXT_IN_CONTEXT", "wxGETTEXT_IN_CONTEXT_PLURAL", "wxTRANSLATE",
    "wxTRANSLATE_IN_CONTEXT", "wxGetTranslation",
    # Qt
    "tr", "trUtf8", "translate", "QT_TR_NOOP", "QT_TRANSLATE_NOOP",
    # KDE
    "i18n", "i18np", "i18ncp", "i18nc", "xi18n", "xi18nc",
)

NON_LOCALIZABLE_FUNCTIONS = ("_DT", "DONTTRANSLATE", "gettext_noop", "N_")

# argument positions of translation functions that hold a context or domain, not a message
TRANSLATION_CONTEXT_PARAMETERS: Dict[str, Tuple[int, ...]] = {
    "translate": (0,),
    "tr": (1,),
    "trUtf8": (1,),
    "QT_TRANSLATE_NOOP": (0,),
    "wxTRANSLATE_IN_CONTEXT": (0,),
    "wxGETTEXT_IN_CONTEXT_PLURAL": (0,),
    "wxGETTEXT_IN_CONTEXT": (0,),
    "wxGetTranslation": (1, 3, 4),
}

_STRING_CLASSES = ("basic_string", "string", "wstring", "u8string", "u16string", "u32string")

CTORS_TO_IGNORE = (
    # Win32
    "_T", "TEXT", "_TEXT", "__TEXT", "_WIDE",
    # macOS
    "CFSTR", "CFStringRef",
    "T",
    # wxWidgets
    "wxT", "wxT_2", "wxS", "wxString", "wxBasicString", "wxCFStringRef", "wxASCII_STR",
    # Qt
    "QString", "QLatin1String", "QStringLiteral", "setStyleSheet",
    # MFC, ATL
    "CString", "_bstr_t",
    # formatting function that should be skipped over
    "wxString::Format",
) + _STRING_CLASSES + tuple(f"std::{name}" for name in _STRING_CLASSES) \
  + tuple(f"std::pmr::{name}" for name in _STRING_CLASSES) \
  + tuple(f"pmr::{name}" for name in _STRING_CLASSES)

INTERNAL_FUNCTIONS = (
    # attributes
    "deprecated", "nodiscard", "_Pragma",
    # asserts
    "check_assertion", "static_assert", "assert", "Assert", "__android_log_assert",
    # wxWidgets
    "wxDEPRECATED_MSG", "wxSTC_DEPRECATED_MACRO_VALUE", "wxPG_DEPRECATED_MACRO_VALUE",
    "GetExt", "SetExt", "XRCID", "wxSystemOptions::GetOptionInt", "WXTRACE",
    "wxTrace", "wxDATETIME_CHECK", "wxASSERT", "wxASSERT_MSG", "wxASSERT_LEVEL_2",
    "wxASSERT_LEVEL_2_MSG", "wxOnAssert", "wxCHECK", "wxCHECK2", "wxCHECK2_MSG",
    "wxCHECK_MSG", "wxCHECK_RET", "wxCOMPILE_TIME_ASSERT", "wxPROPERTY_FLAGS",
    "wxPROPERTY", "wxMISSING_IMPLEMENTATION", "wxCOMPILE_TIME_ASSERT2", "wxFAIL_MSG",
    "wxFAILED_HRESULT_MSG", "ExecCommand", "CanExecCommand", "IgnoreAppSubDir",
    "put_designMode", "SetExtension", "wxSystemOptions::SetOption",
    "wxFileName::CreateTempFileName", "wxExecute", "SetFailedWithLastError",
    "wxIconHandler", "wxBitmapHandler", "OutputDumpLine", "wxFileTypeInfo",
    "TAG_HANDLER_BEGIN", "FDEBUG", "MDEBUG", "wxVersionInfo", "Platform::DebugPrintf",
    "wxGetCommandOutput", "SetKeyWords",
    # Qt
    "Q_ASSERT", "Q_ASSERT_X", "qSetMessagePattern", "qmlRegisterUncreatableMetaObject",
    "addShaderFromSourceCode", "QStandardPaths::findExecutable", "QDateTime::fromString",
    "qCDebug", "qDebug",
    # Catch2
    "TEST_CASE", "BENCHMARK", "TEMPLATE_TEST_CASE", "SECTION", "DYNAMIC_SECTION",
    "REQUIRE", "REQUIRE_THROWS_WITH", "REQUIRE_THAT", "CHECK", "CATCH_ENFORCE",
    "INFO", "SUCCEED", "SCENARIO", "GIVEN", "AND_GIVEN", "WHEN", "THEN",
    "SCENARIO_METHOD", "WARN", "TEST_CASE_METHOD", "Catch::Clara::Arg",
    "Catch::TestCaseInfo", "GENERATE", "CATCH_INTERNAL_ERROR", "CATCH_ERROR",
    "CATCH_MAKE_MSG", "INTERNAL_CATCH_DYNAMIC_SECTION", "CATCH_RUNTIME_ERROR",
    "CATCH_REQUIRE_THROWS_WIT", "CATCH_SUCCEED", "CATCH_INFO",
    "CATCH_UNSCOPED_INFO", "CATCH_WARN", "CATCH_SECTION",
    # CppUnit
    "CPPUNIT_ASSERT", "CPPUNIT_ASSERT_EQUAL", "CPPUNIT_ASSERT_DOUBLES_EQUAL",
    # Google Test
    "EXPECT_STREQ", "EXPECT_STRNE", "EXPECT_STRCASEEQ", "EXPECT_STRCASENE",
    "EXPECT_TRUE", "EXPECT_THAT", "EXPECT_FALSE", "EXPECT_EQ", "EXPECT_NE",
    "EXPECT_LT", "EXPECT_LE", "EXPECT_GT", "EXPECT_GE", "ASSERT_STREQ",
    "ASSERT_STRNE", "ASSERT_STRCASEEQ", "ASSERT_STRCASENE", "ASSERT_TRUE",
    "ASSERT_THAT", "ASSERT_FALSE", "ASSERT_EQ", "ASSERT_NE", "ASSERT_LT", "ASSERT_LE",
    "ASSERT_GT", "ASSERT_GE",
    # other test frameworks
    "do_test", "run_check", "GNC_TEST_ADD_FUNC", "GNC_TEST_ADD", "g_test_message",
    "check_binary_op", "check_binary_op_equal", "MockProvider",
    # low-level printf
    "wprintf", "printf", "sprintf", "snprintf", "fprintf", "wxSnprintf",
    # KDE
    "getDocumentProperty", "setDocumentProperty",
    # GTK
    "gtk_assert_dialog_append_text_column", "gtk_assert_dialog_add_button_to",
    "gtk_assert_dialog_add_button", "g_object_set_property", "gdk_atom_intern",
    "g_object_class_override_property", "g_object_get", "g_assert_cmpstr",
    # Tcl
    "Tcl_PkgRequire", "Tcl_PkgRequireEx",
    # debugging helpers
    "print_debug", "DPRINTF", "print_warning", "perror", "LogDebug", "DebugMsg",
    # system calls
    "fopen", "getenv", "setenv", "system", "run", "exec", "execute",
    "popen", "dlopen", "dlsym", "g_signal_connect", "handle_system_error",
    "CFBundleCopyResourceURL",
    # Windows, MFC
    "OutputDebugString", "OutputDebugStringA", "OutputDebugStringW", "QueryValue",
    "ASSERT", "_ASSERTE", "TRACE", "ATLTRACE", "TRACE0", "ATLTRACE2", "ATLENSURE",
    "ATLASSERT", "VERIFY", "LoadLibrary", "LoadLibraryEx", "LoadModule",
    "GetModuleHandle", "QueryDWORDValue", "GetTempFileName", "QueryMultiStringValue",
    "SetMultiStringValue", "GetTempDirectory", "FormatGmt", "GetProgIDVersion",
    "GetProfileInt", "WriteProfileInt", "RegOpenKeyEx", "QueryStringValue", "lpVerb",
    "Invoke", "Invoke0", "ShellExecute", "GetProfileString", "GetProcAddress",
    "RegisterClipboardFormat", "CreateIC", "_makepath", "_splitpath", "VerQueryValue",
    "CLSIDFromProgID", "StgOpenStorage", "InvokeN", "CreateStream", "DestroyElement",
    "CreateStorage", "OpenStream", "CallMethod", "PutProperty", "GetProperty",
    "SetRegistryKey",
    # zlib
    "Tracev", "Trace", "Tracevv",
    # Lua
    "luaL_error", "lua_pushstring", "lua_setglobal",
    "trace", "ActionFormat", "ErrorFormat", "addPositionalArgument", "DEBUG",
)

LOG_FUNCTIONS = (
    # wxWidgets
    "wxLogLastError", "wxLogError", "wxLogFatalError", "wxLogGeneric", "wxLogMessage",
    "wxLogStatus", "wxLogSysError", "wxLogTrace", "wxLogVerbose", "wxLogWarning",
    "wxLogDebug", "wxLogApiError", "LogTraceArray", "DoLogRecord", "DoLogText",
    "DoLogTextAtLevel", "LogRecord", "DDELogError", "LogTraceLargeArray",
    # Qt
    "qDebug", "qInfo", "qWarning", "qCritical", "qFatal", "qCDebug", "qCInfo",
    "qCWarning", "qCCritical",
    # GLib
    "g_error", "g_info", "g_log", "g_message", "g_debug", "g_warning",
    "g_log_structured", "g_critical",
    # SDL
    "SDL_Log", "SDL_LogCritical", "SDL_LogDebug", "SDL_LogError", "SDL_LogInfo",
    "SDL_LogMessage", "SDL_LogMessageV", "SDL_LogVerbose", "SDL_LogWarn",
    # GnuCash
    "PERR", "PWARN", "PINFO", "ENTER", "LEAVE",
)

_STD_EXCEPTIONS = ("logic_error", "domain_error", "length_error", "out_of_range",
                   "runtime_error", "overflow_error", "underflow_error", "range_error",
                   "invalid_argument", "exception")
EXCEPTIONS = _STD_EXCEPTIONS + tuple(f"std::{name}" for name in _STD_EXCEPTIONS) + \
    ("AfxThrowOleDispatchException",)

KNOWN_INTERNAL_STRINGS = (
    "size-points", "background-gdk", "foreground-gdk", "foreground-set",
    "background-set", "weight-set", "style-set", "underline-set", "size-set",
    "charset", "xml", "gdiplus", "Direct2D", "DirectX", "localhost",
    "32 bit", "32-bit", "64 bit", "64-bit",
    # RTF font families
    "fnil", "fdecor", "froman", "fscript", "fswiss", "fmodern", "ftech",
    "UNIX", "macOS", "Apple Mac OS", "Apple Mac OS X", "OSX", "Linux", "FreeBSD",
    "POSIX", "NetBSD",
)

KEYWORDS = ("return", "else", "if", "goto", "new", "delete", "throw")

VARIABLE_TYPES_TO_IGNORE = (
    "wxUxThemeHandle", "wxRegKey", "wxLoadedDLL", "wxConfigPathChanger",
    "wxWebViewEvent", "wxFileSystemWatcherEvent", "wxStdioPipe",
    "wxCMD_LINE_CHARS_ALLOWED_BY_SHORT_OPTION", "vmsWarningHandler",
    "vmsErrorHandler", "wxFFileOutputStream", "wxFFile", "wxFileName", "wxColor",
    "wxColour", "wxFont", "LOGFONTW", "SecretSchema", "GtkTypeInfo", "wxRegEx",
    "wregex", "std::wregex", "regex", "std::regex", "wxDataObjectSimple",
)

IGNORED_VARIABLE_PATTERNS = (
    (r"^debug.*", re.IGNORECASE),
    (r"^stacktrace.*", re.IGNORECASE),
    (r"([\w\-])*xpm", re.IGNORECASE),
    (r"xpm([\w\-])*", re.IGNORECASE),
    (r"(sql|db|database)(Table|Update|Query|Command|Upgrade)?[\w\-]*", re.IGNORECASE),
    (r"wxColourDialogNames", 0),
    (r"wxColourTable", 0),
    (r"QT_MESSAGE_PATTERN", 0),
)

SQL_CODE = (r"(INSERT INTO|DELETE FROM|ALTER TABLE|CREATE TABLE|DROP TABLE|"
            r"UPDATE \w+ SET|SELECT .+ FROM)[\s\S]*", re.IGNORECASE)

# each pattern must match the whole (normalized) string
UNTRANSLATABLE_PATTERNS = (
    # nothing but numbers, punctuation or control characters
    (rf"(?:[\d\s{PUNCT}\x00-\x1f\x7f]|\\[rnt])+", 0),
    # placeholder text
    (r"Lorem ipsum.*", 0),
    # webpage content type
    (r"[A-Za-z0-9\-]+/[A-Za-z0-9\-]+;\s*[A-Za-z0-9\-]+=[A-Za-z0-9\-]+", 0),
    # SQL
    SQL_CODE,
    (r"^(INSERT INTO|DELETE FROM).*", re.IGNORECASE),
    (r"^ORDER BY.*", 0),
    (r"[(]*^SELECT\s+[A-Z_0-9.]+,.*", 0),
    # a regular expression
    (r"[(][?]i[)].*", 0),
    # file filters whose "name" is just the extension (e.g., "PNG (*.png)|*.png")
    (r"([A-Z]+|[bB]itmap) [(]([*][.][A-Za-z0-9]{1,5}[)])", 0),
    (r"(([A-Z]+|[bB]itmap) [(]([*][.][A-Za-z0-9]{1,5})(;[*][.][A-Za-z0-9]{1,5})*[)][|]"
     r"([*][.][A-Za-z0-9]{1,5})(;[*][.][A-Za-z0-9]{1,5})*[|]{0,2})+", 0),
    # measuring strings
    (r"\s*(ABCDEFG|abcdefg|AEIOU|aeiou).*", 0),
    # debug messages
    (r"Assert(ion)? (f|F)ail.*", 0),
    (r"ASSERT *", 0),
    # HTML
    (r"<!DOCTYPE html", 0),
    (r"&[#]?[xX]?[A-Za-z0-9]+;", 0),
    (r"<a href=.*", 0),
    # CSS
    (r"[\s\S]*\{\s*[a-zA-Z\-]+\s*[:]\s*[0-9a-zA-Z\- ();:%#'\",]+\s*\}[\s\S]*", 0),
    # JS
    (r"class\s*=\s*['\"][A-Za-z0-9\- _]*['\"]", 0),
    # an opening HTML element
    (r"<(body|html|img|head|meta|style|span|p|tr|td)", 0),
    # PostScript
    (r"%%[^\W\d_]+:.*", 0),
    (r"(?:<< (?:[/()A-Za-z0-9\s]|\\n)*)+", 0),
    (r"(?:/[A-Za-z0-9\s]* \[[A-Za-z0-9\s%]+\](?:\\n|\s)*)+", 0),
    # C preprocessor
    (r"^#(include|define|if|ifdef|ifndef|endif|elif|pragma|warning)\s.*", 0),
    # C++ member access
    (r"[a-zA-Z0-9_]+(->|::)[a-zA-Z0-9_]+([(][)];)?", 0),
    # XML
    (r"version[ ]?=\\\"[0-9.]+\\\"", 0),
    (r"<([A-Za-z])+([A-Za-z0-9_/\\\-.'\"=;:#\s])+[>]?", 0),
    (r"xml[ ]*version[ ]*=[ ]*\\[\"'][0-9.]+\\[\"'][>]?", 0),
    (r"<[\\]?\?xml[ a-zA-Z0-9=\\\"'%\-]*[?]?>", 0),
    (rf"<[A-Za-z]+[A-Za-z0-9_/\\\-.'\"=;:\s]+>[\s\d{PUNCT}]*<[A-Za-z0-9_/\-.']*>", 0),
    (rf"<[A-Za-z]+([A-Za-z0-9_\-.]+\s*){{1,2}}=[{PUNCT}A-Za-z0-9]*", 0),
    (r"<[A-Za-z0-9_\-.]+\s*([A-Za-z0-9_\-.]+\s*=\s*[\"'\\]{0,2}[a-zA-Z0-9\-]*[\"'\\]{0,2}\s*)+", 0),
    (r"charset\s*=.*", re.IGNORECASE),
    # all X's, spaces and commas are a placeholder of some sort
    (r"[+\-]?[xX.](?:[xX., ]|[+\-](?=[xX.]))*", 0),
    # program version
    (r"[a-zA-Z\-]+ v(ersion)?[ ]?[0-9.]+", 0),
    # bash commands (e.g., "lpstat -p") and system variables
    (r"[^\W\d_]{3,} [\-][^\W\d_]+", 0),
    (r"sys[$].*", 0),
    # PascalCase and camelCase identifiers
    (rf"[{PUNCT}]*[A-Z]+[a-z0-9]+([A-Z]+[a-z0-9]+)+[{PUNCT}]*", 0),
    (rf"[{PUNCT}]*[a-z]+\d*([A-Z]+[a-z0-9]+)+[{PUNCT}]*", 0),
    # formulas (e.g., "ABS(-2.7)", "=SUM(1; 2)", "ComputeNumbers()")
    (r"(=)?[A-Za-z0-9_]{3,}[(]([RC0-9\-.,;:\[\] ])*[)]", 0),
    (r"[A-Za-z0-9_]{3,}[(][)]", 0),
    (r"=[A-Za-z0-9_]+", 0),
    # character encodings
    (r"(utf[-]?\d+|Shift[-_]JIS|us-ascii|windows-\d{4}|KOI8-R|Big5|GB2312|iso-\d{4}-\d+)",
     re.IGNORECASE),
    # framework constants
    (r"(wx|WX)[A-Z_0-9]{2,}", 0),
    (rf"[{PUNCT}]*[A-Z]{{3,}}[a-z_0-9]{{2,}}[{PUNCT}]*", 0),
    # snake case
    (r"[_]*[a-z0-9]+(_[a-z0-9]+)+[_]*", 0),
    (r"[_]*[A-Z0-9]+(_[A-Z0-9]+)+[_]*", 0),
    (r"[_]*[A-Z0-9][a-z0-9]+(_[A-Z0-9][a-z0-9]+)+[_]*", 0),
    # CSS properties
    (r"font-(style|weight|family|size|face-name|underline|point-size)\s*[:]?.*", re.IGNORECASE),
    (r"text-decoration\s*[:]?.*", re.IGNORECASE),
    (r"(background-)?color\s*:.*", re.IGNORECASE),
    (r"style\s*=[\"']?.*", re.IGNORECASE),
    # local paths and file names
    (r"(WINDIR|Win32|System32|Kernel32|/etc|/tmp)", re.IGNORECASE),
    (r"(so|dll|exe|dylib|jpg|bmp|png|gif|txt|doc)", re.IGNORECASE),
    (r"[.][a-zA-Z0-9]{1,5}", 0),
    (r"[.]DS_Store", 0),
    (rf"[\\/]?[{_FILE_NAME_CHARS}]+([.][a-zA-Z0-9]{{1,4}})+", 0),
    (r"([\w\-]+[\\/]){1,2}[\w\-]+([.][a-zA-Z0-9]{1,4})+", 0),
    (r"\*[.][a-zA-Z0-9]{1,5}", 0),
    (rf"([/]{{1,2}}[{_FILE_NAME_CHARS}]+){{2,}}/?", 0),
    (rf"[a-zA-Z]:\\[\\{_FILE_NAME_CHARS}]*", 0),
    (r"[/]?sys\$.*", 0),
    (r"^DEBUG:[\s\S]*", 0),
    # URL
    (r"((http|ftp)s?://)?(www\.)[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
     r"([-a-zA-Z0-9()@:%_+.~#?&/=]*)", 0),
    # email
    (r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
     r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$", 0),
    (r"^[\w ]*<[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
     r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*>$", 0),
    # Windows HTML clipboard data
    (r".*(End|Start)(HTML|Fragment)[:]?\d*.*", 0),
    # printer commands (e.g., "@PAGECOUNT@") and "[CMD]" tokens
    (r"@[A-Z0-9]+@", 0),
    (r"\[[A-Z0-9]+\]", 0),
    # Windows versions and products
    (r"(Microsoft )?Windows (95|98|NT|ME|2000|Server|Vista|Longhorn|XP|\d{1,2}[.]?\d{0,2})"
     r"\s*\d{0,4}\s*(R|SP)?\d{0,2}", 0),
    (r"(Microsoft )?Visual Studio", 0),
    (r"(Microsoft )?Visual C\+\+", 0),
    (r"(Microsoft )?Visual Basic", 0),
)

# functions whose names mark them as debugging/diagnostic helpers
DIAGNOSTIC_FUNCTION_PATTERN = r"([A-Za-z0-9_]+::)*[A-Za-z0-9_]*(ASSERT|VERIFY|PROFILE|CHECK|Assert)[A-Za-z0-9_]*"


def _compile(pattern: str, flags: int = 0) -> Pattern:
    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc


class HeuristicTables:
    """Configurable name sets and patterns shared by all scanners.

    Case-insensitive tables (fonts, file extensions, known internal strings)
    are stored lowercased; use the ``is_*`` helpers to query them.
    """

    def __init__(self):
        self.untranslatable_regexes: List[Pattern] = []
        self.localization_functions: Set[str] = set()
        self.non_localizable_functions: Set[str] = set()
        self.internal_functions: Set[str] = set()
        self.log_functions: Set[str] = set()
        self.exceptions: Set[str] = set()
        self.ctors_to_ignore: Set[str] = set()
        self.known_internal_strings: Set[str] = set()
        self.font_names: Set[str] = set()
        self.file_extensions: Set[str] = set()
        self.variable_name_patterns_to_ignore: List[Pattern] = []
        self.variable_types_to_ignore: Set[str] = set()
        self.keywords: Set[str] = set()
        self.deprecated_macros: Dict[str, str] = {}
        self.deprecated_functions: Dict[str, str] = {}
        self.translation_context_parameters: Dict[str, Tuple[int, ...]] = {}
        self.diagnostic_function_regex: Pattern = _compile(DIAGNOSTIC_FUNCTION_PATTERN)
        # caller-supplied patterns, compiled on first use
        self.custom_untranslatable_patterns: List[Tuple[str, int]] = []
        self.custom_variable_name_patterns: List[Tuple[str, int]] = []
        self._compiled: Dict[Tuple[str, int], Pattern] = {}
        self._frozen = False

    @classmethod
    def default(cls, min_cpp_version: int = 14) -> "HeuristicTables":
        """Tables seeded with the built-in defaults.

        Deprecated-function suggestions that need a newer C++ standard than
        ``min_cpp_version`` are left out.
        """
        tables = cls()
        for pattern, flags in UNTRANSLATABLE_PATTERNS:
            tables.untranslatable_regexes.append(_compile(pattern, flags))
        tables.localization_functions.update(LOCALIZATION_FUNCTIONS)
        tables.non_localizable_functions.update(NON_LOCALIZABLE_FUNCTIONS)
        tables.internal_functions.update(INTERNAL_FUNCTIONS)
        tables.log_functions.update(LOG_FUNCTIONS)
        tables.exceptions.update(EXCEPTIONS)
        tables.ctors_to_ignore.update(CTORS_TO_IGNORE)
        tables.known_internal_strings.update(s.lower() for s in KNOWN_INTERNAL_STRINGS)
        tables.font_names.update(s.lower() for s in FONT_NAMES)
        tables.file_extensions.update(s.lower() for s in FILE_EXTENSIONS)
        tables.variable_types_to_ignore.update(VARIABLE_TYPES_TO_IGNORE)
        tables.keywords.update(KEYWORDS)
        tables.deprecated_macros.update(DEPRECATED_MACROS)
        for name, message, cpp_version in DEPRECATED_FUNCTIONS:
            if cpp_version <= min_cpp_version:
                tables.deprecated_functions[name] = message
        tables.translation_context_parameters.update(TRANSLATION_CONTEXT_PARAMETERS)
        for pattern, flags in IGNORED_VARIABLE_PATTERNS:
            tables.variable_name_patterns_to_ignore.append(_compile(pattern, flags))
        return tables

    # ------------------------------------------------------------------
    # registration
    # ------------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "HeuristicTables":
        """Ends the registration phase; the tables are read-only afterwards."""
        self._frozen = True
        return self

    def _check_mutable(self) -> None:
        if self._frozen:
            raise ConfigError("Heuristic tables cannot be changed once scanning has started.")

    def add_localization_functions(self, names: Iterable[str]) -> None:
        self._check_mutable()
        self.localization_functions.update(names)

    def add_non_localizable_functions(self, names: Iterable[str]) -> None:
        self._check_mutable()
        self.non_localizable_functions.update(names)

    def add_internal_functions(self, names: Iterable[str]) -> None:
        self._check_mutable()
        self.internal_functions.update(names)

    def add_variable_types_to_ignore(self, names: Iterable[str]) -> None:
        self._check_mutable()
        self.variable_types_to_ignore.update(names)

    def add_font_names(self, names: Iterable[str]) -> None:
        self._check_mutable()
        self.font_names.update(name.lower() for name in names)

    def add_file_extensions(self, extensions: Iterable[str]) -> None:
        self._check_mutable()
        self.file_extensions.update(ext.lstrip('.').lower() for ext in extensions)

    def add_variable_name_pattern_to_ignore(self, pattern: str, flags: int = 0) -> None:
        """Registers a variable-name regex.

        The pattern is compiled when first used; an invalid pattern raises
        ``PatternError`` from the query that needed it.
        """
        self._check_mutable()
        self.custom_variable_name_patterns.append((pattern, flags))

    def add_untranslatable_pattern(self, pattern: str, flags: int = 0) -> None:
        self._check_mutable()
        self.custom_untranslatable_patterns.append((pattern, flags))

    def _compile_custom(self, pattern: str, flags: int) -> Pattern:
        key = (pattern, flags)
        compiled = self._compiled.get(key)
        if compiled is None:
            compiled = self._compiled[key] = _compile(pattern, flags)
        return compiled

    def iter_untranslatable_regexes(self) -> Iterator[Pattern]:
        """Built-in patterns, then caller-supplied ones (may raise ``PatternError``)."""
        yield from self.untranslatable_regexes
        for pattern, flags in self.custom_untranslatable_patterns:
            yield self._compile_custom(pattern, flags)

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def is_font_name(self, text: str) -> bool:
        return text.lower() in self.font_names

    def is_file_extension(self, text: str) -> bool:
        return text.lower() in self.file_extensions

    def is_known_internal_string(self, text: str) -> bool:
        return text.lower() in self.known_internal_strings

    def is_keyword(self, name: str) -> bool:
        return name in self.keywords

    def is_i18n_function(self, name: str) -> bool:
        return name in self.localization_functions

    def is_non_i18n_function(self, name: str) -> bool:
        return name in self.non_localizable_functions

    def is_log_function(self, name: str) -> bool:
        return name in self.log_functions

    def is_exception(self, name: str) -> bool:
        return name in self.exceptions

    def is_ignored_type(self, name: str) -> bool:
        return name in self.variable_types_to_ignore

    def deprecated_macro_message(self, name: str) -> Optional[str]:
        return self.deprecated_macros.get(name)

    def is_translation_context_parameter(self, function_name: str, position: int) -> bool:
        return position in self.translation_context_parameters.get(function_name, ())

    def matches_ignored_variable_pattern(self, name: str) -> bool:
        if any(pattern.fullmatch(name) for pattern in self.variable_name_patterns_to_ignore):
            return True
        return any(self._compile_custom(pattern, flags).fullmatch(name)
                   for pattern, flags in self.custom_variable_name_patterns)
