import codecs

import pytest

from i18n_check.core.exceptions import EncodingError
from i18n_check.utils.encoding import decode_bytes, read_source_file


def test_utf8_bom_is_stripped(tmp_path):
    path = tmp_path / "bom.cpp"
    path.write_bytes(codecs.BOM_UTF8 + "auto s = _(\"Grüße\");\n".encode("utf-8"))
    decoded = read_source_file(path)
    assert decoded.had_bom
    assert decoded.encoding == "utf-8"
    assert decoded.text.startswith("auto s")
    assert not decoded.used_fallback


def test_utf16_bom():
    decoded = decode_bytes(codecs.BOM_UTF16_LE + "STRINGTABLE\r\n".encode("utf-16-le"))
    assert decoded.encoding == "utf-16-le"
    assert decoded.had_bom
    assert decoded.text == "STRINGTABLE\r\n"


def test_plain_utf8():
    decoded = decode_bytes("Café".encode("utf-8"))
    assert decoded.text == "Café"
    assert decoded.encoding == "utf-8"
    assert not decoded.had_bom
    assert not decoded.used_fallback


def test_legacy_encoding_uses_fallback(tmp_path):
    path = tmp_path / "legacy.cpp"
    path.write_bytes(b'auto s = "Caf\xe9 au lait, tr\xe8s bien";\n')
    decoded = read_source_file(path)
    assert decoded.used_fallback
    assert decoded.text.startswith('auto s = "Caf')


def test_missing_file(tmp_path):
    with pytest.raises(EncodingError):
        read_source_file(tmp_path / "missing.cpp")
