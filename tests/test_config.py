import json

import pytest

from i18n_check.core.exceptions import ConfigError
from i18n_check.core.models import ReviewStyle
from i18n_check.core.source_review import CppReviewer
from i18n_check.utils.config import ConfigManager, ReviewSettings, build_tables


def test_default_settings():
    settings = ReviewSettings()
    assert settings.style() == ReviewStyle.DEFAULT_CHECKS
    assert settings.reviewer_options()["min_words"] == 2


def test_missing_config_file(tmp_path):
    manager = ConfigManager(str(tmp_path / "i18n-check.json"))
    assert manager.load_config() is False
    assert manager.settings == ReviewSettings()


def test_save_and_load(tmp_path):
    config_file = tmp_path / "i18n-check.json"
    manager = ConfigManager(str(config_file))
    manager.set_setting("min_words_for_classifying_unavailable_string", 3)
    manager.set_setting("review_style", ["check_tabs", "CHECK_L10N_STRINGS"])
    assert manager.save_config()

    loaded = ConfigManager(str(config_file))
    assert loaded.load_config()
    assert loaded.get_setting("min_words_for_classifying_unavailable_string") == 3
    assert loaded.settings.style() == ReviewStyle.CHECK_TABS | ReviewStyle.CHECK_L10N_STRINGS


def test_second_save_keeps_backup(tmp_path):
    config_file = tmp_path / "i18n-check.json"
    manager = ConfigManager(str(config_file))
    assert manager.save_config()
    manager.set_setting("max_line_length", 80)
    assert manager.save_config()

    backup = json.loads((tmp_path / "i18n-check.json.bak").read_text(encoding="utf-8"))
    assert backup["max_line_length"] == 120
    assert json.loads(config_file.read_text(encoding="utf-8"))["max_line_length"] == 80


def test_malformed_config_falls_back_to_defaults(tmp_path):
    config_file = tmp_path / "i18n-check.json"
    config_file.write_text("{not json", encoding="utf-8")
    manager = ConfigManager(str(config_file))
    assert manager.load_config() is False
    assert manager.settings == ReviewSettings()


def test_unknown_check_name_is_rejected(tmp_path):
    config_file = tmp_path / "i18n-check.json"
    config_file.write_text(json.dumps({"review_style": ["check_everything"]}), encoding="utf-8")
    manager = ConfigManager(str(config_file))
    assert manager.load_config() is False
    assert manager.settings == ReviewSettings()


def test_unknown_settings_are_ignored(tmp_path):
    config_file = tmp_path / "i18n-check.json"
    config_file.write_text(json.dumps({"max_line_length": 100, "theme": "dark"}), encoding="utf-8")
    manager = ConfigManager(str(config_file))
    assert manager.load_config()
    assert manager.settings.max_line_length == 100


def test_set_unknown_setting():
    with pytest.raises(ConfigError):
        ConfigManager().set_setting("theme", "dark")


def test_unknown_check_name_in_style():
    with pytest.raises(ConfigError, match="Unknown check name"):
        ReviewSettings(review_style=["check_everything"]).style()


def test_build_tables():
    settings = ReviewSettings(i18n_functions=["MyTranslate"], font_names=["Segoe Print"],
                              file_extensions=[".dat"])
    tables = build_tables(settings)
    assert tables.frozen
    assert tables.is_i18n_function("MyTranslate")
    assert tables.is_font_name("segoe print")
    assert tables.is_file_extension("DAT")
    with pytest.raises(ConfigError):
        tables.add_font_names(["Wingdings"])


def test_internal_functions_from_config(tmp_path):
    config_file = tmp_path / "i18n-check.json"
    config_file.write_text(json.dumps({"internal_functions": ["TraceEvent"]}), encoding="utf-8")
    manager = ConfigManager(str(config_file))
    assert manager.load_config()

    reviewer = CppReviewer(manager.build_tables())
    reviewer.scan('TraceEvent("Connection to the server was lost");\n')
    results = reviewer.results
    assert [record.text for record in results.internal_strings] == ["Connection to the server was lost"]
    assert results.not_available_for_localization_strings == []
