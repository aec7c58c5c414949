"""
Configuration Manager
=====================

Manages review settings and builds the heuristic tables from them.
"""

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from i18n_check.core.exceptions import ConfigError
from i18n_check.core.heuristics import HeuristicTables
from i18n_check.core.models import ReviewStyle


@dataclass
class ReviewSettings:
    """Which checks run and how strings are classified."""
    review_style: List[str] = field(default_factory=lambda: ReviewStyle.DEFAULT_CHECKS.to_names())
    allow_translating_punctuation_only_strings: bool = False
    log_messages_can_be_translatable: bool = True
    exceptions_should_be_translatable: bool = True
    min_words_for_classifying_unavailable_string: int = 2
    min_cpp_version: int = 14
    max_line_length: int = 120
    review_fuzzy_translations: bool = False
    # Extra names and patterns added to the built-in tables
    i18n_functions: List[str] = field(default_factory=list)
    non_localizable_functions: List[str] = field(default_factory=list)
    internal_functions: List[str] = field(default_factory=list)
    ignored_variable_patterns: List[str] = field(default_factory=list)
    ignored_variable_types: List[str] = field(default_factory=list)
    font_names: List[str] = field(default_factory=list)
    file_extensions: List[str] = field(default_factory=list)
    excluded_paths: List[str] = field(default_factory=list)

    def style(self) -> ReviewStyle:
        """The review style flags; raises ``ConfigError`` for unknown check names."""
        try:
            return ReviewStyle.from_names(self.review_style)
        except KeyError as exc:
            raise ConfigError(f"Unknown check name: {exc.args[0]}") from exc

    def reviewer_options(self) -> Dict[str, Any]:
        """Keyword arguments shared by every reviewer constructor."""
        return {
            "review_style": self.style(),
            "min_words": self.min_words_for_classifying_unavailable_string,
            "allow_punctuation_only": self.allow_translating_punctuation_only_strings,
            "log_messages_can_be_translatable": self.log_messages_can_be_translatable,
            "exceptions_should_be_translatable": self.exceptions_should_be_translatable,
        }


def build_tables(settings: ReviewSettings) -> HeuristicTables:
    """Default tables extended with the settings' extra entries, then frozen."""
    tables = HeuristicTables.default(settings.min_cpp_version)
    tables.add_localization_functions(settings.i18n_functions)
    tables.add_non_localizable_functions(settings.non_localizable_functions)
    tables.add_internal_functions(settings.internal_functions)
    tables.add_variable_types_to_ignore(settings.ignored_variable_types)
    tables.add_font_names(settings.font_names)
    tables.add_file_extensions(settings.file_extensions)
    for pattern in settings.ignored_variable_patterns:
        tables.add_variable_name_pattern_to_ignore(pattern)
    return tables.freeze()


class ConfigManager:
    """Manages application configuration."""

    def __init__(self, config_file: str = "i18n-check.json"):
        self.logger = logging.getLogger(__name__)
        self.config_file = Path(config_file)
        self.settings = ReviewSettings()

    def load_config(self) -> bool:
        """Load configuration from file; falls back to the defaults on error."""
        if not self.config_file.exists():
            self.logger.info("Config file doesn't exist, using defaults")
            return False
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
            if not isinstance(config_data, dict):
                raise ConfigError("Configuration must be a JSON object")
            known = {f.name for f in fields(ReviewSettings)}
            unknown = sorted(set(config_data) - known)
            if unknown:
                self.logger.warning(f"Ignoring unknown settings: {', '.join(unknown)}")
            self.settings = ReviewSettings(**{key: value for key, value in config_data.items()
                                              if key in known})
            # validate the check names now rather than at scan time
            self.settings.style()
            self.logger.info("Configuration loaded successfully")
            return True
        except (OSError, ValueError, TypeError, ConfigError) as e:
            self.logger.error(f"Error loading configuration: {e}")
            self.settings = ReviewSettings()
            return False

    def save_config(self, settings: Optional[ReviewSettings] = None) -> bool:
        """Save configuration to file."""
        if settings is not None:
            self.settings = settings
        try:
            # Create backup if file exists
            if self.config_file.exists():
                backup_file = self.config_file.with_suffix('.json.bak')
                if backup_file.exists():
                    backup_file.unlink()
                self.config_file.rename(backup_file)

            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(asdict(self.settings), f, indent=4, ensure_ascii=False)
            self.logger.info("Configuration saved successfully")
            return True
        except OSError as e:
            self.logger.error(f"Error saving configuration: {e}")
            return False

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value by field name."""
        return getattr(self.settings, key, default)

    def set_setting(self, key: str, value: Any) -> None:
        """Set a setting value by field name."""
        if key not in {f.name for f in fields(ReviewSettings)}:
            raise ConfigError(f"Unknown setting: {key}")
        setattr(self.settings, key, value)

    def build_tables(self) -> HeuristicTables:
        """Heuristic tables for the current settings."""
        return build_tables(self.settings)
