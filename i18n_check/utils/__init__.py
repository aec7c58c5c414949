"""
Utils module for i18n-check
===========================
"""

from .config import ConfigManager, ReviewSettings, build_tables
from .encoding import DecodedText, decode_bytes, read_source_file

__all__ = [
    'ConfigManager', 'ReviewSettings', 'build_tables',
    'DecodedText', 'decode_bytes', 'read_source_file'
]
