"""
i18n-check - Static Internationalization Analysis
=================================================

Scans C/C++, C#, Windows resource scripts and gettext catalogs for
internationalization and localization issues:
- strings exposed for translation that should not be
- user-facing strings that are not available for translation
- printf and keyboard accelerator mismatches between sources and translations
- deprecated text macros, encoding problems and code formatting issues
"""

__version__ = "1.0.0"

from . import core
from . import utils

__all__ = ['core', 'utils', '__version__']
