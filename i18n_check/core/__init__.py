"""
Core module for i18n-check
==========================
"""

from .exceptions import I18nCheckError, ParseError, PatternError, CatalogError, ConfigError, EncodingError
from .models import (
    ReviewStyle, UsageType, UsageInfo, StringRecord, DiagnosticMessage,
    PrintfFormat, IssueKind, CatalogEntry, ReviewResults
)
from .heuristics import HeuristicTables
from .classifier import Classifier
from .context_resolver import ContextResolver
from .source_review import SourceReviewer, CppReviewer, CSharpReviewer
from .rc_review import RcReviewer
from .po_review import CatalogReviewer

__all__ = [
    'I18nCheckError', 'ParseError', 'PatternError', 'CatalogError', 'ConfigError', 'EncodingError',
    'ReviewStyle', 'UsageType', 'UsageInfo', 'StringRecord', 'DiagnosticMessage',
    'PrintfFormat', 'IssueKind', 'CatalogEntry', 'ReviewResults',
    'HeuristicTables', 'Classifier', 'ContextResolver',
    'SourceReviewer', 'CppReviewer', 'CSharpReviewer', 'RcReviewer', 'CatalogReviewer'
]
