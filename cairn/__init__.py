"""
cairn dictionary lookup components.

This package contains the building blocks of the ``dict`` command:
- Configuration
- Approximate word matching for typo correction
- Etymology extraction and reconciliation
- The definition lookup workflow, word history and rendering
"""

from .config import get_settings, LookupSettings
from .word_matcher import WordMatcher, ReferenceVocabulary, levenshtein, suggest
from .etymology import EtymologyReconciler, ReconciledEtymology, merge_etymologies
from .dictionary_lookup import DictionaryLookup, LookupOutcome, lookup_word
from .exceptions import DictionaryLookupError, WordNotFoundError
from .history import WordHistory

__version__ = '0.1.3'

__all__ = [
    'get_settings',
    'LookupSettings',
    'WordMatcher',
    'ReferenceVocabulary',
    'levenshtein',
    'suggest',
    'EtymologyReconciler',
    'ReconciledEtymology',
    'merge_etymologies',
    'DictionaryLookup',
    'LookupOutcome',
    'lookup_word',
    'DictionaryLookupError',
    'WordNotFoundError',
    'WordHistory',
]
