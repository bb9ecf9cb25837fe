"""
External sources used by the dictionary lookup.

- Free Dictionary API definitions
- Reference word list download (typo suggestions)
- Etymonline word pages (short etymology)
- Wiktionary wikitext (full etymology and usage examples)
"""

from .etymonline import EtymonlineClient, PrimaryDocument
from .free_dictionary import FreeDictionaryClient
from .wiktionary import WiktionaryClient
from .word_list import fetch_vocabulary

__all__ = [
    'EtymonlineClient',
    'FreeDictionaryClient',
    'PrimaryDocument',
    'WiktionaryClient',
    'fetch_vocabulary',
]
