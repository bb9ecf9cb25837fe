"""Errors raised by the dictionary lookup workflow"""


class DictionaryLookupError(Exception):
    """The definition lookup could not be completed"""


class WordNotFoundError(DictionaryLookupError):
    """The dictionary has no entry for the word and no correction was found"""

    def __init__(self, word: str, message: str = ''):
        self.word = word
        super().__init__(message or f'word not found: "{word}"')
