#!/usr/bin/env python3
"""
Highlighting of the current headword and recently looked-up words
"""

import re
from typing import Iterable, List, Optional, Set

WORD_TOKEN_PATTERN = re.compile(r"[^\W\d_]+(?:'[^\W\d_]+)?")

ANSI_BOLD_GREEN = '\033[1;32m'  # word being looked up
ANSI_BOLD_CYAN = '\033[1;36m'   # recently looked-up words
ANSI_RESET = '\033[0m'


def _undouble(base: str) -> Optional[str]:
    """'runn' -> 'run'; None when the stem does not end in a doubled letter"""
    if len(base) > 1 and base[-1] == base[-2]:
        return base[:-1]
    return None


def word_base_forms(word: str) -> List[str]:
    """
    The word plus plausible base forms, so inflections of a known word match.

    e.g. running -> run, berries -> berry, words -> word, bigger -> big
    """
    w = (word or '').lower()
    if not w:
        return []

    forms = [w]

    if len(w) > 3 and (w.endswith('ies') or w.endswith('ied')):
        forms.append(w[:-3] + 'y')

    if len(w) > 4 and w.endswith('ing'):
        base = w[:-3]
        forms.append(base)
        undoubled = _undouble(base)
        if undoubled:
            forms.append(undoubled)

    if len(w) > 3 and w.endswith('ed'):
        base = w[:-2]
        forms.append(base)
        undoubled = _undouble(base)
        if undoubled:
            forms.append(undoubled)

    if len(w) > 2 and w.endswith('es'):
        forms.append(w[:-2])

    if len(w) > 1 and w.endswith('s') and not w.endswith('ss'):
        forms.append(w[:-1])

    if len(w) > 3 and w.endswith('er'):
        forms.append(w[:-2])
        if len(w) > 4 and w[-3] == w[-4]:
            forms.append(w[:-3])

    if len(w) > 4 and w.endswith('est'):
        forms.append(w[:-3])
        if len(w) > 5 and w[-4] == w[-5]:
            forms.append(w[:-4])

    if len(w) > 3 and w.endswith('ly'):
        forms.append(w[:-2])

    return forms


def should_highlight(token: str, words: Optional[Set[str]]) -> bool:
    if not words or not token:
        return False
    return any(form in words for form in word_base_forms(token))


def highlight_text(text: str, current: Optional[Iterable[str]] = None,
                   previous: Optional[Iterable[str]] = None,
                   use_color: bool = False) -> str:
    """
    Mark tokens matching the current headword (green) or a previous lookup (cyan).

    Without color both kinds are wrapped in ``**``.
    """
    current_words = {w.lower() for w in current or ()}
    previous_words = {w.lower() for w in previous or ()}
    if not current_words and not previous_words:
        return text

    def mark(match):
        token = match.group(0)
        if should_highlight(token, current_words):
            return f"{ANSI_BOLD_GREEN}{token}{ANSI_RESET}" if use_color else f"**{token}**"
        if should_highlight(token, previous_words):
            return f"{ANSI_BOLD_CYAN}{token}{ANSI_RESET}" if use_color else f"**{token}**"
        return token

    return WORD_TOKEN_PATTERN.sub(mark, text)
