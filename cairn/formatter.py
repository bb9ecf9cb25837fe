#!/usr/bin/env python3
"""
Plain-text rendering of a lookup outcome
"""

from typing import Iterable, List, Optional
from urllib.parse import quote

from .dictionary_lookup import DictionaryEntry, LookupOutcome
from .etymology import ReconciledEtymology
from .highlight import highlight_text

DEFAULT_ETYMONLINE_BASE = 'https://www.etymonline.com/word/'


def full_entry_url(word: str, etymonline_base: str = DEFAULT_ETYMONLINE_BASE) -> str:
    return etymonline_base + quote(word.strip().lower(), safe='')


def _quoted(example: str) -> str:
    example = example.strip()
    if not example.startswith('"') and not example.startswith("'"):
        example = f'"{example}"'
    return example


def render_entry(entry: DictionaryEntry, etymology: ReconciledEtymology,
                 previous: Optional[Iterable[str]] = None, use_color: bool = False,
                 etymonline_base: str = DEFAULT_ETYMONLINE_BASE) -> List[str]:
    current = {entry.headword}

    def hl(text: str) -> str:
        return highlight_text(text, current, previous, use_color)

    lines = ['']
    if entry.phonetics:
        lines.append(f"{entry.headword}  {' '.join(entry.phonetics)}")
    else:
        lines.append(entry.headword)

    if etymology.text:
        lines.extend(['', '  Etymology:'])
        for line in etymology.text.split('\n'):
            line = line.strip()
            if line:
                lines.append(f"    {hl(line)}")
        if etymology.truncated:
            lines.append(f"    (Full entry: {full_entry_url(entry.word, etymonline_base)})")

    if etymology.example:
        lines.extend(['', f"  Example: {hl(etymology.example)}"])

    all_examples = []
    for meaning in entry.meanings:
        lines.extend(['', f"  [{meaning.part_of_speech}]"])
        for i, sense in enumerate(meaning.senses, 1):
            lines.append(f"    {i}. {hl(sense.definition)}")
            if sense.example.strip():
                lines.append(f"       Example: {hl(_quoted(sense.example))}")
                all_examples.append(sense.example.strip())
        if meaning.synonyms:
            lines.append(f"    Synonyms: {hl(', '.join(meaning.synonyms))}")
        if meaning.antonyms:
            lines.append(f"    Antonyms: {hl(', '.join(meaning.antonyms))}")

    # dict.fromkeys keeps first-seen order
    unique_examples = list(dict.fromkeys(ex for ex in all_examples if ex))
    if unique_examples:
        lines.extend(['', '  Examples:'])
        for example in unique_examples:
            lines.append(f"    • {hl(example)}")

    return lines


def render_outcome(outcome: LookupOutcome, previous: Optional[Iterable[str]] = None,
                   use_color: bool = False,
                   etymonline_base: str = DEFAULT_ETYMONLINE_BASE) -> str:
    """Render every entry of a lookup, ending with a blank line"""
    lines: List[str] = []
    for entry in outcome.entries:
        lines.extend(render_entry(
            entry,
            outcome.etymology_for(entry),
            previous=previous,
            use_color=use_color,
            etymonline_base=etymonline_base,
        ))
    lines.append('')
    return '\n'.join(lines) + '\n'
