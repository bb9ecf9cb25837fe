#!/usr/bin/env python3
"""
Etymology Reconciler

Combines two independent etymology sources for a headword:

- the primary source (Etymonline) serves an HTML page whose meta description
  holds a short, often truncated, etymology;
- the secondary source (Wiktionary) serves raw wikitext with one or more
  ``===Etymology===`` subsections and usage examples.

Both are fetched concurrently, cleaned into plain prose and merged under a
fixed precedence rule. Source failures never reach the caller: a source that
cannot be fetched or parsed simply contributes nothing.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Pattern, Tuple, Union

from bs4 import BeautifulSoup

from .sources.etymonline import PrimaryDocument

logger = logging.getLogger(__name__)

TARGET_LANGUAGE = 'English'
TARGET_LANGUAGE_CODE = 'en'

LANGUAGE_NAMES = {
    'enm': 'Middle English',
    'ang': 'Old English',
    'fro': 'Old French',
    'frm': 'Middle French',
    'fr': 'French',
    'la': 'Latin',
    'la-lat': 'Late Latin',
    'la-med': 'Medieval Latin',
    'grc': 'Ancient Greek',
    'non': 'Old Norse',
    'gem-pro': 'Proto-Germanic',
    'ine-pro': 'Proto-Indo-European',
}

HTML_ENTITIES = [
    ('&quot;', '"'),
    ('&amp;', '&'),
    ('&#39;', "'"),
    ('&hellip;', '...'),
]

ELLIPSIS_MARKERS = ('…', '...')

PASSAGE_MAX_CHARS = 300
DEFINITION_EXAMPLE_MAX_CHARS = 280
DEFINITION_EXAMPLE_MIN_CHARS = 20


@dataclass(frozen=True)
class ReconciledEtymology:
    """Merged etymology for a headword"""
    text: str = ''
    truncated: bool = False
    example: str = ''
    diagnostic: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.text


# ---------------------------------------------------------------------------
# Wikitext cleaning rules, applied in order

def _language_term(match) -> str:
    code, term = match.group(1).strip(), match.group(2).strip()
    name = LANGUAGE_NAMES.get(code)
    return f"{name} {term}" if name else term


Replacement = Union[str, Callable]

ETYMOLOGY_CLEANING_RULES: List[Tuple[Pattern, Replacement]] = [
    # {{inh|en|enm|absorben}}, {{der|en|la|absorbēre}} -> "<Language> <term>"
    (re.compile(r'\{\{(?:inh|der)\|[^|{}]*\|([^|{}]*)\|([^|{}]+)(?:\|[^{}]*)?\}\}'), _language_term),
    # {{m|la|sorbeō||to suck}}, {{l|en|sorb}}, {{cog|fr|absorber}} -> term
    (re.compile(r'\{\{(?:m|l|cog|ncog)\|[^|{}]*\|([^|{}]+)(?:\|[^{}]*)?\}\}'), r'\1'),
    # [[w:Samuel Johnson|Johnson]] -> Johnson, [[w:Target]] -> ''
    (re.compile(r'\[\[w:[^\]|]*(?:\|([^\]]+))?\]\]'), r'\1'),
    # [[target|text]] -> text, [[target]] -> target
    (re.compile(r'\[\[[^\]|]+\|([^\]]+)\]\]'), r'\1'),
    (re.compile(r'\[\[([^\]|]+)\]\]'), r'\1'),
    (re.compile(r"'''([^']*)'''"), r'\1'),
    (re.compile(r"''([^']*)''"), r'\1'),
    (re.compile(r'<ref[^>]*/>'), ''),
    (re.compile(r'<ref[^>]*>.*?</ref>', re.DOTALL), ''),
    # Whatever templates are left carry no prose
    (re.compile(r'\{\{[^{}]*\}\}'), ''),
    (re.compile(r'[ \t]+(?=\n)'), ''),
    (re.compile(r'\n{3,}'), '\n\n'),
    (re.compile(r'[ \t]+'), ' '),
]

EXAMPLE_CLEANING_RULES: List[Tuple[Pattern, Replacement]] = [
    (re.compile(r"'''([^']*)'''"), r'\1'),
    (re.compile(r'\[\[[^\]|]+\|([^\]]+)\]\]'), r'\1'),
    (re.compile(r'\[\[([^\]|]+)\]\]'), r'\1'),
]


def apply_rules(text: str, rules: List[Tuple[Pattern, Replacement]]) -> str:
    for pattern, replacement in rules:
        text = pattern.sub(replacement, text)
    return text


def clean_etymology_wikitext(text: str) -> str:
    """Reduce an etymology subsection's wikitext to plain prose"""
    return apply_rules(text, ETYMOLOGY_CLEANING_RULES).strip()


def clean_example_text(text: str) -> str:
    return apply_rules(text.strip(), EXAMPLE_CLEANING_RULES).strip()


# ---------------------------------------------------------------------------
# Secondary source (Wiktionary wikitext)

LANGUAGE_SECTION_PATTERN = re.compile(
    r'^==\s*' + TARGET_LANGUAGE + r'\s*==[ \t]*\n(.*?)(?=^==[^=]|\Z)',
    re.MULTILINE | re.DOTALL,
)
ETYMOLOGY_SECTION_PATTERN = re.compile(
    r'^===\s*Etymology(?:\s+\d+)?\s*===[ \t]*\n(.*?)(?=^=|\Z)',
    re.MULTILINE | re.DOTALL,
)
USAGE_EXAMPLE_PATTERN = re.compile(
    r'\{\{ux\|' + TARGET_LANGUAGE_CODE + r'\|([^}|]+)(?:\|[^}]*)?\}\}'
)
PASSAGE_PATTERN = re.compile(r'\|passage=([^}|]+)(?:\|[^}]*)?\}\}')
DEFINITION_EXAMPLE_PATTERN = re.compile(r'^#:\s*([^\n]+)', re.MULTILINE)


def normalize_line_endings(text: str) -> str:
    return text.replace('\r\n', '\n').replace('\r', '\n')


def extract_language_section(wikitext: str) -> Optional[str]:
    """Body of the ``==English==`` section, up to the next language heading"""
    match = LANGUAGE_SECTION_PATTERN.search(normalize_line_endings(wikitext))
    if match and match.group(1).strip():
        return match.group(1)
    return None


def _join_etymology_sections(raw_sections: List[str]) -> str:
    parts = []
    for raw in raw_sections:
        raw = raw.strip()
        if raw:
            cleaned = clean_etymology_wikitext(raw)
            if cleaned:
                parts.append(cleaned)
    return '\n\n'.join(parts)


def extract_secondary_etymology(wikitext: str) -> str:
    """
    Cleaned etymology text from a Wiktionary page.

    All etymology subsections of the English section are used. Pages without
    one fall back to the first etymology subsection anywhere on the page.
    """
    if not wikitext:
        return ''
    wikitext = normalize_line_endings(wikitext)

    section = extract_language_section(wikitext)
    if section:
        sections = ETYMOLOGY_SECTION_PATTERN.findall(section)
        if sections:
            return _join_etymology_sections(sections)

    first = ETYMOLOGY_SECTION_PATTERN.search(wikitext)
    if first:
        return _join_etymology_sections([first.group(1)])
    return ''


def _cap(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit - 3] + '...'
    return text


def extract_secondary_example(wikitext: str) -> str:
    """
    One representative usage example from the English section.

    Tried in order: a ``{{ux|en|...}}`` template, a quotation ``|passage=``
    field, then the first ``#:`` example line longer than 20 characters.
    """
    if not wikitext:
        return ''
    section = extract_language_section(wikitext)
    if not section:
        return ''

    match = USAGE_EXAMPLE_PATTERN.search(section)
    if match:
        return clean_example_text(match.group(1))

    match = PASSAGE_PATTERN.search(section)
    if match:
        return clean_example_text(_cap(match.group(1), PASSAGE_MAX_CHARS))

    for match in DEFINITION_EXAMPLE_PATTERN.finditer(section):
        example = match.group(1).strip()
        template_start = example.find('{{')
        if template_start >= 0:
            example = example[:template_start].strip()
        if len(example) > DEFINITION_EXAMPLE_MIN_CHARS:
            return clean_example_text(_cap(example, DEFINITION_EXAMPLE_MAX_CHARS))

    return ''


# ---------------------------------------------------------------------------
# Primary source (Etymonline HTML)

def _normalize_headword(text: Optional[str]) -> str:
    if not text:
        return ''
    return re.sub(r'\s+', ' ', text).strip().lower()


def _meta_description(html: str) -> Optional[str]:
    soup = BeautifulSoup(html, 'html.parser')
    for attrs in ({'name': 'description'}, {'property': 'og:description'}):
        meta = soup.find('meta', attrs=attrs)
        if meta and meta.get('content'):
            return meta['content']
    return None


def extract_primary_etymology(document: Optional[PrimaryDocument], headword: str) -> Optional[str]:
    """
    Short etymology from the primary page's meta description.

    Returns None when the page was served for a different headword than the
    one requested, so a redirected entry is never attributed to this word.
    """
    if document is None:
        return None

    if _normalize_headword(document.resolved_headword) != _normalize_headword(headword):
        logger.info(f"Etymonline: served '{document.resolved_headword}' for '{headword}' (skipping)")
        return None

    description = _meta_description(document.raw_text or '')
    if not description:
        return None

    cut = description.find(' See origin')
    if cut > 0:
        description = description[:cut]

    description = description.strip()
    for entity, replacement in HTML_ENTITIES:
        description = description.replace(entity, replacement)

    return description or None


# ---------------------------------------------------------------------------
# Merge

def is_truncated(text: str) -> bool:
    return bool(text) and text.endswith(ELLIPSIS_MARKERS)


def merge_etymologies(primary: Optional[str], secondary: Optional[str],
                      example: Optional[str] = None,
                      diagnostic: Optional[str] = None) -> ReconciledEtymology:
    """
    Pick the secondary text when it is present and longer than the primary
    text, otherwise the primary text.
    """
    primary = primary or ''
    secondary = secondary or ''

    if secondary and (not primary or len(secondary) > len(primary)):
        chosen = secondary
    else:
        chosen = primary

    return ReconciledEtymology(
        text=chosen,
        truncated=is_truncated(chosen),
        example=example or '',
        diagnostic=diagnostic,
    )


# ---------------------------------------------------------------------------
# Orchestration

class EtymologyReconciler:
    """
    Resolves a headword's etymology from a primary and a secondary source.

    ``primary_source.fetch(word)`` must return a :class:`PrimaryDocument` (or
    None) and ``secondary_source.fetch(word)`` raw wikitext (or None); both
    are awaited concurrently.
    """

    def __init__(self, primary_source, secondary_source):
        self.primary_source = primary_source
        self.secondary_source = secondary_source

    async def resolve(self, headword: str) -> ReconciledEtymology:
        headword = (headword or '').strip().lower()
        if not headword:
            return ReconciledEtymology()

        primary_result, secondary_result = await asyncio.gather(
            self.primary_source.fetch(headword),
            self.secondary_source.fetch(headword),
            return_exceptions=True,
        )

        primary_text = None
        if isinstance(primary_result, Exception):
            logger.warning(f"Etymonline lookup failed for '{headword}': {primary_result}")
        else:
            try:
                primary_text = extract_primary_etymology(primary_result, headword)
            except Exception as e:
                logger.warning(f"Could not parse Etymonline page for '{headword}': {e}")

        secondary_text, example, secondary_error = '', '', None
        if isinstance(secondary_result, Exception):
            secondary_error = secondary_result
            logger.warning(f"Wiktionary lookup failed for '{headword}': {secondary_result}")
        elif secondary_result:
            try:
                secondary_text = extract_secondary_etymology(secondary_result)
                example = extract_secondary_example(secondary_result)
            except Exception as e:
                secondary_error = e
                logger.warning(f"Could not parse Wiktionary page for '{headword}': {e}")

        diagnostic = None
        if secondary_error is not None and not primary_text:
            diagnostic = f"Etymology unavailable: {secondary_error}"

        return merge_etymologies(primary_text, secondary_text, example, diagnostic)
