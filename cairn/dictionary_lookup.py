#!/usr/bin/env python3
"""
Dictionary Lookup Workflow
Definition lookup with one-shot typo correction and etymology enrichment
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import aiohttp

from .config import LookupSettings, get_settings
from .etymology import EtymologyReconciler, ReconciledEtymology
from .exceptions import DictionaryLookupError, WordNotFoundError
from .sources import EtymonlineClient, FreeDictionaryClient, WiktionaryClient
from .word_matcher import WordMatcher, get_default_matcher

logger = logging.getLogger(__name__)


@dataclass
class Sense:
    """A single definition within a meaning"""
    definition: str
    example: str = ''
    synonyms: List[str] = field(default_factory=list)
    antonyms: List[str] = field(default_factory=list)


@dataclass
class Meaning:
    part_of_speech: str
    senses: List[Sense] = field(default_factory=list)
    synonyms: List[str] = field(default_factory=list)
    antonyms: List[str] = field(default_factory=list)


@dataclass
class DictionaryEntry:
    """One entry from the Free Dictionary API"""
    word: str
    phonetics: List[str] = field(default_factory=list)
    meanings: List[Meaning] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DictionaryEntry':
        phonetics = [
            p.get('text') for p in data.get('phonetics') or []
            if isinstance(p, dict) and p.get('text')
        ]
        meanings = []
        for meaning in data.get('meanings') or []:
            senses = [
                Sense(
                    definition=d.get('definition') or '',
                    example=d.get('example') or '',
                    synonyms=list(d.get('synonyms') or []),
                    antonyms=list(d.get('antonyms') or []),
                )
                for d in meaning.get('definitions') or []
            ]
            meanings.append(Meaning(
                part_of_speech=meaning.get('partOfSpeech') or 'unknown',
                senses=senses,
                synonyms=list(meaning.get('synonyms') or []),
                antonyms=list(meaning.get('antonyms') or []),
            ))
        return cls(word=data.get('word') or '', phonetics=phonetics, meanings=meanings)

    @property
    def headword(self) -> str:
        return self.word.strip().lower()


@dataclass
class LookupOutcome:
    """Everything one lookup produced"""
    requested: str
    word: str
    entries: List[DictionaryEntry]
    etymologies: Dict[str, ReconciledEtymology] = field(default_factory=dict)
    suggestion: Optional[str] = None

    @property
    def was_corrected(self) -> bool:
        return self.suggestion is not None

    def etymology_for(self, entry: DictionaryEntry) -> ReconciledEtymology:
        return self.etymologies.get(entry.headword, ReconciledEtymology())


class DictionaryLookup:
    """
    Looks a word up in the definition source, correcting typos once.

    Use as an async context manager to get a shared HTTP session and the
    default sources; collaborators can also be passed in directly.
    """

    def __init__(self, settings: Optional[LookupSettings] = None,
                 dictionary_source=None,
                 matcher: Optional[WordMatcher] = None,
                 reconciler: Optional[EtymologyReconciler] = None):
        self.settings = settings or get_settings()
        self.dictionary_source = dictionary_source
        self.matcher = matcher
        self.reconciler = reconciler
        self.session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        """Async context manager entry"""
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.settings.http_timeout),
            headers={'User-Agent': self.settings.user_agent},
        )
        if self.dictionary_source is None:
            self.dictionary_source = FreeDictionaryClient(
                self.session, self.settings.dictionary_api_base)
        if self.reconciler is None:
            self.reconciler = EtymologyReconciler(
                EtymonlineClient(self.session, self.settings.etymonline_base,
                                 f"{self.settings.user_agent} etymology"),
                WiktionaryClient(self.session, self.settings.wiktionary_api,
                                 f"{self.settings.user_agent} etymology lookup"),
            )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        if self.session:
            await self.session.close()
            self.session = None

    async def lookup(self, word: str, allow_suggest: bool = True,
                     on_suggestion: Optional[Callable[[str], None]] = None) -> LookupOutcome:
        """
        Main entry point: definitions plus etymology for ``word``.

        On "not found" the closest vocabulary word is tried once; the corrected
        lookup never suggests again. ``on_suggestion`` is called with the
        corrected word before it is fetched.
        """
        requested = (word or '').strip().lower()
        if not requested:
            raise DictionaryLookupError("no word provided")

        suggestion = None
        try:
            raw_entries = await self.dictionary_source.fetch(requested)
            looked_up = requested
        except WordNotFoundError:
            if not allow_suggest:
                raise
            suggestion = await self._suggest(requested)
            if not suggestion or suggestion == requested:
                raise
            logger.info(f"'{requested}' not found, retrying as '{suggestion}'")
            if on_suggestion:
                on_suggestion(suggestion)
            raw_entries = await self.dictionary_source.fetch(suggestion)
            looked_up = suggestion

        entries = [DictionaryEntry.from_dict(e) for e in raw_entries if isinstance(e, dict)]
        if not entries:
            raise DictionaryLookupError(f'no definition for "{looked_up}"')

        outcome = LookupOutcome(
            requested=requested,
            word=looked_up,
            entries=entries,
            suggestion=suggestion,
        )
        outcome.etymologies = await self._resolve_etymologies(entries)

        logger.info(f"Lookup complete for '{looked_up}': {len(entries)} entries")
        return outcome

    async def _suggest(self, word: str) -> Optional[str]:
        matcher = self.matcher or get_default_matcher()
        # The first call downloads the word list, keep it off the event loop
        return await asyncio.to_thread(matcher.suggest, word, self.settings.max_edit_distance)

    async def _resolve_etymologies(self, entries: List[DictionaryEntry]) -> Dict[str, ReconciledEtymology]:
        etymologies: Dict[str, ReconciledEtymology] = {}
        if self.reconciler is None:
            return etymologies

        for entry in entries:
            headword = entry.headword
            if headword and headword not in etymologies:
                etymologies[headword] = await self.reconciler.resolve(headword)
        return etymologies


async def lookup_word(word: str, allow_suggest: bool = True,
                      settings: Optional[LookupSettings] = None,
                      on_suggestion: Optional[Callable[[str], None]] = None) -> LookupOutcome:
    """Run one lookup with the default sources"""
    async with DictionaryLookup(settings) as lookup:
        return await lookup.lookup(word, allow_suggest=allow_suggest, on_suggestion=on_suggestion)
