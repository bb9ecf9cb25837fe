#!/usr/bin/env python3
"""
Etymonline client - fetches the word page served for a term

The page's meta description carries a short etymology. The site redirects
some words to related entries (e.g. /word/advertise -> /word/advert), so the
client reports which headword was actually served.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, unquote

import aiohttp

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 64 * 1024


@dataclass(frozen=True)
class PrimaryDocument:
    """Raw page text and the headword the source resolved the request to"""
    resolved_headword: str
    raw_text: str


def headword_from_path(path: str) -> str:
    """Last path segment of a word URL, e.g. '/word/advert/' -> 'advert'"""
    segments = [segment for segment in path.rstrip('/').split('/') if segment]
    if not segments:
        return ''
    return unquote(segments[-1]).strip().lower()


class EtymonlineClient:
    """Async client for etymonline.com word pages"""

    def __init__(self, session: aiohttp.ClientSession,
                 base_url: str = 'https://www.etymonline.com/word/',
                 user_agent: str = 'cairn/1.0 (CLI dictionary tool; etymology)'):
        self.session = session
        self.base_url = base_url if base_url.endswith('/') else base_url + '/'
        self.user_agent = user_agent

    def entry_url(self, word: str) -> str:
        return self.base_url + quote(word.strip().lower(), safe='')

    async def fetch(self, word: str) -> Optional[PrimaryDocument]:
        """Fetch the page for ``word``; raises on transport or HTTP errors"""
        word = word.strip().lower()
        if not word:
            return None

        url = self.entry_url(word)
        async with self.session.get(url, headers={'User-Agent': self.user_agent}) as response:
            if response.status != 200:
                raise aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=f"etymonline returned {response.status}",
                )

            resolved = headword_from_path(response.url.path) or word
            body = bytearray()
            while len(body) < MAX_BODY_BYTES:
                chunk = await response.content.read(MAX_BODY_BYTES - len(body))
                if not chunk:
                    break
                body.extend(chunk)

            charset = response.charset or 'utf-8'
            return PrimaryDocument(
                resolved_headword=resolved,
                raw_text=body.decode(charset, errors='replace'),
            )
