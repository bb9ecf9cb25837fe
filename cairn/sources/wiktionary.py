#!/usr/bin/env python3
"""
Wiktionary client - raw wikitext for a page via the MediaWiki API
"""

import logging
from typing import Any, Dict, Optional

import aiohttp

logger = logging.getLogger(__name__)


def extract_page_wikitext(data: Dict[str, Any]) -> Optional[str]:
    """Pull the main-slot wikitext of the first page out of an API response"""
    pages = (data or {}).get('query', {}).get('pages', {})
    for page_data in pages.values():
        revisions = page_data.get('revisions') or []
        if not revisions:
            return None

        revision = revisions[0]
        slots = revision.get('slots', {})
        if 'main' in slots:
            content = slots['main'].get('*') or slots['main'].get('content')
        else:
            # Older responses without rvslots put the text on the revision
            content = revision.get('*')

        content = (content or '').strip()
        return content or None

    return None


class WiktionaryClient:
    """Async client for the Wiktionary MediaWiki API"""

    def __init__(self, session: aiohttp.ClientSession,
                 api_url: str = 'https://en.wiktionary.org/w/api.php',
                 user_agent: str = 'cairn/1.0 (CLI dictionary tool; etymology lookup)'):
        self.session = session
        self.api_url = api_url
        self.user_agent = user_agent

    async def fetch(self, word: str) -> Optional[str]:
        """Fetch raw wikitext for ``word``; None when the page does not exist"""
        word = word.strip().lower()
        if not word:
            return None

        params = {
            'action': 'query',
            'prop': 'revisions',
            'rvprop': 'content',
            'rvslots': 'main',
            'format': 'json',
            'titles': word,
        }

        async with self.session.get(self.api_url, params=params,
                                    headers={'User-Agent': self.user_agent}) as response:
            if response.status != 200:
                raise aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=f"wiktionary returned {response.status}",
                )
            data = await response.json(content_type=None)

        wikitext = extract_page_wikitext(data)
        if wikitext is None:
            logger.debug(f"Wiktionary has no page content for '{word}'")
        return wikitext
