#!/usr/bin/env python3
"""
Free Dictionary API client (https://dictionaryapi.dev)
"""

import asyncio
import logging
from typing import Any, Dict, List
from urllib.parse import quote

import aiohttp

from ..exceptions import DictionaryLookupError, WordNotFoundError

logger = logging.getLogger(__name__)


class FreeDictionaryClient:
    """Async client returning the raw JSON entries for a word"""

    def __init__(self, session: aiohttp.ClientSession,
                 api_base: str = 'https://api.dictionaryapi.dev/api/v2/entries/en'):
        self.session = session
        self.api_base = api_base.rstrip('/')

    async def fetch(self, word: str) -> List[Dict[str, Any]]:
        """
        Fetch entries for ``word``.

        Raises WordNotFoundError on 404 (carrying the API's message when it
        sent one) and DictionaryLookupError for any other failure.
        """
        url = f"{self.api_base}/{quote(word, safe='')}"

        try:
            async with self.session.get(url) as response:
                if response.status == 404:
                    message = ''
                    try:
                        body = await response.json(content_type=None)
                        if isinstance(body, dict):
                            message = body.get('message') or ''
                        elif isinstance(body, list) and body and isinstance(body[0], dict):
                            message = body[0].get('message') or ''
                    except ValueError:
                        logger.debug(f"Free Dictionary API sent a non-JSON 404 body for '{word}'")
                    raise WordNotFoundError(word, message)

                if response.status != 200:
                    raise DictionaryLookupError(f"dictionary API returned {response.status}")

                try:
                    data = await response.json(content_type=None)
                except ValueError as e:
                    raise DictionaryLookupError(f"decode response: {e}") from e

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DictionaryLookupError(f"request failed: {e}") from e

        if not isinstance(data, list):
            raise DictionaryLookupError(f"decode response: unexpected payload for \"{word}\"")
        return data
