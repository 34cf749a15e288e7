"""Free Dictionary API adapter.

Implements DictionaryPort against the public read-only English dictionary
at dictionaryapi.dev. Used only as the no-provider fallback for English
definitions, so it never accrues token usage.

API Documentation: https://dictionaryapi.dev
Payload shape: [ {word, meanings: [ {partOfSpeech, definitions: [ {definition} ]} ]} ]
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

logger = logging.getLogger(__name__)

FREE_DICTIONARY_API_BASE_URL = "https://api.dictionaryapi.dev/api/v2/entries/en"
API_TIMEOUT_SECONDS = 5.0


class FreeDictionaryAdapter:
    """Adapter that fetches English definitions from the Free Dictionary API."""

    def __init__(self, base_url: str = FREE_DICTIONARY_API_BASE_URL, timeout: float = API_TIMEOUT_SECONDS):
        self.base_url = base_url
        self.timeout = timeout

    async def lookup(self, word: str, limit: int = 2) -> list[str]:
        """Fetch up to `limit` definitions for the exact spelling of word.

        Returns:
            Definition strings in payload order, or [] on any failure.
        """
        url = f"{self.base_url}/{quote(word, safe='')}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await _fetch_with_retry(client, url)

                if response.status_code == 404:
                    logger.debug("Word not found in Free Dictionary API", extra={"word": word})
                    return []

                response.raise_for_status()
                data = response.json()

        except httpx.HTTPStatusError as e:
            logger.warning(
                "Free Dictionary API HTTP error",
                extra={"word": word, "status_code": e.response.status_code},
            )
            return []
        except httpx.RequestError as e:
            logger.warning(
                "Free Dictionary API request error",
                extra={"word": word, "error_type": type(e).__name__},
            )
            return []
        except ValueError as e:
            logger.warning(
                "Free Dictionary API returned invalid JSON",
                extra={"word": word, "error": str(e)},
            )
            return []

        definitions = extract_definitions(data, limit=limit)
        if definitions:
            logger.debug(
                "Free Dictionary API lookup successful",
                extra={"word": word, "definition_count": len(definitions)},
            )
        else:
            logger.debug("Free Dictionary API returned no definitions", extra={"word": word})
        return definitions


# ── HTTP helpers ─────────────────────────────────────────────


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def _fetch_with_retry(client: httpx.AsyncClient, url: str) -> httpx.Response:
    """Fetch URL with automatic retry on transient failures."""
    return await client.get(url)


# ── Payload parsing ──────────────────────────────────────────


def extract_definitions(payload: Any, limit: int = 2) -> list[str]:
    """Collect definition strings from entries → meanings → definitions.

    Stops as soon as `limit` strings are collected. Malformed nodes are
    skipped rather than failing the whole payload.
    """
    if not isinstance(payload, list):
        return []

    definitions: list[str] = []
    for entry in payload:
        if not isinstance(entry, dict):
            continue
        for meaning in entry.get("meanings") or []:
            if not isinstance(meaning, dict):
                continue
            for item in meaning.get("definitions") or []:
                if not isinstance(item, dict):
                    continue
                text = item.get("definition")
                if isinstance(text, str) and text.strip():
                    definitions.append(text.strip())
                if len(definitions) >= limit:
                    return definitions
    return definitions
