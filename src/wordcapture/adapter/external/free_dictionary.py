"""Free Dictionary API adapter.

Implements DictionaryPort by querying the Free Dictionary API and
normalizing the first returned entry into a LookupResult.

API Documentation: https://dictionaryapi.dev
"""

import logging
import os
from typing import Any
from urllib.parse import quote

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from wordcapture.domain.model.entry import LookupResult, normalize_headword

logger = logging.getLogger(__name__)

FREE_DICTIONARY_API_BASE_URL = os.getenv(
    'DICTIONARY_API_BASE_URL', "https://api.dictionaryapi.dev/api/v2/entries/en",
)
API_TIMEOUT_SECONDS = float(os.getenv('DICTIONARY_TIMEOUT_SECONDS', '5.0'))


class FreeDictionaryAdapter:
    """Adapter that validates words against the Free Dictionary API."""

    def __init__(
        self,
        base_url: str = FREE_DICTIONARY_API_BASE_URL,
        timeout: float = API_TIMEOUT_SECONDS,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout

    async def lookup(self, word: str) -> LookupResult:
        """Look up a word.

        Args:
            word: The word to look up. Trimmed and lowercased before querying.

        Returns:
            LookupResult with valid=True and the extracted fields, or
            LookupResult.invalid() on any failure.
        """
        normalized = normalize_headword(word)
        if not normalized:
            return LookupResult.invalid(normalized)

        url = f"{self.base_url}/{quote(normalized, safe='')}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await _fetch_with_retry(client, url)

                if response.status_code != 200:
                    logger.debug(
                        "Word not found in Free Dictionary API",
                        extra={"word": normalized, "status_code": response.status_code},
                    )
                    return LookupResult.invalid(normalized)

                data = response.json()

        except httpx.RequestError as e:
            logger.warning(
                "Free Dictionary API request error",
                extra={"word": normalized, "error_type": type(e).__name__},
            )
            return LookupResult.invalid(normalized)
        except ValueError as e:
            logger.warning(
                "Free Dictionary API returned invalid JSON",
                extra={"word": normalized, "error": str(e)},
            )
            return LookupResult.invalid(normalized)
        except Exception as e:
            logger.error(
                "Unexpected error calling Free Dictionary API",
                extra={"word": normalized, "error": str(e)},
                exc_info=True,
            )
            return LookupResult.invalid(normalized)

        result = parse_lookup_payload(normalized, data)
        if result.valid:
            logger.debug("Free Dictionary API lookup successful", extra={"word": normalized})
        return result


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


def parse_lookup_payload(word: str, data: Any) -> LookupResult:
    """Normalize an API response body into a LookupResult.

    Expects a non-empty list of entry objects; only the first is read.
    Anything else is treated as a failed lookup.
    """
    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        logger.debug("Free Dictionary API returned no entries", extra={"word": word})
        return LookupResult.invalid(word)

    first = data[0]
    try:
        phonetics = [p for p in first.get('phonetics') or [] if isinstance(p, dict)]
        return LookupResult(
            word=word,
            phonetic=_extract_phonetic(first, phonetics),
            definition=_extract_definition(first),
            audio_url=_extract_audio_url(phonetics),
            valid=True,
        )
    except (AttributeError, TypeError) as e:
        logger.warning(
            "Malformed Free Dictionary API entry",
            extra={"word": word, "error": str(e)},
        )
        return LookupResult.invalid(word)


def _extract_phonetic(entry: dict[str, Any], phonetics: list[dict[str, Any]]) -> str:
    """Prefer the top-level phonetic; fall back to the first variant with text."""
    phonetic = entry.get('phonetic') or ""
    if not phonetic:
        for variant in phonetics:
            if variant.get('text'):
                phonetic = variant['text']
                break
    return phonetic.strip('/')


def _extract_audio_url(phonetics: list[dict[str, Any]]) -> str:
    for variant in phonetics:
        if variant.get('audio'):
            return variant['audio']
    return ""


def _extract_definition(entry: dict[str, Any]) -> str:
    """First definition under the first part-of-speech grouping."""
    meanings = entry.get('meanings') or []
    if not meanings:
        return ""
    for item in meanings[0].get('definitions') or []:
        if isinstance(item, dict) and item.get('definition'):
            return item['definition']
    return ""
