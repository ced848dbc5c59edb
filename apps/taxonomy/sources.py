"""
Source acquisition for the taxonomy builder
Fetches the GitHub emoji map and the Unicode emoji list, or reads local copies
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httpx
from loguru import logger

from apps.taxonomy.literals import decode_locator
from apps.taxonomy.models import IdentifierEntry
from core.config import get_config
from core.exceptions import FetchError, SourceFormatError


class SourceFetcher:
    """HTTP fetcher: any non-200 response or transport error is fatal"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = get_config()
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.http_timeout_sec,
            follow_redirects=True,
            transport=self.transport,
        )

    async def _get(
        self,
        client: httpx.AsyncClient,
        url: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        logger.debug(f"GET {url}")
        try:
            response = await client.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise FetchError(f"Request failed: {url}", url=url, cause=e) from e

        if response.status_code != 200:
            raise FetchError(
                f"Unexpected response status code: {response.status_code}",
                url=url,
                status_code=response.status_code,
            )

        logger.debug(f"Fetched {len(response.content)} bytes from {url}")
        return response

    async def fetch_text(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> str:
        async with self._client() as client:
            response = await self._get(client, url, headers)
            return response.text

    async def fetch_json(
        self, url: str, headers: Optional[Dict[str, str]] = None
    ) -> Any:
        async with self._client() as client:
            response = await self._get(client, url, headers)
            try:
                return response.json()
            except ValueError as e:
                raise FetchError(f"Invalid JSON from {url}", url=url, cause=e) from e

    async def fetch_sources(self) -> Tuple[Dict[str, str], str]:
        """
        Fetch the identifier map and reference text concurrently

        Returns:
            (identifier -> image locator, reference list text)
        """
        identifier_headers = {"User-Agent": self.config.user_agent}

        logger.info(
            f"Fetching {self.config.github_emojis_url} and "
            f"{self.config.unicode_emoji_list_url}"
        )
        identifier_map, reference_text = await asyncio.gather(
            self.fetch_json(self.config.github_emojis_url, headers=identifier_headers),
            self.fetch_text(self.config.unicode_emoji_list_url),
        )
        return identifier_map, reference_text


def parse_identifier_map(raw: Any) -> List[IdentifierEntry]:
    """
    Decode an identifier -> image locator mapping into entries

    Raises:
        SourceFormatError: payload is not an object of string -> string
    """
    if not isinstance(raw, dict):
        raise SourceFormatError(
            "Identifier source must be a JSON object",
            context={"type": type(raw).__name__},
        )

    entries = []
    for identifier, locator in raw.items():
        if not isinstance(locator, str):
            raise SourceFormatError(
                f"Locator for {identifier!r} is not a string",
                context={"type": type(locator).__name__},
            )
        try:
            literal = decode_locator(locator)
        except ValueError as e:
            raise SourceFormatError(
                f"Undecodable locator for {identifier!r}",
                context={"locator": locator},
                cause=e,
            ) from e
        entries.append(IdentifierEntry(identifier, literal))

    logger.debug(f"Decoded {len(entries)} identifier entries")
    return entries


def load_identifier_file(path: Path) -> Dict[str, str]:
    """Read a saved copy of the identifier source"""
    with open(path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SourceFormatError(
                f"Invalid JSON in {path}", context={"path": str(path)}, cause=e
            ) from e


def load_reference_file(path: Path) -> str:
    """Read a saved copy of the reference emoji list"""
    with open(path, "r", encoding="utf-8") as f:
        try:
            return f.read()
        except UnicodeDecodeError as e:
            raise SourceFormatError(
                f"Reference list {path} is not UTF-8",
                context={"path": str(path)},
                cause=e,
            ) from e
