"""
Emoji Taxonomy Processor
Acquires both sources, runs categorization and persists the result
"""

import json
from pathlib import Path
from typing import Dict, Optional, Tuple

from loguru import logger

from apps.taxonomy.categorizer import categorize, taxonomy_stats
from apps.taxonomy.models import Taxonomy
from apps.taxonomy.reference_parser import iter_reference_records
from apps.taxonomy.sources import (
    SourceFetcher,
    load_identifier_file,
    load_reference_file,
    parse_identifier_map,
)
from core.config import get_config


class TaxonomyProcessor:
    """
    End-to-end taxonomy build

    1. Acquire identifier map + reference text (local files win over HTTP)
    2. Decode identifiers, parse reference records, categorize
    3. Write JSON
    """

    def __init__(self, fetcher: Optional[SourceFetcher] = None):
        self.config = get_config()
        self.fetcher = fetcher or SourceFetcher()

    async def acquire_sources(
        self,
        identifiers_file: Optional[Path] = None,
        reference_file: Optional[Path] = None,
    ) -> Tuple[Dict[str, str], str]:
        """
        Load sources from disk where given, fetch the rest

        Both remote fetches run concurrently when neither file is given.
        """
        if identifiers_file is None and reference_file is None:
            return await self.fetcher.fetch_sources()

        if identifiers_file is not None:
            logger.info(f"Reading identifiers from {identifiers_file}")
            identifier_map = load_identifier_file(identifiers_file)
        else:
            identifier_map = await self.fetcher.fetch_json(
                self.config.github_emojis_url,
                headers={"User-Agent": self.config.user_agent},
            )

        if reference_file is not None:
            logger.info(f"Reading reference list from {reference_file}")
            reference_text = load_reference_file(reference_file)
        else:
            reference_text = await self.fetcher.fetch_text(
                self.config.unicode_emoji_list_url
            )

        return identifier_map, reference_text

    def build(self, identifier_map: Dict[str, str], reference_text: str) -> Taxonomy:
        entries = parse_identifier_map(identifier_map)
        records = iter_reference_records(reference_text)
        return categorize(
            entries, records, custom_category=self.config.custom_category_title
        )

    async def run(
        self,
        identifiers_file: Optional[Path] = None,
        reference_file: Optional[Path] = None,
    ) -> Taxonomy:
        identifier_map, reference_text = await self.acquire_sources(
            identifiers_file, reference_file
        )
        taxonomy = self.build(identifier_map, reference_text)

        stats = taxonomy_stats(taxonomy)
        logger.info(
            f"Taxonomy: {stats['total_categories']} categories, "
            f"{stats['total_groups']} groups, "
            f"{stats['total_identifiers']} identifiers"
        )
        return taxonomy


def write_taxonomy(taxonomy: Taxonomy, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(taxonomy, f, ensure_ascii=False, indent=2)
        f.write("\n")
    logger.info(f"Wrote taxonomy to {path}")


def load_taxonomy(path: Path) -> Taxonomy:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
