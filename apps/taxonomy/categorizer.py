"""
Emoji Categorization Engine

Reconciles the identifier source (identifier -> literal) with the ordered
Unicode reference list into category -> subcategory -> identifier groups.

Two phases:
    1. build an immutable index of identifier groups keyed by normalized literal
       (platform-only glyphs go to a side table keyed by image name)
    2. fold over the reference records, claiming each group at the first
       reference position it matches; every group must be claimed by the end
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from loguru import logger

from apps.taxonomy.literals import normalize_key
from apps.taxonomy.models import (
    CategoryRecord,
    EmojiRecord,
    IdentifierEntry,
    IdentifierGroup,
    PlatformImageRef,
    SubcategoryRecord,
    Taxonomy,
    TaxonomyRecord,
    UnicodeLiteral,
)
from core.exceptions import (
    ReferenceFormatError,
    UncategorizedIdentifiersError,
    UnrecognizedRecordError,
)

DEFAULT_CUSTOM_CATEGORY = "GitHub Custom Emoji"


@dataclass(frozen=True)
class IdentifierIndex:
    """Identifier groups split by how they can be matched"""

    literal_groups: Dict[str, IdentifierGroup]
    platform_groups: Dict[str, IdentifierGroup]

    @property
    def identifier_count(self) -> int:
        return sum(len(g) for g in self.literal_groups.values()) + sum(
            len(g) for g in self.platform_groups.values()
        )


@dataclass(frozen=True)
class WalkContext:
    """Current position in the reference list"""

    category: Optional[str] = None
    subcategory: Optional[str] = None

    def enter_category(self, title: str) -> "WalkContext":
        return WalkContext(category=title)

    def enter_subcategory(self, title: str) -> "WalkContext":
        if self.category is None:
            raise ReferenceFormatError(
                f"Subcategory {title!r} appears before any category"
            )
        return WalkContext(category=self.category, subcategory=title)


@dataclass
class _WalkState:
    remaining: Dict[str, IdentifierGroup]
    taxonomy: Taxonomy = field(default_factory=dict)
    context: WalkContext = field(default_factory=WalkContext)


def build_identifier_index(entries: Iterable[IdentifierEntry]) -> IdentifierIndex:
    """
    Partition identifiers into literal groups and platform-only groups

    Group order and order within a group follow the entries' order.
    """
    literal_groups: Dict[str, IdentifierGroup] = {}
    platform_groups: Dict[str, IdentifierGroup] = {}

    for entry in entries:
        literal = entry.literal
        if isinstance(literal, PlatformImageRef):
            platform_groups.setdefault(literal.name, []).append(entry.identifier)
        elif isinstance(literal, UnicodeLiteral):
            literal_groups.setdefault(normalize_key(literal.value), []).append(
                entry.identifier
            )
        else:
            raise TypeError(
                f"Unsupported literal for {entry.identifier!r}: {literal!r}"
            )

    logger.debug(
        f"Indexed {len(literal_groups)} literal groups, "
        f"{len(platform_groups)} platform groups"
    )
    return IdentifierIndex(literal_groups=literal_groups, platform_groups=platform_groups)


def _apply_record(state: _WalkState, record: TaxonomyRecord) -> None:
    if isinstance(record, CategoryRecord):
        state.context = state.context.enter_category(record.title)
        state.taxonomy.setdefault(record.title, {})

    elif isinstance(record, SubcategoryRecord):
        state.context = state.context.enter_subcategory(record.title)
        state.taxonomy[state.context.category].setdefault(record.title, [])

    elif isinstance(record, EmojiRecord):
        key = normalize_key(record.literal)
        if key not in state.remaining:
            return

        category, subcategory = state.context.category, state.context.subcategory
        if category is None or subcategory is None:
            raise ReferenceFormatError(
                "Emoji entry outside of a subcategory",
                context={"literal": record.literal, "category": category},
            )
        state.taxonomy[category][subcategory].append(list(state.remaining.pop(key)))

    else:
        raise UnrecognizedRecordError(record)


def _prune(taxonomy: Taxonomy) -> Taxonomy:
    pruned: Taxonomy = {}
    for category, subcategories in taxonomy.items():
        kept = {title: groups for title, groups in subcategories.items() if groups}
        if kept:
            pruned[category] = kept
    return pruned


def categorize(
    entries: Iterable[IdentifierEntry],
    records: Iterable[TaxonomyRecord],
    custom_category: str = DEFAULT_CUSTOM_CATEGORY,
) -> Taxonomy:
    """
    Build the emoji taxonomy

    Args:
        entries: Identifier entries in identifier-source order
        records: Reference records in document order
        custom_category: Title of the bucket for platform-only glyphs

    Returns:
        category -> subcategory -> list of identifier groups

    Raises:
        UncategorizedIdentifiersError: a Unicode identifier never matched
        ReferenceFormatError: records out of order or of unknown type
    """
    index = build_identifier_index(entries)
    state = _WalkState(remaining=dict(index.literal_groups))

    record_count = 0
    for record in records:
        _apply_record(state, record)
        record_count += 1

    logger.debug(
        f"Walked {record_count} reference records, "
        f"matched {len(index.literal_groups) - len(state.remaining)} groups"
    )

    if state.remaining:
        leftovers = [i for group in state.remaining.values() for i in group]
        logger.error(f"{len(leftovers)} identifiers missing from reference list")
        raise UncategorizedIdentifiersError(leftovers)

    taxonomy = _prune(state.taxonomy)

    if index.platform_groups:
        taxonomy[custom_category] = {
            "": [list(group) for group in index.platform_groups.values()]
        }

    logger.info(
        f"Categorized {index.identifier_count} identifiers into "
        f"{len(taxonomy)} categories"
    )
    return taxonomy


def taxonomy_stats(taxonomy: Taxonomy) -> Dict:
    """Counts per category plus overall totals"""
    categories = {}
    for category, subcategories in taxonomy.items():
        groups = [g for groups in subcategories.values() for g in groups]
        categories[category] = {
            "subcategories": len(subcategories),
            "groups": len(groups),
            "identifiers": sum(len(g) for g in groups),
        }

    return {
        "categories": categories,
        "total_categories": len(categories),
        "total_groups": sum(c["groups"] for c in categories.values()),
        "total_identifiers": sum(c["identifiers"] for c in categories.values()),
    }


def flatten_identifiers(taxonomy: Taxonomy) -> List[str]:
    """All identifiers in output order"""
    return [
        identifier
        for subcategories in taxonomy.values()
        for groups in subcategories.values()
        for group in groups
        for identifier in group
    ]
