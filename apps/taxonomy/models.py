"""
Emoji Taxonomy Data Models
Tagged variants for decoded literals and reference-list records
"""

from dataclasses import dataclass
from typing import Dict, List, Union


@dataclass(frozen=True)
class UnicodeLiteral:
    """Identifier literal that decodes to a standard Unicode sequence"""

    value: str


@dataclass(frozen=True)
class PlatformImageRef:
    """Platform-only glyph, known only by its image file name"""

    name: str
    locator: str


DecodedLiteral = Union[UnicodeLiteral, PlatformImageRef]


@dataclass(frozen=True)
class IdentifierEntry:
    identifier: str
    literal: DecodedLiteral


@dataclass(frozen=True)
class CategoryRecord:
    title: str


@dataclass(frozen=True)
class SubcategoryRecord:
    title: str


@dataclass(frozen=True)
class EmojiRecord:
    literal: str


TaxonomyRecord = Union[CategoryRecord, SubcategoryRecord, EmojiRecord]

# category -> subcategory -> identifier groups
IdentifierGroup = List[str]
Taxonomy = Dict[str, Dict[str, List[IdentifierGroup]]]
