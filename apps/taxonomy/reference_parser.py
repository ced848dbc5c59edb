"""
Parser for the Unicode full emoji list (full-emoji-list.txt)

Line syntax:
    @@smileys-&-emotion        category marker
    @face-smiling              subcategory marker
    1F600<TAB>...              emoji entry, space-separated code points
"""

import re
from typing import Iterator

from apps.taxonomy.literals import decode_code_points
from apps.taxonomy.models import (
    CategoryRecord,
    EmojiRecord,
    SubcategoryRecord,
    TaxonomyRecord,
)
from core.exceptions import ReferenceFormatError

CATEGORY_PREFIX = "@@"
SUBCATEGORY_PREFIX = "@"

_WORD_RE = re.compile(r"[a-zA-Z]+")


def to_title_case(text: str) -> str:
    """
    Title-case a reference marker

    "smileys-&-emotion" -> "Smileys & Emotion"
    """
    text = text.replace("-", " ")
    text = re.sub(r"\s+", " ", text)
    return _WORD_RE.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:], text)


def iter_reference_records(text: str) -> Iterator[TaxonomyRecord]:
    """Yield category, subcategory and emoji records in document order"""
    # Only LF separates lines; U+2028 and friends may appear inside names
    for line_number, line in enumerate(text.split("\n"), 1):
        line = line.rstrip("\r")
        if not line.strip():
            continue

        if line.startswith(CATEGORY_PREFIX):
            yield CategoryRecord(to_title_case(line[len(CATEGORY_PREFIX) :]))
        elif line.startswith(SUBCATEGORY_PREFIX):
            yield SubcategoryRecord(to_title_case(line[len(SUBCATEGORY_PREFIX) :]))
        else:
            field = line.split("\t")[0]
            try:
                literal = decode_code_points(field.split())
            except ValueError as e:
                raise ReferenceFormatError(
                    f"Invalid code point field {field!r}",
                    line_number=line_number,
                    cause=e,
                ) from e
            yield EmojiRecord(literal)
