"""
Literal normalization for emoji image locators

GitHub serves standard emoji from ``.../emoji/unicode/<codepoints>.png`` and
its own glyphs (octocat, shipit, ...) from ``.../emoji/<name>.png``.
"""

import re
from pathlib import PurePosixPath
from typing import Iterable
from urllib.parse import urlsplit

from apps.taxonomy.models import DecodedLiteral, PlatformImageRef, UnicodeLiteral

UNICODE_PATH_SEGMENT = "/unicode/"
IMAGE_EXTENSIONS = (".png", ".gif", ".jpg", ".jpeg", ".svg", ".webp")

# Variation selectors VS1-VS16 and the zero-width joiner
_PRESENTATION_RE = re.compile(r"[\ufe00-\ufe0f\u200d]")


def normalize_key(literal: str) -> str:
    """Strip presentation-only code points so equivalent glyphs share a key"""
    return _PRESENTATION_RE.sub("", literal)


def decode_code_points(code_point_texts: Iterable[str]) -> str:
    """Decode hex code point texts (``["1f1fa", "1f1f8"]``) into one string"""
    return "".join(chr(int(text, 16)) for text in code_point_texts)


def _file_stem(path: str) -> str:
    name = PurePosixPath(path).name
    lowered = name.lower()
    for extension in IMAGE_EXTENSIONS:
        if lowered.endswith(extension):
            return name[: -len(extension)]
    return name


def decode_locator(locator: str) -> DecodedLiteral:
    """
    Decide whether an image locator is a standard Unicode emoji

    Args:
        locator: Image URL from the identifier source

    Returns:
        UnicodeLiteral with the decoded sequence, or PlatformImageRef
        wrapping the file stem for platform-only glyphs

    Raises:
        ValueError: a /unicode/ file name that is not hex code points
    """
    path = urlsplit(locator).path
    stem = _file_stem(path)

    if UNICODE_PATH_SEGMENT in path:
        return UnicodeLiteral(decode_code_points(stem.split("-")))

    return PlatformImageRef(name=stem, locator=locator)
