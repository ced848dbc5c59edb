"""
Custom exceptions for the Emoji Taxonomy builder

Every failure aborts the whole run: there is no partial taxonomy and no retry.
"""

from typing import Any, Dict, List, Optional


class TaxonomyError(Exception):
    """Base exception for all taxonomy builder errors"""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        base_msg = self.message
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" (Context: {context_str})"
        if self.cause:
            base_msg += f" (Caused by: {str(self.cause)})"
        return base_msg


class FetchError(TaxonomyError):
    """Transport failure or non-200 response while fetching a source"""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: Optional[int] = None,
        cause: Optional[Exception] = None,
    ):
        context = {"url": url}
        if status_code is not None:
            context["status_code"] = status_code
        super().__init__(message, context, cause)
        self.url = url
        self.status_code = status_code


class SourceFormatError(TaxonomyError):
    """Identifier source payload does not have the expected shape"""

    pass


class ReferenceFormatError(TaxonomyError):
    """Reference emoji list is malformed or in an unexpected order"""

    def __init__(
        self,
        message: str,
        line_number: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        context = dict(context or {})
        if line_number is not None:
            context["line"] = line_number
        super().__init__(message, context, cause)
        self.line_number = line_number


class UnrecognizedRecordError(ReferenceFormatError):
    """Record type outside category/subcategory/emoji"""

    def __init__(self, record: Any):
        super().__init__(
            f"Unexpected record type {type(record).__name__!r}",
            context={"record": repr(record)},
        )
        self.record = record


class UncategorizedIdentifiersError(TaxonomyError):
    """Identifiers with a Unicode literal never matched the reference list"""

    def __init__(self, identifiers: List[str]):
        self.identifiers = sorted(identifiers)
        preview = ", ".join(self.identifiers[:10])
        if len(self.identifiers) > 10:
            preview += ", ..."
        super().__init__(
            f"Uncategorized emoji(s) found: {preview}",
            context={"count": len(self.identifiers)},
        )
