"""Error kinds raised by the variant generator."""

from __future__ import annotations


class VariantError(Exception):
    """Base class for variant generation errors."""


class MalformedRequestError(VariantError, ValueError):
    """Sizes/strokes plan is inconsistent or out of range."""


class NoEligibleSelectionError(VariantError):
    """No selected node is usable as source artwork."""

    def __init__(self, message: str = "no eligible icon in selection") -> None:
        super().__init__(message)


class VariantBuildError(VariantError):
    """A single source icon could not be turned into a variant set."""

    def __init__(self, source_name: str, message: str) -> None:
        super().__init__(message)
        self.source_name = source_name
