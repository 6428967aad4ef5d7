"""Error taxonomy for slide extraction."""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of extraction failure reported in the result envelope."""

    UNSUPPORTED_SOURCE = "unsupported_source"
    NO_SLIDES = "no_slides"
    ENTITLEMENT = "entitlement"
    INTERNAL = "internal"


UNSUPPORTED_SOURCE_MESSAGE = "Unsupported content source. Please use a Notion page or Markdown file."
NO_SLIDES_MESSAGE = "No slides found. Make sure your page has at least one H1 heading."


class SixSlidesError(Exception):
    """Base class for errors raised inside the extraction pipeline."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, *, kind: Optional[ErrorKind] = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind


class UnsupportedSourceError(SixSlidesError):
    """The document is not a Notion page or a Markdown document."""

    kind = ErrorKind.UNSUPPORTED_SOURCE

    def __init__(self, message: str = UNSUPPORTED_SOURCE_MESSAGE):
        super().__init__(message)


class NoSlidesFoundError(SixSlidesError):
    """No level-1 headings, or every candidate slide came out empty."""

    kind = ErrorKind.NO_SLIDES

    def __init__(self, message: str = NO_SLIDES_MESSAGE):
        super().__init__(message)


class EntitlementCheckError(SixSlidesError):
    """The entitlement collaborator failed or timed out."""

    kind = ErrorKind.ENTITLEMENT


class EmptyPresentationError(SixSlidesError, ValueError):
    """A Presentation was requested from an empty slide list."""

    def __init__(self, message: str = "Cannot build a presentation from an empty slide list"):
        super().__init__(message)
