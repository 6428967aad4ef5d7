"""Protocol and shared pieces for source extractors."""

from __future__ import annotations

import logging
from typing import Protocol

from ..conversion.dom import SourceDocument
from ..models.slide import Slide, SourceType

logger = logging.getLogger(__name__)


class SlideExtractor(Protocol):
    """
    Protocol for source-specific extractors.

    Implementations turn one document into raw slides. An empty list means
    no slide boundaries were found; the pipeline reports that as "no slides".
    """

    source_type: SourceType

    def extract(self, document: SourceDocument) -> list[Slide]:
        """
        Extract raw slides from a document.

        Args:
            document: Parsed document and its locator

        Returns:
            Slides in document order (not yet normalized)
        """
        ...


class FragmentAccumulator:
    """
    Ordered markdown fragments of one (sub)slide, without repeats.

    The title line is seeded into the seen set, so a fragment repeating the
    heading is never added to the body.

    Example:
        acc = FragmentAccumulator("# Intro")
        acc.add("Hello")
        acc.add("Hello")   # suppressed
        acc.content        # 'Hello'
    """

    def __init__(self, title_line: str = ""):
        self.title_line = title_line
        self._fragments: list[str] = []
        self._seen: set[str] = {title_line} if title_line else set()

    def add(self, fragment: str) -> bool:
        """Append a fragment; returns False if it was empty or already present."""
        if not fragment or not fragment.strip():
            return False
        if fragment in self._seen:
            logger.debug(f"Suppressed duplicate fragment: {fragment[:60]!r}")
            return False
        self._seen.add(fragment)
        self._fragments.append(fragment)
        return True

    @property
    def fragments(self) -> list[str]:
        return list(self._fragments)

    @property
    def content(self) -> str:
        """Body without the title line."""
        return "\n\n".join(self._fragments)

    @property
    def body(self) -> str:
        """Title line followed by the fragments, blank-line separated."""
        parts = [self.title_line] if self.title_line else []
        return "\n\n".join(parts + self._fragments)

    def is_empty(self) -> bool:
        return not self.body.strip()
