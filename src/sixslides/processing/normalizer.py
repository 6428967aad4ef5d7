"""Post-extraction normalization of raw slides."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace

from ..models.slide import DEFAULT_SLIDE_TITLE, Slide, SourceType

logger = logging.getLogger(__name__)


class ContentNormalizer:
    """
    Fills the gaps extractors may leave in a slide.

    - empty or whitespace title: "Untitled Slide"
    - missing content: ""
    - missing source type: the document's detected type

    Metadata and subslides pass through untouched (subslides are not
    normalized recursively).

    Example:
        normalizer = ContentNormalizer()
        slides = normalizer.normalize(raw_slides, SourceType.NOTION)
    """

    def normalize_slide(self, slide: Slide, source_type: SourceType) -> Slide:
        title = slide.title if slide.title and slide.title.strip() else DEFAULT_SLIDE_TITLE
        return replace(
            slide,
            title=title,
            content=slide.content if slide.content is not None else "",
            source_type=slide.source_type or source_type,
        )

    def normalize(self, slides: Sequence[Slide], source_type: SourceType) -> list[Slide]:
        """
        Normalize every slide.

        Args:
            slides: Raw slides from an extractor
            source_type: Detected document-level source type

        Returns:
            New list of normalized slides, same order
        """
        normalized = [self.normalize_slide(slide, source_type) for slide in slides]
        logger.debug(f"Normalized {len(normalized)} slides ({source_type.value})")
        return normalized
