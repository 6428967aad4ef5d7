"""Slide extraction from rendered Notion pages."""

from __future__ import annotations

import logging
import re
from typing import Optional

from bs4 import Tag

from ..conversion.blocks import NOTION_RULES, BlockClassifier
from ..conversion.dom import SourceDocument
from ..conversion.inline import InlineFormatter
from ..conversion.synthesizer import MarkdownSynthesizer
from ..models.config import ExtractionConfig
from ..models.slide import Slide, SourceType
from .assembler import SlideAssembler

logger = logging.getLogger(__name__)

# Notion's accessible label on sub-header blocks
_HEADING_LABEL = re.compile(r"^heading\s*2\s*:\s*", re.IGNORECASE)


def clean_subslide_title(text: str) -> str:
    """Strip a leading ``Heading 2:`` label from a sub-header's text."""
    return _HEADING_LABEL.sub("", text).strip()


class NotionExtractor:
    """
    Extracts slides from a Notion page.

    Walks ``.notion-page-content`` when present (so the page title block is
    not taken as a slide), otherwise the whole document. Blocks are
    recognized by Notion's class vocabulary as well as native tags.

    Example:
        extractor = NotionExtractor(ExtractionConfig(split_subslides=True))
        slides = extractor.extract(SourceDocument.from_input(html, url))
    """

    source_type = SourceType.NOTION
    content_selector = ".notion-page-content"

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()
        self.classifier = BlockClassifier(NOTION_RULES)
        self._inline_formatter = InlineFormatter() if self.config.inline_formatting else None

    def _assembler(self, locator: str) -> SlideAssembler:
        synthesizer = MarkdownSynthesizer(
            inline_formatter=self._inline_formatter,
            base_url=locator if self.config.resolve_relative_urls else None,
        )
        return SlideAssembler(
            self.classifier,
            synthesizer,
            self.source_type,
            split_subslides=self.config.split_subslides,
            subslide_title=clean_subslide_title,
        )

    def content_root(self, document: SourceDocument) -> Tag:
        content = document.tree.select_one(self.content_selector)
        if isinstance(content, Tag):
            return content
        return document.tree

    def extract(self, document: SourceDocument) -> list[Slide]:
        slides = self._assembler(document.locator).assemble(self.content_root(document))
        logger.debug(f"Notion: {len(slides)} slides from {document.locator}")
        return slides
