"""Source type detection from a document and its locator."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlparse

from .conversion.dom import SourceDocument, has_markdown_extension
from .models.config import SourceConfig
from .models.slide import SourceType


class SourceDetector:
    """
    Decides which extractor family applies to a document.

    Rules, in order:
    - the locator's host is a Notion domain or a subdomain of one: NOTION
    - the locator's path ends with a Markdown extension: MARKDOWN
    - the document is plain text rather than markup: MARKDOWN
    - the tree contains a rendered-markdown container: MARKDOWN
    - otherwise None (unsupported)

    Detection only reads its inputs; it never touches the network.

    Example:
        detector = SourceDetector()
        source_type = detector.detect(document)
        if source_type is None:
            raise UnsupportedSourceError()
    """

    def __init__(
        self,
        config: Optional[SourceConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the detector.

        Args:
            config: Domain, extension and container lists
            logger: Optional logger for detection messages
        """
        self.config = config or SourceConfig()
        self.logger = logger or logging.getLogger(__name__)

    def is_notion_host(self, locator: str) -> bool:
        host = (urlparse(locator).hostname or "").lower().rstrip(".")
        if not host:
            return False
        for domain in self.config.notion_domains:
            domain = domain.lower()
            if host == domain or host.endswith(f".{domain}"):
                return True
        return False

    def has_markdown_path(self, locator: str) -> bool:
        return has_markdown_extension(locator, self.config.markdown_extensions)

    def has_markdown_container(self, document: SourceDocument) -> bool:
        if not document.is_markup:
            return False
        return any(document.tree.select_one(selector) is not None for selector in self.config.markdown_containers)

    def detect(self, document: SourceDocument) -> Optional[SourceType]:
        """
        Classify a document.

        Args:
            document: Parsed document with its locator

        Returns:
            SourceType.NOTION, SourceType.MARKDOWN, or None when unsupported
        """
        locator = document.locator or ""

        if self.is_notion_host(locator):
            self.logger.debug(f"Detected Notion page: {locator}")
            return SourceType.NOTION

        if self.has_markdown_path(locator):
            self.logger.debug(f"Detected Markdown file by extension: {locator}")
            return SourceType.MARKDOWN

        if not document.is_markup:
            self.logger.debug("Detected plain-text Markdown document")
            return SourceType.MARKDOWN

        if self.has_markdown_container(document):
            self.logger.debug(f"Detected rendered Markdown page: {locator}")
            return SourceType.MARKDOWN

        self.logger.info(f"Unsupported content source: {locator or '<no locator>'}")
        return None
