"""Inline formatting of paragraph nodes (bold, italic, code, links)."""

from __future__ import annotations

import logging
import re

import html2text
from bs4 import Tag

from .dom import inner_text

logger = logging.getLogger(__name__)


class InlineFormatter:
    """
    Renders a paragraph node's inline markup as Markdown.

    Uses html2text with settings that keep each paragraph on one logical
    line and links inline.

    Example:
        formatter = InlineFormatter()
        formatter.format(node)  # 'Hello **world**'
    """

    def __init__(self, inline_links: bool = True, unicode_snob: bool = True):
        """
        Initialize the formatter.

        Args:
            inline_links: Use inline [text](url) vs reference style
            unicode_snob: Use Unicode chars where possible
        """
        self._converter = html2text.HTML2Text()

        # Line width (0 = no wrapping for consistent output)
        self._converter.body_width = 0

        self._converter.inline_links = inline_links
        self._converter.protect_links = True
        self._converter.wrap_links = False
        self._converter.unicode_snob = unicode_snob
        self._converter.escape_snob = False
        self._converter.mark_code = False
        self._converter.ignore_images = True
        self._converter.single_line_break = True

    def format(self, node: Tag) -> str:
        """
        Convert the node's inline markup to Markdown.

        Args:
            node: Paragraph-like node

        Returns:
            Markdown text; the node's plain text if conversion fails
        """
        try:
            markdown = self._converter.handle(node.decode_contents())
        except Exception as e:
            logger.warning(f"Inline formatting failed, using plain text: {e}")
            return inner_text(node)

        lines = [line.rstrip() for line in markdown.strip().split("\n")]
        return re.sub(r"\n{3,}", "\n\n", "\n".join(lines))
