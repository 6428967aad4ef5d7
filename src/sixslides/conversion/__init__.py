"""Node parsing, block classification and markdown synthesis."""

from .blocks import (
    MARKDOWN_RULES,
    NOTION_RULES,
    Block,
    BlockClassifier,
    BlockKind,
    ClassRule,
    SourceRules,
)
from .dom import SourceDocument, inner_text, single_line_text
from .inline import InlineFormatter
from .synthesizer import MarkdownSynthesizer, heading_markdown, table_rows_to_markdown

__all__ = [
    # Parsing
    "SourceDocument",
    "inner_text",
    "single_line_text",
    # Classification
    "Block",
    "BlockClassifier",
    "BlockKind",
    "ClassRule",
    "SourceRules",
    "MARKDOWN_RULES",
    "NOTION_RULES",
    # Synthesis
    "InlineFormatter",
    "MarkdownSynthesizer",
    "heading_markdown",
    "table_rows_to_markdown",
]
