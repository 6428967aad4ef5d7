"""Block classification for document nodes.

Each node is classified into a tagged ``Block`` variant. Native tag names
are checked first; platform class conventions are looked up in a per-source
rule table, so supporting a new source means writing a new table.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from bs4 import Tag

from .dom import class_string, element_children, inner_text, is_descendant

logger = logging.getLogger(__name__)


class BlockKind(str, Enum):
    """Supported block types."""

    HEADING = "heading"
    LIST = "list"
    CODE = "code"
    QUOTE = "quote"
    DIVIDER = "divider"
    IMAGE = "image"
    TABLE = "table"
    PARAGRAPH = "paragraph"
    SKIP = "skip"


@dataclass(frozen=True)
class Block:
    """
    Classification of one node.

    Attributes:
        kind: Block type
        level: Heading level (1-3) for headings, 0 otherwise
        variant: Sub-type for lists (bulleted, numbered, to_do, toggle)
    """

    kind: BlockKind
    level: int = 0
    variant: str = ""

    @classmethod
    def heading(cls, level: int) -> Block:
        if level not in (1, 2, 3):
            raise ValueError(f"Unsupported heading level: {level}")
        return cls(BlockKind.HEADING, level=level)

    @classmethod
    def bullets(cls, variant: str = "bulleted") -> Block:
        return cls(BlockKind.LIST, variant=variant)

    @property
    def is_boundary(self) -> bool:
        """Level-1 headings start a new slide."""
        return self.kind == BlockKind.HEADING and self.level == 1


SKIP = Block(BlockKind.SKIP)
CODE = Block(BlockKind.CODE)
QUOTE = Block(BlockKind.QUOTE)
DIVIDER = Block(BlockKind.DIVIDER)
IMAGE = Block(BlockKind.IMAGE)
TABLE = Block(BlockKind.TABLE)
PARAGRAPH = Block(BlockKind.PARAGRAPH)

# Native tag names shared by every source
TAG_RULES: dict[str, Block] = {
    "h1": Block.heading(1),
    "h2": Block.heading(2),
    "h3": Block.heading(3),
    "ul": Block.bullets("bulleted"),
    "ol": Block.bullets("numbered"),
    "pre": CODE,
    "blockquote": QUOTE,
    "hr": DIVIDER,
    "img": IMAGE,
    "table": TABLE,
    "p": PARAGRAPH,
}

# Kinds that carry no text of their own
TEXTLESS_KINDS = frozenset({BlockKind.DIVIDER, BlockKind.IMAGE})


@dataclass(frozen=True)
class ClassRule:
    """Maps a class-name fragment to a block type."""

    fragment: str
    block: Block


@dataclass(frozen=True)
class SourceRules:
    """
    Class-name vocabulary of one source.

    Attributes:
        name: Source name, for logging
        class_rules: Ordered rules, first match wins
        wrapper_classes: Classes of wrappers that hold a single native heading
    """

    name: str
    class_rules: tuple[ClassRule, ...] = ()
    wrapper_classes: tuple[str, ...] = field(default_factory=tuple)


NOTION_RULES = SourceRules(
    name="notion",
    class_rules=(
        # Headings, level 1 before 2 before 3
        ClassRule("notion-header-block", Block.heading(1)),
        ClassRule("notion-h1", Block.heading(1)),
        ClassRule("notion-sub_header-block", Block.heading(2)),
        ClassRule("notion-h2", Block.heading(2)),
        ClassRule("notion-sub_sub_header-block", Block.heading(3)),
        ClassRule("notion-h3", Block.heading(3)),
        # Quotes before tables so quote blocks never read as grids
        ClassRule("notion-quote-block", QUOTE),
        ClassRule("notion-quote", QUOTE),
        ClassRule("notion-bulleted_list-block", Block.bullets("bulleted")),
        ClassRule("notion-numbered_list-block", Block.bullets("numbered")),
        ClassRule("notion-to_do-block", Block.bullets("to_do")),
        ClassRule("notion-toggle-block", Block.bullets("toggle")),
        ClassRule("notion-list-block", Block.bullets("bulleted")),
        ClassRule("notion-code-block", CODE),
        ClassRule("notion-divider-block", DIVIDER),
        ClassRule("notion-image-block", IMAGE),
        ClassRule("notion-table_of_contents-block", SKIP),
        ClassRule("notion-table-block", TABLE),
        ClassRule("notion-collection-table", TABLE),
        ClassRule("notion-table", TABLE),
        ClassRule("notion-text-block", PARAGRAPH),
        ClassRule("notion-text", PARAGRAPH),
    ),
)

MARKDOWN_RULES = SourceRules(
    name="markdown",
    # GitHub wraps rendered headings in <div class="markdown-heading">
    wrapper_classes=("markdown-heading",),
)


class BlockClassifier:
    """
    Classifies document nodes for one source.

    Order of checks: heading wrappers, native tag name, the source's class
    rules, structural hints (a nested ``pre``, ``img`` or ``table``), then
    paragraph. Nodes without text (other than dividers and images) and
    paragraphs that already start with a markdown heading marker are
    classified as SKIP.

    Example:
        classifier = BlockClassifier(NOTION_RULES)
        block = classifier.classify(node)
        if block.is_boundary:
            ...
    """

    def __init__(self, rules: SourceRules):
        self.rules = rules

    def _wrapped_heading(self, node: Tag) -> Optional[Tag]:
        classes = class_string(node)
        if not classes or not any(wrapper in classes for wrapper in self.rules.wrapper_classes):
            return None
        for child in element_children(node):
            if child.name in ("h1", "h2", "h3"):
                return child
        return None

    def _match_class(self, node: Tag) -> Optional[Block]:
        classes = class_string(node)
        if not classes:
            return None
        for rule in self.rules.class_rules:
            if rule.fragment in classes:
                return rule.block
        return None

    def _match_structure(self, node: Tag) -> Optional[Block]:
        if node.find("pre") is not None:
            return CODE
        if node.find("img") is not None:
            return IMAGE
        if node.find("table") is not None:
            return TABLE
        return None

    def resolve(self, node: Tag) -> Block:
        """Block type from markup alone, before the text checks."""
        wrapped = self._wrapped_heading(node)
        if wrapped is not None:
            return TAG_RULES[wrapped.name]

        block = TAG_RULES.get(node.name or "")
        if block is None:
            block = self._match_class(node)
        if block is None:
            block = self._match_structure(node)
        return block or PARAGRAPH

    def classify(self, node: Tag) -> Block:
        """
        Classify one node.

        Args:
            node: Document node

        Returns:
            Block variant (SKIP when the node contributes nothing)
        """
        block = self.resolve(node)
        if block.kind in TEXTLESS_KINDS or block.kind == BlockKind.SKIP:
            return block

        text = inner_text(node)
        if not text:
            return SKIP
        if block.kind == BlockKind.PARAGRAPH and text.startswith("#"):
            return SKIP
        return block

    def heading_level(self, node: Tag) -> Optional[int]:
        """Heading level of the node, or None if it is not a heading."""
        wrapped = self._wrapped_heading(node)
        if wrapped is not None:
            return TAG_RULES[wrapped.name].level

        block = TAG_RULES.get(node.name or "") or self._match_class(node)
        if block is not None and block.kind == BlockKind.HEADING:
            return block.level
        return None

    def find_boundaries(self, root: Tag) -> list[Tag]:
        """
        All level-1 heading nodes under ``root``, in document order.

        A boundary nested inside an earlier boundary (a heading element inside
        a heading block) is dropped.
        """
        boundaries: list[Tag] = []
        for node in _iter_tags(root):
            if self.heading_level(node) != 1:
                continue
            if boundaries and is_descendant(node, boundaries[-1]):
                continue
            boundaries.append(self.anchor(node))
        logger.debug(f"Found {len(boundaries)} level-1 headings ({self.rules.name})")
        return boundaries

    def anchor(self, node: Tag) -> Tag:
        """The node whose siblings hold the content after a heading (its wrapper if any)."""
        parent = node.parent
        while isinstance(parent, Tag) and self._wrapped_heading(parent) is node:
            node, parent = parent, parent.parent
        return node


def _iter_tags(root: Tag) -> Iterator[Tag]:
    for element in root.descendants:
        if isinstance(element, Tag):
            yield element
