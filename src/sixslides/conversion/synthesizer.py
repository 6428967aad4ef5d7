"""Markdown synthesis for classified blocks."""

from __future__ import annotations

import logging
import re
from typing import Callable, Optional
from urllib.parse import urljoin

from bs4 import Tag

from .blocks import Block, BlockKind
from .dom import element_children, inner_text, is_descendant, single_line_text
from .inline import InlineFormatter

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS = re.compile(r"(?:language|lang)-([a-z0-9+#_-]+)", re.IGNORECASE)


def heading_markdown(level: int, text: str) -> str:
    """``#``-prefixed heading line, or an empty string for empty text."""
    text = " ".join(text.split())
    if not text:
        return ""
    return f"{'#' * level} {text}"


def escape_cell(text: str) -> str:
    """Single-line table cell with literal pipes escaped."""
    return " ".join(text.split()).replace("|", "\\|")


def table_rows_to_markdown(rows: list[list[str]]) -> str:
    """
    Pipe table from already-escaped cell texts.

    The first row is the header; a ``---`` separator row with the same cell
    count follows it. Shorter data rows are padded with blank cells.
    """
    rows = [row for row in rows if row]
    if not rows:
        return ""

    width = len(rows[0])
    lines = [_table_line(rows[0]), _table_line(["---"] * width)]
    for row in rows[1:]:
        padded = row + [" "] * (width - len(row))
        lines.append(_table_line(padded))
    return "\n".join(lines)


def _table_line(cells: list[str]) -> str:
    return "| " + " | ".join(cell or " " for cell in cells) + " |"


class MarkdownSynthesizer:
    """
    Emits the canonical markdown fragment for a classified node.

    Every method is a pure function of the node. A block that fails to render
    is logged and yields an empty fragment; it never aborts the slide.

    Example:
        synthesizer = MarkdownSynthesizer()
        fragment = synthesizer.synthesize(node, classifier.classify(node))
    """

    def __init__(
        self,
        inline_formatter: Optional[InlineFormatter] = None,
        expand_native_lists: bool = False,
        base_url: Optional[str] = None,
    ):
        """
        Initialize the synthesizer.

        Args:
            inline_formatter: Renders paragraph inline markup (plain text if None)
            expand_native_lists: Render <ul>/<ol> as one line per item
            base_url: Resolve relative image URLs against this http(s) URL
        """
        self._inline_formatter = inline_formatter
        self._expand_native_lists = expand_native_lists
        self._base_url = base_url if base_url and base_url.startswith(("http://", "https://")) else None
        self._handlers: dict[BlockKind, Callable[[Tag, Block], str]] = {
            BlockKind.HEADING: self.heading,
            BlockKind.LIST: self.list_block,
            BlockKind.CODE: self.code,
            BlockKind.QUOTE: self.quote,
            BlockKind.DIVIDER: self.divider,
            BlockKind.IMAGE: self.image,
            BlockKind.TABLE: self.table,
            BlockKind.PARAGRAPH: self.paragraph,
        }

    def synthesize(self, node: Tag, block: Block) -> str:
        """
        Render one node.

        Args:
            node: Document node
            block: Its classification

        Returns:
            Markdown fragment, or "" when the node contributes nothing
        """
        handler = self._handlers.get(block.kind)
        if handler is None:
            return ""
        try:
            fragment = handler(node, block)
        except Exception as e:
            logger.warning(f"Skipping {block.kind.value} block <{node.name}>: {e}")
            return ""
        return fragment if fragment.strip() else ""

    def heading(self, node: Tag, block: Block) -> str:
        return heading_markdown(block.level, single_line_text(node))

    def list_block(self, node: Tag, block: Block) -> str:
        # Nested hierarchy is not recovered: one bullet per block
        if self._expand_native_lists and node.name in ("ul", "ol"):
            items = [single_line_text(li) for li in node.find_all("li", recursive=False)]
            items = [item for item in items if item]
            if node.name == "ol":
                return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))
            return "\n".join(f"- {item}" for item in items)

        text = single_line_text(node)
        return f"- {text}" if text else ""

    def code(self, node: Tag, block: Block) -> str:
        code_node = node if node.name in ("pre", "code") else node.find("pre") or node.find("code")
        if isinstance(code_node, Tag) and code_node.name == "pre":
            inner_code = code_node.find("code")
            candidates = [node, code_node] + ([inner_code] if isinstance(inner_code, Tag) else [])
        else:
            candidates = [node] + ([code_node] if isinstance(code_node, Tag) else [])

        language = ""
        for candidate in candidates:
            for css_class in candidate.get("class") or []:
                match = _LANGUAGE_CLASS.fullmatch(css_class)
                if match:
                    language = match.group(1).lower()

        label = node.find(class_="notion-code-language")
        if isinstance(label, Tag):
            language = single_line_text(label).lower()

        if isinstance(code_node, Tag):
            text = code_node.get_text()
        else:
            line_numbers = node.find(class_="line-numbers")
            if isinstance(line_numbers, Tag):
                text = line_numbers.get_text()
            else:
                text = "".join(
                    str(s) for s in node.strings if not (isinstance(label, Tag) and is_descendant(s, label))
                )

        text = text.strip("\n")
        if not text.strip():
            return ""
        return f"```{language}\n{text}\n```"

    def quote(self, node: Tag, block: Block) -> str:
        lines = [line.strip() for line in inner_text(node).split("\n")]
        return "\n".join(f"> {line}" for line in lines if line)

    def divider(self, node: Tag, block: Block) -> str:
        return "---"

    def image(self, node: Tag, block: Block) -> str:
        img = node if node.name == "img" else node.find("img")
        if not isinstance(img, Tag):
            return ""

        src = img.get("src") or img.get("data-src") or ""
        if isinstance(src, list):
            src = " ".join(src)
        src = src.strip()
        if not src:
            return ""
        if self._base_url and not src.startswith(("http://", "https://", "//", "data:")):
            src = urljoin(self._base_url, src)

        alt = ""
        if node is not img:
            caption = node.find("figcaption") or node.find(class_=lambda c: bool(c) and "caption" in c)
            if isinstance(caption, Tag):
                alt = single_line_text(caption)
        if not alt:
            alt = " ".join(str(img.get("alt") or "").split())

        return f"![{alt}]({src})"

    def table(self, node: Tag, block: Block) -> str:
        table_rows = node.find_all("tr")
        if table_rows:
            rows = [[escape_cell(inner_text(cell)) for cell in tr.find_all(["th", "td"])] for tr in table_rows]
        else:
            # Div grid: children are rows, grandchildren are cells
            rows = [[escape_cell(inner_text(cell)) for cell in element_children(row)] for row in element_children(node)]
        return table_rows_to_markdown(rows)

    def paragraph(self, node: Tag, block: Block) -> str:
        if self._inline_formatter is not None:
            text = self._inline_formatter.format(node).strip()
        else:
            text = inner_text(node)
        if not text or text.startswith("#"):
            return ""
        return text
