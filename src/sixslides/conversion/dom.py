"""Document parsing and node text helpers."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Optional, Union
from urllib.parse import unquote, urlparse

from bs4 import BeautifulSoup, Comment, Declaration, Doctype, NavigableString, ProcessingInstruction, Tag

logger = logging.getLogger(__name__)

DocumentInput = Union[BeautifulSoup, Tag, bytes, str]

# Tags that start a new line in rendered text
BLOCK_TAGS = {
    "address",
    "article",
    "aside",
    "blockquote",
    "dd",
    "div",
    "dl",
    "dt",
    "figcaption",
    "figure",
    "footer",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "header",
    "hr",
    "li",
    "main",
    "ol",
    "p",
    "pre",
    "section",
    "table",
    "tr",
    "ul",
}

SKIP_TEXT_PARENTS = {"script", "style", "noscript", "template"}

_MARKUP_START = re.compile(r"\s*<(?:!doctype|[a-z][\w-]*)[\s>/]", re.IGNORECASE)
_HTML_DOCUMENT_START = re.compile(r"\s*<(?:!doctype|html|head|body)[\s>]", re.IGNORECASE)
_META_CHARSET = re.compile(r"<meta\b[^>]*\bcharset=[\"']?([\w.:-]+)", re.IGNORECASE)
_HORIZONTAL_SPACE = re.compile(r"[ \t\f\v\r\u00a0]+")

MARKDOWN_EXTENSIONS = (".md", ".markdown")
MARKDOWN_MEDIA_TYPES = frozenset({"text/markdown", "text/x-markdown", "text/plain"})


def _detect_encoding(data: bytes) -> str:
    """Charset from a <meta> tag; only markup is sniffed, anything else is utf-8."""
    head = data[:2048].decode("latin-1")
    if not looks_like_markup(head):
        return "utf-8"
    charset_match = _META_CHARSET.search(head)
    if charset_match:
        return charset_match.group(1)
    return "utf-8"


def decode_bytes(data: bytes) -> str:
    """Decode document bytes, honouring a declared charset."""
    encoding = _detect_encoding(data)
    try:
        return data.decode(encoding, errors="replace")
    except (UnicodeDecodeError, LookupError):
        return data.decode("utf-8", errors="replace")


def looks_like_markup(text: str) -> bool:
    """True when the text starts with an HTML tag or doctype."""
    return bool(_MARKUP_START.match(text))


def looks_like_html_document(text: str) -> bool:
    """True for a whole HTML page (doctype, <html>, <head> or <body> first)."""
    return bool(_HTML_DOCUMENT_START.match(text))


def has_markdown_extension(locator: str, extensions: Iterable[str] = MARKDOWN_EXTENSIONS) -> bool:
    path = unquote(urlparse(locator).path or locator).lower()
    return any(path.endswith(ext.lower()) for ext in extensions)


def declares_markdown(
    locator: str,
    content_type: str = "",
    extensions: Iterable[str] = MARKDOWN_EXTENSIONS,
) -> bool:
    """True when the locator's extension or the media type says the body is Markdown source."""
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in MARKDOWN_MEDIA_TYPES or has_markdown_extension(locator, extensions)


@dataclass
class SourceDocument:
    """
    A document as handed to the extractors.

    Attributes:
        locator: Origin URL or file URI
        tree: Parsed node tree (empty for plain-text input)
        text: The original text when the input was not markup, else None
    """

    locator: str
    tree: BeautifulSoup = field(repr=False)
    text: Optional[str] = field(default=None, repr=False)

    @property
    def is_markup(self) -> bool:
        return self.text is None

    @classmethod
    def from_input(
        cls,
        document: DocumentInput,
        locator: str,
        content_type: str = "",
        markdown_extensions: Iterable[str] = MARKDOWN_EXTENSIONS,
    ) -> SourceDocument:
        """
        Wrap a parsed tree, raw HTML, or raw Markdown text.

        Text from a Markdown locator (or served as Markdown/plain text) stays
        text even when it opens with inline HTML, as READMEs often do; only a
        whole HTML page there is parsed. Other text is parsed when it starts
        with a tag.

        Args:
            document: BeautifulSoup tree, Tag, HTML/Markdown bytes or string
            locator: Origin URL of the document
            content_type: Content-Type the document was served with, if known
            markdown_extensions: Locator suffixes of Markdown files

        Returns:
            SourceDocument
        """
        if isinstance(document, BeautifulSoup):
            return cls(locator=locator, tree=document)
        if isinstance(document, Tag):
            return cls(locator=locator, tree=BeautifulSoup(str(document), "html.parser"))

        text = decode_bytes(document) if isinstance(document, bytes) else str(document)
        if declares_markdown(locator, content_type, markdown_extensions):
            markup = looks_like_html_document(text)
        else:
            markup = looks_like_markup(text)
        if markup:
            return cls(locator=locator, tree=BeautifulSoup(text, "html.parser"))

        logger.debug(f"Treating {locator or 'document'} as plain text ({len(text)} chars)")
        return cls(locator=locator, tree=BeautifulSoup("", "html.parser"), text=text)

    def body_text(self) -> str:
        """Plain text of the document: the original text, or the rendered body text."""
        if self.text is not None:
            return self.text
        pre = self.tree.find("pre")
        body = self.tree.find("body")
        root = body if isinstance(body, Tag) else self.tree
        # Browsers show a raw .md file as a single <pre> inside <body>
        if isinstance(pre, Tag) and pre.parent is root and len(element_children(root)) == 1:
            return pre.get_text()
        return inner_text(root)


def class_string(node: Tag) -> str:
    """The node's class attribute as one space-separated string."""
    classes = node.get("class")
    if not classes:
        return ""
    if isinstance(classes, str):
        return classes
    return " ".join(classes)


def has_class(node: Optional[Tag], fragment: str) -> bool:
    """Substring match against the node's class string."""
    if node is None:
        return False
    return fragment in class_string(node)


def element_children(node: Tag) -> list[Tag]:
    return [child for child in node.children if isinstance(child, Tag)]


def next_element_siblings(node: Tag) -> Iterator[Tag]:
    for sibling in node.next_siblings:
        if isinstance(sibling, Tag):
            yield sibling


def is_descendant(node: Tag, ancestor: Tag) -> bool:
    """Identity-based ancestry check (bs4 ``==`` compares markup, not nodes)."""
    return any(parent is ancestor for parent in node.parents)


def inner_text(node: Tag) -> str:
    """
    Approximate a browser's ``innerText``.

    ``<br>`` and block-level tags become line breaks and runs of horizontal
    whitespace collapse to one space. Literal newlines in text are kept as
    line breaks, matching the pre-wrap text of block editors.
    """
    parts: list[str] = []
    for element in node.descendants:
        if isinstance(element, Tag):
            if element.name == "br" or element.name in BLOCK_TAGS:
                parts.append("\n")
            continue
        if not isinstance(element, NavigableString):
            continue
        if isinstance(element, (Comment, Declaration, Doctype, ProcessingInstruction)):
            continue
        parent = element.parent
        if parent is not None and parent.name in SKIP_TEXT_PARENTS:
            continue
        parts.append(str(element))

    lines = [_HORIZONTAL_SPACE.sub(" ", line).strip() for line in "".join(parts).split("\n")]
    text = "\n".join(lines)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def single_line_text(node: Tag) -> str:
    """Node text flattened to a single line."""
    return " ".join(inner_text(node).split())
