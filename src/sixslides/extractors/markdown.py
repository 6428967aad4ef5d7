"""Slide extraction from Markdown, raw or rendered."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Optional

from bs4 import Tag

from ..conversion.blocks import MARKDOWN_RULES, BlockClassifier
from ..conversion.dom import SourceDocument
from ..conversion.inline import InlineFormatter
from ..conversion.synthesizer import MarkdownSynthesizer, heading_markdown
from ..models.config import ExtractionConfig, SourceConfig
from ..models.slide import Slide, SourceType
from .assembler import SlideAssembler
from .base import FragmentAccumulator
from .notion import clean_subslide_title

logger = logging.getLogger(__name__)

_FENCE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_ANY_HEADING = re.compile(r"^#{1,6}[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")
_DELIMITER = re.compile(r"^[ \t]*(?:-{3,4}|\*{3}|<!--\s*(?:slide|next)\s*-->)[ \t]*$", re.IGNORECASE)

# Entities left behind when markdown is copied out of an HTML page
_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&amp;", "&"),
)


def _heading_pattern(level: int) -> re.Pattern[str]:
    return re.compile(rf"^#{{{level}}}[ \t]+(.+?)(?:[ \t]+#+)?[ \t]*$")


_HEADING_PATTERNS = {1: _heading_pattern(1), 2: _heading_pattern(2)}


def clean_markdown(text: str) -> str:
    """Normalize line endings, decode common entities, collapse blank runs."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    for entity, char in _ENTITIES:
        text = text.replace(entity, char)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


class FenceTracker:
    """Tracks whether a line scanner is inside a fenced code block."""

    def __init__(self) -> None:
        self.marker: Optional[str] = None

    @property
    def inside(self) -> bool:
        return self.marker is not None

    def feed(self, line: str) -> bool:
        """Update state for one line; True if the line opened or closed a fence."""
        match = _FENCE.match(line)
        if match is None:
            return False
        fence = match.group(1)
        if self.marker is None:
            self.marker = fence
            return True
        # Closing fence: same character, at least as long, nothing else on the line
        if fence[0] == self.marker[0] and len(fence) >= len(self.marker) and not line.strip().strip(fence[0]):
            self.marker = None
            return True
        return False


def split_sections(lines: Iterable[str], level: int) -> tuple[list[str], list[tuple[str, list[str]]]]:
    """
    Split lines at headings of one level, ignoring headings inside code fences.

    Args:
        lines: Markdown lines
        level: Heading level that opens a section (1 or 2)

    Returns:
        (lines before the first heading, [(heading text, section lines), ...])
    """
    pattern = _HEADING_PATTERNS[level]
    tracker = FenceTracker()
    preamble: list[str] = []
    sections: list[tuple[str, list[str]]] = []
    current = preamble

    for line in lines:
        if tracker.feed(line) or tracker.inside:
            current.append(line)
            continue
        match = pattern.match(line)
        if match:
            current = []
            sections.append((match.group(1).strip(), current))
            continue
        current.append(line)

    return preamble, sections


def split_blocks(lines: Iterable[str]) -> list[str]:
    """Blank-line separated blocks; blank lines inside code fences are kept."""
    tracker = FenceTracker()
    blocks: list[str] = []
    current: list[str] = []

    def flush() -> None:
        block = "\n".join(current).strip("\n")
        if block.strip():
            blocks.append(block)
        current.clear()

    for line in lines:
        is_fence = tracker.feed(line)
        if not is_fence and not tracker.inside and not line.strip():
            flush()
            continue
        current.append(line.rstrip())
    flush()
    return blocks


def split_on_delimiters(lines: Iterable[str]) -> list[list[str]]:
    """Split lines on slide separators outside code fences."""
    tracker = FenceTracker()
    segments: list[list[str]] = [[]]
    for line in lines:
        if tracker.feed(line) or tracker.inside:
            segments[-1].append(line)
        elif _DELIMITER.match(line):
            segments.append([])
        else:
            segments[-1].append(line)
    return [segment for segment in segments if any(line.strip() for line in segment)]


class MarkdownExtractor:
    """
    Extracts slides from Markdown documents.

    Rendered pages (GitHub, GitLab, wikis) are walked inside their markdown
    container with native-tag rules. Raw Markdown text is scanned line by
    line: ``# `` headings outside code fences start slides and blank-line
    separated blocks become fragments.

    Example:
        extractor = MarkdownExtractor()
        slides = extractor.extract(SourceDocument.from_input(text, "file:///deck.md"))
    """

    source_type = SourceType.MARKDOWN

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        source_config: Optional[SourceConfig] = None,
    ):
        self.config = config or ExtractionConfig()
        self.source_config = source_config or SourceConfig()
        self.classifier = BlockClassifier(MARKDOWN_RULES)
        self._inline_formatter = InlineFormatter() if self.config.inline_formatting else None

    def extract(self, document: SourceDocument) -> list[Slide]:
        if document.is_markup:
            container = self.find_container(document)
            if container is not None:
                return self.extract_rendered(container, document.locator)

        slides = self.extract_raw(document.body_text())
        if not slides and document.is_markup:
            # Rendered headings without a known container
            slides = self.extract_rendered(document.tree, document.locator)
        return slides

    def find_container(self, document: SourceDocument) -> Optional[Tag]:
        for selector in self.source_config.markdown_containers:
            container = document.tree.select_one(selector)
            if isinstance(container, Tag):
                logger.debug(f"Using markdown container {selector!r}")
                return container
        return None

    def extract_rendered(self, root: Tag, locator: str) -> list[Slide]:
        """Walk a rendered-markdown tree."""
        synthesizer = MarkdownSynthesizer(
            inline_formatter=self._inline_formatter,
            expand_native_lists=True,
            base_url=locator if self.config.resolve_relative_urls else None,
        )
        assembler = SlideAssembler(
            self.classifier,
            synthesizer,
            self.source_type,
            split_subslides=self.config.split_subslides,
            subslide_title=clean_subslide_title,
        )
        return assembler.assemble(root)

    def extract_raw(self, text: str) -> list[Slide]:
        """
        Scan raw Markdown text.

        Args:
            text: Markdown source

        Returns:
            One slide per level-1 heading; text before the first heading is
            dropped. With ``delimiter_fallback``, heading-less text is split
            on separators instead.
        """
        lines = clean_markdown(text).split("\n")
        preamble, sections = split_sections(lines, 1)
        if not sections:
            if self.config.delimiter_fallback:
                return self._split_delimited(lines)
            return []

        if any(line.strip() for line in preamble):
            logger.debug("Dropped text before the first heading")

        slides = []
        for title, section_lines in sections:
            slide = self._section_slide(title, section_lines)
            if slide is not None:
                slides.append(slide)
        return slides

    def _split_delimited(self, lines: list[str]) -> list[Slide]:
        slides = []
        for number, segment in enumerate(split_on_delimiters(lines), start=1):
            title, body = self._segment_title(segment, number)
            slide = self._section_slide(title, body)
            if slide is not None:
                slides.append(slide)
        logger.debug(f"Delimiter fallback produced {len(slides)} slides")
        return slides

    def _segment_title(self, segment: list[str], number: int) -> tuple[str, list[str]]:
        tracker = FenceTracker()
        for index, line in enumerate(segment):
            if tracker.feed(line) or tracker.inside:
                continue
            match = _ANY_HEADING.match(line)
            if match:
                return match.group(1).strip(), segment[:index] + segment[index + 1 :]
        return f"Slide {number}", segment

    def _section_slide(self, title: str, lines: list[str]) -> Optional[Slide]:
        if self.config.split_subslides:
            preamble, subsections = split_sections(lines, 2)
        else:
            preamble, subsections = lines, []

        main = FragmentAccumulator(heading_markdown(1, title))
        for block in split_blocks(preamble):
            main.add(block)

        subslides = []
        for sub_title, sub_lines in subsections:
            sub_title = clean_subslide_title(sub_title)
            accumulator = FragmentAccumulator(heading_markdown(2, sub_title))
            for block in split_blocks(sub_lines):
                accumulator.add(block)
            if not accumulator.is_empty():
                subslides.append(Slide(title=sub_title, content=accumulator.content, source_type=self.source_type))

        if main.is_empty() and not subslides:
            return None
        return Slide(
            title=title,
            content=main.content,
            source_type=self.source_type,
            subslides=tuple(subslides),
        )
