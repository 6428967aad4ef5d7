"""Slide assembly from a rendered document tree."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Callable, Optional

from bs4 import Tag

from ..conversion.blocks import BlockClassifier, BlockKind
from ..conversion.dom import is_descendant, next_element_siblings, single_line_text
from ..conversion.synthesizer import MarkdownSynthesizer, heading_markdown
from ..models.slide import Slide, SourceType
from .base import FragmentAccumulator

logger = logging.getLogger(__name__)

TitleCleaner = Callable[[str], str]


class SlideAssembler:
    """
    Builds slides from the sibling sequence after each level-1 heading.

    Every level-1 heading starts a slide that runs until the next one (the
    last runs to the end of its sibling list). Each following sibling is
    classified and synthesized; non-empty fragments are appended in order,
    blank-line separated, unless the same fragment is already in the slide.
    A slide whose body is empty is dropped.

    With ``split_subslides``, level-2 headings open subslides: the slide keeps
    what comes before the first level-2 heading and each subslide collects
    what follows its heading.

    Example:
        assembler = SlideAssembler(classifier, synthesizer, SourceType.NOTION)
        slides = assembler.assemble(soup)
    """

    def __init__(
        self,
        classifier: BlockClassifier,
        synthesizer: MarkdownSynthesizer,
        source_type: SourceType,
        split_subslides: bool = False,
        subslide_title: Optional[TitleCleaner] = None,
    ):
        self.classifier = classifier
        self.synthesizer = synthesizer
        self.source_type = source_type
        self.split_subslides = split_subslides
        self._subslide_title = subslide_title or (lambda text: text)

    def assemble(self, root: Tag) -> list[Slide]:
        """
        Build slides for every level-1 heading under ``root``.

        Args:
            root: Document or container node

        Returns:
            Slides in document order; empty when there are no level-1 headings
        """
        boundaries = self.classifier.find_boundaries(root)
        if not boundaries:
            logger.info(f"No level-1 headings found ({self.classifier.rules.name})")
            return []

        slides: list[Slide] = []
        for index, boundary in enumerate(boundaries):
            next_boundary = boundaries[index + 1] if index + 1 < len(boundaries) else None
            slide = self._build_slide(boundary, next_boundary)
            if slide is None:
                logger.debug(f"Dropped empty slide at heading {index + 1}")
                continue
            slides.append(slide)

        logger.debug(f"Assembled {len(slides)} slides from {len(boundaries)} headings")
        return slides

    def section_nodes(self, boundary: Tag, next_boundary: Optional[Tag]) -> Iterator[Tag]:
        """Siblings after ``boundary`` up to, not including, the next boundary."""
        for sibling in next_element_siblings(boundary):
            if next_boundary is not None and (sibling is next_boundary or is_descendant(next_boundary, sibling)):
                break
            yield sibling

    def _build_slide(self, boundary: Tag, next_boundary: Optional[Tag]) -> Optional[Slide]:
        title = single_line_text(boundary)
        main = FragmentAccumulator(heading_markdown(1, title))
        sections: list[tuple[str, FragmentAccumulator]] = []
        current = main

        for node in self.section_nodes(boundary, next_boundary):
            block = self.classifier.classify(node)
            if block.kind == BlockKind.SKIP:
                continue

            if self.split_subslides and block.kind == BlockKind.HEADING and block.level == 2:
                sub_title = self._subslide_title(single_line_text(node))
                current = FragmentAccumulator(heading_markdown(2, sub_title))
                sections.append((sub_title, current))
                continue

            current.add(self.synthesizer.synthesize(node, block))

        if main.is_empty() and not sections:
            return None

        subslides = tuple(
            Slide(title=sub_title, content=acc.content, source_type=self.source_type)
            for sub_title, acc in sections
            if not acc.is_empty()
        )
        return Slide(
            title=title,
            content=main.content,
            source_type=self.source_type,
            subslides=subslides,
        )
