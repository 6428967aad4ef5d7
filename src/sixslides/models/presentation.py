"""Presentation aggregate."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from ..errors import EmptyPresentationError
from .slide import Slide, SourceType

DEFAULT_PRESENTATION_TITLE = "Untitled Presentation"


@dataclass(frozen=True)
class Presentation:
    """
    Immutable, ordered set of finalized slides.

    Build it with ``Presentation.from_slides``. ``title`` and ``slide_count``
    are derived from ``slides`` once, at construction, so they cannot
    disagree with it; an empty slide list is rejected. A new extraction
    always builds a new Presentation.

    Example:
        presentation = Presentation.from_slides(slides, SourceType.NOTION)
        print(presentation.slide_count, presentation.title)
    """

    slides: tuple[Slide, ...]
    source_type: SourceType = SourceType.UNKNOWN
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    title: str = field(init=False)
    slide_count: int = field(init=False)

    def __post_init__(self) -> None:
        slides = tuple(self.slides)
        if not slides:
            raise EmptyPresentationError()
        object.__setattr__(self, "slides", slides)
        object.__setattr__(self, "title", slides[0].title or DEFAULT_PRESENTATION_TITLE)
        object.__setattr__(self, "slide_count", len(slides))

    @classmethod
    def from_slides(
        cls,
        slides: Sequence[Slide],
        source_type: SourceType = SourceType.UNKNOWN,
    ) -> Presentation:
        """
        Create a presentation from a finalized slide list.

        Args:
            slides: Normalized (and possibly limited) slides, in order
            source_type: Source detected for the whole document

        Returns:
            New Presentation

        Raises:
            EmptyPresentationError: If ``slides`` is empty
        """
        return cls(slides=tuple(slides), source_type=source_type)

    def get_slide(self, index: int) -> Optional[Slide]:
        if 0 <= index < self.slide_count:
            return self.slides[index]
        return None

    def to_dict(self) -> dict[str, Any]:
        """Plain-data copy handed to storage and rendering."""
        return {
            "title": self.title,
            "sourceType": self.source_type.value,
            "slideCount": self.slide_count,
            "slides": [slide.to_dict() for slide in self.slides],
            "metadata": {"createdAt": self.created_at.isoformat()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Presentation:
        """Rebuild a presentation from ``to_dict`` output."""
        slides = [Slide.from_dict(item) for item in data.get("slides") or ()]
        source_type = SourceType.parse(data.get("sourceType")) or SourceType.UNKNOWN
        return cls.from_slides(slides, source_type)

    def to_markdown(self) -> str:
        """Render the whole deck as markdown with ``---`` between slides."""
        return "\n---\n\n".join(slide.to_markdown() for slide in self.slides)
