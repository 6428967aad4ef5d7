"""Slide domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

DEFAULT_SLIDE_TITLE = "Untitled Slide"


class SourceType(str, Enum):
    """Provenance tag carried by every normalized slide."""

    NOTION = "notion"
    MARKDOWN = "markdown"
    UPGRADE = "upgrade"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> Optional["SourceType"]:
        """Coerce a stored value to a SourceType, mapping unknown strings to UNKNOWN."""
        if value is None or value == "":
            return None
        if isinstance(value, SourceType):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class Slide:
    """
    One presentation unit.

    Extractors build slides with whatever they found; ``title`` may be empty
    and ``content``/``source_type`` may be None until the slide has been
    through ContentNormalizer.

    Attributes:
        title: Slide title (the text of its level-1 heading)
        content: Canonical markdown body, without the title line
        source_type: Provenance tag
        metadata: Opaque passthrough data
        subslides: Vertical sub-stack under this slide (level-2 sections)
    """

    title: str = ""
    content: Optional[str] = None
    source_type: Optional[SourceType] = None
    metadata: Optional[dict[str, Any]] = None
    subslides: tuple[Slide, ...] = field(default_factory=tuple)

    @property
    def has_subslides(self) -> bool:
        return len(self.subslides) > 0

    def to_markdown(self) -> str:
        """Render the slide as markdown, subslides as level-2 sections."""
        markdown = f"# {self.title}\n\n"
        if self.content:
            markdown += self.content

        if self.has_subslides:
            markdown += "\n\n"
            for subslide in self.subslides:
                markdown += f"## {subslide.title}\n\n{subslide.content or ''}\n\n"

        return markdown.rstrip() + "\n"

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain data for storage or rendering."""
        data: dict[str, Any] = {
            "title": self.title,
            "content": self.content,
            "sourceType": self.source_type.value if self.source_type else None,
        }
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        if self.subslides:
            data["subslides"] = [subslide.to_dict() for subslide in self.subslides]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Slide:
        """Build a slide from plain data (accepts ``sourceType`` or ``source_type``)."""
        source = data.get("sourceType", data.get("source_type"))
        return cls(
            title=data.get("title") or "",
            content=data.get("content"),
            source_type=SourceType.parse(source),
            metadata=data.get("metadata"),
            subslides=tuple(cls.from_dict(sub) for sub in data.get("subslides") or ()),
        )
