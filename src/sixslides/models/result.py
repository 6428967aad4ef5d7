"""Result envelope returned by ``extract_content``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..errors import ErrorKind
from .presentation import Presentation
from .slide import SourceType


@dataclass(frozen=True)
class ExtractionResult:
    """
    Either a successful extraction or an error, never both.

    Use ``ExtractionResult.success`` / ``ExtractionResult.failure`` rather
    than the constructor.
    """

    source_type: Optional[SourceType]
    slides: Optional[list[dict[str, Any]]] = None
    presentation: Optional[Presentation] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, presentation: Presentation) -> ExtractionResult:
        return cls(
            source_type=presentation.source_type,
            slides=presentation.to_dict()["slides"],
            presentation=presentation,
        )

    @classmethod
    def failure(
        cls,
        error: str,
        source_type: Optional[SourceType] = None,
        kind: ErrorKind = ErrorKind.INTERNAL,
    ) -> ExtractionResult:
        return cls(source_type=source_type, error=error, error_kind=kind)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        source = self.source_type.value if self.source_type else None
        if self.error is not None:
            return {"error": self.error, "sourceType": source}
        return {"slides": self.slides, "sourceType": source}
