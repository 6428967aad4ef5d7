"""Event types emitted while a document moves through the pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from .slide import SourceType


class EventType(str, Enum):
    """Types of events emitted during extraction."""

    STARTED = "started"
    SOURCE_DETECTED = "source_detected"
    SLIDES_EXTRACTED = "slides_extracted"
    SLIDES_NORMALIZED = "slides_normalized"
    LIMIT_APPLIED = "limit_applied"
    PRESENTATION_BUILT = "presentation_built"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ExtractionEvent:
    """
    Event emitted during an extraction request.

    Example:
        def log_event(event: ExtractionEvent) -> None:
            if event.type == EventType.SLIDES_EXTRACTED:
                print(f"{event.slide_count} slides from {event.locator}")
            elif event.is_error:
                print(f"Error: {event.error}")
    """

    type: EventType

    # Timestamp (always UTC)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    locator: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None

    source_type: Optional[SourceType] = None
    slide_count: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.type == EventType.FAILED
