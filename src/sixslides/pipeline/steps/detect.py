"""Pipeline step for source detection."""

from typing import Optional

from ...detection import SourceDetector
from ...errors import UnsupportedSourceError
from ...models.events import EventType, ExtractionEvent
from ..base import EventEmitter, ExtractionContext


class DetectStep:
    """
    Pipeline step that decides the document's source type.

    Raises UnsupportedSourceError when no extractor family applies.
    """

    name = "detect"

    def __init__(self, detector: Optional[SourceDetector] = None):
        self._detector = detector or SourceDetector()

    async def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        source_type = self._detector.detect(ctx.document)
        if source_type is None:
            raise UnsupportedSourceError()

        ctx.source_type = source_type
        if emit:
            emit(
                ExtractionEvent(
                    type=EventType.SOURCE_DETECTED,
                    locator=ctx.locator,
                    source_type=source_type,
                )
            )
        return ctx
