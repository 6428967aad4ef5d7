"""Pipeline step for slide normalization."""

from typing import Optional

from ...models.events import EventType, ExtractionEvent
from ...models.slide import SourceType
from ...processing.normalizer import ContentNormalizer
from ..base import EventEmitter, ExtractionContext


class NormalizeStep:
    """Pipeline step that fills default titles, content and source types."""

    name = "normalize"

    def __init__(self, normalizer: Optional[ContentNormalizer] = None):
        self._normalizer = normalizer or ContentNormalizer()

    async def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        ctx.slides = self._normalizer.normalize(ctx.raw_slides, ctx.source_type or SourceType.UNKNOWN)
        if emit:
            emit(
                ExtractionEvent(
                    type=EventType.SLIDES_NORMALIZED,
                    locator=ctx.locator,
                    source_type=ctx.source_type,
                    slide_count=len(ctx.slides),
                )
            )
        return ctx
