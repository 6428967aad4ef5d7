"""Pipeline step for building the Presentation."""

from typing import Optional

from ...models.events import EventType, ExtractionEvent
from ...models.presentation import Presentation
from ...models.slide import SourceType
from ..base import EventEmitter, ExtractionContext


class BuildStep:
    """Pipeline step that freezes the final slides into a Presentation."""

    name = "build"

    async def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        ctx.presentation = Presentation.from_slides(ctx.slides, ctx.source_type or SourceType.UNKNOWN)
        if emit:
            emit(
                ExtractionEvent(
                    type=EventType.PRESENTATION_BUILT,
                    locator=ctx.locator,
                    message=ctx.presentation.title,
                    source_type=ctx.source_type,
                    slide_count=ctx.presentation.slide_count,
                )
            )
        return ctx
