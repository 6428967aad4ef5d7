"""Pipeline step for slide extraction."""

import logging
from typing import Optional

from ...errors import NoSlidesFoundError
from ...extractors.registry import ExtractorRegistry
from ...models.config import ExtractionConfig, SourceConfig
from ...models.events import EventType, ExtractionEvent
from ..base import EventEmitter, ExtractionContext

logger = logging.getLogger(__name__)


class ExtractStep:
    """
    Pipeline step that runs the extractor for the detected source.

    Reads ctx.source_type, writes ctx.raw_slides. An empty result raises
    NoSlidesFoundError rather than passing an empty deck on.

    Example:
        step = ExtractStep(ExtractorRegistry.default(), ExtractionConfig())
        ctx = await step.execute(ctx)
    """

    name = "extract"

    def __init__(
        self,
        registry: Optional[ExtractorRegistry] = None,
        config: Optional[ExtractionConfig] = None,
        source_config: Optional[SourceConfig] = None,
    ):
        self._registry = registry or ExtractorRegistry.default()
        self._config = config or ExtractionConfig()
        self._source_config = source_config or SourceConfig()

    async def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        extractor = self._registry.get(ctx.source_type, self._config, self._source_config)
        slides = extractor.extract(ctx.document)
        if not slides:
            raise NoSlidesFoundError()

        ctx.raw_slides = slides
        logger.debug(f"Extracted {len(slides)} slides from {ctx.locator}")
        if emit:
            emit(
                ExtractionEvent(
                    type=EventType.SLIDES_EXTRACTED,
                    locator=ctx.locator,
                    source_type=ctx.source_type,
                    slide_count=len(slides),
                )
            )
        return ctx
