"""Base classes for the extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, runtime_checkable

from ..conversion.dom import SourceDocument
from ..errors import ErrorKind, SixSlidesError
from ..models.events import EventType, ExtractionEvent
from ..models.presentation import Presentation
from ..models.slide import Slide, SourceType

# Type alias for event emitter function
EventEmitter = Callable[[ExtractionEvent], None]


@dataclass
class ExtractionContext:
    """
    Context object passed through pipeline steps.

    Holds all state for one extraction request, accumulated as it moves
    through the pipeline.

    Attributes:
        document: Parsed source document
        source_type: Detected source, None until detection ran (or unsupported)
        raw_slides: Slides as produced by the extractor
        slides: Normalized, then limited slides
        entitled: Resolved entitlement flag
        presentation: Final aggregate
        error: Error message if a step failed
        error_kind: Kind of the failure
    """

    document: SourceDocument

    source_type: Optional[SourceType] = None
    raw_slides: list[Slide] = field(default_factory=list)
    slides: list[Slide] = field(default_factory=list)
    entitled: bool = False
    presentation: Optional[Presentation] = None

    # Status
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @property
    def locator(self) -> str:
        return self.document.locator


@runtime_checkable
class ExtractionStep(Protocol):
    """
    Protocol for pipeline steps.

    Each step receives the context, processes it, and returns it.

    Error Handling Contract:
    - Raise a SixSlidesError subclass for expected failures (unsupported
      source, no slides); its kind is recorded on the context
    - Any other exception is recorded as an internal error
    - The pipeline catches both, sets ctx.error and stops

    Example implementation:
        class CountStep:
            name = "count"

            async def execute(
                self,
                ctx: ExtractionContext,
                emit: Optional[EventEmitter] = None
            ) -> ExtractionContext:
                if not ctx.raw_slides:
                    raise NoSlidesFoundError()
                return ctx
    """

    name: str

    async def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        """
        Execute this pipeline step.

        Args:
            ctx: The extraction context with accumulated state
            emit: Optional callback to emit events

        Returns:
            The (possibly modified) context
        """
        ...


@dataclass
class ExtractionPipeline:
    """
    Pipeline running one document through detection, extraction,
    normalization, the slide cap and model construction.

    Steps run in order. If a step raises, the error is captured in
    ctx.error / ctx.error_kind, a FAILED event is emitted and processing
    stops.

    Example:
        pipeline = ExtractionPipeline(steps=[
            DetectStep(detector),
            ExtractStep(registry),
            NormalizeStep(),
            LimitStep(entitlement),
            BuildStep(),
        ])

        ctx = await pipeline.execute(document, emit=log_event)
        if ctx.error:
            logger.error(f"Failed: {ctx.error}")
    """

    steps: list[ExtractionStep]

    async def execute(
        self,
        document: SourceDocument,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        """
        Execute the pipeline for a document.

        Args:
            document: Parsed document with its locator
            emit: Optional callback for emitting events

        Returns:
            ExtractionContext with final state (check error for status)
        """
        ctx = ExtractionContext(document=document)
        if emit:
            emit(ExtractionEvent(type=EventType.STARTED, locator=ctx.locator))

        for step in self.steps:
            try:
                ctx = await step.execute(ctx, emit)
            except SixSlidesError as e:
                ctx.error = str(e)
                ctx.error_kind = e.kind
            except Exception as e:
                ctx.error = f"{step.name}: {e}"
                ctx.error_kind = ErrorKind.INTERNAL

            if ctx.error is not None:
                if emit:
                    emit(
                        ExtractionEvent(
                            type=EventType.FAILED,
                            locator=ctx.locator,
                            error=ctx.error,
                            source_type=ctx.source_type,
                        )
                    )
                return ctx

        if emit:
            emit(
                ExtractionEvent(
                    type=EventType.COMPLETED,
                    locator=ctx.locator,
                    source_type=ctx.source_type,
                    slide_count=len(ctx.slides),
                )
            )
        return ctx

    def add_step(self, step: ExtractionStep) -> ExtractionPipeline:
        """
        Add a step to the pipeline (fluent API).

        Args:
            step: The step to add

        Returns:
            Self for chaining
        """
        self.steps.append(step)
        return self
