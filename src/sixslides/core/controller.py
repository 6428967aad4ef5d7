"""Entry point turning a document into an ExtractionResult."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..conversion.dom import DocumentInput, SourceDocument
from ..detection import SourceDetector
from ..entitlement import EntitlementService, StaticEntitlement
from ..errors import ErrorKind
from ..extractors.registry import ExtractorRegistry
from ..models.config import SixSlidesConfig
from ..models.result import ExtractionResult
from ..pipeline.base import EventEmitter, ExtractionPipeline
from ..pipeline.steps import BuildStep, DetectStep, ExtractStep, LimitStep, NormalizeStep

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error extracting slides"


class ContentController:
    """
    Runs extraction requests end to end.

    ``extract_content`` is the only entry point and never raises: every
    failure comes back in the result's ``error`` field. The controller holds
    no per-request state, so concurrent requests are independent.

    Example:
        controller = ContentController(SixSlidesConfig(), entitlement=my_service)
        result = await controller.extract_content(html, "https://www.notion.so/My-Deck")
        if result.ok:
            print(result.presentation.slide_count)
        else:
            print(result.error)
    """

    def __init__(
        self,
        config: Optional[SixSlidesConfig] = None,
        entitlement: Optional[EntitlementService] = None,
        registry: Optional[ExtractorRegistry] = None,
    ):
        """
        Initialize the controller.

        Args:
            config: Configuration (defaults if None)
            entitlement: Entitlement collaborator; defaults to the static
                ``config.entitlement.pro`` flag
            registry: Extractor registry (Notion + Markdown if None)
        """
        self.config = config or SixSlidesConfig()
        self.entitlement = entitlement if entitlement is not None else StaticEntitlement(self.config.entitlement.pro)
        self.registry = registry or ExtractorRegistry.default()
        self._pipeline = self._build_pipeline()

    def _build_pipeline(self) -> ExtractionPipeline:
        return ExtractionPipeline(
            steps=[
                DetectStep(SourceDetector(self.config.source)),
                ExtractStep(self.registry, self.config.extraction, self.config.source),
                NormalizeStep(),
                LimitStep(self.entitlement, self.config.free_tier, self.config.entitlement),
                BuildStep(),
            ]
        )

    async def extract_content(
        self,
        document: DocumentInput,
        locator: str = "",
        emit: Optional[EventEmitter] = None,
        content_type: str = "",
    ) -> ExtractionResult:
        """
        Extract slides from a document.

        Args:
            document: Parsed tree, raw HTML or raw Markdown
            locator: Origin URL (or file URI) of the document
            emit: Optional callback for pipeline events
            content_type: Content-Type the document was served with, if known

        Returns:
            ExtractionResult with either slides and a presentation, or an error
        """
        try:
            source = SourceDocument.from_input(
                document,
                locator,
                content_type=content_type,
                markdown_extensions=self.config.source.markdown_extensions,
            )
            ctx = await self._pipeline.execute(source, emit)
        except Exception as e:
            logger.exception(f"Unexpected failure extracting {locator or 'document'}")
            return ExtractionResult.failure(f"{ERROR_PREFIX}: {e}")

        if ctx.error is not None:
            kind = ctx.error_kind or ErrorKind.INTERNAL
            message = ctx.error if kind != ErrorKind.INTERNAL else f"{ERROR_PREFIX}: {ctx.error}"
            logger.error(f"Extraction failed for {locator or 'document'}: {message}")
            return ExtractionResult.failure(message, source_type=ctx.source_type, kind=kind)

        if ctx.presentation is None:
            return ExtractionResult.failure(f"{ERROR_PREFIX}: no presentation built", source_type=ctx.source_type)

        logger.info(f"Extracted {ctx.presentation.slide_count} slides ({ctx.presentation.source_type.value})")
        return ExtractionResult.success(ctx.presentation)

    def extract_blocking(
        self,
        document: DocumentInput,
        locator: str = "",
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionResult:
        """Synchronous wrapper around ``extract_content`` (no running loop allowed)."""
        return asyncio.run(self.extract_content(document, locator, emit))


async def extract_content(
    document: DocumentInput,
    locator: str = "",
    config: Optional[SixSlidesConfig] = None,
    entitlement: Optional[EntitlementService] = None,
    content_type: str = "",
) -> ExtractionResult:
    """Convenience wrapper building a one-off ContentController."""
    controller = ContentController(config, entitlement=entitlement)
    return await controller.extract_content(document, locator, content_type=content_type)
