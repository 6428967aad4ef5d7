"""Registry mapping source types to extractors."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from ..errors import UnsupportedSourceError
from ..models.config import ExtractionConfig, SourceConfig
from ..models.slide import SourceType
from .base import SlideExtractor
from .markdown import MarkdownExtractor
from .notion import NotionExtractor

logger = logging.getLogger(__name__)

ExtractorFactory = Callable[[ExtractionConfig, SourceConfig], SlideExtractor]


class ExtractorRegistry:
    """
    Dispatches a detected source type to its extractor.

    Factories are registered per source type and called with the active
    configuration, so one registry serves every request.

    Example:
        registry = ExtractorRegistry.default()
        extractor = registry.get(SourceType.NOTION, extraction_config, source_config)
    """

    def __init__(self) -> None:
        self._factories: dict[SourceType, ExtractorFactory] = {}

    def register(self, source_type: SourceType, factory: ExtractorFactory) -> ExtractorRegistry:
        if source_type in self._factories:
            logger.debug(f"Replacing extractor for {source_type.value}")
        self._factories[source_type] = factory
        return self

    def supports(self, source_type: Optional[SourceType]) -> bool:
        return source_type is not None and source_type in self._factories

    def get(
        self,
        source_type: Optional[SourceType],
        config: Optional[ExtractionConfig] = None,
        source_config: Optional[SourceConfig] = None,
    ) -> SlideExtractor:
        """
        Build the extractor for a source type.

        Raises:
            UnsupportedSourceError: If nothing is registered for the type
        """
        if not self.supports(source_type):
            name = source_type.value if source_type is not None else "none"
            logger.warning(f"No extractor registered for source type: {name}")
            raise UnsupportedSourceError()
        factory = self._factories[source_type]
        return factory(config or ExtractionConfig(), source_config or SourceConfig())

    @classmethod
    def default(cls) -> ExtractorRegistry:
        """Registry with the Notion and Markdown extractors."""
        registry = cls()
        registry.register(SourceType.NOTION, lambda config, _source: NotionExtractor(config))
        registry.register(SourceType.MARKDOWN, MarkdownExtractor)
        return registry
