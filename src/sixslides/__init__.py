"""
sixslides - Turn Notion pages and Markdown documents into slides.

Usage:
    from sixslides import ContentController, SixSlidesConfig

    controller = ContentController(SixSlidesConfig())
    result = await controller.extract_content(html, "https://www.notion.so/My-Deck")

    if result.ok:
        for slide in result.presentation.slides:
            print(slide.title)
    else:
        print(result.error)
"""

__version__ = "1.0.0"

from .core.controller import ContentController, extract_content
from .core.loader import LoadedDocument, load_document
from .entitlement import EntitlementService, StaticEntitlement
from .errors import (
    ErrorKind,
    NoSlidesFoundError,
    SixSlidesError,
    UnsupportedSourceError,
)
from .models.config import (
    EntitlementConfig,
    ExtractionConfig,
    FreeTierConfig,
    NetworkConfig,
    SixSlidesConfig,
    SourceConfig,
)
from .models.events import EventType, ExtractionEvent
from .models.presentation import Presentation
from .models.result import ExtractionResult
from .models.slide import Slide, SourceType

__all__ = [
    "__version__",
    # Core
    "ContentController",
    "extract_content",
    "LoadedDocument",
    "load_document",
    # Domain
    "Presentation",
    "Slide",
    "SourceType",
    "ExtractionResult",
    # Entitlement
    "EntitlementService",
    "StaticEntitlement",
    # Config
    "SixSlidesConfig",
    "SourceConfig",
    "ExtractionConfig",
    "FreeTierConfig",
    "EntitlementConfig",
    "NetworkConfig",
    # Events
    "EventType",
    "ExtractionEvent",
    # Errors
    "ErrorKind",
    "SixSlidesError",
    "NoSlidesFoundError",
    "UnsupportedSourceError",
]
