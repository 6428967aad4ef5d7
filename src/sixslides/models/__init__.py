"""Sixslides domain, configuration and event models."""

from .config import (
    EntitlementConfig,
    ExtractionConfig,
    FreeTierConfig,
    NetworkConfig,
    SixSlidesConfig,
    SourceConfig,
)
from .events import EventType, ExtractionEvent
from .presentation import Presentation
from .result import ExtractionResult
from .slide import DEFAULT_SLIDE_TITLE, Slide, SourceType

__all__ = [
    # Domain
    "DEFAULT_SLIDE_TITLE",
    "Slide",
    "SourceType",
    "Presentation",
    "ExtractionResult",
    # Config
    "EntitlementConfig",
    "ExtractionConfig",
    "FreeTierConfig",
    "NetworkConfig",
    "SixSlidesConfig",
    "SourceConfig",
    # Events
    "EventType",
    "ExtractionEvent",
]
