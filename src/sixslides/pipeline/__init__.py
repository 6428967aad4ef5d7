"""Pipeline architecture for extraction requests."""

from .base import EventEmitter, ExtractionContext, ExtractionPipeline, ExtractionStep

__all__ = ["EventEmitter", "ExtractionContext", "ExtractionPipeline", "ExtractionStep"]
