"""Source-specific slide extractors."""

from .assembler import SlideAssembler
from .base import FragmentAccumulator, SlideExtractor
from .markdown import MarkdownExtractor
from .notion import NotionExtractor
from .registry import ExtractorRegistry

__all__ = [
    "ExtractorRegistry",
    "FragmentAccumulator",
    "MarkdownExtractor",
    "NotionExtractor",
    "SlideAssembler",
    "SlideExtractor",
]
