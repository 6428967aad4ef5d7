"""Extraction entry point and document loading."""

from .controller import ContentController, extract_content
from .loader import LoadedDocument, load_document

__all__ = ["ContentController", "LoadedDocument", "extract_content", "load_document"]
