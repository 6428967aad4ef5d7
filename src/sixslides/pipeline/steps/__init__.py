"""Pipeline steps for extraction requests."""

from .build import BuildStep
from .detect import DetectStep
from .extract import ExtractStep
from .limit import LimitStep
from .normalize import NormalizeStep

__all__ = [
    "BuildStep",
    "DetectStep",
    "ExtractStep",
    "LimitStep",
    "NormalizeStep",
]
