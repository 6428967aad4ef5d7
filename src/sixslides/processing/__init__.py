"""Normalization and slide-count policy."""

from .limiter import UPGRADE_TITLE, apply_free_tier_limit, build_upgrade_slide
from .normalizer import ContentNormalizer

__all__ = [
    "ContentNormalizer",
    "UPGRADE_TITLE",
    "apply_free_tier_limit",
    "build_upgrade_slide",
]
