"""Free-plan slide cap."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.slide import Slide, SourceType

logger = logging.getLogger(__name__)

DEFAULT_MAX_SLIDES = 6
DEFAULT_UPGRADE_URL = "https://notion-slides.com/pricing"
UPGRADE_TITLE = "Unlock More Slides with Pro"


def build_upgrade_slide(max_slides: int, total: int, upgrade_url: str = DEFAULT_UPGRADE_URL) -> Slide:
    """The synthetic call-to-action slide appended after truncation."""
    hidden = total - max_slides
    content = (
        f"Your document has {total} slides. The free plan shows the first {max_slides}.\n\n"
        f"- {hidden} more {'slide' if hidden == 1 else 'slides'} available with Pro\n"
        "- Unlimited slides in every presentation\n\n"
        f"[Upgrade to Pro]({upgrade_url})"
    )
    return Slide(title=UPGRADE_TITLE, content=content, source_type=SourceType.UPGRADE)


def apply_free_tier_limit(
    slides: Sequence[Slide],
    entitled: bool,
    max_slides: int = DEFAULT_MAX_SLIDES,
    upgrade_url: str = DEFAULT_UPGRADE_URL,
) -> list[Slide]:
    """
    Cap the slide list for users without entitlement.

    Entitled users, and lists of at most ``max_slides``, pass through
    unchanged. Otherwise the first ``max_slides`` slides are kept and one
    upgrade slide is appended. The input is never mutated or reordered.

    Args:
        slides: Normalized slides
        entitled: Resolved entitlement flag
        max_slides: Cap for non-entitled users
        upgrade_url: Link on the upgrade slide

    Returns:
        New list of slides
    """
    if max_slides < 1:
        raise ValueError(f"max_slides must be at least 1, got {max_slides}")

    if entitled or len(slides) <= max_slides:
        return list(slides)

    logger.info(f"Free plan: showing {max_slides} of {len(slides)} slides")
    return list(slides[:max_slides]) + [build_upgrade_slide(max_slides, len(slides), upgrade_url)]
