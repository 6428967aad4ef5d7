"""Pipeline step for the free-plan slide cap."""

import logging
from typing import Optional

from ...entitlement import EntitlementService, resolve_entitlement
from ...models.config import EntitlementConfig, FreeTierConfig
from ...models.events import EventType, ExtractionEvent
from ...processing.limiter import apply_free_tier_limit
from ..base import EventEmitter, ExtractionContext

logger = logging.getLogger(__name__)


class LimitStep:
    """
    Pipeline step that applies the free-plan cap.

    This is the pipeline's only await on an outside collaborator: the
    entitlement answer is resolved here (failing closed) and handed to the
    pure limiter.

    Example:
        step = LimitStep(StaticEntitlement(False), FreeTierConfig(max_slides=6))
        ctx = await step.execute(ctx)
    """

    name = "limit"

    def __init__(
        self,
        entitlement: Optional[EntitlementService] = None,
        config: Optional[FreeTierConfig] = None,
        entitlement_config: Optional[EntitlementConfig] = None,
    ):
        self._entitlement = entitlement
        self._config = config or FreeTierConfig()
        self._entitlement_config = entitlement_config or EntitlementConfig()

    async def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        ctx.entitled = await resolve_entitlement(self._entitlement, self._entitlement_config.timeout)

        before = len(ctx.slides)
        ctx.slides = apply_free_tier_limit(
            ctx.slides,
            ctx.entitled,
            max_slides=self._config.max_slides,
            upgrade_url=self._config.upgrade_url,
        )

        if emit:
            truncated = not ctx.entitled and before > self._config.max_slides
            emit(
                ExtractionEvent(
                    type=EventType.LIMIT_APPLIED,
                    locator=ctx.locator,
                    message=f"showing {self._config.max_slides} of {before}" if truncated else "no limit applied",
                    source_type=ctx.source_type,
                    slide_count=len(ctx.slides),
                )
            )
        return ctx
