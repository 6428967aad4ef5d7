"""Entitlement collaborator and fail-closed resolution."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol, runtime_checkable

from .errors import EntitlementCheckError

logger = logging.getLogger(__name__)


@runtime_checkable
class EntitlementService(Protocol):
    """
    Protocol for the subscription check.

    Implementations may do I/O and may fail; callers resolve them with
    ``resolve_entitlement`` so a failure never grants unlimited slides.
    """

    async def has_entitlement(self) -> bool:
        """Whether the user is exempt from the free-plan slide cap."""
        ...


class StaticEntitlement:
    """Fixed answer, for the CLI and tests."""

    def __init__(self, entitled: bool = False):
        self.entitled = entitled

    async def has_entitlement(self) -> bool:
        return self.entitled


async def check_entitlement(service: EntitlementService, timeout: float = 5.0) -> bool:
    """
    Await the entitlement check.

    Raises:
        EntitlementCheckError: If the service raised, timed out, or returned
            something other than a bool
    """
    try:
        result = await asyncio.wait_for(service.has_entitlement(), timeout=timeout)
    except asyncio.TimeoutError as e:
        raise EntitlementCheckError(f"Entitlement check timed out after {timeout}s") from e
    except Exception as e:
        raise EntitlementCheckError(f"Entitlement check failed: {e}") from e

    if not isinstance(result, bool):
        raise EntitlementCheckError(f"Entitlement check returned {type(result).__name__}, expected bool")
    return result


async def resolve_entitlement(service: Optional[EntitlementService], timeout: float = 5.0) -> bool:
    """
    Resolve entitlement, failing closed.

    Args:
        service: Entitlement collaborator (None means not entitled)
        timeout: Seconds to wait for the answer

    Returns:
        True only if the service answered True in time
    """
    if service is None:
        return False
    try:
        return await check_entitlement(service, timeout)
    except EntitlementCheckError as e:
        logger.warning(f"{e}; treating as free plan")
        return False
