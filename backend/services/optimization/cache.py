import asyncio
import functools
import json
import logging
import time
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple, Union

from shared.models.exceptions import (
    ProviderMalformedResponseException,
    ProviderTimeoutException,
)
from services.lifecycle.models import MaterialInput, coerce_materials

from .config import settings
from .fallback import build_fallback_report
from .models import OptimizationCacheEntry, OptimizationReport
from .parsing import parse_provider_report

logger = logging.getLogger(__name__)


class RecommendationProvider(Protocol):
    """Anything that turns a material list into a report, a mapping or JSON text"""

    def __call__(self, materials: List[MaterialInput]) -> Awaitable[Any]:
        ...


MaterialLike = Union[MaterialInput, Mapping[str, Any]]


def fingerprint(materials: Iterable[MaterialLike]) -> str:
    """Stable key for a material set; the order of the input list does not matter"""
    triples = sorted((m.name, m.quantity, m.carbon_footprint) for m in coerce_materials(materials))
    return json.dumps(triples)


class OptimizationRecommendationCache:
    """
    Fingerprint-keyed, TTL-bound cache in front of a recommendation provider.

    Concurrent lookups for the same material set share one in-flight provider
    call. Provider timeouts, errors and unreadable output are answered with
    the local fallback report, which is returned but not cached so the next
    lookup tries the provider again.
    """

    def __init__(
        self,
        provider: Optional[RecommendationProvider] = None,
        ttl_seconds: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.provider = provider
        self.ttl_seconds = settings.cache_ttl_seconds if ttl_seconds is None else ttl_seconds
        self.timeout_seconds = settings.provider_timeout_seconds if timeout_seconds is None else timeout_seconds
        self._clock = clock
        self._entries: Dict[str, OptimizationCacheEntry] = {}
        self._in_flight: Dict[str, asyncio.Future] = {}

    @staticmethod
    def fingerprint(materials: Iterable[MaterialLike]) -> str:
        return fingerprint(materials)

    async def get(self, materials: Iterable[MaterialLike]) -> OptimizationReport:
        """Cached report for the material set, computing it on a miss"""
        material_list = coerce_materials(materials)
        key = fingerprint(material_list)

        entry = self._live_entry(key)
        if entry is not None:
            logger.debug(f"Optimization cache hit ({len(material_list)} materials)")
            return entry.report

        pending = self._in_flight.get(key)
        if pending is None:
            # The task is owned by the cache, so a cancelled caller does not cancel it
            pending = asyncio.ensure_future(self._resolve(key, material_list))
            self._in_flight[key] = pending
            pending.add_done_callback(functools.partial(self._finish, key))
        else:
            logger.debug("Awaiting in-flight optimization for identical material set")
        return await asyncio.shield(pending)

    async def _resolve(self, key: str, materials: List[MaterialInput]) -> OptimizationReport:
        report, cacheable = await self._compute(materials)
        if cacheable:
            self._store(key, report)
        return report

    def _finish(self, key: str, task: asyncio.Future):
        if self._in_flight.get(key) is task:
            del self._in_flight[key]
        if not task.cancelled():
            # Mark retrieved so a failure nobody awaited does not log a warning
            task.exception()

    def peek(self, materials: Iterable[MaterialLike]) -> Optional[OptimizationReport]:
        """Cached report without calling the provider"""
        entry = self._live_entry(fingerprint(materials))
        return entry.report if entry else None

    def sweep(self) -> int:
        """Drop every expired entry and return how many were removed"""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Evicted {len(expired)} expired optimization entries")
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def _live_entry(self, key: str) -> Optional[OptimizationCacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None
        return entry

    def _store(self, key: str, report: OptimizationReport) -> None:
        self._entries[key] = OptimizationCacheEntry(
            fingerprint=key,
            report=report,
            timestamp=self._clock(),
            ttl=self.ttl_seconds,
        )
        self.sweep()

    async def _compute(self, materials: List[MaterialInput]) -> Tuple[OptimizationReport, bool]:
        if self.provider is None:
            logger.info("No recommendation provider configured")
            return build_fallback_report(materials), True

        try:
            try:
                raw = await asyncio.wait_for(self.provider(materials), timeout=self.timeout_seconds)
            except asyncio.TimeoutError:
                raise ProviderTimeoutException(
                    f"Recommendation provider did not answer within {self.timeout_seconds}s"
                )
            report = parse_provider_report(raw, materials)
            logger.info(f"Provider optimization report with {len(report.recommendations)} recommendations")
            return report, True
        except (ProviderTimeoutException, ProviderMalformedResponseException) as e:
            logger.warning(f"{e.error_code}: {e}")
        except Exception as e:
            logger.warning(f"Recommendation provider failed: {e}")

        return build_fallback_report(materials), False
