# =============================================================================
# client/mutations.py - Optimistic Create Mutations
# =============================================================================
# Shows a new business/report in cached lists before the server confirms it.
#
#   1. Snapshot every cache entry the write touches
#   2. Insert a placeholder (temporary id = epoch milliseconds) at the head of
#      page 1 and bump that page's total
#   3. Call the API
#      - success: swap the placeholder for the server record, or refetch
#        views where the record's position can't be known locally
#      - failure: restore the snapshot wholesale and re-raise
#
# Restoring the whole snapshot (instead of deleting the placeholder) also
# undoes any refetch that landed while the request was in flight.
# =============================================================================

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, TypeVar

from client.api import OvaSightClient, ReportSubmission
from client.cache import BUSINESSES_KEY, QueryCache, QueryKey, reports_key
from core.models.business import Business, BusinessCreate
from core.models.report import Report

logger = logging.getLogger(__name__)

R = TypeVar("R")


@dataclass
class MutationPlan:
    """Which cache keys a write updates in place and which it refetches."""

    reconcile: list[QueryKey] = field(default_factory=list)
    refetch: list[QueryKey] = field(default_factory=list)

    @property
    def keys(self) -> list[QueryKey]:
        return [*self.reconcile, *self.refetch]


class OptimisticCreator:
    """
    Runs create calls against the API with optimistic cache updates.
    """

    def __init__(
        self,
        api: OvaSightClient,
        cache: QueryCache,
        clock: Callable[[], float] = time.time,
    ):
        self.api = api
        self.cache = cache
        self.clock = clock

    def temporary_id(self) -> int:
        return int(self.clock() * 1000)

    def _now(self) -> datetime:
        return datetime.fromtimestamp(self.clock(), tz=timezone.utc)

    def _run(self, plan: MutationPlan, placeholder, call: Callable[[], R]) -> R:
        snapshot = self.cache.snapshot(plan.keys)

        for key in plan.keys:
            pages = self.cache.get(key)
            if pages is not None:
                pages.prepend(placeholder)

        try:
            record = call()
        except Exception:
            snapshot.restore(self.cache)
            logger.info(f"Rolled back optimistic insert {placeholder.id}")
            raise

        for key in plan.reconcile:
            pages = self.cache.get(key)
            if pages is not None:
                pages.replace(placeholder.id, record)
        for key in plan.refetch:
            self.cache.invalidate(key)

        return record

    def create_business(self, data: BusinessCreate) -> Business:
        """Create a business, showing it at the top of the business list immediately."""
        now = self._now()
        placeholder = Business(
            id=self.temporary_id(),
            created_at=now,
            updated_at=now,
            **data.model_dump(),
        )
        plan = MutationPlan(reconcile=[BUSINESSES_KEY])
        return self._run(plan, placeholder, lambda: self.api.create_business(data))

    def create_report(
        self,
        submission: ReportSubmission,
        business: Business | None = None,
        image_preview: str = "",
        video_preview: str | None = None,
    ) -> Report:
        """
        Submit a report, showing it in the business's report list immediately.

        The all-businesses view is refetched on success rather than patched.
        """
        submission.check_media_sizes()

        placeholder = Report(
            id=self.temporary_id(),
            sales=submission.sales,
            expenses=submission.expenses,
            customer_count=submission.customer_count,
            notes=submission.notes or None,
            image_url=image_preview,
            video_url=video_preview,
            business_id=submission.business_id,
            business=business,
            created_at=self._now(),
        )
        plan = MutationPlan(
            reconcile=[reports_key(submission.business_id)],
            refetch=[reports_key(None)],
        )
        return self._run(plan, placeholder, lambda: self.api.create_report(submission))
