# =============================================================================
# client/cache.py - Infinite-Page Query Cache
# =============================================================================
# Client-side cache of paginated list responses, keyed by query:
#
#   ("businesses",)        dashboard business list
#   ("reports", None)      all-reports view
#   ("reports", 3)         reports for business 3
#
# Each key holds the pages fetched so far (page 1, 2, ... in order). Pages
# are kept for the lifetime of the cache; there is no eviction.
#
# CacheSnapshot captures the exact page sets for a group of keys so a failed
# optimistic write can put them back wholesale.
# =============================================================================

import copy
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Hashable, TypeVar

from core.models.pagination import Page

T = TypeVar("T")

QueryKey = tuple[Hashable, ...]
PageFetcher = Callable[[int], Page]

BUSINESSES_KEY: QueryKey = ("businesses",)


def reports_key(business_id: int | None = None) -> QueryKey:
    return ("reports", business_id)


@dataclass
class InfinitePages(Generic[T]):
    """The pages of one paginated query fetched so far."""

    pages: list[Page[T]] = field(default_factory=list)

    @property
    def items(self) -> list[T]:
        return [item for page in self.pages for item in page.data]

    @property
    def next_page(self) -> int | None:
        """Page number to fetch next, or None when the last page is loaded."""
        if not self.pages:
            return 1
        meta = self.pages[-1].meta
        return meta.page + 1 if meta.page < meta.total_pages else None

    @property
    def total(self) -> int:
        return self.pages[0].meta.total if self.pages else 0

    def prepend(self, item: T) -> None:
        """Put `item` at the head of page 1 and count it in page 1's total."""
        if not self.pages:
            return
        first = self.pages[0]
        self.pages[0] = first.model_copy(update={
            "data": [item, *first.data],
            "meta": first.meta.model_copy(update={"total": first.meta.total + 1}),
        })

    def replace(self, item_id: Any, item: T) -> bool:
        """Swap the item whose `id` equals `item_id`; True if one was found."""
        for page in self.pages:
            for index, existing in enumerate(page.data):
                if getattr(existing, "id", None) == item_id:
                    page.data[index] = item
                    return True
        return False


@dataclass(frozen=True)
class CacheSnapshot:
    """
    Deep copies of the cached page sets for some keys.

    A key that had no entry is recorded as None and is removed again on
    restore, so the cache ends up exactly as it was.
    """

    entries: dict[QueryKey, InfinitePages | None]

    def restore(self, cache: "QueryCache") -> None:
        for key, pages in self.entries.items():
            cache.put(key, copy.deepcopy(pages))


class QueryCache:
    """
    Holds InfinitePages per query key and the fetcher that fills each one.
    """

    def __init__(self):
        self._entries: dict[QueryKey, InfinitePages] = {}
        self._fetchers: dict[QueryKey, PageFetcher] = {}

    def get(self, key: QueryKey) -> InfinitePages | None:
        return self._entries.get(key)

    def put(self, key: QueryKey, pages: InfinitePages | None) -> None:
        if pages is None:
            self._entries.pop(key, None)
        else:
            self._entries[key] = pages

    def keys(self) -> list[QueryKey]:
        return list(self._entries)

    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------

    def fetch_first_page(self, key: QueryKey, fetcher: PageFetcher) -> InfinitePages:
        """Fetch page 1 for `key`, replacing anything cached, and remember the fetcher."""
        self._fetchers[key] = fetcher
        pages = InfinitePages(pages=[fetcher(1)])
        self._entries[key] = pages
        return pages

    def fetch_next_page(self, key: QueryKey) -> InfinitePages | None:
        """
        Append the next page for `key`.

        Returns the updated pages, or None if nothing is cached for the key
        or the last page is already loaded.
        """
        pages = self._entries.get(key)
        fetcher = self._fetchers.get(key)
        if pages is None or fetcher is None or pages.next_page is None:
            return None
        pages.pages.append(fetcher(pages.next_page))
        return pages

    def invalidate(self, key: QueryKey) -> InfinitePages | None:
        """
        Refetch every page currently loaded for `key`.

        Keys without a fetcher are simply dropped.
        """
        fetcher = self._fetchers.get(key)
        loaded = self._entries.get(key)
        if fetcher is None or loaded is None:
            self._entries.pop(key, None)
            return None

        fresh = InfinitePages(pages=[fetcher(1)])
        while len(fresh.pages) < len(loaded.pages) and fresh.next_page is not None:
            fresh.pages.append(fetcher(fresh.next_page))
        self._entries[key] = fresh
        return fresh

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot(self, keys: list[QueryKey]) -> CacheSnapshot:
        return CacheSnapshot(entries={
            key: copy.deepcopy(self._entries.get(key)) for key in keys
        })
