# =============================================================================
# core/services/business_service.py - Business Business Logic
# =============================================================================
# Handles business persistence and listing.
# Separates HTTP concerns from database logic.
# =============================================================================

import logging

from supabase import Client

from app.exceptions import BusinessNotFoundError, DatabaseError
from core.models.business import Business, BusinessCreate
from core.models.pagination import Page, PageRequest

logger = logging.getLogger(__name__)

TABLE = "businesses"


class BusinessService:
    """
    Service for business operations.

    Provides a clean interface between API routes and the `businesses` table.
    """

    def __init__(self, client: Client):
        self.client = client

    def create_business(self, data: BusinessCreate) -> Business:
        """
        Insert a business row.

        Returns:
            The stored Business with id and timestamps

        Raises:
            DatabaseError: If the insert fails
        """
        try:
            response = self.client.table(TABLE).insert(data.to_row()).execute()
        except Exception as e:
            logger.error(f"Failed to create business: {e}")
            raise DatabaseError("create business", str(e))

        if not response.data:
            raise DatabaseError("create business", "Insert returned no data")

        business = Business.model_validate(response.data[0])
        logger.info(f"Created business: {business.id} ({business.name})")
        return business

    def get_business(self, business_id: int) -> Business:
        """
        Fetch one business.

        Raises:
            BusinessNotFoundError: If no row has this id
        """
        try:
            response = (
                self.client.table(TABLE)
                .select("*")
                .eq("id", business_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to fetch business {business_id}: {e}")
            raise DatabaseError("fetch business", str(e))

        if not response.data:
            raise BusinessNotFoundError(business_id)

        return Business.model_validate(response.data[0])

    def list_businesses(self, request: PageRequest) -> Page[Business]:
        """
        List businesses newest first.

        The page rows and the total count are two separate queries, so under
        concurrent inserts `meta.total` may lag the returned rows slightly.
        """
        try:
            rows = (
                self.client.table(TABLE)
                .select("*")
                .order("created_at", desc=True)
                .order("id", desc=True)
                .range(request.skip, request.range_end)
                .execute()
            )
            count = (
                self.client.table(TABLE)
                .select("id", count="exact", head=True)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to list businesses: {e}")
            raise DatabaseError("fetch businesses", str(e))

        businesses = [Business.model_validate(row) for row in rows.data or []]
        return Page[Business].build(businesses, count.count or 0, request)

    def ping(self) -> None:
        """Run a trivial query; raises if the store is unreachable."""
        self.client.table(TABLE).select("id").limit(1).execute()
