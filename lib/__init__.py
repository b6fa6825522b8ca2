# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# - supabase_client.py: Shared Supabase client and PostgREST error helpers
# =============================================================================

from lib.supabase_client import (
    SupabaseClient,
    SupabaseClientError,
    is_foreign_key_violation,
)

__all__ = [
    "SupabaseClient",
    "SupabaseClientError",
    "is_foreign_key_violation",
]
