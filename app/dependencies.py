# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends(); tests replace them
# through `app.dependency_overrides`.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request
from supabase import Client

from core.services.business_service import BusinessService
from core.services.report_service import ReportService
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClient


def get_supabase_client() -> Client:
    """
    Get Supabase client instance.

    Returns the singleton client.
    """
    return SupabaseClient.get_client()


def get_business_service(
    client: Client = Depends(get_supabase_client),
) -> BusinessService:
    return BusinessService(client)


def get_report_service(
    client: Client = Depends(get_supabase_client),
) -> ReportService:
    return ReportService(client)


def get_storage_service(
    request: Request,
    client: Client = Depends(get_supabase_client),
) -> StorageService:
    settings = request.app.state.settings
    return StorageService(client, settings.STORAGE_BUCKET, settings.STORAGE_REGION)


# Type aliases for dependency injection
BusinessServiceDep = Annotated[BusinessService, Depends(get_business_service)]
ReportServiceDep = Annotated[ReportService, Depends(get_report_service)]
StorageServiceDep = Annotated[StorageService, Depends(get_storage_service)]
