# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the OvaSight API:
# - test_models.py / test_pagination.py / test_validation.py: schemas
# - test_services.py / test_storage_service.py: Supabase-backed services
# - test_*_api.py: endpoint tests against in-memory fakes (fakes.py)
# - test_client.py: client data layer and optimistic mutations
#
# Run tests with: pytest
# =============================================================================
