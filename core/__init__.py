# =============================================================================
# core/ - Domain Package
# =============================================================================
# - models/: Pydantic schemas (Business, Report, paginated envelope)
# - services/: Supabase-backed persistence and media storage
# - validation.py: Tagged validation results and page query parsing
# =============================================================================
