# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the RealTrust API:
# - test_config.py: Settings parsing and store backend selection
# - test_record_store.py: In-memory and Supabase (mocked) store backends
# - test_record_service.py: CRUD rules, validation, duplicate emails
# - test_media_service.py: Inline and stored image codecs
# - test_contact_service.py: Lead normalization and the contact form
# - test_models.py: Schema aliasing and record kinds
# - test_api_*.py: HTTP endpoints through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
