# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Scheme Portal API:
# - test_models.py: Pydantic model validation and serialization
# - test_token_service.py: Token signing, verification and expiry
# - test_auth_service.py: Registration and login
# - test_scheme_catalog.py: Catalog listing and seeding
# - test_application_workflow.py: Submission, status and review
# - test_supabase_client.py: Startup connectivity retry
# - test_api.py: HTTP endpoints, access gates and the end-to-end flow
#
# Run tests with: pytest
# =============================================================================
