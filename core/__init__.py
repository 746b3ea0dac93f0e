# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the HTTP surface:
# - models/: Pydantic schemas and record kind descriptors
# - services/: record CRUD, image ingestion, lead capture
#
# Code in this package does not import FastAPI routing; route handlers in
# app/ stay thin and delegate here.
# =============================================================================
