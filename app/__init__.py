# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App factory, middleware setup, error handlers, entry point
# - config.py: Environment variable loading and settings
# - dependencies.py: Shared resources and request body parsing
# - routers/: Form endpoints and health checks
#
# The app layer is thin - it handles HTTP concerns and delegates staging and
# mail delivery to the core/ package.
# =============================================================================

__version__ = "1.0.0"
