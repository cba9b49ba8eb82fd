# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - utils.py: Filename sanitization and receipt timestamps
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.utils import original_basename, receipt_timestamp, sanitize_filename

__all__ = [
    "original_basename",
    "receipt_timestamp",
    "sanitize_filename",
]
