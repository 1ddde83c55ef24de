# mounttool SSOT core modules
# This package contains all single-source-of-truth modules for the mounttool runtime.
# =============================================================================
# Version
# =============================================================================
from .version import VERSION

# =============================================================================
# Public API
# =============================================================================
__all__ = [
    "VERSION",
]
